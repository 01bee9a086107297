"""
Daily analysis API endpoints.

Endpoints:
- POST /analysis: settings in the JSON body
- GET /energy: settings in the query string

Both return the result record keyed by scenario key. Settings that fail
validation are answered with 422.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ...application import SimulationApplication
from ...scenario_setup import InvalidScenarioError
from .. import dependencies
from ..schemas import simulation as sim_schemas

router = APIRouter(prefix="/api", tags=["simulation"])


def _run(app_service: SimulationApplication, settings: Any) -> Dict[str, sim_schemas.ScenarioResult]:
    try:
        return app_service.run_analysis(settings)
    except InvalidScenarioError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.post("/analysis", response_model=Dict[str, sim_schemas.ScenarioResult])
def trigger_analysis(
    payload: sim_schemas.AnalysisRequest | None = None,
    app_service: SimulationApplication = Depends(dependencies.get_application_service),
) -> Dict[str, sim_schemas.ScenarioResult]:
    """
    Simulate one day with the settings in the request body.

    The body is validated by FastAPI before the handler runs, so malformed
    settings never reach the engine.

    Args:
        payload: Analysis settings; None uses the defaults.
        app_service: Simulation application service (dependency injected).

    Returns:
        Mapping with a single entry: scenario key to ScenarioResult.
    """
    settings = payload or sim_schemas.AnalysisRequest()
    return _run(app_service, settings)


@router.get("/energy", response_model=Dict[str, sim_schemas.ScenarioResult])
def energy_analysis(
    battery_capacity: Optional[float] = Query(None, alias="batteryCapacity"),
    charging_efficiency: Optional[float] = Query(None, alias="chargingEfficiency"),
    discharging_efficiency: Optional[float] = Query(None, alias="dischargingEfficiency"),
    charging_efficiency_2: Optional[float] = Query(None, alias="chargingEfficiency2"),
    discharging_efficiency_2: Optional[float] = Query(None, alias="dischargingEfficiency2"),
    charging_c_rate: Optional[float] = Query(None, alias="chargingCRate"),
    discharging_c_rate: Optional[float] = Query(None, alias="dischargingCRate"),
    high_solar: bool = Query(False, alias="highSolar"),
    high_load: bool = Query(False, alias="highLoad"),
    no_solar_and_load: bool = Query(False, alias="noSolarAndLoad"),
    pricing_structure: str = Query("normal", alias="pricingStructure"),
    scenario: Optional[str] = Query(None),
    seed: Optional[int] = Query(None),
    idle_policy: Optional[str] = Query(None, alias="idlePolicy"),
    strategy: Optional[str] = Query(None),
    app_service: SimulationApplication = Depends(dependencies.get_application_service),
) -> Dict[str, sim_schemas.ScenarioResult]:
    """
    Simulate one day with settings taken from the query string.

    Example:
        GET /api/energy?batteryCapacity=10&highSolar=true&pricingStructure=simpleCheaper
    """
    raw: Dict[str, Any] = {
        "batteryCapacity": battery_capacity,
        "chargingEfficiency": charging_efficiency,
        "dischargingEfficiency": discharging_efficiency,
        "chargingEfficiency2": charging_efficiency_2,
        "dischargingEfficiency2": discharging_efficiency_2,
        "chargingCRate": charging_c_rate,
        "dischargingCRate": discharging_c_rate,
        "highSolar": high_solar,
        "highLoad": high_load,
        "noSolarAndLoad": no_solar_and_load,
        "pricingStructure": pricing_structure,
        "scenario": scenario,
        "seed": seed,
        "idlePolicy": idle_policy,
        "strategy": strategy,
    }
    return _run(app_service, {key: value for key, value in raw.items() if value is not None})
