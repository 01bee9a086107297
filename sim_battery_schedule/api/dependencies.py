from __future__ import annotations

from ..application import SimulationApplication


def get_application_service() -> SimulationApplication:
    """
    Provide a SimulationApplication configured for API usage.
    """
    # API does not write reports to disk
    return SimulationApplication(save_outputs=False)
