from __future__ import annotations

import pytest

from sim_battery_schedule.simulation import (
    ArbitrageClassifier,
    EnergyFlowSimulator,
    EnergySystemConfig,
    Reason,
    compute_thresholds,
    resolve_reason,
)


def test_unit_efficiency_collapses_thresholds_to_mid_price(series_factory) -> None:
    series = series_factory([0.1] * 12 + [0.3] * 12, [0.05] * 12 + [0.4] * 12)

    thresholds = compute_thresholds(series, 1.0, 1.0)

    assert thresholds.margin == pytest.approx(0.0)
    assert thresholds.mid_price == pytest.approx(0.25)
    assert thresholds.good_import_threshold == pytest.approx(thresholds.mid_price)
    assert thresholds.good_export_threshold == pytest.approx(thresholds.mid_price)


def test_thresholds_widen_with_efficiency_loss(series_factory) -> None:
    series = series_factory([0.1] * 12 + [0.3] * 12, [0.05] * 12 + [0.4] * 12)

    thresholds = compute_thresholds(series, 0.9, 0.9)

    assert thresholds.efficiency_loss_factor == pytest.approx(0.19)
    assert thresholds.margin == pytest.approx(0.3 * 0.19)
    assert thresholds.good_import_threshold == pytest.approx(0.25 - 0.057)
    assert thresholds.good_export_threshold == pytest.approx(0.25 + 0.057)


def test_empty_series_is_rejected() -> None:
    with pytest.raises(ValueError):
        compute_thresholds([], 0.95, 0.95)


@pytest.mark.parametrize(
    ("good_import", "good_export", "expected"),
    [
        (False, False, Reason.NO_ACTION),
        (True, False, Reason.GOOD_IMPORT),
        (False, True, Reason.GOOD_EXPORT),
        (True, True, Reason.GOOD_EXPORT),
    ],
)
def test_reason_precedence(good_import, good_export, expected) -> None:
    assert resolve_reason(Reason.NO_ACTION, good_import, good_export) is expected


def test_classifier_relabels_hours_in_place(series_factory) -> None:
    imports = [0.1] * 24
    exports = [0.05] * 24
    imports[20] = 0.3
    exports[20] = 0.4
    # Cheap import and rewarding export in the same hour.
    imports[3] = 0.1
    exports[3] = 0.4
    series = series_factory(imports, exports)
    hours = EnergyFlowSimulator(EnergySystemConfig()).run(series, {}, {})

    thresholds = ArbitrageClassifier(1.0, 1.0).classify(hours)

    assert thresholds.mid_price == pytest.approx(0.25)
    assert hours[0].reason is Reason.GOOD_IMPORT
    assert hours[3].reason is Reason.GOOD_EXPORT
    assert hours[20].reason is Reason.GOOD_EXPORT
