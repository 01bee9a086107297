from __future__ import annotations

import logging

import pytest

from sim_battery_schedule.simulation import (
    CHARGING_WINDOWS,
    DISCHARGING_WINDOWS,
    Direction,
    DistributionOptimizer,
    HourlyInput,
    SchedulingWindow,
    build_schedule,
    charging_cost,
    discharging_profit,
    enumerate_distributions,
    merge_schedules,
    rate_adjusted_efficiency,
    schedule_from_allocations,
    sort_window,
)

NIGHT, MIDDAY = CHARGING_WINDOWS
MORNING, EVENING = DISCHARGING_WINDOWS


def _optimizer(**kwargs) -> DistributionOptimizer:
    params = dict(capacity_kwh=10.0, charging_efficiency=0.95, discharging_efficiency=0.95)
    params.update(kwargs)
    return DistributionOptimizer(**params)


def test_enumeration_covers_every_bounded_vector() -> None:
    vectors = list(enumerate_distributions())
    assert len(vectors) == 8008
    assert len(set(vectors)) == len(vectors)
    assert vectors[0] == (0, 0, 0, 0, 0, 0)
    assert vectors == sorted(vectors)
    assert all(sum(v) <= 10 for v in vectors)


def test_enumeration_respects_inactive_slots() -> None:
    vectors = list(enumerate_distributions(4, 3, active_slots=[True, False, True, False]))
    assert all(v[1] == 0 and v[3] == 0 for v in vectors)
    assert len(vectors) == 10


def test_rate_adjusted_efficiency_steps_down() -> None:
    assert rate_adjusted_efficiency(0.05, 0.95, 0.1) == pytest.approx(0.95)
    assert rate_adjusted_efficiency(0.3, 0.95, 0.1) == pytest.approx(0.92)
    assert rate_adjusted_efficiency(0.5, 0.95, 0.2) == pytest.approx(0.93)
    assert rate_adjusted_efficiency(5.0, 0.95, 0.1) == 0.5
    with pytest.raises(ValueError):
        rate_adjusted_efficiency(0.1, 0.95, 0.0)


def test_sort_window_orders_by_price_and_pads(series_factory) -> None:
    exports = [0.1] * 24
    exports[6:10] = [0.2, 0.4, 0.4, 0.3]
    series = series_factory(0.2, exports)

    slots = sort_window(MORNING.select(series), Direction.DISCHARGE)

    assert [s.hour if s else None for s in slots] == [7, 8, 9, 6, None, None]
    with pytest.raises(ValueError):
        sort_window(series[:7], Direction.CHARGE)


def test_charging_concentrates_in_cheapest_hours(simple_cheaper_series) -> None:
    allocation = _optimizer().optimize(NIGHT, simple_cheaper_series)

    schedule = build_schedule(allocation)
    assert set(schedule) <= {0, 1, 2, 3}
    assert sum(allocation.distribution) == pytest.approx(1.0)
    assert sorted(schedule.values()) == pytest.approx([0.2, 0.2, 0.3, 0.3])


def test_distribution_invariants_hold(series_factory) -> None:
    imports = [0.11, 0.07, 0.19, 0.05, 0.13, 0.08] + [0.2] * 18
    exports = [0.05] * 24
    exports[16:22] = [0.21, 0.35, 0.12, 0.27, 0.30, 0.18]
    series = series_factory(imports, exports)
    optimizer = _optimizer()

    for window in CHARGING_WINDOWS + DISCHARGING_WINDOWS:
        allocation = optimizer.optimize(window, series)
        assert len(allocation.distribution) == 6
        assert sum(allocation.distribution) <= 1.0 + 1e-9
        for rate in allocation.distribution:
            assert rate >= 0.0
            assert round(rate * 10) == pytest.approx(rate * 10)


def test_reported_objective_matches_recomputation(series_factory) -> None:
    exports = [0.05] * 24
    exports[16:22] = [0.21, 0.35, 0.12, 0.27, 0.30, 0.18]
    series = series_factory(0.2, exports)

    allocation = _optimizer().optimize(EVENING, series)

    recomputed = discharging_profit(
        allocation.distribution, allocation.slots, 10.0, 0.95, 0.2
    )
    assert allocation.objective == pytest.approx(recomputed)
    assert allocation.objective > 0.0
    # Highest export hour is the first slot.
    assert allocation.slots[0].hour == 17
    assert allocation.distribution[0] > 0.0


def test_zero_profit_tie_breaks_to_empty_distribution(series_factory) -> None:
    series = series_factory(0.2, 0.0)

    allocation = _optimizer().optimize(EVENING, series)

    assert allocation.distribution == (0.0,) * 6
    assert allocation.objective == 0.0
    assert build_schedule(allocation) == {}


def test_equal_cost_charging_prefers_smaller_peak(series_factory) -> None:
    # A step wider than any rate keeps the efficiency flat, so every split
    # of the charge over equal prices costs the same.
    series = series_factory(0.1, 0.0)

    allocation = _optimizer(charging_efficiency_step=100.0).optimize(NIGHT, series)

    assert sum(allocation.distribution) == pytest.approx(1.0)
    assert max(allocation.distribution) <= 0.2 + 1e-9
    assert allocation.candidates_evaluated == 3003


def test_padded_slots_stay_empty(series_factory) -> None:
    exports = [0.1] * 24
    exports[6:10] = [0.5, 0.6, 0.7, 0.8]
    series = series_factory(0.2, exports)

    allocation = _optimizer().optimize(MORNING, series)

    assert allocation.slots[4] is None and allocation.slots[5] is None
    assert allocation.distribution[4] == 0.0
    assert allocation.distribution[5] == 0.0
    assert allocation.candidates_evaluated == 1001


def test_length_mismatch_scores_zero(caplog) -> None:
    slots = (HourlyInput(0, 0.1, 0.1, 1.0, 0.0),) * 3
    with caplog.at_level(logging.WARNING):
        assert charging_cost((0.5, 0.5), slots, 10.0, 0.95) == 0.0
        assert discharging_profit((0.5, 0.5), slots, 10.0, 0.95) == 0.0
    assert "does not match window length" in caplog.text


def test_charge_target_controls_total_allocation(simple_cheaper_series) -> None:
    allocation = _optimizer(charge_target=0.5).optimize(NIGHT, simple_cheaper_series)
    assert allocation.total_rate == pytest.approx(0.5)

    with pytest.raises(ValueError):
        _optimizer(charge_target=1.5)


def test_merged_schedule_prefers_first_map() -> None:
    merged = merge_schedules({1: 0.3, 2: 0.2}, {2: 0.5, 3: 0.1})
    assert merged.get(1, 0.0) == 0.3
    assert merged.get(2, 0.0) == 0.2
    assert merged.get(3, 0.0) == 0.1
    assert merged.get(4, 0.0) == 0.0


def test_schedule_from_allocations_spans_windows(series_factory) -> None:
    imports = [0.05] * 6 + [0.2] * 4 + [0.04] * 6 + [0.2] * 8
    series = series_factory(imports, 0.0)
    optimizer = _optimizer()

    schedule = schedule_from_allocations(*(optimizer.optimize(w, series) for w in CHARGING_WINDOWS))

    assert set(schedule) <= set(NIGHT.hours) | set(MIDDAY.hours)
    assert any(hour in NIGHT.hours for hour in schedule)
    assert any(hour in MIDDAY.hours for hour in schedule)


def test_custom_window_selects_its_hours(series_factory) -> None:
    window = SchedulingWindow("late", 22, 23, Direction.CHARGE)
    series = series_factory(0.1, 0.0)
    assert [h.hour for h in window.select(series)] == [22, 23]
    allocation = _optimizer().optimize(window, series)
    assert allocation.to_dict()["hours"] == [22, 23, None, None, None, None]
