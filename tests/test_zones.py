from __future__ import annotations

import pytest

from sim_battery_schedule.simulation import (
    Zone,
    cheaper_tariff_zones,
    expensive_import_zones,
    export_price_zones,
    needed_energy_profile,
    scan,
    zone_mask,
)


def test_scan_finds_maximal_runs() -> None:
    values = [0, 1, 1, 0, 1, 0, 0, 1, 1, 1]
    zones = scan(values, lambda v: v == 1)
    assert [z.span for z in zones] == [(1, 2), (4, 4), (7, 9)]


def test_scan_handles_empty_and_full_series() -> None:
    assert scan([], lambda v: True) == []
    assert scan([3, 3, 3], lambda v: v > 5) == []
    assert scan([3, 3, 3], lambda v: v > 1) == [Zone(0, 2)]


def test_zones_are_disjoint_and_rescan_is_stable() -> None:
    values = [5, 7, 7, 2, 9, 9, 9, 1, 8, 3, 3, 8]
    zones = scan(values, lambda v: v >= 7)
    for previous, current in zip(zones, zones[1:]):
        assert previous.end < current.start
    mask = zone_mask(zones, len(values))
    assert mask == [v >= 7 for v in values]
    assert scan(mask, bool) == zones


def test_zone_rejects_reversed_bounds() -> None:
    with pytest.raises(ValueError):
        Zone(5, 4)


def test_price_zones_use_inclusive_threshold(series_factory) -> None:
    imports = [0.10] * 6 + [0.20] * 4 + [0.10] * 7 + [0.25] * 5 + [0.10] * 2
    exports = [0.05] * 17 + [0.30] * 5 + [0.05] * 2
    series = series_factory(imports, exports)

    assert expensive_import_zones(series, 0.20) == [Zone(6, 9), Zone(17, 21)]
    assert export_price_zones(series, 0.30) == [Zone(17, 21)]
    assert export_price_zones(series, 0.31) == []


def test_cheaper_tariff_zone_splits_on_type_change(series_factory) -> None:
    imports = [0.20] * 24
    imports[0:3] = [0.05, 0.05, 0.05]
    exports = [0.05] * 24
    exports[3:5] = [0.40, 0.40]
    exports[10] = 0.40
    series = series_factory(imports, exports)

    zones = cheaper_tariff_zones(series, import_threshold=0.10, export_threshold=0.30)

    assert zones == [Zone(0, 2, "import"), Zone(3, 4, "export"), Zone(10, 10, "export")]
    assert zones[0].to_dict() == {"start": 0, "end": 2, "type": "import"}


def test_needed_energy_profile_prepares_for_expensive_zone(series_factory) -> None:
    imports = [0.10] * 24
    imports[17:22] = [0.30] * 5
    loads = [1.0] * 24
    loads[17:22] = [4.0] * 5
    series = series_factory(imports, 0.05, load=loads, solar=1.0)
    zones = expensive_import_zones(series, 0.30)

    profile = needed_energy_profile(series, zones)

    assert len(profile) == 24
    assert profile[12].needed_energy == pytest.approx(15.0)
    assert profile[12].reason == "Preparing for expensive import zone (17-21)"
    assert profile[10].needed_energy == 0.0
    assert profile[10].reason == ""
    assert profile[16].reason.startswith("Preparing for expensive")
    # Inside the zone the look-ahead only covers the remaining zone hours.
    assert profile[18].needed_energy == pytest.approx(9.0)
    assert profile[18].reason == "Preparing for upcoming high demand"
    assert profile[5].to_dict() == {"hour": 5, "neededEnergy": 0.0, "reason": ""}
