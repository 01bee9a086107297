"""
Contiguous-interval detection over hourly series.

:func:`scan` is the generic single-pass detector; the remaining helpers
specialize it for price thresholds and build the look-ahead energy profile.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Sequence, TypeVar

from .models import EnergyProfileEntry, HourlyInput, Zone

T = TypeVar("T")

DEFAULT_LOOK_AHEAD_HOURS = 6


def scan(
    series: Sequence[T],
    predicate: Callable[[T], bool],
    classify: Callable[[T], str | None] | None = None,
) -> List[Zone]:
    """
    Find maximal runs of consecutive indices where ``predicate`` holds.

    Args:
        series: Hourly items; zone bounds are positions in this sequence.
        predicate: Membership test applied to each item.
        classify: Optional zone type for a member item. A change of type
            closes the running zone and opens a new one at the same index.

    Returns:
        Non-overlapping zones sorted by start.
    """
    zones: List[Zone] = []
    start: int | None = None
    kind: str | None = None

    for index, item in enumerate(series):
        if predicate(item):
            item_kind = classify(item) if classify is not None else None
            if start is None:
                start, kind = index, item_kind
            elif item_kind != kind:
                zones.append(Zone(start, index - 1, kind))
                start, kind = index, item_kind
        elif start is not None:
            zones.append(Zone(start, index - 1, kind))
            start, kind = None, None

    if start is not None:
        zones.append(Zone(start, len(series) - 1, kind))
    return zones


def zone_mask(zones: Iterable[Zone], length: int) -> List[bool]:
    """Boolean membership mask of ``length`` hours for the given zones."""
    mask = [False] * length
    for zone in zones:
        for index in range(zone.start, zone.end + 1):
            mask[index] = True
    return mask


def expensive_import_zones(series: Sequence[HourlyInput], threshold: float) -> List[Zone]:
    return scan(series, lambda hour: hour.import_price >= threshold)


def export_price_zones(series: Sequence[HourlyInput], threshold: float) -> List[Zone]:
    return scan(series, lambda hour: hour.export_price >= threshold)


def cheaper_tariff_zones(
    series: Sequence[HourlyInput],
    import_threshold: float,
    export_threshold: float,
) -> List[Zone]:
    """
    Zones of cheap import or rewarding export.

    An hour qualifies when its import price is below ``import_threshold`` or
    its export price is above ``export_threshold``; the import condition
    decides the type when both hold. Adjacent hours of different type are
    never merged.
    """
    def is_import(hour: HourlyInput) -> bool:
        return hour.import_price < import_threshold

    return scan(
        series,
        lambda hour: is_import(hour) or hour.export_price > export_threshold,
        classify=lambda hour: "import" if is_import(hour) else "export",
    )


def _deficit_between(series: Sequence[HourlyInput], start: int, stop: int) -> float:
    return sum(hour.net_deficit for hour in series[start:stop])


def needed_energy_profile(
    series: Sequence[HourlyInput],
    expensive_zones: Sequence[Zone],
    look_ahead: int = DEFAULT_LOOK_AHEAD_HOURS,
) -> List[EnergyProfileEntry]:
    """
    Energy worth holding in the battery at each hour.

    When an expensive import zone starts within the next ``look_ahead`` hours
    the need is the zone's total deficit (load above solar); otherwise it is
    the deficit of the next ``look_ahead`` hours.
    """
    profile: List[EnergyProfileEntry] = []
    for index, hour in enumerate(series):
        upcoming = next(
            (zone for zone in expensive_zones if index < zone.start <= index + look_ahead),
            None,
        )
        if upcoming is not None:
            needed = _deficit_between(series, upcoming.start, upcoming.end + 1)
            reason = f"Preparing for expensive import zone ({upcoming.start}-{upcoming.end})"
        else:
            needed = _deficit_between(series, index + 1, index + 1 + look_ahead)
            reason = "Preparing for upcoming high demand" if needed > 0 else ""
        profile.append(
            EnergyProfileEntry(hour=hour.hour, needed_energy=round(needed, 2), reason=reason)
        )
    return profile
