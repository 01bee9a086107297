"""
Time-of-day tariff models with bounded stochastic jitter.

A pricing structure maps each hour of the day to an (import, export) price
pair. Structures are built from ordered time-of-day bands, each with a base
rate plus a random jitter drawn from an injected numpy ``Generator`` so that
a seeded run always reproduces the same day.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class PriceBand:
    """
    Half-open hour interval [start_hour, end_hour) with a jittered value.

    The drawn value is ``base + U(0, 1) * jitter``. Bands with zero jitter do
    not consume random numbers.
    """
    start_hour: int
    end_hour: int
    base: float
    jitter: float = 0.0

    def contains(self, hour_in_day: int) -> bool:
        return self.start_hour <= hour_in_day < self.end_hour

    def draw(self, rng: np.random.Generator) -> float:
        if self.jitter == 0.0:
            return self.base
        return self.base + float(rng.random()) * self.jitter


def _find_band(bands: Sequence[PriceBand], hour_in_day: int) -> PriceBand:
    for band in bands:
        if band.contains(hour_in_day):
            return band
    raise ValueError(f"No price band covers hour {hour_in_day}")


class PricingStructure(ABC):
    """
    Interface for a daily tariff: import/export price per kWh for each hour.

    Subclasses implement :meth:`get_prices`. Randomness comes from the
    generator handed to :meth:`reset_for_run`; without one, a private
    entropy-seeded generator is used.
    """

    key: str = ""
    name: str = ""

    def __init__(self) -> None:
        self._rng: np.random.Generator | None = None
        self._fallback_rng = np.random.default_rng()

    def reset_for_run(self, rng: np.random.Generator | None = None) -> None:
        """
        Attach the random source used by the next series of price draws.

        Args:
            rng: Generator to draw jitter from, or None to keep the current one.
        """
        if rng is not None:
            self._rng = rng

    @property
    def rng(self) -> np.random.Generator:
        return self._rng or self._fallback_rng

    @abstractmethod
    def get_prices(self, hour_in_day: int) -> Tuple[float, float]:
        """
        Draw the prices for one hour.

        Args:
            hour_in_day: Hour index (0-23).

        Returns:
            Tuple (import_price, export_price) per kWh.
        """
        raise NotImplementedError


class BandedPricingStructure(PricingStructure):
    """
    Tariff defined by ordered import bands and an export rule.

    Export prices are either derived from the same hour's import price via a
    band-dependent multiplier (``export_multiplier_bands``) or drawn directly
    from absolute bands (``export_bands``). Exactly one of the two is given.
    """

    def __init__(
        self,
        key: str,
        name: str,
        import_bands: List[PriceBand],
        export_multiplier_bands: List[PriceBand] | None = None,
        export_bands: List[PriceBand] | None = None,
    ) -> None:
        super().__init__()
        if (export_multiplier_bands is None) == (export_bands is None):
            raise ValueError("Provide exactly one of export_multiplier_bands or export_bands")
        self.key = key
        self.name = name
        self.import_bands = list(import_bands)
        self.export_multiplier_bands = (
            list(export_multiplier_bands) if export_multiplier_bands is not None else None
        )
        self.export_bands = list(export_bands) if export_bands is not None else None

    def get_prices(self, hour_in_day: int) -> Tuple[float, float]:
        rng = self.rng
        import_price = _find_band(self.import_bands, hour_in_day).draw(rng)
        if self.export_multiplier_bands is not None:
            multiplier = _find_band(self.export_multiplier_bands, hour_in_day).draw(rng)
            export_price = import_price * multiplier
        else:
            export_price = _find_band(self.export_bands, hour_in_day).draw(rng)
        return import_price, export_price


class FixedPricingStructure(PricingStructure):
    """Replays a fixed 24-hour price series (no randomness)."""

    def __init__(
        self,
        import_prices: Sequence[float],
        export_prices: Sequence[float],
        key: str = "fixed",
        name: str = "Fixed Prices",
    ) -> None:
        super().__init__()
        if len(import_prices) != 24 or len(export_prices) != 24:
            raise ValueError("import_prices and export_prices must have length 24")
        self.key = key
        self.name = name
        self.import_prices = [float(p) for p in import_prices]
        self.export_prices = [float(p) for p in export_prices]

    def get_prices(self, hour_in_day: int) -> Tuple[float, float]:
        return self.import_prices[hour_in_day], self.export_prices[hour_in_day]


def _five_band_import(
    night: Tuple[float, float],
    morning_peak: Tuple[float, float],
    day: Tuple[float, float],
    evening_peak: Tuple[float, float],
    late_evening: Tuple[float, float],
) -> List[PriceBand]:
    return [
        PriceBand(0, 6, *night),
        PriceBand(6, 9, *morning_peak),
        PriceBand(9, 17, *day),
        PriceBand(17, 22, *evening_peak),
        PriceBand(22, 24, *late_evening),
    ]


# Checked in order, the last band catches every remaining hour.
_PEAK_EXPORT_MULTIPLIERS = [
    PriceBand(17, 22, 1.1, 0.1),
    PriceBand(6, 10, 1.2, 0.1),
    PriceBand(10, 16, 0.9, 0.1),
    PriceBand(0, 24, 0.7, 0.1),
]


def make_normal_pricing() -> BandedPricingStructure:
    return BandedPricingStructure(
        key="normal",
        name="Normal",
        import_bands=_five_band_import(
            night=(0.05, 0.05),
            morning_peak=(0.15, 0.05),
            day=(0.10, 0.05),
            evening_peak=(0.20, 0.05),
            late_evening=(0.08, 0.05),
        ),
        export_multiplier_bands=_PEAK_EXPORT_MULTIPLIERS,
    )


def make_simple_cheaper_pricing() -> BandedPricingStructure:
    return BandedPricingStructure(
        key="simpleCheaper",
        name="Simple Cheaper Tariff",
        import_bands=[PriceBand(0, 4, 0.05), PriceBand(4, 24, 0.15)],
        export_bands=[PriceBand(0, 24, 0.0)],
    )


def make_variable_cheap_rates_low_export_pricing() -> BandedPricingStructure:
    return BandedPricingStructure(
        key="variableCheapRatesLowExport",
        name="Variable Cheap Rates Low Export",
        import_bands=_five_band_import(
            night=(0.02, 0.06),
            morning_peak=(0.14, 0.08),
            day=(0.06, 0.08),
            evening_peak=(0.22, 0.08),
            late_evening=(0.08, 0.06),
        ),
        export_multiplier_bands=[PriceBand(0, 24, 0.25, 0.1)],
    )


def make_negative_import_and_export_pricing() -> BandedPricingStructure:
    return BandedPricingStructure(
        key="negativeImportAndExportPrice",
        name="Negative Import and Export Price",
        import_bands=_five_band_import(
            night=(-0.05, 0.04),
            morning_peak=(0.15, 0.05),
            day=(0.10, 0.05),
            evening_peak=(0.20, 0.05),
            late_evening=(0.08, 0.05),
        ),
        # Night multiplier > 1 keeps export at least as negative as import.
        export_multiplier_bands=[PriceBand(0, 6, 1.2, 0.1)] + _PEAK_EXPORT_MULTIPLIERS,
    )


def make_stable_pricing() -> BandedPricingStructure:
    return BandedPricingStructure(
        key="stablePrice",
        name="Stable Price",
        import_bands=[PriceBand(0, 24, 0.15, 0.01)],
        export_multiplier_bands=[PriceBand(0, 24, 0.8, 0.02)],
    )


PRICING_STRUCTURE_FACTORIES = {
    "normal": make_normal_pricing,
    "simpleCheaper": make_simple_cheaper_pricing,
    "variableCheapRatesLowExport": make_variable_cheap_rates_low_export_pricing,
    "negativeImportAndExportPrice": make_negative_import_and_export_pricing,
    "stablePrice": make_stable_pricing,
}

# Spelling used by older dashboard builds.
PRICING_STRUCTURE_ALIASES = {
    "negativeImportandExportPrice": "negativeImportAndExportPrice",
}


def canonical_pricing_key(key: str) -> str:
    """Resolve aliases; raise ValueError for unknown keys."""
    resolved = PRICING_STRUCTURE_ALIASES.get(key, key)
    if resolved not in PRICING_STRUCTURE_FACTORIES:
        known = ", ".join(sorted(PRICING_STRUCTURE_FACTORIES))
        raise ValueError(f"Unknown pricing structure '{key}' (known: {known})")
    return resolved


def build_pricing_structure(
    key: str,
    rng: np.random.Generator | None = None,
) -> PricingStructure:
    """
    Instantiate a registered pricing structure.

    Args:
        key: Pricing structure key (aliases accepted).
        rng: Optional generator attached to the structure.

    Returns:
        Fresh PricingStructure ready to draw prices.
    """
    structure = PRICING_STRUCTURE_FACTORIES[canonical_pricing_key(key)]()
    structure.reset_for_run(rng=rng)
    return structure


def list_pricing_structures() -> List[Dict[str, str]]:
    return [
        {"key": key, "name": factory().name}
        for key, factory in PRICING_STRUCTURE_FACTORIES.items()
    ]
