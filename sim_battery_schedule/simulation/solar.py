"""
Clear-sky solar production curve for a single simulated day.

Provides :class:`SolarModel`, a half-sine bell between sunrise and sunset
peaking at solar noon.
"""

from __future__ import annotations

import numpy as np


class SolarModel:
    """
    Hourly PV generation following a half-sine curve.

    generation(h) = peak * sin((h - sunrise) / (sunset - sunrise) * pi) * m
    for sunrise <= h <= sunset, zero otherwise. With the default 6-18 window
    the curve peaks at hour 12.
    """

    def __init__(
        self,
        solar_multiplier: float = 1.0,
        peak_generation_kwh: float = 6.0,
        sunrise_hour: int = 6,
        sunset_hour: int = 18,
    ) -> None:
        """
        Args:
            solar_multiplier: Scenario scaling applied to the whole curve.
            peak_generation_kwh: Generation at the top of the bell before scaling.
            sunrise_hour: First hour of the production window.
            sunset_hour: Last hour of the production window.
        """
        if sunset_hour <= sunrise_hour:
            raise ValueError("sunset_hour must be after sunrise_hour")
        self.solar_multiplier = solar_multiplier
        self.peak_generation_kwh = peak_generation_kwh
        self.sunrise_hour = sunrise_hour
        self.sunset_hour = sunset_hour

    def hourly_generation_kwh(self, hour_in_day: int) -> float:
        if not self.sunrise_hour <= hour_in_day <= self.sunset_hour:
            return 0.0
        phase = (hour_in_day - self.sunrise_hour) / (self.sunset_hour - self.sunrise_hour)
        return float(self.peak_generation_kwh * np.sin(phase * np.pi) * self.solar_multiplier)

    def daily_profile_kwh(self) -> np.ndarray:
        return np.array([self.hourly_generation_kwh(h) for h in range(24)], dtype=float)
