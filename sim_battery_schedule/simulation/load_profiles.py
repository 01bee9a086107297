"""
Household consumption profile for a single simulated day.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class LoadProfile(ABC):
    """Interface for a 24-hour load curve: kWh consumed in each hour."""

    @abstractmethod
    def get_hourly_load_kwh(self, hour_in_day: int) -> float:
        """
        Get the consumption for one hour of the day.

        Args:
            hour_in_day: Hour index (0-23).

        Returns:
            Energy consumed during the hour in kWh.
        """
        raise NotImplementedError

    def daily_profile_kwh(self) -> np.ndarray:
        """Return the full 24-hour load curve as an array."""
        return np.array([self.get_hourly_load_kwh(h) for h in range(24)], dtype=float)


class PeakRampLoadProfile(LoadProfile):
    """
    Flat night/day base load with linear morning and evening ramps.

    load(h) =
        (morning_base + (h - 6) * ramp) * m   for 6 <= h <= 9
        (evening_base + (h - 17) * ramp) * m  for 17 <= h <= 22
        night_base * m                        for h >= 23 or h < 6
        day_base * m                          otherwise
    """

    MORNING_HOURS = (6, 9)
    EVENING_HOURS = (17, 22)

    def __init__(
        self,
        load_multiplier: float = 1.0,
        night_base_kwh: float = 2.0,
        day_base_kwh: float = 3.5,
        morning_base_kwh: float = 3.0,
        evening_base_kwh: float = 4.0,
        ramp_kwh_per_hour: float = 0.5,
    ) -> None:
        """
        Args:
            load_multiplier: Scenario scaling applied to every hour.
            night_base_kwh: Flat consumption from 23:00 to 06:00.
            day_base_kwh: Flat consumption between the two peaks.
            morning_base_kwh: Consumption at 06:00, start of the morning ramp.
            evening_base_kwh: Consumption at 17:00, start of the evening ramp.
            ramp_kwh_per_hour: Increase per hour inside both ramps.
        """
        self.load_multiplier = load_multiplier
        self.night_base_kwh = night_base_kwh
        self.day_base_kwh = day_base_kwh
        self.morning_base_kwh = morning_base_kwh
        self.evening_base_kwh = evening_base_kwh
        self.ramp_kwh_per_hour = ramp_kwh_per_hour

    def get_hourly_load_kwh(self, hour_in_day: int) -> float:
        morning_start, morning_end = self.MORNING_HOURS
        evening_start, evening_end = self.EVENING_HOURS
        if morning_start <= hour_in_day <= morning_end:
            base = self.morning_base_kwh + (hour_in_day - morning_start) * self.ramp_kwh_per_hour
        elif evening_start <= hour_in_day <= evening_end:
            base = self.evening_base_kwh + (hour_in_day - evening_start) * self.ramp_kwh_per_hour
        elif hour_in_day >= 23 or hour_in_day < morning_start:
            base = self.night_base_kwh
        else:
            base = self.day_base_kwh
        return base * self.load_multiplier
