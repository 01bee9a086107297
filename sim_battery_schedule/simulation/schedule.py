"""
Hour to rate lookup tables built from window allocations.
"""

from __future__ import annotations

from collections import ChainMap
from typing import Dict, Mapping

from .optimizer import WindowAllocation


def build_schedule(allocation: WindowAllocation) -> Dict[int, float]:
    """
    Map each real hour of the window to its allocated rate.

    Only non-zero rates are kept; padded slots never appear.
    """
    schedule: Dict[int, float] = {}
    for rate, slot in zip(allocation.distribution, allocation.slots):
        if slot is not None and rate > 0.0:
            schedule[slot.hour] = rate
    return schedule


def merge_schedules(*schedules: Mapping[int, float]) -> ChainMap:
    """
    Combine schedules into one lookup, earlier schedules taking priority.

    The result is a read-through view: ``merged.get(hour, 0.0)`` checks the
    first schedule, then the second, and so on.
    """
    return ChainMap(*schedules)


def schedule_from_allocations(*allocations: WindowAllocation) -> ChainMap:
    return merge_schedules(*(build_schedule(allocation) for allocation in allocations))
