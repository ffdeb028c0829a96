"""Derived totals and chart inputs."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DailyTotals:
    """Summed nutrition across the current entries."""

    calories: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    carbs: float = 0.0


@dataclass(frozen=True)
class MacroSlice:
    """One labelled macro total for the breakdown chart."""

    key: str
    label: str
    value: float
