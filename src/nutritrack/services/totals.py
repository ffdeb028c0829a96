"""Running totals and macro breakdown over logged entries."""

from collections.abc import Iterable

from nutritrack.domain.nutrition import NutritionData
from nutritrack.domain.totals import DailyTotals, MacroSlice

MACRO_LABELS: tuple[tuple[str, str], ...] = (
    ("protein", "Eiweiß"),
    ("fat", "Fett"),
    ("carbs", "Kohlenhydrate"),
)


def compute_totals(entries: Iterable[NutritionData]) -> DailyTotals:
    """Sum calories and macros across entries, starting from zero."""
    total = DailyTotals()
    for entry in entries:
        total = DailyTotals(
            calories=total.calories + entry.calories,
            protein=total.protein + entry.protein,
            fat=total.fat + entry.fat,
            carbs=total.carbs + entry.carbs,
        )
    return total


def macro_breakdown(totals: DailyTotals) -> list[MacroSlice]:
    """Return labelled macro totals that are strictly positive.

    Calories are shown as a headline figure and never appear here.
    """
    slices = [
        MacroSlice(key=key, label=label, value=getattr(totals, key))
        for key, label in MACRO_LABELS
    ]
    return [item for item in slices if item.value > 0]
