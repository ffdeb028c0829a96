"""View state for the tracker page."""

from dataclasses import dataclass
from enum import Enum

from nutritrack.domain.nutrition import FoodEntry
from nutritrack.domain.totals import DailyTotals, MacroSlice


class Theme(str, Enum):
    """Colour scheme preference."""

    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> "Theme":
        return Theme.LIGHT if self is Theme.DARK else Theme.DARK


@dataclass(frozen=True)
class DashboardSnapshot:
    """Immutable state handed to the view for one render."""

    entries: tuple[FoodEntry, ...]
    totals: DailyTotals
    chart: tuple[MacroSlice, ...]
    is_loading: bool
    error: str | None
    theme: Theme
    show_dashboard: bool

    @property
    def entry_count(self) -> int:
        return len(self.entries)
