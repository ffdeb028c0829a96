"""Request and response models for the HTTP API."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from nutritrack.domain.dashboard import DashboardSnapshot, Theme
from nutritrack.domain.nutrition import FoodEntry
from nutritrack.domain.totals import DailyTotals, MacroSlice


class ParseMealRequest(BaseModel):
    """Relay request body."""

    description: str


class SubmitMealRequest(BaseModel):
    """Tracker submission body."""

    description: str


class NavigationRequest(BaseModel):
    """Switch between the landing page and the dashboard."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    show_dashboard: bool


class DashboardResponse(BaseModel):
    """Serialized dashboard snapshot."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    entries: list[FoodEntry]
    totals: DailyTotals
    chart: list[MacroSlice]
    is_loading: bool
    error: str | None
    theme: Theme
    show_dashboard: bool
    entry_count: int

    @classmethod
    def from_snapshot(cls, snapshot: DashboardSnapshot) -> "DashboardResponse":
        return cls(
            entries=list(snapshot.entries),
            totals=snapshot.totals,
            chart=list(snapshot.chart),
            is_loading=snapshot.is_loading,
            error=snapshot.error,
            theme=snapshot.theme,
            show_dashboard=snapshot.show_dashboard,
            entry_count=snapshot.entry_count,
        )
