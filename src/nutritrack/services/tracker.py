"""Meal tracker state shared by the page and the JSON API."""

import logging
from dataclasses import dataclass, field

from nutritrack.domain.dashboard import DashboardSnapshot, Theme
from nutritrack.domain.nutrition import FoodEntry
from nutritrack.services.entries import EntryStore
from nutritrack.services.extraction import (
    EXTRACTION_FAILED_MESSAGE,
    ExtractionError,
    MealExtractor,
)
from nutritrack.services.preferences import ThemeService
from nutritrack.services.totals import compute_totals, macro_breakdown

_logger = logging.getLogger(__name__)


@dataclass
class MealTracker:
    """Coordinates submissions, deletions and view flags.

    Each submission gets an increasing sequence number. Results are applied in
    completion order, but only the latest submission may set the error.
    """

    store: EntryStore
    extractor: MealExtractor
    theme_service: ThemeService
    error: str | None = None
    dashboard_visible: bool = False
    _sequence: int = field(default=0, init=False, repr=False)
    _in_flight: set[int] = field(default_factory=set, init=False, repr=False)

    @property
    def is_loading(self) -> bool:
        return bool(self._in_flight)

    def load(self) -> None:
        """Restore persisted entries."""
        entries = self.store.load()
        _logger.info("Loaded stored entries", extra={"count": len(entries)})

    async def submit(self, description: str) -> list[FoodEntry]:
        """Analyze a meal description and log the resulting entries.

        Blank input is ignored without contacting the extractor.
        """
        if not description.strip():
            return []
        self._sequence += 1
        sequence = self._sequence
        self._in_flight.add(sequence)
        self.error = None
        try:
            records = await self.extractor.parse_meal(description)
        except ExtractionError:
            _logger.warning(
                "Meal analysis failed", exc_info=True, extra={"sequence": sequence}
            )
            if sequence == self._sequence:
                self.error = EXTRACTION_FAILED_MESSAGE
            return []
        finally:
            self._in_flight.discard(sequence)
        return self.store.append(records, description)

    def remove(self, entry_id: str) -> bool:
        """Delete a logged entry."""
        return self.store.remove(entry_id)

    def toggle_theme(self) -> Theme:
        return self.theme_service.toggle()

    def open_dashboard(self) -> None:
        self.dashboard_visible = True

    def open_landing(self) -> None:
        self.dashboard_visible = False

    def snapshot(self) -> DashboardSnapshot:
        """Return the current view state."""
        entries = self.store.entries
        totals = compute_totals(entries)
        return DashboardSnapshot(
            entries=entries,
            totals=totals,
            chart=tuple(macro_breakdown(totals)),
            is_loading=self.is_loading,
            error=self.error,
            theme=self.theme_service.get_theme(),
            show_dashboard=self.dashboard_visible,
        )
