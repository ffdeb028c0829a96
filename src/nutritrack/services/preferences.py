"""Theme preference service."""

import logging
from dataclasses import dataclass, field

from nutritrack.domain.dashboard import Theme
from nutritrack.services.state import THEME_KEY, StateRepository

_logger = logging.getLogger(__name__)


@dataclass
class ThemeService:
    """Reads and writes the light/dark preference."""

    repository: StateRepository
    default: Theme = Theme.LIGHT
    _current: Theme | None = field(default=None, init=False, repr=False)

    def get_theme(self) -> Theme:
        """Return the stored theme, or the default when unset or unreadable."""
        if self._current is None:
            try:
                raw = self.repository.get(THEME_KEY)
            except Exception:
                _logger.exception("Failed to read stored theme")
                return self.default
            try:
                self._current = Theme(raw) if raw else self.default
            except ValueError:
                self._current = self.default
        return self._current

    def set_theme(self, theme: Theme) -> None:
        """Persist a theme choice. A failed write keeps the in-memory choice."""
        self._current = theme
        try:
            self.repository.set(THEME_KEY, theme.value)
        except Exception:
            _logger.exception("Failed to persist theme", extra={"theme": theme.value})

    def toggle(self) -> Theme:
        """Switch between light and dark and return the new theme."""
        theme = self.get_theme().toggled()
        self.set_theme(theme)
        return theme
