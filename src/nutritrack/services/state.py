"""Key-value slots holding the tracker's persisted state."""

from typing import Protocol

ENTRIES_KEY = "entries"
THEME_KEY = "theme"


class StateRepository(Protocol):
    """String-valued key-value storage."""

    def get(self, key: str) -> str | None:
        """Return the stored value for a key, if any."""

    def set(self, key: str, value: str) -> None:
        """Overwrite the value stored for a key."""
