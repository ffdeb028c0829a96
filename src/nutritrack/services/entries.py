"""Entry store backed by a persisted key-value slot."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from pydantic import TypeAdapter, ValidationError

from nutritrack.domain.nutrition import FoodEntry, NutritionData
from nutritrack.services.state import ENTRIES_KEY, StateRepository

_ENTRY_LIST = TypeAdapter(list[FoodEntry])

_logger = logging.getLogger(__name__)


def _now_millis() -> int:
    return int(datetime.now(tz=UTC).timestamp() * 1000)


def _new_id() -> str:
    return str(uuid4())


@dataclass
class EntryStore:
    """Owns the ordered entry collection, newest first.

    Every mutation rewrites the whole ``entries`` slot.
    """

    repository: StateRepository
    clock: Callable[[], int] = _now_millis
    id_factory: Callable[[], str] = _new_id
    _entries: list[FoodEntry] = field(default_factory=list, init=False, repr=False)

    @property
    def entries(self) -> tuple[FoodEntry, ...]:
        """Return a snapshot of the current entries."""
        return tuple(self._entries)

    def load(self) -> tuple[FoodEntry, ...]:
        """Restore entries from storage, falling back to an empty collection."""
        try:
            raw = self.repository.get(ENTRIES_KEY)
        except Exception:
            _logger.exception("Failed to read stored entries")
            raw = None
        self._entries = _decode_entries(raw)
        return self.entries

    def append(
        self, records: Sequence[NutritionData], raw_input: str
    ) -> list[FoodEntry]:
        """Prepend one new entry per record, keeping the records' order."""
        timestamp = self.clock()
        taken = {entry.id for entry in self._entries}
        created: list[FoodEntry] = []
        for record in records:
            entry_id = self._fresh_id(taken)
            taken.add(entry_id)
            created.append(
                FoodEntry(
                    **record.model_dump(),
                    id=entry_id,
                    timestamp=timestamp,
                    raw_input=raw_input,
                )
            )
        if created:
            self._entries = created + self._entries
            self.persist()
        return created

    def remove(self, entry_id: str) -> bool:
        """Delete an entry by id. Unknown ids are ignored."""
        remaining = [entry for entry in self._entries if entry.id != entry_id]
        if len(remaining) == len(self._entries):
            return False
        self._entries = remaining
        self.persist()
        return True

    def persist(self) -> None:
        """Write the full collection to storage."""
        payload = _ENTRY_LIST.dump_json(self._entries, by_alias=True).decode("utf-8")
        try:
            self.repository.set(ENTRIES_KEY, payload)
        except Exception:
            _logger.exception(
                "Failed to persist entries", extra={"count": len(self._entries)}
            )

    def _fresh_id(self, taken: set[str]) -> str:
        entry_id = self.id_factory()
        while entry_id in taken:
            entry_id = self.id_factory()
        return entry_id


def _decode_entries(raw: str | None) -> list[FoodEntry]:
    if raw is None:
        return []
    try:
        entries = _ENTRY_LIST.validate_json(raw)
    except ValidationError:
        _logger.warning("Stored entries are malformed; starting empty", exc_info=True)
        return []
    unique: list[FoodEntry] = []
    seen: set[str] = set()
    for entry in entries:
        if entry.id in seen:
            _logger.warning("Dropping duplicate stored entry", extra={"id": entry.id})
            continue
        seen.add(entry.id)
        unique.append(entry)
    return unique
