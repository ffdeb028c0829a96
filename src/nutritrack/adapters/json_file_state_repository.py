"""Local JSON file storage for tracker state."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from nutritrack.services.state import StateRepository

_logger = logging.getLogger(__name__)


@dataclass
class JsonFileStateRepository(StateRepository):
    """Keeps all slots in one JSON object on disk."""

    path: Path

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        slots = self._read_all()
        slots[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(
            json.dumps(slots, ensure_ascii=False, indent=2), encoding="utf-8"
        )
        tmp_path.replace(self.path)

    def _read_all(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            _logger.warning(
                "State file is not valid JSON", extra={"path": str(self.path)}
            )
            return {}
        return data if isinstance(data, dict) else {}
