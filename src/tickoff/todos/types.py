"""Todo subsystem public types."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class SortKey(StrEnum):
    """Criteria accepted by ``TodoStore.sort``."""

    ID = "id"
    DATE = "date"
    DONE = "done"


@dataclass
class Todo:
    """A single todo item."""

    id: int
    desc: str
    is_complete: bool = False
    is_starred: bool = False
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def copy_with_id(self, new_id: int) -> Todo:
        return replace(self, id=new_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "desc": self.desc,
            "is_complete": self.is_complete,
            "is_starred": self.is_starred,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Todo:
        """Build a Todo from its stored form.

        Raises:
            KeyError, TypeError, ValueError: If required fields are missing
                or malformed. Callers wrap these as StoreIOError.
        """
        todo_id = int(data["id"])
        if todo_id < 1:
            raise ValueError(f"todo id must be positive, got {todo_id}")
        return cls(
            id=todo_id,
            desc=str(data["desc"]).strip(),
            is_complete=bool(data.get("is_complete", False)),
            is_starred=bool(data.get("is_starred", False)),
            timestamp=_parse_dt(data["timestamp"]),
        )


def _parse_dt(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
