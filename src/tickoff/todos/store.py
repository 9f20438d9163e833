"""In-memory todo list with identifier recycling.

The store is a plain value: the CLI loads one per invocation, mutates it, and
saves it back. Nothing here touches the filesystem.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from datetime import UTC, datetime
from typing import Any, TypeVar

from tickoff.errors import NotFoundError, StoreIOError
from tickoff.todos.ids import IdAllocator
from tickoff.todos.types import SortKey, Todo

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

# Separates several items (add) or several queries (filter) in one argument
ITEM_DELIMITER = "::"


class TodoStore:
    """Ordered todos plus the set of identifiers freed by removal."""

    def __init__(
        self,
        todos: Iterable[Todo] = (),
        available_ids: Iterable[int] = (),
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._todos: list[Todo] = list(todos)
        self._ids = IdAllocator(available_ids)
        self._clock = clock or (lambda: datetime.now(UTC))

    def __iter__(self) -> Iterator[Todo]:
        return iter(self._todos)

    def __len__(self) -> int:
        return len(self._todos)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TodoStore):
            return NotImplemented
        return self._todos == other._todos and self._ids == other._ids

    @property
    def todos(self) -> list[Todo]:
        return list(self._todos)

    @property
    def available_ids(self) -> list[int]:
        return self._ids.available()

    def ids(self) -> list[int]:
        return [todo.id for todo in self._todos]

    def get(self, todo_id: int) -> Todo:
        return self._todos[self._index_of(todo_id)]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, raw_text: str) -> list[Todo]:
        """Append one todo per ``::``-separated, non-blank segment."""
        added: list[Todo] = []
        for segment in raw_text.split(ITEM_DELIMITER):
            desc = segment.strip()
            if not desc:
                continue
            todo = Todo(id=self._allocate(), desc=desc, timestamp=self._clock())
            self._todos.append(todo)
            added.append(todo)
        logger.debug("todos_added", extra={"todo_ids": [t.id for t in added]})
        return added

    def edit(self, todo_id: int, new_text: str) -> Todo:
        desc = new_text.strip()
        if not desc:
            raise ValueError("description cannot be empty")
        todo = self.get(todo_id)
        todo.desc = desc
        return todo

    def set_complete(self, ids: Iterable[int], value: bool) -> list[Todo]:
        """Set the completion flag on each id, stopping at the first unknown one.

        Todos before the unknown id keep their new state.
        """

        def mark(index: int) -> Todo:
            self._todos[index].is_complete = value
            return self._todos[index]

        return self._apply(ids, mark)

    def toggle_star(self, ids: Iterable[int]) -> list[Todo]:
        def flip(index: int) -> Todo:
            todo = self._todos[index]
            todo.is_starred = not todo.is_starred
            return todo

        return self._apply(ids, flip)

    def remove(self, ids: Iterable[int]) -> list[Todo]:
        """Remove todos and recycle their ids; same partial semantics as done."""

        def drop(index: int) -> Todo:
            todo = self._todos.pop(index)
            self._ids.recycle(todo.id)
            return todo

        return self._apply(ids, drop)

    def sort(self, key: SortKey = SortKey.DONE) -> None:
        """Stable sort. ``done`` puts open todos before completed ones."""
        if key == SortKey.ID:
            self._todos.sort(key=lambda todo: todo.id)
        elif key == SortKey.DATE:
            self._todos.sort(key=lambda todo: todo.timestamp)
        else:
            self._todos.sort(key=lambda todo: todo.is_complete)

    def reset(self, backup: Callable[[], _T] | None = None) -> _T | None:
        """Clear every todo and recycled id.

        ``backup`` runs first and its result is returned; if it raises, the
        store is left untouched and the error propagates.
        """
        result = backup() if backup is not None else None
        count = len(self._todos)
        self._todos.clear()
        self._ids.clear()
        logger.info("todos_reset", extra={"count": count})
        return result

    def insert_copy(self, todo: Todo) -> Todo:
        """Append a copy of ``todo`` under a freshly allocated id."""
        copy = todo.copy_with_id(self._allocate())
        self._todos.append(copy)
        return copy

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def filter(self, query: str) -> list[Todo]:
        """Todos whose description contains any ``::``-separated fragment.

        Matching is case-insensitive. An empty query matches everything.
        """
        fragments = [q.strip() for q in query.lower().split(ITEM_DELIMITER)]
        return [
            todo
            for todo in self._todos
            if any(fragment in todo.desc.lower() for fragment in fragments)
        ]

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "todos": [todo.to_dict() for todo in self._todos],
            "available_ids": self._ids.available(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TodoStore:
        """Hydrate a store, rejecting data that breaks the id invariants.

        Raises:
            StoreIOError: If the payload is malformed.
        """
        try:
            todos = [Todo.from_dict(item) for item in data.get("todos", [])]
            available = [int(i) for i in data.get("available_ids", [])]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise StoreIOError(f"Malformed todo data: {e}") from e

        live = [todo.id for todo in todos]
        if len(set(live)) != len(live):
            raise StoreIOError("Malformed todo data: duplicate todo ids")
        if set(live) & set(available):
            raise StoreIOError("Malformed todo data: recycled id is still in use")

        return cls(todos, available)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _allocate(self) -> int:
        return self._ids.allocate(len(self._todos))

    def _index_of(self, todo_id: int) -> int:
        for index, todo in enumerate(self._todos):
            if todo.id == todo_id:
                return index
        raise NotFoundError(f"ID {todo_id} not found")

    def _apply(
        self, ids: Iterable[int], mutate: Callable[[int], Todo]
    ) -> list[Todo]:
        """Find each id and hand its index to ``mutate``; no rollback on failure."""
        changed: list[Todo] = []
        for todo_id in ids:
            changed.append(mutate(self._index_of(todo_id)))
        return changed
