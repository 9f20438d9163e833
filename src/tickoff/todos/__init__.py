"""Todo subsystem public API.

Public API:
- TodoStore: ordered todos with id recycling
- load_store / save_store: store file persistence

Types:
- Todo, SortKey
"""

from tickoff.todos.ids import IdAllocator
from tickoff.todos.persistence import load_store, save_store
from tickoff.todos.store import TodoStore
from tickoff.todos.types import SortKey, Todo

__all__ = [
    "IdAllocator",
    "SortKey",
    "Todo",
    "TodoStore",
    "load_store",
    "save_store",
]
