"""Tests for identifier allocation."""

from tickoff.todos.ids import IdAllocator


class TestIdAllocator:
    def test_sequential_when_nothing_recycled(self):
        ids = IdAllocator()
        assert ids.allocate(0) == 1
        assert ids.allocate(1) == 2
        assert ids.allocate(7) == 8

    def test_reuses_smallest_recycled_first(self):
        ids = IdAllocator()
        for todo_id in (5, 2, 9):
            ids.recycle(todo_id)

        assert ids.allocate(10) == 2
        assert ids.allocate(10) == 5
        assert ids.allocate(10) == 9
        assert ids.allocate(10) == 11

    def test_recycle_ignores_duplicates(self):
        ids = IdAllocator()
        ids.recycle(3)
        ids.recycle(3)

        assert len(ids) == 1
        assert ids.allocate(4) == 3
        assert ids.allocate(4) == 5

    def test_initial_available_is_sorted(self):
        ids = IdAllocator([4, 1, 3])
        assert ids.available() == [1, 3, 4]
        assert ids.allocate(2) == 1

    def test_clear(self):
        ids = IdAllocator([1, 2])
        ids.clear()
        assert len(ids) == 0
        assert ids.allocate(0) == 1

    def test_equality_ignores_insertion_order(self):
        assert IdAllocator([2, 1]) == IdAllocator([1, 2])
        assert IdAllocator([1]) != IdAllocator([2])
