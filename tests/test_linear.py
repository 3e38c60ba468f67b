"""Tests for the stack, queue and linked-list operations."""

import pytest

from algorithms.step import StepKind
from engine import InvalidInput
from conftest import execute, kinds


class TestStack:
    def test_push(self, runner):
        run = execute(runner, "stack", {"items": [1, 2], "op": "push", "value": 3})
        assert run.result == {"items": [1, 2, 3], "value": 3}
        assert kinds(run) == ["start", "insert", "done"]

    def test_pop_is_lifo(self, runner):
        run = execute(runner, "stack", {"items": [1, 2, 3], "op": "pop"})
        assert run.result == {"items": [1, 2], "value": 3}

    def test_peek_leaves_items(self, runner):
        run = execute(runner, "stack", {"items": [1, 2, 3], "op": "peek"})
        assert run.outcome is StepKind.FOUND
        assert run.result["items"] == [1, 2, 3]

    @pytest.mark.parametrize("op", ["pop", "peek"])
    def test_empty_stack_is_negative_completion(self, runner, op):
        run = execute(runner, "stack", {"items": [], "op": op})
        assert run.status.value == "completed"
        assert run.outcome is StepKind.NOT_FOUND
        assert run.result["value"] is None


class TestQueue:
    def test_enqueue_at_back(self, runner):
        run = execute(runner, "queue", {"items": [1], "op": "enqueue", "value": 2})
        assert run.result["items"] == [1, 2]

    def test_dequeue_is_fifo(self, runner):
        run = execute(runner, "queue", {"items": [1, 2, 3], "op": "dequeue"})
        assert run.result == {"items": [2, 3], "value": 1}

    def test_front(self, runner):
        run = execute(runner, "queue", {"items": [4, 5], "op": "front"})
        assert run.steps[-1].payload["value"] == 4

    def test_dequeue_empty(self, runner):
        run = execute(runner, "queue", {"op": "dequeue"})
        assert run.outcome is StepKind.NOT_FOUND


class TestLinkedList:
    def test_insert_walks_to_position(self, runner):
        run = execute(runner, "linked_list", {"items": [1, 2, 3], "op": "insert", "value": 9, "position": 2})
        assert run.result == {"items": [1, 2, 9, 3], "index": 2}
        assert kinds(run) == ["start", "visit", "visit", "insert", "done"]

    def test_insert_at_end(self, runner):
        run = execute(runner, "linked_list", {"items": [1, 2], "op": "insert", "value": 3, "position": 2})
        assert run.result["items"] == [1, 2, 3]

    def test_delete(self, runner):
        run = execute(runner, "linked_list", {"items": [1, 2, 3], "op": "delete", "position": 0})
        assert run.result == {"items": [2, 3], "index": 0, "value": 1}

    def test_search(self, runner):
        hit = execute(runner, "linked_list", {"items": [5, 6, 7], "op": "search", "value": 7})
        assert hit.result["index"] == 2
        assert hit.counters["comparisons"] == 3
        miss = execute(runner, "linked_list", {"items": [5, 6, 7], "op": "search", "value": 8})
        assert miss.outcome is StepKind.NOT_FOUND
        assert miss.result["index"] == -1

    @pytest.mark.parametrize("data", [
        {"items": [1, 2], "op": "insert", "value": 3, "position": 3},
        {"items": [1, 2], "op": "delete", "position": 2},
        {"items": [], "op": "delete", "position": 0},
        {"items": [1], "op": "insert", "position": 0},
        {"items": [1], "op": "reverse"},
    ])
    def test_rejected(self, runner, data):
        with pytest.raises(InvalidInput):
            runner.start("linked_list", data)
