"""Tests for the hash table under its three collision policies."""

import random

import pytest

from algorithms.hash_table import POLICIES, TOMBSTONE, HashTable, hash_key
from algorithms.step import StepKind
from engine import InvalidInput
from engine.emitter import run_silently
from conftest import execute


def _colliding_pair(size):
    """Two keys with the same home slot, in insertion order."""
    seen = {}
    for i in range(1000):
        key = f"k{i}"
        home = hash_key(key, size)
        if home in seen:
            return seen[home], key
        seen[home] = key
    raise AssertionError("no collision found")


class TestHashFunction:
    def test_known_values(self):
        assert hash_key("cat", 10) == 2
        assert hash_key("a", 10) == 7

    def test_order_dependent(self):
        assert hash_key("ab", 1000) != hash_key("ba", 1000)

    def test_in_range(self):
        for i in range(200):
            assert 0 <= hash_key(f"key-{i}", 7) < 7


class TestAgainstDict:
    @pytest.mark.parametrize("policy", POLICIES)
    def test_random_operations_match_a_dict(self, policy):
        rng = random.Random(1234)
        table = HashTable(size=8, policy=policy)
        model = {}
        keys = [f"k{i}" for i in range(6)]

        for _ in range(300):
            key = rng.choice(keys)
            op = rng.random()
            if op < 0.5:
                value = rng.randint(0, 99)
                result = run_silently(table.insert, key, value)
                if result["inserted"] or result["updated"]:
                    model[key] = value
                else:
                    # a quadratic probe sequence can miss free slots
                    assert key not in model
            elif op < 0.75:
                result = run_silently(table.delete, key)
                assert result["deleted"] == (key in model)
                model.pop(key, None)
            else:
                result = run_silently(table.search, key)
                assert result["found"] == (key in model)
                assert result["value"] == model.get(key)
            assert table.items == len(model)

        for key in keys:
            assert table.get(key) == model.get(key)


class TestChaining:
    def test_collisions_are_chained(self, runner):
        run = execute(runner, "hash_insert", {
            "size": 1, "policy": "chaining", "entries": [["a", 1], ["b", 2]], "key": "c", "value": 3,
        })
        assert run.outcome is StepKind.DONE
        assert run.counters["collisions"] == 2
        assert run.counters["items"] == 3
        assert [item["key"] for item in run.result["table"][0]] == ["a", "b", "c"]

    def test_existing_key_updates_in_place(self, runner):
        run = execute(runner, "hash_insert", {"entries": [["cat", 1]], "key": "cat", "value": 9})
        assert run.result["updated"] is True
        assert run.counters["items"] == 1
        assert any(s.kind is StepKind.UPDATE for s in run.steps)

    def test_search_compares_along_the_chain(self, runner):
        run = execute(runner, "hash_search", {"size": 1, "entries": [["a", 1], ["b", 2]], "key": "b"})
        assert run.outcome is StepKind.FOUND
        assert run.result == {"found": True, "index": 0, "value": 2}
        assert run.counters["comparisons"] == 2


class TestOpenAddressing:
    def test_linear_table_full(self, runner):
        run = execute(runner, "hash_insert", {
            "size": 2, "policy": "linear", "entries": [["a", 1], ["b", 2]], "key": "c", "value": 3,
        })
        assert run.status.value == "completed"
        assert run.outcome is StepKind.NO_SOLUTION
        assert run.result["inserted"] is False

    def test_linear_probe_moves_to_next_slot(self, runner):
        first, second = _colliding_pair(10)
        home = hash_key(first, 10)
        run = execute(runner, "hash_insert", {
            "policy": "linear", "entries": [[first, 1]], "key": second, "value": 2,
        })
        assert run.result["index"] == (home + 1) % 10
        assert run.counters["collisions"] == 1
        assert [s.kind for s in run.steps if s.kind in (StepKind.PROBE, StepKind.COLLISION)] == [
            StepKind.PROBE, StepKind.COLLISION, StepKind.PROBE,
        ]

    def test_quadratic_offsets(self):
        table = HashTable(size=10, policy="quadratic")
        assert [slot for _, slot in table.probe_sequence(3)][:4] == [3, 4, 7, 2]

    def test_quadratic_can_report_full_with_free_slots(self):
        table = HashTable(size=8, policy="quadratic")
        reachable = {slot for _, slot in table.probe_sequence(0)}
        assert len(reachable) < 8


class TestDeletion:
    def test_tombstone_keeps_probe_chain(self):
        first, second = _colliding_pair(10)
        table = HashTable(size=10, policy="linear")
        run_silently(table.insert, first, 1)
        run_silently(table.insert, second, 2)

        assert run_silently(table.delete, first)["deleted"]
        assert table.slots[hash_key(first, 10)] is TOMBSTONE
        assert table.get(second) == 2

    def test_scan_deletion_cuts_probe_chain(self):
        first, second = _colliding_pair(10)
        table = HashTable(size=10, policy="linear", deletion="scan")
        run_silently(table.insert, first, 1)
        run_silently(table.insert, second, 2)

        assert run_silently(table.delete, first)["deleted"]
        assert table.get(second) is None

    def test_tombstone_slot_is_reused(self):
        first, second = _colliding_pair(10)
        table = HashTable(size=10, policy="linear")
        run_silently(table.insert, first, 1)
        run_silently(table.insert, second, 2)
        run_silently(table.delete, first)

        result = run_silently(table.insert, first, 5)
        assert result["index"] == hash_key(first, 10)
        assert table.items == 2

    def test_delete_missing_key(self, runner):
        run = execute(runner, "hash_delete", {"entries": [["a", 1]], "key": "zzz"})
        assert run.outcome is StepKind.NOT_FOUND
        assert run.result["deleted"] is False


class TestInput:
    @pytest.mark.parametrize("data", [
        {"key": "a", "value": 1, "size": 0},
        {"key": "a", "value": 1, "size": 65},
        {"key": "a", "value": 1, "policy": "cuckoo"},
        {"key": "", "value": 1},
        {"key": "a", "value": ""},
        {"key": "a", "value": 1, "entries": [["only-key"]]},
    ])
    def test_rejected(self, runner, data):
        with pytest.raises(InvalidInput):
            runner.start("hash_insert", data)
