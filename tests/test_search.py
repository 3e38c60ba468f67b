"""Tests for binary search, the binary search tree and the trie."""

import math

import pytest

from algorithms.bst import build_tree, is_bst
from algorithms.step import StepKind
from algorithms.trie import SAMPLE_WORDS
from engine import InvalidInput
from conftest import execute, kinds


TREE_VALUES = [50, 30, 70, 20, 40, 60, 80]


def _inorder(tree):
    if tree is None:
        return []
    return _inorder(tree["left"]) + [tree["value"]] + _inorder(tree["right"])


class TestBinarySearch:
    @pytest.mark.parametrize("n", range(0, 33))
    def test_comparisons_are_logarithmic(self, runner, n):
        values = list(range(0, 2 * n, 2))
        bound = math.ceil(math.log2(n + 1))
        for target in values + [-1, 2 * n + 1, 3]:
            run = execute(runner, "binary_search", {"values": values, "target": target})
            assert run.counters.get("comparisons", 0) <= bound
            expected = values.index(target) if target in values else -1
            assert run.result == expected

    def test_found_and_not_found_outcomes(self, runner):
        hit = execute(runner, "binary_search", {"values": [1, 3, 5, 7, 9], "target": 7})
        assert hit.outcome is StepKind.FOUND
        assert hit.steps[-1].payload["index"] == 3
        miss = execute(runner, "binary_search", {"values": [1, 3, 5, 7, 9], "target": 4})
        assert miss.outcome is StepKind.NOT_FOUND
        assert miss.result == -1

    def test_empty_list(self, runner):
        run = execute(runner, "binary_search", {"values": [], "target": 1})
        assert kinds(run) == ["start", "not-found"]

    def test_compare_then_eliminate(self, runner):
        run = execute(runner, "binary_search", {"values": [1, 3, 5, 7, 9], "target": 9})
        assert kinds(run) == ["start", "compare", "highlight", "compare", "highlight", "compare", "found"]
        assert run.steps[2].payload["eliminated"] == [0, 2]

    def test_bad_values(self, runner):
        with pytest.raises(InvalidInput):
            runner.start("binary_search", {"values": [1, "two"], "target": 1})
        with pytest.raises(InvalidInput):
            runner.start("binary_search", {"values": [1, 2]})


class TestBST:
    def test_insert_keeps_ordering(self, runner):
        run = execute(runner, "bst_insert", {"values": TREE_VALUES, "value": 45})
        assert run.outcome is StepKind.DONE
        assert _inorder(run.result) == sorted(TREE_VALUES + [45])
        insert = [s for s in run.steps if s.kind is StepKind.INSERT][0]
        assert insert.payload["parent"] == 40
        assert insert.payload["side"] == "right"

    def test_insert_into_empty_tree(self, runner):
        run = execute(runner, "bst_insert", {"value": 5})
        assert run.result == {"value": 5, "left": None, "right": None}

    def test_duplicate_insert_is_ignored(self, runner):
        run = execute(runner, "bst_insert", {"values": TREE_VALUES, "value": 40})
        assert run.outcome is StepKind.FOUND
        assert _inorder(run.result) == sorted(TREE_VALUES)

    def test_search_path(self, runner):
        run = execute(runner, "bst_search", {"values": TREE_VALUES, "value": 60})
        assert run.outcome is StepKind.FOUND
        assert run.steps[-1].payload["path"] == [50, 70, 60]
        assert run.counters["comparisons"] == 3

    def test_search_missing(self, runner):
        run = execute(runner, "bst_search", {"values": TREE_VALUES, "value": 65})
        assert run.outcome is StepKind.NOT_FOUND
        assert run.result is False

    @pytest.mark.parametrize("order, expected", [
        ("inorder",   [20, 30, 40, 50, 60, 70, 80]),
        ("preorder",  [50, 30, 20, 40, 70, 60, 80]),
        ("postorder", [20, 40, 30, 60, 80, 70, 50]),
    ])
    def test_traversals(self, runner, order, expected):
        run = execute(runner, "bst_traverse", {"values": TREE_VALUES, "order": order})
        assert run.result == expected
        assert [s.payload["node"] for s in run.steps if s.kind is StepKind.VISIT] == expected

    def test_traverse_empty_tree(self, runner):
        run = execute(runner, "bst_traverse", {"values": []})
        assert run.result == []
        assert run.outcome is StepKind.DONE

    def test_delete_node_with_two_children(self, runner):
        run = execute(runner, "bst_delete", {"values": TREE_VALUES, "value": 50})
        assert run.outcome is StepKind.DONE
        assert run.result["value"] == 60
        assert _inorder(run.result) == [20, 30, 40, 60, 70, 80]
        assert kinds(run) == ["start", "compare", "highlight", "update", "compare", "compare", "delete", "done"]

    def test_delete_leaf_and_single_child(self, runner):
        leaf = execute(runner, "bst_delete", {"values": TREE_VALUES, "value": 20})
        assert _inorder(leaf.result) == [30, 40, 50, 60, 70, 80]
        single = execute(runner, "bst_delete", {"values": [50, 30, 20], "value": 30})
        assert single.result["left"]["value"] == 20
        assert [s.payload["replacement"] for s in single.steps if s.kind is StepKind.DELETE] == [20]

    def test_delete_missing(self, runner):
        run = execute(runner, "bst_delete", {"values": TREE_VALUES, "value": 99})
        assert run.outcome is StepKind.NOT_FOUND
        assert _inorder(run.result) == sorted(TREE_VALUES)

    def test_tree_input_is_validated(self, runner):
        bad = {"value": 5, "left": {"value": 9, "left": None, "right": None}, "right": None}
        with pytest.raises(InvalidInput):
            runner.start("bst_search", {"tree": bad, "value": 5})
        with pytest.raises(InvalidInput):
            runner.start("bst_search", {"tree": {"left": None}, "value": 5})

    def test_tree_input_accepted(self, runner):
        tree = build_tree(TREE_VALUES).to_dict()
        run = execute(runner, "bst_search", {"tree": tree, "value": 80})
        assert run.outcome is StepKind.FOUND

    def test_too_many_values(self, runner):
        with pytest.raises(InvalidInput):
            runner.start("bst_insert", {"values": list(range(101)), "value": 1})

    def test_build_tree_drops_duplicates(self):
        root = build_tree([5, 3, 5, 8, 3])
        assert is_bst(root)
        assert _inorder(root.to_dict()) == [3, 5, 8]


class TestTrie:
    def test_prefix_suggestions(self, runner):
        run = execute(runner, "trie_search", {"words": SAMPLE_WORDS, "prefix": "app"})
        assert run.outcome is StepKind.FOUND
        assert run.result == ["apple", "application", "apply", "appreciate", "approach"]
        assert run.counters["words_found"] == 5

    def test_prefix_is_normalised(self, runner):
        run = execute(runner, "trie_search", {"words": SAMPLE_WORDS, "prefix": "  BAN "})
        assert run.result == ["banana", "band", "bandana", "bank", "banner"]

    def test_missing_prefix(self, runner):
        run = execute(runner, "trie_search", {"words": SAMPLE_WORDS, "prefix": "zeb"})
        assert run.outcome is StepKind.NOT_FOUND
        assert run.steps[-1].payload["missing"] == "z"
        assert run.result == []

    def test_empty_prefix(self, runner):
        run = execute(runner, "trie_search", {"words": SAMPLE_WORDS, "prefix": ""})
        assert run.outcome is StepKind.NOT_FOUND
        assert run.result == []

    def test_suggestions_are_capped(self, runner):
        words = [f"w{i:02d}" for i in range(15)]
        run = execute(runner, "trie_search", {"words": words, "prefix": "w"})
        assert run.result == sorted(words)[:10]

    def test_insert_creates_only_missing_nodes(self, runner):
        run = execute(runner, "trie_insert", {"words": ["car"], "word": "card"})
        assert run.outcome is StepKind.DONE
        assert run.counters["nodes_created"] == 1
        assert [s.kind.value for s in run.steps[1:-1]] == ["visit", "visit", "visit", "insert"]
        assert run.result == {"inserted": True, "words": ["car", "card"]}

    def test_insert_existing_word(self, runner):
        run = execute(runner, "trie_insert", {"words": ["Car"], "word": "car"})
        assert run.outcome is StepKind.FOUND
        assert run.result["inserted"] is False

    def test_empty_word_rejected(self, runner):
        with pytest.raises(InvalidInput):
            runner.start("trie_insert", {"word": "   "})
