"""Tests for the graph model: construction, adjacency, serialisation, generators."""

import pytest

from graph import Edge, Graph, Node


def _reachable(g: Graph, start: str) -> set:
    seen, stack = {start}, [start]
    while stack:
        for nbr, _ in g.neighbours(stack.pop()):
            if nbr not in seen:
                seen.add(nbr)
                stack.append(nbr)
    return seen


class TestConstruction:
    def test_undirected_adjacency_is_symmetric(self, weighted_graph):
        g = Graph.from_dict(weighted_graph)
        assert g.is_symmetric()
        assert [n for n, _ in g.neighbours("B")] == ["A", "D", "E"]
        assert [n for n, _ in g.neighbours("A")] == ["B", "C"]

    def test_directed_edges_go_one_way(self):
        g = Graph(directed=True)
        g.create_node(0, 0, node_id="A")
        g.create_node(1, 0, node_id="B")
        g.create_edge("A", "B", weight=2)
        assert [n for n, _ in g.neighbours("A")] == ["B"]
        assert g.neighbours("B") == []
        assert g.get_edge_between("B", "A") is None

    def test_negative_weight_rejected(self):
        with pytest.raises(ValueError):
            Edge("A", "B", weight=-1)

    def test_non_numeric_weight_rejected(self):
        with pytest.raises(ValueError):
            Edge("A", "B", weight="heavy")
        with pytest.raises(ValueError):
            Edge("A", "B", weight=True)

    @pytest.mark.parametrize("weight", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_weight_rejected(self, weight):
        with pytest.raises(ValueError):
            Edge("A", "B", weight=weight)

    def test_edge_to_unknown_node_rejected(self):
        g = Graph()
        g.create_node(0, 0, node_id="A")
        with pytest.raises(ValueError):
            g.create_edge("A", "Q")

    def test_duplicate_node_rejected(self):
        g = Graph()
        g.create_node(0, 0, node_id="A")
        with pytest.raises(ValueError):
            g.create_node(1, 1, node_id="A")

    def test_self_loop_listed_once(self):
        g = Graph()
        g.create_node(0, 0, node_id="A")
        g.create_edge("A", "A")
        assert len(g.neighbours("A")) == 1


class TestSerialisation:
    def test_round_trip(self, weighted_graph):
        g = Graph.from_dict(weighted_graph)
        again = Graph.from_dict(g.to_dict())
        assert again.node_ids() == g.node_ids()
        assert again.edge_count() == g.edge_count() == 7
        assert again.get_edge_between("E", "F").weight == 3

    def test_node_ids_are_strings(self):
        g = Graph.from_dict({"nodes": [{"id": 1}, {"id": 2}], "edges": [{"source": 1, "target": 2}]})
        assert g.node_ids() == ["1", "2"]
        assert g.get_edge_between("2", "1") is not None

    def test_malformed_input(self):
        with pytest.raises(ValueError):
            Graph.from_dict({"nodes": "A,B"})
        with pytest.raises(ValueError):
            Graph.from_dict({"nodes": [{"x": 1}]})
        with pytest.raises(ValueError):
            Graph.from_dict({"nodes": [{"id": "A", "x": "left"}]})
        with pytest.raises(ValueError):
            Graph.from_dict({"nodes": [{"id": "A"}], "edges": [{"source": "A"}]})

    def test_node_distance(self):
        assert Node(0, 0).distance_to(Node(3, 4)) == 5.0


class TestGenerators:
    def test_random_graph_is_connected_and_seeded(self):
        a = Graph.generate_random(num_nodes=12, edge_probability=0.1, seed=7)
        b = Graph.generate_random(num_nodes=12, edge_probability=0.1, seed=7)
        assert a.node_count() == 12
        assert _reachable(a, "0") == set(a.node_ids())
        assert [(e.source, e.target, e.weight) for e in a.edges.values()] == \
               [(e.source, e.target, e.weight) for e in b.edges.values()]

    def test_adjacency_list_with_weights(self):
        g = Graph.from_adjacency_list("A: B(3) C\nB -> C, D(2)\n# comment\n")
        assert g.node_ids() == ["A", "B", "C", "D"]
        assert g.get_edge_between("A", "B").weight == 3.0
        assert g.get_edge_between("C", "A").weight == 1.0
        assert g.get_edge_between("D", "B").weight == 2.0

    def test_adjacency_list_deduplicates_undirected_edges(self):
        g = Graph.from_adjacency_list("A: B\nB: A")
        assert g.edge_count() == 1

    def test_adjacency_list_rejects_garbage(self):
        with pytest.raises(ValueError):
            Graph.from_adjacency_list("A B C")

    def test_adjacency_list_rejects_nan_weight(self):
        with pytest.raises(ValueError):
            Graph.from_adjacency_list("A: B(nan)")
