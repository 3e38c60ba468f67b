"""Tests for the Flask JSON API."""

import pytest


def _start(client, algorithm, input, config=None):
    body = {"algorithm": algorithm, "input": input}
    if config is not None:
        body["config"] = config
    resp = client.post("/api/run", json=body)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["run_id"]


def _poll(client, run_id, limit=1000):
    """Poll the steps endpoint until the run is terminal; return every step seen."""
    steps, since = [], 0
    for _ in range(limit):
        data = client.get(f"/api/runs/{run_id}/steps?since={since}").get_json()
        steps.extend(data["steps"])
        since = data["next"]
        if data["status"] in ("completed", "cancelled", "failed"):
            return data, steps
    raise AssertionError(f"run {run_id} did not finish after {limit} polls")


class TestRegistry:
    def test_lists_algorithms(self, client):
        data = client.get("/api/algorithms").get_json()
        keys = {a["key"] for a in data["algorithms"]}
        assert {"binary_search", "bfs", "astar", "sudoku", "quick_sort", "scheduling", "stack"} <= keys
        sudoku = next(a for a in data["algorithms"] if a["key"] == "sudoku")
        assert sudoku["replay"] is True
        assert all(a["pseudocode"] for a in data["algorithms"])

    def test_filter_by_family_and_tag(self, client):
        sorting = client.get("/api/algorithms?family=sorting").get_json()["algorithms"]
        assert [a["key"] for a in sorting] == ["bubble_sort", "insertion_sort", "merge_sort", "quick_sort"]
        stable = client.get("/api/algorithms?family=sorting&tag=stable").get_json()["algorithms"]
        assert [a["key"] for a in stable] == ["bubble_sort", "insertion_sort", "merge_sort"]
        heuristic = client.get("/api/algorithms?tag=heuristic").get_json()["algorithms"]
        assert [a["key"] for a in heuristic] == ["astar"]
        assert client.get("/api/algorithms?family=games").get_json() == {"algorithms": []}


class TestRuns:
    def test_poll_to_completion(self, client):
        run_id = _start(client, "binary_search", {"values": [1, 3, 5, 7], "target": 5})
        data, steps = _poll(client, run_id)
        assert data["outcome"] == "found"
        assert [s["sequence"] for s in steps] == list(range(len(steps)))
        assert steps[-1]["is_final"] is True

        result = client.get(f"/api/runs/{run_id}/result").get_json()
        assert result == {"run_id": run_id, "outcome": "found", "result": 2}

        status = client.get(f"/api/runs/{run_id}").get_json()
        assert status["status"] == "completed"
        assert status["total_steps"] == len(steps)
        assert status["metrics"]["comparisons"] == 2

    def test_negative_outcome_is_not_an_error(self, client, weighted_graph):
        run_id = _start(client, "bfs", {"graph": weighted_graph, "source": "A", "target": "Z"})
        data, _ = _poll(client, run_id)
        assert data["status"] == "completed"
        assert data["outcome"] == "no-path"
        result = client.get(f"/api/runs/{run_id}/result").get_json()["result"]
        assert result["path"] == [] and result["cost"] is None

    def test_result_before_completion_is_409(self, client):
        run_id = _start(client, "bubble_sort", {"values": [3, 2, 1]}, {"pacing_ms": 60000})
        resp = client.get(f"/api/runs/{run_id}/result")
        assert resp.status_code == 409
        assert resp.get_json()["status"] == "running"

    def test_pacing_can_be_changed_mid_run(self, client):
        run_id = _start(client, "bubble_sort", {"values": [3, 2, 1]}, {"pacing_ms": 60000})
        client.get(f"/api/runs/{run_id}/steps")
        stalled = client.get(f"/api/runs/{run_id}/steps").get_json()
        assert stalled["next"] == 1

        resp = client.post(f"/api/runs/{run_id}/pacing", json={"pacing_ms": 0})
        assert resp.get_json()["config"]["pacing_ms"] == 0
        data, _ = _poll(client, run_id)
        assert data["outcome"] == "done"

    def test_bad_pacing(self, client):
        run_id = _start(client, "stack", {"op": "pop"})
        assert client.post(f"/api/runs/{run_id}/pacing", json={}).status_code == 400
        assert client.post(f"/api/runs/{run_id}/pacing", json={"pacing_ms": -1}).status_code == 400

    def test_cancel(self, client):
        run_id = _start(client, "n_queens", {"n": 8}, {"pacing_ms": 60000})
        client.get(f"/api/runs/{run_id}/steps")
        resp = client.post(f"/api/runs/{run_id}/cancel")
        assert resp.get_json()["status"] == "cancelled"
        after = client.get(f"/api/runs/{run_id}/steps").get_json()
        assert after["next"] == 1
        assert client.get(f"/api/runs/{run_id}/result").status_code == 409

    @pytest.mark.parametrize("body", [
        {"input": {}},
        {"algorithm": "bogo_sort", "input": {"values": [1]}},
        {"algorithm": "bubble_sort", "input": {"values": "nope"}},
        {"algorithm": "bubble_sort", "input": {"values": [1]}, "config": {"pacing_ms": -3}},
        {"algorithm": "bfs", "input": {"graph": {"nodes": []}, "source": "A", "target": "B"}},
    ])
    def test_invalid_input_is_400(self, client, body):
        resp = client.post("/api/run", json=body)
        assert resp.status_code == 400
        assert "error" in resp.get_json()

    def test_non_object_body(self, client):
        assert client.post("/api/run", json=[1, 2]).status_code == 400

    def test_unknown_run_is_404(self, client):
        for path in ("/api/runs/nope", "/api/runs/nope/steps", "/api/runs/nope/result"):
            assert client.get(path).status_code == 404
        assert client.post("/api/runs/nope/cancel").status_code == 404


class TestRace:
    def test_sorting_race(self, client):
        resp = client.post("/api/race", json={"input": {"values": [5, 2, 9, 1, 7]}, "config": {"pacing_ms": 0}})
        assert resp.status_code == 201
        ids = resp.get_json()["run_ids"]
        assert len(ids) == 4

        for _ in range(500):
            summary = client.get(f"/api/race?ids={','.join(ids)}").get_json()
            if summary["finished"]:
                break
        assert summary["finished"]
        assert sorted(e["rank"] for e in summary["entries"]) == [1, 2, 3, 4]
        winner = next(e for e in summary["entries"] if e["rank"] == 1)
        assert summary["winner"] == winner["algo_key"]
        assert winner["total_steps"] == min(e["total_steps"] for e in summary["entries"])

    def test_race_validation(self, client):
        assert client.post("/api/race", json={"algorithms": []}).status_code == 400
        assert client.post("/api/race", json={"algorithms": "bubble_sort"}).status_code == 400
        assert client.post("/api/race", json={"algorithms": [["bubble_sort"]]}).status_code == 400
        assert client.get("/api/race").status_code == 400
        assert client.get("/api/race?ids=nope").status_code == 404

    def test_rejected_race_leaves_no_runs(self, app, client):
        resp = client.post("/api/race", json={"algorithms": ["bubble_sort", "binary_search"],
                                              "input": {"values": [3, 1, 2]}})
        assert resp.status_code == 400
        assert app.extensions["runner"].runs() == []


class TestGraphEndpoints:
    def test_generate(self, client):
        data = client.post("/api/graph/generate", json={"nodes": 8, "prob": 0.2, "seed": 3}).get_json()
        assert len(data["graph"]["nodes"]) == 8
        assert data["node_ids"] == [str(i) for i in range(8)]

    @pytest.mark.parametrize("body", [{"nodes": 0}, {"nodes": 61}, {"prob": 1.5}, {"nodes": "many"}])
    def test_generate_rejects(self, client, body):
        assert client.post("/api/graph/generate", json=body).status_code == 400

    def test_import(self, client):
        data = client.post("/api/graph/import", json={"text": "A: B(2), C\nC: D"}).get_json()
        assert data["node_ids"] == ["A", "B", "C", "D"]
        assert len(data["graph"]["edges"]) == 3

    @pytest.mark.parametrize("body", [{"text": "A B"}, {"text": ["A: B"]}, {"text": "A: B(nan)"}, {"text": "A: B", "directed": "yes"}])
    def test_import_rejects(self, client, body):
        assert client.post("/api/graph/import", json=body).status_code == 400


class TestPresets:
    @pytest.mark.parametrize("kind, key", [
        ("sudoku", "puzzles"), ("words", "words"), ("jobs", "jobs"), ("graph", "graph"),
    ])
    def test_presets(self, client, kind, key):
        resp = client.get(f"/api/presets/{kind}")
        assert resp.status_code == 200
        assert resp.get_json()[key]

    def test_unknown_preset(self, client):
        resp = client.get("/api/presets/mazes")
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Not found"}
