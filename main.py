"""
main.py — DSA Universe Flask App
=================================
The JSON API in front of the algorithm engine.  A renderer polls it for
steps; nothing here draws anything.

Routes:
  GET  /api/algorithms?family=&tag= – registry listing, optionally filtered
  POST /api/run                      – start a Run
  GET  /api/runs/<id>                – Run status
  GET  /api/runs/<id>/steps?since=N  – tick the runner, steps from N on
  POST /api/runs/<id>/cancel         – cancel a Run
  POST /api/runs/<id>/pacing         – change a Run's pacing
  GET  /api/runs/<id>/result         – result (409 until completed)
  POST /api/race                     – start one Run per algorithm
  GET  /api/race?ids=a,b,c           – race summary
  POST /api/graph/generate           – random graph
  POST /api/graph/import             – adjacency-list text → graph
  GET  /api/presets/<kind>           – sample inputs

State management:
  One AlgorithmRunner per app, held in `app.extensions`.  Runs advance
  only when a client polls (`steps` ticks the runner), so no background
  thread is needed.

Settings (environment, prefix DSA_):
  DSA_DEFAULT_PACING_MS   pacing used when a request sends no config
  DSA_MAX_RUNS            how many Runs the runner remembers
"""

import logging
from typing import Optional

from flask import Flask, abort, current_app, jsonify, request

from algorithms.inputs import as_bool, as_int, as_number, in_range
from algorithms.registry import SORTING_KEYS, algorithms_by_family, algorithms_by_tag, list_algorithms
from algorithms.scheduling import SAMPLE_JOBS
from algorithms.sudoku import PUZZLES
from algorithms.trie import SAMPLE_WORDS
from engine import AlgorithmRunner, InvalidInput, NotReady, Run, race_summary
from engine.config import DEFAULT_PACING_MS
from graph import Graph

logger = logging.getLogger(__name__)

DEFAULT_MAX_RUNS = 500
MAX_GRAPH_NODES  = 60


class RunNotFound(Exception):
    def __init__(self, run_id: str):
        super().__init__(f"Unknown run: {run_id}")
        self.run_id = run_id


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(runner: Optional[AlgorithmRunner] = None, config: Optional[dict] = None) -> Flask:
    app = Flask(__name__)
    app.config["DEFAULT_PACING_MS"] = DEFAULT_PACING_MS
    app.config["MAX_RUNS"] = DEFAULT_MAX_RUNS
    app.config.from_prefixed_env("DSA")
    if config:
        app.config.update(config)

    if runner is None:
        runner = AlgorithmRunner(
            default_pacing_ms=app.config["DEFAULT_PACING_MS"],
            max_runs=app.config["MAX_RUNS"],
        )
    app.extensions["runner"] = runner

    _register_errors(app)
    _register_routes(app)
    return app


def get_runner() -> AlgorithmRunner:
    return current_app.extensions["runner"]


def _find(run_id: str) -> Run:
    run = get_runner().get(run_id)
    if run is None:
        raise RunNotFound(run_id)
    return run


def _body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidInput("Request body must be a JSON object")
    return data


# ---------------------------------------------------------------------------
# Errors → JSON
# ---------------------------------------------------------------------------
def _register_errors(app: Flask) -> None:

    @app.errorhandler(InvalidInput)
    def invalid_input(exc):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(NotReady)
    def not_ready(exc):
        return jsonify({"error": str(exc), "status": exc.status}), 409

    @app.errorhandler(RunNotFound)
    def run_not_found(exc):
        return jsonify({"error": str(exc)}), 404

    @app.errorhandler(404)
    def not_found(exc):
        return jsonify({"error": "Not found"}), 404


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
def _register_routes(app: Flask) -> None:

    # --------------------------- registry ---------------------------
    @app.route("/api/algorithms")
    def api_algorithms():
        family = request.args.get("family")
        tag    = request.args.get("tag")
        infos  = algorithms_by_family(family) if family else list_algorithms()
        if tag:
            tagged = {info.key for info in algorithms_by_tag(tag)}
            infos  = [info for info in infos if info.key in tagged]
        return jsonify({"algorithms": [info.to_dict() for info in infos]})

    # ----------------------------- runs -----------------------------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        data = _body()
        algo_key = data.get("algorithm")
        if not isinstance(algo_key, str):
            raise InvalidInput("algorithm is required")
        run = get_runner().start(algo_key, data.get("input", {}), data.get("config"))
        return jsonify({"run_id": run.id, "status": run.status.value}), 201

    @app.route("/api/runs/<run_id>")
    def api_run_status(run_id):
        return jsonify(_find(run_id).to_dict())

    @app.route("/api/runs/<run_id>/steps")
    def api_run_steps(run_id):
        run = _find(run_id)
        since = request.args.get("since", 0, type=int)
        get_runner().tick()
        return jsonify({
            "run_id":  run.id,
            "status":  run.status.value,
            "outcome": run.outcome.value if run.outcome else None,
            "steps":   [s.to_dict() for s in run.steps_since(since)],
            "next":    len(run.steps),
        })

    @app.route("/api/runs/<run_id>/cancel", methods=["POST"])
    def api_run_cancel(run_id):
        run = get_runner().cancel(_find(run_id))
        return jsonify(run.to_dict())

    @app.route("/api/runs/<run_id>/pacing", methods=["POST"])
    def api_run_pacing(run_id):
        data = _body()
        if "pacing_ms" not in data:
            raise InvalidInput("pacing_ms is required")
        run = get_runner().configure(_find(run_id), data["pacing_ms"])
        return jsonify(run.to_dict())

    @app.route("/api/runs/<run_id>/result")
    def api_run_result(run_id):
        run = _find(run_id)
        result = get_runner().result(run)
        return jsonify({"run_id": run.id, "outcome": run.outcome.value, "result": result})

    # ----------------------------- race -----------------------------
    @app.route("/api/race", methods=["POST"])
    def api_race_start():
        data = _body()
        keys = data.get("algorithms", SORTING_KEYS)
        if not isinstance(keys, list):
            raise InvalidInput("algorithms must be a list of keys")
        runs = get_runner().race(keys, data.get("input", {}), data.get("config"))
        return jsonify({"run_ids": [r.id for r in runs]}), 201

    @app.route("/api/race")
    def api_race_summary():
        ids = [i for i in request.args.get("ids", "").split(",") if i]
        if not ids:
            raise InvalidInput("ids is required")
        runs = [_find(run_id) for run_id in ids]
        get_runner().tick(runs=runs)
        return jsonify(race_summary(runs).to_dict())

    # ----------------------------- graph ----------------------------
    @app.route("/api/graph/generate", methods=["POST"])
    def api_graph_generate():
        data = _body()
        prob = as_number(data.get("prob", 0.3), "prob")
        if not 0 <= prob <= 1:
            raise InvalidInput("prob must be between 0 and 1")
        seed = data.get("seed")
        g = Graph.generate_random(
            num_nodes=in_range(as_int(data.get("nodes", 10), "nodes"), 1, MAX_GRAPH_NODES, "nodes"),
            edge_probability=prob,
            directed=as_bool(data.get("directed", False), "directed"),
            seed=None if seed is None else as_int(seed, "seed"),
        )
        return jsonify({"graph": g.to_dict(), "node_ids": g.node_ids()})

    @app.route("/api/graph/import", methods=["POST"])
    def api_graph_import():
        data = _body()
        text = data.get("text", "")
        if not isinstance(text, str):
            raise InvalidInput("text must be a string")
        try:
            g = Graph.from_adjacency_list(text, directed=as_bool(data.get("directed", False), "directed"))
        except ValueError as e:
            raise InvalidInput(str(e)) from e
        return jsonify({"graph": g.to_dict(), "node_ids": g.node_ids()})

    # ---------------------------- presets ---------------------------
    @app.route("/api/presets/<kind>")
    def api_presets(kind):
        if kind == "sudoku":
            return jsonify({"puzzles": PUZZLES})
        if kind == "words":
            return jsonify({"words": SAMPLE_WORDS})
        if kind == "jobs":
            return jsonify({"jobs": SAMPLE_JOBS})
        if kind == "graph":
            return jsonify({"graph": Graph.generate_random(seed=42).to_dict()})
        abort(404)


app = create_app()


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("DSA Universe API on http://localhost:5000")
    app.run(debug=True, port=5000)
