"""
main.py — Shortest-Path Stepper Flask App
==========================================
JSON adapter between the shortest-path engines and a browser UI.  The UI
owns rendering and pointer editing; this app owns the graph, the runs and
the step cursor.

Routes:
  GET    /api/algorithms          – registry cards
  GET    /api/graph               – current graph
  PUT    /api/graph               – replace nodes + edges
  POST   /api/graph/nodes         – add a node (auto-named if no name)
  PATCH  /api/graph/nodes/<name>  – move / recolour a node
  DELETE /api/graph/nodes/<name>  – remove a node and its edges
  POST   /api/graph/edges         – add an edge
  PATCH  /api/graph/edges         – re-weight an edge
  DELETE /api/graph/edges         – remove an edge (both directions)
  POST   /api/graph/directed      – switch directed / undirected
  POST   /api/graph/clear         – empty the graph
  POST   /api/run                 – start a run {algo, source?, mode?}
  POST   /api/step/next           – advance one step
  POST   /api/reset               – drop the current run
  GET    /api/state               – graph + current run view
  GET    /api/compare             – run every all-pairs engine and diff them

State management:
  The Flask session holds the serialised graph and the run parameters
  (algo, source, mode, applied step count).  Steps are never stored: the
  engines are deterministic, so each request recomputes them from the
  graph snapshot and moves the cursor back to where it was.  Any graph
  edit drops the run.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request, session

from config import DEFAULT_CONFIG, ENV_PREFIX
from graph import Graph
from algorithms import UnknownAlgorithmError, list_algorithms, require_algorithm
from engine import MODES, AllPairsRun, DijkstraRun, FloydWarshallRun, compare_all_pairs

logger = logging.getLogger(__name__)


def parse_weight(value: Any) -> int:
    """Integer weight from JSON.  Booleans and fractional numbers are rejected."""
    if isinstance(value, bool):
        raise TypeError("weight must be an integer, not a boolean")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"weight must be a whole number, got {value}")
    return int(value)


def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_mapping(DEFAULT_CONFIG)
    app.config.from_prefixed_env(ENV_PREFIX)
    if config:
        app.config.from_mapping(config)

    # -----------------------------------------------------------------------
    # Session State Helpers
    # -----------------------------------------------------------------------
    def get_graph() -> Graph:
        if "graph" not in session:
            session["graph"] = Graph(directed=app.config["DIRECTED"]).to_dict()
        return Graph.from_dict(session["graph"])

    def save_graph(graph: Graph, keep_run: bool = False) -> None:
        session["graph"] = graph.to_dict()
        if not keep_run:
            session.pop("run", None)

    def body() -> Dict[str, Any]:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    def error(message: str, status: int = 400):
        logger.warning("rejected %s %s: %s", request.method, request.path, message)
        return jsonify({"error": message}), status

    def graph_payload(graph: Graph) -> Dict[str, Any]:
        payload = graph.to_dict()
        payload["node_ids"] = graph.node_ids()
        return payload

    def restore_run(graph: Graph) -> Tuple[Optional[Dict[str, Any]], Any]:
        """Rebuild the session's run and put its cursor back in place."""
        params = session.get("run")
        if not params:
            return None, None
        algo, mode = params["algo"], params["mode"]
        if algo == "dijkstra":
            run = DijkstraRun(graph)
            run.run(params["source"], mode)
        elif algo == "floyd_warshall":
            run = FloydWarshallRun(graph)
            run.run(mode)
        else:
            run = AllPairsRun(graph, algo)
            run.run()
            return params, run
        applied = params.get("applied", 0)
        if mode == "step" and applied > run.current_step_index:
            run.stepper.seek(applied)
        return params, run

    def run_view(params: Optional[Dict[str, Any]], run: Any) -> Optional[Dict[str, Any]]:
        if run is None:
            return None
        if isinstance(run, AllPairsRun):
            view = {"result": run.result.to_dict() if run.result else None}
        else:
            view = run.view()
        view["algo"] = params["algo"]
        if params["mode"] == "complete":
            view["delay_ms"] = app.config["COMPLETE_DELAY_MS"]
        return view

    # -----------------------------------------------------------------------
    # Error handlers
    # -----------------------------------------------------------------------
    @app.errorhandler(UnknownAlgorithmError)
    def handle_unknown_algorithm(exc):
        return error(str(exc))

    # -----------------------------------------------------------------------
    # API: Registry
    # -----------------------------------------------------------------------
    @app.route("/api/algorithms")
    def api_algorithms():
        return jsonify({"algorithms": [a.to_dict() for a in list_algorithms()]})

    # -----------------------------------------------------------------------
    # API: Graph
    # -----------------------------------------------------------------------
    @app.route("/api/graph", methods=["GET"])
    def api_graph_get():
        return jsonify(graph_payload(get_graph()))

    @app.route("/api/graph", methods=["PUT"])
    def api_graph_replace():
        data = body()
        try:
            graph = Graph.from_dict({
                "directed": data.get("directed", app.config["DIRECTED"]),
                "nodes":    [n if isinstance(n, dict) else {"name": n} for n in data.get("nodes", [])],
                "edges":    data.get("edges", []),
            })
        except (KeyError, TypeError, ValueError) as exc:
            return error(f"Malformed graph: {exc}")
        save_graph(graph)
        return jsonify(graph_payload(graph))

    @app.route("/api/graph/nodes", methods=["POST"])
    def api_node_add():
        data = body()
        graph = get_graph()
        name = data.get("name")
        if name is not None and (not isinstance(name, str) or not name.strip()):
            return error("'name' must be a non-empty string")
        if name is not None and name in graph.nodes:
            return error(f"Node '{name}' already exists")
        node = graph.add_node(x=data.get("x", 0.0), y=data.get("y", 0.0), name=name, color=data.get("color"))
        save_graph(graph)
        return jsonify({"node": node.to_dict(), "graph": graph_payload(graph)})

    @app.route("/api/graph/nodes/<name>", methods=["PATCH"])
    def api_node_update(name):
        graph = get_graph()
        changes = {k: v for k, v in body().items() if k in ("x", "y", "color")}
        node = graph.update_node(name, **changes)
        if node is None:
            return error(f"Unknown node '{name}'", 404)
        # layout only, the run stays valid
        save_graph(graph, keep_run=True)
        return jsonify({"node": node.to_dict()})

    @app.route("/api/graph/nodes/<name>", methods=["DELETE"])
    def api_node_delete(name):
        graph = get_graph()
        if name not in graph.nodes:
            return error(f"Unknown node '{name}'", 404)
        graph.remove_node(name)
        save_graph(graph)
        return jsonify(graph_payload(graph))

    def edge_args(require_weight: bool):
        data = body()
        source, target = data.get("from"), data.get("to")
        if not source or not target:
            return None, error("Both 'from' and 'to' are required")
        weight = None
        if require_weight:
            try:
                weight = parse_weight(data.get("weight"))
            except (TypeError, ValueError):
                return None, error("'weight' must be an integer")
        return (source, target, weight, data.get("directed")), None

    @app.route("/api/graph/edges", methods=["POST"])
    def api_edge_add():
        args, err = edge_args(require_weight=True)
        if err:
            return err
        source, target, weight, directed = args
        graph = get_graph()
        for name in (source, target):
            if name not in graph.nodes:
                return error(f"Unknown node '{name}'", 404)
        graph.add_edge(source, target, weight, directed=directed)
        save_graph(graph)
        return jsonify(graph_payload(graph))

    @app.route("/api/graph/edges", methods=["PATCH"])
    def api_edge_update():
        args, err = edge_args(require_weight=True)
        if err:
            return err
        source, target, weight, _ = args
        graph = get_graph()
        if not graph.update_edge(source, target, weight):
            return error(f"No edge {source} → {target}", 404)
        save_graph(graph)
        return jsonify(graph_payload(graph))

    @app.route("/api/graph/edges", methods=["DELETE"])
    def api_edge_delete():
        args, err = edge_args(require_weight=False)
        if err:
            return err
        source, target, _, _ = args
        graph = get_graph()
        removed = graph.remove_edge(source, target)
        save_graph(graph)
        payload = graph_payload(graph)
        payload["removed"] = removed
        return jsonify(payload)

    @app.route("/api/graph/directed", methods=["POST"])
    def api_graph_directed():
        graph = get_graph()
        graph.set_directed(bool(body().get("directed", True)))
        save_graph(graph)
        return jsonify(graph_payload(graph))

    @app.route("/api/graph/clear", methods=["POST"])
    def api_graph_clear():
        graph = get_graph()
        graph.clear()
        save_graph(graph)
        return jsonify(graph_payload(graph))

    # -----------------------------------------------------------------------
    # API: Runs
    # -----------------------------------------------------------------------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        data = body()
        algo = data.get("algo", "dijkstra")
        mode = data.get("mode", "complete")
        info = require_algorithm(algo)
        if mode not in MODES:
            return error(f"mode must be one of {list(MODES)}")
        if not info.stepwise:
            mode = "complete"

        params: Dict[str, Any] = {"algo": algo, "mode": mode, "applied": 0}
        if algo == "dijkstra":
            source = data.get("source")
            if not source:
                return error("Set a source node first")
            params["source"] = source

        session["run"] = params
        graph = get_graph()
        params, run = restore_run(graph)
        if not isinstance(run, AllPairsRun):
            params["applied"] = run.current_step_index
            session["run"] = params
        logger.info("run %s (%s) on %r", algo, mode, graph)
        return jsonify({"run": run_view(params, run)})

    @app.route("/api/step/next", methods=["POST"])
    def api_step_next():
        graph = get_graph()
        params, run = restore_run(graph)
        if run is None:
            return error("No run in progress")
        if isinstance(run, AllPairsRun):
            return error(f"{params['algo']} has no steps")
        step = run.next_step()
        if step is None:
            return error("Already at last step")
        params["applied"] = run.current_step_index
        session["run"] = params
        return jsonify({"step": step.to_dict(), "run": run_view(params, run)})

    @app.route("/api/reset", methods=["POST"])
    def api_reset():
        session.pop("run", None)
        return jsonify({"run": None})

    @app.route("/api/state")
    def api_state():
        graph = get_graph()
        params, run = restore_run(graph)
        return jsonify({"graph": graph_payload(graph), "run": run_view(params, run)})

    @app.route("/api/compare")
    def api_compare():
        keys = request.args.getlist("algo") or None
        for key in keys or []:
            if not require_algorithm(key).is_all_pairs:
                return error(f"{key} is not an all-pairs algorithm")
        return jsonify(compare_all_pairs(get_graph(), keys).to_dict())

    return app


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app = create_app()
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Shortest-path stepper on http://localhost:5000")
    app.run(debug=False)
