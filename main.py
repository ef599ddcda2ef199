"""
main.py — Data Structure & Algorithm Visualizer Flask App
==========================================================
JSON API over one Workspace per browser session.

Routes:
  GET  /api/algorithms?tag=sorting  – registry listing (label, pseudocode, …)
  GET  /api/<kind>/state            – VisualState + log of one visualizer
  POST /api/stack/push              – {"value": 7}   (omit for a random value)
  POST /api/stack/pop
  POST /api/stack/peek
  POST /api/queue/enqueue           – {"value": 7}
  POST /api/queue/dequeue
  POST /api/queue/peek
  POST /api/tree/insert             – {"value": 7}
  POST /api/tree/traverse           – {"mode": "inorder", "speed": 600}
  POST /api/graph/bfs               – {"start": "A", "speed": "slow"}
  POST /api/graph/randomize         – {"seed": 3}
  POST /api/graph/load              – {"nodes": [...], "edges": [...]}
  POST /api/sorting/generate        – {"size": 15}
  POST /api/sorting/load            – {"values": [5, 3, 8, 1]}
  POST /api/sorting/start           – {"algorithm": "quick", "speed": 100}
  POST /api/sorting/compare
  POST /api/<kind>/cancel|pause|resume|reset

State management:
  The Flask session only carries a workspace id.  Workspaces (and the
  worker threads animating them) live in the WORKSPACES dict of this
  process; the oldest is dropped once MAX_WORKSPACES is exceeded.
"""

import logging
import secrets
import threading

from flask import Flask, jsonify, request, session

from algorithms import algorithms_by_tag, list_algorithms
from engine import ConcurrentRunConflict, InvalidInput, Visualizer, Workspace

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = secrets.token_hex(32)
app.config["MAX_WORKSPACES"] = 256
app.config.from_prefixed_env("DSVIZ")

KINDS = ("stack", "queue", "tree", "graph", "sorting")

# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
WORKSPACES = {}
_workspaces_lock = threading.Lock()


def get_workspace() -> Workspace:
    """Workspace of the current session, created on first use."""
    with _workspaces_lock:
        ws_id = session.get("workspace")
        if ws_id not in WORKSPACES:
            ws_id = secrets.token_hex(8)
            session["workspace"] = ws_id
            WORKSPACES[ws_id] = Workspace()
            logger.info("Workspace %s created (%d live)", ws_id, len(WORKSPACES))
            _evict()
        return WORKSPACES[ws_id]


def _evict() -> None:
    while len(WORKSPACES) > app.config["MAX_WORKSPACES"]:
        oldest = next(iter(WORKSPACES))
        WORKSPACES.pop(oldest).shutdown()
        logger.info("Workspace %s evicted", oldest)


def payload() -> dict:
    return request.get_json(silent=True) or {}


def state_of(vis: Visualizer, **extra):
    data = vis.snapshot()
    data.update(extra)
    return jsonify(data)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
@app.errorhandler(InvalidInput)
def handle_invalid_input(exc):
    return jsonify({"error": str(exc)}), 400


@app.errorhandler(ConcurrentRunConflict)
def handle_conflict(exc):
    return jsonify({"error": str(exc)}), 409


# ---------------------------------------------------------------------------
# API: Registry & State
# ---------------------------------------------------------------------------
@app.route("/api/algorithms")
def api_algorithms():
    tag = request.args.get("tag")
    algos = algorithms_by_tag(tag) if tag else list_algorithms()
    return jsonify([
        {
            "key":              a.key,
            "label":            a.label,
            "inputs":           list(a.inputs),
            "options":          list(a.options),
            "default_speed_ms": a.default_speed_ms,
            "pseudocode":       a.pseudocode,
            "tags":             a.tags,
            "complexity_time":  a.complexity_time,
            "complexity_space": a.complexity_space,
            "description":      a.description,
        }
        for a in algos
    ])


@app.route("/api/<kind>/state")
def api_state(kind):
    if kind not in KINDS:
        return jsonify({"error": f"Unknown visualizer '{kind}'"}), 404
    return state_of(get_workspace().get(kind))


# ---------------------------------------------------------------------------
# API: Run Control (every visualizer)
# ---------------------------------------------------------------------------
@app.route("/api/<kind>/<action>", methods=["POST"])
def api_control(kind, action):
    if kind not in KINDS:
        return jsonify({"error": f"Unknown visualizer '{kind}'"}), 404
    vis = get_workspace().get(kind)

    if action == "cancel":
        return state_of(vis, accepted=vis.cancel())
    if action == "pause":
        return state_of(vis, accepted=vis.pause())
    if action == "resume":
        return state_of(vis, accepted=vis.resume())
    if action == "reset":
        vis.reset()
        return state_of(vis)
    return jsonify({"error": f"Unknown action '{action}' for {kind}"}), 404


# ---------------------------------------------------------------------------
# API: Stack & Queue
# ---------------------------------------------------------------------------
def _entry(entry):
    return entry.to_dict() if entry is not None else None


@app.route("/api/stack/push", methods=["POST"])
def api_stack_push():
    vis = get_workspace().stack
    entry = vis.push(payload().get("value"))
    return state_of(vis, entry=_entry(entry))


@app.route("/api/stack/pop", methods=["POST"])
def api_stack_pop():
    vis = get_workspace().stack
    return state_of(vis, entry=_entry(vis.pop()))


@app.route("/api/stack/peek", methods=["POST"])
def api_stack_peek():
    vis = get_workspace().stack
    return state_of(vis, entry=_entry(vis.peek()))


@app.route("/api/queue/enqueue", methods=["POST"])
def api_queue_enqueue():
    vis = get_workspace().queue
    entry = vis.enqueue(payload().get("value"))
    return state_of(vis, entry=_entry(entry))


@app.route("/api/queue/dequeue", methods=["POST"])
def api_queue_dequeue():
    vis = get_workspace().queue
    return state_of(vis, entry=_entry(vis.dequeue()))


@app.route("/api/queue/peek", methods=["POST"])
def api_queue_peek():
    vis = get_workspace().queue
    return state_of(vis, entry=_entry(vis.peek()))


# ---------------------------------------------------------------------------
# API: Tree
# ---------------------------------------------------------------------------
@app.route("/api/tree/insert", methods=["POST"])
def api_tree_insert():
    vis = get_workspace().tree
    added = vis.insert(payload().get("value"))
    return state_of(vis, added=added)


@app.route("/api/tree/traverse", methods=["POST"])
def api_tree_traverse():
    data = payload()
    vis = get_workspace().tree
    handle = vis.traverse(data.get("mode", "inorder"), data.get("speed"))
    return state_of(vis, run_id=handle.run_id)


# ---------------------------------------------------------------------------
# API: Graph
# ---------------------------------------------------------------------------
@app.route("/api/graph/bfs", methods=["POST"])
def api_graph_bfs():
    data = payload()
    vis = get_workspace().graph
    handle = vis.bfs(data.get("start", "A"), data.get("speed"))
    return state_of(vis, run_id=handle.run_id)


@app.route("/api/graph/randomize", methods=["POST"])
def api_graph_randomize():
    vis = get_workspace().graph
    vis.randomize(payload().get("seed"))
    return state_of(vis)


@app.route("/api/graph/load", methods=["POST"])
def api_graph_load():
    vis = get_workspace().graph
    vis.load(payload())
    return state_of(vis)


# ---------------------------------------------------------------------------
# API: Sorting
# ---------------------------------------------------------------------------
@app.route("/api/sorting/generate", methods=["POST"])
def api_sorting_generate():
    vis = get_workspace().sorting
    data = payload()
    if "size" in data:
        vis.generate(data["size"])
    else:
        vis.generate()
    return state_of(vis)


@app.route("/api/sorting/load", methods=["POST"])
def api_sorting_load():
    vis = get_workspace().sorting
    vis.load(payload().get("values"))
    return state_of(vis)


@app.route("/api/sorting/start", methods=["POST"])
def api_sorting_start():
    data = payload()
    vis = get_workspace().sorting
    handle = vis.sort(data.get("algorithm", "bubble"), data.get("speed"))
    return state_of(vis, run_id=handle.run_id)


@app.route("/api/sorting/compare", methods=["POST"])
def api_sorting_compare():
    vis = get_workspace().sorting
    return state_of(vis, comparison=vis.compare())


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s: %(message)s")
    logger.info("Data Structure & Algorithm Visualizer on http://localhost:5000")
    app.run(debug=True, host="0.0.0.0", port=5000, threaded=True)
