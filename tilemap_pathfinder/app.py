# app.py — Slim Flask API over the tile-map decoder and A* core
# deps: pip install flask numpy pillow

from __future__ import annotations
import logging
from typing import Optional
from flask import Flask, request, jsonify
from PIL import Image, UnidentifiedImageError

from tilemap_pathfinder.config import DEFAULT_COLUMNS, DEFAULT_ROWS
from tilemap_pathfinder.models import GridShape
from tilemap_pathfinder.decoder import MapLoadError
from tilemap_pathfinder.grid import GridModel, node_to_dict
from tilemap_pathfinder.astar_core import SearchLimitExceeded, find_path, route_nodes

logger = logging.getLogger(__name__)

app = Flask(__name__)


class InvalidRequest(ValueError):
    pass


# ======= CORS =======
@app.after_request
def _cors(resp):
    resp.headers["Access-Control-Allow-Origin"]  = "*"
    resp.headers["Access-Control-Allow-Headers"] = "*"
    resp.headers["Access-Control-Allow-Methods"] = "GET,POST,OPTIONS"
    return resp


# ======= request helpers =======
def _optional_int(name: str) -> Optional[int]:
    raw = request.form.get(name, None)
    if raw in (None, "", "null"):
        return None
    try:
        return int(raw)
    except ValueError:
        raise InvalidRequest(f"{name} must be an integer")


def _grid_from_request() -> GridModel:
    upload = request.files.get("image")
    if upload is None:
        raise InvalidRequest("multipart field 'image' required")
    columns = _optional_int("columns")
    rows = _optional_int("rows")
    try:
        shape = GridShape(DEFAULT_COLUMNS if columns is None else columns,
                          DEFAULT_ROWS if rows is None else rows)
    except ValueError as e:
        raise InvalidRequest(str(e))
    try:
        with Image.open(upload.stream) as img:
            grid = GridModel.from_image(img, shape)
    except UnidentifiedImageError:
        raise InvalidRequest("image is not a readable picture")
    return grid


@app.errorhandler(InvalidRequest)
def _bad_request(e):
    return jsonify({"error": str(e)}), 400


@app.errorhandler(MapLoadError)
def _map_load_error(e):
    logger.warning("Map rejected: %s", e)
    return jsonify({"error": str(e)}), 422


@app.errorhandler(SearchLimitExceeded)
def _search_limit(e):
    logger.warning("Search aborted: %s", e)
    return jsonify({"error": str(e)}), 422


# ======= endpoints =======
@app.route("/", methods=["GET"])
def root():
    return {"ok": True, "describe": "/grid/describe (POST multipart)", "solve": "/astar/solve (POST multipart)"}


@app.route("/grid/describe", methods=["POST"])
def grid_describe():
    grid = _grid_from_request()
    return jsonify(grid.summary())


@app.route("/astar/solve", methods=["POST"])
def astar_solve():
    """
    multipart body:
      image           PNG with a packed tile grid
      columns, rows   tile grid shape (default 1x1)
      max_expansions  optional cap, exceeding it is a 422
    """
    grid = _grid_from_request()
    max_exp = _optional_int("max_expansions")
    if max_exp is not None and max_exp < 1:
        raise InvalidRequest("max_expansions must be at least 1")
    result = find_path(grid, max_expansions=max_exp)

    resp = {
        "origin": node_to_dict(grid.fixed.origin),
        "end": node_to_dict(grid.fixed.end),
        "expansions": result.expansions,
    }
    if not result.found:
        resp.update({"error": "No path between origin and end.", "path": [], "route": []})
        return jsonify(resp), 200

    resp.update({
        "path": [node_to_dict(n) for n in result.path],
        "route": [node_to_dict(n) for n in route_nodes(result, grid)],
        "cost": float(result.cost),
    })
    return jsonify(resp)


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8081, threaded=True)
