import pytest

from tilemap_pathfinder.app import app

SIMPLE_MAP = [
    "S..",
    ".#.",
    ".#E",
]


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def _post(client, url, pixel_rows, make_png, **form):
    data = {"image": (make_png(pixel_rows), "map.png")}
    data.update(form)
    return client.post(url, data=data, content_type="multipart/form-data")


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.get_json()["ok"] is True
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


def test_solve(client, make_png):
    resp = _post(client, "/astar/solve", SIMPLE_MAP, make_png, columns="1", rows="1")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["origin"] == {"x": 0, "y": 0, "z": 0}
    assert len(body["path"]) == 4
    assert body["route"] == [{"x": 1, "y": 0, "z": 0}, {"x": 2, "y": 1, "z": 0}]
    assert body["cost"] == pytest.approx(3.41421356)


def test_solve_unreachable(client, make_png):
    rows = [
        "S.#.",
        "..#.",
        "###.",
        "...E",
    ]
    resp = _post(client, "/astar/solve", rows, make_png)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["path"] == []
    assert "error" in body


def test_solve_expansion_cap(client, make_png):
    resp = _post(client, "/astar/solve", SIMPLE_MAP, make_png, max_expansions="1")
    assert resp.status_code == 422


def test_describe(client, make_png, tiled_rows):
    resp = _post(client, "/grid/describe", tiled_rows, make_png, columns="2", rows="2")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["layers"] == 4
    assert body["origin"] == {"x": 0, "y": 1, "z": 0}


def test_missing_marker_is_unprocessable(client, make_png):
    resp = _post(client, "/astar/solve", ["..", ".E"], make_png)
    assert resp.status_code == 422
    assert "origin" in resp.get_json()["error"]


def test_bad_form_values(client, make_png):
    assert _post(client, "/astar/solve", SIMPLE_MAP, make_png, columns="abc").status_code == 400
    assert _post(client, "/astar/solve", SIMPLE_MAP, make_png, columns="0").status_code == 400


def test_missing_image(client):
    resp = client.post("/astar/solve", data={}, content_type="multipart/form-data")
    assert resp.status_code == 400


def test_route_uses_source_pixels_with_separators(client, make_png):
    rows = [
        "...|S.#",
        "...|.##",
        "...|..E",
    ]
    resp = _post(client, "/astar/solve", rows, make_png, columns="2", rows="1")
    assert resp.status_code == 200
    assert resp.get_json()["route"] == [{"x": 4, "y": 1, "z": 0}, {"x": 5, "y": 2, "z": 0}]


@pytest.mark.parametrize("cap", ["0", "-1"])
def test_non_positive_expansion_cap_rejected(client, make_png, cap):
    resp = _post(client, "/astar/solve", SIMPLE_MAP, make_png, max_expansions=cap)
    assert resp.status_code == 400
    assert "max_expansions" in resp.get_json()["error"]
