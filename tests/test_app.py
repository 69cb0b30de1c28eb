from main import create_app


def test_state_returns_rows_and_status(client):
    resp = client.get("/api/state")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["grid"][0] == "#######"
    assert data["grid"][1] == "#.....#"
    assert data["running"] is False
    assert data["start"] is None


def test_place_markers_and_run_all(client, session):
    assert client.post("/api/start", json={"row": 1, "col": 1}).get_json()["accepted"]
    assert client.post("/api/end", json={"row": 3, "col": 3}).get_json()["accepted"]
    assert client.get("/api/state").get_json()["grid"][1][1] == "S"

    resp = client.post("/api/run", json={"algorithm": "ALL"})
    assert resp.get_json()["accepted"] is True
    assert session.wait(5)

    results = client.get("/api/results").get_json()
    assert [row[0] for row in results["table"]] == ["A*", "BFS", "DFS"]
    assert results["comparison"]["best"] in ("A*", "BFS")
    assert results["comparison"]["ranked"][0]["path_length"] == 4


def test_run_without_markers_is_rejected(client):
    data = client.post("/api/run", json={"algorithm": "bfs"}).get_json()
    assert data["accepted"] is False
    assert data["notice"] == "Set Start and End first!"


def test_out_of_bounds_is_rejected_not_an_error(client):
    resp = client.post("/api/start", json={"row": 40, "col": 2})
    assert resp.status_code == 200
    assert resp.get_json()["accepted"] is False


def test_malformed_coordinates_are_400(client):
    assert client.post("/api/start", json={"row": 1}).status_code == 400
    assert client.post("/api/wall", json={"row": "a", "col": 2}).status_code == 400
    assert client.post("/api/start", json=[1, 2]).status_code == 400
    assert client.post("/api/config/density", json={"density": "lots"}).status_code == 400
    assert client.post("/api/wall", json={"row": 2, "col": 2, "wall": "false"}).status_code == 400
    assert client.post("/api/wall", json={"row": 2, "col": 2, "wall": 0}).status_code == 400


def test_wall_and_clear_cell(client, session):
    client.post("/api/wall", json={"row": 2, "col": 2, "wall": True})
    assert session.grid.node(2, 2).is_wall
    client.post("/api/cell/clear", json={"row": 2, "col": 2})
    assert not session.grid.node(2, 2).is_wall


def test_config_routes(client, session):
    data = client.post("/api/config/density", json={"density": 0.5}).get_json()
    assert data["wall_density"] == 0.5
    data = client.post("/api/config/speed", json={"speed": "instant"}).get_json()
    assert data["speed"] == "instant"
    assert client.post("/api/config/speed", json={"speed": "warp"}).get_json()["accepted"] is False


def test_clear_and_generate(client, session):
    client.post("/api/config/density", json={"density": 1.0})
    client.post("/api/walls/generate")
    assert session.grid.node(3, 3).is_wall
    client.post("/api/config/density", json={"density": 0.0})
    client.post("/api/clear")
    assert not session.grid.node(3, 3).is_wall


def test_algorithms_listing(client):
    names = [a["name"] for a in client.get("/api/algorithms").get_json()]
    assert names == ["A*", "BFS", "DFS"]


def test_config_builds_session():
    app = create_app({"TESTING": True, "ROWS": 8, "SEED": 1, "SPEED": "fast"})
    data = app.test_client().get("/api/state").get_json()
    assert len(data["grid"]) == 8
    assert data["speed"] == "fast"


def test_wall_flag_false_opens_cell(client, session):
    client.post("/api/wall", json={"row": 2, "col": 2, "wall": True})
    assert client.post("/api/wall", json={"row": 2, "col": 2, "wall": False}).get_json()["accepted"]
    assert not session.grid.node(2, 2).is_wall


def test_algorithms_listing_serves_metadata(client):
    astar = client.get("/api/algorithms").get_json()[0]
    assert astar["tags"] == ["heuristic", "shortest-path"]
    assert astar["complexity"] == {"time": "O(V log V)", "space": "O(V)"}
    assert astar["optimal"] is True
