import io

import pytest

from webapp import create_app
from webapp.config import Config


@pytest.fixture
def client(tmp_path):
    class TestConfig(Config):
        TESTING = True
        DEBUG = False
        LOG_DIR = tmp_path / "logs"
        MAX_SESSIONS = 2

    app = create_app(TestConfig)
    return app.test_client()


@pytest.fixture
def session_id(client):
    response = client.post("/sessions", json={"newick": "((A:1,B:2):1,C:3);"})
    assert response.status_code == 201
    return response.get_json()["id"]


def act(client, session_id, **payload):
    return client.post(f"/sessions/{session_id}/actions", json=payload)


def test_about(client):
    assert "nhxedit" in client.get("/about").get_json()["about"]


def test_log_file_is_created(client, tmp_path):
    assert (tmp_path / "logs" / "api.log").exists()


def test_create_session(client):
    response = client.post("/sessions", json={"newick": "(A,(B,C);"})
    body = response.get_json()
    assert response.status_code == 201
    assert body["info"]["tips"] == 3
    assert body["info"]["errors"] == ["missing right parenthesis"]
    assert len(body["nodes"]) == 5


def test_create_session_from_upload(client):
    response = client.post(
        "/sessions",
        data={"treeFile": (io.BytesIO(b"(A,B);"), "tree.nwk")},
        content_type="multipart/form-data",
    )
    assert response.status_code == 201
    assert response.get_json()["info"]["tips"] == 2


def test_create_session_requires_newick(client):
    response = client.post("/sessions", json={"tree": "(A,B);"})
    assert response.status_code == 400
    assert response.get_json()["error"] == "Missing required field 'newick'."


def test_remove_then_undo(client, session_id):
    response = act(client, session_id, action="remove", node=1)
    body = response.get_json()
    assert response.status_code == 200
    assert body["result"] is True
    assert body["info"]["tips"] == 2
    assert client.get(f"/sessions/{session_id}/newick").data == b"(A:2,\nC:3\n);\n"

    response = client.post(f"/sessions/{session_id}/undo")
    assert response.get_json()["applied"] is True
    assert client.get(f"/sessions/{session_id}/newick").data == b"((A:1,B:2):1,C:3);"


def test_get_session(client, session_id):
    body = client.get(f"/sessions/{session_id}").get_json()
    assert body["id"] == session_id
    assert body["root"] == 4


def test_search_and_highlight(client, session_id):
    body = act(client, session_id, action="search", pattern="[ab]").get_json()
    assert body["result"] == 2
    body = act(client, session_id, action="highlight", node=2, color="green").get_json()
    assert body["result"] == "#D8FFC0"
    assert body["nodes"][2]["highlight_color"] == "#D8FFC0"


def test_rejected_move_is_conflict(client, session_id):
    response = act(client, session_id, action="move", node=4, target=0)
    assert response.status_code == 409
    assert response.get_json()["error"] == "The root cannot be moved"


def test_bad_search_pattern(client, session_id):
    response = act(client, session_id, action="search", pattern="(")
    assert response.status_code == 400


def test_unknown_node(client, session_id):
    response = act(client, session_id, action="remove", node=99)
    assert response.status_code == 404


@pytest.mark.parametrize(
    "payload",
    [
        {"action": "explode"},
        {"action": "remove"},
        {"action": "remove", "node": "1"},
        {"action": "reroot", "node": 1, "distance": "far"},
    ],
)
def test_invalid_action(client, session_id, payload):
    response = client.post(f"/sessions/{session_id}/actions", json=payload)
    assert response.status_code == 400


def test_unknown_session(client):
    assert client.get("/sessions/missing").status_code == 404
    assert client.post("/sessions/missing/undo").status_code == 404


def test_delete_session(client, session_id):
    assert client.delete(f"/sessions/{session_id}").status_code == 200
    assert client.get(f"/sessions/{session_id}").status_code == 404


def test_oldest_session_is_evicted(client, session_id):
    client.post("/sessions", json={"newick": "(A,B);"})
    client.post("/sessions", json={"newick": "(C,D);"})
    assert client.get(f"/sessions/{session_id}").status_code == 404
