import pytest
from fastapi.testclient import TestClient

from pyeditor.core.config_manager import EditorConfig
from pyeditor.interfaces.web_app import create_app
from pyeditor.metrics.sinks import MemorySink


@pytest.fixture
def sink():
    return MemorySink()


@pytest.fixture
def client(sink):
    config = EditorConfig(hostname="python.microbit.org")
    return TestClient(create_app(config, sink=sink, default_script="from microbit import *"))


def test_boards(client):
    response = client.get("/api/boards")
    assert response.status_code == 200
    assert response.json()["9903"]["capability"] == "full"
    assert response.json()["9900"]["capability"] == "base"


def test_autocomplete(client):
    response = client.get("/api/autocomplete/9903")
    assert response.status_code == 200
    data = response.json()
    assert data["capability"] == "full"
    assert "microbit.microphone.LOUD" in data["words"]

    base = client.get("/api/autocomplete/9900").json()
    assert "microbit.microphone" not in base["words"]

    assert client.get("/api/autocomplete/0000").status_code == 404


def test_imports(client):
    response = client.post("/api/imports", json={"code": "from microbit import display"})
    assert response.status_code == 200
    assert response.json() == {"microbit": {"display": {"module-import": None}}}


def test_compatibility(client):
    response = client.post(
        "/api/compatibility",
        json={"board_id": "9900", "code": "from microbit import microphone"},
    )
    assert response.status_code == 200
    assert response.json() == {
        "board_id": "9900",
        "compatible": False,
        "unavailable": ["microbit.microphone"],
    }

    ok = client.post("/api/compatibility", json={"board_id": "9900", "code": "import radio"})
    assert ok.json()["compatible"] is True

    bad = client.post("/api/compatibility", json={"board_id": "1234", "code": ""})
    assert bad.status_code == 400


def test_metrics_action(client, sink):
    response = client.post(
        "/api/metrics/action",
        json={
            "element_id": "command-download",
            "code": "from microbit import *\ndisplay.scroll('hi')",
            "files": ["main.py"],
            "storage_used": 2048,
        },
    )

    assert response.status_code == 200
    assert [(e["action"], e["label"]) for e in response.json()["sent"]] == [
        ("files", "1"),
        ("fs-used", "0-5"),
        ("lines", "0-20"),
        ("click", "download"),
    ]
    assert len(sink.events) == 4


def test_metrics_action_unchanged_script(client, sink):
    client.post("/api/metrics/action", json={"element_id": "command-flash"})
    assert sink.find("lines")[0].label == "default"
