"""Tests for the HTTP API."""

from pathlib import Path

import pytest
from flask.testing import FlaskClient

from prompts_web_viewer.knowledge_base import LiveKnowledgeBase, SnapshotKnowledgeBase
from prompts_web_viewer.server import create_app
from prompts_web_viewer.snapshot import StaticSnapshotBuilder


@pytest.fixture
def root(tmp_path: Path) -> Path:
    """Create a corpus for the API.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        Path to the corpus root.
    """
    root = tmp_path / "corpus"
    (root / "guides").mkdir(parents=True)
    (root / "README.md").write_text("# Welcome\n\nHello readers.\n")
    (root / "guides" / "setup.md").write_text("# Setup\n\ninstall docker twice\n")
    return root


@pytest.fixture
def kb(root: Path) -> LiveKnowledgeBase:
    """Create a live knowledge base."""
    return LiveKnowledgeBase(root)


@pytest.fixture
def client(kb: LiveKnowledgeBase) -> FlaskClient:
    """Create a Flask test client over the live knowledge base."""
    return create_app(kb).test_client()


def test_health(client: FlaskClient) -> None:
    """Test the health endpoint."""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json() == {"status": "healthy", "documents": 2}


def test_navigation(client: FlaskClient) -> None:
    """Test that navigation keeps section order."""
    response = client.get("/api/navigation")

    assert response.status_code == 200
    assert list(response.get_json()) == ["Prompt Categories", "Setup Guides", "Getting Started"]
    assert response.get_json()["Getting Started"][0]["title"] == "Welcome"


def test_content(client: FlaskClient) -> None:
    """Test the content endpoint."""
    response = client.get("/api/content", query_string={"path": "guides/setup.md"})

    assert response.status_code == 200
    body = response.get_json()
    assert set(body) == {"content", "title", "path"}
    assert body["title"] == "Setup"
    assert "install docker twice" in body["content"]


def test_content_missing_parameter(client: FlaskClient) -> None:
    """Test that a missing path is a bad request."""
    response = client.get("/api/content")

    assert response.status_code == 400
    assert response.get_json() == {"error": "bad_request", "message": "Path parameter required"}


def test_content_not_found(client: FlaskClient) -> None:
    """Test that an unknown path is a structured 404."""
    response = client.get("/api/content", query_string={"path": "nope.md"})

    assert response.status_code == 404
    assert response.get_json()["error"] == "not_found"


def test_raw(client: FlaskClient) -> None:
    """Test the raw endpoint returns plain text."""
    response = client.get("/api/raw", query_string={"path": "README.md"})

    assert response.status_code == 200
    assert response.mimetype == "text/plain"
    assert response.get_data(as_text=True) == "# Welcome\n\nHello readers.\n"


def test_raw_not_found(client: FlaskClient) -> None:
    """Test that raw fails the same way as content."""
    response = client.get("/api/raw", query_string={"path": "../secret.md"})

    assert response.status_code == 404
    assert response.get_json()["error"] == "not_found"


def test_search(client: FlaskClient) -> None:
    """Test the search endpoint."""
    response = client.get("/api/search", query_string={"q": "Docker"})

    assert response.status_code == 200
    body = response.get_json()
    assert len(body) == 1
    assert body[0]["file"]["path"] == "guides/setup.md"
    assert body[0]["matches"][0] == {
        "line": 3,
        "content": "install docker twice",
        "context": "\ninstall docker twice\n",
    }


def test_search_missing_query(client: FlaskClient) -> None:
    """Test that a missing query is a bad request."""
    response = client.get("/api/search")

    assert response.status_code == 400
    assert response.get_json()["error"] == "bad_request"


def test_search_empty_query(client: FlaskClient) -> None:
    """Test that an empty query returns no results."""
    response = client.get("/api/search", query_string={"q": ""})

    assert response.status_code == 200
    assert response.get_json() == []


def test_unexpected_error_is_structured(kb: LiveKnowledgeBase, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that unexpected exceptions become a structured 500."""

    def broken(query: str) -> list:
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(kb, "search", broken)
    response = create_app(kb).test_client().get("/api/search", query_string={"q": "x"})

    assert response.status_code == 500
    assert response.get_json()["error"] == "internal_error"


def test_unknown_route_is_404(client: FlaskClient) -> None:
    """Test that routing errors keep their status."""
    assert client.get("/api/unknown").status_code == 404


def test_static_front_end(kb: LiveKnowledgeBase, tmp_path: Path) -> None:
    """Test serving the front-end from a static directory."""
    static = tmp_path / "public"
    static.mkdir()
    (static / "index.html").write_text("<html>viewer</html>")

    client = create_app(kb, static_dir=static).test_client()

    assert client.get("/").get_data(as_text=True) == "<html>viewer</html>"


def test_live_and_snapshot_responses_match(kb: LiveKnowledgeBase, tmp_path: Path) -> None:
    """Test that both modes produce identical API responses."""
    StaticSnapshotBuilder(kb).build(tmp_path / "dist")
    live = create_app(kb).test_client()
    static = create_app(SnapshotKnowledgeBase(tmp_path / "dist")).test_client()

    for url, params in [
        ("/api/navigation", {}),
        ("/api/content", {"path": "guides/setup.md"}),
        ("/api/raw", {"path": "README.md"}),
        ("/api/search", {"q": "welcome"}),
    ]:
        assert live.get(url, query_string=params).data == static.get(url, query_string=params).data
