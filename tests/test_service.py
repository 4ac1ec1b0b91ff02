"""Tests for the HTTP service."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from dir2md.service import create_app


@pytest.fixture
def client():
    return TestClient(create_app())


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_generate_tree_only(client, sample_repo):
    response = client.post("/api/generate", json={"directory": str(sample_repo)})

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["filename"] == "snapshot-sample_repo.md"
    assert body["markdown"].startswith("# Repository Snapshot")
    assert "## File Contents" not in body["markdown"]


def test_generate_camel_case_options(client, sample_repo):
    response = client.post("/api/generate", json={
        "directory": str(sample_repo),
        "includeContents": True,
        "analyze": True,
        "maxDepth": 1,
        "extWhitelist": [".md"],
        "excludeGlobs": ["setup.py"],
    })

    assert response.status_code == 200
    markdown = response.json()["markdown"]
    assert "### `README.md`\n\n**Analysis**" in markdown
    assert "### `setup.py`" not in markdown
    assert "Docs/guide.md" not in markdown


def test_missing_directory_field(client):
    response = client.post("/api/generate", json={})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing 'directory'."}


def test_directory_not_found(client, temp_workspace):
    response = client.post("/api/generate", json={"directory": str(temp_workspace / "missing")})
    assert response.status_code == 404
    assert response.json() == {"error": "Directory not found."}


def test_path_is_not_a_directory(client, sample_repo):
    response = client.post("/api/generate", json={"directory": str(sample_repo / "README.md")})
    assert response.status_code == 400
    assert response.json() == {"error": "Path is not a directory."}


def test_invalid_option_is_bad_request(client, sample_repo):
    response = client.post("/api/generate", json={"directory": str(sample_repo), "maxDepth": -1})
    assert response.status_code == 400
    assert "error" in response.json()


def test_generation_error_is_server_error(client, sample_repo):
    with patch("dir2md.service.app.SnapshotGenerator") as mock_generator:
        mock_generator.return_value.generate.side_effect = RuntimeError("disk on fire")
        response = client.post("/api/generate", json={"directory": str(sample_repo)})

    assert response.status_code == 500
    assert response.json() == {"error": "disk on fire"}
