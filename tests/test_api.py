import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app

from conftest import put


@pytest.fixture
def client(alice_tree):
    app = create_app(Settings(media_root=alice_tree, preview_limit=6, max_items_per_folder=100))
    return TestClient(app)


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_folder_root(client, alice_tree):
    resp = client.get("/api/folder")
    assert resp.status_code == 200
    data = resp.json()
    assert data["folder"] == {"name": alice_tree.name, "path": "", "absolutePath": str(alice_tree.resolve())}
    assert data["breadcrumb"] == [{"name": "root", "path": ""}]
    assert data["totals"] == {"media": 0, "subfolders": 1}
    alice = data["subfolders"][0]
    assert alice["counts"] == {"images": 1, "gifs": 0, "videos": 1, "subfolders": 0}
    assert len(alice["previews"]) == 2


def test_folder_payload_shape(client):
    data = client.get("/api/folder", params={"path": "alice"}).json()
    assert set(data) == {"folder", "breadcrumb", "subfolders", "media", "totals"}
    assert set(data["media"][0]) == {"name", "path", "url", "kind", "size", "modified"}
    assert [m["kind"] for m in data["media"]] == ["video", "image"]
    assert data["breadcrumb"][-1] == {"name": "alice", "path": "alice"}


@pytest.mark.parametrize("path, status", [
    ("..", 403),
    ("alice/../..", 403),
    ("nope", 404),
    ("alice/clip.mp4", 400),
])
def test_folder_errors(client, path, status):
    resp = client.get("/api/folder", params={"path": path})
    assert resp.status_code == status
    assert "detail" in resp.json()


def test_media_urls_are_servable(client):
    data = client.get("/api/folder", params={"path": "alice"}).json()
    photo = data["media"][1]
    resp = client.get(photo["url"])
    assert resp.status_code == 200
    assert len(resp.content) == 500000
    assert "max-age" in resp.headers["cache-control"]


def test_media_url_with_escaped_characters(client, alice_tree):
    put(alice_tree, "summer 2023/#1 beach.jpg", 1, b"jpeg-bytes")
    data = client.get("/api/folder", params={"path": "summer 2023"}).json()
    url = data["media"][0]["url"]
    assert url == "/media/summer%202023/%231%20beach.jpg"
    resp = client.get(url)
    assert resp.status_code == 200
    assert resp.content == b"jpeg-bytes"


def test_media_missing_and_directory(client):
    assert client.get("/media/alice/missing.jpg").status_code == 404
    assert client.get("/media/alice").status_code == 404


def test_media_symlink_escape_is_forbidden(client, tmp_path, alice_tree):
    secret = put(tmp_path, "secret.jpg", 1, b"secret")
    os.symlink(secret, alice_tree / "alice" / "peek.jpg")
    assert client.get("/media/alice/peek.jpg").status_code == 403


def test_folder_read_failure_below_an_existing_folder_is_400(client, monkeypatch):
    real_iterdir = Path.iterdir

    def iterdir_or_vanish(self):
        if self.name == "alice":
            raise FileNotFoundError(2, "No such file or directory", str(self))
        return real_iterdir(self)

    monkeypatch.setattr(Path, "iterdir", iterdir_or_vanish)
    resp = client.get("/api/folder")
    assert resp.status_code == 400
