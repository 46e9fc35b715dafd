import io
import zipfile

import pytest
from fastapi.testclient import TestClient

from subtitle_payload import app as app_module
from subtitle_payload.app import app

SRT = "1\n00:00:01,000 --> 00:00:03,000\nline1\n"
VOBSUB_PACK = b"\x00\x00\x01\xba\x44\x00\x04\x00\x04\x01\x01\x89\xc3\xf8" + b"\xff" * 64


def make_zip(files):
    bio = io.BytesIO()
    with zipfile.ZipFile(bio, mode="w") as z:
        for name, content in files.items():
            z.writestr(name, content)
    return bio.getvalue()


@pytest.fixture
def client():
    app_module.RESULT_CACHE.clear()
    return TestClient(app)


def test_healthz(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_extract_returns_subtitle(client):
    resp = client.post("/extract", content=make_zip({"movie.srt": SRT, "notes.txt": "x"}))
    assert resp.status_code == 200
    assert resp.text == SRT
    assert resp.headers["content-type"].startswith("application/x-subrip")
    assert 'filename="movie.srt"' in resp.headers["content-disposition"]
    assert resp.headers["x-subtitle-encoding"] == "utf-8"
    assert resp.headers["etag"].startswith('W/"')


def test_extract_empty_archive_is_422(client):
    resp = client.post("/extract", content=make_zip({}))
    assert resp.status_code == 422
    assert resp.json()["error"] == "archive is empty"


def test_decode_converts_microdvd(client):
    resp = client.post("/decode", params={"filename": "movie.sub", "fps": 25}, content=b"{0}{25}Hello")
    assert resp.status_code == 200
    assert 'filename="movie.srt"' in resp.headers["content-disposition"]
    assert "00:00:00,000 --> 00:00:01,000" in resp.text


def test_decode_binary_is_octet_stream(client):
    resp = client.post("/decode", params={"filename": "movie.sub"}, content=VOBSUB_PACK)
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/octet-stream"
    assert resp.content == VOBSUB_PACK
    assert "x-subtitle-encoding" not in resp.headers


def test_decode_requires_filename(client):
    assert client.post("/decode", content=b"Hello").status_code == 422


def test_rejects_non_positive_fps(client):
    resp = client.post("/decode", params={"filename": "a.sub", "fps": 0}, content=b"{0}{25}Hi")
    assert resp.status_code == 422


def test_payload_too_large(client, monkeypatch):
    monkeypatch.setattr(app_module.settings, "max_payload_bytes", 8)
    resp = client.post("/extract", content=b"x" * 9)
    assert resp.status_code == 413
