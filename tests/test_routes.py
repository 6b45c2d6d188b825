from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from main import app

SONGS = [
    {"id": "A", "title": "Spring", "date": "2020-03-01", "type": ["Original"], "composer": ["Bob"]},
    {"id": "B", "title": "Winter", "date": None, "type": ["Cover"]},
    {"id": "C", "title": "Autumn", "date": "2021-09-01", "type": ["Original"], "composer": ["Ann"]},
]


@pytest.fixture
def client(tmp_path):
    path = tmp_path / "songs.json"
    path.write_text(json.dumps(SONGS), encoding="utf-8")
    app.state.catalog_path = str(path)
    with TestClient(app) as test_client:
        yield test_client
    del app.state.catalog_path


def test_ready_after_startup(client) -> None:
    response = client.get("/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ready"}


def test_filter_options(client) -> None:
    body = client.get("/filters/options").json()

    assert body["year"] == ["All", 2021, 2020, "Unknown"]
    assert body["slider_years"] == [2021, 2020]
    assert body["type"] == ["All", "Original", "Cover"]
    assert body["composer"] == ["All", "Ann", "Bob", "Unknown"]


def test_unfiltered_listing_is_date_descending(client) -> None:
    body = client.get("/songs").json()

    assert [item["id"] for item in body["items"]] == ["C", "A", "B"]
    assert body["totalItems"] == 3
    assert body["startIndex"] == 1
    assert body["endIndex"] == 3
    assert body["params"] == {}


def test_fuzzy_query(client) -> None:
    body = client.get("/songs", params={"q": "wintr"}).json()

    assert body["totalItems"] == 1
    assert body["items"][0]["title"] == "Winter"
    assert body["params"] == {"q": "wintr"}


def test_year_range_and_exact_filter(client) -> None:
    body = client.get("/songs", params={"yearStart": "0", "yearEnd": "0"}).json()
    assert [item["id"] for item in body["items"]] == ["C"]

    body = client.get("/songs", params={"type": "Original", "composer": "Bob"}).json()
    assert [item["id"] for item in body["items"]] == ["A"]


def test_page_past_the_end_is_clamped(client) -> None:
    body = client.get("/songs", params={"page": "9", "perPage": "2"}).json()

    assert body["currentPage"] == 2
    assert body["totalPages"] == 2
    assert [item["id"] for item in body["items"]] == ["B"]
    assert body["params"] == {"page": "2"}


def test_invalid_per_page_is_rejected(client) -> None:
    assert client.get("/songs", params={"perPage": "0"}).status_code == 422


def test_song_details(client) -> None:
    response = client.get("/songs/A")
    assert response.status_code == 200
    assert response.json()["year"] == 2020

    missing = client.get("/songs/zzz")
    assert missing.status_code == 404
    assert "zzz" in missing.json()["detail"]


def test_reload_picks_up_new_records(client, tmp_path) -> None:
    (tmp_path / "songs.json").write_text(json.dumps(SONGS[:1]), encoding="utf-8")

    response = client.post("/admin/reload")

    assert response.status_code == 200
    assert response.json() == {"status": "ready", "records": 1}
    assert client.get("/songs").json()["totalItems"] == 1


def test_unknown_year_bucket(client) -> None:
    body = client.get("/songs", params={"year": "Unknown"}).json()

    assert [item["id"] for item in body["items"]] == ["B"]
    assert body["params"] == {"year": "Unknown"}


def test_failed_reload_keeps_serving_previous_catalog(client, tmp_path) -> None:
    (tmp_path / "songs.json").write_text("{not json", encoding="utf-8")

    assert client.post("/admin/reload").status_code == 503
    assert client.get("/health/ready").status_code == 200
    assert client.get("/songs").json()["totalItems"] == 3
