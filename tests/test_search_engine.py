"""Tests for the SearchEngine facade and the HTTP API built on it."""

import json

import pytest
from fastapi.testclient import TestClient

import api
from tracker_search.data_loader import DataLoader
from tracker_search.models import CollectionSnapshot
from tracker_search.search_engine import SearchEngine

from helpers import movie, sample_snapshot


def test_engine_search_and_helpers():
	engine = SearchEngine(sample_snapshot())
	assert [r.entity.id for r in engine.search("batman")] == ["m1", "p2", "n3"]
	assert engine.has_criteria("@movie")
	assert not engine.has_criteria("  ")
	assert engine.filter_summary("@tv status:watching") == ["Type: tv", "Status: watching"]
	assert engine.parse_query("a OR b").term_groups == (("a", "b"),)


def test_engine_reranks_new_snapshot():
	engine = SearchEngine()
	assert engine.search("batman") == []
	engine.update_snapshot(CollectionSnapshot(media=(movie("x", "Batman"),)))
	assert [r.entity.id for r in engine.search("batman")] == ["x"]


def test_engine_respects_max_results():
	engine = SearchEngine(sample_snapshot(), max_results=1)
	assert len(engine.search("batman")) == 1


@pytest.fixture
def client(monkeypatch):
	monkeypatch.setattr(api, "ENGINE", SearchEngine(sample_snapshot()))
	return TestClient(api.app)


def test_health(client):
	body = client.get("/health").json()
	assert body["status"] == "ok"
	assert body["engine_ready"] is True
	assert body["items"] == 9


def test_search_endpoint(client):
	resp = client.get("/search", params={"q": "@movie batman"})
	assert resp.status_code == 200
	body = resp.json()
	assert body["has_criteria"] is True
	assert body["filters"] == ["Type: movie"]
	(item,) = body["results"]
	assert item["id"] == "m1"
	assert item["entity_type"] == "movie"
	assert item["score"] == 95
	assert item["year"] == 2005
	assert item["rating"] == 4.5


def test_search_endpoint_flattens_every_variant(client):
	body = client.get("/search", params={"q": "batman"}).json()
	assert [(r["entity_type"], r["title"]) for r in body["results"]] == [
		("movie", "Batman Begins"),
		("place", "Gotham Diner"),
		("note", "Remember the batman ending?"),
	]


def test_search_endpoint_with_loaded_non_string_poster(tmp_path, monkeypatch):
	record = {"id": "m1", "type": "movie", "title": "Batman", "posterPath": 12345}
	(tmp_path / "media.jsonl").write_text(json.dumps(record) + "\n", encoding="utf-8")
	snapshot = DataLoader().load_snapshot(str(tmp_path))
	monkeypatch.setattr(api, "ENGINE", SearchEngine(snapshot))

	resp = TestClient(api.app).get("/search", params={"q": "batman"})
	assert resp.status_code == 200
	(item,) = resp.json()["results"]
	assert item["poster_path"] == "12345"


def test_search_endpoint_without_criteria(client):
	body = client.get("/search", params={"q": "-spoiler"}).json()
	assert body["has_criteria"] is False
	assert body["results"] == []


def test_search_before_startup(monkeypatch):
	monkeypatch.setattr(api, "ENGINE", None)
	body = TestClient(api.app).get("/search", params={"q": "batman"}).json()
	assert body["results"] == []
	assert body["has_criteria"] is False
