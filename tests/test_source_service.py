"""Tests for the source registry."""

from secondbrain.services import source_service


def test_ensure_source_creates_missing_source(db):
    source = source_service.ensure_source(db, "github")

    assert source.name == "github"
    assert source.id is not None
    assert db.sources.count_documents({}) == 1


def test_ensure_source_is_idempotent(db):
    first = source_service.ensure_source(db, "youtube")
    second = source_service.ensure_source(db, "youtube")

    assert first.id == second.id
    assert db.sources.count_documents({"name": "youtube"}) == 1


def test_list_sources_empty_registry(db):
    assert source_service.list_sources(db) == []


def test_list_sources_in_insertion_order(db):
    for name in ("twitter", "github", "youtube"):
        source_service.ensure_source(db, name)

    names = [s.name for s in source_service.list_sources(db)]
    assert names == ["twitter", "github", "youtube"]


def test_get_source_by_name(db):
    source_service.ensure_source(db, "facebook")

    assert source_service.get_source_by_name(db, "facebook").name == "facebook"
    assert source_service.get_source_by_name(db, "myspace") is None
