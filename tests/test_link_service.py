"""Tests for share links: token generation, collection share state and item links."""

import re
import pytest
from bson import ObjectId

from secondbrain.core.errors import NotASummaryLink, NotFound, WrongUrl
from secondbrain.models.content import ContentType, SourceName
from secondbrain.services.link_service import (
    COLLECTION_HASH_LENGTH,
    ITEM_HASH_LENGTH,
    generate_hash,
)


def _content(content_service, owner_id, link="https://github.com/x/y", source=SourceName.GITHUB):
    return content_service.create_content(
        owner_id=owner_id, link=link, type=ContentType.REPOSITORY, title="Repo X", source=source,
    )


def _hash_from_url(url: str) -> str:
    return url.rsplit("/", 1)[-1]


# =============================================================================
# Token generation
# =============================================================================

@pytest.mark.parametrize("length", [7, ITEM_HASH_LENGTH, COLLECTION_HASH_LENGTH, 33])
def test_generate_hash_length_and_alphabet(length):
    token = generate_hash(length)

    assert len(token) == length
    assert re.fullmatch(r"[A-Za-z0-9_-]+", token)


def test_generate_hash_rejects_short_tokens():
    with pytest.raises(ValueError):
        generate_hash(6)


def test_generate_hash_is_random():
    assert len({generate_hash(10) for _ in range(200)}) == 200


# =============================================================================
# Collection share
# =============================================================================

def test_enable_share_is_idempotent(link_service, db, owner_id):
    first_url, first_created = link_service.enable_share(owner_id)
    second_url, second_created = link_service.enable_share(owner_id)

    assert first_url == second_url
    assert (first_created, second_created) == (True, False)
    assert "/brain/" in first_url
    assert len(_hash_from_url(first_url)) == COLLECTION_HASH_LENGTH
    assert db.links.count_documents({"user_id": owner_id}) == 1


def test_disable_share_revokes_hash(link_service, owner_id):
    url, _ = link_service.enable_share(owner_id)
    hash_ = _hash_from_url(url)

    assert link_service.disable_share(owner_id) is True
    with pytest.raises(WrongUrl):
        link_service.resolve_collection_link(hash_)


def test_disable_share_without_active_link_is_noop(link_service, owner_id):
    assert link_service.disable_share(owner_id) is False


def test_enable_after_disable_issues_new_hash(link_service, owner_id):
    old_url, _ = link_service.enable_share(owner_id)
    link_service.disable_share(owner_id)

    new_url, created = link_service.enable_share(owner_id)

    assert created is True
    assert new_url != old_url


def test_disable_share_keeps_item_links(link_service, content_service, db, owner_id):
    content = _content(content_service, owner_id)
    link_service.create_item_link(owner_id, content.id)
    link_service.enable_share(owner_id)

    link_service.disable_share(owner_id)

    assert db.links.count_documents({"user_id": owner_id, "content_id": content.id}) == 1


def test_resolve_collection_link_returns_owner_page(link_service, content_service, owner_id, other_owner_id):
    _content(content_service, owner_id, link="https://github.com/x/a")
    _content(content_service, owner_id, link="https://youtu.be/dQw4w9WgXcQ", source=SourceName.YOUTUBE)
    _content(content_service, other_owner_id, link="https://github.com/x/b")
    url, _ = link_service.enable_share(owner_id)

    page = link_service.resolve_collection_link(_hash_from_url(url))

    assert page.username == "alice"
    assert page.count == 2
    assert {item.user_id for item in page.content} == {owner_id}


def test_resolve_collection_link_with_source_filter_and_paging(link_service, content_service, owner_id):
    for i in range(3):
        _content(content_service, owner_id, link=f"https://github.com/x/r{i}")
    url, _ = link_service.enable_share(owner_id)

    page = link_service.resolve_collection_link(_hash_from_url(url), page_number=2, page_size=2, source=SourceName.GITHUB)

    assert page.count == 3
    assert len(page.content) == 1


def test_resolve_collection_link_unknown_hash(link_service):
    with pytest.raises(WrongUrl):
        link_service.resolve_collection_link("doesnotexist")


def test_item_hash_does_not_open_the_collection(link_service, content_service, owner_id):
    content = _content(content_service, owner_id)
    link, _ = link_service.create_item_link(owner_id, content.id)

    with pytest.raises(WrongUrl):
        link_service.resolve_collection_link(link.hash)


# =============================================================================
# Item links
# =============================================================================

def test_create_item_link_is_find_or_create(link_service, content_service, db, owner_id):
    content = _content(content_service, owner_id)

    first, first_created = link_service.create_item_link(owner_id, content.id)
    second, second_created = link_service.create_item_link(owner_id, content.id)

    assert first.hash == second.hash
    assert len(first.hash) == ITEM_HASH_LENGTH
    assert (first_created, second_created) == (True, False)
    assert db.links.count_documents({"content_id": content.id}) == 1


def test_create_item_link_requires_owned_content(link_service, content_service, owner_id, other_owner_id):
    content = _content(content_service, owner_id)

    with pytest.raises(NotFound):
        link_service.create_item_link(other_owner_id, content.id)
    with pytest.raises(NotFound):
        link_service.create_item_link(owner_id, ObjectId())


def test_resolve_item_summary_link(link_service, content_service, owner_id):
    content = _content(content_service, owner_id)
    link, _ = link_service.create_item_link(owner_id, content.id)

    view = link_service.resolve_item_summary_link(link.hash)

    assert view.content_id == content.id
    assert view.summary == content.summary


def test_resolve_item_summary_link_unknown_hash(link_service):
    with pytest.raises(WrongUrl):
        link_service.resolve_item_summary_link("doesnotexist")


def test_collection_hash_is_not_a_summary_link(link_service, owner_id):
    url, _ = link_service.enable_share(owner_id)

    with pytest.raises(NotASummaryLink):
        link_service.resolve_item_summary_link(_hash_from_url(url))


def test_item_link_to_deleted_content_resolves_not_found(link_service, content_service, db, owner_id):
    content = _content(content_service, owner_id)
    link, _ = link_service.create_item_link(owner_id, content.id)

    content_service.delete_for_owner(owner_id, content.id)

    assert db.links.count_documents({"hash": link.hash}) == 1
    with pytest.raises(NotFound):
        link_service.resolve_item_summary_link(link.hash)
