"""Tests for ForumOperations against a fake store.

Covers how tagged store results become domain exceptions and that invalid
IDs never reach the store.
"""
import pytest
from datetime import datetime, timezone

from app.domain.exceptions import EditConflictError, EntityNotFoundError, StoreError
from app.domain.forum_operations import ForumOperations
from app.domain.forum_store import StoreResult


CREATED_AT = datetime(2026, 10, 16, 9, 30, tzinfo=timezone.utc)


def stored_row(**overrides):
    row = {
        "id": 7,
        "created_at": CREATED_AT,
        "name": "Belize Coding Circle",
        "level": "University",
        "contact": "Ana Chan",
        "phone": "+501 622-1234",
        "email": "hello@codingcircle.bz",
        "website": "https://codingcircle.bz",
        "address": "12 Regent Street, Belize City",
        "mode": ["in-person"],
        "version": 1,
    }
    row.update(overrides)
    return row


class TestInsert:

    def test_writes_assigned_fields_back(self, fake_store_factory, make_forum):
        store = fake_store_factory(
            StoreResult.success({"id": 7, "created_at": CREATED_AT, "version": 1})
        )
        forum = make_forum()

        returned = ForumOperations(store).insert(forum)

        assert returned is forum
        assert forum.id == 7
        assert forum.created_at == CREATED_AT
        assert forum.version == 1

    def test_sends_only_client_fields(self, fake_store_factory, make_forum):
        store = fake_store_factory(
            StoreResult.success({"id": 1, "created_at": CREATED_AT, "version": 1})
        )
        ForumOperations(store).insert(make_forum())

        name, (values,) = store.calls[0]
        assert name == "insert"
        assert set(values) == {"name", "level", "contact", "phone", "email", "website", "address", "mode"}

    def test_store_error_raises(self, fake_store_factory, make_forum):
        store = fake_store_factory(StoreResult.error("OperationalError: connection refused"))

        with pytest.raises(StoreError) as exc_info:
            ForumOperations(store).insert(make_forum())
        assert "connection refused" in exc_info.value.detail


class TestGet:

    @pytest.mark.parametrize("forum_id", [0, -1, -999])
    def test_non_positive_id_skips_store(self, fake_store_factory, forum_id):
        store = fake_store_factory()

        with pytest.raises(EntityNotFoundError):
            ForumOperations(store).get(forum_id)
        assert store.calls == []

    def test_returns_populated_entity(self, fake_store_factory):
        store = fake_store_factory(StoreResult.success(stored_row()))

        forum = ForumOperations(store).get(7)

        assert store.calls == [("fetch", (7,))]
        assert forum.id == 7
        assert forum.created_at == CREATED_AT
        assert forum.mode == ["in-person"]
        assert forum.version == 1

    def test_missing_row_raises_not_found(self, fake_store_factory):
        store = fake_store_factory(StoreResult.not_found())
        with pytest.raises(EntityNotFoundError):
            ForumOperations(store).get(999999)

    def test_store_error_raises(self, fake_store_factory):
        store = fake_store_factory(StoreResult.error("boom"))
        with pytest.raises(StoreError):
            ForumOperations(store).get(7)


class TestUpdate:

    def test_writes_new_version_back(self, fake_store_factory, make_forum):
        store = fake_store_factory(StoreResult.success({"version": 4}))
        forum = make_forum(id=7, version=3)

        ForumOperations(store).update(forum)

        name, (forum_id, expected_version, _values) = store.calls[0]
        assert (name, forum_id, expected_version) == ("update", 7, 3)
        assert forum.version == 4

    def test_missing_row_raises_not_found(self, fake_store_factory, make_forum):
        store = fake_store_factory(StoreResult.not_found())
        with pytest.raises(EntityNotFoundError):
            ForumOperations(store).update(make_forum(id=7, version=1))

    def test_version_mismatch_raises_conflict(self, fake_store_factory, make_forum):
        store = fake_store_factory(StoreResult.conflict())
        with pytest.raises(EditConflictError):
            ForumOperations(store).update(make_forum(id=7, version=1))

    def test_unsaved_forum_raises_not_found(self, fake_store_factory, make_forum):
        store = fake_store_factory()
        with pytest.raises(EntityNotFoundError):
            ForumOperations(store).update(make_forum())
        assert store.calls == []


class TestDelete:

    def test_deletes(self, fake_store_factory):
        store = fake_store_factory(StoreResult.success())
        ForumOperations(store).delete(7)
        assert store.calls == [("delete", (7,))]

    def test_missing_row_raises_not_found(self, fake_store_factory):
        store = fake_store_factory(StoreResult.not_found())
        with pytest.raises(EntityNotFoundError):
            ForumOperations(store).delete(7)

    def test_non_positive_id_skips_store(self, fake_store_factory):
        store = fake_store_factory()
        with pytest.raises(EntityNotFoundError):
            ForumOperations(store).delete(0)
        assert store.calls == []


def test_ping_reports_store_health(fake_store_factory):
    assert ForumOperations(fake_store_factory(StoreResult.success())).ping() is True
    assert ForumOperations(fake_store_factory(StoreResult.error("down"))).ping() is False
