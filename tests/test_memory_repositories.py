"""
Tests for the in-memory repository adapters.
"""
import asyncio
from datetime import timedelta

import pytest

from conftest import BASE_TIME
from core.domain import RepositoryException
from restock.domain import RestockItem, RestockSession, SessionStatus
from restock.infrastructure import InMemorySessionRepository, prefixed_id_generator


def make_session(session_id, user_id="user-1", offset=0) -> RestockSession:
    return RestockSession.create(session_id, user_id, created_at=BASE_TIME + timedelta(minutes=offset))


def test_saved_sessions_are_snapshots():
    repository = InMemorySessionRepository()
    session = make_session("s-1")
    asyncio.run(repository.save(session))

    loaded = asyncio.run(repository.find_by_id("s-1"))

    assert loaded == session
    assert loaded is not session
    assert loaded.to_dict() == session.to_dict()


def test_find_by_user_newest_first():
    repository = InMemorySessionRepository()
    for session in (make_session("old", offset=0), make_session("new", offset=5), make_session("x", "user-2")):
        asyncio.run(repository.save(session))

    sessions = asyncio.run(repository.find_by_user_id("user-1"))

    assert [s.id for s in sessions] == ["new", "old"]


def test_find_unfinished_excludes_sent():
    repository = InMemorySessionRepository()
    item = RestockItem("p-1", "Flour", 1, "s-1", "Acme", "a@acme.com")
    done = make_session("done").add_item(item).generate_emails().mark_completed()
    asyncio.run(repository.save(done))
    asyncio.run(repository.save(make_session("open", offset=1)))

    unfinished = asyncio.run(repository.find_unfinished_by_user_id("user-1"))

    assert [s.id for s in unfinished] == ["open"]
    assert asyncio.run(repository.find_by_id("done")).status is SessionStatus.SENT


def test_delete_and_missing():
    repository = InMemorySessionRepository()
    asyncio.run(repository.save(make_session("s-1")))

    asyncio.run(repository.delete("s-1"))
    asyncio.run(repository.delete("s-1"))

    assert asyncio.run(repository.find_by_id("s-1")) is None


def test_corrupt_record_raises_repository_exception():
    repository = InMemorySessionRepository()
    repository._store._records["bad"] = {"id": "bad", "user_id": "", "name": "x"}

    with pytest.raises(RepositoryException):
        asyncio.run(repository.find_by_id("bad"))


def test_prefixed_id_generator():
    generate = prefixed_id_generator("session")

    first, second = generate(), generate()

    assert first.startswith("session_")
    assert first != second
