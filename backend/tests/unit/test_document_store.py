"""Unit tests for SQLAlchemyDocumentStore against an in-memory SQLite database."""

from contextlib import asynccontextmanager

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from user_directory.application.services import UserRecordService
from user_directory.domain.entities import FormDraft
from user_directory.domain.exceptions import EntityNotFoundError, TransportError
from user_directory.infrastructure.database.repositories import SQLAlchemyDocumentStore
from user_directory.infrastructure.database.session import create_tables, to_async_url


@asynccontextmanager
async def _sqlite_store():
    engine = create_async_engine(to_async_url("sqlite:///:memory:"))
    await create_tables(engine)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        async with factory() as session:
            yield SQLAlchemyDocumentStore(session)
    finally:
        await engine.dispose()


def test_async_url_conversion():
    assert to_async_url("sqlite:///./users.db") == "sqlite+aiosqlite:///./users.db"
    assert to_async_url("postgresql://u:p@h/db") == "postgresql+asyncpg://u:p@h/db"
    assert to_async_url("postgresql+asyncpg://u:p@h/db") == "postgresql+asyncpg://u:p@h/db"


@pytest.mark.asyncio
async def test_insert_and_list_scoped_by_collection():
    async with _sqlite_store() as store:
        first = await store.insert("users", {"name": "Ann", "age": 30})
        second = await store.insert("users", {"name": "Bob", "age": 41})
        await store.insert("teams", {"name": "Core"})

        documents = await store.list_all("users")

    by_id = {d["id"]: d for d in documents}
    assert set(by_id) == {first, second}
    assert by_id[first] == {"id": first, "name": "Ann", "age": 30}


@pytest.mark.asyncio
async def test_insert_ignores_caller_supplied_id():
    async with _sqlite_store() as store:
        new_id = await store.insert("users", {"id": "mine", "name": "Ann"})
        documents = await store.list_all("users")

    assert new_id != "mine"
    assert documents == [{"id": new_id, "name": "Ann"}]


@pytest.mark.asyncio
async def test_update_merges_fields():
    async with _sqlite_store() as store:
        doc_id = await store.insert("users", {"name": "Ann", "age": 30, "created_at": "t0"})
        await store.update_by_id("users", doc_id, {"age": 31, "email": None})
        documents = await store.list_all("users")

    assert documents == [
        {"id": doc_id, "name": "Ann", "age": 31, "created_at": "t0", "email": None}
    ]


@pytest.mark.asyncio
async def test_update_missing_or_foreign_id_raises_not_found():
    async with _sqlite_store() as store:
        doc_id = await store.insert("teams", {"name": "Core"})

        with pytest.raises(EntityNotFoundError):
            await store.update_by_id("users", "missing", {"age": 1})
        with pytest.raises(EntityNotFoundError):
            await store.update_by_id("users", doc_id, {"age": 1})


@pytest.mark.asyncio
async def test_delete_reports_whether_anything_was_removed():
    async with _sqlite_store() as store:
        doc_id = await store.insert("users", {"name": "Ann"})

        assert await store.delete_by_id("users", doc_id) is True
        assert await store.delete_by_id("users", doc_id) is False
        assert await store.list_all("users") == []


@pytest.mark.asyncio
async def test_driver_errors_become_transport_errors():
    class BrokenSession:
        async def execute(self, stmt):
            raise OperationalError("SELECT", {}, Exception("connection refused"))

    store = SQLAlchemyDocumentStore(BrokenSession())  # type: ignore[arg-type]

    with pytest.raises(TransportError) as exc_info:
        await store.list_all("users")

    assert exc_info.value.operation == "list_all"


@pytest.mark.asyncio
async def test_record_service_round_trip_on_sqlite():
    async with _sqlite_store() as store:
        service = UserRecordService(store, collection="users")

        created = await service.create(FormDraft(name="Ann", age="30", address="X"))
        updated = await service.update(created.id, FormDraft(name="Ann", age="31", address="X"))
        assert updated.created_at == created.created_at
        assert service.records == [updated]

        await service.delete(created.id)
        assert service.records == []
