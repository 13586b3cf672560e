"""Shared fakes and fixtures for the user directory tests."""

import copy
import itertools
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from user_directory.application.interfaces import DocumentStore
from user_directory.application.services import UserRecordService
from user_directory.domain.exceptions import EntityNotFoundError, TransportError


class FakeDocumentStore(DocumentStore):
    """In-memory document store with switchable failures.

    ``fail_on`` holds operation names (``list_all``, ``insert``,
    ``update_by_id``, ``delete_by_id``) that raise ``TransportError``.
    """

    def __init__(self):
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._ids = itertools.count(1)
        self.fail_on: set[str] = set()
        self.calls: list[str] = []

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise TransportError(operation, "connection refused")

    async def list_all(self, collection: str) -> list[dict[str, Any]]:
        self._check("list_all")
        docs = self._collections.get(collection, {})
        return [{**copy.deepcopy(data), "id": doc_id} for doc_id, data in docs.items()]

    async def insert(self, collection: str, fields: dict[str, Any]) -> str:
        self._check("insert")
        doc_id = f"doc-{next(self._ids)}"
        self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(fields)
        return doc_id

    async def update_by_id(
        self, collection: str, document_id: str, fields: dict[str, Any]
    ) -> None:
        self._check("update_by_id")
        docs = self._collections.get(collection, {})
        if document_id not in docs:
            raise EntityNotFoundError(collection, document_id)
        docs[document_id].update(copy.deepcopy(fields))

    async def delete_by_id(self, collection: str, document_id: str) -> bool:
        self._check("delete_by_id")
        docs = self._collections.get(collection, {})
        return docs.pop(document_id, None) is not None

    def raw(self, collection: str, document_id: str) -> dict[str, Any]:
        return self._collections[collection][document_id]


class TickingClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime | None = None):
        self._now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self._now
        self._now += timedelta(seconds=1)
        return current


@pytest.fixture
def store() -> FakeDocumentStore:
    return FakeDocumentStore()


@pytest.fixture
def service(store: FakeDocumentStore) -> UserRecordService:
    return UserRecordService(store, collection="users", clock=TickingClock())
