"""Application service (use case) for the user record list.

Keeps the in-memory list of users and synchronizes it with the document
store. Every successful mutation is followed by a full reload of the
collection; the list is never patched locally.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from user_directory.application.interfaces import DocumentStore
from user_directory.application.services.draft_validation import validate_draft
from user_directory.domain.entities import FormDraft, RecordDraft, UserRecord
from user_directory.domain.exceptions import (
    EntityNotFoundError,
    PersistenceError,
    TransportError,
)
from user_directory.infrastructure.logging.colored_logger import SyncLogger, SyncOperation

logger = logging.getLogger(__name__)
slog = SyncLogger("UserRecordService")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_age(value: Any) -> int:
    if value is None or isinstance(value, bool):
        raise TypeError(f"age must be an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"age must be an integer, got {value!r}")
    return int(value)


class UserRecordService:
    """Orchestrates user record CRUD against a DocumentStore port (DI).

    ``is_busy`` is set while any store call is in flight. It does not lock:
    overlapping calls all run, and whichever reload finishes last decides
    what ``records`` holds.
    """

    def __init__(
        self,
        store: DocumentStore,
        collection: str = "users",
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._store = store
        self._collection = collection
        self._clock = clock
        self._records: list[UserRecord] = []
        self._busy = 0

    # ── State ────────────────────────────────────────────────────────

    @property
    def records(self) -> list[UserRecord]:
        """Snapshot of the current in-memory list."""
        return list(self._records)

    @property
    def total(self) -> int:
        return len(self._records)

    @property
    def is_busy(self) -> bool:
        return self._busy > 0

    def find(self, record_id: str) -> UserRecord | None:
        return next((r for r in self._records if r.id == record_id), None)

    # ── Operations ───────────────────────────────────────────────────

    async def refresh(self) -> list[UserRecord]:
        """Replace the in-memory list with the store's current contents.

        On failure the previous list is kept and ``TransportError`` is raised.
        """
        self._busy += 1
        try:
            with slog.timed(SyncOperation.REFRESH, "Reloading collection", collection=self._collection):
                documents = await self._store.list_all(self._collection)
            records = self._to_entities(documents)
        finally:
            self._busy -= 1

        self._records = records
        slog.detail("List replaced", count=len(records))
        return self.records

    async def create(self, draft: FormDraft | RecordDraft) -> UserRecord:
        """Validate, insert with fresh timestamps, then reload."""
        normalized = validate_draft(draft)
        stamp = self._stamp()
        fields = {**normalized.to_document(), "created_at": stamp, "updated_at": stamp}

        self._busy += 1
        try:
            with slog.timed(SyncOperation.CREATE, "Inserting user", name=normalized.name):
                new_id = await self._store.insert(self._collection, fields)
        except TransportError as e:
            raise PersistenceError("create", e) from e
        finally:
            self._busy -= 1

        await self._refresh_after_mutation("create")
        return self.find(new_id) or self._to_entity({"id": new_id, **fields})

    async def update(self, record_id: str, draft: FormDraft | RecordDraft) -> UserRecord:
        """Validate, update with a fresh ``updated_at``, then reload.

        ``created_at`` is never sent. A missing id surfaces as whatever the
        store raises (``EntityNotFoundError`` for the bundled store).
        """
        normalized = validate_draft(draft)
        fields = {**normalized.to_document(), "updated_at": self._stamp()}

        self._busy += 1
        try:
            with slog.timed(SyncOperation.UPDATE, "Updating user", id=record_id):
                await self._store.update_by_id(self._collection, record_id, fields)
        except EntityNotFoundError:
            raise
        except TransportError as e:
            raise PersistenceError("update", e) from e
        finally:
            self._busy -= 1

        await self._refresh_after_mutation("update")
        updated = self.find(record_id)
        if updated is not None:
            return updated
        previous = self._previous_fields(record_id)
        return self._to_entity({**previous, **fields, "id": record_id})

    async def delete(self, record_id: str) -> None:
        """Delete by id, then reload.

        An id the store reports as already absent counts as deleted.
        """
        self._busy += 1
        try:
            with slog.timed(SyncOperation.DELETE, "Deleting user", id=record_id):
                deleted = await self._store.delete_by_id(self._collection, record_id)
        except TransportError as e:
            raise PersistenceError("delete", e) from e
        finally:
            self._busy -= 1

        if not deleted:
            logger.info("User %s was already absent from '%s'", record_id, self._collection)

        await self._refresh_after_mutation("delete")

    # ── Helpers ──────────────────────────────────────────────────────

    async def _refresh_after_mutation(self, operation: str) -> None:
        """Reload after a committed mutation; a failed reload keeps the old list."""
        try:
            await self.refresh()
        except TransportError as e:
            logger.warning("Reload after %s failed, keeping previous list: %s", operation, e)

    def _stamp(self) -> str:
        return self._clock().isoformat()

    def _previous_fields(self, record_id: str) -> dict[str, Any]:
        previous = self.find(record_id)
        if previous is None:
            return {}
        return {"created_at": previous.created_at}

    def _to_entities(self, documents: list[dict[str, Any]]) -> list[UserRecord]:
        """Map store documents to entities, skipping ones without a usable age."""
        records: list[UserRecord] = []
        for document in documents:
            try:
                records.append(self._to_entity(document))
            except (TypeError, ValueError):
                logger.warning(
                    "Skipping malformed document %s in '%s': age=%r",
                    document.get("id"), self._collection, document.get("age"),
                )
        return records

    def _to_entity(self, document: dict[str, Any]) -> UserRecord:
        """Map a raw store document → domain entity.

        Raises ``ValueError`` or ``TypeError`` when ``age`` is missing or not
        an integer.
        """
        return UserRecord(
            id=str(document["id"]),
            name=document.get("name", ""),
            age=_parse_age(document.get("age")),
            address=document.get("address", ""),
            email=document.get("email") or None,
            phone=document.get("phone") or None,
            created_at=document.get("created_at", ""),
            updated_at=document.get("updated_at", ""),
        )
