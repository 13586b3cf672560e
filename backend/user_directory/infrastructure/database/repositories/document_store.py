"""Concrete DocumentStore implementation backed by SQLAlchemy."""

import logging
from typing import Any
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from user_directory.application.interfaces import DocumentStore
from user_directory.domain.exceptions import EntityNotFoundError, TransportError
from user_directory.infrastructure.database.models import DocumentModel

logger = logging.getLogger(__name__)


class SQLAlchemyDocumentStore(DocumentStore):
    """Implements the DocumentStore port on a single JSON-payload table.

    Each write is flushed immediately; the surrounding session (one per
    request) commits on success. Driver errors surface as ``TransportError``.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_document(self, model: DocumentModel) -> dict[str, Any]:
        """Map ORM model → plain document dict with its id."""
        return {**(model.data or {}), "id": model.id}

    async def list_all(self, collection: str) -> list[dict[str, Any]]:
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.collection == collection)
            .order_by(DocumentModel.stored_at, DocumentModel.id)
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise TransportError("list_all", str(e)) from e
        return [self._to_document(row) for row in result.scalars().all()]

    async def insert(self, collection: str, fields: dict[str, Any]) -> str:
        data = {k: v for k, v in fields.items() if k != "id"}
        model = DocumentModel(id=str(uuid4()), collection=collection, data=data)
        try:
            self._session.add(model)
            await self._session.flush()
        except SQLAlchemyError as e:
            raise TransportError("insert", str(e)) from e
        logger.debug("Inserted document %s into '%s'", model.id, collection)
        return model.id

    async def update_by_id(
        self, collection: str, document_id: str, fields: dict[str, Any]
    ) -> None:
        try:
            model = await self._session.get(DocumentModel, document_id)
            if model is None or model.collection != collection:
                raise EntityNotFoundError(collection, document_id)
            # Reassign instead of mutating so the JSON column is marked dirty
            model.data = {**(model.data or {}), **{k: v for k, v in fields.items() if k != "id"}}
            await self._session.flush()
        except SQLAlchemyError as e:
            raise TransportError("update_by_id", str(e)) from e

    async def delete_by_id(self, collection: str, document_id: str) -> bool:
        try:
            model = await self._session.get(DocumentModel, document_id)
            if model is None or model.collection != collection:
                return False
            await self._session.delete(model)
            await self._session.flush()
        except SQLAlchemyError as e:
            raise TransportError("delete_by_id", str(e)) from e
        return True
