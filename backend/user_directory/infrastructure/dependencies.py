"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from user_directory.config import get_settings
from user_directory.application.interfaces import DocumentStore
from user_directory.application.services import UserFormController, UserRecordService
from user_directory.infrastructure.database.session import get_db_session
from user_directory.infrastructure.database.repositories import SQLAlchemyDocumentStore


async def get_document_store(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[DocumentStore, None]:
    """Provides the document store bound to the request's session."""
    yield SQLAlchemyDocumentStore(session)


async def get_user_record_service(
    store: DocumentStore = Depends(get_document_store),
) -> AsyncGenerator[UserRecordService, None]:
    """Provides a UserRecordService on the configured users collection."""
    settings = get_settings()
    yield UserRecordService(store, collection=settings.users_collection)


async def get_user_form_controller(
    service: UserRecordService = Depends(get_user_record_service),
) -> AsyncGenerator[UserFormController, None]:
    """Provides a fresh form controller sharing the request's record service."""
    yield UserFormController(service)
