"""Abstract document store interface (port) for the remote collection boundary."""

from abc import ABC, abstractmethod
from typing import Any


class DocumentStore(ABC):
    """Port for schemaless document persistence, grouped by collection name.

    Implementations raise ``TransportError`` when the backing store cannot
    be reached and ``EntityNotFoundError`` when updating an absent id.
    """

    @abstractmethod
    async def list_all(self, collection: str) -> list[dict[str, Any]]:
        """Return every document of a collection, each including its ``id``."""
        ...

    @abstractmethod
    async def insert(self, collection: str, fields: dict[str, Any]) -> str:
        """Store a new document and return the generated id."""
        ...

    @abstractmethod
    async def update_by_id(
        self, collection: str, document_id: str, fields: dict[str, Any]
    ) -> None:
        """Merge ``fields`` into an existing document."""
        ...

    @abstractmethod
    async def delete_by_id(self, collection: str, document_id: str) -> bool:
        """Delete a document. Returns True if deleted, False if it was absent."""
        ...
