"""Form controller for the user form and its delete confirmation."""

import logging
from dataclasses import fields as dataclass_fields
from typing import Any

from user_directory.application.services.draft_validation import validate_draft
from user_directory.application.services.user_record_service import UserRecordService
from user_directory.domain.entities import FormDraft, UserRecord
from user_directory.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

_DRAFT_FIELDS = frozenset(f.name for f in dataclass_fields(FormDraft))


class UserFormController:
    """Holds the user form's draft and turns a submit into a create or update.

    With ``editing_id`` unset a submit creates a record, otherwise it
    updates that record. A failed submit keeps the draft and edit mode so
    the user can correct it; a successful one clears both.
    """

    def __init__(self, service: UserRecordService):
        self._service = service
        self.draft = FormDraft()
        self.editing_id: str | None = None
        self.pending_delete_id: str | None = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    @property
    def is_submitting(self) -> bool:
        return self._service.is_busy

    # ── Draft ────────────────────────────────────────────────────────

    def set_field(self, name: str, value: str | None) -> None:
        if name not in _DRAFT_FIELDS:
            raise ValueError(f"Unknown form field: {name}")
        setattr(self.draft, name, "" if value is None else str(value))

    def load_draft(self, values: dict[str, Any], editing_id: str | None = None) -> None:
        """Fill the draft from raw input; unknown keys are ignored."""
        self.draft = FormDraft()
        for name, value in values.items():
            if name in _DRAFT_FIELDS:
                self.set_field(name, value)
        self.editing_id = editing_id

    def load_for_edit(self, record: UserRecord) -> None:
        self.draft = FormDraft.from_record(record)
        self.editing_id = record.id

    def cancel(self) -> None:
        """Drop the draft and leave edit mode without saving anything."""
        self.draft = FormDraft()
        self.editing_id = None

    async def submit(self) -> UserRecord:
        normalized = validate_draft(self.draft)

        if self.editing_id is not None:
            record = await self._service.update(self.editing_id, normalized)
        else:
            record = await self._service.create(normalized)

        self.cancel()
        return record

    # ── Delete confirmation ──────────────────────────────────────────

    def request_delete(self, record_id: str) -> None:
        self.pending_delete_id = record_id

    def dismiss_delete(self) -> None:
        self.pending_delete_id = None

    async def confirm_delete(self) -> str:
        """Delete the pending record and return its id."""
        if self.pending_delete_id is None:
            raise ValidationError("no delete pending")
        record_id = self.pending_delete_id
        await self._service.delete(record_id)
        self.pending_delete_id = None
        if self.editing_id == record_id:
            logger.debug("Deleted the record being edited, clearing the form")
            self.cancel()
        return record_id
