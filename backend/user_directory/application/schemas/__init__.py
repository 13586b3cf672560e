from .user_record import (
    UserDraftRequest,
    UserPageResponse,
    UserRecordResponse,
    ViewStateSchema,
)

__all__ = [
    "UserDraftRequest",
    "UserPageResponse",
    "UserRecordResponse",
    "ViewStateSchema",
]
