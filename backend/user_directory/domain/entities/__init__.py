from .user_record import FormDraft, RecordDraft, UserRecord
from .view_state import AgeBucket, SortKey, ViewState

__all__ = [
    "FormDraft",
    "RecordDraft",
    "UserRecord",
    "AgeBucket",
    "SortKey",
    "ViewState",
]
