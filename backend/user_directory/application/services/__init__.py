from .draft_validation import validate_draft
from .pagination import PAGE_SIZE, Page, paginate
from .record_view import apply_view, filter_records
from .user_record_service import UserRecordService
from .user_form_controller import UserFormController

__all__ = [
    "validate_draft",
    "PAGE_SIZE",
    "Page",
    "paginate",
    "apply_view",
    "filter_records",
    "UserRecordService",
    "UserFormController",
]
