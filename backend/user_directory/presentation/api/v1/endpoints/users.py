"""User directory endpoints — filtered list, create, update, delete."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from user_directory.application.schemas import (
    UserDraftRequest,
    UserPageResponse,
    UserRecordResponse,
    ViewStateSchema,
)
from user_directory.application.services import (
    UserFormController,
    UserRecordService,
    apply_view,
    paginate,
)
from user_directory.config import get_settings
from user_directory.domain.entities import AgeBucket, SortKey, UserRecord, ViewState
from user_directory.domain.exceptions import (
    EntityNotFoundError,
    PersistenceError,
    TransportError,
    ValidationError,
)
from user_directory.infrastructure.dependencies import (
    get_user_form_controller,
    get_user_record_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


def _to_response(record: UserRecord) -> UserRecordResponse:
    return UserRecordResponse.model_validate(record, from_attributes=True)


def _unavailable(e: Exception) -> HTTPException:
    logger.warning("User store unavailable: %s", e)
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="The user store is unavailable, please try again",
    )


@router.get("", response_model=UserPageResponse)
async def list_users(
    search: str = Query("", description="Case-insensitive match on name, email, address"),
    age_bucket: AgeBucket = Query(AgeBucket.ALL, description="Age range filter"),
    sort_key: SortKey = Query(SortKey.NAME_ASC, alias="sort", description="Ordering of the list"),
    page: int = Query(1, ge=1),
    service: UserRecordService = Depends(get_user_record_service),
) -> UserPageResponse:
    """Reload the users and return one page of the filtered, sorted list."""
    try:
        await service.refresh()
    except TransportError as e:
        raise _unavailable(e)

    view = ViewState(search=search, age_bucket=age_bucket, sort_key=sort_key, page=page)
    visible = apply_view(service.records, view)
    window = paginate(visible, page=view.page, page_size=get_settings().page_size)
    view = view.go_to(window.page, window.total_pages)

    return UserPageResponse(
        items=[_to_response(r) for r in window.items],
        page=window.page,
        page_size=window.page_size,
        total_pages=window.total_pages,
        total_matches=window.total_items,
        total_records=service.total,
        view=ViewStateSchema(**view.to_dict()),
    )


@router.post("", response_model=UserRecordResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserDraftRequest,
    controller: UserFormController = Depends(get_user_form_controller),
) -> UserRecordResponse:
    """Submit the form in create mode."""
    controller.load_draft(data.model_dump())
    try:
        record = await controller.submit()
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)
    except PersistenceError as e:
        raise _unavailable(e)
    return _to_response(record)


@router.put("/{record_id}", response_model=UserRecordResponse)
async def update_user(
    record_id: str,
    data: UserDraftRequest,
    controller: UserFormController = Depends(get_user_form_controller),
) -> UserRecordResponse:
    """Submit the form in edit mode for ``record_id``."""
    controller.load_draft(data.model_dump(), editing_id=record_id)
    try:
        record = await controller.submit()
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceError as e:
        raise _unavailable(e)
    return _to_response(record)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    record_id: str,
    controller: UserFormController = Depends(get_user_form_controller),
) -> None:
    """Delete a user. The client asks for confirmation before calling this."""
    controller.request_delete(record_id)
    try:
        await controller.confirm_delete()
    except PersistenceError as e:
        raise _unavailable(e)
