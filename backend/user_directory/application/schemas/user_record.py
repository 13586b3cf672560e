"""Pydantic DTOs (Data Transfer Objects) for the user directory."""

from pydantic import BaseModel, Field

from user_directory.domain.entities import AgeBucket, SortKey


# ── Request Schemas ──────────────────────────────────────────────────


class UserDraftRequest(BaseModel):
    """Raw form values, validated by the form controller rather than here."""

    name: str = Field("", examples=["Ann"])
    age: int | str | None = Field(None, examples=[30])
    address: str = Field("", examples=["Jl. Merdeka 1"])
    email: str | None = Field(None, examples=["ann@example.com"])
    phone: str | None = Field(None, examples=["+62 812 0000 0000"])


# ── Response Schemas ─────────────────────────────────────────────────


class UserRecordResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    name: str
    age: int
    address: str
    email: str | None
    phone: str | None
    created_at: str
    updated_at: str

    model_config = {"from_attributes": True}


class ViewStateSchema(BaseModel):
    """The search, filter, sort and page selection the page was built from."""

    search: str = ""
    age_bucket: AgeBucket = AgeBucket.ALL
    sort_key: SortKey = SortKey.NAME_ASC
    page: int = 1


class UserPageResponse(BaseModel):
    """One page of the filtered, sorted user list."""

    items: list[UserRecordResponse] = []
    page: int
    page_size: int
    total_pages: int
    total_matches: int
    total_records: int
    view: ViewStateSchema
