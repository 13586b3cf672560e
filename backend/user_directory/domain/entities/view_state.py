"""View state: the search, filter, sort and page selection as one immutable value."""

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any


class AgeBucket(str, Enum):
    """Fixed age ranges used by the list filter."""

    ALL = "all"
    UNDER_20 = "under20"
    FROM_20_TO_40 = "20to40"
    OVER_40 = "over40"

    def contains(self, age: int) -> bool:
        if self is AgeBucket.UNDER_20:
            return age < 20
        if self is AgeBucket.FROM_20_TO_40:
            return 20 <= age <= 40
        if self is AgeBucket.OVER_40:
            return age > 40
        return True


class SortKey(str, Enum):
    """Supported orderings of the visible list."""

    NAME_ASC = "name-asc"
    AGE_ASC = "age-asc"
    AGE_DESC = "age-desc"


@dataclass(frozen=True)
class ViewState:
    """Everything that decides which records are visible and on which page.

    Changing the search term, bucket or sort key always lands back on page 1;
    page moves are clamped to ``[1, total_pages]``.
    """

    search: str = ""
    age_bucket: AgeBucket = AgeBucket.ALL
    sort_key: SortKey = SortKey.NAME_ASC
    page: int = 1

    def with_search(self, search: str) -> "ViewState":
        return replace(self, search=search, page=1)

    def with_age_bucket(self, age_bucket: AgeBucket) -> "ViewState":
        return replace(self, age_bucket=age_bucket, page=1)

    def with_sort_key(self, sort_key: SortKey) -> "ViewState":
        return replace(self, sort_key=sort_key, page=1)

    def go_to(self, page: int, total_pages: int) -> "ViewState":
        upper = max(1, total_pages)
        return replace(self, page=min(max(page, 1), upper))

    def next_page(self, total_pages: int) -> "ViewState":
        return self.go_to(self.page + 1, total_pages)

    def previous_page(self) -> "ViewState":
        return replace(self, page=max(self.page - 1, 1))

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["age_bucket"] = self.age_bucket.value
        data["sort_key"] = self.sort_key.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ViewState":
        return cls(
            search=data.get("search", ""),
            age_bucket=AgeBucket(data.get("age_bucket", AgeBucket.ALL.value)),
            sort_key=SortKey(data.get("sort_key", SortKey.NAME_ASC.value)),
            page=int(data.get("page", 1)),
        )
