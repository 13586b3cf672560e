"""View-filter pipeline: search, age bucket, then sort.

Pure functions over an in-memory list of ``UserRecord``; the output is always
a fresh list and the input is never mutated.
"""

import unicodedata
from collections.abc import Iterable

from user_directory.domain.entities import AgeBucket, SortKey, UserRecord, ViewState


def matches_search(record: UserRecord, term: str) -> bool:
    """Case-insensitive substring match on name, email and address."""
    needle = term.strip().casefold()
    if not needle:
        return True
    haystacks = [record.name, record.address]
    if record.email:
        haystacks.append(record.email)
    return any(needle in value.casefold() for value in haystacks)


def _fold_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def _name_key(record: UserRecord) -> tuple[str, str]:
    """Accent- and case-insensitive, with the folded full name breaking ties."""
    return _fold_accents(record.name), record.name.casefold()


def sort_records(records: Iterable[UserRecord], sort_key: SortKey) -> list[UserRecord]:
    """Stable sort; ties keep their incoming relative order."""
    if sort_key is SortKey.AGE_ASC:
        return sorted(records, key=lambda r: r.age)
    if sort_key is SortKey.AGE_DESC:
        # reverse=True would flip the order of ties
        return sorted(records, key=lambda r: -r.age)
    return sorted(records, key=_name_key)


def filter_records(
    records: Iterable[UserRecord],
    search: str = "",
    age_bucket: AgeBucket = AgeBucket.ALL,
    sort_key: SortKey = SortKey.NAME_ASC,
) -> list[UserRecord]:
    """Run the full pipeline: text search, age bucket, sort."""
    visible = [r for r in records if matches_search(r, search)]
    visible = [r for r in visible if age_bucket.contains(r.age)]
    return sort_records(visible, sort_key)


def apply_view(records: Iterable[UserRecord], state: ViewState) -> list[UserRecord]:
    """Convenience wrapper taking the whole view state."""
    return filter_records(
        records,
        search=state.search,
        age_bucket=state.age_bucket,
        sort_key=state.sort_key,
    )
