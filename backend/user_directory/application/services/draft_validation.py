"""Form draft validation and normalization."""

import re

from user_directory.domain.entities import FormDraft, RecordDraft
from user_directory.domain.exceptions import ValidationError

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")

MIN_AGE = 1
MAX_AGE = 120


def validate_draft(draft: FormDraft | RecordDraft) -> RecordDraft:
    """Check a draft and return its normalized form.

    Checks run in a fixed order and stop at the first failure:
    required fields, then email shape, then age range. Accepts an
    already-normalized ``RecordDraft`` too, so validating twice is harmless.
    """
    name = str(draft.name or "").strip()
    age_raw = "" if draft.age is None else str(draft.age).strip()
    address = str(draft.address or "").strip()
    email = str(draft.email or "").strip()
    phone = str(draft.phone or "").strip()

    if not name or not age_raw or not address:
        raise ValidationError("required fields missing")

    if email and not EMAIL_PATTERN.search(email):
        raise ValidationError("invalid email")

    try:
        age = int(age_raw)
    except ValueError:
        raise ValidationError("invalid age") from None
    if not MIN_AGE <= age <= MAX_AGE:
        raise ValidationError("invalid age")

    return RecordDraft(
        name=name,
        age=age,
        address=address,
        email=email or None,
        phone=phone or None,
    )
