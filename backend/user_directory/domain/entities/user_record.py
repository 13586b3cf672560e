"""Domain entities for the user directory, free of framework dependencies."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserRecord:
    """A user as held in the in-memory list.

    Timestamps are ISO-8601 strings stamped by the record service; ``id`` is
    assigned by the document store and never changes.
    """

    id: str
    name: str
    age: int
    address: str
    email: str | None = None
    phone: str | None = None
    created_at: str = ""
    updated_at: str = ""


@dataclass(frozen=True)
class RecordDraft:
    """Validated, normalized editable fields ready to be persisted."""

    name: str
    age: int
    address: str
    email: str | None = None
    phone: str | None = None

    def to_document(self) -> dict:
        """Document fields; optionals are written as explicit nulls."""
        return {
            "name": self.name,
            "age": self.age,
            "address": self.address,
            "email": self.email,
            "phone": self.phone,
        }


@dataclass
class FormDraft:
    """Raw form values as typed by the user; every field is a string."""

    name: str = ""
    age: str = ""
    address: str = ""
    email: str = ""
    phone: str = ""

    @classmethod
    def from_record(cls, record: UserRecord) -> "FormDraft":
        return cls(
            name=record.name,
            age=str(record.age),
            address=record.address,
            email=record.email or "",
            phone=record.phone or "",
        )
