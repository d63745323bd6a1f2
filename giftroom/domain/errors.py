from dataclasses import dataclass, replace
from enum import Enum


class ErrorKind(str, Enum):
    ROOM_NOT_FOUND = "room_not_found"
    ADMIN_NOT_FOUND = "admin_not_found"
    NOT_AUTHORIZED = "not_authorized"
    USER_NOT_FOUND = "user_not_found"
    ROOM_IS_FULL = "room_is_full"
    DUPLICATE_USER = "duplicate_user"
    PERSISTENCE_ERROR = "persistence_error"


@dataclass(frozen=True)
class ValidationError:
    """A single field-attributed failure returned instead of raised."""

    kind: ErrorKind
    field: str
    message: str

    def for_field(self, field: str) -> "ValidationError":
        return replace(self, field=field)

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message, "kind": self.kind.value}
