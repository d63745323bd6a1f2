from __future__ import annotations

from dataclasses import dataclass, field, replace

from giftroom.domain.errors import ErrorKind, ValidationError
from giftroom.domain.result import Failure, Result, Success


@dataclass(frozen=True)
class User:
    auth_code: str
    name: str
    is_admin: bool = False
    email: str | None = None
    wish: str | None = None


@dataclass(frozen=True)
class Room:
    """Room aggregate.

    ``users`` keeps join order. The tuple is never edited in place; ``add_user``
    and ``remove_user`` hand back a new ``Room`` and leave this one untouched.
    """

    room_id: str
    name: str
    room_code: str
    users: tuple[User, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.users, tuple):
            object.__setattr__(self, "users", tuple(self.users))

    @property
    def admins(self) -> tuple[User, ...]:
        return tuple(user for user in self.users if user.is_admin)

    def find_user(self, auth_code: str) -> User | None:
        for user in self.users:
            if user.auth_code == auth_code:
                return user
        return None

    def add_user(
        self, user: User, max_users: int | None = None
    ) -> Result[Room, ValidationError]:
        if self.find_user(user.auth_code) is not None:
            return Failure(
                ValidationError(
                    ErrorKind.DUPLICATE_USER,
                    "auth_code",
                    "User with this code is already in the room.",
                )
            )
        if max_users is not None and len(self.users) >= max_users:
            return Failure(
                ValidationError(
                    ErrorKind.ROOM_IS_FULL,
                    "room_code",
                    f"Room cannot hold more than {max_users} users.",
                )
            )
        return Success(replace(self, users=self.users + (user,)))

    def remove_user(self, auth_code: str) -> Result[Room, ValidationError]:
        remaining = tuple(user for user in self.users if user.auth_code != auth_code)
        if len(remaining) == len(self.users):
            return Failure(
                ValidationError(
                    ErrorKind.USER_NOT_FOUND,
                    "auth_code",
                    "User not found in this room.",
                )
            )
        return Success(replace(self, users=remaining))
