from dataclasses import dataclass


@dataclass(frozen=True)
class DeleteUserCommand:
    user_code: str
    admin_code: str


@dataclass(frozen=True)
class CreateUserInRoomCommand:
    room_code: str
    name: str
    email: str | None = None
    wish: str | None = None
