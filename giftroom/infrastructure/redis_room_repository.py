import inspect
import json
import logging
from typing import Any, Awaitable, TypeVar, cast

from redis.asyncio.client import Redis
from redis.exceptions import RedisError

from giftroom.domain.errors import ErrorKind, ValidationError
from giftroom.domain.models import Room, User
from giftroom.domain.result import Failure, Result, Success

T = TypeVar("T")

logger = logging.getLogger(__name__)


async def _await(x: T | Awaitable[T]) -> T:
    if inspect.isawaitable(x):
        return await cast(Awaitable[T], x)
    return x


def _user_to_dict(user: User) -> dict[str, Any]:
    return {
        "auth_code": user.auth_code,
        "name": user.name,
        "is_admin": user.is_admin,
        "email": user.email,
        "wish": user.wish,
    }


def _room_to_json(room: Room) -> str:
    return json.dumps(
        {
            "room_id": room.room_id,
            "name": room.name,
            "room_code": room.room_code,
            "users": [_user_to_dict(user) for user in room.users],
        }
    )


def _room_from_json(raw: str) -> Room:
    data = json.loads(raw)
    users = tuple(
        User(
            auth_code=item["auth_code"],
            name=item["name"],
            is_admin=bool(item.get("is_admin")),
            email=item.get("email"),
            wish=item.get("wish"),
        )
        for item in data.get("users", [])
    )
    return Room(
        room_id=data["room_id"],
        name=data["name"],
        room_code=data["room_code"],
        users=users,
    )


def _storage_failure(exc: RedisError) -> Failure[ValidationError]:
    return Failure(
        ValidationError(
            ErrorKind.PERSISTENCE_ERROR, "room", f"Room storage error: {exc}"
        )
    )


class RedisRoomRepository:
    """Rooms stored as JSON documents with lookup keys per member and join code."""

    def __init__(self, r: Redis):
        self._r = r

    def _room_key(self, room_id: str) -> str:
        return f"room:{room_id}"

    def _member_key(self, auth_code: str) -> str:
        return f"user:{auth_code}"

    def _room_code_key(self, room_code: str) -> str:
        return f"room_code:{room_code}"

    async def _load(self, room_id: str) -> Room | None:
        raw = await _await(self._r.get(self._room_key(room_id)))
        if raw is None:
            return None
        return _room_from_json(raw)

    async def _find_by_index(self, key: str) -> Result[Room, ValidationError]:
        try:
            room_id = await _await(self._r.get(key))
            room = await self._load(room_id) if room_id else None
        except RedisError as exc:
            logger.warning("Room lookup failed", exc_info=exc)
            return _storage_failure(exc)
        if room is None:
            return Failure(
                ValidationError(ErrorKind.ROOM_NOT_FOUND, "room", "Room not found.")
            )
        return Success(room)

    async def _write(self, room: Room, previous: Room | None) -> None:
        async with self._r.pipeline(transaction=True) as pipe:
            pipe.set(self._room_key(room.room_id), _room_to_json(room))
            pipe.set(self._room_code_key(room.room_code), room.room_id)
            if previous is not None:
                current = {user.auth_code for user in room.users}
                for user in previous.users:
                    if user.auth_code not in current:
                        pipe.delete(self._member_key(user.auth_code))
                if previous.room_code != room.room_code:
                    pipe.delete(self._room_code_key(previous.room_code))
            for user in room.users:
                pipe.set(self._member_key(user.auth_code), room.room_id)
            await pipe.execute()

    async def add(self, room: Room) -> Result[None, ValidationError]:
        try:
            if await _await(self._r.exists(self._room_key(room.room_id))):
                return Failure(
                    ValidationError(
                        ErrorKind.PERSISTENCE_ERROR, "room", "Room already exists."
                    )
                )
            for user in room.users:
                if await _await(self._r.exists(self._member_key(user.auth_code))):
                    return Failure(
                        ValidationError(
                            ErrorKind.DUPLICATE_USER,
                            "auth_code",
                            "User code already belongs to another room.",
                        )
                    )
            await self._write(room, previous=None)
        except RedisError as exc:
            logger.warning("Failed to add room", exc_info=exc)
            return _storage_failure(exc)
        return Success(None)

    async def find_by_member_auth_code(
        self, auth_code: str
    ) -> Result[Room, ValidationError]:
        return await self._find_by_index(self._member_key(auth_code))

    async def find_by_room_code(self, room_code: str) -> Result[Room, ValidationError]:
        return await self._find_by_index(self._room_code_key(room_code))

    async def update(self, room: Room) -> Result[None, ValidationError]:
        try:
            previous = await self._load(room.room_id)
            if previous is None:
                return Failure(
                    ValidationError(
                        ErrorKind.PERSISTENCE_ERROR, "room", "Room does not exist."
                    )
                )
            await self._write(room, previous)
        except RedisError as exc:
            logger.warning(
                "Failed to update room", extra={"room_id": room.room_id}, exc_info=exc
            )
            return _storage_failure(exc)
        return Success(None)
