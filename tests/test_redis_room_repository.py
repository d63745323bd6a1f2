import json

import pytest
import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError

from giftroom.domain.errors import ErrorKind
from giftroom.domain.models import Room, User
from giftroom.domain.result import Failure, Success
from giftroom.infrastructure.redis_room_repository import RedisRoomRepository


pytestmark = pytest.mark.anyio


@pytest.fixture
async def redis_client(redis_url):
    client = redis.from_url(redis_url, decode_responses=True)
    try:
        await client.flushdb()
        yield client
    finally:
        await client.aclose()


async def test_add_and_find_by_member(redis_client, room):
    repository = RedisRoomRepository(redis_client)

    assert await repository.add(room) == Success(None)

    assert await repository.find_by_member_auth_code("user123") == Success(room)
    assert await repository.find_by_member_auth_code("admin123") == Success(room)
    assert await redis_client.get("user:admin123") == "room-1"


async def test_add_twice_fails(redis_client, room):
    repository = RedisRoomRepository(redis_client)
    await repository.add(room)

    result = await repository.add(room)

    assert isinstance(result, Failure)
    assert result.error.kind is ErrorKind.PERSISTENCE_ERROR


async def test_find_by_room_code(redis_client, room):
    repository = RedisRoomRepository(redis_client)
    await repository.add(room)

    assert await repository.find_by_room_code("JOIN1234") == Success(room)


async def test_unknown_member_is_not_found(redis_client):
    repository = RedisRoomRepository(redis_client)

    result = await repository.find_by_member_auth_code("nobody")

    assert isinstance(result, Failure)
    assert result.error.kind is ErrorKind.ROOM_NOT_FOUND


async def test_update_drops_removed_member_index(redis_client, room, admin):
    repository = RedisRoomRepository(redis_client)
    await repository.add(room)
    updated = room.remove_user("user123").value

    assert await repository.update(updated) == Success(None)

    assert await redis_client.exists("user:user123") == 0
    assert await repository.find_by_member_auth_code("admin123") == Success(updated)
    stored = json.loads(await redis_client.get("room:room-1"))
    assert [user["auth_code"] for user in stored["users"]] == ["admin123"]


async def test_update_indexes_new_member(redis_client, room):
    repository = RedisRoomRepository(redis_client)
    await repository.add(room)
    updated = room.add_user(User(auth_code="new-1", name="Carol")).value

    await repository.update(updated)

    assert await repository.find_by_member_auth_code("new-1") == Success(updated)


async def test_update_of_unknown_room_fails(redis_client):
    repository = RedisRoomRepository(redis_client)

    result = await repository.update(
        Room(room_id="ghost", name="Ghost", room_code="GHOST")
    )

    assert isinstance(result, Failure)
    assert result.error.kind is ErrorKind.PERSISTENCE_ERROR
    assert result.error.message == "Room does not exist."
    assert await redis_client.exists("room:ghost") == 0


async def test_redis_errors_become_failures(mocker, room):
    client = mocker.Mock()
    client.get = mocker.AsyncMock(
        side_effect=RedisConnectionError("connection refused")
    )
    repository = RedisRoomRepository(client)

    found = await repository.find_by_member_auth_code("admin123")
    updated = await repository.update(room)

    assert isinstance(found, Failure)
    assert found.error.kind is ErrorKind.PERSISTENCE_ERROR
    assert isinstance(updated, Failure)
    assert "connection refused" in updated.error.message


async def test_add_rejects_member_code_owned_by_another_room(redis_client, room, admin):
    repository = RedisRoomRepository(redis_client)
    await repository.add(room)
    other = Room(room_id="room-2", name="Other", room_code="JOIN5678", users=(admin,))

    result = await repository.add(other)

    assert isinstance(result, Failure)
    assert result.error.kind is ErrorKind.DUPLICATE_USER
    assert await redis_client.get("user:admin123") == "room-1"
    assert await redis_client.exists("room:room-2") == 0
