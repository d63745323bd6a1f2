from typing import Protocol

from giftroom.domain.errors import ValidationError
from giftroom.domain.models import Room
from giftroom.domain.result import Result


class RoomRepository(Protocol):
    async def find_by_member_auth_code(
        self, auth_code: str
    ) -> Result[Room, ValidationError]: ...

    async def find_by_room_code(
        self, room_code: str
    ) -> Result[Room, ValidationError]: ...

    async def update(self, room: Room) -> Result[None, ValidationError]: ...
