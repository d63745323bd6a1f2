import logging
import secrets

from giftroom.application.commands import CreateUserInRoomCommand
from giftroom.application.ports import RoomRepository
from giftroom.config import RoomSettings
from giftroom.domain.errors import ErrorKind, ValidationError
from giftroom.domain.models import User
from giftroom.domain.result import Failure, Result, Success

logger = logging.getLogger(__name__)


class CreateUserInRoomUseCase:
    def __init__(
        self, repository: RoomRepository, settings: RoomSettings | None = None
    ):
        self._repository = repository
        self._settings = settings or RoomSettings()

    def make_auth_code(self) -> str:
        length = self._settings.auth_code_length
        return secrets.token_hex((length + 1) // 2)[:length]

    async def execute(
        self, command: CreateUserInRoomCommand
    ) -> Result[User, ValidationError]:
        found = await self._repository.find_by_room_code(command.room_code)
        if isinstance(found, Failure):
            logger.warning("Room lookup failed for join request")
            return Failure(
                ValidationError(
                    ErrorKind.ROOM_NOT_FOUND, "room_code", found.error.message
                )
            )
        room = found.value

        user = User(
            auth_code=self.make_auth_code(),
            name=command.name,
            is_admin=False,
            email=command.email,
            wish=command.wish,
        )
        added = room.add_user(user, max_users=self._settings.max_users)
        if isinstance(added, Failure):
            logger.warning(
                "Rejected join request",
                extra={"room_id": room.room_id, "kind": added.error.kind.value},
            )
            return added

        updated = await self._repository.update(added.value)
        if isinstance(updated, Failure):
            logger.warning(
                "Failed to persist room after join",
                extra={"room_id": room.room_id, "reason": updated.error.message},
            )
            return Failure(
                ValidationError(
                    ErrorKind.PERSISTENCE_ERROR, "room", updated.error.message
                )
            )

        logger.info("User joined room", extra={"room_id": room.room_id})
        return Success(user)
