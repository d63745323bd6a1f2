import logging

from giftroom.application.commands import DeleteUserCommand
from giftroom.application.ports import RoomRepository
from giftroom.domain.errors import ErrorKind, ValidationError
from giftroom.domain.result import Failure, Result, Success

logger = logging.getLogger(__name__)


class DeleteUserUseCase:
    """Remove a member from the room on behalf of that room's admin.

    Every expected failure comes back as ``Failure(ValidationError)``. The room
    is read once and, only when the removal itself succeeds, written once.
    """

    def __init__(self, repository: RoomRepository):
        self._repository = repository

    async def execute(
        self, command: DeleteUserCommand
    ) -> Result[None, ValidationError]:
        admin_code = command.admin_code
        user_code = command.user_code

        found = await self._repository.find_by_member_auth_code(admin_code)
        if isinstance(found, Failure):
            logger.warning("Room lookup failed for delete request")
            return Failure(
                ValidationError(
                    ErrorKind.ROOM_NOT_FOUND, "admin_code", found.error.message
                )
            )
        room = found.value
        log_extra = {"room_id": room.room_id}

        admin = room.find_user(admin_code)
        if admin is None:
            logger.warning("Admin missing from looked up room", extra=log_extra)
            return Failure(
                ValidationError(
                    ErrorKind.ADMIN_NOT_FOUND,
                    "admin_code",
                    "Admin not found in this room.",
                )
            )

        if not admin.is_admin:
            logger.warning("Non-admin attempted to delete a user", extra=log_extra)
            return Failure(
                ValidationError(
                    ErrorKind.NOT_AUTHORIZED,
                    "admin_code",
                    "Only admin can delete users.",
                )
            )

        removed = room.remove_user(user_code)
        if isinstance(removed, Failure):
            logger.warning("Delete target not in room", extra=log_extra)
            return Failure(removed.error.for_field("user_code"))

        updated = await self._repository.update(removed.value)
        if isinstance(updated, Failure):
            logger.warning(
                "Failed to persist room after user removal",
                extra={**log_extra, "reason": updated.error.message},
            )
            return Failure(
                ValidationError(
                    ErrorKind.PERSISTENCE_ERROR, "room", updated.error.message
                )
            )

        logger.info("User removed from room", extra=log_extra)
        return Success(None)
