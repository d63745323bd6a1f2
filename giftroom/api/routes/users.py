from fastapi import APIRouter, Query, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from giftroom.api.deps import CreateUserUseCaseDep, DeleteUserUseCaseDep
from giftroom.application.commands import CreateUserInRoomCommand, DeleteUserCommand
from giftroom.domain.errors import ErrorKind, ValidationError
from giftroom.domain.result import Failure

users_router = APIRouter(prefix="/rooms")

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.ROOM_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.ADMIN_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.NOT_AUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorKind.ROOM_IS_FULL: status.HTTP_409_CONFLICT,
    ErrorKind.DUPLICATE_USER: status.HTTP_409_CONFLICT,
    ErrorKind.PERSISTENCE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class UserIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=40)
    email: str | None = None
    wish: str | None = Field(default=None, max_length=200)


class UserOut(BaseModel):
    auth_code: str
    name: str
    is_admin: bool
    email: str | None = None
    wish: str | None = None


def failure_response(error: ValidationError) -> JSONResponse:
    return JSONResponse(
        {"errors": [error.as_dict()]},
        STATUS_BY_KIND.get(error.kind, status.HTTP_400_BAD_REQUEST),
    )


@users_router.post(
    "/{room_code}/users",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_user_in_room(
    room_code: str, user_in: UserIn, use_case: CreateUserUseCaseDep
):
    result = await use_case.execute(
        CreateUserInRoomCommand(
            room_code=room_code,
            name=user_in.name,
            email=user_in.email,
            wish=user_in.wish,
        )
    )
    if isinstance(result, Failure):
        return failure_response(result.error)
    user = result.value
    return UserOut(
        auth_code=user.auth_code,
        name=user.name,
        is_admin=user.is_admin,
        email=user.email,
        wish=user.wish,
    )


@users_router.delete("/users/{user_code}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_code: str,
    use_case: DeleteUserUseCaseDep,
    admin_code: str = Query(..., min_length=1),
):
    result = await use_case.execute(
        DeleteUserCommand(user_code=user_code, admin_code=admin_code)
    )
    if isinstance(result, Failure):
        return failure_response(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
