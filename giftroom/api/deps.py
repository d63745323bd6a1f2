from typing import Annotated

from fastapi import Depends
from fastapi.requests import HTTPConnection

from giftroom.application.create_user import CreateUserInRoomUseCase
from giftroom.application.delete_user import DeleteUserUseCase


def get_delete_user_use_case(conn: HTTPConnection) -> DeleteUserUseCase:
    return conn.app.state.delete_user_use_case


def get_create_user_use_case(conn: HTTPConnection) -> CreateUserInRoomUseCase:
    return conn.app.state.create_user_use_case


DeleteUserUseCaseDep = Annotated[DeleteUserUseCase, Depends(get_delete_user_use_case)]
CreateUserUseCaseDep = Annotated[
    CreateUserInRoomUseCase, Depends(get_create_user_use_case)
]
