from contextlib import asynccontextmanager
import os

from fastapi import FastAPI
import redis.asyncio as redis

from giftroom.api.routes.users import users_router
from giftroom.application.create_user import CreateUserInRoomUseCase
from giftroom.application.delete_user import DeleteUserUseCase
from giftroom.config import Config
from giftroom.env import load_env_file
from giftroom.infrastructure.redis_room_repository import RedisRoomRepository
from giftroom.log import configure_logging


def app_factory(redis_url: str, config: Config | None = None) -> FastAPI:
    config = config or Config.load()
    configure_logging(config.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.redis = redis.from_url(
            redis_url,
            decode_responses=True,
            health_check_interval=30,
        )
        app.state.room_repository = RedisRoomRepository(app.state.redis)
        app.state.delete_user_use_case = DeleteUserUseCase(app.state.room_repository)
        app.state.create_user_use_case = CreateUserInRoomUseCase(
            app.state.room_repository, config.rooms
        )
        try:
            yield
        finally:
            await app.state.redis.aclose()

    app = FastAPI(lifespan=lifespan)
    app.include_router(users_router)

    return app


load_env_file()
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")

app = app_factory(REDIS_URL)
