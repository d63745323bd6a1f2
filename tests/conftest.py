import pytest
from fastapi.testclient import TestClient

from giftroom.config import Config
from giftroom.domain.models import Room, User
from giftroom.main import app_factory
from testcontainers.redis import RedisContainer


@pytest.fixture(scope="session")
def redis_url():
    with RedisContainer("redis:7-alpine") as c:
        host = c.get_container_host_ip()
        port = c.get_exposed_port(6379)
        yield f"redis://{host}:{port}/0"


@pytest.fixture
def app(redis_url):
    return app_factory(redis_url, Config())


@pytest.fixture
def client(app):
    with TestClient(app) as tc:
        yield tc


@pytest.fixture
def admin():
    return User(auth_code="admin123", name="Alice", is_admin=True)


@pytest.fixture
def member():
    return User(auth_code="user123", name="Bob")


@pytest.fixture
def room(admin, member):
    return Room(
        room_id="room-1",
        name="Office party",
        room_code="JOIN1234",
        users=(admin, member),
    )
