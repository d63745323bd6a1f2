from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _default_config_path() -> Path:
    return Path(__file__).resolve().parent.parent / "config.yaml"


def _require_int(value: Any, default: int, name: str) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be an integer") from exc


def _require_positive_int(value: Any, default: int, name: str) -> int:
    number = _require_int(value, default, name)
    if number <= 0:
        raise ValueError(f"{name} must be positive")
    return number


def _require_log_level(value: Any, default: str) -> str:
    if value is None:
        return default
    level = str(value).upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
    return level


@dataclass(frozen=True)
class RoomSettings:
    max_users: int = 20
    auth_code_length: int = 16


@dataclass(frozen=True)
class Config:
    log_level: str = "INFO"
    rooms: RoomSettings = field(default_factory=RoomSettings)

    @classmethod
    def load(cls, path: Path | str | None = None) -> "Config":
        config_path = Path(path) if path else _default_config_path()
        if not config_path.exists():
            return cls()
        raw = yaml.safe_load(config_path.read_text()) or {}
        if not isinstance(raw, dict):
            raise ValueError("config.yaml must contain a mapping")
        return cls.from_dict(raw)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        defaults = cls()
        rooms_data = data.get("rooms")
        if not isinstance(rooms_data, dict):
            rooms_data = {}
        rooms = RoomSettings(
            max_users=_require_positive_int(
                rooms_data.get("max_users"),
                defaults.rooms.max_users,
                "rooms.max_users",
            ),
            auth_code_length=_require_positive_int(
                rooms_data.get("auth_code_length"),
                defaults.rooms.auth_code_length,
                "rooms.auth_code_length",
            ),
        )
        return cls(
            log_level=_require_log_level(data.get("log_level"), defaults.log_level),
            rooms=rooms,
        )
