from __future__ import annotations

import os
from pathlib import Path


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def load_env_file(path: str | os.PathLike[str] = ".env") -> dict[str, str]:
    """Fill os.environ from a dotenv file, leaving variables that are already set.

    Returns the pairs that were actually applied.
    """
    env_path = Path(path)
    if not env_path.exists():
        return {}

    applied: dict[str, str] = {}
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        if line.startswith("export "):
            line = line[len("export "):]
        key, value = (part.strip() for part in line.split("=", 1))
        if not key or key in os.environ:
            continue
        os.environ[key] = applied[key] = _strip_quotes(value)
    return applied
