"""
Configuration and environment loading for the factor/multiple game.

- Loads settings.yml (YAML) from repo root if present; falls back to environment variables.
- Exposes SETTINGS with keys used across the project (server, sessions, history output, logging).
"""
from dataclasses import dataclass
import os
from typing import Any, Callable

from dotenv import load_dotenv
import yaml

load_dotenv()


def _repo_root() -> str:
    # this file: src/factor_game/config.py → repo root is two levels up
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))


def _load_yaml(path: str) -> dict:
    if not os.path.isfile(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return data if isinstance(data, dict) else {}


_cfg = _load_yaml(os.environ.get("FACTORGAME_SETTINGS", os.path.join(_repo_root(), "settings.yml")))


def _get(name: str, default: Any, cast: Callable[[Any], Any] | None = None) -> Any:
    if name in _cfg:
        val = _cfg[name]
        return cast(val) if cast else val
    env = os.environ.get(name)
    if env is not None:
        return cast(env) if cast else env
    return default


@dataclass(frozen=True)
class Settings:
    # HTTP server
    server_host: str
    server_port: int

    # Sessions / presentation
    session_ttl_s: int
    computer_delay_ms: int

    # Output
    history_dir: str
    log_level: str


SETTINGS = Settings(
    server_host=_get("FACTORGAME_HOST", "0.0.0.0"),
    server_port=int(_get("FACTORGAME_PORT", 8000, cast=int)),
    session_ttl_s=int(_get("FACTORGAME_SESSION_TTL_S", 3600, cast=int)),
    computer_delay_ms=int(_get("FACTORGAME_COMPUTER_DELAY_MS", 0, cast=int)),
    history_dir=_get("FACTORGAME_HISTORY_DIR", "runs"),
    log_level=str(_get("FACTORGAME_LOG_LEVEL", "INFO")).upper(),
)
