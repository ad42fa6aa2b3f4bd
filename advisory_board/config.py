"""Transport configuration loaded from environment variables."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping

DEFAULT_ALLOWED_ORIGINS = ("*",)
SUPPORTED_PROTOCOL_VERSIONS = ("2024-11-05", "2025-03-26", "2025-06-18")


class ConfigError(ValueError):
    """Raised when an environment setting cannot be parsed."""


@dataclass(frozen=True)
class ServerConfig:
    name: str = "advisory-board"
    version: str = "1.0.0"
    protocol_version: str = "2024-11-05"
    log_level: str = "INFO"
    allowed_origins: tuple[str, ...] = DEFAULT_ALLOWED_ORIGINS
    host: str = "127.0.0.1"
    port: int = 8000
    max_sessions: int = 256


def _load_allowed_origins(raw: str) -> tuple[str, ...]:
    raw = raw.strip()
    if not raw:
        return DEFAULT_ALLOWED_ORIGINS
    parsed = tuple(item.strip() for item in raw.split(",") if item.strip())
    return parsed or DEFAULT_ALLOWED_ORIGINS


def _load_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError as exc:
        raise ConfigError(f"ADVISORY_BOARD_PORT must be an integer, got {raw!r}") from exc
    if port < 1 or port > 65535:
        raise ConfigError("ADVISORY_BOARD_PORT must be between 1 and 65535")
    return port


def _load_max_sessions(raw: str) -> int:
    try:
        limit = int(raw)
    except ValueError as exc:
        raise ConfigError(f"ADVISORY_BOARD_MAX_SESSIONS must be an integer, got {raw!r}") from exc
    if limit < 1:
        raise ConfigError("ADVISORY_BOARD_MAX_SESSIONS must be at least 1")
    return limit


def load_config(env: Mapping[str, str] | None = None) -> ServerConfig:
    env = os.environ if env is None else env
    defaults = ServerConfig()
    return ServerConfig(
        log_level=(env.get("ADVISORY_BOARD_LOG_LEVEL", "").strip() or defaults.log_level).upper(),
        allowed_origins=_load_allowed_origins(env.get("ADVISORY_BOARD_ALLOWED_ORIGINS", "")),
        host=env.get("ADVISORY_BOARD_HOST", "").strip() or defaults.host,
        port=_load_port(env.get("ADVISORY_BOARD_PORT", "").strip() or str(defaults.port)),
        max_sessions=_load_max_sessions(
            env.get("ADVISORY_BOARD_MAX_SESSIONS", "").strip() or str(defaults.max_sessions)
        ),
    )


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Send package logs to stderr; stdout is reserved for the stdio transport."""
    logger = logging.getLogger("advisory_board")
    logger.setLevel(level.upper())
    if not any(getattr(handler, "_advisory_board", False) for handler in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handler._advisory_board = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
