"""
Runtime configuration for the calcapi service.

Settings come from environment variables, following the common
``*_ENV`` pattern (Rails, Django, Flask, Node.js) for the runtime
environment:

    - development (default): interactive API docs enabled
    - test: same as development
    - production: API docs disabled

Usage:
    from calcapi.config import ServerConfig

    config = ServerConfig.from_env()
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

logger = logging.getLogger(__name__)


class CalcEnv(StrEnum):
    """Runtime environment values."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


class HistoryBackend(StrEnum):
    """Storage backends for calculation history."""

    MEMORY = "memory"
    SQLITE = "sqlite"


CALCAPI_ENV_VAR = "CALCAPI_ENV"

DEFAULT_PORT = 3000
DEFAULT_MAX_EXPRESSION_LENGTH = 1000
DEFAULT_MAX_NESTING_DEPTH = 100


def get_calc_env(environ: Mapping[str, str] | None = None) -> CalcEnv:
    """Get the current environment from CALCAPI_ENV.

    Defaults to development if the variable is unset or unknown.
    """
    env = os.environ if environ is None else environ
    env_value = env.get(CALCAPI_ENV_VAR, "").lower().strip()

    if env_value in ("production", "prod"):
        return CalcEnv.PRODUCTION
    elif env_value in ("test", "testing"):
        return CalcEnv.TEST
    elif env_value in ("development", "dev", ""):
        return CalcEnv.DEVELOPMENT
    else:
        logger.warning(
            "Unknown %s value '%s'. "
            "Valid values: development, test, production. Defaulting to development.",
            CALCAPI_ENV_VAR,
            env_value,
        )
        return CalcEnv.DEVELOPMENT


def _int_setting(env: Mapping[str, str], name: str, default: int, minimum: int = 1) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid integer for %s: %r, using %d", name, raw, default)
        return default
    if value < minimum:
        logger.warning("%s must be >= %d, got %d; using %d", name, minimum, value, default)
        return default
    return value


def _backend_setting(env: Mapping[str, str]) -> HistoryBackend:
    raw = env.get("CALCAPI_HISTORY_BACKEND", "").lower().strip()
    if not raw:
        return HistoryBackend.MEMORY
    try:
        return HistoryBackend(raw)
    except ValueError:
        logger.warning("Unknown CALCAPI_HISTORY_BACKEND '%s', using memory", raw)
        return HistoryBackend.MEMORY


@dataclass
class ServerConfig:
    """
    Configuration for the calcapi HTTP service.

    Groups all initialization options into a single object for cleaner APIs.
    """

    env: CalcEnv = CalcEnv.DEVELOPMENT

    # Network
    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT

    # Logging
    log_level: str = "INFO"
    log_dir: Path | None = None  # JSONL log file written here when set

    # History storage
    history_backend: HistoryBackend = HistoryBackend.MEMORY
    database_path: Path = field(default_factory=lambda: Path(".calcapi/history.db"))

    # Input limits applied ahead of the expression pipeline
    max_expression_length: int = DEFAULT_MAX_EXPRESSION_LENGTH
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH

    @property
    def docs_enabled(self) -> bool:
        return self.env != CalcEnv.PRODUCTION

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerConfig:
        """Build a config from environment variables."""
        env = os.environ if environ is None else environ
        log_dir = env.get("CALCAPI_LOG_DIR")
        port_var = "CALCAPI_PORT" if "CALCAPI_PORT" in env else "PORT"
        return cls(
            env=get_calc_env(env),
            host=env.get("CALCAPI_HOST", "127.0.0.1"),
            port=_int_setting(env, port_var, DEFAULT_PORT),
            log_level=env.get("CALCAPI_LOG_LEVEL", "INFO").upper(),
            log_dir=Path(log_dir) if log_dir else None,
            history_backend=_backend_setting(env),
            database_path=Path(env.get("CALCAPI_DATABASE_PATH", ".calcapi/history.db")),
            max_expression_length=_int_setting(
                env, "CALCAPI_MAX_EXPRESSION_LENGTH", DEFAULT_MAX_EXPRESSION_LENGTH
            ),
            max_nesting_depth=_int_setting(
                env, "CALCAPI_MAX_NESTING_DEPTH", DEFAULT_MAX_NESTING_DEPTH
            ),
        )
