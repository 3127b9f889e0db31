import logging
import os
from dataclasses import dataclass
from typing import Optional

from pingprobe.errors import ConfigurationError
from pingprobe.schemas import DEFAULT_ATTEMPTS, DEFAULT_INTERVAL_S, DEFAULT_TIMEOUT_S


def _env_number(env, name: str, cast, default):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ConfigurationError(f"{name}={raw!r} is not a valid {cast.__name__}") from None


def _env_log_level(env, name: str, default: str) -> str:
    level = (env.get(name) or default).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"{name}={env.get(name)!r} is not a logging level name")
    return level


@dataclass
class Settings:
    ping_bin: Optional[str] = None     # None -> look up "ping" on PATH
    platform: Optional[str] = None     # None -> derive from sys.platform
    attempts: int = DEFAULT_ATTEMPTS
    timeout_s: float = DEFAULT_TIMEOUT_S
    interval_s: float = DEFAULT_INTERVAL_S

    # slack on top of attempts * (timeout + interval) before the child is killed
    grace_s: float = 2.0

    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, env=None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            ping_bin=env.get("PINGPROBE_PING_BIN") or None,
            platform=env.get("PINGPROBE_PLATFORM") or None,
            attempts=_env_number(env, "PINGPROBE_ATTEMPTS", int, DEFAULT_ATTEMPTS),
            timeout_s=_env_number(env, "PINGPROBE_TIMEOUT", float, DEFAULT_TIMEOUT_S),
            interval_s=_env_number(env, "PINGPROBE_INTERVAL", float, DEFAULT_INTERVAL_S),
            grace_s=_env_number(env, "PINGPROBE_GRACE", float, 2.0),
            log_level=_env_log_level(env, "LOG_LEVEL", "WARNING"),
        )
