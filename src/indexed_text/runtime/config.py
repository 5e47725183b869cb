"""Environment-driven settings for the indexed_text runtime."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

ENV_PREFIX = "INDEXED_TEXT_"
DEFAULT_LOGGER_NAME = "indexed_text"
DEFAULT_LEVEL = "INFO"
DEFAULT_BUFFER_SIZE = 2048

_TRUTHY = {"1", "true", "yes", "on"}


def _read(env: Mapping[str, str], name: str) -> Optional[str]:
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def _flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = _read(env, name)
    if raw is None:
        return default
    return raw.lower() in _TRUTHY


def _integer(env: Mapping[str, str], name: str, default: int) -> int:
    raw = _read(env, name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(
            f"{ENV_PREFIX}{name} must be an integer, got {raw!r}"
        ) from exc


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    """Logger configuration consumed by :mod:`indexed_text.runtime.telemetry`."""

    logger_name: str = DEFAULT_LOGGER_NAME
    level: str = DEFAULT_LEVEL
    console: bool = True
    colored: bool = True
    json_format: bool = False
    log_file: str = ""
    buffered: bool = False
    buffer_size: int = DEFAULT_BUFFER_SIZE
    profiling: bool = True

    def __post_init__(self) -> None:
        if not self.logger_name:
            raise ValueError("logger_name cannot be empty")
        if self.buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        object.__setattr__(self, "level", self.level.upper())

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "TelemetrySettings":
        """Read ``INDEXED_TEXT_*`` variables, falling back to defaults."""

        env = os.environ if environ is None else environ
        return cls(
            logger_name=_read(env, "LOGGER") or DEFAULT_LOGGER_NAME,
            level=_read(env, "LOG_LEVEL") or DEFAULT_LEVEL,
            console=not _flag(env, "DISABLE_CONSOLE", False),
            colored=not _flag(env, "NO_COLOR", False),
            json_format=_flag(env, "LOG_JSON", False),
            log_file=_read(env, "LOG_FILE") or "",
            buffered=_flag(env, "LOG_BUFFERED", False),
            buffer_size=_integer(env, "LOG_BUFFER_SIZE", DEFAULT_BUFFER_SIZE),
            profiling=_flag(env, "PROFILING", True),
        )

    @classmethod
    def preset(
        cls, name: str, environ: Optional[Mapping[str, str]] = None
    ) -> "TelemetrySettings":
        """Return one of the named presets layered over the environment.

        ``development`` logs everything to a colored console, ``production``
        writes buffered output to a file, and ``quiet`` only surfaces warnings.
        """

        base = cls.from_env(environ)
        key = name.strip().lower()
        if key == "development":
            return replace(
                base, level="DEBUG", console=True, colored=True, json_format=False
            )
        if key == "production":
            return replace(
                base,
                level="INFO",
                console=False,
                log_file=base.log_file or f"{base.logger_name}.log",
                buffered=True,
            )
        if key == "quiet":
            return replace(base, level="WARNING", console=False)
        raise ValueError(f"Unknown preset '{name}'.")


__all__ = [
    "DEFAULT_LOGGER_NAME",
    "ENV_PREFIX",
    "TelemetrySettings",
]
