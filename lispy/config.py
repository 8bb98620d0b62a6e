from __future__ import annotations
import logging
import os

from lispy.errors import LispyConfigError

# Defaults
_DEFAULT_INT_BITS = 64
_DEFAULT_PROMPT = "lispy> "
_DEFAULT_LOG_LEVEL = "WARNING"

_MIN_INT_BITS = 8
_MAX_INT_BITS = 4096


def value_from_env(var: str, default: str) -> str:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw


def get_int_bits() -> int:
    raw = value_from_env('LISPY_INT_BITS', str(_DEFAULT_INT_BITS))
    try:
        bits = int(raw)
    except ValueError:
        raise LispyConfigError(f"LISPY_INT_BITS must be an integer, got {raw!r}")
    if not _MIN_INT_BITS <= bits <= _MAX_INT_BITS:
        raise LispyConfigError(
            f"LISPY_INT_BITS must be between {_MIN_INT_BITS} and {_MAX_INT_BITS}, got {bits}"
        )
    return bits


def get_int_range() -> tuple[int, int]:
    bits = get_int_bits()
    return -(1 << (bits - 1)), (1 << (bits - 1)) - 1


def get_prompt() -> str:
    return value_from_env('LISPY_PROMPT', _DEFAULT_PROMPT)


def get_log_level() -> int:
    raw = value_from_env('LISPY_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    if not isinstance(level, int):
        raise LispyConfigError(f"LISPY_LOG_LEVEL is not a logging level: {raw!r}")
    return level
