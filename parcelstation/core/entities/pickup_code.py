from __future__ import annotations

import re
import secrets

PICKUP_CODE_MIN = 100000
PICKUP_CODE_MAX = 999999

_PICKUP_CODE_RE = re.compile(r"[0-9]{6}")


def generate_pickup_code() -> str:
    """Uniformly random 6-digit code in [100000, 999999]."""
    return str(PICKUP_CODE_MIN + secrets.randbelow(PICKUP_CODE_MAX - PICKUP_CODE_MIN + 1))


def is_valid_pickup_code(value: object) -> bool:
    return isinstance(value, str) and _PICKUP_CODE_RE.fullmatch(value) is not None


def mask_pickup_code(code: str) -> str:
    """Keep only the last two digits, for log lines."""
    return "****" + code[-2:]
