"""
Forgiving text → value coercion used by the hydrator.

Every primitive takes the keyword map, a keyword and a fallback. The fallback
is returned whenever the keyword is absent or its value cannot be read as the
requested type; nothing here raises on file content.
"""

import math
import re
from collections.abc import Callable, Mapping
from typing import TypeVar

from ampsparam.utils import logger

_T = TypeVar("_T")

# Leading number, so "5 min" reads as 5.0 and "3.7" reads as integer 3
LEADING_FLOAT_PAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
LEADING_INT_PAT = re.compile(r"^\s*([+-]?\d+)")
# A list token must be a number and nothing else
STRICT_FLOAT_PAT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

TRUTHY_TOKENS = frozenset({"T", "TRUE", "YES"})


def parse_leading_float(raw: str) -> float | None:
    """Finite number at the start of `raw`, or None."""
    match = LEADING_FLOAT_PAT.match(raw)
    if match is None:
        return None
    value = float(match.group(1))
    return value if math.isfinite(value) else None


def parse_leading_int(raw: str) -> int | None:
    """Base-10 integer at the start of `raw`, or None."""
    match = LEADING_INT_PAT.match(raw)
    if match is None:
        return None
    return int(match.group(1))


def to_float(kmap: Mapping[str, str], key: str, fallback: _T) -> float | _T:
    if key not in kmap:
        return fallback
    value = parse_leading_float(kmap[key])
    if value is None:
        logger.debug(f"{key}: '{kmap[key]}' is not a number, keeping {fallback!r}")
        return fallback
    return value


def to_int(kmap: Mapping[str, str], key: str, fallback: _T) -> int | _T:
    if key not in kmap:
        return fallback
    value = parse_leading_int(kmap[key])
    if value is None:
        logger.debug(f"{key}: '{kmap[key]}' is not an integer, keeping {fallback!r}")
        return fallback
    return value


def to_str(kmap: Mapping[str, str], key: str, fallback: _T) -> str | _T:
    return kmap[key] if key in kmap else fallback


def to_bool(kmap: Mapping[str, str], key: str, fallback: _T) -> bool | _T:
    """T, TRUE and YES (any case) are true; any other present value is false."""
    if key not in kmap:
        return fallback
    return kmap[key].strip().upper() in TRUTHY_TOKENS


def to_float_list(
    kmap: Mapping[str, str],
    key: str,
    fallback: _T,
    keep: Callable[[float], bool] = lambda v: True,
) -> list[float] | _T:
    """
    Whitespace-separated numbers.

    Tokens that are not plain finite numbers, or that `keep` rejects, are
    dropped. If nothing survives the fallback is returned.
    """
    if key not in kmap:
        return fallback
    values: list[float] = []
    for token in kmap[key].split():
        if not STRICT_FLOAT_PAT.fullmatch(token):
            continue
        value = float(token)
        if math.isfinite(value) and keep(value):
            values.append(value)
    if not values:
        logger.debug(f"{key}: no usable numbers in '{kmap[key]}', keeping {fallback!r}")
        return fallback
    return values
