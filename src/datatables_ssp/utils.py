import logging
import re
from typing import Any, Optional, Sequence, Union

from .enum import Direction

logger = logging.getLogger(__name__)

_DECIMAL = re.compile(r"[+-]?[0-9]+")

# Protocol integers are signed 32-bit; anything wider is treated as unparseable.
INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


def first_value(values: Union[str, Sequence[str], None]) -> Optional[str]:
    """
    Return the first value of a (possibly multi-valued) request parameter.
    A bare string counts as a single value; an empty sequence as no value.
    """
    if values is None or isinstance(values, str):
        return values
    if len(values) > 0:
        return values[0]
    return None


def to_int(value: Any) -> Optional[int]:
    """Signed 32-bit base-10 integer, or None when missing, unparseable or out of range."""
    if value is None or isinstance(value, bool):
        return None
    number = None
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and _DECIMAL.fullmatch(value):
        number = int(value)
    if number is not None and INT32_MIN <= number <= INT32_MAX:
        return number
    logger.debug("Ignoring non-integer value %r", value)
    return None


def to_bool(value: Any) -> Optional[bool]:
    # None stays None so callers can tell "not sent" from "sent false"
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    return str(value).lower() == "true"


def to_str(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    # object-valued column.data (orthogonal data) has no flat string form
    return None


def to_direction(value: Any) -> Direction:
    if isinstance(value, str) and value.lower() == Direction.DESC.value:
        return Direction.DESC
    return Direction.ASC
