"""
Parameter-name grammar of the DataTables server-side protocol.

The widget flattens its request into URL-encoded keys such as
``columns[2][search][value]`` or ``order[0][dir]``. ``classify`` maps a key to
the ParameterKind it encodes and, for indexed keys, the embedded index.
"""
import logging
import re
from typing import NamedTuple, Optional

from .enum import ParameterKind

logger = logging.getLogger(__name__)

PARAMETER_NAME_START = "start"
PARAMETER_NAME_LENGTH = "length"
PARAMETER_NAME_DRAW = "draw"
PARAMETER_NAME_SEARCH_VALUE = "search[value]"
PARAMETER_NAME_SEARCH_REGEX = "search[regex]"

LITERAL_KEYS = {
    PARAMETER_NAME_START: ParameterKind.START,
    PARAMETER_NAME_LENGTH: ParameterKind.LENGTH,
    PARAMETER_NAME_DRAW: ParameterKind.DRAW,
    PARAMETER_NAME_SEARCH_VALUE: ParameterKind.SEARCH_VALUE,
    PARAMETER_NAME_SEARCH_REGEX: ParameterKind.SEARCH_REGEX,
}

# Priority order matters: first match wins.
INDEXED_PATTERNS = (
    (re.compile(r"columns\[[0-9]+\]\[search\]\[value\]"), ParameterKind.COLUMN_SEARCH_VALUE),
    (re.compile(r"columns\[[0-9]+\]\[search\]\[regex\]"), ParameterKind.COLUMN_SEARCH_REGEX),
    (re.compile(r"columns\[[0-9]+\]\[orderable\]"), ParameterKind.COLUMN_ORDERABLE),
    (re.compile(r"columns\[[0-9]+\]\[data\]"), ParameterKind.COLUMN_DATA),
    (re.compile(r"columns\[[0-9]+\]\[name\]"), ParameterKind.COLUMN_NAME),
    (re.compile(r"columns\[[0-9]+\]\[searchable\]"), ParameterKind.COLUMN_SEARCHABLE),
    (re.compile(r"order\[[0-9]+\]\[dir\]"), ParameterKind.ORDER_DIR),
    (re.compile(r"order\[[0-9]+\]\[column\]"), ParameterKind.ORDER_COLUMN),
)

_DIGITS = re.compile(r"[0-9]+")


class ParsedKey(NamedTuple):
    kind: ParameterKind
    index: Optional[int] = None


def find_index(key: str) -> int:
    """
    Return the first run of decimal digits in ``key`` as an integer.

    Raises ValueError when the key has no digits; ``classify`` never hands
    such a key here because every indexed pattern requires one.
    """
    match = _DIGITS.search(key)
    if match is None:
        raise ValueError(f"No index in parameter name: {key!r}")
    return int(match.group())


def classify(key: str) -> Optional[ParsedKey]:
    """Classify a request parameter name; None for keys outside the grammar."""
    kind = LITERAL_KEYS.get(key)
    if kind is not None:
        return ParsedKey(kind)

    for pattern, kind in INDEXED_PATTERNS:
        if pattern.fullmatch(key):
            return ParsedKey(kind, find_index(key))

    logger.debug("Ignoring unrecognised parameter %r", key)
    return None
