"""Loose comparison rules for filter predicates.

Filters compare a document value against a literal taken from the query. The
comparison is type-coercing:

- ``None`` equals only ``None``.
- A boolean operand is treated as the number 0 or 1.
- A number against a string converts the string with `to_number` (blank -> 0,
  unparsable -> NaN, and NaN never compares true).
- A dict or list against a primitive is replaced by its string form
  (``[1, 2]`` -> ``"1,2"``, any dict -> ``"[object Object]"``).
- Ordering (`<`, `>`) compares two strings lexicographically and anything else
  numerically.
"""
from __future__ import annotations

import math
import re
from typing import Any

OBJECT_STRING = "[object Object]"

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_RADIX_RE = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_INFINITY_RE = re.compile(r"[+-]?Infinity")


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_number(value: Any) -> float:
    """Convert a primitive to a number; unparsable input yields NaN."""
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if is_number(value):
        return _to_float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if _DECIMAL_RE.fullmatch(text):
            return float(text)
        if _RADIX_RE.fullmatch(text):
            return _to_float(int(text, 0))
        if _INFINITY_RE.fullmatch(text):
            return -math.inf if text.startswith("-") else math.inf
        return math.nan
    return to_number(to_primitive(value))


def _to_float(number) -> float:
    # ints beyond float range saturate to +/-Infinity
    try:
        return float(number)
    except OverflowError:
        return math.inf if number > 0 else -math.inf


def parse_number_literal(text: str):
    """Return `text` as an int or float when it is a numeric literal, else None."""
    if not text.strip():
        return None
    number = to_number(text)
    if math.isnan(number):
        return None
    if number.is_integer() and not math.isinf(number):
        return int(number)
    return number


def number_to_string(value: Any) -> str:
    number = _to_float(value)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "-Infinity" if number < 0 else "Infinity"
    if number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    return repr(number)


def to_string(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        return number_to_string(value)
    if isinstance(value, str):
        return value
    return to_primitive(value)


def to_primitive(value: Any) -> Any:
    """Reduce containers to their string form; primitives pass through."""
    if isinstance(value, dict):
        return OBJECT_STRING
    if isinstance(value, list):
        return ",".join("" if item is None else to_string(item) for item in value)
    return value


def loose_equals(left: Any, right: Any) -> bool:
    if left is None or right is None:
        return left is None and right is None

    left_container = isinstance(left, (dict, list))
    right_container = isinstance(right, (dict, list))
    if left_container and right_container:
        return left is right
    if left_container:
        return loose_equals(to_primitive(left), right)
    if right_container:
        return loose_equals(left, to_primitive(right))

    if isinstance(left, bool) and isinstance(right, bool):
        return left == right
    if isinstance(left, bool) or isinstance(right, bool):
        return to_number(left) == to_number(right)
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    # number against number or string; NaN != NaN holds for floats
    return to_number(left) == to_number(right)


def loose_not_equals(left: Any, right: Any) -> bool:
    return not loose_equals(left, right)


def loose_less(left: Any, right: Any) -> bool:
    left = to_primitive(left)
    right = to_primitive(right)
    if isinstance(left, str) and isinstance(right, str):
        return left < right
    left_num = to_number(left)
    right_num = to_number(right)
    if math.isnan(left_num) or math.isnan(right_num):
        return False
    return left_num < right_num


def loose_greater(left: Any, right: Any) -> bool:
    return loose_less(right, left)


COMPARATORS = {
    "==": loose_equals,
    "!=": loose_not_equals,
    "<": loose_less,
    ">": loose_greater,
}
