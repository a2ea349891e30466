from __future__ import annotations

from typing import Iterable, Union

_RESERVED_NAME_CHARS = ".[]*"


def escape_path_segment(segment) -> str:
    """Escape a single key segment for dot-path representation.

    - Dots are escaped as '\\.' so keys like 'gpt-3.5-turbo' remain one segment.
    - Backslashes are escaped as '\\\\' to preserve round-tripping.
    """
    if not isinstance(segment, str):
        segment = str(segment)
    return segment.replace('\\', '\\\\').replace('.', '\\.')


def join_key(parent: str, key, sep: str = '.') -> str:
    """Join a flattened parent key and a child key or list index."""
    escaped = escape_path_segment(key)
    return f"{parent}{sep}{escaped}" if parent else escaped


def is_query_name(key) -> bool:
    """True when `key` can appear as a field segment of a query path."""
    return isinstance(key, str) and key != '' and not any(ch in key for ch in _RESERVED_NAME_CHARS)


def build_query_path(steps: Iterable[Union[str, int]]) -> str:
    """Render field names and list indexes as a query path ('$.a[0].b')."""
    parts = ['$']
    for step in steps:
        if isinstance(step, int):
            parts.append(f"[{step}]")
        elif step == '*':
            parts.append("[*]")
        else:
            parts.append(f".{step}")
    return ''.join(parts)
