from __future__ import annotations

import json
from typing import Any, Dict, List

from .paths import join_key


def flatten_object(data: Any, parent_key: str = '', sep: str = '.') -> Dict[str, Any]:
    """Collapse nested dicts and lists into one level of dot-joined keys.

    List items are keyed by index ('tags.0'); empty containers are kept as
    values so the column is not lost.
    """
    flat: Dict[str, Any] = {}

    if isinstance(data, dict):
        items = list(data.items())
    elif isinstance(data, list):
        items = list(enumerate(data))
    else:
        return {parent_key or 'value': data}

    if not items and parent_key:
        flat[parent_key] = data
        return flat

    for k, v in items:
        current_key = join_key(parent_key, k, sep)
        if isinstance(v, (dict, list)) and v:
            flat.update(flatten_object(v, current_key, sep))
        else:
            flat[current_key] = v
    return flat


def render_cell(value: Any) -> Any:
    """Turn a nested value into something a CSV cell can hold."""
    if isinstance(value, list):
        if all(isinstance(v, (str, int, float, bool)) or v is None for v in value):
            return ", ".join(["" if v is None else str(v) for v in value])
        try:
            return json.dumps(value, ensure_ascii=False)
        except TypeError:
            return str(value)
    if isinstance(value, dict):
        try:
            return json.dumps(value, ensure_ascii=False)
        except TypeError:
            return str(value)
    return value


def process_row(record: Any) -> Dict[str, Any]:
    if not isinstance(record, dict):
        return {'value': render_cell(record)}
    return {key: render_cell(val) for key, val in record.items()}


def rows_for_export(data: Any, flatten: bool = True) -> List[Dict[str, Any]]:
    """Shape a document into CSV rows.

    With `flatten` the whole document becomes a single row. Otherwise a list
    yields one row per element and anything else a single row.
    """
    if flatten:
        return [process_row(flatten_object(data))]
    if isinstance(data, list):
        return [process_row(item) for item in data]
    return [process_row(data)]


def collect_headers(rows: List[Dict[str, Any]]) -> List[str]:
    headers: List[str] = []
    seen = set()
    for row in rows:
        for key in row:
            if key not in seen:
                seen.add(key)
                headers.append(key)
    return headers
