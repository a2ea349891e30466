from __future__ import annotations

import json
from typing import Any

from .errors import JsonParseError


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def parse_json(text: str, source: str = "JSON") -> Any:
    """Parse JSON text, raising JsonParseError with the failing position.

    `NaN` and `Infinity` are rejected, as are documents nested too deeply or
    holding integers too long to convert.
    """
    if text is None:
        raise JsonParseError("No input provided", source=source)
    try:
        if isinstance(text, bytes):
            text = text.decode('utf-8')
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise JsonParseError(f"Invalid {source}: {exc.msg}", exc.lineno, exc.colno, source=source) from exc
    except (RecursionError, ValueError) as exc:
        raise JsonParseError(f"Invalid {source}: {exc}", source=source) from exc


def dump_json(value: Any, indent: int = 2) -> str:
    return json.dumps(value, indent=indent, ensure_ascii=False)


def read_text_content(file_obj) -> str:
    """Return the raw text of an uploaded file (or path) for the editors."""
    if file_obj is None:
        return ""
    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()
