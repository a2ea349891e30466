"""Core logic for JSON Toolbox.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- evaluate restricted JSONPath queries against a parsed document
- convert JSON to YAML / XML / CSV and YAML to JSON
- validate documents against a JSON Schema
"""
from __future__ import annotations

from .errors import ConversionError, JsonParseError, JsonToolboxError, PathSyntaxError, SchemaDefinitionError
from .query import PathExpression, QueryResult, evaluate, parse_path

__all__ = [
    "ConversionError",
    "JsonParseError",
    "JsonToolboxError",
    "PathExpression",
    "PathSyntaxError",
    "QueryResult",
    "SchemaDefinitionError",
    "evaluate",
    "parse_path",
]
