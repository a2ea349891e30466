"""Exception hierarchy for json_toolbox.

- JsonToolboxError (base)
  - JsonParseError: input text is not valid JSON
  - PathSyntaxError: query path outside the supported grammar
  - ConversionError: a format conversion could not be performed
  - SchemaDefinitionError: the JSON Schema itself is invalid
"""
from __future__ import annotations

from typing import Optional


class JsonToolboxError(Exception):
    """Base class for all json_toolbox errors."""


class JsonParseError(JsonToolboxError, ValueError):
    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None, source: str = "JSON"):
        self.line = line
        self.column = column
        self.source = source
        if line is not None and column is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class PathSyntaxError(JsonToolboxError, ValueError):
    def __init__(self, message: str, path: str = "", position: int = 0):
        self.path = path
        self.position = position
        super().__init__(f"{message} at position {position} in {path!r}")


class ConversionError(JsonToolboxError):
    pass


class SchemaDefinitionError(JsonToolboxError):
    pass
