"""Restricted JSONPath evaluator.

Supported forms::

    $                       the root value
    $.a.b.c                 nested field access
    $.a.b[*]                every element of the list at a.b
    $.a.b[*].c              field projection on every element
    $.a[0], $.a[2].b[1].c   integer indexes mixed with fields
    $.a[?(@.prop==value)]   list elements whose prop compares to a literal
                            (operators ==, !=, <, >)

A path is parsed into a `PathExpression` (a tuple of typed segments) and then
walked against the document. Only one wildcard or filter is allowed per path,
it can only follow field segments, and anything after a filter is ignored
(`$.a[?(@.p>1)].x` returns the matching elements of `a`). Paths outside
this subset raise `PathSyntaxError` from `parse_path`; `evaluate` turns both
that and "nothing matched" into an empty list.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Iterator, List, Tuple, Union

from loguru import logger

from .coercion import COMPARATORS, number_to_string, parse_number_literal
from .errors import PathSyntaxError

log = logger.bind(name=__name__)

ROOT = "$"
FILTER_OPERATORS = ("==", "!=", "<", ">")

_NAME_STOP = ".[]*"
_PROP_STOP = "=!<>"
_INDEX_RE = re.compile(r"\[([0-9]+)\]")
_DIGITS_RE = re.compile(r"[0-9]+")
_MISSING = object()


@dataclass(frozen=True)
class Field:
    name: str

    def __str__(self) -> str:
        return f".{self.name}"


@dataclass(frozen=True)
class Index:
    index: int

    def __str__(self) -> str:
        return f"[{self.index}]"


@dataclass(frozen=True)
class Wildcard:
    def __str__(self) -> str:
        return "[*]"


@dataclass(frozen=True)
class Filter:
    prop: Tuple[str, ...]
    operator: str
    literal: Union[bool, int, float, str]

    def matches(self, item: Any) -> bool:
        if not isinstance(item, dict):
            return False
        value: Any = item
        for name in self.prop:
            value = _child(value, name)
            if value is _MISSING:
                return False
        return COMPARATORS[self.operator](value, self.literal)

    def __str__(self) -> str:
        if isinstance(self.literal, bool):
            literal = "true" if self.literal else "false"
        elif isinstance(self.literal, (int, float)):
            literal = number_to_string(self.literal)
        else:
            literal = "'" + self.literal.replace("'", "\\'") + "'"
        return f"[?(@.{'.'.join(self.prop)}{self.operator}{literal})]"


Segment = Union[Field, Index, Wildcard, Filter]


@dataclass(frozen=True)
class QueryResult:
    path: str
    value: Any
    type: str

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "value": self.value, "type": self.type}


@dataclass(frozen=True)
class PathExpression:
    segments: Tuple[Segment, ...] = ()

    @property
    def is_concrete(self) -> bool:
        """True when the path addresses at most one value (fields and indexes only)."""
        return all(isinstance(s, (Field, Index)) for s in self.segments)

    def evaluate(self, root: Any) -> List[QueryResult]:
        return [
            QueryResult(path=path, value=value, type=value_type(value))
            for path, value in _walk(root, self.segments, ROOT)
        ]

    def __str__(self) -> str:
        return ROOT + "".join(str(s) for s in self.segments)


def value_type(value: Any) -> str:
    if value is None:
        return "object"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return "undefined"


class _PathParser:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def fail(self, message: str):
        raise PathSyntaxError(message, self.text, self.pos)

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return "" if self.at_end() else self.text[self.pos]

    def skip_whitespace(self) -> None:
        while not self.at_end() and self.text[self.pos].isspace():
            self.pos += 1

    def parse(self) -> PathExpression:
        if not self.text.startswith(ROOT):
            self.fail("path must start with '$'")
        self.pos = len(ROOT)
        segments: List[Segment] = []
        while not self.at_end():
            segment = self.parse_segment()
            segments.append(segment)
            if isinstance(segment, Filter):
                # text after a filter selects nothing further
                if not self.at_end():
                    log.debug("Ignoring {!r} after filter in {!r}", self.text[self.pos:], self.text)
                break
        self.check_shape(segments)
        return PathExpression(tuple(segments))

    def parse_segment(self) -> Segment:
        ch = self.peek()
        if ch == ".":
            self.pos += 1
            return Field(self.read_name(_NAME_STOP))
        if ch == "[":
            return self.parse_bracket()
        self.fail(f"unexpected character {ch!r}")

    def read_name(self, stop: str) -> str:
        start = self.pos
        while not self.at_end() and self.text[self.pos] not in stop:
            self.pos += 1
        name = self.text[start:self.pos]
        if not name:
            self.fail("empty field name")
        if self.peek() in ("]", "*"):
            self.fail(f"unexpected character {self.peek()!r}")
        return name

    def parse_bracket(self) -> Segment:
        if self.text.startswith("[*]", self.pos):
            self.pos += 3
            return Wildcard()
        if self.text.startswith("[?(", self.pos):
            self.pos += 3
            return self.parse_filter()
        match = _INDEX_RE.match(self.text, self.pos)
        if match is None:
            self.fail("unsupported bracket expression")
        self.pos = match.end()
        return Index(int(match.group(1)))

    def parse_filter(self) -> Filter:
        self.skip_whitespace()
        if not self.text.startswith("@.", self.pos):
            self.fail("filter must start with '@.'")
        self.pos += 2

        start = self.pos
        while not self.at_end() and self.text[self.pos] not in _PROP_STOP:
            self.pos += 1
        prop = tuple(part.strip() for part in self.text[start:self.pos].split("."))
        if not all(prop):
            self.fail("empty filter property")

        operator = next((op for op in FILTER_OPERATORS if self.text.startswith(op, self.pos)), None)
        if operator is None:
            self.fail("expected one of ==, !=, <, >")
        self.pos += len(operator)
        if operator in ("<", ">") and self.peek() == "=":
            self.fail(f"unsupported operator {operator}=")

        literal = self.parse_literal()
        return Filter(prop=prop, operator=operator, literal=literal)

    def parse_literal(self) -> Union[bool, int, float, str]:
        self.skip_whitespace()
        quote = self.peek()
        if quote in ("'", '"'):
            literal = self.read_quoted(quote)
            self.skip_whitespace()
            if not self.text.startswith(")]", self.pos):
                self.fail("expected ')]' after filter literal")
            self.pos += 2
            return literal

        end = self.text.find(")]", self.pos)
        if end < 0:
            self.fail("unterminated filter")
        raw = self.text[self.pos:end].strip()
        if not raw:
            self.fail("empty filter literal")
        self.pos = end + 2
        if raw == "true":
            return True
        if raw == "false":
            return False
        number = parse_number_literal(raw)
        return raw if number is None else number

    def read_quoted(self, quote: str) -> str:
        self.pos += 1
        chars: List[str] = []
        while not self.at_end():
            ch = self.text[self.pos]
            if ch == "\\" and self.pos + 1 < len(self.text):
                chars.append(self.text[self.pos + 1])
                self.pos += 2
                continue
            if ch == quote:
                self.pos += 1
                return "".join(chars)
            chars.append(ch)
            self.pos += 1
        self.fail("unterminated string literal")

    def check_shape(self, segments: List[Segment]) -> None:
        fan_out = [i for i, s in enumerate(segments) if isinstance(s, (Wildcard, Filter))]
        if not fan_out:
            return
        if len(fan_out) > 1:
            raise PathSyntaxError("only one wildcard or filter is supported", self.text, self.pos)
        at = fan_out[0]
        if not all(isinstance(s, Field) for s in segments[:at]):
            raise PathSyntaxError("wildcard or filter must follow field segments", self.text, self.pos)
        if not all(isinstance(s, Field) for s in segments[at + 1:]):
            raise PathSyntaxError("only fields may follow a wildcard", self.text, self.pos)


@lru_cache(maxsize=256)
def _parse_cached(text: str) -> PathExpression:
    return _PathParser(text).parse()


def parse_path(path: str) -> PathExpression:
    """Parse `path` into a PathExpression, raising PathSyntaxError if unsupported."""
    if not isinstance(path, str):
        raise PathSyntaxError(f"path must be a string, got {type(path).__name__}", str(path), 0)
    return _parse_cached(path.strip())


def _child(value: Any, name: str) -> Any:
    if isinstance(value, dict):
        return value.get(name, _MISSING)
    if isinstance(value, list) and _DIGITS_RE.fullmatch(name):
        return _item(value, int(name))
    return _MISSING


def _item(value: Any, index: int) -> Any:
    if isinstance(value, list) and 0 <= index < len(value):
        return value[index]
    return _MISSING


def _walk(value: Any, segments: Tuple[Segment, ...], path: str) -> Iterator[Tuple[str, Any]]:
    if not segments:
        yield path, value
        return

    head, rest = segments[0], segments[1:]
    if isinstance(head, Field):
        child = _child(value, head.name)
        if child is not _MISSING:
            yield from _walk(child, rest, f"{path}.{head.name}")
    elif isinstance(head, Index):
        child = _item(value, head.index)
        if child is not _MISSING:
            yield from _walk(child, rest, f"{path}[{head.index}]")
    elif isinstance(value, list):
        for i, item in enumerate(value):
            if isinstance(head, Wildcard) or head.matches(item):
                yield from _walk(item, rest, f"{path}[{i}]")


def evaluate(root: Any, path: str) -> List[QueryResult]:
    """Evaluate `path` against `root`; unsupported or unmatched paths give []."""
    try:
        expression = parse_path(path)
    except PathSyntaxError as exc:
        log.debug("Unrecognized query path: {}", exc)
        return []
    return expression.evaluate(root)
