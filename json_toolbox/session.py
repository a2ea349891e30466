"""Query session: the caller side of the evaluator.

The session parses the input document, runs the query, and records successful
queries in its history. Unmatched and unrecognised paths both come back as
NO_RESULTS.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from loguru import logger

from .errors import JsonParseError
from .history import QueryHistory
from .io_utils import parse_json
from .query import QueryResult, evaluate
from .settings import get_settings

log = logger.bind(name=__name__)

MSG_INVALID_QUERY = "Please enter both JSON data and a JSONPath query."
MSG_INVALID_JSON = "Invalid JSON"
MSG_NO_RESULTS = "No results found for this query."


class QueryStatus(str, Enum):
    OK = "ok"
    EMPTY_INPUT = "empty_input"
    INVALID_JSON = "invalid_json"
    NO_RESULTS = "no_results"


@dataclass
class QueryOutcome:
    status: QueryStatus
    results: List[QueryResult] = field(default_factory=list)
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is QueryStatus.OK


class QuerySession:
    def __init__(self, history_limit: Optional[int] = None):
        limit = history_limit if history_limit is not None else get_settings().history_limit
        self.history = QueryHistory(limit)
        self.results: List[QueryResult] = []
        self.selected: Optional[int] = None

    def execute(self, json_text: str, query: str) -> QueryOutcome:
        if not (json_text or "").strip() or not (query or "").strip():
            return self._finish(QueryOutcome(QueryStatus.EMPTY_INPUT, message=MSG_INVALID_QUERY))

        try:
            data = parse_json(json_text)
        except JsonParseError as exc:
            log.warning("Query input is not valid JSON: {}", exc)
            return self._finish(QueryOutcome(QueryStatus.INVALID_JSON, message=f"{MSG_INVALID_JSON}: {exc}"))

        results = evaluate(data, query.strip())
        if not results:
            log.info("Query {!r} returned no results", query)
            return self._finish(QueryOutcome(QueryStatus.NO_RESULTS, message=MSG_NO_RESULTS))

        self.history.record(query.strip(), len(results))
        log.info("Query {!r} returned {} result(s)", query, len(results))
        return self._finish(QueryOutcome(QueryStatus.OK, results, f"Found {len(results)} result(s)."))

    def select(self, index: int) -> Optional[QueryResult]:
        if 0 <= index < len(self.results):
            self.selected = index
            return self.results[index]
        self.selected = None
        return None

    def _finish(self, outcome: QueryOutcome) -> QueryOutcome:
        self.results = list(outcome.results)
        self.selected = None
        return outcome
