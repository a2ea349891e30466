"""Tests for query suggestions."""

from json_toolbox.query import evaluate
from json_toolbox.suggestions import extract_leaf_paths, find_list_paths, suggest_queries


class TestFindListPaths:
    def test_nested_lists(self) -> None:
        data = {"a": [{"b": [1]}], "c": {"d": []}}
        assert find_list_paths(data) == [("a",), ("a", "*", "b"), ("c", "d")]

    def test_root_list(self) -> None:
        assert find_list_paths([{"x": [1]}]) == [(), ("*", "x")]

    def test_unqueryable_keys_skipped(self) -> None:
        assert find_list_paths({"a.b": [1], "ok": [2]}) == [("ok",)]


class TestExtractLeafPaths:
    def test_projects_through_first_list(self) -> None:
        data = {"store": {"book": [{"title": "A", "tags": [{"n": 1}]}], "open": True}}
        assert extract_leaf_paths(data) == [("store", "book", "*", "title"), ("store", "open")]

    def test_scalar_document(self) -> None:
        assert extract_leaf_paths(5) == []


class TestSuggestQueries:
    def test_sample_document(self, sample_document) -> None:
        suggestions = suggest_queries(sample_document)
        assert suggestions[:3] == ["$", "$.store.book[*]", "$.store.book[0]"]
        assert "$.store.book[*].title" in suggestions
        assert "$.store.bicycle.color" in suggestions

    def test_root_list(self) -> None:
        assert suggest_queries([{"a": 1}]) == ["$", "$[*]", "$[0]", "$[*].a"]

    def test_limit(self, sample_document) -> None:
        assert len(suggest_queries(sample_document, limit=2)) == 2

    def test_every_suggestion_matches(self, sample_document) -> None:
        for query in suggest_queries(sample_document):
            assert evaluate(sample_document, query), query
