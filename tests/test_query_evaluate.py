"""Tests for restricted JSONPath evaluation."""

import copy

import pytest

from json_toolbox.query import QueryResult, evaluate, parse_path


def paths(results):
    return [r.path for r in results]


def values(results):
    return [r.value for r in results]


class TestRoot:
    """Tests for the bare '$' path."""

    @pytest.mark.parametrize(
        "root, expected_type",
        [
            ({"a": 1}, "object"),
            ([1, 2], "array"),
            (5, "number"),
            (2.5, "number"),
            ("text", "string"),
            (True, "boolean"),
            (None, "object"),
        ],
    )
    def test_returns_root(self, root, expected_type) -> None:
        assert evaluate(root, "$") == [QueryResult(path="$", value=root, type=expected_type)]

    def test_surrounding_whitespace_ignored(self) -> None:
        assert paths(evaluate({"a": 1}, "  $  ")) == ["$"]


class TestPlainPath:
    """Tests for dotted field access."""

    def test_nested_chain(self) -> None:
        root = {"a": {"b": {"c": [1, 2]}}}
        result = evaluate(root, "$.a.b.c")
        assert result == [QueryResult(path="$.a.b.c", value=[1, 2], type="array")]

    def test_missing_field(self) -> None:
        assert evaluate({"a": 1}, "$.nonexistent.path") == []

    def test_missing_intermediate(self) -> None:
        assert evaluate({"a": {"b": 1}}, "$.a.x.y") == []

    def test_descent_into_scalar(self) -> None:
        assert evaluate({"a": "text"}, "$.a.length") == []

    def test_null_value_is_emitted(self) -> None:
        assert evaluate({"a": None}, "$.a") == [QueryResult(path="$.a", value=None, type="object")]

    def test_falsy_values_are_emitted(self) -> None:
        root = {"zero": 0, "empty": "", "no": False}
        assert values(evaluate(root, "$.zero")) == [0]
        assert values(evaluate(root, "$.empty")) == [""]
        assert values(evaluate(root, "$.no")) == [False]

    def test_numeric_field_indexes_list(self) -> None:
        root = {"a": ["x", "y"]}
        assert evaluate(root, "$.a.1") == [QueryResult(path="$.a.1", value="y", type="string")]

    def test_key_with_spaces(self) -> None:
        assert values(evaluate({"first name": "Ada"}, "$.first name")) == ["Ada"]

    def test_trailing_dot(self) -> None:
        assert evaluate({"a": 1}, "$.a.") == []


class TestWildcard:
    """Tests for [*] expansion and projection."""

    def test_every_element(self, bookstore) -> None:
        result = evaluate(bookstore, "$.store.book[*]")
        assert paths(result) == ["$.store.book[0]", "$.store.book[1]"]
        assert values(result) == bookstore["store"]["book"]
        assert all(r.type == "object" for r in result)

    def test_projection(self, bookstore) -> None:
        result = evaluate(bookstore, "$.store.book[*].title")
        assert paths(result) == ["$.store.book[0].title", "$.store.book[1].title"]
        assert values(result) == ["A", "B"]

    def test_projection_skips_missing(self) -> None:
        root = {"items": [{"a": {"b": 1}}, {"a": {}}, {"c": 2}, "scalar", {"a": {"b": 3}}]}
        result = evaluate(root, "$.items[*].a.b")
        assert paths(result) == ["$.items[0].a.b", "$.items[4].a.b"]
        assert values(result) == [1, 3]

    def test_base_not_a_list(self) -> None:
        assert evaluate({"a": {"b": 1}}, "$.a[*]") == []

    def test_empty_list(self) -> None:
        assert evaluate({"a": []}, "$.a[*]") == []

    def test_root_list(self) -> None:
        assert paths(evaluate([1, 2, 3], "$[*]")) == ["$[0]", "$[1]", "$[2]"]

    def test_multiple_wildcards_unsupported(self) -> None:
        root = {"a": [{"b": [1, 2]}]}
        assert evaluate(root, "$.a[*].b[*]") == []


class TestIndex:
    """Tests for literal integer indexes."""

    def test_single_index(self, bookstore) -> None:
        result = evaluate(bookstore, "$.store.book[0]")
        assert result == [QueryResult(path="$.store.book[0]", value={"title": "A"}, type="object")]

    def test_index_with_trailing_fields(self, bookstore) -> None:
        assert evaluate(bookstore, "$.store.book[1].title") == [
            QueryResult(path="$.store.book[1].title", value="B", type="string")
        ]

    def test_interleaved_indexes(self) -> None:
        root = {"a": [0, 1, {"b": ["x", "y"]}]}
        assert values(evaluate(root, "$.a[2].b[1]")) == ["y"]
        assert paths(evaluate(root, "$.a[2].b[1]")) == ["$.a[2].b[1]"]

    def test_consecutive_indexes(self) -> None:
        root = {"grid": [[1, 2], [3, 4]]}
        assert evaluate(root, "$.grid[1][0]") == [QueryResult(path="$.grid[1][0]", value=3, type="number")]

    def test_out_of_range(self, bookstore) -> None:
        assert evaluate(bookstore, "$.store.book[2]") == []

    def test_index_on_object(self) -> None:
        assert evaluate({"a": {"0": "zero"}}, "$.a[0]") == []

    def test_missing_trailing_field(self, bookstore) -> None:
        assert evaluate(bookstore, "$.store.book[0].price") == []

    def test_leading_zeros_normalised(self) -> None:
        assert paths(evaluate({"a": [1, 2]}, "$.a[01]")) == ["$.a[1]"]

    def test_root_index(self) -> None:
        assert evaluate(["x"], "$[0]") == [QueryResult(path="$[0]", value="x", type="string")]


class TestFilter:
    """Tests for [?(@.prop OP value)] predicates."""

    def test_greater_than(self, priced_books) -> None:
        result = evaluate(priced_books, "$.store.book[?(@.price>15)]")
        assert result == [QueryResult(path="$.store.book[1]", value={"price": 20}, type="object")]

    def test_less_than(self, sample_document) -> None:
        result = evaluate(sample_document, "$.store.book[?(@.price<10)]")
        assert paths(result) == ["$.store.book[0]", "$.store.book[2]"]

    def test_boolean_literal(self, sample_document) -> None:
        result = evaluate(sample_document, "$.store.book[?(@.inStock==true)]")
        assert paths(result) == ["$.store.book[0]", "$.store.book[2]", "$.store.book[3]"]

    def test_not_equals(self, sample_document) -> None:
        result = evaluate(sample_document, "$.store.book[?(@.category!='fiction')]")
        assert values(result) == [sample_document["store"]["book"][0]]

    @pytest.mark.parametrize("literal", ["'fiction'", '"fiction"', "fiction"])
    def test_string_literal_quotes(self, sample_document, literal) -> None:
        result = evaluate(sample_document, f"$.store.book[?(@.category=={literal})]")
        assert paths(result) == ["$.store.book[1]", "$.store.book[2]", "$.store.book[3]"]

    def test_loose_equality_across_types(self) -> None:
        root = {"items": [{"id": 1}, {"id": "2"}, {"id": 3}]}
        assert paths(evaluate(root, "$.items[?(@.id=='1')]")) == ["$.items[0]"]
        assert paths(evaluate(root, "$.items[?(@.id==2)]")) == ["$.items[1]"]

    def test_whitespace_around_operator(self, priced_books) -> None:
        assert paths(evaluate(priced_books, "$.store.book[?( @.price > 15 )]")) == ["$.store.book[1]"]

    def test_elements_without_property_skipped(self) -> None:
        root = {"a": [{"x": 1}, {"y": 1}, 5, None, {"x": 2}]}
        assert paths(evaluate(root, "$.a[?(@.x>0)]")) == ["$.a[0]", "$.a[4]"]

    def test_present_null_property_is_compared(self) -> None:
        root = {"a": [{"x": None}, {"x": 1}]}
        assert paths(evaluate(root, "$.a[?(@.x!=1)]")) == ["$.a[0]"]

    def test_nested_property(self) -> None:
        root = {"people": [{"name": {"first": "Ada"}}, {"name": {"first": "Alan"}}]}
        assert paths(evaluate(root, "$.people[?(@.name.first=='Alan')]")) == ["$.people[1]"]

    def test_literal_containing_bracket(self) -> None:
        root = {"a": [{"s": "x)]y"}, {"s": "z"}]}
        assert paths(evaluate(root, "$.a[?(@.s=='x)]y')]")) == ["$.a[0]"]

    def test_base_not_a_list(self) -> None:
        assert evaluate({"a": {"x": 1}}, "$.a[?(@.x==1)]") == []

    def test_no_matches(self, priced_books) -> None:
        assert evaluate(priced_books, "$.store.book[?(@.price>100)]") == []

    def test_text_after_filter_ignored(self, priced_books) -> None:
        result = evaluate(priced_books, "$.store.book[?(@.price>15)].title")
        assert result == [QueryResult(path="$.store.book[1]", value={"price": 20}, type="object")]

    def test_oversized_numbers(self) -> None:
        root = {"a": [{"x": 10**400}, {"x": 1}, {"x": "0x" + "f" * 300}]}
        assert paths(evaluate(root, "$.a[?(@.x>5)]")) == ["$.a[0]", "$.a[2]"]
        assert paths(evaluate(root, "$.a[?(@.x==0x" + "f" * 300 + ")]")) == ["$.a[0]", "$.a[2]"]
        assert paths(evaluate(root, "$.a[?(@.x==1)]")) == ["$.a[1]"]


class TestUnrecognizedPaths:
    """Malformed or unsupported paths yield an empty list, never an exception."""

    @pytest.mark.parametrize(
        "path",
        [
            "",
            "store.book",
            "$store",
            "$..book",
            "$.store.*",
            "$.store.book[1:2]",
            "$.store.book[-1]",
            "$.store.book[0,1]",
            "$.store.book[*].title[*]",
            "$.store.book[0][*]",
            "$.store.book[?(@.price<=10)]",
            "$.store.book[?(@.price=10)]",
            "$.store.book[?(@.price>10)",
            "$.store.book[?(@.title=='open)]",
            "$.store.book[",
        ],
    )
    def test_empty_result(self, sample_document, path) -> None:
        assert evaluate(sample_document, path) == []

    def test_non_string_path(self, sample_document) -> None:
        assert evaluate(sample_document, None) == []


class TestProperties:
    """Properties that hold for every query."""

    QUERIES = [
        "$",
        "$.store",
        "$.store.bicycle.color",
        "$.store.book[*]",
        "$.store.book[*].isbn",
        "$.store.book[3].title",
        "$.store.book[?(@.price>10)]",
        "$.store.book[?(@.category=='fiction')]",
    ]

    @pytest.mark.parametrize("query", QUERIES)
    def test_idempotent(self, sample_document, query) -> None:
        assert evaluate(sample_document, query) == evaluate(sample_document, query)

    @pytest.mark.parametrize("query", QUERIES)
    def test_does_not_mutate_input(self, sample_document, query) -> None:
        before = copy.deepcopy(sample_document)
        evaluate(sample_document, query)
        assert sample_document == before

    @pytest.mark.parametrize("query", QUERIES)
    def test_result_paths_resolve_to_same_value(self, sample_document, query) -> None:
        for result in evaluate(sample_document, query):
            assert parse_path(result.path).is_concrete
            assert evaluate(sample_document, result.path) == [result]

    def test_results_serialise(self, bookstore) -> None:
        result = evaluate(bookstore, "$.store.book[0].title")[0]
        assert result.to_dict() == {"path": "$.store.book[0].title", "value": "A", "type": "string"}
