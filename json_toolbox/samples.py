"""Sample data for the query guide and the schema validator."""
from __future__ import annotations

SAMPLE_DOCUMENT = {
    "store": {
        "book": [
            {
                "category": "reference",
                "author": "Nigel Rees",
                "title": "Sayings of the Century",
                "price": 8.95,
                "inStock": True,
            },
            {
                "category": "fiction",
                "author": "Evelyn Waugh",
                "title": "Sword of Honour",
                "price": 12.99,
                "inStock": False,
            },
            {
                "category": "fiction",
                "author": "Herman Melville",
                "title": "Moby Dick",
                "isbn": "0-553-21311-3",
                "price": 8.99,
                "inStock": True,
            },
            {
                "category": "fiction",
                "author": "J. R. R. Tolkien",
                "title": "The Lord of the Rings",
                "isbn": "0-395-19395-8",
                "price": 22.99,
                "inStock": True,
            },
        ],
        "bicycle": {"color": "red", "price": 19.95},
    }
}

# (path, description) pairs shown in the query guide
QUERY_EXAMPLES = [
    ("$", "The whole document"),
    ("$.store", "The store object"),
    ("$.store.book[*]", "All books"),
    ("$.store.book[0]", "The first book"),
    ("$.store.book[*].title", "Every book title"),
    ("$.store.book[?(@.inStock==true)]", "Books in stock"),
    ("$.store.book[?(@.price<10)]", "Books cheaper than 10"),
    ("$.store.book[?(@.category=='fiction')]", "Fiction books"),
    ("$.store.bicycle.color", "The bicycle colour"),
]

SYNTAX_GUIDE = [
    ("$", "Root object"),
    ("$.field", "Child field"),
    ("$.list[0]", "List element by index"),
    ("$.list[*]", "All list elements"),
    ("$.list[?(@.field==value)]", "Filter elements (==, !=, <, >)"),
]

SAMPLE_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["name", "email", "age"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "email": {"type": "string", "format": "email"},
        "age": {"type": "integer", "minimum": 0},
        "tags": {"type": "array", "items": {"type": "string"}},
    },
    "additionalProperties": False,
}

SAMPLE_VALID_DATA = {
    "name": "Ada Lovelace",
    "email": "ada@example.com",
    "age": 36,
    "tags": ["math", "computing"],
}
