"""Pytest configuration and fixtures"""

import copy

import pytest

from json_toolbox.samples import SAMPLE_DOCUMENT


@pytest.fixture
def bookstore() -> dict:
    return {"store": {"book": [{"title": "A"}, {"title": "B"}]}}


@pytest.fixture
def priced_books() -> dict:
    return {"store": {"book": [{"price": 10}, {"price": 20}]}}


@pytest.fixture
def sample_document() -> dict:
    return copy.deepcopy(SAMPLE_DOCUMENT)
