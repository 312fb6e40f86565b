"""Shared fixtures for search tests."""

import pytest

from itemsearch.models import SearchField


class Product:
    """Item that declares its own search fields."""

    def __init__(self, sku: str, name: str):
        self.sku = sku
        self.name = name

    def search_fields(self):
        return [SearchField(text=self.sku, entirely=True), self.name]

    def __repr__(self):
        return f"Product({self.sku!r})"


@pytest.fixture
def desserts():
    return ["apple pie", "banana split", "apple tart"]


@pytest.fixture
def people():
    return [
        {"id": "u1", "name": "Alice", "city": "Paris"},
        {"id": "u2", "name": "Bob", "city": "Berlin"},
        {"id": "u3", "name": "Alicia", "city": "Alice Springs"},
    ]


@pytest.fixture
def products():
    return [
        Product("TEA-1", "Green tea"),
        Product("POT-7", "Teapot"),
        Product("TEA", "Tea sampler"),
    ]
