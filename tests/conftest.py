"""
Shared fixtures for romakana tests.
"""

import pytest

from romakana.converter import clear_map_cache
from romakana.mapping import MappingNode
from romakana.romaji_map import get_romaji_to_kana_tree


@pytest.fixture(autouse=True)
def fresh_map_cache():
    """Each test starts with no memoized derived trees."""
    clear_map_cache()
    yield
    clear_map_cache()


@pytest.fixture(scope="session")
def base_tree() -> MappingNode:
    """The shared built-in table."""
    return get_romaji_to_kana_tree()


@pytest.fixture
def small_tree() -> MappingNode:
    """Tiny tree with a shared prefix: a, ab (no value), abc."""
    return MappingNode.from_pairs({"a": "A", "abc": "Z", "k": "K", "ka": "KA"})
