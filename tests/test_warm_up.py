"""
Tests for warm_up() - pre-building the mapping trees.
"""

import romakana
from romakana import converter
from romakana.converter import get_kana_map


class TestWarmUp:
    """Tests for cache warm-up at startup."""

    def test_returns_timings(self):
        """Test warm_up returns total seconds and per-step milliseconds."""
        total, timings = romakana.warm_up()
        assert isinstance(total, float)
        assert isinstance(timings, dict)
        assert set(timings) == {"base", "default", "ime", "total"}
        assert all(value >= 0 for value in timings.values())

    def test_trees_are_cached_afterwards(self):
        """Test the default and IME trees are served from the cache after warm-up."""
        before = converter._map_cache.builds
        romakana.warm_up()
        builds = converter._map_cache.builds
        assert builds == before + 2

        default_tree = get_kana_map()
        ime_tree = get_kana_map({"IMEMode": True})

        assert converter._map_cache.builds == builds
        assert get_kana_map() is default_tree
        assert get_kana_map({"IMEMode": True}) is ime_tree
        assert ime_tree.lookup("nn").value == "ん"

    def test_verbose_prints_steps(self, capsys):
        """Test verbose mode prints one line per step."""
        romakana.warm_up(verbose=True)
        out = capsys.readouterr().out
        assert "Warming up romakana caches" in out
        assert "Base tree" in out
        assert "IME map" in out
        assert "Total warm-up" in out
