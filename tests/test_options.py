"""
Tests for options.py - option parsing and defaults.
"""

import pytest

from romakana.options import (
    DEFAULT_OPTIONS,
    ImeMode,
    KanaOptions,
    merge_with_default_options,
    parse_ime_mode,
)


class TestParseImeMode:
    """Tests for IME mode coercion."""

    @pytest.mark.parametrize("value,expected", [
        (None, ImeMode.OFF),
        (False, ImeMode.OFF),
        (True, ImeMode.ON),
        ("on", ImeMode.ON),
        ("off", ImeMode.OFF),
        ("hiragana", ImeMode.HIRAGANA),
        ("toHiragana", ImeMode.HIRAGANA),
        ("KATAKANA", ImeMode.KATAKANA),
        ("toKatakana", ImeMode.KATAKANA),
        (ImeMode.KATAKANA, ImeMode.KATAKANA),
    ])
    def test_values(self, value, expected):
        """Test accepted IME mode values."""
        assert parse_ime_mode(value) is expected

    @pytest.mark.parametrize("value", ["romaji", 2, 1.5, []])
    def test_invalid(self, value):
        """Test rejected IME mode values."""
        with pytest.raises(ValueError):
            parse_ime_mode(value)

    def test_enabled(self):
        """Test every mode but OFF is enabled."""
        assert not ImeMode.OFF.enabled
        assert ImeMode.ON.enabled
        assert ImeMode.HIRAGANA.enabled
        assert ImeMode.KATAKANA.enabled


class TestMergeWithDefaults:
    """Tests for finalizing options."""

    def test_none_gives_defaults(self):
        """Test None gives the default options."""
        options = merge_with_default_options(None)
        assert options is DEFAULT_OPTIONS
        assert options.ime_mode is ImeMode.OFF
        assert options.use_obsolete_kana is False
        assert options.custom_kana_mapping is None

    def test_camel_case_keys(self):
        """Test camelCase option names."""
        options = merge_with_default_options({
            "IMEMode": "toKatakana",
            "useObsoleteKana": True,
            "customKanaMapping": {"na": "に"},
        })
        assert options.ime_mode is ImeMode.KATAKANA
        assert options.use_obsolete_kana is True
        assert options.custom_kana_mapping == {"na": "に"}

    def test_snake_case_keys(self):
        """Test snake_case option names."""
        options = merge_with_default_options({"ime_mode": True})
        assert options.ime_mode is ImeMode.ON

    def test_options_instance_passes_through(self):
        """Test a KanaOptions is returned as is."""
        options = KanaOptions(use_obsolete_kana=True)
        assert merge_with_default_options(options) is options

    def test_invalid_ime_mode_raises(self):
        """Test an invalid IME mode raises ValueError."""
        with pytest.raises(ValueError):
            merge_with_default_options({"IMEMode": "sometimes"})

    def test_frozen(self):
        """Test options cannot be modified."""
        with pytest.raises(Exception):
            DEFAULT_OPTIONS.use_obsolete_kana = True


class TestEnforcement:
    """Tests for forced output scripts."""

    def test_flags(self):
        """Test enforce flags follow the IME mode."""
        assert KanaOptions(ime_mode="hiragana").enforce_hiragana
        assert not KanaOptions(ime_mode="hiragana").enforce_katakana
        assert KanaOptions(ime_mode="katakana").enforce_katakana
        assert not KanaOptions(ime_mode=True).enforce_hiragana
        assert not KanaOptions(ime_mode=True).enforce_katakana


class TestCacheKey:
    """Tests for the tree cache key."""

    def test_ime_scripts_share_tree_key(self):
        """Test IME script variants share one tree."""
        assert (KanaOptions(ime_mode="hiragana").mapping_cache_key()
                == KanaOptions(ime_mode=True).mapping_cache_key())

    def test_custom_order_irrelevant(self):
        """Test custom map order does not change the key."""
        a = KanaOptions(custom_kana_mapping={"a": "1", "b": "2"})
        b = KanaOptions(custom_kana_mapping={"b": "2", "a": "1"})
        assert a.mapping_cache_key() == b.mapping_cache_key()

    def test_key_is_hashable(self):
        """Test keys hash for dict and callable mappings."""
        hash(KanaOptions(custom_kana_mapping={"a": "1"}).mapping_cache_key())
        hash(KanaOptions(custom_kana_mapping=lambda tree: tree).mapping_cache_key())
