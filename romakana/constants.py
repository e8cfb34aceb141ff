"""
Consolidated constants for romakana.

This module provides a single source of truth for:
- Unicode code point ranges used by character classification
- The string names accepted for the IME output script

All other modules should import from here to avoid duplication.
"""

from typing import Dict


# ============================================================================
# Unicode Ranges
# ============================================================================

LATIN_UPPERCASE_START = 0x41
LATIN_UPPERCASE_END = 0x5A

HIRAGANA_START = 0x3041
HIRAGANA_END = 0x3096

KATAKANA_START = 0x30A1

# Offset between a hiragana code point and its katakana counterpart
KANA_SHIFT = KATAKANA_START - HIRAGANA_START

PROLONGED_SOUND_MARK = 0x30FC  # ー
KANA_SLASH_DOT = 0x30FB  # ・


# ============================================================================
# IME Output Script Names
# ============================================================================

class TO_KANA_METHODS:
    """Names of the output scripts an IME session can force."""
    HIRAGANA = "toHiragana"
    KATAKANA = "toKatakana"


# Short and long spellings accepted for each forced script
IME_MODE_ALIASES: Dict[str, str] = {
    "hiragana": TO_KANA_METHODS.HIRAGANA,
    "tohiragana": TO_KANA_METHODS.HIRAGANA,
    "katakana": TO_KANA_METHODS.KATAKANA,
    "tokatakana": TO_KANA_METHODS.KATAKANA,
}
