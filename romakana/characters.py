"""
Character classification and kana conversion helpers for romakana.

All functions here are pure and operate on single code points or on
strings without changing their length.
"""

from romakana.constants import (
    LATIN_UPPERCASE_START, LATIN_UPPERCASE_END,
    HIRAGANA_START, HIRAGANA_END,
    KANA_SHIFT, PROLONGED_SOUND_MARK, KANA_SLASH_DOT,
)


# ============================================================================
# Character Classification
# ============================================================================

def is_char_in_range(char: str, start: int, end: int) -> bool:
    """Check whether a single character falls in [start, end]."""
    if not char:
        return False
    code = ord(char[0])
    return start <= code <= end


def is_char_upper_case(char: str) -> bool:
    """
    Check whether a character is an uppercase Latin letter (A-Z).

    Only ASCII letters count; uppercase letters of other alphabets do not
    force katakana output.
    """
    return is_char_in_range(char, LATIN_UPPERCASE_START, LATIN_UPPERCASE_END)


def is_char_long_dash(char: str) -> bool:
    """Check for the prolonged sound mark ー."""
    return bool(char) and ord(char[0]) == PROLONGED_SOUND_MARK


def is_char_slash_dot(char: str) -> bool:
    """Check for the katakana middle dot ・."""
    return bool(char) and ord(char[0]) == KANA_SLASH_DOT


def is_char_hiragana(char: str) -> bool:
    """Check whether a character is hiragana. ー counts as hiragana."""
    if is_char_long_dash(char):
        return True
    return is_char_in_range(char, HIRAGANA_START, HIRAGANA_END)


def is_upper_case(text: str) -> bool:
    """True if every character in text is an uppercase Latin letter."""
    return all(is_char_upper_case(c) for c in text)


# ============================================================================
# Kana Conversion
# ============================================================================

def hiragana_to_katakana(text: str) -> str:
    """
    Convert hiragana to katakana by shifting code points.

    Non-hiragana characters pass through, and ー / ・ are kept as-is since
    they are shared by both scripts.

    Args:
        text: Text to convert.

    Returns:
        Text with hiragana converted to katakana.
    """
    result = []
    for char in text:
        if is_char_long_dash(char) or is_char_slash_dot(char):
            result.append(char)
        elif is_char_hiragana(char):
            result.append(chr(ord(char) + KANA_SHIFT))
        else:
            result.append(char)
    return ''.join(result)


def to_lower(text: str) -> str:
    """
    Lowercase text one character at a time without changing its length.

    Characters whose lowercase form expands to several code points
    (e.g. 'İ') are kept unchanged so token offsets stay valid against the
    original string.
    """
    result = []
    for char in text:
        lower = char.lower()
        result.append(lower if len(lower) == 1 else char)
    return ''.join(result)
