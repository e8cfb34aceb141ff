"""
Romakana: romaji to kana conversion
Longest-match romaji tokenizer with IME, obsolete kana and custom mapping support.
"""

import time
from typing import Tuple

from romakana.characters import hiragana_to_katakana, is_char_upper_case
from romakana.converter import (
    clear_map_cache,
    convert,
    create_romaji_to_kana_map,
    get_kana_map,
    split_into_converted_kana,
    to_hiragana,
    to_kana,
    to_katakana,
)
from romakana.mapping import MappingNode, create_custom_mapping
from romakana.models import ConversionResult, TokenResult
from romakana.options import ImeMode, KanaOptions, merge_with_default_options
from romakana.romaji_map import get_romaji_to_kana_tree, load_custom_mapping
from romakana.tokenizer import Token, apply_mapping

__version__ = "0.1.0"

__all__ = [
    "ConversionResult",
    "ImeMode",
    "KanaOptions",
    "MappingNode",
    "Token",
    "TokenResult",
    "apply_mapping",
    "clear_map_cache",
    "convert",
    "create_custom_mapping",
    "create_romaji_to_kana_map",
    "get_kana_map",
    "get_romaji_to_kana_tree",
    "hiragana_to_katakana",
    "is_char_upper_case",
    "load_custom_mapping",
    "merge_with_default_options",
    "split_into_converted_kana",
    "to_hiragana",
    "to_kana",
    "to_katakana",
    "warm_up",
]


def warm_up(verbose: bool = False) -> Tuple[float, dict]:
    """
    Pre-build the mapping trees used by the default configurations.

    Call this once at application startup to avoid paying for tree
    construction on the first conversion.

    Args:
        verbose: If True, print timing information.

    Returns:
        Tuple of (total_time_seconds, timing_details_dict)

    Example:
        >>> import romakana
        >>> elapsed, details = romakana.warm_up(verbose=True)
        Warming up romakana caches...
          Base tree:        4.1ms
          Default map:      1.2ms
          IME map:          1.3ms
        Total warm-up:      6.6ms
    """
    timings = {}
    total_start = time.perf_counter()

    if verbose:
        print("Warming up romakana caches...")

    t0 = time.perf_counter()
    get_romaji_to_kana_tree()
    timings['base'] = (time.perf_counter() - t0) * 1000
    if verbose:
        print(f"  Base tree:    {timings['base']:>7.1f}ms")

    t0 = time.perf_counter()
    get_kana_map()
    timings['default'] = (time.perf_counter() - t0) * 1000
    if verbose:
        print(f"  Default map:  {timings['default']:>7.1f}ms")

    t0 = time.perf_counter()
    get_kana_map({"IMEMode": True})
    timings['ime'] = (time.perf_counter() - t0) * 1000
    if verbose:
        print(f"  IME map:      {timings['ime']:>7.1f}ms")

    total_time = time.perf_counter() - total_start
    timings['total'] = total_time * 1000

    if verbose:
        print(f"Total warm-up:  {timings['total']:>7.1f}ms")

    return total_time, timings
