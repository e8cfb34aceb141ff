"""
Romaji to kana conversion for romakana.

Usage:
    >>> to_kana("onaji BUTTSUUJI")
    'おなじ ブッツウジ'
    >>> to_kana("batsuge-mu")
    'ばつげーむ'
    >>> to_kana("we", {"useObsoleteKana": True})
    'ゑ'
    >>> to_kana("wanakana", {"customKanaMapping": {"na": "に", "ka": "bana"}})
    'わにbanaに'
"""

import logging
from typing import Any, List, Mapping, Optional, Tuple, Union

from romakana.cache import KeyedCache
from romakana.characters import hiragana_to_katakana, is_upper_case, to_lower
from romakana.mapping import CustomMapping, MappingNode, merge_custom_mapping
from romakana.models import ConversionResult
from romakana.options import KanaOptions, merge_with_default_options
from romakana.romaji_map import get_romaji_to_kana_tree, ime_mode_map, use_obsolete_kana_map
from romakana.settings import MAP_CACHE_SIZE
from romakana.tokenizer import Token, apply_mapping

logger = logging.getLogger(__name__)

OptionsLike = Union[None, KanaOptions, Mapping[str, Any]]

# Derived trees keyed by KanaOptions.mapping_cache_key()
_map_cache: KeyedCache[MappingNode] = KeyedCache("kana-maps", maxsize=MAP_CACHE_SIZE)


# ============================================================================
# Mapping Tree
# ============================================================================

def create_romaji_to_kana_map(
    ime_mode: bool = False,
    use_obsolete_kana: bool = False,
    custom_kana_mapping: Optional[CustomMapping] = None,
) -> MappingNode:
    """
    Build a romaji -> kana tree for a configuration.

    Always returns a new tree; the shared base tree is never modified.

    Args:
        ime_mode: Leave a trailing n pending and accept nn / "n " for ん.
        use_obsolete_kana: Map wi/we to ゐ/ゑ.
        custom_kana_mapping: Overrides merged last, winning over every
            other entry at the same path.

    Returns:
        The mapping tree.
    """
    base = get_romaji_to_kana_tree()
    tree = base

    if ime_mode:
        tree = ime_mode_map(tree)

    if use_obsolete_kana:
        tree = use_obsolete_kana_map(tree)

    if custom_kana_mapping is not None:
        tree = merge_custom_mapping(tree, custom_kana_mapping)

    if tree is base:
        tree = base.copy()
    return tree


def get_kana_map(options: OptionsLike = None) -> MappingNode:
    """
    Memoized tree for options.

    Each distinct configuration is built once, even under concurrent
    access. The returned tree is shared and must not be modified.
    """
    config = merge_with_default_options(options)
    key = config.mapping_cache_key()

    def build() -> MappingNode:
        logger.debug(f"Building kana map for {key!r}")
        return create_romaji_to_kana_map(
            ime_mode=config.ime_mode.enabled,
            use_obsolete_kana=config.use_obsolete_kana,
            custom_kana_mapping=config.custom_kana_mapping,
        )

    return _map_cache.get_or_build(key, build)


def clear_map_cache():
    """Drop all memoized trees."""
    _map_cache.clear()


# ============================================================================
# Tokenizing
# ============================================================================

def split_into_converted_kana(
    text: str = "",
    options: OptionsLike = None,
    mapping: Optional[MappingNode] = None,
) -> List[Token]:
    """
    Tokenize text into (start, end, kana) spans.

    Args:
        text: Input text, any casing.
        options: Conversion options.
        mapping: Tree to use instead of the one built from options.

    Returns:
        Tokens over the lowercased text. A final token with kana None
        means trailing IME input is still pending.
    """
    config = merge_with_default_options(options)
    if mapping is None:
        mapping = get_kana_map(config)
    return apply_mapping(to_lower(text), mapping, not config.ime_mode.enabled)


# ============================================================================
# Converting
# ============================================================================

HIRAGANA = 'hiragana'
KATAKANA = 'katakana'


def _is_passthrough(mapping: MappingNode, romaji: str) -> bool:
    """True if no sequence in mapping spells romaji."""
    node = mapping.lookup(romaji)
    return node is None or node.value is None


def _convert(
    text: str,
    options: OptionsLike,
    mapping: Optional[MappingNode],
    force: Optional[str] = None,
) -> Tuple[str, List[Token], List[Optional[str]]]:
    """Tokenize and pick the output script for each token."""
    config = merge_with_default_options(options)
    if mapping is None:
        mapping = get_kana_map(config)
    tokens = split_into_converted_kana(text, config, mapping)
    lowered = to_lower(text)

    outputs: List[Optional[str]] = []
    parts: List[str] = []
    for start, end, kana in tokens:
        if kana is None:
            # Pending IME input is copied through as typed
            parts.append(text[start:])
            outputs.append(None)
            break

        if _is_passthrough(mapping, lowered[start:end]):
            # Unmapped input keeps its original casing
            parts.append(text[start:end])
            outputs.append(text[start:end])
            continue

        if force is not None:
            katakana_output = force == KATAKANA
        else:
            enforce_hiragana = config.enforce_hiragana
            enforce_katakana = config.enforce_katakana or is_upper_case(text[start:end])
            katakana_output = enforce_katakana and not enforce_hiragana

        out = hiragana_to_katakana(kana) if katakana_output else kana
        parts.append(out)
        outputs.append(out)

    return ''.join(parts), tokens, outputs


def to_kana(
    text: str = "",
    options: OptionsLike = None,
    mapping: Optional[MappingNode] = None,
) -> str:
    """
    Convert romaji to kana.

    Lowercase romaji becomes hiragana and all-uppercase romaji becomes
    katakana, unless the IME mode forces a script. Characters that are not
    romaji pass through unchanged.

    Args:
        text: Text to convert.
        options: KanaOptions or a dict such as
            {"IMEMode": "toKatakana", "useObsoleteKana": True}.
        mapping: Tree to use instead of the one built from options.

    Returns:
        Converted text.
    """
    output, _, _ = _convert(text, options, mapping)
    return output


def to_hiragana(
    text: str = "",
    options: OptionsLike = None,
    mapping: Optional[MappingNode] = None,
) -> str:
    """Convert romaji to hiragana regardless of casing."""
    output, _, _ = _convert(text, options, mapping, force=HIRAGANA)
    return output


def to_katakana(
    text: str = "",
    options: OptionsLike = None,
    mapping: Optional[MappingNode] = None,
) -> str:
    """Convert romaji to katakana regardless of casing."""
    output, _, _ = _convert(text, options, mapping, force=KATAKANA)
    return output


def convert(
    text: str = "",
    options: OptionsLike = None,
    mapping: Optional[MappingNode] = None,
) -> ConversionResult:
    """
    Convert romaji to kana, keeping the token breakdown.

    Returns:
        ConversionResult with the output text, tokens and whether any
        IME input is still pending.
    """
    output, tokens, outputs = _convert(text, options, mapping)
    return ConversionResult.from_tokens(text, output, tokens, outputs)
