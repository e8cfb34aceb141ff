"""
Romaji to kana table for romakana.

Builds the base prefix tree from kunrei-shiki rows, then layers on
hepburn aliases, yoon (kya, sho, ...), small kana (xa, ltsu, ...),
sokuon for doubled consonants and fullwidth punctuation.

The base tree is built lazily once per process and never modified;
the IME and obsolete-kana variants are copies derived from it.
"""

import csv
import logging
import time
from pathlib import Path
from typing import Dict, List, Optional, Union

from romakana.cache import defcache
from romakana.mapping import MappingNode, create_custom_mapping
from romakana.settings import CUSTOM_MAP_DELIMITER

logger = logging.getLogger(__name__)


# ============================================================================
# Source Tables
# ============================================================================

BASIC_KUNREI = {
    'a': 'あ', 'i': 'い', 'u': 'う', 'e': 'え', 'o': 'お',
    'k': {'a': 'か', 'i': 'き', 'u': 'く', 'e': 'け', 'o': 'こ'},
    's': {'a': 'さ', 'i': 'し', 'u': 'す', 'e': 'せ', 'o': 'そ'},
    't': {'a': 'た', 'i': 'ち', 'u': 'つ', 'e': 'て', 'o': 'と'},
    'n': {'a': 'な', 'i': 'に', 'u': 'ぬ', 'e': 'ね', 'o': 'の'},
    'h': {'a': 'は', 'i': 'ひ', 'u': 'ふ', 'e': 'へ', 'o': 'ほ'},
    'm': {'a': 'ま', 'i': 'み', 'u': 'む', 'e': 'め', 'o': 'も'},
    'y': {'a': 'や', 'u': 'ゆ', 'o': 'よ'},
    'r': {'a': 'ら', 'i': 'り', 'u': 'る', 'e': 'れ', 'o': 'ろ'},
    'w': {'a': 'わ', 'i': 'ゐ', 'e': 'ゑ', 'o': 'を'},
    'g': {'a': 'が', 'i': 'ぎ', 'u': 'ぐ', 'e': 'げ', 'o': 'ご'},
    'z': {'a': 'ざ', 'i': 'じ', 'u': 'ず', 'e': 'ぜ', 'o': 'ぞ'},
    'd': {'a': 'だ', 'i': 'ぢ', 'u': 'づ', 'e': 'で', 'o': 'ど'},
    'b': {'a': 'ば', 'i': 'び', 'u': 'ぶ', 'e': 'べ', 'o': 'ぼ'},
    'p': {'a': 'ぱ', 'i': 'ぴ', 'u': 'ぷ', 'e': 'ぺ', 'o': 'ぽ'},
    'v': {'a': 'ゔぁ', 'i': 'ゔぃ', 'u': 'ゔ', 'e': 'ゔぇ', 'o': 'ゔぉ'},
}

SPECIAL_SYMBOLS = {
    '.': '。', ',': '、', ':': '：', '/': '・',
    '!': '！', '?': '？', '~': '〜', '-': 'ー',
    '‘': '「', '’': '」', '“': '『', '”': '』',
    '[': '［', ']': '］', '(': '（', ')': '）', '{': '｛', '}': '｝',
}

# Consonant -> i-row kana used to build yoon (kya -> き + ゃ)
CONSONANTS = {
    'k': 'き', 's': 'し', 't': 'ち', 'n': 'に', 'h': 'ひ',
    'm': 'み', 'r': 'り', 'g': 'ぎ', 'z': 'じ', 'd': 'ぢ',
    'b': 'び', 'p': 'ぴ', 'v': 'ゔ', 'q': 'く', 'f': 'ふ',
}

SMALL_Y = {'ya': 'ゃ', 'yi': 'ぃ', 'yu': 'ゅ', 'ye': 'ぇ', 'yo': 'ょ'}
SMALL_VOWELS = {'a': 'ぁ', 'i': 'ぃ', 'u': 'ぅ', 'e': 'ぇ', 'o': 'ぉ'}

# Typing the key is the same as typing the value
ALIASES = {
    'sh': 'sy',
    'ch': 'ty',
    'cy': 'ty',
    'chy': 'ty',
    'shy': 'sy',
    'j': 'zy',
    'jy': 'zy',
    # exceptions to the rules above
    'shi': 'si',
    'chi': 'ti',
    'tsu': 'tu',
    'ji': 'zi',
    'fu': 'hu',
}

# Reached with an x or l prefix: xtu -> っ
SMALL_LETTERS = {
    'tu': 'っ', 'wa': 'ゎ', 'ka': 'ヵ', 'ke': 'ヶ',
    **SMALL_VOWELS,
    **SMALL_Y,
}

SPECIAL_CASES = {
    'yi': 'い',
    'wu': 'う',
    'ye': 'いぇ',
    'wi': 'うぃ',
    'we': 'うぇ',
    'kwa': 'くぁ',
    'whu': 'う',
    # tha is てゃ, not てぁ
    'tha': 'てゃ',
    'thu': 'てゅ',
    'tho': 'てょ',
    'dha': 'でゃ',
    'dhu': 'でゅ',
    'dho': 'でょ',
}

# Consonant clusters followed by a small vowel: fa -> ふぁ, twu -> とぅ
AIUEO_CONSTRUCTIONS = {
    'wh': 'う', 'kw': 'く', 'qw': 'く', 'q': 'く', 'gw': 'ぐ',
    'sw': 'す', 'ts': 'つ', 'th': 'て', 'tw': 'と', 'dh': 'で',
    'dw': 'ど', 'fw': 'ふ', 'f': 'ふ',
}

N_SPELLINGS = ['n', "n'", 'xn']

# Characters whose doubling produces a sokuon (kka -> っか)
SOKUON_CONSONANTS = [*CONSONANTS, 'c', 'y', 'w', 'j']

OBSOLETE_KANA = {'wi': 'ゐ', 'we': 'ゑ'}


# ============================================================================
# Tree Construction
# ============================================================================

def _alternatives(romaji: str) -> List[str]:
    """Spellings that should reach the same node as a kunrei romaji."""
    result = []
    for alt, roma in [*ALIASES.items(), ('c', 'k')]:
        if romaji.startswith(roma):
            result.append(romaji.replace(roma, alt, 1))
    return result


def _add_tsu(node: MappingNode) -> MappingNode:
    """Copy of node with っ prepended to every value."""
    return MappingNode(
        f"っ{node.value}" if node.value is not None else None,
        {char: _add_tsu(child) for char, child in node.children.items()},
    )


def create_romaji_to_kana_tree() -> MappingNode:
    """
    Build the base romaji -> kana tree from the source tables.

    The order of the steps matters: later steps overwrite earlier
    entries (e.g. the fu alias replaces the f + small vowel ふぅ).

    Returns:
        A freshly built tree with no shared substructure.
    """
    t0 = time.perf_counter()
    tree = MappingNode.from_dict(BASIC_KUNREI)

    for consonant, y_kana in CONSONANTS.items():
        for roma, kana in SMALL_Y.items():
            tree.subtree(consonant + roma).value = y_kana + kana

    for symbol, jsymbol in SPECIAL_SYMBOLS.items():
        tree.subtree(symbol).value = jsymbol

    for consonant, aiueo_kana in AIUEO_CONSTRUCTIONS.items():
        for vowel, kana in SMALL_VOWELS.items():
            tree.subtree(consonant + vowel).value = aiueo_kana + kana

    for n_char in N_SPELLINGS:
        tree.subtree(n_char).value = 'ん'

    # c acts like k, except where the aliases below give it ch- readings
    tree.children['c'] = tree.children['k'].copy()

    for string, alternative in ALIASES.items():
        parent = tree.subtree(string[:-1])
        parent.children[string[-1]] = tree.subtree(alternative).copy()

    for kunrei, kana in SMALL_LETTERS.items():
        x_subtree = tree.subtree('x' + kunrei)
        x_subtree.value = kana

        # ltu -> xtu
        parent = tree.subtree('l' + kunrei[:-1])
        parent.children[kunrei[-1]] = x_subtree.copy()

        # ltsu -> ltu
        for alt in _alternatives(kunrei):
            for prefix in ('l', 'x'):
                alt_parent = tree.subtree(prefix + alt[:-1])
                alt_parent.children[alt[-1]] = tree.subtree(prefix + kunrei).copy()

    for string, kana in SPECIAL_CASES.items():
        tree.subtree(string).value = kana

    for consonant in SOKUON_CONSONANTS:
        subtree = tree.children[consonant]
        subtree.children[consonant] = _add_tsu(subtree)

    # nn is handled by ime_mode_map, never っん
    del tree.children['n'].children['n']

    logger.debug(
        f"Built romaji tree: {len(tree)} entries "
        f"in {(time.perf_counter() - t0) * 1000:.1f}ms"
    )
    return tree


@defcache("romaji-to-kana-tree")
def _base_tree() -> MappingNode:
    return create_romaji_to_kana_tree()


def get_romaji_to_kana_tree() -> MappingNode:
    """
    Get the shared base tree, building it on first use.

    The returned tree is shared by every caller and must not be modified;
    use MappingNode.copy() or the transforms below to derive variants.
    """
    return _base_tree.ensure()


# ============================================================================
# Tree Variants
# ============================================================================

def ime_mode_map(tree: MappingNode) -> MappingNode:
    """
    IME variant of tree.

    A single trailing n stays unconverted so the user can keep typing
    (na, ni, ...); nn or n followed by a space commits ん.
    """
    tree_copy = tree.copy()
    n_node = tree_copy.subtree('n')
    n_node.children['n'] = MappingNode('ん')
    n_node.children[' '] = MappingNode('ん')
    return tree_copy


use_obsolete_kana_map = create_custom_mapping(OBSOLETE_KANA)
use_obsolete_kana_map.__doc__ = "Copy of a tree with wi -> ゐ and we -> ゑ."


def table_entries(tree: Optional[MappingNode] = None) -> Dict[str, str]:
    """Flat romaji -> kana view of a tree (the base tree by default)."""
    if tree is None:
        tree = get_romaji_to_kana_tree()
    return dict(tree.items())


# ============================================================================
# Custom Map Files
# ============================================================================

def load_custom_mapping(path: Union[str, Path]) -> Dict[str, str]:
    """
    Load romaji -> kana overrides from a tab-separated file.

    Each line holds a romaji sequence and its replacement. Blank lines and
    lines starting with # are ignored; lines without two columns are
    skipped with a warning. Later lines win over earlier ones.

    Args:
        path: File to read.

    Returns:
        Flat romaji -> kana mapping, suitable for customKanaMapping.

    Raises:
        FileNotFoundError: If path does not exist.
    """
    path = Path(path)
    mapping: Dict[str, str] = {}

    with open(path, 'r', encoding='utf-8', newline='') as f:
        reader = csv.reader(f, delimiter=CUSTOM_MAP_DELIMITER, quoting=csv.QUOTE_NONE)
        for line_no, row in enumerate(reader, start=1):
            if not row or not ''.join(row).strip() or row[0].startswith('#'):
                continue
            if len(row) < 2:
                logger.warning(f"{path}:{line_no}: expected romaji<TAB>kana, skipping {row!r}")
                continue
            romaji = row[0].strip().lower()
            kana = row[1].strip()
            mapping[romaji] = kana

    logger.info(f"Loaded {len(mapping)} custom kana mappings from {path}")
    return mapping
