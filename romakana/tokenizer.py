"""
Longest-match tokenizer for romakana.

Splits lowercased romaji into (start, end, kana) tokens by walking the
mapping tree from each cursor position.
"""

from typing import List, NamedTuple, Optional

from romakana.mapping import MappingNode


class Token(NamedTuple):
    """
    A converted span of the lowercased input.

    kana is None only for the last token of an IME session, when the
    remaining input is a prefix that more typing could still extend.
    """
    start: int
    end: int
    kana: Optional[str]

    @property
    def pending(self) -> bool:
        return self.kana is None


def apply_mapping(text: str, mapping: MappingNode, optimize: bool = True) -> List[Token]:
    """
    Tokenize text against a mapping tree.

    At each position the tree is walked as far as the input allows and
    the longest sequence with a value is emitted. Characters that start
    no complete sequence pass through one at a time.

    Args:
        text: Lowercased input.
        mapping: Root of the mapping tree.
        optimize: When False (IME mode), input that ends inside a node
            with children is left pending as a final (start, len, None)
            token instead of being committed.

    Returns:
        Tokens covering text in order, with no gaps or overlaps.
    """
    tokens: List[Token] = []
    length = len(text)
    i = 0

    while i < length:
        node = mapping
        j = i
        match_end = i
        match_kana = None

        while j < length:
            child = node.children.get(text[j])
            if child is None:
                break
            node = child
            j += 1
            if node.value is not None:
                match_end = j
                match_kana = node.value

        if not optimize and j == length and j > i and node.children:
            tokens.append(Token(i, length, None))
            break

        if match_kana is not None:
            tokens.append(Token(i, match_end, match_kana))
            i = match_end
        else:
            tokens.append(Token(i, i + 1, text[i]))
            i += 1

    return tokens
