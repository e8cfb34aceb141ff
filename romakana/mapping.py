"""
Romaji prefix tree for romakana.

A MappingNode maps single input characters to child nodes and may carry
a kana value of its own. The path from the root to a node spells a romaji
sequence; the node's value is set iff that sequence is a complete token.

Trees are built by the functions in romaji_map and then treated as
read-only. Every transform in this module works on a deep copy.
"""

import logging
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

# Key used for the node value in the nested-dict representation
VALUE_KEY = ''


class MappingNode:
    """Single node in the romaji prefix tree."""
    __slots__ = ("value", "children")

    def __init__(self, value: Optional[str] = None,
                 children: Optional[Dict[str, 'MappingNode']] = None):
        self.value = value
        self.children: Dict[str, MappingNode] = children if children is not None else {}

    def __repr__(self) -> str:
        return f"MappingNode(value={self.value!r}, children={sorted(self.children)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MappingNode):
            return NotImplemented
        return self.value == other.value and self.children == other.children

    def __len__(self) -> int:
        """Number of complete romaji sequences below (and including) this node."""
        return sum(1 for _ in self.items())

    def __contains__(self, romaji: str) -> bool:
        node = self.lookup(romaji)
        return node is not None and node.value is not None

    def subtree(self, path: str) -> 'MappingNode':
        """
        Walk path from this node, creating missing nodes on the way.

        Args:
            path: Romaji sequence to walk.

        Returns:
            The node at the end of path.
        """
        node = self
        for char in path:
            child = node.children.get(char)
            if child is None:
                child = MappingNode()
                node.children[char] = child
            node = child
        return node

    def lookup(self, path: str) -> Optional['MappingNode']:
        """Walk path without creating nodes. Returns None on a dead end."""
        node = self
        for char in path:
            node = node.children.get(char)
            if node is None:
                return None
        return node

    def copy(self) -> 'MappingNode':
        """Deep copy with no shared substructure."""
        return MappingNode(
            self.value,
            {char: child.copy() for char, child in self.children.items()},
        )

    def items(self, prefix: str = '') -> Iterator[Tuple[str, str]]:
        """Yield (romaji, kana) for every valued path, depth first in insertion order."""
        if self.value is not None:
            yield prefix, self.value
        for char, child in self.children.items():
            yield from child.items(prefix + char)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the nested-dict representation.

        The empty-string key holds the node value, other keys are
        single characters pointing at nested dicts.
        """
        result: Dict[str, Any] = {}
        if self.value is not None:
            result[VALUE_KEY] = self.value
        for char, child in self.children.items():
            result[char] = child.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'MappingNode':
        """
        Build a tree from a nested dict.

        A string value under a non-empty key is shorthand for a leaf
        holding that value, e.g. {"k": {"a": "か"}}.
        """
        node = cls()
        for key, value in data.items():
            if key == VALUE_KEY:
                node.value = value
            elif isinstance(value, str):
                node.subtree(key).value = value
            else:
                child = cls.from_dict(value)
                if len(key) == 1:
                    node.children[key] = child
                else:
                    _graft(node, key, child)
        return node

    @classmethod
    def from_pairs(cls, pairs: Mapping[str, str]) -> 'MappingNode':
        """Build a tree from flat romaji -> kana pairs."""
        node = cls()
        for romaji, kana in pairs.items():
            node.subtree(romaji).value = kana
        return node


def _graft(node: MappingNode, path: str, child: MappingNode):
    """Attach child at path below node, replacing whatever was there."""
    parent = node.subtree(path[:-1])
    parent.children[path[-1]] = child


# ============================================================================
# Tree Transforms
# ============================================================================

def merge_trees(base: MappingNode, overrides: MappingNode) -> MappingNode:
    """
    Return a copy of base with overrides merged in.

    Values from overrides replace values in base at the same path. Paths
    only present in base are kept, so merging is never destructive beyond
    the overridden values.
    """
    merged = base.copy()
    _merge_into(merged, overrides)
    return merged


def _merge_into(target: MappingNode, source: MappingNode):
    if source.value is not None:
        target.value = source.value
    for char, child in source.children.items():
        existing = target.children.get(char)
        if existing is None:
            target.children[char] = child.copy()
        else:
            _merge_into(existing, child)


CustomMapping = Union[Mapping[str, str], Callable[[MappingNode], MappingNode]]


def create_custom_mapping(custom_map: Optional[Mapping[str, str]] = None
                          ) -> Callable[[MappingNode], MappingNode]:
    """
    Create a tree transform that applies romaji -> kana overrides.

    Keys are inserted literally, one node per character, and overwrite
    any existing value at that exact path. Nothing is validated: an empty
    key sets the root value, which the tokenizer never emits.

    Args:
        custom_map: Flat romaji -> kana overrides.

    Returns:
        A function taking a tree and returning an overridden copy.
    """
    custom_tree = MappingNode.from_pairs(custom_map or {})

    def make_map(tree: MappingNode) -> MappingNode:
        return merge_trees(tree, custom_tree)

    return make_map


def merge_custom_mapping(tree: MappingNode, custom: Optional[CustomMapping]) -> MappingNode:
    """
    Apply a custom mapping to a copy of tree.

    Args:
        tree: Tree to start from. Not modified.
        custom: Flat overrides, or a callable receiving a copy of the tree
            and returning the tree to use.

    Returns:
        The resulting tree.
    """
    if custom is None:
        return tree.copy()
    if callable(custom):
        result = custom(tree.copy())
        if not isinstance(result, MappingNode):
            result = MappingNode.from_dict(result)
        return result
    logger.debug(f"Merging {len(custom)} custom kana mappings")
    return create_custom_mapping(custom)(tree)
