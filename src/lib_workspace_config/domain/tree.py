"""Tagged node types backing every settings tree.

Purpose
-------
Represent the nested settings space explicitly as ``Leaf | Branch`` so that
traversal dispatches on the node kind rather than probing arbitrary values.
Only branches are traversable; a leaf is opaque even when its value is a
nested record.

Contents
--------
* :class:`Leaf` – wraps any setting value (``str``, numbers, ``bool``,
  lists, plain records, ``None``).
* :class:`Branch` – mutable mapping of segment name to child node.
* :func:`to_node` – write boundary: wrap a caller value as a leaf.
* :func:`to_plain` – read boundary: detached plain data.
* :func:`decode_branch` / :func:`encode_branch` – snapshot boundary, where
  nested mappings are sections and tagged records are leaves.

Snapshot Encoding
-----------------
A leaf whose value is a mapping is written as
``{"type": "@LeafRecord", "value": {...}}`` so it is not mistaken for a
section when the snapshot is read back. Every other mapping in a snapshot
is a branch.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Final, Union

LEAF_RECORD_TYPE: Final[str] = "@LeafRecord"


@dataclass(frozen=True, slots=True)
class Leaf:
    """Terminal node holding a single setting value.

    Examples
    --------
    >>> Leaf(3).value
    3
    >>> Leaf(None) == Leaf(None)
    True
    """

    value: Any


@dataclass(slots=True)
class Branch:
    """Interior node mapping segment names to child nodes.

    Why
    ----
    Branches are the only nodes traversal may descend into; a dotted lookup
    that meets a :class:`Leaf` before the path is exhausted is "not found".

    Examples
    --------
    >>> tree = Branch({"editor": Branch({"tabSize": Leaf(4)})})
    >>> tree.child("editor").child("tabSize")
    Leaf(value=4)
    >>> tree.child("missing") is None
    True
    """

    children: dict[str, Node] = field(default_factory=dict)

    def child(self, segment: str) -> Node | None:
        """Return the child stored under *segment* or ``None``."""

        return self.children.get(segment)


Node = Union[Leaf, Branch]


def to_node(value: Any) -> Node:
    """Wrap a caller-supplied value as a detached :class:`Leaf`.

    Existing nodes pass through unchanged, which is how a section is written.

    Examples
    --------
    >>> to_node({"a": {"b": 1}})
    Leaf(value={'a': {'b': 1}})
    >>> to_node(Branch())
    Branch(children={})
    """

    if isinstance(value, (Leaf, Branch)):
        return value
    return Leaf(_deepcopy_value(value))


def to_plain(node: Node) -> Any:
    """Return a detached plain-Python rendering of *node*.

    Examples
    --------
    >>> to_plain(Branch({"a": Leaf(1), "b": Branch()}))
    {'a': 1, 'b': {}}
    """

    if isinstance(node, Branch):
        return {key: to_plain(child) for key, child in node.children.items()}
    return _deepcopy_value(node.value)


def decode_branch(data: Mapping[Any, Any]) -> Branch:
    """Build a branch from snapshot data.

    Nested mappings become branches (keys coerced to ``str``) unless they
    carry the leaf-record tag.

    Examples
    --------
    >>> decode_branch({"a": {"b": 1}})
    Branch(children={'a': Branch(children={'b': Leaf(value=1)})})
    >>> decode_branch({"a": {"type": "@LeafRecord", "value": {"b": 1}}})
    Branch(children={'a': Leaf(value={'b': 1})})
    """

    return Branch({str(key): _decode_node(child) for key, child in data.items()})


def encode_branch(branch: Branch) -> dict[str, Any]:
    """Render *branch* as snapshot data that :func:`decode_branch` reads back.

    Examples
    --------
    >>> encode_branch(Branch({"a": Leaf({"b": 1}), "c": Branch({"d": Leaf(2)})}))
    {'a': {'type': '@LeafRecord', 'value': {'b': 1}}, 'c': {'d': 2}}
    """

    return {key: _encode_node(child) for key, child in branch.children.items()}


def _decode_node(data: Any) -> Node:
    if isinstance(data, Mapping):
        if _is_leaf_record(data):
            return Leaf(_deepcopy_value(data["value"]))
        return decode_branch(data)
    return Leaf(_deepcopy_value(data))


def _encode_node(node: Node) -> Any:
    if isinstance(node, Branch):
        return encode_branch(node)
    if isinstance(node.value, Mapping):
        return {"type": LEAF_RECORD_TYPE, "value": _deepcopy_value(node.value)}
    return _deepcopy_value(node.value)


def _is_leaf_record(data: Mapping[Any, Any]) -> bool:
    return set(data) == {"type", "value"} and data["type"] == LEAF_RECORD_TYPE


def _deepcopy_value(value: Any) -> Any:
    """Clone nested values while preserving container types where practical.

    Examples
    --------
    >>> _deepcopy_value({"nested": [1, 2]})
    {'nested': [1, 2]}
    >>> _deepcopy_value(("a", "b"))
    ('a', 'b')
    """

    if isinstance(value, Mapping):
        return {key: _deepcopy_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_deepcopy_value(item) for item in value]
    if isinstance(value, (set, tuple)):
        return type(value)(_deepcopy_value(item) for item in value)
    return value
