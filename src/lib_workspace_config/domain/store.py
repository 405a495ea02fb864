"""Dotted-path key/value tree used for a single configuration scope.

Purpose
-------
Hold one scope's settings as a :class:`~lib_workspace_config.domain.tree.Branch`
and offer the three primitive operations every higher layer builds upon:
``has``, ``get`` and ``set`` along an arbitrary-depth path.

Contents
--------
* :data:`Path` – tuple of non-empty segment strings.
* :func:`parse_section` – split a dotted section into a :data:`Path`.
* :func:`join_sections` – syntactic composition used by scoped views.
* :class:`NestedPathStore` – the tree itself.

System Role
-----------
:class:`lib_workspace_config.application.configuration.LayeredConfiguration` owns
one store per scope (and per language overlay). Reads never mutate a store;
``set`` creates missing intermediate branches.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable

from .errors import InvalidPath, PathConflict
from .tree import Branch, Node, decode_branch, encode_branch, to_node, to_plain

Path = tuple[str, ...]


def parse_section(section: str) -> Path:
    """Split *section* on ``.`` into a path.

    The empty string is the empty path and addresses the root of a store.

    Examples
    --------
    >>> parse_section("editor.fontSize")
    ('editor', 'fontSize')
    >>> parse_section("")
    ()
    >>> parse_section("a..b")
    Traceback (most recent call last):
    ...
    lib_workspace_config.domain.errors.InvalidPath: Section 'a..b' contains an empty segment
    """

    if section == "":
        return ()
    parts = tuple(section.split("."))
    if any(part == "" for part in parts):
        raise InvalidPath(f"Section {section!r} contains an empty segment")
    return parts


def join_sections(*sections: str) -> str:
    """Concatenate dotted sections, skipping empty ones.

    Examples
    --------
    >>> join_sections("other.place", "v2")
    'other.place.v2'
    >>> join_sections("", "v2")
    'v2'
    >>> join_sections("other", "")
    'other'
    """

    return ".".join(section for section in sections if section)


class NestedPathStore:
    """Mutable settings tree for a single scope.

    Examples
    --------
    >>> store = NestedPathStore.from_mapping({"a": {"b": 1, "c": 2}})
    >>> store.has(("a",)), store.get_value(("a", "b"))
    (True, 1)
    >>> store.has(("a", "b", "c"))
    False
    >>> store.set(("x", "y"), "z")
    >>> store.to_plain()
    {'a': {'b': 1, 'c': 2}, 'x': {'y': 'z'}}
    >>> store.set(("record",), {"k": 1})
    >>> store.has(("record", "k"))
    False
    """

    __slots__ = ("_root",)

    def __init__(self, root: Branch | None = None) -> None:
        self._root = root if root is not None else Branch()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> NestedPathStore:
        """Build a store from snapshot data; nested mappings become sections."""

        return cls(decode_branch(data))

    @property
    def root(self) -> Branch:
        return self._root

    def has(self, path: Iterable[str]) -> bool:
        """Return ``True`` when *path* reaches a node (leaf or subtree)."""

        return self._walk(path) is not None

    def get(self, path: Iterable[str]) -> Node | None:
        """Return the node reached by *path*, or ``None`` when not found.

        An explicit ``None`` setting is returned as ``Leaf(None)`` and is
        therefore distinguishable from a miss at this level.
        """

        return self._walk(path)

    def get_value(self, path: Iterable[str], default: Any = None) -> Any:
        """Return the plain value at *path* or *default* when not found."""

        node = self._walk(path)
        if node is None:
            return default
        return to_plain(node)

    def set(self, path: Iterable[str], value: Any) -> None:
        """Assign *value* at *path*, creating intermediate branches as needed.

        *value* is stored as a :class:`Leaf`; a mapping value is an opaque
        record, not a section that later paths can descend into.

        Raises
        ------
        InvalidPath
            When *path* is empty (there is no leaf key to assign).
        PathConflict
            When an existing intermediate node is a leaf. Detected before any
            branch is created, so the store is left unchanged.
        """

        segments = tuple(path)
        if not segments:
            raise InvalidPath("Cannot set a value at the empty path")
        *parents, leaf_key = segments

        current = self._root
        for depth, segment in enumerate(parents):
            child = current.child(segment)
            if child is None:
                child = Branch()
                current.children[segment] = child
            elif not isinstance(child, Branch):
                blocked = ".".join(segments[: depth + 1])
                raise PathConflict(
                    f"Cannot set {'.'.join(segments)!r}: {blocked!r} holds a value, not a section"
                )
            current = child
        current.children[leaf_key] = to_node(value)

    def to_plain(self) -> dict[str, Any]:
        """Return the whole tree as detached nested dictionaries."""

        return to_plain(self._root)

    def to_snapshot(self) -> dict[str, Any]:
        """Return the tree as snapshot data, tagging leaf records."""

        return encode_branch(self._root)

    def _walk(self, path: Iterable[str]) -> Node | None:
        node: Node = self._root
        for segment in path:
            if not isinstance(node, Branch):
                return None
            child = node.child(segment)
            if child is None:
                return None
            node = child
        return node

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NestedPathStore):
            return NotImplemented
        return self._root == other._root

    def __repr__(self) -> str:
        return f"NestedPathStore({self.to_plain()!r})"
