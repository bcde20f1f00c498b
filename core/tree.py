# Classi v1.0.0
"""
Classification Tree

A strictly-owning recursive tree of classification labels. The root owns
one child per top-level category, each category owns its sub-categories,
and the bottom of every chain holds the database fields classified there.

Uniqueness is sibling-scoped: a label may appear under two different
parents, but never twice under the same parent. Lookups are by value only
and return the first pre-order match, so a reused label can resolve to a
node in an unrelated branch.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from core.errors import EmptyPathInsert, NodeExists, SuperNodeNotFound

INDENT = "  "


@dataclass(frozen=True)
class FieldIdentity:
    """A (database, table, field) triple naming one scored field."""
    database: str
    table: str
    field: str

    def __str__(self) -> str:
        return f"{self.database}-{self.table}-{self.field}"


class NodeKind(str, Enum):
    ROOT = "root"
    CLASSIFICATION = "classification"
    LEAF = "leaf"


@dataclass(frozen=True)
class NodeValue:
    """
    Value held by a tree node.

    Exactly one of label/identity is set, depending on kind. Build values
    through the root(), classification() and leaf() constructors.
    """
    kind: NodeKind
    label: Optional[str] = None
    identity: Optional[FieldIdentity] = None

    @classmethod
    def root(cls) -> "NodeValue":
        return ROOT

    @classmethod
    def classification(cls, label: str) -> "NodeValue":
        return cls(NodeKind.CLASSIFICATION, label=label)

    @classmethod
    def leaf(cls, identity: FieldIdentity) -> "NodeValue":
        return cls(NodeKind.LEAF, identity=identity)

    @property
    def is_root(self) -> bool:
        return self.kind == NodeKind.ROOT

    @property
    def is_classification(self) -> bool:
        return self.kind == NodeKind.CLASSIFICATION

    @property
    def is_leaf(self) -> bool:
        return self.kind == NodeKind.LEAF

    def __str__(self) -> str:
        if self.kind == NodeKind.ROOT:
            return "root"
        if self.kind == NodeKind.CLASSIFICATION:
            return self.label
        return str(self.identity)


ROOT = NodeValue(NodeKind.ROOT)


@dataclass
class Node:
    """A node value plus the children it exclusively owns."""
    value: NodeValue
    children: list["Node"] = field(default_factory=list)

    def find(self, target: NodeValue) -> Optional["Node"]:
        """Pre-order search: self first, then each child in order."""
        if self.value == target:
            return self
        for child in self.children:
            found = child.find(target)
            if found is not None:
                return found
        return None

    def add(self, super_value: NodeValue, value: NodeValue) -> None:
        """
        Attach a new child holding `value` under the first node holding
        `super_value` in this subtree.

        Raises NodeExists if that node already has such a child; this aborts
        the whole search. Raises SuperNodeNotFound if no node in this subtree
        holds `super_value`.
        """
        if self.value == super_value:
            if self.value.is_leaf:
                raise SuperNodeNotFound(super_value)
            for child in self.children:
                if child.value == value:
                    raise NodeExists(value)
            self.children.append(Node(value))
            return

        for child in self.children:
            try:
                child.add(super_value, value)
                return
            except SuperNodeNotFound:
                continue

        raise SuperNodeNotFound(super_value)

    def render(self, depth: int) -> list[str]:
        if self.value.is_root:
            lines = []
            for child in self.children:
                lines.extend(child.render(depth))
            return lines

        lines = [INDENT * depth + str(self.value)]
        for child in self.children:
            lines.extend(child.render(depth + 1))
        return lines


class ClassificationTree:
    """
    Tree of classification paths built from flat (path, field) rows.

    The tree is built once and read-only afterwards; find() and all_leaves()
    never mutate it, so one instance can be shared between readers.
    """

    def __init__(self):
        self.root = Node(ROOT)

    def insert(self, path: list[str], leaf: FieldIdentity) -> None:
        """
        Insert a field under the classification chain `path`.

        Missing classification levels are created; levels that already exist
        are reused. The field itself must not already be attached under the
        node holding the last label.

        Raises:
            EmptyPathInsert: if path is empty
            NodeExists: if the field is already attached there
            SuperNodeNotFound: if a classification level cannot be located
        """
        if not path:
            raise EmptyPathInsert()

        try:
            self.root.add(ROOT, NodeValue.classification(path[0]))
        except NodeExists:
            pass

        for parent, child in zip(path, path[1:]):
            try:
                self.root.add(
                    NodeValue.classification(parent),
                    NodeValue.classification(child),
                )
            except NodeExists:
                continue

        self.root.add(NodeValue.classification(path[-1]), NodeValue.leaf(leaf))

    def find(self, target: NodeValue) -> Optional[Node]:
        """
        First node anywhere in the tree whose value equals `target`.

        The match is by value only. When a label is reused under different
        parents, the result may come from a branch other than the one the
        caller has in mind.
        """
        return self.root.find(target)

    def all_leaves(self) -> list[list[Node]]:
        """
        Every root-to-leaf chain, excluding the root itself.

        Chains are collected depth first, one top-level category at a time in
        insertion order. A node without children ends a chain.
        """
        leaves: list[list[Node]] = []
        for top in self.root.children:
            self._collect_leaves(top, [], leaves)
        return leaves

    @classmethod
    def _collect_leaves(cls, node: Node, trail: list[Node], leaves: list[list[Node]]) -> None:
        trail.append(node)
        if node.children:
            for child in node.children:
                cls._collect_leaves(child, trail, leaves)
        else:
            leaves.append(list(trail))
        trail.pop()

    def iter_nodes(self) -> Iterator[Node]:
        """All nodes in pre-order, root included."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def leaf_count(self) -> int:
        return len(self.all_leaves())

    def categories(self) -> list[str]:
        """Top-level category labels in insertion order."""
        return [child.value.label for child in self.root.children]

    def render(self) -> str:
        return "\n".join(self.root.render(0)).strip()

    def __str__(self) -> str:
        return self.render()
