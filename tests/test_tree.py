"""
Unit tests for the classification tree: insert, find, leaf enumeration
and rendering.
"""
import pytest

from core import (
    ClassificationTree,
    EmptyPathInsert,
    FieldIdentity,
    NodeExists,
    NodeValue,
    SuperNodeNotFound,
)
from core.tree import Node
from conftest import build


def chain_values(chain):
    return [str(node.value) for node in chain]


def test_insert_builds_nested_chain():
    tree = build([(("A", "B", "C"), ("db1", "t1", "f1"))])

    top = tree.root.children
    assert [n.value for n in top] == [NodeValue.classification("A")]
    b = top[0].children[0]
    assert b.value == NodeValue.classification("B")
    c = b.children[0]
    assert c.value == NodeValue.classification("C")
    assert c.children[0].value == NodeValue.leaf(FieldIdentity("db1", "t1", "f1"))
    assert c.children[0].children == []


def test_insert_single_level_path():
    tree = build([(("A",), ("db1", "t1", "f1"))])

    assert chain_values(tree.all_leaves()[0]) == ["A", "db1-t1-f1"]


def test_insert_reuses_existing_levels():
    tree = build([
        (("A", "B"), ("db1", "t1", "f1")),
        (("A", "B"), ("db1", "t1", "f2")),
        (("A", "C"), ("db1", "t1", "f3")),
    ])

    assert len(tree.root.children) == 1
    a = tree.root.children[0]
    assert [str(n.value) for n in a.children] == ["B", "C"]
    assert len(a.children[0].children) == 2


def test_insert_empty_path_raises():
    tree = ClassificationTree()

    with pytest.raises(EmptyPathInsert):
        tree.insert([], FieldIdentity("db1", "t1", "f1"))
    assert tree.root.children == []


def test_insert_same_row_twice_raises_node_exists():
    tree = build([(("A", "B"), ("db1", "t1", "f1"))])
    before = tree.render()

    with pytest.raises(NodeExists) as exc:
        tree.insert(["A", "B"], FieldIdentity("db1", "t1", "f1"))

    assert exc.value.value == NodeValue.leaf(FieldIdentity("db1", "t1", "f1"))
    assert tree.render() == before
    assert tree.leaf_count() == 1


def test_add_missing_super_node_raises():
    tree = build([(("A",), ("db1", "t1", "f1"))])

    with pytest.raises(SuperNodeNotFound):
        tree.root.add(NodeValue.classification("missing"), NodeValue.classification("X"))


def test_add_tries_next_sibling_when_subtree_misses():
    root = Node(NodeValue.root())
    root.add(NodeValue.root(), NodeValue.classification("A"))
    root.add(NodeValue.root(), NodeValue.classification("B"))

    root.add(NodeValue.classification("B"), NodeValue.classification("C"))

    assert root.children[0].children == []
    assert root.children[1].children[0].value == NodeValue.classification("C")


def test_node_exists_aborts_search_at_first_matching_parent():
    # "X" sits under both A and B; A's copy already holds "Y", so the add
    # fails there instead of falling through to B's copy.
    tree = build([
        (("A", "X", "Y"), ("db1", "t1", "f1")),
    ])
    b = Node(NodeValue.classification("B"), [Node(NodeValue.classification("X"))])
    tree.root.children.append(b)

    with pytest.raises(NodeExists):
        tree.root.add(NodeValue.classification("X"), NodeValue.classification("Y"))
    assert b.children[0].children == []


def test_leaf_never_accepts_children():
    tree = build([(("A",), ("db1", "t1", "f1"))])
    identity = FieldIdentity("db1", "t1", "f1")

    with pytest.raises(SuperNodeNotFound):
        tree.root.add(NodeValue.leaf(identity), NodeValue.classification("X"))
    assert tree.find(NodeValue.leaf(identity)).children == []


def test_find_returns_first_preorder_match():
    tree = build([
        (("A", "Shared"), ("db1", "t1", "f1")),
        (("B", "Shared"), ("db1", "t1", "f2")),
    ])

    found = tree.find(NodeValue.classification("Shared"))

    assert found is tree.root.children[0].children[0]


def test_find_missing_value_returns_none():
    tree = build([(("A",), ("db1", "t1", "f1"))])

    assert tree.find(NodeValue.classification("Z")) is None
    assert tree.find(NodeValue.leaf(FieldIdentity("db1", "t1", "f9"))) is None


def test_find_root():
    tree = ClassificationTree()

    assert tree.find(NodeValue.root()) is tree.root


def test_reused_label_attaches_leaf_to_first_match():
    # The second row creates B -> Shared, but the field lands under the
    # first "Shared" found in pre-order (the one under A).
    tree = build([
        (("A", "Shared"), ("db1", "t1", "f1")),
        (("B", "Shared"), ("db1", "t1", "f2")),
    ])

    leaves = [chain_values(c) for c in tree.all_leaves()]

    assert leaves == [
        ["A", "Shared", "db1-t1-f1"],
        ["A", "Shared", "db1-t1-f2"],
        ["B", "Shared"],
    ]


def test_all_leaves_order_and_determinism():
    tree = build([
        (("A", "B"), ("db1", "t1", "f1")),
        (("C",), ("db1", "t2", "f1")),
        (("A", "D"), ("db1", "t1", "f2")),
        (("A", "B"), ("db1", "t1", "f3")),
    ])

    first = [chain_values(c) for c in tree.all_leaves()]
    second = [chain_values(c) for c in tree.all_leaves()]

    assert first == second
    assert first == [
        ["A", "B", "db1-t1-f1"],
        ["A", "B", "db1-t1-f3"],
        ["A", "D", "db1-t1-f2"],
        ["C", "db1-t2-f1"],
    ]


def test_all_leaves_excludes_root_and_empty_tree():
    assert ClassificationTree().all_leaves() == []

    tree = build([(("A",), ("db1", "t1", "f1"))])
    assert all(not node.value.is_root for node in tree.all_leaves()[0])


def test_same_label_at_different_levels_of_one_path():
    tree = build([(("A", "A"), ("db1", "t1", "f1"))])

    # The second "A" is found as the first one, so the window (A, A) adds a
    # child A under the top-level A, and the field goes under the top-level A.
    assert [chain_values(c) for c in tree.all_leaves()] == [
        ["A", "A"],
        ["A", "db1-t1-f1"],
    ]


def test_render_outline():
    tree = build([
        (("A", "B"), ("db1", "t1", "f1")),
        (("C",), ("db2", "t2", "f2")),
    ])

    assert tree.render() == "A\n  B\n    db1-t1-f1\nC\n  db2-t2-f2"
    assert str(tree) == tree.render()


def test_iter_nodes_preorder_and_categories():
    tree = build([
        (("A", "B"), ("db1", "t1", "f1")),
        (("C",), ("db2", "t2", "f2")),
    ])

    assert [str(n.value) for n in tree.iter_nodes()] == [
        "root", "A", "B", "db1-t1-f1", "C", "db2-t2-f2",
    ]
    assert tree.categories() == ["A", "C"]


def test_node_value_equality_is_kind_aware():
    assert NodeValue.classification("x") != NodeValue.leaf(FieldIdentity("x", "", ""))
    assert NodeValue.root() is NodeValue.root()
    assert FieldIdentity("d", "t", "f") == FieldIdentity("d", "t", "f")
    assert FieldIdentity("d", "t", "f") != FieldIdentity("d", "t", "g")
