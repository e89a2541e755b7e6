"""Tests for comment normalization and attachment."""

import pytest

from decl_weaver import ConflictingFlagsError
from decl_weaver.tree import Namespace
from decl_weaver.tree.comments import comment_lines


@pytest.mark.parametrize(
    ("comment", "expected"),
    [
        ("single", ["single"]),
        ("one\ntwo", ["one", "two"]),
        ("", [""]),
        (["a", "b"], ["a", "b"]),
        (["a\nb", "c"], ["a", "b", "c"]),
        ([], []),
    ],
)
def test_comment_lines(comment, expected: list[str]) -> None:
    assert comment_lines(comment) == expected


def test_next_child_comments_go_to_the_next_child_only(root: Namespace) -> None:
    root.add_comment_to_next_child("first")
    root.add_comment_to_next_child(["second", "third"])
    documented = root.create_module("Documented")
    plain = root.create_module("Plain")

    assert documented.comments == ["first", "second", "third"]
    assert plain.comments == []
    assert root.pending_comments == []


def test_queued_comments_precede_direct_comments(root: Namespace) -> None:
    root.add_comment_to_next_child("queued")
    method = root.create_method("foo")
    method.add_comment("direct")
    assert method.comments == ["queued", "direct"]


def test_queued_comments_reach_members(root: Namespace) -> None:
    root.add_comment_to_next_child("the answer")
    constant = root.create_constant("ANSWER", value="42")
    assert constant.comments == ["the answer"]


def test_queued_comments_are_appended_on_merge(root: Namespace) -> None:
    module = root.create_module("Foo")
    module.add_comment("from first contributor")
    root.add_comment_to_next_child("from second contributor")

    assert root.create_module("Foo") is module
    assert module.comments == ["from first contributor", "from second contributor"]
    assert root.pending_comments == []


def test_queues_are_per_namespace(root: Namespace) -> None:
    outer = root.create_module("Outer")
    root.add_comment_to_next_child("for root child")
    inner = outer.create_class("Inner")
    assert inner.comments == []
    assert root.pending_comments == ["for root child"]


def test_failed_creation_keeps_the_queue(root: Namespace) -> None:
    root.create_class("Foo", superclass="Base")
    root.add_comment_to_next_child("kept")
    with pytest.raises(ConflictingFlagsError):
        root.create_class("Foo", superclass="Other")
    assert root.pending_comments == ["kept"]
    assert root.create_method("bar").comments == ["kept"]
