"""Tests for namespace merging."""

from unittest.mock import patch

import pytest

from decl_weaver import ConflictingFlagsError
from decl_weaver.tree import ClassNamespace, EnumNamespace, ModuleNamespace, Namespace, StructProp
from decl_weaver.tree import merge as merge_module
from decl_weaver.tree.merge import check_exclusive_flags, find_mergeable, plan_merge


class TestMergeIdentity:
    """Re-declaring a namespace returns the existing node."""

    def test_same_module_twice(self, root: Namespace) -> None:
        first = root.create_module("Foo")
        first.create_method("one")
        second = root.create_module("Foo")
        second.create_method("two")

        assert first is second
        assert len(root.children) == 1
        assert [child.name for child in first.children] == ["one", "two"]

    def test_module_and_class_do_not_merge(self, root: Namespace) -> None:
        module = root.create_module("Foo")
        klass = root.create_class("Foo")
        assert module is not klass
        assert len(root.children) == 2

    def test_class_and_enum_class_do_not_merge(self, root: Namespace) -> None:
        klass = root.create_class("Color")
        enum = root.create_enum_class("Color", enums=["Red"])
        assert klass is not enum

    def test_merge_is_per_parent(self, root: Namespace) -> None:
        a = root.create_module("A")
        b = root.create_module("B")
        assert a.create_class("Same") is not b.create_class("Same")

    def test_members_are_never_merged(self, root: Namespace) -> None:
        root.create_method("foo")
        root.create_method("foo")
        assert len(root.children) == 2


class TestMergeFlags:
    def test_boolean_flags_are_ored(self, root: Namespace) -> None:
        module = root.create_module("Foo")
        root.create_module("Foo", sealed=True)
        root.create_module("Foo")
        assert module.sealed is True
        assert module.abstract is False

    def test_superclass_adopted_when_unset(self, root: Namespace) -> None:
        klass = root.create_class("Foo")
        root.create_class("Foo", superclass="Base")
        assert klass.superclass == "Base"

    def test_omitted_superclass_keeps_existing(self, root: Namespace) -> None:
        klass = root.create_class("Foo", superclass="Base")
        root.create_class("Foo")
        assert klass.superclass == "Base"

    def test_same_superclass_merges(self, root: Namespace) -> None:
        klass = root.create_class("Foo", superclass="Base")
        assert root.create_class("Foo", superclass="Base") is klass

    def test_different_superclass_conflicts(self, root: Namespace) -> None:
        klass = root.create_class("Foo", superclass="Base", generated_by="first")
        with pytest.raises(ConflictingFlagsError, match="first"):
            root.create_class("Foo", superclass="Other")
        assert klass.superclass == "Base"

    def test_enum_values_adopted_and_compared(self, root: Namespace) -> None:
        enum = root.create_enum_class("Color")
        root.create_enum_class("Color", enums=["Red", ("Blue", "'blue'")])
        assert enum.enums == ["Red", ("Blue", "'blue'")]

        assert root.create_enum_class("Color", enums=["Red", ["Blue", "'blue'"]]) is enum
        with pytest.raises(ConflictingFlagsError):
            root.create_enum_class("Color", enums=["Green"])

    def test_struct_props_conflict(self, root: Namespace) -> None:
        root.create_struct_class("Point", props=[StructProp("x", "Integer")])
        with pytest.raises(ConflictingFlagsError):
            root.create_struct_class("Point", props=[StructProp("y", "Integer")])

    def test_merge_into_final_conflicts_with_abstract(self, root: Namespace) -> None:
        klass = root.create_class("Foo", final=True)
        with pytest.raises(ConflictingFlagsError):
            root.create_class("Foo", abstract=True)
        assert klass.abstract is False

    def test_failed_merge_leaves_node_untouched(self, root: Namespace) -> None:
        module = root.create_module("Foo", interface=True)
        with pytest.raises(ConflictingFlagsError):
            root.create_module("Foo", final=True, sealed=True)
        assert module.final is False
        assert module.sealed is False


class TestExclusiveFlags:
    @pytest.mark.parametrize(
        ("kind", "flags"),
        [
            (ModuleNamespace, {"abstract": True, "final": True}),
            (ModuleNamespace, {"interface": True, "final": True}),
            (ClassNamespace, {"abstract": True, "final": True}),
            (EnumNamespace, {"abstract": True, "final": True}),
        ],
    )
    def test_conflicting_request(self, kind, flags) -> None:
        with pytest.raises(ConflictingFlagsError):
            check_exclusive_flags(kind, flags, "Foo")

    def test_allowed_combination(self) -> None:
        check_exclusive_flags(ModuleNamespace, {"abstract": True, "sealed": True, "interface": True}, "Foo")

    def test_conflicting_creation_adds_nothing(self, root: Namespace) -> None:
        with pytest.raises(ConflictingFlagsError):
            root.create_class("Foo", abstract=True, final=True)
        assert root.children == []


def test_find_mergeable_uses_exact_kind() -> None:
    children = [ClassNamespace(name="A"), EnumNamespace(name="B")]
    assert find_mergeable(children, ClassNamespace, "A") is children[0]
    assert find_mergeable(children, ClassNamespace, "B") is None
    assert find_mergeable(children, EnumNamespace, "B") is children[1]


def test_plan_merge_reports_only_changes() -> None:
    existing = ClassNamespace(name="Foo", sealed=True)
    assert plan_merge(existing, {"sealed": True, "abstract": False}) == {}
    assert plan_merge(existing, {"abstract": True, "superclass": "Base"}) == {"abstract": True, "superclass": "Base"}


def test_merge_logs_both_contributors(root: Namespace) -> None:
    root.create_module("Foo", generated_by="first")
    with patch.object(merge_module.logger, "debug") as debug:
        root.create_module("Foo", generated_by="second")
    debug.assert_called_once()
    assert "first" in debug.call_args.args
    assert "second" in debug.call_args.args
