"""Functional construction and rendering API.

Thin wrappers over the Namespace methods for callers that select the node
kind at runtime, e.g. from a table of declarations:

    >>> from decl_weaver.api import create_member, create_namespace, render
    >>> from decl_weaver.tree import Namespace
    >>> root = Namespace()
    >>> shapes = create_namespace(root, "module", "Shapes")
    >>> _ = create_member(shapes, "constant", name="SIDES", value="4")
    >>> render(root)
    ['module Shapes', '  SIDES = 4', 'end']

Kinds are given as classes or as the names in NAMESPACE_KINDS / MEMBER_KINDS.
"""

from collections.abc import Sequence
from typing import Any

from decl_weaver.render import Dialect, RenderOptions, Renderer
from decl_weaver.tree import (
    Arbitrary,
    Attribute,
    ClassNamespace,
    Constant,
    Declaration,
    EnumNamespace,
    InterfaceNamespace,
    Method,
    Mixin,
    MixinDirection,
    ModuleNamespace,
    Namespace,
    StructNamespace,
    TypeAlias,
    resolve_path,
)
from decl_weaver.tree.namespace import method_fields

NAMESPACE_KINDS: dict[str, type[Namespace]] = {
    "module": ModuleNamespace,
    "interface": InterfaceNamespace,
    "class": ClassNamespace,
    "enum": EnumNamespace,
    "struct": StructNamespace,
}

MEMBER_KINDS: dict[str, type[Declaration]] = {
    "method": Method,
    "attribute": Attribute,
    "constant": Constant,
    "include": Mixin,
    "extend": Mixin,
    "type_alias": TypeAlias,
    "arbitrary": Arbitrary,
}

_CREATORS = {
    ModuleNamespace: Namespace.create_module,
    InterfaceNamespace: Namespace.create_interface,
    ClassNamespace: Namespace.create_class,
    EnumNamespace: Namespace.create_enum_class,
    StructNamespace: Namespace.create_struct_class,
}


def _lookup(kind: str | type, table: dict[str, Any], label: str) -> Any:
    if isinstance(kind, str):
        if kind not in table:
            raise ValueError(f"Unknown {label} kind {kind!r}, expected one of {sorted(table)}")
        return table[kind]
    if kind not in table.values():
        raise ValueError(f"{kind.__name__} is not a {label} kind")
    return kind


def create_namespace(parent: Namespace, kind: str | type[Namespace], name: str, /, **flags: Any) -> Namespace:
    """Create (or merge into) a namespace child of ``parent``."""
    namespace_kind = _lookup(kind, NAMESPACE_KINDS, "namespace")
    return _CREATORS[namespace_kind](parent, name, **flags)


def create_member(parent: Namespace, kind: str | type[Declaration], /, *, dedupe: bool = False, **fields: Any) -> Declaration:
    """Create a member declaration under ``parent``.

    Members are never merged. With ``dedupe=True`` an existing sibling equal
    to the requested declaration is returned instead of adding a copy.
    ``parent`` and ``kind`` are positional-only, so an attribute's own
    ``kind=`` field is passed through ``fields``.
    """
    member_kind = _lookup(kind, MEMBER_KINDS, "member")
    if member_kind is Method:
        fields |= method_fields(
            return_type=fields.pop("return_type", None),
            returns=fields.pop("returns", None),
            implementation=fields.pop("implementation", False),
            override=fields.pop("override", False),
        )
    elif member_kind is Mixin:
        fields.setdefault("direction", MixinDirection(kind) if isinstance(kind, str) else MixinDirection.INCLUDE)

    fields.setdefault("generated_by", parent.root.current_contributor)
    return parent.add_member(member_kind(**fields), dedupe=dedupe)


def add_comment(node: Declaration, comment: str | Sequence[str]) -> None:
    node.add_comment(comment)


def add_comment_to_next_child(namespace: Namespace, comment: str | Sequence[str]) -> None:
    namespace.add_comment_to_next_child(comment)


def find(
    namespace: Namespace,
    *,
    name: str | None = None,
    kind: type[Declaration] | tuple[type[Declaration], ...] | None = None,
) -> Declaration | None:
    return namespace.find(name=name, kind=kind)


def find_all(
    namespace: Namespace,
    *,
    name: str | None = None,
    kind: type[Declaration] | tuple[type[Declaration], ...] | None = None,
) -> list[Declaration]:
    return namespace.find_all(name=name, kind=kind)


def render(
    node: Declaration,
    options: RenderOptions | None = None,
    *,
    dialect: str | Dialect | None = None,
) -> list[str]:
    """Render ``node`` to output lines."""
    return Renderer(options, dialect).render(node)


__all__ = [
    "MEMBER_KINDS",
    "NAMESPACE_KINDS",
    "add_comment",
    "add_comment_to_next_child",
    "create_member",
    "create_namespace",
    "find",
    "find_all",
    "render",
    "resolve_path",
]
