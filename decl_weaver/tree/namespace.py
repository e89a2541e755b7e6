"""Namespace kinds and the operations that build a declaration tree.

A Namespace owns an ordered list of child declarations. Children are only
ever added through the ``create_*`` methods below, which:

- drain the namespace's pending comment queue into the new child,
- set the child's parent and contributor handle,
- merge namespace requests into an existing same-name, same-kind sibling
  (see merge.py) instead of appending a duplicate.

Member declarations are never merged: creating the same method twice yields
two siblings.

Example:
    >>> root = Namespace()
    >>> with root.create_module("Shapes") as shapes:
    ...     square = shapes.create_class("Square", superclass="Shape")
    ...     square.create_method("area", return_type="Float")
    >>> root.create_module("Shapes") is shapes
    True
"""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from types import TracebackType
from typing import Any, ClassVar, Self, TypeVar

from decl_weaver.exceptions import AmbiguousParameterError
from decl_weaver.logging import get_weaver_logger

from .comments import comment_lines
from .merge import check_exclusive_flags, find_mergeable, merge_namespace
from .nodes import (
    Arbitrary,
    Attribute,
    AttributeKind,
    Constant,
    Declaration,
    Method,
    Mixin,
    MixinDirection,
    Parameter,
    StructProp,
    TypeAlias,
)
from .path import resolve_path
from .search import DeclarationQuery, all_matches, first_match

logger = get_weaver_logger(__name__)

NamespaceT = TypeVar("NamespaceT", bound="Namespace")
MemberT = TypeVar("MemberT", bound=Declaration)

EnumValue = str | tuple[str, str]


def method_fields(
    *,
    return_type: str | None = None,
    returns: str | None = None,
    implementation: bool = False,
    override: bool = False,
) -> dict[str, Any]:
    """Resolve the keyword aliases a method creation request may use.

    ``returns`` is an alias of ``return_type``; passing both is ambiguous even
    when they agree. ``implementation`` is the deprecated spelling of
    ``override``.
    """
    if returns is not None and return_type is not None:
        raise AmbiguousParameterError("Specify either 'returns' or 'return_type' for a method, not both")
    if implementation:
        logger.warning("The 'implementation' method flag is deprecated, use 'override' instead")
    return {"return_type": returns if returns is not None else return_type, "override": override or implementation}


def _enum_values(enums: Iterable[str | Sequence[str]]) -> list[EnumValue]:
    values: list[EnumValue] = []
    for value in enums:
        if isinstance(value, str):
            values.append(value)
        else:
            name, serialized = value
            values.append((name, serialized))
    return values


@dataclass(kw_only=True)
class Namespace(Declaration):
    """A declaration that owns children. A bare Namespace is a tree root.

    ``pending_comments`` holds lines queued by add_comment_to_next_child().
    ``current_contributor`` is only consulted on the root: it is the default
    ``generated_by`` for every node created anywhere in the tree.
    """

    KIND: ClassVar[str] = "namespace"
    BOOLEAN_FLAGS: ClassVar[tuple[str, ...]] = ()
    VALUED_FLAGS: ClassVar[tuple[str, ...]] = ()
    EXCLUSIVE_FLAGS: ClassVar[tuple[tuple[str, str], ...]] = ()

    children: list[Declaration] = field(default_factory=list)
    pending_comments: list[str] = field(default_factory=list, compare=False, repr=False)
    current_contributor: Any = field(default=None, compare=False, repr=False)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        return None

    # -- structure ----------------------------------------------------------

    @property
    def is_root(self) -> bool:
        return self.parent is None and not self.name

    @property
    def root(self) -> "Namespace":
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def includes(self) -> list[Mixin]:
        return [c for c in self.children if isinstance(c, Mixin) and c.direction is MixinDirection.INCLUDE]

    @property
    def extends(self) -> list[Mixin]:
        return [c for c in self.children if isinstance(c, Mixin) and c.direction is MixinDirection.EXTEND]

    @property
    def constants(self) -> list[Constant]:
        return [c for c in self.children if isinstance(c, Constant)]

    @property
    def type_aliases(self) -> list[TypeAlias]:
        return [c for c in self.children if isinstance(c, TypeAlias)]

    def flags(self) -> dict[str, bool]:
        return {flag: getattr(self, flag) for flag in self.BOOLEAN_FLAGS}

    def describe(self) -> str:
        label = f"{self.KIND.capitalize()} {self.name}" if self.name else self.KIND.capitalize()
        return f"{label} - {len(self.children)} children"

    def walk(self) -> Iterator[Declaration]:
        """Yield this namespace and every descendant, depth-first, pre-order."""
        yield self
        for child in self.children:
            if isinstance(child, Namespace):
                yield from child.walk()
            else:
                yield child

    # -- comments -------------------------------------------------------------

    def add_comment_to_next_child(self, comment: str | Sequence[str]) -> None:
        """Queue comment lines for the next child this namespace creates."""
        self.pending_comments.extend(comment_lines(comment))

    # -- search ---------------------------------------------------------------

    def find(
        self,
        name: str | None = None,
        kind: type[Declaration] | tuple[type[Declaration], ...] | None = None,
    ) -> Declaration | None:
        """Return the first node in this subtree matching every given filter."""
        return first_match(self.walk(), DeclarationQuery(name=name, kind=kind))

    def find_all(
        self,
        name: str | None = None,
        kind: type[Declaration] | tuple[type[Declaration], ...] | None = None,
    ) -> list[Declaration]:
        """Return every node in this subtree matching every given filter, in traversal order."""
        return all_matches(self.walk(), DeclarationQuery(name=name, kind=kind))

    # -- path -----------------------------------------------------------------

    def path(self, entity: object, *, include_module: bool = False) -> "Namespace":
        """Create or reuse the namespaces enclosing ``entity``; see path.resolve_path()."""
        return resolve_path(self, entity, include_module=include_module)

    # -- namespace creation ---------------------------------------------------

    def create_module(
        self,
        name: str,
        *,
        abstract: bool = False,
        final: bool = False,
        sealed: bool = False,
        interface: bool = False,
        generated_by: Any = None,
    ) -> "ModuleNamespace":
        return self._create_namespace(
            ModuleNamespace,
            name,
            generated_by,
            abstract=abstract,
            final=final,
            sealed=sealed,
            interface=interface,
        )

    def create_interface(self, name: str, *, sealed: bool = False, generated_by: Any = None) -> "InterfaceNamespace":
        return self._create_namespace(InterfaceNamespace, name, generated_by, sealed=sealed)

    def create_class(
        self,
        name: str,
        *,
        superclass: str | None = None,
        abstract: bool = False,
        final: bool = False,
        sealed: bool = False,
        generated_by: Any = None,
    ) -> "ClassNamespace":
        return self._create_namespace(
            ClassNamespace,
            name,
            generated_by,
            superclass=superclass,
            abstract=abstract,
            final=final,
            sealed=sealed,
        )

    def create_enum_class(
        self,
        name: str,
        *,
        enums: Iterable[str | Sequence[str]] = (),
        abstract: bool = False,
        final: bool = False,
        sealed: bool = False,
        generated_by: Any = None,
    ) -> "EnumNamespace":
        """Create a ``T::Enum`` class.

        Each enum value is either a name or a ``(name, serialization)`` pair.
        """
        return self._create_namespace(
            EnumNamespace,
            name,
            generated_by,
            enums=_enum_values(enums),
            abstract=abstract,
            final=final,
            sealed=sealed,
        )

    def create_struct_class(
        self,
        name: str,
        *,
        props: Iterable[StructProp] = (),
        abstract: bool = False,
        final: bool = False,
        sealed: bool = False,
        generated_by: Any = None,
    ) -> "StructNamespace":
        return self._create_namespace(
            StructNamespace,
            name,
            generated_by,
            props=list(props),
            abstract=abstract,
            final=final,
            sealed=sealed,
        )

    # -- member creation ------------------------------------------------------

    def create_method(
        self,
        name: str,
        *,
        parameters: Iterable[Parameter] = (),
        return_type: str | None = None,
        returns: str | None = None,
        abstract: bool = False,
        implementation: bool = False,
        override: bool = False,
        overridable: bool = False,
        class_method: bool = False,
        final: bool = False,
        type_parameters: Iterable[str] = (),
        generated_by: Any = None,
    ) -> Method:
        fields = method_fields(return_type=return_type, returns=returns, implementation=implementation, override=override)
        method = Method(
            name=name,
            parameters=list(parameters),
            abstract=abstract,
            overridable=overridable,
            class_method=class_method,
            final=final,
            type_parameters=list(type_parameters),
            generated_by=self._contributor(generated_by),
            **fields,
        )
        return self.add_member(method)

    def create_attribute(
        self,
        name: str,
        *,
        kind: AttributeKind | str,
        type: str,
        class_attribute: bool = False,
        generated_by: Any = None,
    ) -> Attribute:
        attribute = Attribute(
            name=name,
            kind=AttributeKind(kind),
            type=type,
            class_attribute=class_attribute,
            generated_by=self._contributor(generated_by),
        )
        return self.add_member(attribute)

    create_attr = create_attribute

    def create_attr_reader(self, name: str, *, type: str, class_attribute: bool = False, generated_by: Any = None) -> Attribute:
        return self.create_attribute(name, kind=AttributeKind.READER, type=type, class_attribute=class_attribute, generated_by=generated_by)

    def create_attr_writer(self, name: str, *, type: str, class_attribute: bool = False, generated_by: Any = None) -> Attribute:
        return self.create_attribute(name, kind=AttributeKind.WRITER, type=type, class_attribute=class_attribute, generated_by=generated_by)

    def create_attr_accessor(self, name: str, *, type: str, class_attribute: bool = False, generated_by: Any = None) -> Attribute:
        return self.create_attribute(name, kind=AttributeKind.ACCESSOR, type=type, class_attribute=class_attribute, generated_by=generated_by)

    def create_constant(
        self,
        name: str,
        *,
        value: str,
        eigen_constant: bool = False,
        type: str | None = None,
        generated_by: Any = None,
    ) -> Constant:
        constant = Constant(
            name=name,
            value=value,
            eigen_constant=eigen_constant,
            type=type,
            generated_by=self._contributor(generated_by),
        )
        return self.add_member(constant)

    def create_type_alias(self, name: str, *, type: str, generated_by: Any = None) -> TypeAlias:
        return self.add_member(TypeAlias(name=name, type=type, generated_by=self._contributor(generated_by)))

    def create_include(self, name: str, *, generated_by: Any = None) -> Mixin:
        return self.add_member(Mixin(name=name, direction=MixinDirection.INCLUDE, generated_by=self._contributor(generated_by)))

    def create_extend(self, name: str, *, generated_by: Any = None) -> Mixin:
        return self.add_member(Mixin(name=name, direction=MixinDirection.EXTEND, generated_by=self._contributor(generated_by)))

    def create_includes(self, names: Iterable[str], *, generated_by: Any = None) -> list[Mixin]:
        return [self.create_include(name, generated_by=generated_by) for name in names]

    def create_extends(self, names: Iterable[str], *, generated_by: Any = None) -> list[Mixin]:
        return [self.create_extend(name, generated_by=generated_by) for name in names]

    def create_arbitrary(self, code: str, *, generated_by: Any = None) -> Arbitrary:
        return self.add_member(Arbitrary(code=code, generated_by=self._contributor(generated_by)))

    def add_member(self, member: MemberT, *, dedupe: bool = False) -> MemberT:
        """Attach an unattached member declaration as the last child.

        With ``dedupe=True`` an existing sibling equal to ``member`` is
        returned instead and nothing is attached.
        """
        if isinstance(member, Namespace):
            raise TypeError("Namespaces must be created with create_module/create_class/...")
        if member.parent is not None:
            raise ValueError(f"{member.describe()} already belongs to {member.parent.describe()}")
        if dedupe:
            for child in self.children:
                if child == member:
                    return child  # type: ignore[return-value]
        return self._attach(member)

    # -- internals ------------------------------------------------------------

    def _contributor(self, generated_by: Any) -> Any:
        return generated_by if generated_by is not None else self.root.current_contributor

    def _attach(self, node: MemberT) -> MemberT:
        if self.pending_comments:
            node.comments[:0] = self.pending_comments
            self.pending_comments = []
        node.parent = self
        self.children.append(node)
        return node

    def _create_namespace(self, kind: type[NamespaceT], name: str, generated_by: Any, **flags: Any) -> NamespaceT:
        contributor = self._contributor(generated_by)
        check_exclusive_flags(kind, flags, name)

        existing = find_mergeable(self.children, kind, name)
        if existing is not None:
            merge_namespace(existing, flags, generated_by=contributor)
            if self.pending_comments:
                existing.comments.extend(self.pending_comments)
                self.pending_comments = []
            return existing  # type: ignore[return-value]

        return self._attach(kind(name=name, generated_by=contributor, **flags))


@dataclass(kw_only=True)
class ModuleNamespace(Namespace):
    KIND: ClassVar[str] = "module"
    BOOLEAN_FLAGS: ClassVar[tuple[str, ...]] = ("abstract", "final", "sealed", "interface")
    EXCLUSIVE_FLAGS: ClassVar[tuple[tuple[str, str], ...]] = (("abstract", "final"), ("interface", "final"))

    abstract: bool = False
    final: bool = False
    sealed: bool = False
    interface: bool = False

    def __post_init__(self) -> None:
        self._require_name()


@dataclass(kw_only=True)
class InterfaceNamespace(Namespace):
    """An interface: a module whose methods all have to be implemented by includers."""

    KIND: ClassVar[str] = "interface"
    BOOLEAN_FLAGS: ClassVar[tuple[str, ...]] = ("sealed",)

    sealed: bool = False

    def __post_init__(self) -> None:
        self._require_name()


@dataclass(kw_only=True)
class ClassNamespace(Namespace):
    KIND: ClassVar[str] = "class"
    BOOLEAN_FLAGS: ClassVar[tuple[str, ...]] = ("abstract", "final", "sealed")
    VALUED_FLAGS: ClassVar[tuple[str, ...]] = ("superclass",)
    EXCLUSIVE_FLAGS: ClassVar[tuple[tuple[str, str], ...]] = (("abstract", "final"),)

    superclass: str | None = None
    abstract: bool = False
    final: bool = False
    sealed: bool = False

    def __post_init__(self) -> None:
        self._require_name()

    def describe(self) -> str:
        base = super().describe()
        return f"{base} - superclass {self.superclass}" if self.superclass else base


@dataclass(kw_only=True)
class EnumNamespace(ClassNamespace):
    KIND: ClassVar[str] = "enum class"
    VALUED_FLAGS: ClassVar[tuple[str, ...]] = ("enums",)

    enums: list[EnumValue] = field(default_factory=list)


@dataclass(kw_only=True)
class StructNamespace(ClassNamespace):
    KIND: ClassVar[str] = "struct class"
    VALUED_FLAGS: ClassVar[tuple[str, ...]] = ("props",)

    props: list[StructProp] = field(default_factory=list)

    def create_prop(self, name: str, type: str, **options: Any) -> StructProp:
        """Append a property to this struct and return it."""
        prop = StructProp(name, type, **options)
        self.props.append(prop)
        return prop


__all__ = [
    "ClassNamespace",
    "EnumNamespace",
    "EnumValue",
    "InterfaceNamespace",
    "ModuleNamespace",
    "Namespace",
    "StructNamespace",
    "method_fields",
]
