"""Member declarations and the value types they are built from.

Every node in a declaration tree derives from Declaration. Member kinds
(methods, attributes, constants, mixins, type aliases, arbitrary code) live
here; namespace kinds live in namespace.py because they own the creation
operations.

Equality is structural over semantic fields only: comments, the contributor
handle and the parent link never take part in ``==``.
"""

from collections.abc import Sequence
from dataclasses import KW_ONLY, dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from .comments import comment_lines

if TYPE_CHECKING:
    from .namespace import Namespace


class ParameterKind(StrEnum):
    """How a method parameter is passed, derived from its spelling."""

    NORMAL = "normal"
    SPLAT = "splat"
    DOUBLE_SPLAT = "double_splat"
    BLOCK = "block"
    KEYWORD = "keyword"


class AttributeKind(StrEnum):
    """Which accessor methods an attribute declares."""

    READER = "reader"
    WRITER = "writer"
    ACCESSOR = "accessor"


class MixinDirection(StrEnum):
    """Whether a mixin is included into instances or extended onto the singleton."""

    INCLUDE = "include"
    EXTEND = "extend"


_PREFIXES: tuple[tuple[str, ParameterKind], ...] = (
    ("**", ParameterKind.DOUBLE_SPLAT),
    ("*", ParameterKind.SPLAT),
    ("&", ParameterKind.BLOCK),
)


@dataclass(frozen=True)
class Parameter:
    """A method parameter.

    The name carries the calling convention the way it is written in a
    method definition: ``*args``, ``**opts``, ``&blk`` and ``key:`` select
    splat, double splat, block and keyword parameters respectively.
    ``type`` and ``default`` are dialect expressions kept as text.
    """

    name: str
    type: str | None = None
    default: str | None = None

    def __post_init__(self) -> None:
        if not self.name_without_kind:
            raise ValueError(f"Parameter name must not be empty, got {self.name!r}")

    @property
    def kind(self) -> ParameterKind:
        for prefix, kind in _PREFIXES:
            if self.name.startswith(prefix):
                return kind
        if self.name.endswith(":"):
            return ParameterKind.KEYWORD
        return ParameterKind.NORMAL

    @property
    def name_without_kind(self) -> str:
        """Bare parameter name with any prefix or keyword colon removed."""
        return self.name.lstrip("*&").removesuffix(":")


@dataclass(frozen=True)
class StructProp:
    """A ``T::Struct`` property.

    Only ``name`` and ``type`` are required. The remaining options mirror the
    keyword arguments Sorbet accepts on ``prop``; unset options are omitted
    from the output. ``immutable`` props are declared with ``const``.
    """

    name: str
    type: str
    _: KW_ONLY
    optional: bool = False
    enum: str | None = None
    dont_store: bool = False
    foreign: str | None = None
    default: str | None = None
    factory: str | None = None
    immutable: bool = False
    array: str | None = None
    override: bool = False
    redaction: str | None = None

    EXTRA_OPTIONS = ("optional", "enum", "dont_store", "foreign", "default", "factory", "array", "override", "redaction")

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("StructProp name must not be empty")

    def extra_options(self) -> list[tuple[str, str]]:
        """Set options in declaration order, booleans rendered as ``true``."""
        result: list[tuple[str, str]] = []
        for option in self.EXTRA_OPTIONS:
            value = getattr(self, option)
            if value is None or value is False:
                continue
            result.append((option, "true" if value is True else str(value)))
        return result


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


@dataclass(kw_only=True)
class Declaration:
    """Base of every tree node.

    ``generated_by`` identifies the contributor that created the node and is
    only used for diagnostics. ``parent`` is set once, when the node is
    attached to its namespace.
    """

    name: str = ""
    comments: list[str] = field(default_factory=list, compare=False)
    generated_by: Any = field(default=None, compare=False, repr=False)
    parent: "Namespace | None" = field(default=None, init=False, compare=False, repr=False)

    def add_comment(self, comment: str | Sequence[str]) -> None:
        """Append one or more comment lines to this node."""
        self.comments.extend(comment_lines(comment))

    def describe(self) -> str:
        return f"{type(self).__name__} {self.name}"

    def _require_name(self) -> None:
        if not self.name:
            raise ValueError(f"{type(self).__name__} name must not be empty")


@dataclass(kw_only=True)
class Method(Declaration):
    """A method signature. ``return_type=None`` means the method returns nothing."""

    parameters: list[Parameter] = field(default_factory=list)
    return_type: str | None = None
    abstract: bool = False
    override: bool = False
    overridable: bool = False
    class_method: bool = False
    final: bool = False
    type_parameters: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._require_name()
        self.parameters = list(self.parameters)
        self.type_parameters = [str(t).removeprefix(":") for t in self.type_parameters]

    def describe(self) -> str:
        returns = self.return_type or "void"
        return f"Method {self.name} - {len(self.parameters)} parameters - returns {returns}"


@dataclass(kw_only=True)
class Attribute(Declaration):
    """An ``attr_reader``/``attr_writer``/``attr_accessor`` declaration."""

    kind: AttributeKind
    type: str
    class_attribute: bool = False

    def __post_init__(self) -> None:
        self._require_name()
        self.kind = AttributeKind(self.kind)

    def describe(self) -> str:
        return f"Attribute {self.name} ({self.kind}) - {self.type}"


@dataclass(kw_only=True)
class Constant(Declaration):
    """A constant. Eigen constants are declared on the singleton class."""

    value: str
    eigen_constant: bool = False
    type: str | None = None

    def __post_init__(self) -> None:
        self._require_name()

    def describe(self) -> str:
        return f"Constant {self.name} = {self.value}"


@dataclass(kw_only=True)
class Mixin(Declaration):
    """An ``include`` or ``extend`` of the module named by ``name``."""

    direction: MixinDirection

    def __post_init__(self) -> None:
        self._require_name()
        self.direction = MixinDirection(self.direction)

    def describe(self) -> str:
        return f"{self.direction.capitalize()} {self.name}"


@dataclass(kw_only=True)
class TypeAlias(Declaration):
    type: str

    def __post_init__(self) -> None:
        self._require_name()

    def describe(self) -> str:
        return f"Type alias {self.name} = {self.type}"


@dataclass(kw_only=True)
class Arbitrary(Declaration):
    """Literal code emitted verbatim, one output line per source line."""

    code: str

    def describe(self) -> str:
        return f"Arbitrary code ({len(self.code.splitlines())} lines)"


__all__ = [
    "Arbitrary",
    "Attribute",
    "AttributeKind",
    "Constant",
    "Declaration",
    "Method",
    "Mixin",
    "MixinDirection",
    "Parameter",
    "ParameterKind",
    "StructProp",
    "TypeAlias",
]
