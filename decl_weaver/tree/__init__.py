"""Declaration tree: node kinds, comments, search, merging and path resolution.

@public
"""

from .namespace import (
    ClassNamespace,
    EnumNamespace,
    EnumValue,
    InterfaceNamespace,
    ModuleNamespace,
    Namespace,
    StructNamespace,
)
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
    ParameterKind,
    StructProp,
    TypeAlias,
)
from .path import resolve_path
from .search import DeclarationQuery

__all__ = [
    "Arbitrary",
    "Attribute",
    "AttributeKind",
    "ClassNamespace",
    "Constant",
    "Declaration",
    "DeclarationQuery",
    "EnumNamespace",
    "EnumValue",
    "InterfaceNamespace",
    "Method",
    "Mixin",
    "MixinDirection",
    "ModuleNamespace",
    "Namespace",
    "Parameter",
    "ParameterKind",
    "StructNamespace",
    "StructProp",
    "TypeAlias",
    "resolve_path",
]
