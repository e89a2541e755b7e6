"""decl-weaver - build declaration trees and render them as RBI or RBS.

@public

Callers describe modules, classes, methods, attributes and constants
programmatically, possibly from several independent contributors, and get
stable, merged, formatted signature files back.

Core Capabilities:
    - **Declaration tree**: modules, classes, interfaces, enums, structs and their members
    - **Namespace merging**: re-declaring a namespace returns the existing node
    - **Comments**: direct comments and comments queued for the next child
    - **Search**: depth-first find/find_all by name and kind
    - **Path resolution**: mirror a live Python class's nesting into the tree
    - **Rendering**: deterministic RBI (Sorbet) and RBS output

Quick Start:
    >>> from decl_weaver import Parameter, RbiGenerator
    >>>
    >>> gen = RbiGenerator()
    >>> shapes = gen.root.create_module("Shapes")
    >>> square = shapes.create_class("Square", superclass="Shape")
    >>> _ = square.create_method("scale", parameters=[Parameter("by", type="Float")], returns="Square")
    >>> print(gen.rbi())
    # typed: strong
    module Shapes
      class Square < Shape
        sig { params(by: Float).returns(Square) }
        def scale(by); end
      end
    end

Environment Variables:
    - DECL_WEAVER_TAB_SIZE, DECL_WEAVER_BREAK_PARAMS, DECL_WEAVER_SORT_NAMESPACES
    - DECL_WEAVER_STRICTNESS, DECL_WEAVER_DIALECT
    - DECL_WEAVER_LOG_LEVEL, DECL_WEAVER_LOGGING_CONFIG
"""

from . import api
from .exceptions import (
    AmbiguousParameterError,
    ConflictingFlagsError,
    DeclWeaverError,
    LoggingConfigError,
    NameResolutionError,
    UnknownDialectError,
    UsageError,
)
from .generator import Generator, RbiGenerator, RbsGenerator
from .logging import LoggingConfig, get_weaver_logger, setup_logging
from .render import RenderOptions, Renderer
from .settings import Settings, settings
from .tree import (
    Arbitrary,
    Attribute,
    AttributeKind,
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
    Parameter,
    ParameterKind,
    StructNamespace,
    StructProp,
    TypeAlias,
    resolve_path,
)

__version__ = "0.1.0"

__all__ = [
    "AmbiguousParameterError",
    "Arbitrary",
    "Attribute",
    "AttributeKind",
    "ClassNamespace",
    "ConflictingFlagsError",
    "Constant",
    "DeclWeaverError",
    "Declaration",
    "EnumNamespace",
    "Generator",
    "InterfaceNamespace",
    "LoggingConfig",
    "LoggingConfigError",
    "Method",
    "Mixin",
    "MixinDirection",
    "ModuleNamespace",
    "NameResolutionError",
    "Namespace",
    "Parameter",
    "ParameterKind",
    "RbiGenerator",
    "RbsGenerator",
    "RenderOptions",
    "Renderer",
    "Settings",
    "StructNamespace",
    "StructProp",
    "TypeAlias",
    "UnknownDialectError",
    "UsageError",
    "api",
    "get_weaver_logger",
    "resolve_path",
    "settings",
    "setup_logging",
]
