"""Mapping live Python classes and modules onto nested namespaces.

resolve_path() takes a class (or module) and creates, or reuses through the
ordinary merge-aware creation calls, one namespace per enclosing scope:

    >>> class Outer:
    ...     class Inner:
    ...         pass
    >>> root.path(Outer.Inner)          # doctest: +SKIP
    ClassNamespace(name='Inner', ...)   # nested in ClassNamespace 'Outer'

Scope names are read through the descriptors on ``type`` itself rather than
through attribute access on the entity, so a metaclass that overrides
``__name__`` cannot rename the output. When that lookup is unavailable the
name is parsed from the entity's ``repr()``/``str()``.

Scope kinds come from ``type(scope)``. An object can claim another kind by
overriding ``__class__``, which also fools ``isinstance``; the introspected
type always wins over what the object reports about itself.
"""

import re
import sys
from dataclasses import dataclass
from types import ModuleType
from typing import TYPE_CHECKING, Literal

from decl_weaver.exceptions import NameResolutionError, UsageError
from decl_weaver.logging import get_weaver_logger

if TYPE_CHECKING:
    from .namespace import Namespace

logger = get_weaver_logger(__name__)

ScopeKind = Literal["module", "class"]

_REPR_NAME = re.compile(r"^<(?:class|module) '([^']+)'")
_LOCALS_MARKER = "<locals>"


@dataclass(frozen=True, slots=True)
class Scope:
    """One level of an entity's ancestry."""

    name: str
    kind: ScopeKind


def scope_kind(scope: object) -> ScopeKind | None:
    """Classify ``scope`` by its real type, ignoring any ``__class__`` override."""
    real_type = type(scope)
    if issubclass(real_type, type):
        return "class"
    if issubclass(real_type, ModuleType):
        return "module"
    return None


def _primary_qualified_name(entity: object, kind: ScopeKind) -> tuple[str, str] | None:
    """Return (module name, qualified name) for a class, or (module name, "") for a module."""
    if kind == "class":
        try:
            module_name = type.__dict__["__module__"].__get__(entity)
            qualname = type.__dict__["__qualname__"].__get__(entity)
        except (AttributeError, TypeError):
            return None
        if not isinstance(module_name, str) or not isinstance(qualname, str):
            return None
        return module_name, qualname

    module_name = vars(entity).get("__name__")
    return (module_name, "") if isinstance(module_name, str) else None


def _fallback_qualified_name(entity: object, kind: ScopeKind) -> tuple[str, str] | None:
    """Recover names from the string form, e.g. ``<class 'pkg.mod.Outer.Inner'>``."""
    for text in (repr(entity), str(entity)):
        match = _REPR_NAME.match(text)
        if match is None:
            continue
        dotted = match.group(1)
        if kind == "module":
            return dotted, ""
        module_name = _longest_loaded_module(dotted)
        if module_name is None:
            return None
        return module_name, dotted[len(module_name) + 1 :]
    return None


def _longest_loaded_module(dotted: str) -> str | None:
    parts = dotted.split(".")
    for end in range(len(parts) - 1, 0, -1):
        candidate = ".".join(parts[:end])
        if candidate in sys.modules:
            return candidate
    return None


def qualified_name(entity: object, kind: ScopeKind) -> tuple[str, str]:
    """Return (module name, qualified name) of ``entity``; qualified name is empty for modules."""
    names = _primary_qualified_name(entity, kind) or _fallback_qualified_name(entity, kind)
    if names is None:
        raise NameResolutionError(f"Cannot determine the name of {entity!r}")
    return names


def _split_name(dotted: str, entity: object) -> list[str]:
    parts = dotted.split(".")
    if _LOCALS_MARKER in parts:
        raise NameResolutionError(f"{entity!r} is defined inside a function and has no reachable path")
    for part in parts:
        if not part.isidentifier():
            raise NameResolutionError(f"{entity!r} has an anonymous or invalid scope name {part!r} in {dotted!r}")
    return parts


def scope_chain(entity: object, *, include_module: bool = False) -> list[Scope]:
    """Return the ancestry of ``entity``, outermost scope first.

    For a module the chain is its dotted package path. For a class it is the
    chain of enclosing classes; with ``include_module`` the defining module's
    dotted path is prepended. Every enclosing scope is looked up on its
    owner and classified independently.
    """
    kind = scope_kind(entity)
    if kind is None:
        raise NameResolutionError(f"{entity!r} is neither a class nor a module")

    module_name, qualname = qualified_name(entity, kind)
    if kind == "module":
        return [Scope(part, "module") for part in _split_name(module_name, entity)]

    parts = _split_name(qualname, entity)
    scopes = [Scope(part, "module") for part in _split_name(module_name, entity)] if include_module else []

    owner: object | None = sys.modules.get(module_name)
    for part in parts[:-1]:
        owner = getattr(owner, part, None)
        enclosing_kind = scope_kind(owner) if owner is not None else None
        if enclosing_kind is None:
            raise NameResolutionError(f"Cannot resolve enclosing scope {part!r} of {module_name}.{qualname}")
        scopes.append(Scope(part, enclosing_kind))

    scopes.append(Scope(parts[-1], kind))
    return scopes


def resolve_path(root: "Namespace", entity: object, *, include_module: bool = False) -> "Namespace":
    """Return the namespace for ``entity``, creating missing ancestors under ``root``.

    Must be called on the tree root. The whole ancestry is resolved before
    any namespace is created, so a NameResolutionError leaves the tree as it
    was.
    """
    if not root.is_root:
        raise UsageError(f"path() must be called on the root namespace, not on {root.describe()}")

    scopes = scope_chain(entity, include_module=include_module)
    logger.debug("Resolving %s", ".".join(scope.name for scope in scopes))

    node = root
    for scope in scopes:
        node = node.create_module(scope.name) if scope.kind == "module" else node.create_class(scope.name)
    return node


__all__ = ["Scope", "qualified_name", "resolve_path", "scope_chain", "scope_kind"]
