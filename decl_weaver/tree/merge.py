"""Namespace merging.

Creating a namespace under a parent that already holds a namespace with the
same name and the exact same concrete kind returns the existing node instead
of appending a duplicate. The request's flags are folded into the existing
node: boolean flags are adopted when either side sets them, valued flags
(superclass, enum values, struct props) when only one side sets them.

A merge is validated completely before anything is written, so a conflict
leaves the existing node untouched.
"""

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from decl_weaver.exceptions import ConflictingFlagsError
from decl_weaver.logging import get_weaver_logger

from .nodes import Declaration

if TYPE_CHECKING:
    from .namespace import Namespace

logger = get_weaver_logger(__name__)


def _normalized(value: Any) -> Any:
    return list(value) if isinstance(value, (list, tuple)) else value


def find_mergeable(children: Sequence[Declaration], kind: type["Namespace"], name: str) -> "Namespace | None":
    """Return the sibling a new ``kind`` namespace called ``name`` would merge into.

    Matching uses the exact class, so a module never merges with a class and
    a plain class never merges with an enum class of the same name.
    """
    for child in children:
        if type(child) is kind and child.name == name:
            return child  # type: ignore[return-value]
    return None


def check_exclusive_flags(kind: type["Namespace"], flags: Mapping[str, Any], name: str) -> None:
    """Raise if ``flags`` sets two flags the kind declares mutually exclusive."""
    for first, second in kind.EXCLUSIVE_FLAGS:
        if flags.get(first) and flags.get(second):
            raise ConflictingFlagsError(f"{kind.KIND.capitalize()} '{name}' cannot be both {first} and {second}")


def plan_merge(existing: "Namespace", flags: Mapping[str, Any]) -> dict[str, Any]:
    """Compute the attribute updates a merge of ``flags`` into ``existing`` needs.

    Returns only the attributes that change. Raises ConflictingFlagsError
    when a valued flag differs between the two sides or when the combined
    flags violate an exclusivity rule.
    """
    kind = type(existing)
    updates: dict[str, Any] = {}

    for flag in kind.BOOLEAN_FLAGS:
        if flags.get(flag) and not getattr(existing, flag):
            updates[flag] = True

    for attribute in kind.VALUED_FLAGS:
        requested = flags.get(attribute)
        current = getattr(existing, attribute)
        if not requested:
            continue
        if not current:
            updates[attribute] = _normalized(requested)
        elif _normalized(current) != _normalized(requested):
            raise ConflictingFlagsError(
                f"Cannot merge {existing.describe()}: {attribute} {current!r} "
                f"(from {existing.generated_by!r}) conflicts with {requested!r}"
            )

    combined = {flag: getattr(existing, flag) for flag in kind.BOOLEAN_FLAGS} | updates
    check_exclusive_flags(kind, combined, existing.name)
    return updates


def merge_namespace(existing: "Namespace", flags: Mapping[str, Any], *, generated_by: Any = None) -> "Namespace":
    """Fold a creation request into an existing namespace and return it."""
    updates = plan_merge(existing, flags)
    for attribute, value in updates.items():
        setattr(existing, attribute, value)

    logger.debug(
        "Merged %s (first created by %r, requested again by %r)%s",
        existing.describe(),
        existing.generated_by,
        generated_by,
        f", adopted {sorted(updates)}" if updates else "",
    )
    return existing


__all__ = ["check_exclusive_flags", "find_mergeable", "merge_namespace", "plan_merge"]
