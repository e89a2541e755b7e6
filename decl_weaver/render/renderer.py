"""Turning a declaration tree into ordered output lines.

The body of a namespace is emitted in fixed groups, one blank line between
any two non-empty groups:

1. flags (``abstract!``, ``interface!``, ``final!``, ``sealed!``)
2. includes, extends, type aliases and constants, contiguous
3. enum values (enum classes)
4. struct props (struct classes)
5. class-level declarations: eigen constants, then class attributes
6. every other child, each separated from the next by a blank line

Group 6 keeps creation order unless ``sort_namespaces`` is set; then it is
attributes, arbitrary code, namespaces sorted by name, methods. Rendering
never mutates the tree, so rendering the same tree twice gives identical
lines.
"""

from collections.abc import Iterable, Sequence

from decl_weaver.exceptions import UnknownDialectError
from decl_weaver.settings import settings
from decl_weaver.tree.namespace import EnumNamespace, Namespace, StructNamespace
from decl_weaver.tree.nodes import Arbitrary, Attribute, Constant, Declaration, Method, Mixin, TypeAlias

from .dialect import Dialect
from .options import RenderOptions
from .rbi import RbiDialect
from .rbs import RbsDialect

DIALECTS: dict[str, type[Dialect]] = {
    RbiDialect.name: RbiDialect,
    RbsDialect.name: RbsDialect,
}


def get_dialect(dialect: str | Dialect) -> Dialect:
    """Return a dialect instance for a registered name, or ``dialect`` itself."""
    if isinstance(dialect, Dialect):
        return dialect
    try:
        return DIALECTS[dialect]()
    except KeyError:
        raise UnknownDialectError(f"Unknown dialect {dialect!r}, expected one of {sorted(DIALECTS)}") from None


def _joined(blocks: Iterable[Sequence[str]]) -> list[str]:
    """Concatenate non-empty blocks with a single blank line between them."""
    result: list[str] = []
    for block in blocks:
        if not block:
            continue
        if result:
            result.append("")
        result.extend(block)
    return result


class Renderer:
    """Renders declarations with one options bundle and one dialect."""

    def __init__(self, options: RenderOptions | None = None, dialect: str | Dialect | None = None) -> None:
        self.options = options or settings.render_options()
        self.dialect = get_dialect(dialect or settings.dialect)

    def render(self, node: Declaration, indent_level: int = 0) -> list[str]:
        """Render ``node`` (comments included) at ``indent_level``.

        The root namespace has no declaration line of its own; only its body
        is rendered.
        """
        lines = self.dialect.comment_lines(node.comments, indent_level, self.options)
        if isinstance(node, Namespace):
            if node.is_root:
                return lines + self.render_body(node, indent_level)
            return (
                lines
                + self.dialect.namespace_open(node, indent_level, self.options)
                + self.render_body(node, indent_level + 1)
                + self.dialect.namespace_close(node, indent_level, self.options)
            )
        return lines + self._member_lines(node, indent_level)

    def render_body(self, namespace: Namespace, level: int) -> list[str]:
        children = namespace.children
        sort = self.options.sort_namespaces

        includes = namespace.includes
        extends = namespace.extends
        if sort:
            includes = sorted(includes, key=lambda c: c.name)
            extends = sorted(extends, key=lambda c: c.name)
        aliases = [c for c in children if isinstance(c, TypeAlias)]
        constants = [c for c in children if isinstance(c, Constant) and not c.eigen_constant]
        eigen_constants = [c for c in children if isinstance(c, Constant) and c.eigen_constant]
        class_attributes = [c for c in children if isinstance(c, Attribute) and c.class_attribute]

        hoisted = (Mixin, TypeAlias, Constant)
        remaining = [
            c for c in children if not isinstance(c, hoisted) and not (isinstance(c, Attribute) and c.class_attribute)
        ]
        if sort:
            remaining = self._sorted_remaining(remaining)

        preamble: list[str] = []
        for child in [*includes, *extends, *aliases, *constants]:
            preamble.extend(self.render(child, level))

        return _joined(
            [
                self.dialect.flag_lines(namespace, level, self.options),
                preamble,
                self.dialect.enum_lines(namespace, level, self.options) if isinstance(namespace, EnumNamespace) else [],
                self.dialect.struct_lines(namespace, level, self.options) if isinstance(namespace, StructNamespace) else [],
                self._class_level_lines(eigen_constants, class_attributes, level),
                _joined(self.render(child, level) for child in remaining),
            ]
        )

    def _class_level_lines(self, eigen_constants: list[Constant], class_attributes: list[Attribute], level: int) -> list[str]:
        if not eigen_constants and not class_attributes:
            return []
        wrapper = self.dialect.class_level_block(level, self.options)
        inner = level if wrapper is None else level + 1

        constant_lines: list[str] = []
        for constant in eigen_constants:
            constant_lines.extend(self.render(constant, inner))
        body = _joined([constant_lines, *(self.render(attribute, inner) for attribute in class_attributes)])

        if wrapper is None:
            return body
        opening, closing = wrapper
        return opening + body + closing

    @staticmethod
    def _sorted_remaining(children: list[Declaration]) -> list[Declaration]:
        attributes = [c for c in children if isinstance(c, Attribute)]
        arbitrary = [c for c in children if isinstance(c, Arbitrary)]
        namespaces = sorted((c for c in children if isinstance(c, Namespace)), key=lambda c: c.name)
        methods = [c for c in children if isinstance(c, Method)]
        return [*attributes, *arbitrary, *namespaces, *methods]

    def _member_lines(self, node: Declaration, level: int) -> list[str]:
        options = self.options
        match node:
            case Method():
                return self.dialect.method_lines(node, level, options)
            case Attribute():
                return self.dialect.attribute_lines(node, level, options)
            case Constant():
                return self.dialect.constant_lines(node, level, options)
            case Mixin():
                return self.dialect.mixin_lines(node, level, options)
            case TypeAlias():
                return self.dialect.type_alias_lines(node, level, options)
            case Arbitrary():
                return self.dialect.arbitrary_lines(node, level, options)
            case _:
                raise TypeError(f"Cannot render {type(node).__name__}")


def render(
    node: Declaration,
    options: RenderOptions | None = None,
    *,
    dialect: str | Dialect | None = None,
    indent_level: int = 0,
) -> list[str]:
    """Render ``node`` to a list of lines (without trailing newlines)."""
    return Renderer(options, dialect).render(node, indent_level)


__all__ = ["DIALECTS", "Renderer", "get_dialect", "render"]
