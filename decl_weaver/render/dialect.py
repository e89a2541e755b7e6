"""Line-construction primitives a dialect supplies to the renderer.

The renderer decides which declarations are emitted, in which order and
where blank lines go. A Dialect only turns a single declaration into its
lines at a given indentation level.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import ClassVar

from decl_weaver.tree.namespace import EnumNamespace, Namespace, StructNamespace
from decl_weaver.tree.nodes import Arbitrary, Attribute, Constant, Method, Mixin, TypeAlias

from .options import RenderOptions


class Dialect(ABC):
    """Base class for output dialects."""

    name: ClassVar[str]
    comment_marker: ClassVar[str] = "#"

    def file_banner(self, strictness: str) -> list[str]:
        """Lines written before the rendered tree in a complete file."""
        return []

    def comment_lines(self, comments: Sequence[str], level: int, options: RenderOptions) -> list[str]:
        return [options.indented(level, f"{self.comment_marker} {line}".rstrip()) for line in comments]

    @abstractmethod
    def namespace_open(self, namespace: Namespace, level: int, options: RenderOptions) -> list[str]: ...

    def namespace_close(self, namespace: Namespace, level: int, options: RenderOptions) -> list[str]:
        return [options.indented(level, "end")]

    def flag_lines(self, namespace: Namespace, level: int, options: RenderOptions) -> list[str]:
        return []

    @abstractmethod
    def enum_lines(self, namespace: EnumNamespace, level: int, options: RenderOptions) -> list[str]: ...

    @abstractmethod
    def struct_lines(self, namespace: StructNamespace, level: int, options: RenderOptions) -> list[str]: ...

    def class_level_block(self, level: int, options: RenderOptions) -> tuple[list[str], list[str]] | None:
        """Opening and closing lines wrapping class-level declarations.

        None means the dialect marks class-level declarations individually
        and they are emitted at the namespace's own level.
        """
        return None

    @abstractmethod
    def method_lines(self, method: Method, level: int, options: RenderOptions) -> list[str]: ...

    @abstractmethod
    def attribute_lines(self, attribute: Attribute, level: int, options: RenderOptions) -> list[str]: ...

    @abstractmethod
    def constant_lines(self, constant: Constant, level: int, options: RenderOptions) -> list[str]: ...

    @abstractmethod
    def type_alias_lines(self, alias: TypeAlias, level: int, options: RenderOptions) -> list[str]: ...

    def mixin_lines(self, mixin: Mixin, level: int, options: RenderOptions) -> list[str]:
        return [options.indented(level, f"{mixin.direction} {mixin.name}")]

    def arbitrary_lines(self, arbitrary: Arbitrary, level: int, options: RenderOptions) -> list[str]:
        return [options.indented(level, line) if line.strip() else "" for line in arbitrary.code.splitlines()]


__all__ = ["Dialect"]
