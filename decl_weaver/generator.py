"""Generation sessions.

A Generator owns one root namespace, the options it is rendered with and the
contributor currently building into it. Contributors run one after another;
each wraps its work in ``contribute()`` so every node it creates records who
created it.

Example:
    >>> gen = RbiGenerator(break_params=4)
    >>> with gen.contribute("models-pass"):
    ...     _ = gen.root.create_class("User").create_attr_reader("name", type="String")
    >>> print(gen.rbi("true"))
    # typed: true
    class User
      sig { returns(String) }
      attr_reader :name
    end
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from decl_weaver.logging import get_weaver_logger
from decl_weaver.render import Dialect, RenderOptions, Renderer, get_dialect
from decl_weaver.settings import settings
from decl_weaver.tree import Namespace

logger = get_weaver_logger(__name__)


class Generator:
    """A root namespace plus the options and dialect used to render it.

    Options can be given as a RenderOptions instance or as keyword overrides
    (``tab_size``, ``break_params``, ``sort_namespaces``) on top of the
    package settings.
    """

    def __init__(self, options: RenderOptions | None = None, *, dialect: str | Dialect | None = None, **overrides: Any) -> None:
        if options is None:
            explicit = RenderOptions(**overrides)
            options = settings.render_options().model_copy(update={name: getattr(explicit, name) for name in explicit.model_fields_set})
        elif overrides:
            raise TypeError("Pass either a RenderOptions instance or option keywords, not both")
        self.options = options
        self.dialect = get_dialect(dialect or settings.dialect)
        self.root = Namespace()

    @property
    def current_contributor(self) -> Any:
        return self.root.current_contributor

    @contextmanager
    def contribute(self, contributor: Any) -> Iterator[Namespace]:
        """Attribute every node created inside the block to ``contributor``."""
        previous = self.root.current_contributor
        self.root.current_contributor = contributor
        logger.debug("Contributor %r started", contributor)
        try:
            yield self.root
        finally:
            self.root.current_contributor = previous

    def render(self) -> list[str]:
        return Renderer(self.options, self.dialect).render(self.root)

    def render_file(self, strictness: str | None = None) -> str:
        """Return the complete file text: dialect banner, rendered tree, final newline."""
        banner = self.dialect.file_banner(strictness or settings.strictness)
        return "\n".join([*banner, *self.render()]) + "\n"


class RbiGenerator(Generator):
    def __init__(self, options: RenderOptions | None = None, **overrides: Any) -> None:
        super().__init__(options, dialect="rbi", **overrides)

    def rbi(self, strictness: str | None = None) -> str:
        return self.render_file(strictness)


class RbsGenerator(Generator):
    def __init__(self, options: RenderOptions | None = None, **overrides: Any) -> None:
        super().__init__(options, dialect="rbs", **overrides)

    def rbs(self) -> str:
        return self.render_file()


__all__ = ["Generator", "RbiGenerator", "RbsGenerator"]
