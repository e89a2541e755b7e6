"""Common test fixtures for declaration tree tests."""

import pytest

from decl_weaver import RenderOptions
from decl_weaver.render import Renderer
from decl_weaver.tree import Namespace


@pytest.fixture
def root() -> Namespace:
    """A fresh, empty tree root."""
    return Namespace()


@pytest.fixture
def options() -> RenderOptions:
    """Explicit options so tests never depend on DECL_WEAVER_* variables."""
    return RenderOptions(break_params=4, tab_size=2, sort_namespaces=False)


@pytest.fixture
def rbi(options: RenderOptions):
    """Render a node as RBI and join the lines."""
    renderer = Renderer(options, "rbi")

    def _render(node) -> str:
        return "\n".join(renderer.render(node))

    return _render


@pytest.fixture
def rbs(options: RenderOptions):
    """Render a node as RBS and join the lines."""
    renderer = Renderer(options, "rbs")

    def _render(node) -> str:
        return "\n".join(renderer.render(node))

    return _render
