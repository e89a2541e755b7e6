"""Tests for RenderOptions."""

import pytest
from pydantic import ValidationError

from decl_weaver import RenderOptions


def test_defaults() -> None:
    options = RenderOptions()
    assert options.tab_size == 2
    assert options.break_params == 4
    assert options.sort_namespaces is False


def test_descriptive_aliases() -> None:
    options = RenderOptions(indent_unit_width=4, param_wrap_threshold=6)
    assert options.tab_size == 4
    assert options.indent_unit_width == 4
    assert options.break_params == 6
    assert options.param_wrap_threshold == 6


def test_frozen() -> None:
    options = RenderOptions()
    with pytest.raises(ValidationError):
        options.tab_size = 8  # type: ignore[misc]


@pytest.mark.parametrize("kwargs", [{"tab_size": -1}, {"break_params": 0}, {"unknown": True}])
def test_invalid_values(kwargs) -> None:
    with pytest.raises(ValidationError):
        RenderOptions(**kwargs)


@pytest.mark.parametrize(
    ("tab_size", "level", "result"),
    [
        (2, 0, "x"),
        (2, 2, "    x"),
        (4, 1, "    x"),
        (0, 3, "x"),
    ],
)
def test_indented(tab_size: int, level: int, result: str) -> None:
    assert RenderOptions(tab_size=tab_size).indented(level, "x") == result
