"""Formatting options shared by every dialect."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class RenderOptions(BaseModel):
    """How rendered lines are laid out. Immutable after creation.

    tab_size: Spaces per indentation level (also accepted as ``indent_unit_width``).
    break_params: A method with at least this many parameters is rendered
                  with one parameter per line (also accepted as ``param_wrap_threshold``).
    sort_namespaces: Sort includes, extends and nested namespaces by name.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    tab_size: int = Field(default=2, ge=0, validation_alias=AliasChoices("tab_size", "indent_unit_width"))
    break_params: int = Field(default=4, ge=1, validation_alias=AliasChoices("break_params", "param_wrap_threshold"))
    sort_namespaces: bool = False

    @property
    def indent_unit_width(self) -> int:
        return self.tab_size

    @property
    def param_wrap_threshold(self) -> int:
        return self.break_params

    def indented(self, level: int, text: str) -> str:
        """Prefix ``text`` with ``level * tab_size`` spaces."""
        return " " * (level * self.tab_size) + text


__all__ = ["RenderOptions"]
