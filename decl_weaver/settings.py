"""Default configuration for rendering and file output.

@public

Settings are loaded from environment variables with .env file support via
pydantic-settings. Every variable is prefixed with ``DECL_WEAVER_``.

Environment variables:
    DECL_WEAVER_TAB_SIZE: Spaces per indentation level (default 2)
    DECL_WEAVER_BREAK_PARAMS: Parameter count at which signatures wrap (default 4)
    DECL_WEAVER_SORT_NAMESPACES: Sort nested namespaces by name (default false)
    DECL_WEAVER_STRICTNESS: Sorbet strictness written in the RBI banner (default strong)
    DECL_WEAVER_DIALECT: Default output dialect, ``rbi`` or ``rbs`` (default rbi)

Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file in current directory
    3. Default values

Example:
    >>> from decl_weaver.settings import settings
    >>> options = settings.render_options()
    >>> options.tab_size
    2

Note:
    Settings are loaded once at module import and frozen. Explicit options
    passed to a Generator or to render() always win over these defaults.
"""

from typing import TYPE_CHECKING, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from decl_weaver.render.options import RenderOptions


class Settings(BaseSettings):
    """Package-wide defaults.

    @public

    Attributes:
        tab_size: Spaces per indentation level.
        break_params: Parameter count at which method signatures are
                      broken one parameter per line.
        sort_namespaces: Whether nested namespaces are sorted by name.
        strictness: Sorbet strictness level for the ``# typed:`` banner.
        dialect: Dialect used when none is given explicitly.
    """

    model_config = SettingsConfigDict(
        env_prefix="DECL_WEAVER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    tab_size: int = Field(default=2, ge=0)
    break_params: int = Field(default=4, ge=1)
    sort_namespaces: bool = False

    strictness: str = "strong"
    dialect: Literal["rbi", "rbs"] = "rbi"

    def render_options(self) -> "RenderOptions":
        """Build the default RenderOptions from these settings."""
        from decl_weaver.render.options import RenderOptions  # noqa: PLC0415 - render imports settings

        return RenderOptions(
            tab_size=self.tab_size,
            break_params=self.break_params,
            sort_namespaces=self.sort_namespaces,
        )


settings = Settings()
"""Global settings instance, created at import time."""


__all__ = ["Settings", "settings"]
