"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use MATHITEM_ prefix (e.g., MATHITEM_EM_SIZE=18).

List settings take JSON values, e.g.
    MATHITEM_INLINE_DELIMITERS='[["$", "$"], ["\\\\(", "\\\\)"]]'

Settings can also be loaded from a .env file in the working directory.
"""

from typing import List, Optional, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use MATHITEM_ prefix.

    Examples:
        MATHITEM_EM_SIZE=18
        MATHITEM_PROCESS_ESCAPES=false
        MATHITEM_DEBUG_MODE=true
    """

    model_config = SettingsConfigDict(
        env_prefix="MATHITEM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Metrics used for each typeset pass
    em_size: float = Field(
        default=16.0,
        description="Size of 1em in pixels",
    )

    ex_size: float = Field(
        default=8.0,
        description="Size of 1ex in pixels",
    )

    container_width: float = Field(
        default=1280.0,
        description="Available container width in pixels",
    )

    line_width: float = Field(
        default=1000000.0,
        description="Line-breaking width in pixels (effectively no breaking by default)",
    )

    scale: float = Field(
        default=1.0,
        description="Unitless scaling factor applied to typeset output",
    )

    # Scanner configuration
    inline_delimiters: List[Tuple[str, str]] = Field(
        default=[("$", "$"), ("\\(", "\\)")],
        description="Open/close delimiter pairs for inline math",
    )

    display_delimiters: List[Tuple[str, str]] = Field(
        default=[("$$", "$$"), ("\\[", "\\]")],
        description="Open/close delimiter pairs for display math",
    )

    process_escapes: bool = Field(
        default=True,
        description="Treat \\$ as a literal dollar sign rather than a delimiter",
    )

    # Output configuration
    error_class: str = Field(
        default="mathitem-error",
        description="CSS class of the element that replaces math that failed to render",
    )

    debug_mode: bool = Field(
        default=False,
        description="Log every lifecycle transition when no CLI verbosity is connected",
    )

    def displayFlag_forDelims(self, open: str, close: str) -> Optional[bool]:
        """
        Resolve display mode from a delimiter pair.

        Args:
            open: Opening delimiter
            close: Closing delimiter

        Returns:
            True for a display pair, False for an inline pair, None if the
            pair is not configured

        Example:
            >>> settings = AppSettings()
            >>> settings.displayFlag_forDelims("$$", "$$")
            True
        """
        pair = (open, close)
        if pair in [tuple(p) for p in self.display_delimiters]:
            return True
        if pair in [tuple(p) for p in self.inline_delimiters]:
            return False
        return None


# Singleton instance - import this in your code
appsettings = AppSettings()
