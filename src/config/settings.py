"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use MACROCOMPLETE_ prefix (e.g., MACROCOMPLETE_STRICT_MODE=true).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use MACROCOMPLETE_ prefix.

    Examples:
        MACROCOMPLETE_OPEN_DELIMITER=<<
        MACROCOMPLETE_CLOSE_DELIMITER=>>
        MACROCOMPLETE_CARET_MARKER=^
    """

    model_config = SettingsConfigDict(
        env_prefix="MACROCOMPLETE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Macro syntax
    open_delimiter: str = Field(
        default="{{",
        description="Marker that opens a macro token",
    )

    close_delimiter: str = Field(
        default="}}",
        description="Marker that closes a macro token",
    )

    # Completion ordering
    default_sort_priority: int = Field(
        default=50,
        description="Sort priority assumed for options that do not set one (lower sorts first)",
    )

    closing_tag_priority: int = Field(
        default=1,
        description="Sort priority of closing-tag options (always top of the list)",
    )

    # Probe files (CLI)
    caret_marker: str = Field(
        default="|",
        description="Character marking the caret position in a probe line",
    )

    strict_mode: bool = Field(
        default=False,
        description="Strict mode: treat arity warnings in probes as errors",
    )

    def token_wrap(self, text: str) -> str:
        """
        Wrap macro text in the open/close delimiters.

        Example:
            >>> AppSettings().token_wrap('roll::1d20')
            '{{roll::1d20}}'
        """
        return f"{self.open_delimiter}{text}{self.close_delimiter}"

    def closingTag_make(self, name: str) -> str:
        """
        Build the full closing tag for a scoped macro.

        Example:
            >>> AppSettings().closingTag_make('if')
            '{{/if}}'
        """
        return self.token_wrap(f"/{name}")

    def probe_split(self, line: str) -> tuple[str, int]:
        """
        Split a probe line into macro text and caret offset.

        The first caret marker in the line is removed and its position becomes
        the caret offset. A line with no marker puts the caret at the end.

        Args:
            line: Probe line, e.g. "roll::1d|20"

        Returns:
            Tuple of (macro text, caret offset)

        Example:
            >>> AppSettings().probe_split('roll::1d|20')
            ('roll::1d20', 8)
        """
        position = line.find(self.caret_marker)
        if position < 0:
            return line, len(line)
        text = line[:position] + line[position + len(self.caret_marker):]
        return text, position


# Singleton instance - import this in your code
appsettings = AppSettings()
