"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use GORILLAMD_ prefix (e.g., GORILLAMD_FENCE_LANGUAGE=clojure).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use GORILLAMD_ prefix.

    Examples:
        GORILLAMD_FENCE_LANGUAGE=clj
        GORILLAMD_MAX_OUTPUT_DEPTH=50
        GORILLAMD_STRICT_MODE=false
    """

    model_config = SettingsConfigDict(
        env_prefix="GORILLAMD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Segmenter / renderer configuration
    content_prefix: str = Field(
        default=";;; ",
        description="Comment token that marks markdown, stdout and output lines as cell content",
    )

    fence_language: str = Field(
        default="clojure",
        description="Language tag placed on code cell fences (normalized through Pygments aliases)",
    )

    max_output_depth: int = Field(
        default=100,
        ge=1,
        description="Maximum nesting depth accepted for an output cell's JSON tree",
    )

    strict_mode: bool = Field(
        default=True,
        description="Strict mode: an output cell with more than one non-blank line is an error",
    )

    # File configuration
    default_input_file: str = Field(
        default="violence-in-religious-text-nb.clj",
        description="Notebook filename read when --inputFile is not given",
    )

    default_output_file: str = Field(
        default="violence-in-religious-text.md",
        description="Markdown filename written when --outputFile is not given",
    )

    def prefix_strip(self, line: str) -> str:
        """
        Remove exactly one leading content prefix from a line.

        Lines without the prefix are returned unchanged.

        Example:
            >>> settings = AppSettings()
            >>> settings.prefix_strip(';;; # Title')
            '# Title'
            >>> settings.prefix_strip('# Title')
            '# Title'
        """
        if self.content_prefix and line.startswith(self.content_prefix):
            return line[len(self.content_prefix):]
        return line


# Singleton instance - import this in your code
appsettings = AppSettings()
