"""
Error types for cursorgen schema extraction, configuration and generation.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class CursorGenError(Exception):
    """Base exception for all cursorgen errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class SchemaError(CursorGenError):
    """
    Raised when a source file's state declarations cannot be generated.

    Examples:
    - Two states with the same name in one file
    """

    pass


class ExtractionError(CursorGenError):
    """
    Raised when a source file cannot be parsed into a schema.

    Examples:
    - TypeScript syntax errors
    - Unreadable source files
    """

    pass


class ConfigError(CursorGenError):
    """
    Raised when cursorgen.toml is invalid.

    Examples:
    - Wrong value types
    - Missing app state name
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error.

    Attributes:
        file: Path to the source file where the error occurred
        type_name: Optional state type involved in the error
    """

    file: Path
    type_name: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "src/state.ts in state IApplicationState"
        """
        location = str(self.file)
        if self.type_name:
            location += f" in state {self.type_name}"
        return location


def make_schema_error(
    message: str,
    file: Path | None = None,
    type_name: str | None = None,
) -> SchemaError:
    """
    Helper to create a SchemaError with optional context.

    Args:
        message: Error description
        file: Optional source file path
        type_name: Optional state type name

    Returns:
        SchemaError with context if a file is provided
    """
    if file:
        return SchemaError(message, ErrorContext(file=file, type_name=type_name))
    return SchemaError(message)
