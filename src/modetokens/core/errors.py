"""
Error types for token loading, resolution, and validation.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class TokenError(Exception):
    """Base exception for all modetokens errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message

    def with_context(self, context: "ErrorContext") -> "TokenError":
        """Attach location context after the fact and return self."""
        self.context = context
        self.args = (self._format_message(),)
        return self

    def __str__(self) -> str:
        return self._format_message()


class ResolutionError(TokenError):
    """
    Raised when a token tree cannot be flattened into variables.

    Examples:
    - Reference to a variable that is not declared yet
    - Duplicate variable name within a single overlay
    """

    pass


class UndefinedReferenceError(ResolutionError):
    """Raised when a reference points at a variable not yet in the collection."""

    def __init__(self, name: str, mode: str, referrer: str | None = None):
        self.name = name
        self.mode = mode
        self.referrer = referrer
        message = f'Undefined reference "{name}" in mode "{mode}"'
        if referrer:
            message += f' (referenced by "{referrer}")'
        super().__init__(message)


class DuplicateVariableError(ResolutionError):
    """Raised when one overlay declares the same variable name twice."""

    def __init__(self, name: str, mode: str):
        self.name = name
        self.mode = mode
        super().__init__(f'Variable "{name}" is declared more than once in mode "{mode}"')


class CollectionError(TokenError):
    """
    Raised when a collection is used outside its lifecycle.

    Examples:
    - Adding a mode twice
    - Mutating a collection after finalize()
    """

    pass


class DuplicateModeError(CollectionError):
    """Raised when a mode name is registered twice under one type."""

    pass


class CollectionFinalizedError(CollectionError):
    """Raised when a finalized collection is mutated."""

    pass


class LedgerParseError(TokenError):
    """Raised when a deprecation/removal ledger cannot be parsed at all."""

    pass


class TokenLoadError(TokenError):
    """Raised when token data files cannot be read."""

    pass


class ManifestError(TokenError):
    """Raised when tokens.toml is invalid."""

    pass


class TokenRenderError(TokenError):
    """Raised when a deferred value cannot be evaluated against a theme."""

    pass


@dataclass
class ErrorContext:
    """
    Location information for an error.

    Attributes:
        type: Token type (e.g. "colors")
        mode: Mode name (e.g. "light")
        file: Source file the data came from
    """

    type: str | None = None
    mode: str | None = None
    file: Path | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "data/colors/light.yaml [colors/light]"
        """
        parts = []
        if self.file:
            parts.append(str(self.file))
        if self.type and self.mode:
            parts.append(f"[{self.type}/{self.mode}]")
        elif self.type:
            parts.append(f"[{self.type}]")
        return " ".join(parts) or "<unknown>"


def make_load_error(
    message: str,
    file: Path | None = None,
    type: str | None = None,
    mode: str | None = None,
) -> TokenLoadError:
    """
    Helper to create a TokenLoadError with optional context.

    Args:
        message: Error description
        file: Optional source file path
        type: Optional token type
        mode: Optional mode name

    Returns:
        TokenLoadError with context if any location was provided
    """
    if file or type or mode:
        return TokenLoadError(message, ErrorContext(type=type, mode=mode, file=file))
    return TokenLoadError(message)
