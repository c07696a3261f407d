"""Errors raised while loading ranker configuration and snapshots."""

from pathlib import Path
from typing import Optional, Sequence, Union

from pydantic import ValidationError

from .validators import describe_validation_error


class ConfigurationError(Exception):
    """
    A config file, environment variable or snapshot could not be loaded.

    The CLI prints the error as-is, so ``str()`` renders the problems found
    and the hints for fixing them on separate lines. Both lists stay
    available as attributes for callers that want to inspect them.
    """

    def __init__(
        self,
        message: str,
        errors: Sequence[str] = (),
        suggestions: Sequence[str] = (),
        source: Optional[Union[str, Path]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.errors = list(errors)
        self.suggestions = list(suggestions)
        self.source = Path(source) if source is not None else None

    @classmethod
    def from_validation_error(
        cls,
        message: str,
        error: ValidationError,
        suggestions: Sequence[str] = (),
        source: Optional[Union[str, Path]] = None,
    ) -> "ConfigurationError":
        """Wrap a pydantic ValidationError, one entry per failing field."""
        return cls(
            message,
            errors=describe_validation_error(error),
            suggestions=suggestions,
            source=source,
        )

    def __str__(self) -> str:
        lines = [self.message]
        if self.source is not None:
            lines.append(f"  in {self.source}")
        if self.errors:
            lines.append("\nValidation Errors:")
            lines.extend(f"  {i}. {error}" for i, error in enumerate(self.errors, 1))
        if self.suggestions:
            lines.append("\nSuggestions:")
            lines.extend(f"  - {hint}" for hint in self.suggestions)
        return "\n".join(lines)
