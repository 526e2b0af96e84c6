"""
Error kinds raised while combining markdown documents.

Only ``EmptyInputError``, ``ReadFailure`` and ``WriteFailure`` are ever
reported to callers; ``InvalidFormatPattern`` is recovered inside the
name generator.
"""
from typing import Optional


class CombinerError(Exception):
    """Base class for reported combine failures."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class EmptyInputError(CombinerError):
    """No markdown document found and no directory context requested."""


class ReadFailure(CombinerError):
    """A document's content could not be read."""


class WriteFailure(CombinerError):
    """The combined document could not be created."""


class InvalidFormatPattern(ValueError):
    """The configured timestamp pattern cannot be applied."""
