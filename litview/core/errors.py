# ---------------------------------
# TYPED EXCEPTIONS
# ---------------------------------
from __future__ import annotations

from pathlib import Path


class TemplateError(Exception):
    """Base class for every failure delivered by a compile or render call."""


class FileReadError(TemplateError):
    """Raised when a template or partial source cannot be read."""

    def __init__(self, path: str | Path, reason: str | None = None):
        self.path = str(path)
        message = f"Cannot read template '{self.path}'"
        if reason:
            message = f'{message}: {reason}'
        super().__init__(message)


class EvaluationError(TemplateError):
    """Raised when a placeholder expression cannot be evaluated."""
    pass


class TemplateSyntaxError(EvaluationError):
    def __init__(self, message: str, position: int):
        self.position = position
        super().__init__(f'{message} (at offset {position})')


class ArityError(EvaluationError):
    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(f'Compiled template expects {expected} value(s), received {received}')
