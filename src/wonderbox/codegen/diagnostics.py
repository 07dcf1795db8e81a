from __future__ import annotations

import inspect
import warnings
from dataclasses import dataclass
from typing import Any

from wonderbox.exceptions import WonderboxGenerationWarning


@dataclass(frozen=True, slots=True)
class GenerationDiagnostic:
    """Describe a ``resolve_dependencies`` usage error and where it was found."""

    message: str
    filename: str | None = None
    lineno: int | None = None

    @classmethod
    def at(cls, target: Any, message: str) -> GenerationDiagnostic:
        """Build a diagnostic located at the source of a class or function.

        Args:
            target: Class or function the diagnostic points at.
            message: Human-readable description of the problem.

        """
        code = getattr(target, "__code__", None)
        if code is not None:
            return cls(message=message, filename=code.co_filename, lineno=code.co_firstlineno)
        try:
            filename = inspect.getsourcefile(target)
        except TypeError:
            return cls(message=message)
        try:
            _, lineno = inspect.getsourcelines(target)
        except (OSError, TypeError):
            return cls(message=message, filename=filename)
        return cls(message=message, filename=filename, lineno=lineno)

    def emit(self) -> None:
        """Report the diagnostic as a ``WonderboxGenerationWarning`` at its location."""
        warnings.warn_explicit(
            self.message,
            WonderboxGenerationWarning,
            self.filename or "<unknown>",
            self.lineno or 0,
        )

    def __str__(self) -> str:
        if self.filename is None:
            return self.message
        return f"{self.filename}:{self.lineno}: {self.message}"
