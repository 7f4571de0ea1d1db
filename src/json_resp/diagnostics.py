"""Accumulating diagnostic context.

Validation steps record problems here instead of raising, so a single
compilation reports every malformed declaration at once.
"""

from __future__ import annotations

from dataclasses import dataclass

from json_resp.errors import CompileError


@dataclass(frozen=True)
class Diagnostic:
    span: str
    message: str

    def __str__(self) -> str:
        return f"{self.span}: {self.message}"


class Context:
    """Collects diagnostics for one compilation unit.

    ``check`` must be called exactly once, after all validation is done.
    """

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] | None = []

    def error_spanned_by(self, span: str, message: str) -> None:
        if self._diagnostics is None:
            raise RuntimeError("diagnostic context has already been checked")
        self._diagnostics.append(Diagnostic(span=span, message=message))

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(self._diagnostics or ())

    def has_errors(self) -> bool:
        return bool(self._diagnostics)

    def check(self) -> None:
        """Consume the context, raising ``CompileError`` if anything was recorded."""
        if self._diagnostics is None:
            raise RuntimeError("diagnostic context has already been checked")
        diagnostics, self._diagnostics = self._diagnostics, None
        if diagnostics:
            raise CompileError(diagnostics)
