"""Exception hierarchy for the json-resp compiler and its runtime helpers."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from json_resp.diagnostics import Diagnostic


class JsonRespError(Exception):
    """Base class for every error raised by json-resp itself."""


class CompileError(JsonRespError):
    """Raised once per failed unit, carrying every recorded diagnostic."""

    def __init__(self, diagnostics: Iterable[Diagnostic]) -> None:
        self.diagnostics: tuple[Diagnostic, ...] = tuple(diagnostics)
        lines = "\n".join(f"  {d}" for d in self.diagnostics)
        super().__init__(f"{len(self.diagnostics)} error(s) in json_error declarations:\n{lines}")


class ContractViolation(JsonRespError, AssertionError):
    """A call-site logic error, e.g. combining errors with different statuses."""


class TargetError(JsonRespError, LookupError):
    """Raised when a ``module:Class`` target cannot be resolved."""
