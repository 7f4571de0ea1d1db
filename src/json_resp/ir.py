"""Classified error cases and the validated intermediate representation."""

from __future__ import annotations

from dataclasses import dataclass, field

from json_resp.attrs import Annotation, AttributeSet, ClientFacing, Internal, parse_attributes
from json_resp.config import UnitConfig
from json_resp.diagnostics import Context

INTERNAL_ERROR_NAME = "InternalError"

MSG_MISSING_ATTRIBUTE = "All variants should have a `json_error` attribute"
MSG_RESERVED_NAME = f"`{INTERNAL_ERROR_NAME}` is reserved for the shared internal error documentation"
MSG_NAME_CLASH = "case name clashes with an attribute of the error taxonomy or of its documentation"


@dataclass(frozen=True)
class RawCase:
    """One declared case as handed over by the declaration front end."""

    name: str
    naive: bool
    annotation: Annotation | None


@dataclass(frozen=True)
class RawUnit:
    name: str
    annotation: Annotation | None = None
    cases: tuple[RawCase, ...] = field(default_factory=tuple)
    reserved_names: frozenset[str] = frozenset()


@dataclass(frozen=True)
class Case:
    name: str
    naive: bool
    attributes: AttributeSet

    @property
    def is_internal(self) -> bool:
        return isinstance(self.attributes, Internal)


@dataclass(frozen=True)
class ErrorTaxonomyIR:
    type_name: str
    config: UnitConfig
    cases: tuple[Case, ...]

    @property
    def client_cases(self) -> tuple[Case, ...]:
        return tuple(c for c in self.cases if isinstance(c.attributes, ClientFacing))

    @property
    def internal_cases(self) -> tuple[Case, ...]:
        return tuple(c for c in self.cases if c.is_internal)


def classify_case(raw: RawCase, unit_name: str, ctxt: Context, *, suppress_redundant: bool = True) -> Case | None:
    span = f"{unit_name}.{raw.name}"
    if raw.annotation is None:
        ctxt.error_spanned_by(span, MSG_MISSING_ATTRIBUTE)
        return None

    attributes = parse_attributes(raw.annotation, span, ctxt, suppress_redundant=suppress_redundant)
    if attributes is None:
        return None
    return Case(name=raw.name, naive=raw.naive, attributes=attributes)


def build_ir(
    type_name: str,
    config: UnitConfig,
    cases: list[Case],
    ctxt: Context,
    reserved_names: frozenset[str] = frozenset(),
) -> ErrorTaxonomyIR:
    """Assemble the IR, keeping declaration order."""
    ir = ErrorTaxonomyIR(type_name=type_name, config=config, cases=tuple(cases))
    for case in ir.cases:
        if case.name in reserved_names:
            ctxt.error_spanned_by(f"{type_name}.{case.name}", MSG_NAME_CLASH)
    if ir.internal_cases:
        for case in ir.client_cases:
            if case.name == INTERNAL_ERROR_NAME:
                ctxt.error_spanned_by(f"{type_name}.{case.name}", MSG_RESERVED_NAME)
    return ir
