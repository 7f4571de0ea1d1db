"""JSON envelopes and the lowering of an IR into a response-conversion table."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel
from starlette.responses import JSONResponse

from json_resp.attrs import INTERNAL_SERVER_ERROR, ClientFacing
from json_resp.config import Settings
from json_resp.ir import Case, ErrorTaxonomyIR

internal_logger = logging.getLogger("json_resp.internal")

T = TypeVar("T")


class JsonError(BaseModel):
    """Body of every error response."""

    status: int
    code: str
    hint: str | None = None
    content: Any = None

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"status": self.status, "code": self.code}
        if self.hint is not None:
            body["hint"] = self.hint
        body["content"] = jsonable_encoder(self.content)
        return body

    def into_response(self) -> JSONResponse:
        return JSONResponse(status_code=self.status, content=self.to_body())


class JsonResponse(BaseModel, Generic[T]):
    """Success envelope: ``{"status": ..., "content": ..., "meta": ...}``."""

    status: int = 200
    content: T
    meta: Any = None

    @classmethod
    def with_content(cls, content: T, status: int = 200) -> JsonResponse[T]:
        return cls(status=status, content=content)

    def with_meta(self, meta: Any) -> JsonResponse[T]:
        return self.model_copy(update={"meta": meta})

    def into_response(self) -> JSONResponse:
        return JSONResponse(status_code=self.status, content=jsonable_encoder(self))


class ErrorValue(Protocol):
    """What the conversion table needs from a runtime error value."""

    @property
    def case_name(self) -> str: ...

    @property
    def content(self) -> Any: ...


@dataclass(frozen=True)
class ConversionRule:
    type_name: str
    case_name: str
    naive: bool
    internal: bool
    status: int
    code: str
    hint: str | None = None
    log_enabled: bool = True

    def apply(self, content: Any = None) -> JsonError:
        if self.internal:
            if self.log_enabled:
                if self.naive:
                    internal_logger.error("%s::%s", self.type_name, self.case_name)
                else:
                    internal_logger.error("%s::%s %s", self.type_name, self.case_name, content)
            return JsonError(status=self.status, code=self.code)

        return JsonError(
            status=self.status,
            code=self.code,
            hint=self.hint,
            content=None if self.naive else content,
        )


@dataclass(frozen=True)
class ResponseTable:
    type_name: str
    rules: tuple[ConversionRule, ...]

    def rule_for(self, case_name: str) -> ConversionRule:
        for rule in self.rules:
            if rule.case_name == case_name:
                return rule
        raise LookupError(f"{self.type_name} has no conversion rule for case {case_name!r}")

    def convert(self, error: ErrorValue) -> JsonError:
        return self.rule_for(error.case_name).apply(error.content)

    def into_response(self, error: ErrorValue) -> JSONResponse:
        return self.convert(error).into_response()


def _lower_case(ir: ErrorTaxonomyIR, case: Case, log_enabled: bool) -> ConversionRule:
    attrs = case.attributes
    if isinstance(attrs, ClientFacing):
        return ConversionRule(
            type_name=ir.type_name,
            case_name=case.name,
            naive=case.naive,
            internal=False,
            status=attrs.status.value,
            code=attrs.code,
            hint=attrs.hint,
        )
    return ConversionRule(
        type_name=ir.type_name,
        case_name=case.name,
        naive=case.naive,
        internal=True,
        status=INTERNAL_SERVER_ERROR.value,
        code=ir.config.internal_error_code,
        log_enabled=log_enabled,
    )


def lower_responses(ir: ErrorTaxonomyIR, settings: Settings | None = None) -> ResponseTable:
    """Build one conversion rule per case, in declaration order."""
    log_enabled = (settings or Settings()).log_internal_errors
    rules = tuple(_lower_case(ir, case, log_enabled) for case in ir.cases)
    return ResponseTable(type_name=ir.type_name, rules=rules)
