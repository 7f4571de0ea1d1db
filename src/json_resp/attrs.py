"""Parsing of ``json_error(...)`` annotations into typed attribute sets."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from http import HTTPStatus
from typing import Any

from json_resp.diagnostics import Context

MSG_BAD_DISPOSITION = "The first attribute is required and should be either `request` or `internal`"
MSG_ONLY_ASSIGNMENTS = "Only assignments are allowed to be used in error attributes."
MSG_UNKNOWN_ATTRIBUTE = "Unknown attribute defined"
MSG_BAD_STATUS = "status should be either a number or a status constant (HTTPStatus.NOT_FOUND)"
MSG_BAD_CODE = "code should be a non-empty str"
MSG_BOTH_REQUIRED = "Both `status` and `code` should be defined."


class Disposition(str, Enum):
    REQUEST = "request"
    INTERNAL = "internal"


request = Disposition.REQUEST
internal = Disposition.INTERNAL


@dataclass(frozen=True)
class Annotation:
    """The unparsed argument list of one ``json_error(...)`` call."""

    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        parts = [repr(a) for a in self.args] + [f"{k}={v!r}" for k, v in self.kwargs.items()]
        return f"json_error({', '.join(parts)})"


def json_error(*args: Any, **kwargs: Any) -> Annotation:
    """Mark a taxonomy member as an error case.

    Meant to be used as ``Annotated`` metadata::

        NotFound: Annotated[None, json_error(request, status=404, code="not-found")]
    """
    return Annotation(args=args, kwargs=kwargs)


@dataclass(frozen=True)
class Status:
    """An HTTP status, either a literal number or a named ``HTTPStatus`` member."""

    value: int
    symbol: str | None = None

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


INTERNAL_SERVER_ERROR = Status(HTTPStatus.INTERNAL_SERVER_ERROR.value, HTTPStatus.INTERNAL_SERVER_ERROR.name)


@dataclass(frozen=True)
class ClientFacing:
    status: Status
    code: str
    hint: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class Internal:
    pass


AttributeSet = ClientFacing | Internal


def extract_disposition(token: Any) -> Disposition | None:
    if isinstance(token, Disposition):
        return token
    if isinstance(token, str):
        try:
            return Disposition(token)
        except ValueError:
            return None
    return None


def extract_status(value: Any) -> Status | None:
    if isinstance(value, HTTPStatus):
        return Status(value.value, value.name)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if not 100 <= value <= 999:
        return None
    return Status(value)


def _extract_str(value: Any, *, allow_empty: bool = True) -> str | None:
    if not isinstance(value, str):
        return None
    if not value and not allow_empty:
        return None
    return value


def parse_attributes(
    annotation: Annotation,
    span: str,
    ctxt: Context,
    *,
    suppress_redundant: bool = True,
) -> AttributeSet | None:
    """Parse one case annotation, recording every problem found in ``ctxt``.

    Returns ``None`` when the case must be left out of the IR.
    """
    mode = extract_disposition(annotation.args[0]) if annotation.args else None
    if mode is None:
        ctxt.error_spanned_by(span, MSG_BAD_DISPOSITION)
        return None

    if mode is Disposition.INTERNAL:
        return Internal()

    status: Status | None = None
    code: str | None = None
    hint: str | None = None
    description: str | None = None
    wrong_status_or_code = False

    for extra in annotation.args[1:]:
        ctxt.error_spanned_by(f"{span}({extra!r})", MSG_ONLY_ASSIGNMENTS)

    for key, value in annotation.kwargs.items():
        key_span = f"{span}.{key}"
        if key == "status":
            status = extract_status(value)
            if status is None:
                wrong_status_or_code = True
                ctxt.error_spanned_by(key_span, MSG_BAD_STATUS)
        elif key == "code":
            code = _extract_str(value, allow_empty=False)
            if code is None:
                wrong_status_or_code = True
                ctxt.error_spanned_by(key_span, MSG_BAD_CODE)
        elif key == "hint":
            hint = _extract_str(value)
            if hint is None:
                ctxt.error_spanned_by(key_span, "hint should be a str")
        elif key == "description":
            description = _extract_str(value)
            if description is None:
                ctxt.error_spanned_by(key_span, "description should be a str")
        else:
            ctxt.error_spanned_by(key_span, MSG_UNKNOWN_ATTRIBUTE)

    if status is not None and code is not None:
        return ClientFacing(status=status, code=code, hint=hint, description=description)

    if not (wrong_status_or_code and suppress_redundant):
        ctxt.error_spanned_by(span, MSG_BOTH_REQUIRED)
    return None
