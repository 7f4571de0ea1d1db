"""Declaring error taxonomies as annotated classes.

A taxonomy is a subclass of ``JsonErrorEnum`` whose annotations are its cases::

    class AppErrors(JsonErrorEnum, internal_code="500 internal"):
        NotFound: Annotated[None, json_error(request, status=HTTPStatus.NOT_FOUND, code="not-found")]
        OddNotAllowed: Annotated[str, json_error(request, status=409, code="odd", hint="Try an even number")]
        Internal: Annotated[Exception, json_error(internal)]

The annotated type is the payload a case carries (``None`` for none). The
class is compiled when it is created; malformed declarations make the
``class`` statement raise ``CompileError``. Every case is then replaced by an
exception subclass of the taxonomy, so ``raise AppErrors.NotFound()`` and
``except AppErrors`` both work.
"""

from __future__ import annotations

import inspect
from typing import Annotated, Any, ClassVar, get_args, get_origin

from starlette.responses import JSONResponse

from json_resp.attrs import Annotation
from json_resp.compiler import CompiledUnit, compile_unit
from json_resp.config import get_settings
from json_resp.diagnostics import Diagnostic
from json_resp.errors import CompileError
from json_resp.ir import Case, RawCase, RawUnit
from json_resp.openapi import DocArtifacts
from json_resp.response import JsonError

_NONE_TYPES = (None, type(None))


def _split_hint(hint: Any) -> tuple[Any, Annotation | None]:
    if get_origin(hint) is not Annotated:
        return hint, None
    payload, *metadata = get_args(hint)
    annotation = next((m for m in metadata if isinstance(m, Annotation)), None)
    return payload, annotation


def _is_case_hint(name: str, hint: Any) -> bool:
    if name.startswith("_"):
        return False
    return hint is not ClassVar and get_origin(hint) is not ClassVar


def collect_raw_unit(cls: type, config: dict[str, Any]) -> RawUnit:
    """Read the cases of a taxonomy class from its own annotations, in order."""
    try:
        hints = inspect.get_annotations(cls, eval_str=True)
    except NameError as exc:
        raise CompileError([Diagnostic(cls.__name__, f"cannot resolve case annotations: {exc}")]) from exc
    cases = []
    for name, hint in hints.items():
        if not _is_case_hint(name, hint):
            continue
        payload, annotation = _split_hint(hint)
        cases.append(RawCase(name=name, naive=payload in _NONE_TYPES, annotation=annotation))

    return RawUnit(
        name=cls.__name__,
        annotation=Annotation(kwargs=dict(config)) if config else None,
        cases=tuple(cases),
        reserved_names=_RESERVED_NAMES,
    )


class JsonErrorEnum(Exception):
    """Base class of every error taxonomy."""

    __json_resp__: ClassVar[CompiledUnit]
    __json_case__: ClassVar[Case | None] = None
    oai: ClassVar[DocArtifacts]

    content: Any

    def __init_subclass__(cls, **config: Any) -> None:
        super().__init_subclass__()
        if "__json_case__" in cls.__dict__:
            return

        compiled = compile_unit(collect_raw_unit(cls, config), get_settings())
        cls.__json_resp__ = compiled
        cls.oai = compiled.openapi
        for case in compiled.ir.cases:
            setattr(cls, case.name, _make_case_class(cls, case))

    def __init__(self, *args: Any) -> None:
        case = type(self).__json_case__
        if case is None:
            raise TypeError(f"{type(self).__qualname__} is an error taxonomy; raise one of its cases instead")
        if case.naive and args:
            raise TypeError(f"{type(self).__qualname__} carries no payload")
        if not case.naive and len(args) != 1:
            raise TypeError(f"{type(self).__qualname__} takes exactly one payload value")

        self.content = args[0] if args else None
        super().__init__(*args)

    @property
    def case_name(self) -> str:
        case = type(self).__json_case__
        assert case is not None
        return case.name

    def __str__(self) -> str:
        case = type(self).__json_case__
        assert case is not None
        text = f"{self.__json_resp__.ir.type_name}::{case.name}"
        if not case.naive:
            text = f"{text} {self.content}"
        return text

    def to_json_error(self) -> JsonError:
        return self.__json_resp__.responses.convert(self)

    def into_response(self) -> JSONResponse:
        return self.__json_resp__.responses.into_response(self)


# Case classes and doc artifacts are reached by attribute, so neither API may be shadowed.
_RESERVED_NAMES = frozenset(
    name for api in (JsonErrorEnum, DocArtifacts) for name in dir(api) if not name.startswith("_")
) | {"content", "oai", "type_name"}


def _make_case_class(unit: type[JsonErrorEnum], case: Case) -> type[JsonErrorEnum]:
    namespace = {
        "__json_case__": case,
        "__module__": unit.__module__,
        "__qualname__": f"{unit.__qualname__}.{case.name}",
    }
    return type(case.name, (unit,), namespace)
