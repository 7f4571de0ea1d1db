"""A small demo application showing a taxonomy wired into FastAPI."""

from __future__ import annotations

from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from json_resp.api.docs import register_openapi
from json_resp.api.handlers import register_error_handlers
from json_resp.attrs import internal, json_error, request
from json_resp.openapi import combine_errors, merge_responses
from json_resp.response import JsonResponse
from json_resp.taxonomy import JsonErrorEnum


class DemoErrors(JsonErrorEnum, internal_code="500 internal"):
    NotFound: Annotated[
        None,
        json_error(request, status=HTTPStatus.NOT_FOUND, code="404 not-found", description="The page does not exist"),
    ]
    NotFound2: Annotated[None, json_error(request, status=HTTPStatus.NOT_FOUND, code="4042 not-found")]
    OddNotAllowed: Annotated[
        str,
        json_error(request, status=HTTPStatus.CONFLICT, code="received-odd-number", hint="Try an even number"),
    ]
    InternalError: Annotated[None, json_error(internal)]
    # Only one InternalError schema is documented however many internal cases exist
    AnotherInternalError: Annotated[ValueError, json_error(internal)]


class HelloResponse(BaseModel):
    number: int
    string: str


NOT_FOUND_EITHER = combine_errors(DemoErrors.oai.NotFound, DemoErrors.oai.NotFound2)

router = APIRouter()


@router.get(
    "/numbers/{number}",
    response_model=JsonResponse[str],
    responses=merge_responses(DemoErrors.oai.OddNotAllowed, DemoErrors.oai.InternalError),
)
async def number(number: int) -> JsonResponse[str]:
    """Even numbers are welcome, 7 breaks the server, other odd numbers are refused."""
    if number % 2 == 0:
        return JsonResponse.with_content("Welcome to the club")
    if number == 7:
        raise DemoErrors.InternalError()
    raise DemoErrors.OddNotAllowed("We don't accept odd numbers around here")


@router.get(
    "/{name}",
    response_model=JsonResponse[HelloResponse],
    responses=merge_responses(NOT_FOUND_EITHER, DemoErrors.oai.InternalError),
)
async def index(name: str) -> JsonResponse[HelloResponse] | JSONResponse:
    if name == "500":
        raise DemoErrors.InternalError()
    if name == "501":
        raise DemoErrors.AnotherInternalError(ValueError("Error"))
    if name == "404":
        raise DemoErrors.NotFound()
    if name == "4042":
        raise DemoErrors.NotFound2()

    if name == "meta":
        created = JsonResponse.with_content(HelloResponse(number=1, string=name), status=201)
        return created.with_meta(HelloResponse(number=2, string=name)).into_response()
    return JsonResponse.with_content(HelloResponse(number=1, string=name))


def create_app() -> FastAPI:
    app = FastAPI(
        title="json-resp demo",
        description="Error taxonomy compiled into JSON responses and OpenAPI documentation.",
        version="0.1.0",
    )
    register_error_handlers(app)
    app.include_router(router)
    register_openapi(app, DemoErrors, NOT_FOUND_EITHER)
    return app
