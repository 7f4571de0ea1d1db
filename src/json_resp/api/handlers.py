"""Exception handler that renders raised taxonomy cases as JSON responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from json_resp.taxonomy import JsonErrorEnum

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Convert every raised ``JsonErrorEnum`` case through its unit's response table.

    Internal cases are logged by the conversion itself; their payload never
    reaches the client.
    """

    @app.exception_handler(JsonErrorEnum)
    async def handle_json_error(_request: Request, exc: JsonErrorEnum) -> JSONResponse:
        response = exc.into_response()
        logger.debug("%s converted to a %d response", type(exc).__qualname__, response.status_code)
        return response
