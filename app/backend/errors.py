"""
Error responses

Every error leaves the API as {"error": "<message>"} so the dashboard can
show it verbatim. Validation failures are 400 rather than FastAPI's 422.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

_PYDANTIC_PREFIXES = ("Value error, ", "Assertion failed, ")


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def _strip_prefix(message: str) -> str:
    for prefix in _PYDANTIC_PREFIXES:
        if message.startswith(prefix):
            return message[len(prefix):]
    return message


def _empty_body_message(request: Optional[Request]) -> str:
    """
    Message for a request sent without a body.

    A missing body is treated like `{}`: the route's body model is validated
    against it so the client hears about the first required field.
    """
    route = request.scope.get("route") if request is not None else None
    body_field = getattr(route, "body_field", None)
    model = getattr(getattr(body_field, "field_info", None), "annotation", None)
    if model is not None and hasattr(model, "model_validate"):
        try:
            model.model_validate({})
        except ValidationError as e:
            errors = e.errors()
            if errors:
                return _strip_prefix(str(errors[0].get("msg")))
    return "request body is required"


def validation_message(exc: RequestValidationError, request: Optional[Request] = None) -> str:
    """
    Turn the first validation error into a single user-facing message.

    Path parameter failures are always reported as "invalid id"; body
    failures carry the message raised by the request model.
    """
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    first = errors[0]
    loc = tuple(first.get("loc") or ())
    if loc and loc[0] == "path":
        return "invalid id"
    if loc and loc[0] == "query":
        return f"{loc[-1]} must be an integer"
    if first.get("type") == "missing" and loc == ("body",):
        return _empty_body_message(request)

    return _strip_prefix(str(first.get("msg") or "Invalid request"))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, validation_message(exc, request))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
