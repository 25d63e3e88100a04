"""
Error types raised by the analysis pipeline and the handlers that render
them as JSON responses.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    """Fatal startup configuration problem."""


class RealCheckError(Exception):
    status_code = 500
    message = "Failed to analyze image due to an internal server error."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message

    def to_response(self) -> Dict[str, Any]:
        return {"error": self.message}


class MissingInput(RealCheckError):
    status_code = 400
    message = "Missing imageBase64 in request body."


class MalformedInput(RealCheckError):
    status_code = 400
    message = "Invalid base64 format received."


class RemoteCallFailure(RealCheckError):
    """The model call itself failed (network, auth, quota...)."""

    status_code = 500

    def __init__(self, message: Optional[str] = None, details: Optional[str] = None):
        super().__init__(message)
        self.details = details

    def to_response(self) -> Dict[str, Any]:
        body = super().to_response()
        if self.details:
            body["details"] = self.details
        return body


class UnparsableModelOutput(RealCheckError):
    status_code = 500
    message = "Analysis completed but model output was unparsable."

    def __init__(self, model_output: Optional[str] = None, message: Optional[str] = None):
        super().__init__(message)
        self.model_output = model_output

    def to_response(self) -> Dict[str, Any]:
        body = super().to_response()
        body["model_output"] = self.model_output
        return body


async def realcheck_error_handler(request: Request, exc: RealCheckError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors."""
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request body.",
            "details": jsonable_encoder(exc.errors()),
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.error(f"❌ Unhandled exception on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error."},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RealCheckError, realcheck_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
