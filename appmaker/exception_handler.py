import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger("appmaker")


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Configure structured logging for the service logger."""
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def _validation_message(error: Dict[str, Any]) -> str:
    # Prefer the raw ValueError text over pydantic's "Value error, ..." prefix
    ctx_error = (error.get("ctx") or {}).get("error")
    if ctx_error:
        return str(ctx_error)
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    message = error.get("msg", "Invalid request")
    return f"{location}: {message}" if location else message


def _jsonable_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in errors
    ]


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = list(exc.errors())
    message = _validation_message(errors[0]) if errors else "Invalid request"
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(
        status_code=422,
        content={"error": message, "details": _jsonable_errors(errors)},
    )


def install_exception_handlers(app: FastAPI) -> None:
    """Render API errors as ``{"error": message}`` bodies."""
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)


__all__ = [
    "configure_logging",
    "http_exception_handler",
    "install_exception_handlers",
    "validation_exception_handler",
]
