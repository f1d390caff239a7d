from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.exceptions.errors import ApplicationException
from app.core.logger import get_logger

logger = get_logger("exception_handlers")


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": {"message": message}}
    )

async def application_exception_handler(request: Request, exc: ApplicationException):
    if exc.status_code >= 500:
        logger.error(f"Application error on {request.url.path}: {exc.message}")
    else:
        logger.warning(f"Application error on {request.url.path}: {exc.message}")
    return exc.to_response()

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        return error_response(404, f"Route not found: {request.url.path}")
    return error_response(exc.status_code, str(exc.detail))

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.warning(f"Validation error on {request.method} {request.url.path}: {errors}")
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid request")
    else:
        message = "Invalid request"
    return error_response(400, message)

async def generic_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.url.path}: {repr(exc)}")
    return error_response(500, "An unexpected error occurred")
