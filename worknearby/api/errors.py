from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from worknearby.core import exceptions as domain_exceptions


def _http_exception_handler(_: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def _validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    # One short message instead of FastAPI's per-field list
    return JSONResponse(status_code=422, content={"detail": "Unprocessable Entity"})


def _unhandled_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


def _domain_error_handler(status_code: int, default_detail: str):
    def _handler(_: Request, exc: domain_exceptions.DomainError) -> JSONResponse:
        detail = str(exc) or default_detail
        return JSONResponse(status_code=status_code, content={"detail": detail})

    return _handler


_DOMAIN_STATUS = (
    (domain_exceptions.ValidationError, 400, "Bad Request"),
    (domain_exceptions.NotFoundError, 404, "Not Found"),
    (domain_exceptions.ConflictError, 409, "Conflict"),
    (domain_exceptions.StorageError, 503, "Service Unavailable"),
)


def install(app) -> None:
    app.add_exception_handler(HTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    for exc_type, status_code, default_detail in _DOMAIN_STATUS:
        app.add_exception_handler(exc_type, _domain_error_handler(status_code, default_detail))
    app.add_exception_handler(Exception, _unhandled_exception_handler)
