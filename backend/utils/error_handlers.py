import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError, SQLAlchemyError, TimeoutError as PoolTimeoutError

from services.errors import InternalError, ShopError, UnavailableError

logger = logging.getLogger(__name__)


def _error_response(exc: ShopError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def register_error_handlers(app: FastAPI):
    """Log first, then answer. 5xx answers never expose the underlying cause."""

    @app.exception_handler(ShopError)
    async def shop_error_handler(request: Request, exc: ShopError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
        else:
            logger.warning("%s %s rejected (%s): %s", request.method, request.url.path, exc.status_code, exc.message)
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("%s %s invalid payload: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("%s %s storage error", request.method, request.url.path, exc_info=exc)
        if isinstance(exc, (OperationalError, PoolTimeoutError)):
            return _error_response(UnavailableError(str(exc)))
        return _error_response(InternalError(str(exc)))
