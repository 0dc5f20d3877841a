import logging

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse

from app.schemas.sche_base import ResponseSchemaBase

logger = logging.getLogger(__name__)


class CustomException(Exception):
    http_code: int
    code: str
    message: str

    def __init__(self, http_code: int = None, code: str = None, message: str = None):
        self.http_code = http_code if http_code else 500
        self.code = code if code else str(self.http_code)
        self.message = message
        super().__init__(message)


class NotificationError(Exception):
    """Raised by a notifier client when a message could not be delivered."""

    def __init__(self, channel: str, message: str):
        self.channel = channel
        self.message = message
        super().__init__(f"{channel}: {message}")


async def http_exception_handler(request: Request, exc: CustomException):
    logger.info(f"{request.method} {request.url.path} -> {exc.http_code} {exc.message}")
    return JSONResponse(
        status_code=exc.http_code,
        content=jsonable_encoder(ResponseSchemaBase().custom_response(False, exc.message or '')),
    )
