"""Error taxonomy of the service and the per-operation recovery boundary."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Optional

from fastapi import status

from products_api.core.logging import get_logger

logger = get_logger(__name__)


class ServiceError(Exception):
    """Base error; ``message`` is always safe to return to the client."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "unexpected error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, messages: List[str]) -> None:
        self.messages = list(messages)
        super().__init__(", ".join(self.messages))


class MalformedRequestError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "you must send information in the request body"


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "product not found"


class StorageError(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "storage error"


@contextmanager
def error_boundary(message: str) -> Iterator[None]:
    """
    Wrap one operation: client errors pass through untouched, anything else is
    logged with its traceback and turned into a StorageError carrying ``message``.
    """
    try:
        yield
    except (ValidationError, MalformedRequestError, NotFoundError):
        raise
    except Exception as e:  # noqa: BLE001
        logger.exception(message)
        raise StorageError(message) from e
