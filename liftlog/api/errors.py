"""Translation of store errors into HTTP responses."""

from collections.abc import Generator
from contextlib import contextmanager

from fastapi import HTTPException, status
from loguru import logger

from liftlog.errors import NotFoundError, StorageError, ValidationError


@contextmanager
def http_errors(failure_detail: str) -> Generator[None, None, None]:
    """Map LiftLog errors raised in the block onto HTTPExceptions.

    Args:
        failure_detail: Generic message returned for storage failures

    Raises:
        HTTPException: 404 for NotFoundError, 400 for ValidationError,
            500 with failure_detail for StorageError
    """
    try:
        yield
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except StorageError as e:
        logger.error(f"{failure_detail}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=failure_detail,
        ) from e
