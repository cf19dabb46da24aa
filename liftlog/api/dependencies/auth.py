"""FastAPI identity dependency.

Authentication happens upstream (auth proxy / identity provider bridge). This
dependency only reads the verified user id it forwards.
"""

from fastapi import HTTPException, Request, status
from loguru import logger

from liftlog.config.settings import settings


def get_current_user_id(request: Request) -> str:
    """FastAPI dependency returning the current user id.

    Reads the configured identity header (X-User-Id by default). When it is
    absent, falls back to DEV_USER_ID if configured.

    Raises:
        HTTPException: 401 if no identity is available
    """
    user_id = (request.headers.get(settings.user_id_header) or "").strip()
    if user_id:
        return user_id

    if settings.dev_user_id:
        logger.debug(f"No identity header on {request.url.path}, using DEV_USER_ID")
        return settings.dev_user_id

    logger.warning(f"Unauthenticated request to {request.url.path}")
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not logged in")
