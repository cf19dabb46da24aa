import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from loguru import logger

from liftlog import __version__
from liftlog.api.library import exercises_router, prefs_router, templates_router
from liftlog.api.plans import router as plans_router
from liftlog.api.tracking import completions_router, sessions_router
from liftlog.config.settings import settings
from liftlog.core.logger import setup_logger
from liftlog.db.session import init_db


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Ensure database tables exist before serving requests."""
    logger.info("Ensuring database tables exist")
    init_db()
    await asyncio.sleep(0)
    yield
    logger.info("LiftLog API shutting down")


def create_app(*, create_tables: bool = True) -> FastAPI:
    """Build the FastAPI application.

    Args:
        create_tables: Run table creation on startup (disable when the caller
            manages the schema, e.g. tests on their own engine)
    """
    app = FastAPI(title="LiftLog", version=__version__, lifespan=lifespan if create_tables else None)

    app.include_router(plans_router)
    app.include_router(templates_router)
    app.include_router(sessions_router)
    app.include_router(completions_router)
    app.include_router(prefs_router)
    app.include_router(exercises_router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all HTTP requests."""
        logger.debug(f"Request: {request.method} {request.url.path}")
        response = await call_next(request)
        logger.debug(f"Response: {response.status_code} for {request.method} {request.url.path}")
        return response

    logger.info("FastAPI application initialized")
    return app


setup_logger(level=settings.log_level, log_file=settings.log_file or None, json_file=settings.log_json)
app = create_app()
