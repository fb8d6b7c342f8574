import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings
from app.database import Database
from app.errors import register_exception_handlers
from app.routers import auth, frontend, health, tasks
from app.utils.auth import PasswordHasher, TokenService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database = app.state.database
    try:
        database.create_all()
    except Exception:
        # no store, no service: abort startup
        logger.critical("Could not connect to the database", exc_info=True)
        raise
    app.state.started_at = time.monotonic()
    logger.info("Task manager started")
    yield
    database.dispose()
    logger.info("Task manager stopped")


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(title="Task Manager", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = Database(settings.database_url)
    app.state.hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.tokens = TokenService(
        settings.secret_key,
        algorithm=settings.algorithm,
        lifetime=settings.token_lifetime,
    )
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # API routers
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(tasks.router)
    # must stay last: catches every GET the API does not handle
    app.include_router(frontend.router)
    return app
