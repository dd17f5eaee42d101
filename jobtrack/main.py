"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

import logging
import time
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session, sessionmaker

from jobtrack.api.v1 import router as v1_router
from jobtrack.core.config import Settings, get_settings
from jobtrack.core.database import build_engine, build_session_factory
from jobtrack.core.errors import register_exception_handlers
from jobtrack.core.middleware import RequestAuthenticator
from jobtrack.core.security import PasswordHasher, TokenCodec

logger = logging.getLogger(__name__)


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"


def utc_formatter() -> logging.Formatter:
    """Formatter whose timestamps are UTC, matching the Z in LOG_DATEFMT."""
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
    formatter.converter = time.gmtime
    return formatter


def configure_logging(settings: Settings) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(utc_formatter())
    logging.basicConfig(level=settings.LOG_LEVEL, handlers=[handler])


def create_app(
    settings: Settings | None = None,
    session_factory: sessionmaker[Session] | None = None,
) -> FastAPI:
    """
    Build the application from explicit settings.

    The signing secret, token lifetime and bcrypt cost are handed to the
    codec and hasher here; nothing reads them from module globals.
    """
    settings = settings or get_settings()
    if session_factory is None:
        session_factory = build_session_factory(
            build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
        )

    app = FastAPI(
        title="Jobtrack API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.password_hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    app.state.token_codec = TokenCodec(
        secret=settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        ttl=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    )

    app.add_middleware(
        RequestAuthenticator,
        token_codec=app.state.token_codec,
        session_factory=session_factory,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Jobtrack API"}

    if settings.APP_ENV == "prod" and settings.JWT_SECRET.get_secret_value() == "change-me-in-production":
        logger.warning("JWT_SECRET is the built-in default; set a real secret in production")
    return app


def build_default_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)
    return create_app(settings)


app = build_default_app()
