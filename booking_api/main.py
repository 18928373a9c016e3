import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from . import models  # noqa: F401 - registers tables on Base.metadata
from . import __version__
from .config import ALLOWED_ORIGINS, DATABASE_URL, LOG_LEVEL
from .database import Base, build_engine, build_session_factory
from .domain.appointments.router import router as appointments_router
from .domain.auth.google import GoogleTokenVerifier
from .domain.auth.router import router as auth_router
from .domain.providers.router import router as providers_router
from .domain.service_catalog.router import router as services_router
from .domain.users.router import router as users_router
from .exception_handlers import register_exception_handlers

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("passlib").setLevel(logging.ERROR)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    Base.metadata.create_all(bind=app.state.engine, checkfirst=True)
    logger.info("Database tables ready")

    yield

    logger.info("Application shutting down...")
    app.state.engine.dispose()
    logger.info("Database connections closed")


def create_app(
    database_url: Optional[str] = None,
    google_verifier: Optional[GoogleTokenVerifier] = None,
) -> FastAPI:
    """
    Create the API application.

    Args:
        database_url: SQLAlchemy URL. Defaults to DATABASE_URL from the environment.
        google_verifier: Google ID token verifier. Defaults to one using GOOGLE_CLIENT_ID.

    The database engine is created here and disposed when the application
    shuts down; every request gets its own session from ``app.state``.
    """
    app = FastAPI(title="Booking API", version=__version__, lifespan=lifespan)

    engine = build_engine(database_url or DATABASE_URL)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.google_verifier = google_verifier or GoogleTokenVerifier()

    register_exception_handlers(app)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.debug(f"{request.method} {request.url.path} -> {response.status_code}")
        return response

    logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(providers_router)
    app.include_router(services_router)
    app.include_router(appointments_router)

    @app.get("/")
    def root():
        return {"message": "Booking API is running"}

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app


app = create_app()
