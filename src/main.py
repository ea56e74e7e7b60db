import logging
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.auth.routers import router as auth_router
from src.config.database import upgrade_database
from src.config.logging import setup_logging
from src.config.settings import settings
from src.healthz.router import router as healthz_router
from src.participants.routers import admin_router as participants_admin_router
from src.participants.routers import router as participants_router
from src.wishes.routers import admin_router as wishes_admin_router
from src.wishes.routers import router as wishes_router

setup_logging()
logger = logging.getLogger(__name__)

STORE_UNAVAILABLE_MESSAGE = "Không thể tải dữ liệu. Vui lòng thử lại!"
CONFLICT_MESSAGE = "Dữ liệu đã tồn tại hoặc đã thay đổi. Vui lòng kiểm tra lại!"


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        await upgrade_database()
    yield


if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        profiles_sample_rate=settings.SENTRY_PROFILES_SAMPLE_RATE,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(transaction_style="endpoint"),
        ],
        send_default_pii=False,
    )

app = FastAPI(
    title=settings.app_name,
    description="API for graduation invitations: RSVPs, wishes and the organizer dashboard",
    version=settings.app_version,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(IntegrityError)
async def conflict_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    # A constraint rejected the write, retrying the same request cannot succeed
    logger.warning("Constraint violation on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(status_code=409, content={"detail": CONFLICT_MESSAGE})


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # No retry here, the client shows the message and the user retries
    logger.exception("Store error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=503, content={"detail": STORE_UNAVAILABLE_MESSAGE})


# Include routers
app.include_router(healthz_router, prefix="/healthz", tags=["Healthz"])
app.include_router(auth_router, tags=["Auth"])
app.include_router(participants_router, tags=["RSVP"])
app.include_router(wishes_router, tags=["Wishes"])
app.include_router(participants_admin_router, tags=["Admin"])
app.include_router(wishes_admin_router, tags=["Admin"])


@app.get("/", tags=["Root"])
async def root():
    return {"message": "Welcome to the Graduation Invitation API"}
