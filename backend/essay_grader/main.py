import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from . import __version__
from .config import Settings, get_settings
from .db.session import create_schema, get_engine
from .errors import StorageError
from .essay_routes import router as essay_router
from .api_models import APIEnvelope
from .legacy_routes import INVALID_REQUEST_MESSAGE, envelope_response
from .legacy_routes import router as legacy_router
from .logging_config import configure_logging
from .result_routes import router as result_router
from .seed import seed_essay_tests


configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger.info("Essay grader starting (environment=%s)", settings.environment)
    try:
        if settings.auto_create_schema:
            create_schema()
            logger.info("Database schema created")
        if settings.seed_on_startup:
            seed_essay_tests()
    except (RuntimeError, SQLAlchemyError, StorageError) as exc:
        logger.error("Database unavailable during startup; continuing without seed data: %s", exc)
    yield


settings_snapshot = get_settings()
app = FastAPI(title="Essay Grader Backend", version=__version__, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings_snapshot.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(essay_router)
app.include_router(result_router)
app.include_router(legacy_router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    path = request.url.path
    if path.startswith("/api/") and not path.startswith("/api/v1/"):
        return envelope_response(status.HTTP_400_BAD_REQUEST, INVALID_REQUEST_MESSAGE)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "リクエストの形式が正しくありません", "errors": jsonable_encoder(exc.errors())},
    )


@app.get("/health", response_model=APIEnvelope, response_model_exclude_none=True)
def legacy_health() -> APIEnvelope:
    return APIEnvelope(
        success=True,
        message="サーバーは正常に動作しています",
        data={"status": "healthy", "service": "essay-test-backend"},
    )


@app.get("/healthz")
def health(settings: Settings = Depends(get_settings)) -> Dict[str, str]:
    return {"status": "ok", "environment": settings.environment}


@app.get("/healthz/database")
def database_health() -> Dict[str, Any]:
    try:
        engine = get_engine()
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except (RuntimeError, SQLAlchemyError) as exc:
        logger.error("Database health check failed: %s", exc)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return {"status": "ok", "dialect": engine.dialect.name, "pool": engine.pool.status()}
