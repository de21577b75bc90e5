"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from gitbattle.api import compare, github, health, leaderboard, scoring
from gitbattle.config import settings
from gitbattle.core.logging import setup_logging
from gitbattle.core.tracing import TracingContext
from gitbattle.database.mongo import ensure_indexes, get_database
from gitbattle.exceptions import BattleError, RateLimitError
from gitbattle.middleware.error_codes import ErrorCode, get_error_code

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        ensure_indexes(get_database())
    except PyMongoError as exc:  # pragma: no cover - best effort at startup
        logger.warning("Skipping index creation: %s", exc)
    yield


app = FastAPI(
    title="GitHub Battle API",
    description="Compare two GitHub users and keep a leaderboard of the results",
    version=settings.APP_VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def correlation_id_middleware(request: Request, call_next):
    correlation_id = request.headers.get("x-request-id") or TracingContext.generate_correlation_id()
    TracingContext.set(correlation_id=correlation_id)
    try:
        response = await call_next(request)
    finally:
        TracingContext.clear()
    response.headers["X-Request-ID"] = correlation_id
    return response


def _error_body(message: str, code: ErrorCode, details: str | None = None) -> dict:
    body = {"error": message, "code": code.value}
    if settings.DEBUG and details:
        body["details"] = details
    return body


@app.exception_handler(BattleError)
async def battle_error_handler(request: Request, exc: BattleError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.details or exc.message}")
    headers = {}
    if isinstance(exc, RateLimitError) and exc.retry_after is not None:
        headers["Retry-After"] = str(int(exc.retry_after))
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.code, exc.details),
        headers=headers,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail), get_error_code(exc.status_code)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content=_error_body("Invalid request", ErrorCode.VALIDATION_ERROR, str(exc.errors())),
    )


@app.exception_handler(PyMongoError)
async def database_error_handler(request: Request, exc: PyMongoError):
    logger.error(f"{request.method} {request.url.path} database error: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=_error_body("Database operation failed", ErrorCode.INTERNAL_ERROR, str(exc)),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"{request.method} {request.url.path} unhandled error: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=_error_body("Internal server error", ErrorCode.INTERNAL_ERROR, repr(exc)),
    )


app.include_router(health.router, prefix="/api", tags=["Health"])
app.include_router(compare.router, prefix="/api")
app.include_router(leaderboard.router, prefix="/api")
app.include_router(scoring.router, prefix="/api")
app.include_router(github.router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "GitHub Battle API",
        "version": settings.APP_VERSION,
        "docs": "/api/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("gitbattle.main:app", host="0.0.0.0", port=8000, reload=True)
