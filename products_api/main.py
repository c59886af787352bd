from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from products_api.api.routes import router as products_router
from products_api.core.config import settings
from products_api.core.db import create_tables
from products_api.core.logging import configure_logging, get_logger
from products_api.errors import MalformedRequestError, ServiceError
from products_api.middlewares.request_id import RequestIdMiddleware

configure_logging(settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.create_tables:
        create_tables()

    logger.info(
        "%s started",
        settings.app_name,
        extra={
            "env": settings.environment,
            "version": settings.app_version,
            "corsOrigins": settings.cors_origins_list(),
        },
    )
    yield


app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)

app.add_middleware(RequestIdMiddleware)

_origins = settings.cors_origins_list()
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    # Browsers reject credentials combined with a wildcard origin.
    allow_credentials="*" not in _origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-Id"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    # Only the JSON body can fail framework validation (the body is typed as Any).
    logger.info("rejected request body: %s", exc.errors())
    error = MalformedRequestError()
    return JSONResponse(status_code=error.status_code, content={"message": error.message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    # Never leak internal details to the client.
    request_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled exception", exc_info=exc, extra={"requestId": request_id})
    return JSONResponse(status_code=500, content={"message": "unexpected error"})


@app.get("/health")
def health():
    return {
        "status": "ok",
        "service": settings.app_name,
        "env": settings.environment,
        "version": settings.app_version,
    }


app.include_router(products_router)
