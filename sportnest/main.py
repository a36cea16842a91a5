import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import sportnest.models
from sportnest.api.v1.endpoints import auth, events, reports
from sportnest.core.config import CORS_ORIGINS
from sportnest.core.errors import DomainError, ErrorCode
from sportnest.core.logging_config import setup_logging
from sportnest.db.session import ensure_collections_exist

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="SportNest",
    description="Backend for SportNest club events: submission, moderation, registration and reports",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def startup_event():
    # Ensure collections exist during application startup
    await ensure_collections_exist()

@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc}")
    content = {"detail": exc.message, "code": exc.code.value}
    errors = getattr(exc, "errors", None)
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=exc.status_code, content=content)

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Malformed request bodies and params share the domain validation shape
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        errors.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    logger.info(f"{request.method} {request.url.path} -> 400 malformed request: {errors}")
    return JSONResponse(
        status_code=400,
        content={"detail": " • ".join(errors), "code": ErrorCode.VALIDATION_FAILED.value, "errors": errors},
    )

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})

@app.get("/health", tags=["Health"])
async def health_check():
    return {"status": "healthy", "app_name": "SportNest"}

app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(events.router, prefix="/events", tags=["Events"])
app.include_router(reports.router, prefix="/reports/events", tags=["Event Reports"])
