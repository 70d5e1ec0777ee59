# api/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import books, borrow_records, users
from api.schemas.common import ErrorResponse
from core.config import settings
from core.errors import ConflictError, LibraryError, NotFoundError, StorageError, ValidationError
from core.logging_config import setup_logging
from core.sa.database import Database

logger = logging.getLogger(__name__)

STATUS_CODES = {
    NotFoundError: 404,
    ConflictError: 409,
    ValidationError: 400,
    StorageError: 503,
}

def status_for(exc: LibraryError) -> int:
    for error_type, status_code in STATUS_CODES.items():
        if isinstance(exc, error_type):
            return status_code
    return 500

async def handle_library_error(request: Request, exc: LibraryError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected ({exc.code}): {exc.message}")
    body = ErrorResponse(code=exc.code, message=exc.message)
    return JSONResponse(status_code=status_code, content=body.model_dump())

async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Report invalid request input in the same shape as service errors
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        message = error.get("msg", "invalid value").removeprefix("Value error, ")
        problems.append(f"{location}: {message}" if location else message)
    message = "; ".join(problems) or "Invalid request"
    logger.warning(f"{request.method} {request.url.path} rejected ({ValidationError.code}): {message}")
    body = ErrorResponse(code=ValidationError.code, message=message)
    return JSONResponse(status_code=400, content=body.model_dump())

def create_app(database: Optional[Database] = None) -> FastAPI:
    """Build the API around a Database.

    Args:
        database: Database to serve; built from settings (DATABASE_URL) when None

    Returns:
        Configured FastAPI application
    """
    setup_logging(settings.log_level, settings.log_file)
    db = database or Database()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Initialize database schema on startup
        db.init_db()
        logger.info(f"Serving {settings.project_name} on {db.engine.url.render_as_string(hide_password=True)}")
        try:
            yield
        finally:
            db.dispose()

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.database = db

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(LibraryError, handle_library_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)

    app.include_router(books.router)
    app.include_router(users.router)
    app.include_router(borrow_records.router)

    @app.get("/")
    async def root():
        return {"message": settings.project_name, "version": settings.api_version}

    return app

app = create_app()
