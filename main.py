#!/usr/bin/env python3
"""
Main entry point for the Examupdt portal API
Modular FastAPI application over a PostgreSQL record store
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Load environment variables
load_dotenv()

from examupdt.config import Settings
from examupdt.errors import BulkPartialFailure, ExamupdtError, ValidationError
from examupdt.routers import admin, auth, contact, health, jobs, notes, posts, questions, results, videos
from examupdt.services.auth_service import AuthService
from db_service import create_database_service


def configure_logging(settings: Settings) -> None:
    """Configure logging with DEBUG support"""
    log_level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    if settings.debug:
        logger.debug("🐛 DEBUG mode enabled - verbose logging activated")
    else:
        logger.info(f"📊 Log level set to: {logging.getLevelName(log_level)}")


logger = logging.getLogger(__name__)


def _attach_services(app: FastAPI, store, auth_service: Optional[AuthService] = None) -> None:
    settings: Settings = app.state.settings
    app.state.store = store
    app.state.auth_service = auth_service or AuthService(
        store,
        secret=settings.jwt_secret,
        expire_minutes=settings.jwt_expire_minutes,
        algorithm=settings.jwt_algorithm,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    settings: Settings = app.state.settings
    owns_store = getattr(app.state, 'store', None) is None

    # Startup
    logger.info("🚀 Starting Examupdt portal API")
    if owns_store:
        try:
            _attach_services(app, create_database_service(settings))
            logger.info("✅ Database initialization completed")
        except Exception as e:
            logger.error(f"❌ Database initialization failed: {str(e)}")
            raise

    if settings.admin_email and settings.admin_password:
        await app.state.auth_service.ensure_admin(settings.admin_email, settings.admin_password)

    yield

    # Shutdown
    logger.info("🛑 Shutting down Examupdt portal API")
    if owns_store:
        try:
            app.state.store.close_connections()
            logger.info("✅ Database connections closed")
        except Exception as e:
            logger.error(f"❌ Database shutdown error: {str(e)}")


def _error_body(error: ExamupdtError) -> dict:
    body = {'success': False, 'error': error.message}
    if isinstance(error, ValidationError) and error.missing:
        body['missing'] = error.missing
    if isinstance(error, BulkPartialFailure):
        body.update({
            'deleted': len(error.outcome.succeeded),
            'failed': len(error.outcome.failed),
            'failed_ids': error.outcome.failed,
        })
    return body


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ExamupdtError)
    async def handle_examupdt_error(request: Request, exc: ExamupdtError):
        if exc.status_code >= 500:
            logger.error(f"❌ {request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.warning(f"⚠️ {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        logger.warning(f"⚠️ Invalid request to {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=400,
            content={'success': False, 'error': ValidationError.default_message},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.error(f"❌ Unhandled error on {request.method} {request.url.path}: {str(exc)}")
        return JSONResponse(status_code=500, content={'success': False, 'error': "Internal server error"})


def create_app(
    settings: Optional[Settings] = None,
    store=None,
    auth_service: Optional[AuthService] = None,
) -> FastAPI:
    """
    Build the application. A store passed in is used as-is (tests); otherwise
    the lifespan opens the PostgreSQL pool and closes it on shutdown.
    """
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Examupdt Portal API",
        description="University updates portal: announcements, results, notes, questions, jobs and videos",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = None
    if store is not None:
        _attach_services(app, store, auth_service)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(posts.router)
    app.include_router(results.router)
    app.include_router(notes.router)
    app.include_router(questions.router)
    app.include_router(jobs.jobs_router)
    app.include_router(jobs.internships_router)
    app.include_router(jobs.openings_router)
    app.include_router(videos.router)
    app.include_router(contact.router)
    app.include_router(admin.router)
    return app


settings = Settings.from_env()
configure_logging(settings)
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn
    port = settings.port
    logger.info(f"🚀 Starting Examupdt portal API on port {port}")
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=port,
        reload=False
    )
