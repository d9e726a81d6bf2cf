import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from starlette.exceptions import HTTPException as StarletteHTTPException

import config
from database import build_engine, build_session_factory, check_connection, init_db
from routers import (
    auth_router,
    flats_router,
    geocode_router,
    participants_router,
    trackers_router,
    users_router,
)
from services.credential_service import CredentialService
from services.geocoding_service import Geocoder, NominatimGeocoder
from services.session_resolver import read_session
from utils.errors import AppError
from utils.route_guard import guard_decision

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("flat_tracker")


def create_app(
    engine: Optional[Engine] = None,
    session_factory: Optional[sessionmaker] = None,
    credentials: Optional[CredentialService] = None,
    geocoder: Optional[Geocoder] = None,
    create_tables: Optional[bool] = None,
) -> FastAPI:
    """
    Build the application around explicitly constructed collaborators.

    Tests pass their own engine/session factory (e.g. in-memory SQLite)
    and a fake geocoder; production uses the configured defaults.
    """
    if engine is None:
        engine = build_engine()
    if session_factory is None:
        session_factory = build_session_factory(engine)
    if create_tables is None:
        create_tables = config.AUTO_CREATE_TABLES

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not check_connection(engine):
            logger.error("Database unreachable at startup: %s", engine.url.render_as_string(hide_password=True))
        elif create_tables:
            init_db(engine)
        yield

    app = FastAPI(title="Shared Flat Tracker", lifespan=lifespan)
    app.state.session_factory = session_factory
    app.state.credentials = credentials or CredentialService()
    app.state.geocoder = geocoder or NominatimGeocoder()

    # CORS
    if config.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Error responses: {"error": message}
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected request body for %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        if exc.status_code == 404 and message == "Not Found":
            message = "Route not found"
        return JSONResponse(status_code=exc.status_code, content={"error": message})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    # Route guard: redirect unauthenticated page requests to /login and
    # authenticated visitors of /login and /register to /trackers
    @app.middleware("http")
    async def route_guard_middleware(request: Request, call_next):
        authenticated = read_session(request, app.state.credentials) is not None
        decision = guard_decision(request.url.path, authenticated)
        if not decision.passes:
            return RedirectResponse(url=str(request.url.replace(path=decision.redirect_to, query="")))
        return await call_next(request)

    app.include_router(auth_router)
    app.include_router(trackers_router)
    app.include_router(flats_router)
    app.include_router(participants_router)
    app.include_router(users_router)
    app.include_router(geocode_router)

    return app


app = create_app()

if __name__ == "__main__":
    port = int(os.getenv("PORT", config.PORT))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=config.ENVIRONMENT == "development")
