"""
# `empoweru/main.py` - Application entry point

## Overview
Creates the FastAPI application: CORS, routers, exception handlers and the lifespan that
owns the Firebase app and the Firestore client.

## Routers
- `/jwt`
- `/users`, `/role/verify`
- `/scholarships`, `/scholarship`, `/count/scholarships`, `/adminOrMod/scholarship`
- `/appliedScholarships`
- `/reviews`, `/featured/reviews`
- `/create-payment-intent`, `/payments`
- `/statistics`

## Errors
`HTTPException`s are returned as `{"message": detail}`; any other exception is logged and
answered with `500 {"message": "Internal Server Error"}`.
"""
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from empoweru.config import get_settings
from empoweru.database import close_firestore, init_firestore
from empoweru.routers import (
    applied_scholarships,
    auth,
    payments,
    reviews,
    scholarships,
    statistics,
    users,
)

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level)
    try:
        app.state.firebase_app, app.state.db = init_firestore(settings)
    except Exception:
        logger.exception("Could not initialise Firebase/Firestore")
        raise
    logger.info("EmpowerU server started")
    yield
    close_firestore(app.state.firebase_app, app.state.db)
    app.state.db = None


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Internal Server Error"})


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="EmpowerU API",
        description="Backend API for the EmpowerU scholarship management application.",
        version="1.0.0",
        debug=settings.debug,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(scholarships.router)
    app.include_router(applied_scholarships.router)
    app.include_router(reviews.router)
    app.include_router(payments.router)
    app.include_router(statistics.router)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    def root():
        return "EmpowerU Server Running"

    return app


app = create_app()

# Run the app directly with uvicorn (for development)
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("empoweru.main:app", host="0.0.0.0", port=5000, reload=True)
