import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import models  # noqa: F401 - register tables with Base
from .config import APP_NAME, FRONTEND_URL
from .database import Base, SessionLocal, engine
from .domain.announcements.router import router as announcements_router
from .domain.locations.router import router as locations_router
from .domain.meetings.router import router as meetings_router
from .domain.timeslots.router import router as timeslots_router
from .domain.users.router import router as users_router
from .exceptions import CoffeeConnectError
from .seed import seed_locations

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

SEED_LOCATIONS = os.getenv("SEED_LOCATIONS", "true").lower() == "true"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")

    if SEED_LOCATIONS:
        db = SessionLocal()
        try:
            seed_locations(db)
        except Exception as e:
            logger.warning(f"Location seeding skipped: {e}")
        finally:
            db.close()

    yield
    logger.info("Application shutting down...")


app = FastAPI(title=f"{APP_NAME} API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(CoffeeConnectError)
async def domain_exception_handler(request: Request, exc: CoffeeConnectError):
    """Render domain errors as {"detail": ...} with their status code"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} - {exc.__class__.__name__}: {exc.detail}")
    else:
        logger.info(f"{request.method} {request.url.path} - {exc.__class__.__name__}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error": exc.__class__.__name__},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"detail": jsonable_errors(exc)})


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Validation errors without the raw exception objects pydantic attaches"""
    return [
        {key: value for key, value in error.items() if key != "ctx"} for error in exc.errors()
    ]


ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", f"{FRONTEND_URL},http://localhost:3000").split(",")

logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

app.include_router(users_router)
app.include_router(locations_router)
app.include_router(timeslots_router)
app.include_router(meetings_router)
app.include_router(announcements_router)


@app.get("/health")
async def health_check():
    return {"status": "healthy", "app": APP_NAME}
