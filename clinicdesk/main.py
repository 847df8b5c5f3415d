import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Import models so the documents table is registered with SQLAlchemy Base
from . import models  # noqa: F401
from .config import ALLOWED_ORIGINS, GUEST_MODE_ENABLED, GUEST_OWNER_ID
from .database import Base, engine
from .domain.analytics.router import router as analytics_router
from .domain.analytics.snapshot import SnapshotCache
from .domain.appointments.router import router as appointments_router
from .domain.clients.router import router as clients_router
from .domain.staff.router import router as staff_router
from .domain.statuses.router import router as statuses_router
from .domain.treatments.router import router as treatments_router
from .persistence import DocumentNotFoundError, MemoryDocumentStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


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
            raise

    if GUEST_MODE_ENABLED:
        app.state.guest_store = MemoryDocumentStore.seeded(GUEST_OWNER_ID)
    else:
        logger.info("Guest mode disabled")
    app.state.snapshots = SnapshotCache()

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="ClinicDesk API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Convert 422 validation errors from HTTPBearer to 401 authentication errors
    when the issue is with the Authorization header
    """
    for error in exc.errors():
        if error.get("loc") and "authorization" in str(error.get("loc")).lower():
            logger.warning(
                f"Authentication failed for {request.url.path}: Missing or invalid Authorization header"
            )
            return JSONResponse(
                status_code=401,
                content={
                    "detail": "Not authenticated. Please provide a valid Bearer token in the Authorization header."
                },
            )

    # For other validation errors, return 422 as normal
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(DocumentNotFoundError)
async def document_not_found_handler(request: Request, exc: DocumentNotFoundError):
    logger.warning(f"⚠️ {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    logger.warning(f"⚠️ {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise
    duration_ms = (time.time() - start) * 1000
    logger.info(f"{request.method} {request.url.path} - {response.status_code} ({duration_ms:.0f}ms)")
    return response


# Log CORS configuration for debugging
logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
    expose_headers=["*"],
)

# Routes
app.include_router(clients_router)
app.include_router(treatments_router)
app.include_router(staff_router)
app.include_router(statuses_router)
app.include_router(appointments_router)
app.include_router(analytics_router)


@app.get("/")
def root():
    return {"message": "ClinicDesk API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}
