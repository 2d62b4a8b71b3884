# /eduguru/main.py

# --- Core FastAPI Imports ---
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# --- Application-specific Imports ---
from .core.errors import EduGuruError
from .core.logging_config import configure_logging
from .core.state import AppState
from .db.database import check_connection, init_database
from .routers import (
    ai_router,
    attendance_router,
    auth_router,
    classes_router,
    counseling_router,
    dashboard_router,
    import_router,
    journals_router,
    reports_router,
    scores_router,
    students_router,
    subjects_router,
    sync_router,
)
from .services import gemini_service

logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    db_connected = init_database()
    app.state.runtime = AppState(db_connected=db_connected, ai_enabled=gemini_service.is_enabled())
    if not db_connected:
        logger.warning("Running in demo mode: data endpoints will answer 503.")
    if not app.state.runtime.ai_enabled:
        logger.warning("GEMINI_API_KEY is not set: AI endpoints will answer 503.")
    yield


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="EduGuru Backend API",
    description="School administration for teachers: master data, attendance, scores, journals, counseling and an AI assistant.",
    version="1.0.0",
    lifespan=lifespan,
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info("%s %s -> %d (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


# --- Error Handlers ---
# Every error body carries an `error` string.

@app.exception_handler(EduGuruError)
async def handle_domain_error(request: Request, exc: EduGuruError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found" and request.url.path.startswith("/api"):
        return JSONResponse(status_code=404, content={"error": "API endpoint not found"})
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg", "Invalid request"))
    return JSONResponse(status_code=400, content={"error": "; ".join(messages) or "Invalid request"})


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# --- API Router Inclusion ---
app.include_router(auth_router.router, prefix="/api/auth", tags=["Auth"])
app.include_router(classes_router.router, prefix="/api/classes", tags=["Classes"])
app.include_router(students_router.router, prefix="/api/students", tags=["Students"])
app.include_router(subjects_router.router, prefix="/api/subjects", tags=["Subjects"])
app.include_router(journals_router.router, prefix="/api/journals", tags=["Journals"])
app.include_router(attendance_router.router, prefix="/api/attendance", tags=["Attendance"])
app.include_router(scores_router.router, prefix="/api/scores", tags=["Scores"])
app.include_router(counseling_router.router, prefix="/api/counseling", tags=["Counseling"])
app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(ai_router.router, prefix="/api/ai", tags=["AI Assistant"])
app.include_router(sync_router.router, prefix="/api/sync", tags=["Sync"])
app.include_router(import_router.router, prefix="/api/import", tags=["Import"])
app.include_router(reports_router.router, prefix="/api/reports", tags=["Reports"])


# --- Health Check Endpoints ---
@app.get("/health", tags=["Health Check"])
def health(request: Request):
    """Liveness/readiness probe reporting database and AI provider status."""
    state = getattr(request.app.state, "runtime", None) or AppState()
    db_status = "disconnected"
    if state.db_connected:
        db_status = "connected" if check_connection() else "error"
    return {
        "status": "ok",
        "db": db_status,
        "ai": "enabled" if state.ai_enabled else "disabled",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/api/health", tags=["Health Check"])
def api_health():
    return {"status": "ok"}
