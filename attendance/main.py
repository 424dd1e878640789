"""FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from attendance.config import settings
from attendance.database import Base, engine

# Import routers
from attendance.routers import users, coordinators, events, enrollments, keywords, checkin, certificates

# Import all models so Base.metadata knows about them
from attendance.models.user import User                          # noqa: F401
from attendance.models.coordinator import Coordinator            # noqa: F401
from attendance.models.event import Event                        # noqa: F401
from attendance.models.day_keyword import DayKeyword             # noqa: F401
from attendance.models.enrollment import Enrollment              # noqa: F401
from attendance.models.attendance_record import AttendanceRecord  # noqa: F401
from attendance.models.certificate import Certificate            # noqa: F401

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Event Attendance & Certificates",
    description="Geofenced, keyword-gated attendance check-in and certificate issuance for campus events",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(coordinators.router, prefix="/api/coordinators", tags=["Coordinators"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(enrollments.router, prefix="/api/events", tags=["Enrollments"])
app.include_router(keywords.router, prefix="/api/events", tags=["Keywords"])
app.include_router(checkin.records_router, prefix="/api/events", tags=["Check-in"])
app.include_router(checkin.router, prefix="/api/checkin", tags=["Check-in"])
app.include_router(certificates.router, prefix="/api", tags=["Certificates"])


@app.exception_handler(SQLAlchemyError)
def storage_error_handler(request: Request, exc: SQLAlchemyError):
    """Storage failures are reported as such, never as a domain rejection."""
    logger.error("Storage error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
