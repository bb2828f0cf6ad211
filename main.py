import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from assignmentpro.config import settings
from assignmentpro.database import Base, engine
from assignmentpro.routers import (
    admin, announcements, assignments, auth, available_assignments, balance, departments, makers, reports,
)
from assignmentpro.services.file_storage import file_storage
from assignmentpro.utils.exceptions import AppError

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.APP_NAME} API...")
    Base.metadata.create_all(bind=engine)
    yield
    logger.info(f"Shutting down {settings.APP_NAME} API...")

app = FastAPI(title=f"{settings.APP_NAME} API", lifespan=lifespan)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail, "reason": exc.reason})

@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error", "reason": "FATAL"})

# Route registration
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(departments.router, prefix="/departments", tags=["Departments"])
app.include_router(makers.router, prefix="/makers", tags=["Makers"])
app.include_router(assignments.router, prefix="/assignments", tags=["Assignments"])
app.include_router(available_assignments.router, prefix="/available-assignments", tags=["Assignments"])
app.include_router(admin.router, prefix="/admin", tags=["Admin"])
app.include_router(balance.router, prefix="/balance", tags=["Balance"])
app.include_router(announcements.router, prefix="/announcements", tags=["Announcements"])
app.include_router(reports.router, prefix="/reports", tags=["Reports"])

# Stored screenshots and attachments are served verbatim
app.mount("/uploads", StaticFiles(directory=str(file_storage.upload_dir)), name="uploads")

# Root route
@app.get("/")
def read_root():
    return {"message": f"{settings.APP_NAME} API"}

@app.get("/health")
def health():
    return {"status": "ok"}
