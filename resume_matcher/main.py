from datetime import datetime
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resume_matcher.routers import jds, match, resumes

# Import logging and middleware
from resume_matcher.utils.logging_config import configure_for_environment, get_logger
from resume_matcher.middleware.error_handlers import (
    ExceptionHandlerMiddleware,
    RequestLoggingMiddleware,
    PerformanceMiddleware,
    register_exception_handlers,
)

# Configure logging first
configure_for_environment()
logger = get_logger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager"""
    logger.info("Resume Matcher API starting up...")

    from resume_matcher.services.db import init_indexes
    await init_indexes()

    logger.info("Resume Matcher API startup completed")

    yield

    logger.info("Resume Matcher API shutting down...")


app = FastAPI(title="Resume Matcher API", version=VERSION, lifespan=lifespan)

register_exception_handlers(app)

# Add middleware in order (LIFO - Last In, First Out)
# Exception handler should be the outermost middleware
app.add_middleware(PerformanceMiddleware, slow_request_threshold=2.0)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(ExceptionHandlerMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
@app.head("/")
async def root():
    """Root endpoint - handles both GET and HEAD requests for health checks"""
    logger.debug("Root endpoint accessed")
    return {"message": "Welcome to the Resume Matcher API", "version": VERSION, "status": "ok"}


@app.get("/health")
@app.head("/health")
async def health_check():
    return {"status": "healthy", "timestamp": datetime.utcnow().isoformat()}


app.include_router(resumes.router, prefix="/api/resumes", tags=["resumes"])
app.include_router(jds.router, prefix="/api/jds", tags=["jds"])
app.include_router(match.router, prefix="/api/match", tags=["match"])

logger.info("Resume Matcher API initialized successfully")


def serve():
    import uvicorn
    from resume_matcher.utils import settings

    uvicorn.run("resume_matcher.main:app", host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    serve()
