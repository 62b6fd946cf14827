"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api import auth, categories, comments, tasks, users
from src.config import get_settings
from src.errors import register_exception_handlers

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info(f"Starting Task Manager API ({settings.environment})")
    if not settings.github_configured:
        logger.warning("GitHub OAuth credentials are not set; GitHub login will fail")
    yield
    logger.info("Shutting down Task Manager API")


app = FastAPI(
    title="Task Manager API",
    description="API for managing tasks and user authentication",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Register routers
app.include_router(users.router)
app.include_router(auth.router)
app.include_router(tasks.router)
app.include_router(categories.router)
app.include_router(comments.router)


@app.get("/")
async def root():
    """Describe the API."""
    return {
        "message": "Welcome to Task Manager API",
        "documentation": "/docs",
        "endpoints": {
            "auth": "/api/auth",
            "users": "/api/users",
            "tasks": "/api/tasks",
            "categories": "/api/categories",
            "comments": "/api/comments",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
