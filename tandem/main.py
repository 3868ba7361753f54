"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tandem.config import settings
from tandem.database import database
from tandem.errors import ConceptError
from tandem.routers import auth, friends, goals, items, messages, posts, profile

logging.basicConfig(
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    level=settings.log_level,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events."""
    # Startup
    await database.connect()
    yield
    # Shutdown
    await database.disconnect()


app = FastAPI(
    title="Tandem API",
    description="Backend API for profiles, posts, friends, goals, items and messages",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ConceptError)
async def concept_error_handler(request: Request, exc: ConceptError) -> JSONResponse:
    """Turn concept errors into ``{"detail": message}`` responses."""
    logger.warning(
        "%s %s -> %d %s: %s",
        request.method,
        request.url.path,
        exc.status_code,
        type(exc).__name__,
        exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Include routers
app.include_router(auth.router)
app.include_router(posts.router)
app.include_router(friends.router)
app.include_router(items.router)
app.include_router(profile.router)
app.include_router(goals.router)
app.include_router(messages.router)


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {"status": "ok", "message": "Tandem API"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


def run() -> None:
    """Serve the API with uvicorn, reloading on changes in debug mode."""
    uvicorn.run(
        "tandem.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
