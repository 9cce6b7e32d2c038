"""Main FastAPI application for the video library API."""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

import config
from api.routes import router as admin_router
from api.video_library import router as video_library_router
from services.cache import cache, run_periodic_cleanup

# Configure logging
logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run the expired-entry sweep for the lifetime of the server."""
    cleanup_task = None
    if config.CACHE_CLEANUP_INTERVAL_SECONDS > 0:
        cleanup_task = asyncio.create_task(
            run_periodic_cleanup(cache, config.CACHE_CLEANUP_INTERVAL_SECONDS)
        )
        logger.info(f"Cache cleanup every {config.CACHE_CLEANUP_INTERVAL_SECONDS:g}s")
    try:
        yield
    finally:
        if cleanup_task is not None:
            cleanup_task.cancel()
            with suppress(asyncio.CancelledError):
                await cleanup_task


# Create FastAPI app
app = FastAPI(
    title="Video Library API",
    description="Backend API for the video library with an in-memory TTL cache",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware - allow localhost dev servers and configured origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(admin_router)
app.include_router(video_library_router)

@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "Video Library API is running"}

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=config.PORT, reload=True)
