"""
FastAPI application entry point.

Assembles the FastAPI app with the Earth, Mars and settings routers.
"""

import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cosmoscope.api.earth_api import router as earth_router
from cosmoscope.api.mars_api import router as mars_router
from cosmoscope.api.settings_api import router as settings_router


# ============================================================================
# Logging configuration (single source of truth for all components)
# ============================================================================
LOG_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)-35s | %(message)s"
)

logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[logging.StreamHandler(sys.stdout)],
    force=True,  # Override any prior basicConfig calls
)

# Quiet noisy third-party loggers
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("openai").setLevel(logging.WARNING)


# Create FastAPI app
app = FastAPI(
    title="Cosmoscope",
    description="Conversational Earth and Mars explorer with an AI-steered map",
    version="0.1.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(earth_router)
app.include_router(mars_router)
app.include_router(settings_router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Cosmoscope",
        "version": "0.1.0",
        "contexts": {
            "earth": {"endpoints": "/api/earth"},
            "mars": {"endpoints": "/api/mars"},
        },
        "settings": "/api/settings",
    }


@app.get("/health")
async def health():
    """Global health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
