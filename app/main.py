"""
PixelPage Engine — FastAPI Application Factory.

Registers the conversion controller router and configures CORS,
logging, and lifespan events (PDF library check on startup).
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.controllers.conversion_controller import router as conversion_router
from app.exceptions import MissingDependencyError

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

log_level = os.getenv("LOG_LEVEL", "info").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
)
logger = logging.getLogger("pixelpage")


# ---------------------------------------------------------------------------
# Lifespan (startup / shutdown)
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    - **Startup**: Resolve the PDF library once so a missing install is
      reported in the log before the first request arrives.
    - **Shutdown**: Placeholder for cleanup.
    """
    logger.info("🚀 PixelPage Engine starting up …")
    try:
        from app.services.conversion_service import default_document_factory
        factory = default_document_factory()
        logger.info("✅ PDF writer ready: %s", factory.__name__)
    except MissingDependencyError as e:
        logger.error("❌ %s Conversion requests will fail with 503.", e.message)
    yield
    logger.info("🛑 PixelPage Engine shutting down")


# ---------------------------------------------------------------------------
# App instance
# ---------------------------------------------------------------------------

app = FastAPI(
    title="PixelPage Engine",
    description=(
        "Image-to-PDF converter. Upload one or more images and receive a "
        "single PDF with one image per page, laid out on the chosen page "
        "format and orientation with contain or cover fitting."
    ),
    version="1.0.0",
    lifespan=lifespan,
)

# CORS – all origins unless PIXELPAGE_CORS_ORIGINS narrows it down
_origins = [o.strip() for o in os.getenv("PIXELPAGE_CORS_ORIGINS", "*").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount the conversion controller
app.include_router(conversion_router)


# Root redirect to docs
@app.get("/", include_in_schema=False)
async def root():
    return {"message": "PixelPage Engine v1.0.0", "docs": "/docs"}
