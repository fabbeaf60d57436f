"""
Docx2Email Backend API
FastAPI application for turning Word documents into email-safe HTML.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docx2email.config import HOST_PORT, get_cors_origins
from docx2email.routers import convert, email, pdf

# Configure logging to output to console
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Log the URL the API is reachable at.

    The port is taken from ``HOST_PORT`` so Docker-mapped ports are reported
    as the host sees them.
    """
    logger.info("Docx2Email API running at:\n  Local:   http://localhost:%s", HOST_PORT)
    yield


app = FastAPI(
    title="Docx2Email API",
    description="Word document to email-safe HTML conversion",
    version=API_VERSION,
    lifespan=lifespan,
)

# CORS origins are resolved once at import from the environment
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

# Include routers
app.include_router(convert.router, prefix="/api", tags=["convert"])
app.include_router(pdf.router, prefix="/api", tags=["pdf"])
app.include_router(email.router, prefix="/api/email", tags=["email"])


@app.get("/")
async def root():
    return {"message": "Docx2Email API", "version": API_VERSION}


@app.get("/health")
async def health():
    return {"status": "ok"}
