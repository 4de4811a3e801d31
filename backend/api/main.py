"""
FastAPI application entry point.

Run with: uvicorn api.main:app --reload
"""
import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.routes import pos
from db import init_db
from settings import settings

logging.basicConfig(level=settings.LOG_LEVEL)


# Create app
app = FastAPI(
    title="Campus Coffee API",
    description="API for managing campus points of sale and importing them from OpenStreetMap",
    version="0.1.0",
)

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure properly for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(pos.router, prefix="/api/pos", tags=["pos"])


@app.on_event("startup")
def startup_event():
    """Initialize database tables on startup."""
    init_db()


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "Campus Coffee API"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
