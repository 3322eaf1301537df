"""FastAPI application entry point for otoutil."""

import logging

from fastapi import FastAPI

from src.otoutil.api.exception_handlers import register_exception_handlers
from src.otoutil.api.routers import api_router
from src.otoutil.config import get_settings

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(
    title="otoutil",
    description="Parse and format oto.ini entries and normalize pitch-suffixed aliases",
    version="0.1.0",
)

register_exception_handlers(app)

# Include API routers
app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
