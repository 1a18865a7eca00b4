"""FastAPI application."""

from fastapi import FastAPI

from itinerator.api.routes.health import router as health_router
from itinerator.api.routes.metrics import router as metrics_router
from itinerator.api.routes.segments import router as segments_router
from itinerator.config import get_settings
from itinerator.utils.logging import configure_logging

configure_logging(get_settings().log_level)

app = FastAPI(title="Itinerator Scheduling API", version="0.1.0")

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(segments_router, tags=["segments"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Itinerator Scheduling API", "version": "0.1.0"}
