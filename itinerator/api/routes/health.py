"""Health check endpoint."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    The engine holds no connections, so a running process is a healthy one.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}
