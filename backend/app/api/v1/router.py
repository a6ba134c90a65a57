"""
API v1 router that aggregates all endpoint routers.
All routes require authentication except health and the API banner.
"""

from fastapi import APIRouter, Request

from app.api.v1.endpoints import clients, health

api_router = APIRouter()

# Public routes (no authentication required)
api_router.include_router(health.router, tags=["health"])


@api_router.get("", include_in_schema=False)
async def api_banner(request: Request) -> dict:
    """Name, version and documentation location of this API."""
    settings = request.app.state.settings
    return {
        "message": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "documentation": "/docs",
    }


# Protected routes (the clients router enforces authentication itself)
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
