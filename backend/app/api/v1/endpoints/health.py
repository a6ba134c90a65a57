"""
Health check endpoints.
Returns process status, uptime and, for the detailed variant, dependency checks.
"""

from fastapi import Depends

from app.api.v1.router_config import create_public_router
from app.deps.di_container import Container, get_container
from app.schemas.health import HealthResponse

router = create_public_router()


@router.get("/health", response_model=HealthResponse)
async def get_health(container: Container = Depends(get_container)) -> HealthResponse:
    """
    Health check endpoint.
    Returns system status, uptime, timestamp, environment and checks.
    """
    controller = container.health_controller()
    return await controller.get_health()


async def get_liveness(container: Container = Depends(get_container)) -> HealthResponse:
    """Liveness probe mounted at the application root as /health."""
    controller = container.health_controller()
    return await controller.get_liveness()
