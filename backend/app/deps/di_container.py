"""
Dependency injection container using dependency-injector.
Wires configuration, the health service and the authentication strategy.
"""

from dependency_injector import containers, providers
from fastapi import Request

from app.api.v1.middleware import BearerTokenAuthenticator, HeaderAuthenticator
from app.controllers.health_controller import HealthController
from app.core.config import Settings
from app.services.health_service import HealthService


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Configuration
    config = providers.Configuration()

    # Services
    health_service = providers.Singleton(
        HealthService,
        environment=config.environment,
    )

    # Controllers
    health_controller = providers.Factory(
        HealthController,
        health_service=health_service,
    )

    # Authentication strategy, chosen once from AUTH_MODE
    authenticator = providers.Selector(
        config.auth_mode,
        jwt=providers.Singleton(
            BearerTokenAuthenticator,
            secret_key=config.secret_key,
            algorithm=config.algorithm,
        ),
        header=providers.Singleton(HeaderAuthenticator),
    )


def build_container(settings: Settings) -> Container:
    """Create a container bound to one settings object."""
    container = Container()
    container.config.from_dict({
        "environment": settings.ENVIRONMENT,
        "auth_mode": settings.AUTH_MODE,
        "secret_key": settings.SECRET_KEY,
        "algorithm": settings.ALGORITHM,
    })
    return container


def get_container(request: Request) -> Container:
    """FastAPI dependency returning the application's container."""
    return request.app.state.container
