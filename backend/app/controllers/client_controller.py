"""
Client controller.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.schemas.client import ClientCreate, ClientUpdate
from app.schemas.common import ApiResponse
from app.services.client_service import ClientService


class ClientController(BaseController):
    """Controller for client operations, always on behalf of one user."""

    def __init__(self, session: AsyncSession, user_id: str):
        self.user_id = user_id
        self.client_service = ClientService(session)

    async def list_clients(
        self,
        page: int = 1,
        page_size: int = 10,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> ApiResponse:
        """List the user's clients."""
        clients, pagination = await self.client_service.get_clients(
            self.user_id,
            page=page,
            page_size=page_size,
            search=search,
            is_active=is_active,
        )
        return self.paginated(clients, pagination, "Clients retrieved successfully")

    async def create_client(self, client_data: ClientCreate) -> ApiResponse:
        """Create a new client."""
        client = await self.client_service.create_client(self.user_id, client_data)
        return self.success(client, "Client created successfully")

    async def get_client(self, client_id: str) -> ApiResponse:
        """Get client by ID."""
        client = await self.client_service.get_client_by_id(self.user_id, client_id)
        return self.success(client, "Client retrieved successfully")

    async def update_client(self, client_id: str, client_data: ClientUpdate) -> ApiResponse:
        """Update a client."""
        client = await self.client_service.update_client(self.user_id, client_id, client_data)
        return self.success(client, "Client updated successfully")

    async def delete_client(self, client_id: str) -> ApiResponse:
        """Soft delete a client."""
        await self.client_service.delete_client(self.user_id, client_id)
        return self.success(message="Client deleted successfully")

    async def permanently_delete_client(self, client_id: str) -> ApiResponse:
        """Hard delete a client."""
        await self.client_service.permanently_delete_client(self.user_id, client_id)
        return self.success(message="Client permanently deleted")
