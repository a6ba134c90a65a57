"""
Client service with business logic.
Checks pagination bounds and email shape, and turns "no owned row" into a 404.
"""

import math
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException, ValidationException
from app.core.logging import get_logger
from app.db.repositories.client_repository import ClientRepository
from app.schemas.client import ClientCreate, ClientResponse, ClientUpdate
from app.schemas.common import PaginationMeta
from app.services.base_service import BaseService

logger = get_logger(__name__)

MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100
CLIENT_NOT_FOUND = "Client not found"


class ClientService(BaseService):
    """Service for client operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(session)
        self.client_repo = ClientRepository(session)

    async def create_client(self, user_id: str, client_data: ClientCreate) -> ClientResponse:
        """Create a client owned by user_id."""
        if "@" not in client_data.email:
            raise ValidationException("Invalid email format")

        client = await self.client_repo.create(user_id, **client_data.model_dump())
        await self.session.commit()
        await self.session.refresh(client)

        logger.info("Client created", extra={"user_id": user_id, "client_id": client.id})
        return ClientResponse.model_validate(client)

    async def get_clients(
        self,
        user_id: str,
        page: int = 1,
        page_size: int = 10,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[ClientResponse], PaginationMeta]:
        """
        List the user's clients with pagination metadata.

        Raises:
            ValidationException: page < 1 or page_size outside [1, 100];
                raised before any query runs
        """
        if page < 1:
            raise ValidationException("Page number must be greater than 0")
        if page_size < MIN_PAGE_SIZE or page_size > MAX_PAGE_SIZE:
            raise ValidationException(
                f"Page size must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}"
            )

        clients, total = await self.client_repo.find_all(
            user_id,
            page=page,
            page_size=page_size,
            search=search,
            is_active=is_active,
        )

        pagination = PaginationMeta(
            page=page,
            page_size=page_size,
            total_items=total,
            total_pages=math.ceil(total / page_size),
        )
        return [ClientResponse.model_validate(client) for client in clients], pagination

    async def get_client_by_id(self, user_id: str, client_id: str) -> ClientResponse:
        """Get one of the user's clients."""
        client = await self.client_repo.find_by_id(user_id, client_id)
        if not client:
            raise NotFoundException(CLIENT_NOT_FOUND)
        return ClientResponse.model_validate(client)

    async def update_client(
        self,
        user_id: str,
        client_id: str,
        client_data: ClientUpdate,
    ) -> ClientResponse:
        """
        Apply a partial update.

        The ownership check is part of the UPDATE itself, so a row that
        disappears concurrently is reported as not found.
        """
        update_dict = client_data.model_dump(exclude_unset=True)
        updated = await self.client_repo.update(user_id, client_id, **update_dict)
        if not updated:
            raise NotFoundException(CLIENT_NOT_FOUND)

        await self.session.commit()
        await self.session.refresh(updated)
        return ClientResponse.model_validate(updated)

    async def delete_client(self, user_id: str, client_id: str) -> None:
        """Soft delete: mark the client inactive."""
        deleted = await self.client_repo.soft_delete(user_id, client_id)
        if not deleted:
            raise NotFoundException(CLIENT_NOT_FOUND)

        await self.session.commit()
        logger.info("Client deactivated", extra={"user_id": user_id, "client_id": client_id})

    async def permanently_delete_client(self, user_id: str, client_id: str) -> None:
        """Hard delete: remove the client row."""
        deleted = await self.client_repo.hard_delete(user_id, client_id)
        if not deleted:
            raise NotFoundException(CLIENT_NOT_FOUND)

        await self.session.commit()
        logger.info("Client permanently deleted", extra={"user_id": user_id, "client_id": client_id})
