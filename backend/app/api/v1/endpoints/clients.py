"""
Client API endpoints.
Every route acts on behalf of the authenticated user only.
"""

from typing import List, Literal, Optional
from uuid import UUID

from fastapi import Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.middleware import AuthenticatedUser, require_authentication
from app.api.v1.router_config import create_protected_router
from app.controllers.client_controller import ClientController
from app.db.session import get_db
from app.schemas.client import ClientCreate, ClientResponse, ClientUpdate
from app.schemas.common import ApiResponse, ErrorResponse

router = create_protected_router(
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed"},
    },
)

NOT_FOUND_RESPONSE = {404: {"model": ErrorResponse, "description": "Client not found"}}


def get_client_controller(
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_authentication),
) -> ClientController:
    return ClientController(db, current_user.user_id)


@router.get(
    "",
    response_model=ApiResponse[List[ClientResponse]],
    response_model_exclude_unset=True,
)
async def list_clients(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, alias="pageSize", ge=1, le=100),
    search: Optional[str] = Query(None, max_length=255),
    is_active: Optional[Literal["true", "false"]] = Query(None, alias="isActive"),
    controller: ClientController = Depends(get_client_controller),
) -> ApiResponse:
    """List the user's clients, newest first."""
    return await controller.list_clients(
        page=page,
        page_size=page_size,
        search=search or None,
        is_active=None if is_active is None else is_active == "true",
    )


@router.post(
    "",
    response_model=ApiResponse[ClientResponse],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_client(
    client_data: ClientCreate,
    controller: ClientController = Depends(get_client_controller),
) -> ApiResponse:
    """Create a new client."""
    return await controller.create_client(client_data)


@router.get(
    "/{client_id}",
    response_model=ApiResponse[ClientResponse],
    response_model_exclude_unset=True,
    responses=NOT_FOUND_RESPONSE,
)
async def get_client(
    client_id: UUID,
    controller: ClientController = Depends(get_client_controller),
) -> ApiResponse:
    """Get client by ID."""
    return await controller.get_client(str(client_id))


@router.put(
    "/{client_id}",
    response_model=ApiResponse[ClientResponse],
    response_model_exclude_unset=True,
    responses=NOT_FOUND_RESPONSE,
)
async def update_client(
    client_id: UUID,
    client_data: ClientUpdate,
    controller: ClientController = Depends(get_client_controller),
) -> ApiResponse:
    """Update a client; only the fields present in the body change."""
    return await controller.update_client(str(client_id), client_data)


@router.delete(
    "/{client_id}",
    response_model=ApiResponse[None],
    response_model_exclude_unset=True,
    responses=NOT_FOUND_RESPONSE,
)
async def delete_client(
    client_id: UUID,
    controller: ClientController = Depends(get_client_controller),
) -> ApiResponse:
    """Soft delete a client (isActive becomes false)."""
    return await controller.delete_client(str(client_id))


@router.delete(
    "/{client_id}/permanent",
    response_model=ApiResponse[None],
    response_model_exclude_unset=True,
    responses=NOT_FOUND_RESPONSE,
)
async def permanently_delete_client(
    client_id: UUID,
    controller: ClientController = Depends(get_client_controller),
) -> ApiResponse:
    """Permanently delete a client."""
    return await controller.permanently_delete_client(str(client_id))
