"""
Client repository for database operations.
The only component that queries the clients table; all access is owner-scoped.
"""

from typing import List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repositories.base_repository import BaseRepository
from app.models.client import Client

LIKE_ESCAPE = "\\"


def _like_pattern(search: str) -> str:
    """Substring pattern with LIKE wildcards in the user's text matched literally."""
    escaped = (
        search.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


class ClientRepository(BaseRepository[Client]):
    """Repository for client operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Client, session)

    async def find_all(
        self,
        user_id: str,
        page: int = 1,
        page_size: int = 10,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[Client], int]:
        """
        List a user's clients, newest first, with the total matching count.

        Args:
            user_id: Owner
            page: 1-based page number (not bounds-checked here)
            page_size: Rows per page (not bounds-checked here)
            search: Case-insensitive substring over name, email and company
            is_active: Exact match on the active flag when given

        Returns:
            (clients on the requested page, total rows matching the filters)
        """
        conditions = self._owned(user_id)

        if is_active is not None:
            conditions.append(Client.is_active == is_active)

        if search:
            pattern = _like_pattern(search)
            conditions.append(
                or_(
                    Client.name.ilike(pattern, escape=LIKE_ESCAPE),
                    Client.email.ilike(pattern, escape=LIKE_ESCAPE),
                    Client.company.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        count_result = await self.session.execute(
            select(func.count()).select_from(Client).where(*conditions)
        )
        total = count_result.scalar() or 0

        # Pages past the end are answered without an OFFSET query
        offset = (page - 1) * page_size
        if offset >= total:
            return [], total

        query = (
            select(Client)
            .where(*conditions)
            .order_by(Client.created_at.desc(), Client.id.desc())
            .offset(offset)
            .limit(page_size)
        )
        result = await self.session.execute(query)
        clients = list(result.scalars().all())

        return clients, total

    async def find_by_id(self, user_id: str, client_id: str) -> Optional[Client]:
        """Get a client by ID if user_id owns it."""
        return await self.get(user_id, client_id)

    async def soft_delete(self, user_id: str, client_id: str) -> bool:
        """Mark an owned client inactive."""
        client = await self.update(user_id, client_id, is_active=False)
        return client is not None

    async def hard_delete(self, user_id: str, client_id: str) -> bool:
        """Permanently remove an owned client."""
        return await self.delete(user_id, client_id)
