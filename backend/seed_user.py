"""
Script to create a user account that can own clients.
Run with: python seed_user.py <email> <password> <first_name> <last_name> [company]
"""
import asyncio
import sys

from app.core.config import get_settings
from app.core.security import hash_password
from app.db import session as db_session
from app.db.repositories.user_repository import UserRepository


async def seed_user(email: str, password: str, first_name: str, last_name: str, company=None):
    """Insert the user unless the email is already registered."""
    settings = get_settings()
    await db_session.init_db(settings)

    try:
        async with db_session.async_session_maker() as session:
            repo = UserRepository(session)
            existing = await repo.get_by_email(email)
            if existing:
                print(f"User {email} already exists with id {existing.id}")
                return existing.id

            user = await repo.create(
                email=email,
                password=hash_password(password),
                first_name=first_name,
                last_name=last_name,
                company=company,
            )
            await session.commit()
            print(f"Created user {email} with id {user.id}")
            print(f"Mint a token with: python generate_token.py {user.id} {email}")
            return user.id
    finally:
        await db_session.close_db()


if __name__ == "__main__":
    if len(sys.argv) < 5:
        print("Usage: python seed_user.py <email> <password> <first_name> <last_name> [company]")
        sys.exit(1)

    asyncio.run(seed_user(*sys.argv[1:6]))
