"""
Script to mint a bearer token for manual API testing.
Run with: python generate_token.py <user_id> [email]
"""
import sys
from datetime import timedelta

from app.core.config import get_settings
from app.core.security import create_access_token


def main():
    if len(sys.argv) < 2:
        print("Usage: python generate_token.py <user_id> [email]")
        sys.exit(1)

    user_id = sys.argv[1]
    email = sys.argv[2] if len(sys.argv) > 2 else "test@example.com"

    settings = get_settings()
    token = create_access_token(
        {"userId": user_id, "email": email},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )

    print(f"\nToken for user {user_id} ({email}):\n")
    print(token)
    print(f"\nUse it as: Authorization: Bearer {token}\n")


if __name__ == "__main__":
    main()
