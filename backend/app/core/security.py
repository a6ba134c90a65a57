"""
Token and password helpers.
Bearer tokens are HS256 JWTs asserting {userId, email}; passwords are bcrypt hashes.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from app.core.exceptions import AuthenticationException


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Return the bcrypt hash of a plain text password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain text password against a stored hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    data: Dict[str, Any],
    secret_key: str,
    algorithm: str = "HS256",
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Sign a JWT access token.

    Args:
        data: Claims to embed (userId, email, ...)
        secret_key: Signing secret
        algorithm: JWT algorithm
        expires_delta: Lifetime of the token; 15 minutes when omitted

    Returns:
        Encoded JWT
    """
    to_encode = dict(data)
    if "userId" in to_encode and "sub" not in to_encode:
        to_encode["sub"] = str(to_encode["userId"])

    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=15))
    to_encode["exp"] = int(expire.timestamp())
    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def decode_access_token(token: str, secret_key: str, algorithm: str = "HS256") -> Dict[str, Any]:
    """
    Verify signature and expiry of a JWT access token.

    Raises:
        AuthenticationException: "Token expired" or "Invalid token"
    """
    try:
        return jwt.decode(token, secret_key, algorithms=[algorithm])
    except ExpiredSignatureError:
        raise AuthenticationException("Token expired")
    except JWTError:
        raise AuthenticationException("Invalid token")
