"""
Database models.
Import all models here to ensure they're registered with Base.
"""

from app.models.user import User
from app.models.client import Client

__all__ = [
    "User",
    "Client",
]
