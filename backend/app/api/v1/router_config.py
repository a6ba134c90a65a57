"""
Router configuration utilities for consistent authentication enforcement.
"""

from fastapi import APIRouter, Depends

from app.api.v1.middleware import require_authentication
from app.schemas.common import ErrorResponse

AUTH_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Missing, invalid or expired credentials"},
}


def create_protected_router(*args, **kwargs) -> APIRouter:
    """
    Create a router with authentication required for all routes.

    Usage:
        router = create_protected_router(tags=["clients"])
        # All routes on this router will require authentication

    Args:
        *args: Arguments to pass to APIRouter
        **kwargs: Keyword arguments to pass to APIRouter

    Returns:
        APIRouter with authentication dependency applied
    """
    dependencies = list(kwargs.pop("dependencies", []))
    dependencies.append(Depends(require_authentication))
    responses = {**AUTH_RESPONSES, **kwargs.pop("responses", {})}
    return APIRouter(*args, dependencies=dependencies, responses=responses, **kwargs)


def create_public_router(*args, **kwargs) -> APIRouter:
    """
    Create a router without authentication requirement.
    Use for public endpoints like health checks.
    """
    return APIRouter(*args, **kwargs)
