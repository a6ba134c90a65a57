"""
Base controller class.
Controllers coordinate services and shape results into the response envelope.
"""

from abc import ABC
from typing import Any, Optional

from app.schemas.common import ApiResponse, PaginationMeta


class BaseController(ABC):
    """Base controller class for all controllers."""

    # Endpoints serialize with exclude_unset, so only the keys set here reach the client

    @staticmethod
    def success(data: Any = None, message: Optional[str] = None) -> ApiResponse:
        fields = {"status": "success"}
        if data is not None:
            fields["data"] = data
        if message is not None:
            fields["message"] = message
        return ApiResponse(**fields)

    @staticmethod
    def paginated(data: list, pagination: PaginationMeta, message: Optional[str] = None) -> ApiResponse:
        fields = {"status": "success", "data": data, "pagination": pagination}
        if message is not None:
            fields["message"] = message
        return ApiResponse(**fields)
