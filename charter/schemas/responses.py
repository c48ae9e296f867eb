"""
Common response schemas for API endpoints.
"""

from typing import List

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Standard response for operations that return a success message."""

    message: str = Field(
        ...,
        description="Success message describing the completed operation",
        examples=["Yacht deleted successfully"],
    )


class CurrentUserResponse(BaseModel):
    """Response schema for /auth/me endpoint."""

    id: str = Field(..., description="Subject of the identity provider token")
    roles: List[str] = Field(..., description="Granted roles", examples=[["admin"]])
    is_admin: bool
