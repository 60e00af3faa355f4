"""
Pydantic schemas for authentication endpoints.
"""
from typing import Optional
from datetime import datetime
from pydantic import Field

from mockprep.schemas.common import CamelModel


class UserResponse(CamelModel):
    """Current account as mirrored from the identity provider."""
    id: str = Field(..., description="Internal user ID")
    external_id: str = Field(..., description="Identity-provider subject")
    email: str = Field("", description="Email reported by the identity provider")
    name: Optional[str] = Field(None, description="Display name")
    created_at: Optional[datetime] = Field(None)
    updated_at: Optional[datetime] = Field(None)

    class Config:
        json_schema_extra = {
            "example": {
                "id": "0b7f6a0e-8f5e-4d59-9d0a-2a4f1f0c2b11",
                "externalId": "user_2abc",
                "email": "alex@example.com",
                "name": "Alex Johnson",
                "createdAt": "2026-01-15T09:00:00Z",
                "updatedAt": "2026-01-15T09:00:00Z"
            }
        }
