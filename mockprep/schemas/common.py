"""
Shared schema base classes and the success envelope.
"""
from typing import Generic, TypeVar
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope used by the interview-session endpoints."""
    success: bool = Field(True, description="Always true for successful responses")
    data: T


class ErrorResponse(BaseModel):
    """Body of every error response."""
    success: bool = Field(False)
    error: str = Field(..., description="Human readable error message")

    class Config:
        json_schema_extra = {
            "example": {
                "success": False,
                "error": "Interview not found"
            }
        }
