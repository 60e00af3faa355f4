"""
Pydantic schemas for interview catalogue endpoints.
"""
from typing import Optional, List
from datetime import datetime
from pydantic import Field, field_validator

from mockprep.db.models.interview import (
    InterviewCategory,
    InterviewDifficulty,
    InterviewStatus,
)
from mockprep.schemas.common import CamelModel

CATEGORY_SLUGS = {
    "technical": InterviewCategory.TECHNICAL,
    "behavioral": InterviewCategory.BEHAVIORAL,
    "system-design": InterviewCategory.SYSTEM_DESIGN,
    "case-study": InterviewCategory.CASE_STUDY,
}

DIFFICULTY_SLUGS = {
    "beginner": InterviewDifficulty.BEGINNER,
    "intermediate": InterviewDifficulty.INTERMEDIATE,
    "advanced": InterviewDifficulty.ADVANCED,
}


def parse_category(value: Optional[str]) -> Optional[InterviewCategory]:
    """Map a slug ("system-design") or enum name ("SYSTEM_DESIGN") to a category."""
    if not value:
        return None
    key = value.strip()
    if key in InterviewCategory.__members__:
        return InterviewCategory[key]
    return CATEGORY_SLUGS.get(key.lower())


def parse_difficulty(value: Optional[str]) -> Optional[InterviewDifficulty]:
    if not value:
        return None
    key = value.strip()
    if key in InterviewDifficulty.__members__:
        return InterviewDifficulty[key]
    return DIFFICULTY_SLUGS.get(key.lower())


def parse_status(value: Optional[str]) -> Optional[InterviewStatus]:
    if not value:
        return None
    key = value.strip().upper().replace("-", "_")
    return InterviewStatus.__members__.get(key)


class InterviewCreate(CamelModel):
    """Request schema for creating an interview."""
    title: Optional[str] = Field(None, max_length=255, description="Interview title (required)")
    description: Optional[str] = Field(None, description="What the interview is about")
    category: Optional[str] = Field(None, description="technical | behavioral | system-design | case-study")
    difficulty: Optional[str] = Field(None, description="beginner | intermediate | advanced")
    duration: Optional[int] = Field(None, ge=1, le=480, description="Duration in minutes")
    topics: List[str] = Field(default_factory=list, description="Ordered list of topics")
    role: Optional[str] = Field(None, description="Target role, e.g. backend")
    level: Optional[str] = Field(None, description="Target level, e.g. mid")
    icon: Optional[str] = Field(None)
    color: Optional[str] = Field(None)
    is_template: bool = Field(False, description="Publish as a public template")

    @field_validator("topics")
    @classmethod
    def strip_topics(cls, v: List[str]) -> List[str]:
        return [t.strip() for t in v if t and t.strip()]

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Backend Fundamentals",
                "description": "APIs, databases and caching",
                "category": "technical",
                "difficulty": "intermediate",
                "duration": 45,
                "topics": ["REST", "SQL", "Caching"],
                "role": "backend",
                "level": "mid"
            }
        }


class ResultSummary(CamelModel):
    """Result fields attached to completed interviews in listings."""
    overall_score: int = Field(..., ge=0, le=100)
    summary: str = Field("")
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)


class InterviewResponse(CamelModel):
    """Schema for an interview resource."""
    id: str
    title: str
    description: Optional[str] = None
    category: InterviewCategory
    difficulty: InterviewDifficulty
    duration: int
    topics: List[str] = Field(default_factory=list)
    role: Optional[str] = None
    level: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    user_id: Optional[str] = None
    is_template: bool = False
    status: InterviewStatus
    rating: float = 0.0
    completions: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    results: Optional[ResultSummary] = Field(None, description="Present for completed interviews in listings")


class InterviewSummary(CamelModel):
    """Interview fields repeated in the results view."""
    id: str
    title: str
    description: Optional[str] = None
    category: InterviewCategory
    difficulty: InterviewDifficulty
    duration: int
    status: InterviewStatus
