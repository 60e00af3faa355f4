"""
Database models module.

This module imports all database models to ensure they are registered with SQLAlchemy's Base.metadata
before table creation.

All models must be imported here to be included in database migrations and table creation.
"""
from mockprep.db.models.user import User
from mockprep.db.models.interview import (
    Interview,
    InterviewCategory,
    InterviewDifficulty,
    InterviewStatus,
)
from mockprep.db.models.interview_question import InterviewQuestion
from mockprep.db.models.interview_result import InterviewResult
from mockprep.db.models.skill_score import SkillScore

__all__ = [
    "User",
    "Interview",
    "InterviewCategory",
    "InterviewDifficulty",
    "InterviewStatus",
    "InterviewQuestion",
    "InterviewResult",
    "SkillScore",
]
