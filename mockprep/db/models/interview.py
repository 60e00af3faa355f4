"""
Interview model: a public template or a user-owned practice session.
"""
import enum
from sqlalchemy import (
    Column, Integer, String, Text, DateTime, ForeignKey, Index, Enum, JSON, Boolean, Float,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from mockprep.db.base import Base, generate_id


class InterviewCategory(str, enum.Enum):
    TECHNICAL = "TECHNICAL"
    BEHAVIORAL = "BEHAVIORAL"
    SYSTEM_DESIGN = "SYSTEM_DESIGN"
    CASE_STUDY = "CASE_STUDY"


class InterviewDifficulty(str, enum.Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class InterviewStatus(str, enum.Enum):
    """Session lifecycle; only ever moves forward."""
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class Interview(Base):
    """
    Interview specification plus its session lifecycle state.

    A null owner means the row is a public template.
    """
    __tablename__ = "interviews"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)

    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    category = Column(Enum(InterviewCategory), nullable=False, default=InterviewCategory.TECHNICAL, index=True)
    difficulty = Column(Enum(InterviewDifficulty), nullable=False, default=InterviewDifficulty.INTERMEDIATE, index=True)
    duration = Column(Integer, nullable=False, default=30)  # minutes
    topics = Column(JSON, nullable=False, default=list)
    role = Column(String, nullable=True)
    level = Column(String, nullable=True)
    icon = Column(String, nullable=True)
    color = Column(String, nullable=True)

    is_template = Column(Boolean, nullable=False, default=False, index=True)
    status = Column(Enum(InterviewStatus), nullable=False, default=InterviewStatus.NOT_STARTED, index=True)
    rating = Column(Float, nullable=False, default=0.0)  # running average
    completions = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="interviews")
    questions = relationship(
        "InterviewQuestion",
        back_populates="interview",
        order_by="InterviewQuestion.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    result = relationship(
        "InterviewResult",
        back_populates="interview",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    skill_scores = relationship(
        "SkillScore",
        back_populates="interview",
        order_by="SkillScore.skill_name",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index('idx_interviews_user_created', 'user_id', 'created_at'),
    )

    def __repr__(self):
        return f"<Interview(id={self.id}, title='{self.title}', status='{self.status}')>"
