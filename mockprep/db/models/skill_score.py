from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from mockprep.db.base import Base, generate_id


class SkillScore(Base):
    """Latest score for one named skill of one interview (not a history)."""
    __tablename__ = "skill_scores"

    id = Column(String(36), primary_key=True, default=generate_id)
    interview_id = Column(String(36), ForeignKey("interviews.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_name = Column(String, nullable=False)
    score = Column(Integer, nullable=False, default=0)  # 0-100
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    interview = relationship("Interview", back_populates="skill_scores")

    __table_args__ = (
        UniqueConstraint('interview_id', 'skill_name', name='uq_skill_score_interview_skill'),
    )

    def __repr__(self):
        return f"<SkillScore(interview_id={self.interview_id}, skill_name='{self.skill_name}', score={self.score})>"
