from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from mockprep.db.base import Base, generate_id


class InterviewQuestion(Base):
    """
    One generated question of an interview.

    `position` is the 1-based ordinal assigned when the set is generated. The
    unique (interview_id, position) pair makes the first insert of a set the
    claim: a concurrent second set for the same interview cannot be stored.
    """
    __tablename__ = "interview_questions"

    id = Column(String(36), primary_key=True, default=generate_id)
    interview_id = Column(String(36), ForeignKey("interviews.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)

    question = Column(Text, nullable=False)
    context = Column(Text, nullable=True)
    expected_topics = Column(JSON, nullable=True, default=list)

    answer = Column(Text, nullable=True)
    score = Column(Integer, nullable=True)
    feedback = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    interview = relationship("Interview", back_populates="questions")

    __table_args__ = (
        UniqueConstraint('interview_id', 'position', name='uq_interview_question_position'),
    )

    @property
    def reference(self) -> str:
        """Stable label echoed through the analysis prompt."""
        return f"q{self.position}"

    def __repr__(self):
        return f"<InterviewQuestion(id={self.id}, interview_id={self.interview_id}, position={self.position})>"
