from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from mockprep.db.base import Base, generate_id


def join_lines(items) -> str:
    return "\n".join(str(item).strip() for item in items if str(item).strip())


def split_lines(text) -> list:
    if not text:
        return []
    return [line.strip() for line in text.split("\n") if line.strip()]


class InterviewResult(Base):
    """Overall analysis of a submitted interview; at most one per interview."""
    __tablename__ = "interview_results"

    id = Column(String(36), primary_key=True, default=generate_id)
    interview_id = Column(String(36), ForeignKey("interviews.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)

    overall_score = Column(Integer, nullable=False, default=0)  # 0-100
    summary = Column(Text, nullable=False, default="")
    strengths = Column(Text, nullable=False, default="")  # newline-joined
    weaknesses = Column(Text, nullable=False, default="")  # newline-joined

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    interview = relationship("Interview", back_populates="result")

    @property
    def strengths_list(self) -> list:
        return split_lines(self.strengths)

    @property
    def weaknesses_list(self) -> list:
        return split_lines(self.weaknesses)

    def __repr__(self):
        return f"<InterviewResult(interview_id={self.interview_id}, overall_score={self.overall_score})>"
