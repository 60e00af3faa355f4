"""
Pydantic schemas for interview-session endpoints.
"""
from typing import Optional, List
from datetime import datetime
from pydantic import Field, field_validator

from mockprep.schemas.common import CamelModel
from mockprep.schemas.interview import InterviewResponse, InterviewSummary, ResultSummary
from mockprep.services.interview_ai import InterviewAnalysis


class SessionAnswer(CamelModel):
    """One submitted answer."""
    question_id: str = Field(..., min_length=1, description="Persisted question id or transient reference such as q3")
    question: Optional[str] = Field(None, description="Question text as shown to the candidate")
    answer: str = Field("", description="Candidate answer")
    time_spent: int = Field(0, ge=0, description="Seconds spent on the question")

    @field_validator("question_id", mode="before")
    @classmethod
    def coerce_question_id(cls, v):
        return str(v) if isinstance(v, int) else v


class SubmitSessionRequest(CamelModel):
    """Request body for submitting an interview."""
    responses: List[SessionAnswer] = Field(..., min_length=1, description="One entry per answered question")

    class Config:
        json_schema_extra = {
            "example": {
                "responses": [
                    {
                        "questionId": "q1",
                        "question": "Explain database indexing.",
                        "answer": "An index is a sorted structure...",
                        "timeSpent": 95
                    }
                ]
            }
        }


class SessionQuestion(CamelModel):
    """Question projection exposed before submission (no answers or scores)."""
    id: str
    question: str


class StartSessionData(CamelModel):
    interview: InterviewResponse
    questions: List[SessionQuestion]


class SessionInterview(InterviewResponse):
    """Interview plus its question projection."""
    questions: List[SessionQuestion] = Field(default_factory=list)


class ResultResponse(CamelModel):
    """The stored result after a submission."""
    id: str
    interview_id: str
    overall_score: int
    summary: str = ""
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SubmitSessionData(CamelModel):
    result: ResultResponse
    analysis: InterviewAnalysis


class ScoredQuestion(CamelModel):
    id: str
    question: str
    answer: Optional[str] = None
    score: Optional[int] = None
    feedback: Optional[str] = None


class SkillScoreResponse(CamelModel):
    skill_name: str
    score: int


class InterviewResultsData(CamelModel):
    """Composed results view."""
    interview: InterviewSummary
    results: ResultSummary
    questions: List[ScoredQuestion]
    skill_scores: List[SkillScoreResponse]
