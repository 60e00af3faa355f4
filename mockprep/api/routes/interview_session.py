"""
Interview session endpoints: start, fetch, submit, results.
"""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from mockprep.core.auth_dependency import get_db, get_current_user
from mockprep.db.models.user import User
from mockprep.schemas.common import ApiResponse
from mockprep.schemas.session import (
    InterviewResultsData,
    SessionInterview,
    StartSessionData,
    SubmitSessionData,
    SubmitSessionRequest,
)
from mockprep.services.interview_ai import InterviewAI, get_interview_ai
from mockprep.services.interview_session_service import SessionOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/interview-session", tags=["Interview Sessions"])


def get_orchestrator(
    db: Session = Depends(get_db),
    ai: InterviewAI = Depends(get_interview_ai),
) -> SessionOrchestrator:
    return SessionOrchestrator(db, ai)


@router.post(
    "/start/{interview_id}",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[StartSessionData],
)
def start_session(
    interview_id: str,
    user: User = Depends(get_current_user),
    orchestrator: SessionOrchestrator = Depends(get_orchestrator)
):
    """
    Start an interview session.

    Generates the question set on first start; later starts return the same set.
    """
    return ApiResponse(data=orchestrator.start_session(interview_id, user))


@router.get(
    "/results/{interview_id}",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[InterviewResultsData],
)
def get_results(
    interview_id: str,
    user: User = Depends(get_current_user),
    orchestrator: SessionOrchestrator = Depends(get_orchestrator)
):
    """Get the full analysis of a submitted interview."""
    return ApiResponse(data=orchestrator.get_results(interview_id, user))


@router.post(
    "/submit/{interview_id}",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[SubmitSessionData],
)
def submit_session(
    interview_id: str,
    payload: SubmitSessionRequest,
    user: User = Depends(get_current_user),
    orchestrator: SessionOrchestrator = Depends(get_orchestrator)
):
    """Submit answers for AI analysis."""
    return ApiResponse(data=orchestrator.submit_session(interview_id, user, payload.responses))


@router.get(
    "/{interview_id}",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[SessionInterview],
)
def get_session(
    interview_id: str,
    user: User = Depends(get_current_user),
    orchestrator: SessionOrchestrator = Depends(get_orchestrator)
):
    """Get the interview with its questions (no answers or scores)."""
    return ApiResponse(data=orchestrator.get_session(interview_id, user))
