"""
Interview catalogue endpoints.

Templates are public; everything else is scoped to the caller.
"""
import logging
from typing import Optional, List
from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session

from mockprep.core.auth_dependency import get_db, get_current_user, get_optional_user
from mockprep.db.models.user import User
from mockprep.schemas.interview import InterviewCreate, InterviewResponse
from mockprep.services.interview_service import (
    InterviewFilter,
    create_interview,
    get_interview,
    list_interviews,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/interview", tags=["Interviews"])


@router.get("", status_code=status.HTTP_200_OK, response_model=List[InterviewResponse])
def list_interviews_route(
    category: Optional[str] = Query(None, description="technical | behavioral | system-design | case-study | all"),
    difficulty: Optional[str] = Query(None, description="beginner | intermediate | advanced"),
    search: Optional[str] = Query(None, description="Search in title and description"),
    template: Optional[bool] = Query(None, description="Only public templates when true"),
    status: Optional[str] = Query(None, description="NOT_STARTED | IN_PROGRESS | COMPLETED"),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """
    List interviews visible to the caller.

    Anonymous callers see templates only.
    """
    return list_interviews(
        db,
        InterviewFilter(
            category=category,
            difficulty=difficulty,
            search=search,
            template=template,
            status=status,
        ),
        user,
    )


@router.get("/{interview_id}", status_code=status.HTTP_200_OK, response_model=InterviewResponse)
def get_interview_route(
    interview_id: str,
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """Get a single interview; 404 for unknown ids, 403 for someone else's interview."""
    return get_interview(db, interview_id, user)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=InterviewResponse)
def create_interview_route(
    payload: InterviewCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create an interview owned by the authenticated user."""
    return create_interview(db, payload, user)
