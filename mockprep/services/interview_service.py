"""
Interview catalogue: listing, lookup and creation.
"""
import logging
from dataclasses import dataclass
from typing import Optional, List

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from mockprep.core.access import enforce_access
from mockprep.core.errors import NotFoundError, RequestValidationFailed
from mockprep.db.models.interview import (
    Interview,
    InterviewCategory,
    InterviewDifficulty,
    InterviewStatus,
)
from mockprep.db.models.user import User
from mockprep.schemas.interview import (
    InterviewCreate,
    InterviewResponse,
    InterviewSummary,
    ResultSummary,
    parse_category,
    parse_difficulty,
    parse_status,
)

logger = logging.getLogger(__name__)


@dataclass
class InterviewFilter:
    """Raw query-string filters; unknown values are ignored."""
    category: Optional[str] = None
    difficulty: Optional[str] = None
    search: Optional[str] = None
    template: Optional[bool] = None
    status: Optional[str] = None


def serialize_result(interview: Interview) -> Optional[ResultSummary]:
    result = interview.result
    if result is None:
        return None
    return ResultSummary(
        overall_score=result.overall_score,
        summary=result.summary or "",
        strengths=result.strengths_list,
        weaknesses=result.weaknesses_list,
    )


def serialize_interview(interview: Interview, include_result: bool = False) -> InterviewResponse:
    return InterviewResponse(
        id=interview.id,
        title=interview.title,
        description=interview.description,
        category=interview.category,
        difficulty=interview.difficulty,
        duration=interview.duration,
        topics=list(interview.topics or []),
        role=interview.role,
        level=interview.level,
        icon=interview.icon,
        color=interview.color,
        user_id=interview.user_id,
        is_template=interview.is_template,
        status=interview.status,
        rating=interview.rating or 0.0,
        completions=interview.completions or 0,
        created_at=interview.created_at,
        updated_at=interview.updated_at,
        results=serialize_result(interview) if include_result else None,
    )


def summarize_interview(interview: Interview) -> InterviewSummary:
    return InterviewSummary(
        id=interview.id,
        title=interview.title,
        description=interview.description,
        category=interview.category,
        difficulty=interview.difficulty,
        duration=interview.duration,
        status=interview.status,
    )


def load_interview(db: Session, interview_id: str) -> Interview:
    """Fetch an interview or raise NotFoundError."""
    interview = db.query(Interview).filter(Interview.id == interview_id).first()
    if interview is None:
        raise NotFoundError("Interview not found")
    return interview


def list_interviews(db: Session, filters: InterviewFilter, caller: Optional[User]) -> List[InterviewResponse]:
    """
    Templates plus the caller's own interviews, newest first.

    Completed interviews carry their result summary (history view).
    """
    query = db.query(Interview).options(selectinload(Interview.result))

    if filters.template:
        query = query.filter(Interview.is_template.is_(True))
    elif caller is not None:
        query = query.filter(or_(Interview.is_template.is_(True), Interview.user_id == caller.id))
    else:
        query = query.filter(Interview.is_template.is_(True))

    if filters.category and filters.category != "all":
        category = parse_category(filters.category)
        if category is not None:
            query = query.filter(Interview.category == category)

    difficulty = parse_difficulty(filters.difficulty)
    if difficulty is not None:
        query = query.filter(Interview.difficulty == difficulty)

    status_value = parse_status(filters.status)
    if status_value is not None:
        query = query.filter(Interview.status == status_value)

    if filters.search:
        # Wildcards in the user's text match literally
        escaped = filters.search.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        search_term = f"%{escaped}%"
        query = query.filter(
            or_(
                Interview.title.ilike(search_term, escape="\\"),
                Interview.description.ilike(search_term, escape="\\"),
            )
        )

    interviews = query.order_by(Interview.created_at.desc(), Interview.title).all()
    logger.debug(f"Interviews listed: user_id={caller.id if caller else None}, total={len(interviews)}")

    return [
        serialize_interview(i, include_result=i.status == InterviewStatus.COMPLETED)
        for i in interviews
    ]


def get_interview(db: Session, interview_id: str, caller: Optional[User]) -> InterviewResponse:
    interview = load_interview(db, interview_id)
    enforce_access(interview, caller)
    return serialize_interview(interview, include_result=interview.status == InterviewStatus.COMPLETED)


def create_interview(db: Session, payload: InterviewCreate, user: User) -> InterviewResponse:
    """
    Create an interview owned by `user`.

    Unknown category/difficulty values fall back to TECHNICAL/INTERMEDIATE.
    """
    title = (payload.title or "").strip()
    if not title:
        raise RequestValidationFailed("Title is required")

    interview = Interview(
        user_id=user.id,
        title=title,
        description=payload.description,
        category=parse_category(payload.category) or InterviewCategory.TECHNICAL,
        difficulty=parse_difficulty(payload.difficulty) or InterviewDifficulty.INTERMEDIATE,
        duration=payload.duration or 30,
        topics=payload.topics,
        role=payload.role,
        level=payload.level,
        icon=payload.icon,
        color=payload.color,
        is_template=payload.is_template,
        status=InterviewStatus.NOT_STARTED,
    )

    db.add(interview)
    db.commit()
    db.refresh(interview)

    logger.info(f"Interview created: interview_id={interview.id}, user_id={user.id}, category={interview.category.value}")
    return serialize_interview(interview)
