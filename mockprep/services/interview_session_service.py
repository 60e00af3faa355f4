"""
Interview session lifecycle: start -> answer -> submit -> score -> results.

Sequences the AI adapter and the database for the four session operations.
Question sets are generated once per interview; submissions are scored by
the AI first and then persisted in a single transaction.
"""
import logging
import re
from typing import Optional, List, Dict

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mockprep.core import config
from mockprep.core.access import enforce_access
from mockprep.core.errors import RequestValidationFailed, ResultsNotReadyError
from mockprep.db.models.interview import Interview, InterviewStatus
from mockprep.db.models.interview_question import InterviewQuestion
from mockprep.db.models.interview_result import InterviewResult, join_lines
from mockprep.db.models.skill_score import SkillScore
from mockprep.db.models.user import User
from mockprep.schemas.interview import ResultSummary
from mockprep.schemas.session import (
    InterviewResultsData,
    ResultResponse,
    ScoredQuestion,
    SessionAnswer,
    SessionInterview,
    SessionQuestion,
    SkillScoreResponse,
    StartSessionData,
    SubmitSessionData,
)
from mockprep.services.interview_ai import (
    AnsweredQuestion,
    InterviewAI,
    InterviewAnalysis,
    InterviewMeta,
    QuestionGenerationSpec,
)
from mockprep.services.interview_service import (
    load_interview,
    serialize_interview,
    summarize_interview,
)

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")

# One retry covers a concurrent submit that inserted the result or skill rows first
STORE_ATTEMPTS = 2


def resolve_question(reference: Optional[str], questions: List[InterviewQuestion]) -> Optional[InterviewQuestion]:
    """
    Map a question reference onto a persisted question.

    A reference matching a question id wins. Otherwise every digit in the
    reference is read as a 1-based position ("q3" -> third question) into
    `questions`, which must be in creation order. Returns None when nothing
    matches.
    """
    if reference is None:
        return None
    ref = str(reference).strip()
    if not ref:
        return None

    for question in questions:
        if question.id == ref:
            return question

    digits = _NON_DIGITS.sub("", ref)
    if not digits:
        return None
    position = int(digits)
    if 1 <= position <= len(questions):
        return questions[position - 1]
    return None


class SessionOrchestrator:
    """Session operations for one request, over an injected db session and AI adapter."""

    def __init__(self, db: Session, ai: InterviewAI, question_count: Optional[int] = None):
        self.db = db
        self.ai = ai
        self.question_count = question_count or config.QUESTION_COUNT

    def _questions(self, interview_id: str) -> List[InterviewQuestion]:
        return (
            self.db.query(InterviewQuestion)
            .filter(InterviewQuestion.interview_id == interview_id)
            .order_by(InterviewQuestion.position)
            .all()
        )

    def _generate_questions(self, interview: Interview) -> List[InterviewQuestion]:
        interview_id = interview.id
        generated = self.ai.generate_questions(QuestionGenerationSpec(
            title=interview.title,
            description=interview.description,
            category=interview.category.value,
            difficulty=interview.difficulty.value,
            topics=list(interview.topics or []),
            role=interview.role,
            level=interview.level,
            question_count=self.question_count,
        ))

        self.db.add_all([
            InterviewQuestion(
                interview_id=interview_id,
                position=position,
                question=item.question,
                context=item.context,
                expected_topics=item.expected_topics,
            )
            for position, item in enumerate(generated, start=1)
        ])
        try:
            self.db.commit()
        except IntegrityError:
            # (interview_id, position) is unique: a concurrent start stored its set first
            self.db.rollback()
            existing = self._questions(interview_id)
            if not existing:
                raise
            logger.info(f"Concurrent start detected, reusing stored questions: interview_id={interview_id}")
            return existing

        logger.info(f"Questions stored: interview_id={interview_id}, count={len(generated)}")
        return self._questions(interview_id)

    def start_session(self, interview_id: str, user: User) -> StartSessionData:
        """
        Start (or resume) a session.

        Reuses the stored question set when there is one, otherwise generates
        and stores a fresh set. Moves NOT_STARTED interviews to IN_PROGRESS.
        """
        interview = load_interview(self.db, interview_id)
        enforce_access(interview, user, write=True)

        questions = self._questions(interview_id)
        if questions:
            logger.debug(f"Reusing {len(questions)} stored questions: interview_id={interview_id}")
        else:
            questions = self._generate_questions(interview)

        # Compare-and-set keeps the status monotonic
        self.db.query(Interview).filter(
            Interview.id == interview_id,
            Interview.status == InterviewStatus.NOT_STARTED,
        ).update({Interview.status: InterviewStatus.IN_PROGRESS}, synchronize_session=False)
        self.db.commit()
        self.db.refresh(interview)

        logger.info(f"Session started: interview_id={interview_id}, user_id={user.id}, questions={len(questions)}")
        return StartSessionData(
            interview=serialize_interview(interview),
            questions=[SessionQuestion(id=q.id, question=q.question) for q in questions],
        )

    def get_session(self, interview_id: str, user: Optional[User]) -> SessionInterview:
        interview = load_interview(self.db, interview_id)
        enforce_access(interview, user)

        data = serialize_interview(interview).model_dump()
        data["questions"] = [
            SessionQuestion(id=q.id, question=q.question) for q in self._questions(interview_id)
        ]
        return SessionInterview(**data)

    def _store_analysis(
        self,
        interview: Interview,
        questions: List[InterviewQuestion],
        answered: Dict[str, SessionAnswer],
        analysis: InterviewAnalysis,
    ) -> InterviewResult:
        """Stage every write of a submission on the session; the caller commits."""
        interview_id = interview.id

        for question in questions:
            response = answered.get(question.id)
            if response is not None:
                question.answer = response.answer

        for score in analysis.question_scores:
            question = resolve_question(score.question_id, questions)
            if question is None:
                logger.warning(
                    f"AI question reference out of range, skipping: "
                    f"interview_id={interview_id}, reference={score.question_id}"
                )
                continue
            question.score = score.score
            question.feedback = score.feedback

        result = (
            self.db.query(InterviewResult)
            .filter(InterviewResult.interview_id == interview_id)
            .first()
        )
        if result is None:
            result = InterviewResult(interview_id=interview_id)
            self.db.add(result)
        result.overall_score = analysis.overall_score
        result.summary = analysis.summary
        result.strengths = join_lines(analysis.strengths)
        result.weaknesses = join_lines(analysis.weaknesses)

        latest_skills = {item.skill_name: item.score for item in analysis.skill_scores}
        stored_skills = {
            s.skill_name: s
            for s in self.db.query(SkillScore).filter(SkillScore.interview_id == interview_id).all()
        }
        for skill_name, score in latest_skills.items():
            row = stored_skills.get(skill_name)
            if row is None:
                row = SkillScore(interview_id=interview_id, skill_name=skill_name)
                self.db.add(row)
            row.score = score

        interview.status = InterviewStatus.COMPLETED
        interview.completions = Interview.completions + 1
        return result

    def submit_session(self, interview_id: str, user: User, responses: List[SessionAnswer]) -> SubmitSessionData:
        """
        Score submitted answers and store the analysis.

        Nothing is written when the AI call fails. Once the analysis is back,
        question updates, the result and skill scores and the status change
        are committed together.
        """
        if not responses:
            raise RequestValidationFailed("Invalid request: responses array is required")

        interview = load_interview(self.db, interview_id)
        enforce_access(interview, user, write=True)
        questions = self._questions(interview_id)

        answered: Dict[str, SessionAnswer] = {}
        prompt_items: Dict[str, AnsweredQuestion] = {}
        for response in responses:
            question = resolve_question(response.question_id, questions)
            if question is None:
                logger.warning(
                    f"Submitted answer does not match a stored question: "
                    f"interview_id={interview_id}, question_id={response.question_id}"
                )
                prompt_items[f"unmatched:{response.question_id}"] = AnsweredQuestion(
                    reference=response.question_id,
                    question=response.question or "",
                    answer=response.answer,
                    time_spent=response.time_spent,
                )
                continue
            answered[question.id] = response
            prompt_items[question.id] = AnsweredQuestion(
                reference=question.reference,
                question=response.question or question.question,
                answer=response.answer,
                time_spent=response.time_spent,
            )

        analysis = self.ai.analyze_responses(
            InterviewMeta(
                title=interview.title,
                category=interview.category.value,
                difficulty=interview.difficulty.value,
                topics=list(interview.topics or []),
            ),
            list(prompt_items.values()),
        )

        result = None
        for attempt in range(1, STORE_ATTEMPTS + 1):
            try:
                result = self._store_analysis(interview, questions, answered, analysis)
                self.db.commit()
                break
            except IntegrityError:
                # A concurrent submit inserted the result or a skill row first
                self.db.rollback()
                if attempt == STORE_ATTEMPTS:
                    logger.exception(f"Failed to store interview analysis: interview_id={interview_id}")
                    raise
                logger.info(f"Concurrent submit detected, overwriting its analysis: interview_id={interview_id}")
            except Exception:
                self.db.rollback()
                logger.exception(f"Failed to store interview analysis: interview_id={interview_id}")
                raise

        self.db.refresh(result)
        logger.info(
            f"Interview submitted: interview_id={interview_id}, user_id={user.id}, "
            f"answers={len(answered)}, overall_score={result.overall_score}"
        )

        return SubmitSessionData(
            result=ResultResponse(
                id=result.id,
                interview_id=result.interview_id,
                overall_score=result.overall_score,
                summary=result.summary,
                strengths=result.strengths_list,
                weaknesses=result.weaknesses_list,
                created_at=result.created_at,
                updated_at=result.updated_at,
            ),
            analysis=analysis,
        )

    def get_results(self, interview_id: str, user: Optional[User]) -> InterviewResultsData:
        interview = load_interview(self.db, interview_id)
        enforce_access(interview, user)

        result = (
            self.db.query(InterviewResult)
            .filter(InterviewResult.interview_id == interview_id)
            .first()
        )
        if result is None:
            raise ResultsNotReadyError()

        skill_scores = (
            self.db.query(SkillScore)
            .filter(SkillScore.interview_id == interview_id)
            .order_by(SkillScore.skill_name)
            .all()
        )

        return InterviewResultsData(
            interview=summarize_interview(interview),
            results=ResultSummary(
                overall_score=result.overall_score,
                summary=result.summary or "",
                strengths=result.strengths_list,
                weaknesses=result.weaknesses_list,
            ),
            questions=[
                ScoredQuestion(
                    id=q.id,
                    question=q.question,
                    answer=q.answer,
                    score=q.score,
                    feedback=q.feedback,
                )
                for q in self._questions(interview_id)
            ],
            skill_scores=[SkillScoreResponse(skill_name=s.skill_name, score=s.score) for s in skill_scores],
        )
