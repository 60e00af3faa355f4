"""
AI adapter for interview sessions.

Wraps two prompt templates against the configured LLM provider:
question generation for an interview spec, and scoring of answered
questions. Both expect a single JSON object somewhere in the model output.
Returns validated Pydantic models; any provider or parsing failure is
raised as AdapterError so the caller can abort without partial writes.
"""
import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from mockprep.core.errors import AdapterError
from mockprep.llm.provider import LLMProvider
from mockprep.llm.router import get_model_for_feature, is_model_available

logger = logging.getLogger(__name__)


# ============================================
# Pydantic Response Models
# ============================================

def clamp_score(value: Any) -> int:
    """Coerce a model-supplied score into an int within 0-100 (0 when unusable)."""
    try:
        score = round(float(value))
    except (TypeError, ValueError, OverflowError):
        # NaN raises ValueError, +/-Infinity raises OverflowError
        return 0
    return max(0, min(100, score))


class _CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class GeneratedQuestion(_CamelModel):
    """One question produced by the generation prompt."""
    id: str = Field(..., description="Transient reference assigned by the model (q1, q2, ...)")
    question: str = Field(..., min_length=1, description="Question text")
    context: Optional[str] = Field(None, description="Scenario or context for the question")
    expected_topics: List[str] = Field(default_factory=list, description="Topics a good answer touches")


class QuestionScore(_CamelModel):
    question_id: str = Field(..., description="Question reference echoed by the model")
    score: int = Field(0, ge=0, le=100)
    feedback: str = Field("", description="Feedback for this answer")

    @field_validator("score", mode="before")
    @classmethod
    def _clamp(cls, v):
        return clamp_score(v)


class SkillScoreItem(_CamelModel):
    skill_name: str = Field(..., min_length=1)
    score: int = Field(0, ge=0, le=100)

    @field_validator("score", mode="before")
    @classmethod
    def _clamp(cls, v):
        return clamp_score(v)


class InterviewAnalysis(_CamelModel):
    """Response model for interview analysis."""
    overall_score: int = Field(0, ge=0, le=100, description="Overall score 0-100")
    summary: str = Field("", description="Overall performance summary")
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    question_scores: List[QuestionScore] = Field(default_factory=list)
    skill_scores: List[SkillScoreItem] = Field(default_factory=list)

    @field_validator("overall_score", mode="before")
    @classmethod
    def _clamp(cls, v):
        return clamp_score(v)


@dataclass
class QuestionGenerationSpec:
    """Interview fields the generation prompt is built from."""
    title: str
    category: str
    difficulty: str
    topics: List[str] = field(default_factory=list)
    description: Optional[str] = None
    role: Optional[str] = None
    level: Optional[str] = None
    question_count: int = 10


@dataclass
class InterviewMeta:
    title: str
    category: str
    difficulty: str
    topics: List[str] = field(default_factory=list)


@dataclass
class AnsweredQuestion:
    """A question/answer pair as sent to the analysis prompt."""
    reference: str
    question: str
    answer: str
    time_spent: int = 0  # seconds


# ============================================
# JSON extraction
# ============================================

def _balanced_object_end(text: str, start: int) -> Optional[int]:
    """Index of the brace closing the object opened at `start`, or None."""
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return None


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Parse the first balanced-brace JSON object embedded in free text.

    Surrounding prose and markdown fences are ignored. Brace-delimited
    fragments that are not valid JSON objects are skipped.

    Raises:
        AdapterError: if no parsable JSON object is present.
    """
    if not text:
        raise AdapterError("Invalid JSON response from AI: empty output")

    start = text.find("{")
    while start != -1:
        end = _balanced_object_end(text, start)
        if end is None:
            break
        try:
            parsed = json.loads(text[start:end + 1])
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, dict):
            return parsed
        start = text.find("{", start + 1)

    logger.warning(f"No JSON object found in AI response: {text[:100]}")
    raise AdapterError("Invalid JSON response from AI")


def _pick(data: Dict[str, Any], *keys, default=None):
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return default


def _list(value) -> list:
    return value if isinstance(value, list) else []


def _string_list(value) -> List[str]:
    if isinstance(value, str):
        value = value.split("\n")
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


# ============================================
# Prompts
# ============================================

CATEGORY_GUIDANCE = {
    "TECHNICAL": "Include coding, system design, or problem-solving questions.",
    "SYSTEM_DESIGN": "Focus on architecture, scalability trade-offs and component design.",
    "BEHAVIORAL": "Frame questions so they can be answered with the STAR method (Situation, Task, Action, Result).",
    "CASE_STUDY": "Present business scenarios that require structured analytical reasoning.",
}


def build_question_prompt(spec: QuestionGenerationSpec) -> str:
    lines = [
        f"You are an expert technical interviewer. Generate {spec.question_count} interview questions for the following interview:",
        "",
        f"Title: {spec.title}",
    ]
    if spec.description:
        lines.append(f"Description: {spec.description}")
    lines.append(f"Category: {spec.category}")
    lines.append(f"Difficulty: {spec.difficulty}")
    if spec.role:
        lines.append(f"Role: {spec.role}")
    if spec.level:
        lines.append(f"Level: {spec.level}")
    lines.append(f"Topics to cover: {', '.join(spec.topics) if spec.topics else 'general'}")

    guidance = CATEGORY_GUIDANCE.get(spec.category, CATEGORY_GUIDANCE["TECHNICAL"])
    return "\n".join(lines) + f"""

Requirements:
1. Generate exactly {spec.question_count} questions
2. Questions should progressively increase in difficulty
3. Cover all mentioned topics appropriately
4. Questions should be practical and relevant to real-world scenarios
5. {guidance}
6. Each question should assess specific skills or knowledge areas

Return the response in the following JSON format:
{{
  "questions": [
    {{
      "id": "q1",
      "question": "The actual question text",
      "context": "Brief context or scenario for the question",
      "expectedTopics": ["topic1", "topic2"]
    }}
  ]
}}

Only return valid JSON, no additional text."""


def _format_time(seconds: int) -> str:
    seconds = max(0, int(seconds or 0))
    return f"{seconds // 60}m {seconds % 60}s"


def build_analysis_prompt(meta: InterviewMeta, responses: List[AnsweredQuestion]) -> str:
    blocks = []
    for r in responses:
        blocks.append(
            f"[{r.reference}] Question: {r.question}\n"
            f"Answer: {r.answer}\n"
            f"Time Spent: {_format_time(r.time_spent)}"
        )

    return f"""You are an expert interview evaluator. Analyze the following interview performance:

Interview Details:
- Title: {meta.title}
- Category: {meta.category}
- Difficulty: {meta.difficulty}
- Topics: {', '.join(meta.topics)}

Responses (each labelled with its question id in brackets):
{chr(10).join(blocks)}

Please provide a comprehensive analysis including:
1. Overall score (0-100) based on:
   - Technical accuracy and depth
   - Communication clarity
   - Problem-solving approach
   - Time management
   - Completeness of answers
2. Individual question scores with specific feedback, using the bracketed question id verbatim as questionId
3. Key strengths demonstrated
4. Areas for improvement
5. Skill-based scores for relevant competencies

Return the response in the following JSON format:
{{
  "overallScore": 85,
  "summary": "Overall performance summary...",
  "strengths": ["strength1", "strength2"],
  "weaknesses": ["weakness1", "weakness2"],
  "questionScores": [
    {{"questionId": "q1", "score": 90, "feedback": "Detailed feedback for this question..."}}
  ],
  "skillScores": [
    {{"skillName": "Problem Solving", "score": 85}},
    {{"skillName": "Communication", "score": 90}}
  ]
}}

Only return valid JSON, no additional text."""


# ============================================
# Adapter
# ============================================

class InterviewAI:
    """Stateless adapter over an LLMProvider; one provider call per operation."""

    def __init__(self, provider: Optional[LLMProvider]):
        self.provider = provider

    def _complete(self, feature: str, prompt: str, temperature: float) -> str:
        if self.provider is None:
            logger.error("OPENAI_API_KEY not configured - cannot call AI")
            raise AdapterError("AI not configured")

        model = get_model_for_feature(feature)
        try:
            response = self.provider.complete(prompt, model=model, temperature=temperature)
        except Exception as e:
            logger.error(f"AI call failed: feature={feature}, model={model}: {type(e).__name__}: {e}")
            raise AdapterError(f"AI service error: {e}") from e

        logger.info(
            f"AI call complete: feature={feature}, model={model}, "
            f"tokens_in={response.tokens_in}, tokens_out={response.tokens_out}, total={response.total_tokens}"
        )
        return response.content

    def generate_questions(self, spec: QuestionGenerationSpec) -> List[GeneratedQuestion]:
        """
        Generate the question set for an interview.

        All-or-nothing: an unusable response raises AdapterError and no
        question is returned.
        """
        text = self._complete("question_generation", build_question_prompt(spec), temperature=0.7)
        parsed = extract_json_object(text)

        raw_questions = parsed.get("questions")
        if not isinstance(raw_questions, list):
            raise AdapterError("Failed to generate interview questions: no question list in AI response")

        questions = []
        for index, item in enumerate(raw_questions, start=1):
            if not isinstance(item, dict):
                continue
            text_value = str(item.get("question") or "").strip()
            if not text_value:
                continue
            questions.append(GeneratedQuestion(
                id=str(item.get("id") or f"q{index}"),
                question=text_value,
                context=str(item["context"]).strip() or None if item.get("context") is not None else None,
                expected_topics=_string_list(_pick(item, "expectedTopics", "expected_topics", default=[])),
            ))

        if not questions:
            raise AdapterError("Failed to generate interview questions: AI returned no questions")

        if len(questions) > spec.question_count:
            questions = questions[:spec.question_count]

        logger.info(f"Generated {len(questions)} questions for '{spec.title}'")
        return questions

    def analyze_responses(self, meta: InterviewMeta, responses: List[AnsweredQuestion]) -> InterviewAnalysis:
        """
        Score answered questions.

        Missing or malformed fields default to empty/zero; only an absent or
        invalid top-level JSON object is an error.
        """
        text = self._complete("response_analysis", build_analysis_prompt(meta, responses), temperature=0.3)
        parsed = extract_json_object(text)

        question_scores = []
        for item in _list(_pick(parsed, "questionScores", "question_scores")):
            if not isinstance(item, dict):
                continue
            question_id = _pick(item, "questionId", "question_id")
            if question_id is None:
                continue
            question_scores.append(QuestionScore(
                question_id=str(question_id),
                score=item.get("score"),
                feedback=str(item.get("feedback") or ""),
            ))

        skill_scores = []
        for item in _list(_pick(parsed, "skillScores", "skill_scores")):
            if not isinstance(item, dict):
                continue
            skill_name = str(_pick(item, "skillName", "skill_name", default="")).strip()
            if not skill_name:
                continue
            skill_scores.append(SkillScoreItem(skill_name=skill_name, score=item.get("score")))

        return InterviewAnalysis(
            overall_score=_pick(parsed, "overallScore", "overall_score", default=0),
            summary=str(parsed.get("summary") or ""),
            strengths=_string_list(parsed.get("strengths")),
            weaknesses=_string_list(parsed.get("weaknesses")),
            question_scores=question_scores,
            skill_scores=skill_scores,
        )


@lru_cache(maxsize=1)
def get_interview_ai() -> InterviewAI:
    """
    Process-wide adapter, built on first use.

    Injected into routes with Depends so tests can override it.
    """
    if not is_model_available():
        logger.info("OPENAI_API_KEY not configured - AI-backed session operations will fail")
        return InterviewAI(provider=None)

    from mockprep.llm.openai_provider import OpenAIProvider
    return InterviewAI(provider=OpenAIProvider())
