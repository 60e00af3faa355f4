"""
Tests for the AI adapter: JSON extraction, prompt content and lenient parsing.
"""
import pytest

from mockprep.core.errors import AdapterError
from mockprep.services.interview_ai import (
    AnsweredQuestion,
    InterviewAI,
    InterviewAnalysis,
    InterviewMeta,
    QuestionGenerationSpec,
    build_analysis_prompt,
    build_question_prompt,
    clamp_score,
    extract_json_object,
)

from conftest import ScriptedProvider, analysis_payload, questions_payload


def _spec(**overrides):
    values = dict(
        title="Backend Fundamentals",
        category="TECHNICAL",
        difficulty="INTERMEDIATE",
        topics=["REST", "SQL"],
        description="APIs and databases",
        role="backend",
        level="mid",
        question_count=3,
    )
    values.update(overrides)
    return QuestionGenerationSpec(**values)


def _meta():
    return InterviewMeta(title="Backend Fundamentals", category="TECHNICAL", difficulty="INTERMEDIATE", topics=["REST"])


# ============================================
# JSON extraction
# ============================================

def test_extract_plain_object():
    assert extract_json_object('{"a": 1}') == {"a": 1}


def test_extract_ignores_prose_and_fences():
    text = 'Sure! Here is the result:\n```json\n{"overallScore": 80, "summary": "ok"}\n```\nHope it helps.'
    assert extract_json_object(text) == {"overallScore": 80, "summary": "ok"}


def test_extract_handles_braces_inside_strings():
    text = 'Result: {"summary": "use {curly} braces", "nested": {"x": "}"}} trailing'
    parsed = extract_json_object(text)
    assert parsed["summary"] == "use {curly} braces"
    assert parsed["nested"] == {"x": "}"}


def test_extract_skips_invalid_fragment():
    text = "Pick {one} of these: {\"score\": 5}"
    assert extract_json_object(text) == {"score": 5}


@pytest.mark.parametrize("text", ["", "no json here", "{not: valid", "[1, 2, 3]"])
def test_extract_rejects_missing_or_invalid_object(text):
    with pytest.raises(AdapterError):
        extract_json_object(text)


def test_clamp_score():
    assert clamp_score(150) == 100
    assert clamp_score(-20) == 0
    assert clamp_score("87.6") == 88
    assert clamp_score(None) == 0
    assert clamp_score("n/a") == 0


def test_analysis_model_clamps_scores():
    analysis = InterviewAnalysis(
        overall_score=140,
        question_scores=[{"questionId": "q1", "score": -5, "feedback": ""}],
        skill_scores=[{"skillName": "SQL", "score": 101}],
    )
    assert analysis.overall_score == 100
    assert analysis.question_scores[0].score == 0
    assert analysis.skill_scores[0].score == 100


# ============================================
# Prompts
# ============================================

def test_question_prompt_embeds_interview_fields():
    prompt = build_question_prompt(_spec())
    assert "Generate 3 interview questions" in prompt
    assert "Title: Backend Fundamentals" in prompt
    assert "Role: backend" in prompt
    assert "Level: mid" in prompt
    assert "REST, SQL" in prompt
    assert "system design" in prompt


def test_question_prompt_behavioral_uses_star():
    prompt = build_question_prompt(_spec(category="BEHAVIORAL"))
    assert "STAR" in prompt


def test_analysis_prompt_labels_responses_and_formats_time():
    prompt = build_analysis_prompt(_meta(), [
        AnsweredQuestion(reference="q2", question="What is an index?", answer="A lookup structure", time_spent=125),
    ])
    assert "[q2] Question: What is an index?" in prompt
    assert "Answer: A lookup structure" in prompt
    assert "Time Spent: 2m 5s" in prompt


# ============================================
# Adapter
# ============================================

def test_generate_questions_parses_list():
    provider = ScriptedProvider([questions_payload(3)])
    questions = InterviewAI(provider).generate_questions(_spec())

    assert [q.id for q in questions] == ["q1", "q2", "q3"]
    assert questions[0].question == "Question number 1?"
    assert questions[0].context == "Context 1"
    assert questions[0].expected_topics == ["topic"]


def test_generate_questions_truncates_to_requested_count():
    provider = ScriptedProvider([questions_payload(5)])
    questions = InterviewAI(provider).generate_questions(_spec(question_count=2))
    assert len(questions) == 2


def test_generate_questions_drops_malformed_items():
    provider = ScriptedProvider([{"questions": ["bad", {"question": ""}, {"question": "Valid?"}]}])
    questions = InterviewAI(provider).generate_questions(_spec())
    assert [q.question for q in questions] == ["Valid?"]


@pytest.mark.parametrize("output", [
    '{"questions": []}',
    '{"items": [{"question": "x"}]}',
    "I cannot help with that.",
])
def test_generate_questions_rejects_unusable_output(output):
    provider = ScriptedProvider([output])
    with pytest.raises(AdapterError):
        InterviewAI(provider).generate_questions(_spec())


def test_provider_failure_is_wrapped():
    provider = ScriptedProvider([RuntimeError("connection reset")])
    with pytest.raises(AdapterError) as exc_info:
        InterviewAI(provider).generate_questions(_spec())
    assert "connection reset" in exc_info.value.message


def test_missing_provider_raises_not_configured():
    with pytest.raises(AdapterError) as exc_info:
        InterviewAI(None).analyze_responses(_meta(), [])
    assert exc_info.value.message == "AI not configured"


def test_analyze_responses_parses_payload():
    provider = ScriptedProvider([analysis_payload(("q1", "q2"))])
    analysis = InterviewAI(provider).analyze_responses(_meta(), [
        AnsweredQuestion(reference="q1", question="Q1?", answer="A1", time_spent=30),
    ])

    assert analysis.overall_score == 78
    assert analysis.strengths == ["Clear communication", "Good fundamentals"]
    assert [s.question_id for s in analysis.question_scores] == ["q1", "q2"]
    assert analysis.skill_scores[1].skill_name == "Communication"
    assert "[q1] Question: Q1?" in provider.prompts[0]


def test_analyze_responses_is_lenient():
    output = 'Analysis:\n{"overallScore": "250", "strengths": "Fast\\n\\nAccurate", ' \
             '"questionScores": [{"questionId": 3, "score": "abc"}, {"score": 50}, "junk"], ' \
             '"skillScores": [{"skillName": "", "score": 10}, {"skillName": "SQL"}]}'
    analysis = InterviewAI(ScriptedProvider([output])).analyze_responses(_meta(), [])

    assert analysis.overall_score == 100
    assert analysis.summary == ""
    assert analysis.strengths == ["Fast", "Accurate"]
    assert analysis.weaknesses == []
    assert len(analysis.question_scores) == 1
    assert analysis.question_scores[0].question_id == "3"
    assert analysis.question_scores[0].score == 0
    assert analysis.question_scores[0].feedback == ""
    assert [(s.skill_name, s.score) for s in analysis.skill_scores] == [("SQL", 0)]


def test_analyze_responses_rejects_missing_object():
    with pytest.raises(AdapterError):
        InterviewAI(ScriptedProvider(["Sorry, I cannot score this."])).analyze_responses(_meta(), [])


@pytest.mark.parametrize("output", [
    '{"overallScore": 50, "questionScores": 5, "skillScores": true}',
    '{"overallScore": 50, "questionScores": {"questionId": "q1"}, "skillScores": "SQL"}',
])
def test_analyze_responses_ignores_non_list_score_fields(output):
    analysis = InterviewAI(ScriptedProvider([output])).analyze_responses(_meta(), [])

    assert analysis.overall_score == 50
    assert analysis.question_scores == []
    assert analysis.skill_scores == []


@pytest.mark.parametrize("value", ["Infinity", "-Infinity", "NaN"])
def test_analyze_responses_non_finite_scores_default_to_zero(value):
    output = f'{{"overallScore": {value}, "skillScores": [{{"skillName": "SQL", "score": {value}}}]}}'
    analysis = InterviewAI(ScriptedProvider([output])).analyze_responses(_meta(), [])

    assert analysis.overall_score == 0
    assert analysis.skill_scores[0].score == 0


def test_clamp_score_non_finite():
    assert clamp_score(float("inf")) == 0
    assert clamp_score(float("-inf")) == 0
    assert clamp_score(float("nan")) == 0


def test_generate_questions_coerces_non_string_context():
    provider = ScriptedProvider([{"questions": [
        {"id": "q1", "question": "Why?", "context": 123},
        {"id": "q2", "question": "How?", "context": ""},
    ]}])
    questions = InterviewAI(provider).generate_questions(_spec())

    assert questions[0].context == "123"
    assert questions[1].context is None
