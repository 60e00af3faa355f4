"""
Shared fixtures: in-memory database, scripted LLM provider, test client and tokens.
"""
import json
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mockprep.core import config
from mockprep.core.auth_dependency import get_db
from mockprep.core.security import create_access_token
from mockprep.db.base import Base
from mockprep.db.models.interview import Interview, InterviewCategory, InterviewDifficulty
from mockprep.db.models.user import User
from mockprep.llm.provider import LLMProvider, LLMResponse
from mockprep.main import app
from mockprep.services.interview_ai import InterviewAI, get_interview_ai

config.AUTH_JWT_SECRET = "test-secret"
config.AUTH_JWT_AUDIENCE = None

# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


class ScriptedProvider(LLMProvider):
    """LLM provider returning queued outputs in order and recording every prompt."""

    def __init__(self, outputs=None):
        self.outputs = list(outputs or [])
        self.prompts = []

    def queue(self, output):
        self.outputs.append(output)

    def chat(self, messages, model, temperature=0.7, max_tokens=None, **kwargs):
        self.prompts.append(messages[-1]["content"])
        if not self.outputs:
            raise RuntimeError("no scripted output left")
        output = self.outputs.pop(0)
        if isinstance(output, Exception):
            raise output
        if not isinstance(output, str):
            output = json.dumps(output)
        return LLMResponse(content=output, tokens_in=10, tokens_out=20, model=model)


def questions_payload(count=3):
    return {
        "questions": [
            {
                "id": f"q{i}",
                "question": f"Question number {i}?",
                "context": f"Context {i}",
                "expectedTopics": ["topic"],
            }
            for i in range(1, count + 1)
        ]
    }


def analysis_payload(question_ids=("q1", "q2", "q3"), skills=None):
    return {
        "overallScore": 78,
        "summary": "Solid performance overall.",
        "strengths": ["Clear communication", "Good fundamentals"],
        "weaknesses": ["Limited depth on scaling"],
        "questionScores": [
            {"questionId": qid, "score": 70 + i, "feedback": f"Feedback for {qid}"}
            for i, qid in enumerate(question_ids)
        ],
        "skillScores": skills if skills is not None else [
            {"skillName": "Problem Solving", "score": 80},
            {"skillName": "Communication", "score": 85},
        ],
    }


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=test_engine)
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def provider():
    return ScriptedProvider()


@pytest.fixture
def ai(provider):
    return InterviewAI(provider)


@pytest.fixture
def client(db, ai):
    """Test client sharing the test database and the scripted AI adapter."""
    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_interview_ai] = lambda: ai
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def make_token(subject="user_alice", email="alice@example.com", name="Alice Smith", **claims):
    data = {"sub": subject, "email": email, "name": name}
    data.update(claims)
    return create_access_token(data)


def auth_headers(subject="user_alice", **claims):
    return {"Authorization": f"Bearer {make_token(subject, **claims)}"}


@pytest.fixture
def alice(db):
    user = User(external_id="user_alice", email="alice@example.com", name="Alice Smith")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def bob(db):
    user = User(external_id="user_bob", email="bob@example.com", name="Bob Jones")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def alice_interview(db, alice):
    interview = Interview(
        user_id=alice.id,
        title="Backend Fundamentals",
        description="APIs and databases",
        category=InterviewCategory.TECHNICAL,
        difficulty=InterviewDifficulty.INTERMEDIATE,
        duration=45,
        topics=["REST", "SQL"],
    )
    db.add(interview)
    db.commit()
    db.refresh(interview)
    return interview


@pytest.fixture
def template_interview(db):
    interview = Interview(
        user_id=None,
        title="Leadership & Management",
        description="Team leadership and conflict resolution",
        category=InterviewCategory.BEHAVIORAL,
        difficulty=InterviewDifficulty.ADVANCED,
        duration=30,
        topics=["Leadership"],
        is_template=True,
    )
    db.add(interview)
    db.commit()
    db.refresh(interview)
    return interview
