"""
Integration tests for the interview-session endpoints.
"""
from mockprep.db.models.interview import Interview, InterviewStatus

from conftest import analysis_payload, auth_headers, questions_payload


def test_full_session_flow(client, provider, db):
    headers = auth_headers("user_alice")

    created = client.post(
        "/interview",
        json={"title": "Backend Fundamentals", "category": "technical", "topics": ["REST", "SQL"]},
        headers=headers,
    )
    assert created.status_code == 201
    interview_id = created.json()["id"]

    provider.queue(questions_payload(3))
    started = client.post(f"/interview-session/start/{interview_id}", headers=headers)
    assert started.status_code == 200
    body = started.json()
    assert body["success"] is True
    assert body["data"]["interview"]["status"] == "IN_PROGRESS"
    questions = body["data"]["questions"]
    assert len(questions) == 3
    assert set(questions[0]) == {"id", "question"}

    # Restarting returns the same set without another model call
    restarted = client.post(f"/interview-session/start/{interview_id}", headers=headers)
    assert [q["id"] for q in restarted.json()["data"]["questions"]] == [q["id"] for q in questions]

    session = client.get(f"/interview-session/{interview_id}", headers=headers)
    assert session.status_code == 200
    assert [q["id"] for q in session.json()["data"]["questions"]] == [q["id"] for q in questions]

    provider.queue(analysis_payload(("q1", "q2", "q3")))
    submitted = client.post(
        f"/interview-session/submit/{interview_id}",
        json={
            "responses": [
                {"questionId": q["id"], "question": q["question"], "answer": f"Answer {i}", "timeSpent": 45}
                for i, q in enumerate(questions, start=1)
            ]
        },
        headers=headers,
    )
    assert submitted.status_code == 200
    data = submitted.json()["data"]
    assert data["result"]["overallScore"] == 78
    assert data["result"]["interviewId"] == interview_id
    assert data["analysis"]["questionScores"][0] == {"questionId": "q1", "score": 70, "feedback": "Feedback for q1"}
    assert data["analysis"]["skillScores"][0]["skillName"] == "Problem Solving"

    results = client.get(f"/interview-session/results/{interview_id}", headers=headers)
    assert results.status_code == 200
    view = results.json()["data"]
    assert view["interview"]["status"] == "COMPLETED"
    assert view["results"]["overallScore"] == 78
    assert view["results"]["strengths"] == ["Clear communication", "Good fundamentals"]
    assert [q["answer"] for q in view["questions"]] == ["Answer 1", "Answer 2", "Answer 3"]
    assert [q["score"] for q in view["questions"]] == [70, 71, 72]
    assert {s["skillName"] for s in view["skillScores"]} == {"Problem Solving", "Communication"}

    db.expire_all()
    interview = db.get(Interview, interview_id)
    assert interview.status == InterviewStatus.COMPLETED
    assert interview.completions == 1
    assert len(provider.prompts) == 2


def test_submit_with_transient_references(client, provider, alice_interview):
    headers = auth_headers("user_alice")
    provider.queue(questions_payload(3))
    client.post(f"/interview-session/start/{alice_interview.id}", headers=headers)

    provider.queue(analysis_payload(("q2",)))
    response = client.post(
        f"/interview-session/submit/{alice_interview.id}",
        json={"responses": [{"questionId": "q2", "question": "Question number 2?", "answer": "Second", "timeSpent": 10}]},
        headers=headers,
    )
    assert response.status_code == 200

    view = client.get(f"/interview-session/results/{alice_interview.id}", headers=headers).json()["data"]
    assert [q["answer"] for q in view["questions"]] == [None, "Second", None]
    assert [q["score"] for q in view["questions"]] == [None, 70, None]


def test_results_before_submit(client, alice_interview):
    response = client.get(f"/interview-session/results/{alice_interview.id}", headers=auth_headers("user_alice"))

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": "Interview results not found. Please complete the interview first.",
    }


def test_start_unknown_interview(client):
    response = client.post("/interview-session/start/missing", headers=auth_headers("user_alice"))

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Interview not found"}


def test_session_routes_require_auth(client, alice_interview):
    assert client.post(f"/interview-session/start/{alice_interview.id}").status_code == 401
    assert client.get(f"/interview-session/{alice_interview.id}").status_code == 401
    assert client.get(f"/interview-session/results/{alice_interview.id}").status_code == 401
    response = client.post(f"/interview-session/submit/{alice_interview.id}", json={"responses": []})
    assert response.status_code == 401
    assert response.json()["success"] is False


def test_session_of_other_user_is_forbidden(client, provider, alice_interview, bob):
    response = client.post(f"/interview-session/start/{alice_interview.id}", headers=auth_headers("user_bob"))

    assert response.status_code == 403
    assert provider.prompts == []


def test_submit_rejects_empty_responses(client, alice_interview):
    response = client.post(
        f"/interview-session/submit/{alice_interview.id}",
        json={"responses": []},
        headers=auth_headers("user_alice"),
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"].startswith("Invalid request")


def test_submit_rejects_malformed_body(client, alice_interview):
    response = client.post(
        f"/interview-session/submit/{alice_interview.id}",
        json={"responses": "not a list"},
        headers=auth_headers("user_alice"),
    )

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_ai_failure_on_start_returns_500(client, provider, alice_interview):
    provider.queue("The model is overloaded, please retry.")
    response = client.post(f"/interview-session/start/{alice_interview.id}", headers=auth_headers("user_alice"))

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Invalid JSON response from AI"}


def test_ai_failure_on_submit_keeps_interview_in_progress(client, provider, db, alice_interview):
    headers = auth_headers("user_alice")
    provider.queue(questions_payload(2))
    questions = client.post(
        f"/interview-session/start/{alice_interview.id}", headers=headers
    ).json()["data"]["questions"]

    provider.queue(RuntimeError("read timeout"))
    response = client.post(
        f"/interview-session/submit/{alice_interview.id}",
        json={"responses": [{"questionId": q["id"], "answer": "x"} for q in questions]},
        headers=headers,
    )

    assert response.status_code == 500
    assert response.json()["error"] == "AI service error: read timeout"
    db.expire_all()
    assert db.get(Interview, alice_interview.id).status == InterviewStatus.IN_PROGRESS
    assert client.get(f"/interview-session/results/{alice_interview.id}", headers=headers).status_code == 404
