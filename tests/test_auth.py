"""
Tests for identity tokens and the current-user endpoint.
"""
from datetime import timedelta

import pytest

from mockprep.core.errors import UnauthorizedError
from mockprep.core.security import Identity, create_access_token, decode_identity_token
from mockprep.db.models.user import User
from mockprep.services.user_service import get_or_upsert_user

from conftest import auth_headers


def test_decode_identity_token_reads_claims():
    token = create_access_token({"sub": "user_1", "email": "a@example.com", "name": "Ann Lee"})
    identity = decode_identity_token(token)

    assert identity.subject == "user_1"
    assert identity.email == "a@example.com"
    assert identity.name == "Ann Lee"


def test_decode_identity_token_claim_fallbacks():
    token = create_access_token({
        "sub": "user_2",
        "email_addresses": [{"email_address": "b@example.com"}],
        "given_name": "Ben",
        "family_name": "Ode",
    })
    identity = decode_identity_token(token)

    assert identity.email == "b@example.com"
    assert identity.name == "Ben Ode"


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "user_3"}, expires_delta=timedelta(minutes=-5))
    with pytest.raises(UnauthorizedError):
        decode_identity_token(token)


def test_token_without_subject_is_rejected():
    with pytest.raises(UnauthorizedError):
        decode_identity_token(create_access_token({"email": "nobody@example.com"}))


def test_upsert_creates_then_refreshes(db):
    user = get_or_upsert_user(db, Identity(subject="user_9", email="old@example.com", name="Old"))
    same = get_or_upsert_user(db, Identity(subject="user_9", email="new@example.com", name="New"))

    assert same.id == user.id
    assert same.email == "new@example.com"
    assert same.name == "New"
    assert db.query(User).count() == 1


def test_upsert_keeps_values_missing_from_token(db):
    get_or_upsert_user(db, Identity(subject="user_9", email="kept@example.com", name="Kept"))
    user = get_or_upsert_user(db, Identity(subject="user_9"))

    assert user.email == "kept@example.com"
    assert user.name == "Kept"


def test_me_creates_account_on_first_contact(client, db):
    response = client.get("/auth/me", headers=auth_headers("user_new", email="new@example.com", name="New User"))

    assert response.status_code == 200
    body = response.json()
    assert body["externalId"] == "user_new"
    assert body["email"] == "new@example.com"
    assert body["name"] == "New User"
    assert db.query(User).filter(User.external_id == "user_new").count() == 1


def test_me_refreshes_profile(client, alice):
    response = client.get("/auth/me", headers=auth_headers("user_alice", email="alice@new.example.com"))

    assert response.status_code == 200
    assert response.json()["id"] == alice.id
    assert response.json()["email"] == "alice@new.example.com"


def test_me_requires_token(client):
    response = client.get("/auth/me")

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Missing bearer token"}
