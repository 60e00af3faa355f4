from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from mockprep.core.errors import UnauthorizedError
from mockprep.core.security import Identity, decode_identity_token
from mockprep.db.session import SessionLocal
from mockprep.db.models.user import User
from mockprep.services.user_service import get_or_upsert_user

bearer_scheme = HTTPBearer(auto_error=False)


def get_db():
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_optional_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Identity]:
    """Identity from the bearer token, or None for anonymous callers."""
    if credentials is None:
        return None
    return decode_identity_token(credentials.credentials)


def get_current_identity(identity: Optional[Identity] = Depends(get_optional_identity)) -> Identity:
    if identity is None:
        raise UnauthorizedError("Missing bearer token")
    return identity


def get_current_user(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> User:
    """Authenticated caller's account, created on first contact."""
    return get_or_upsert_user(db, identity)


def get_optional_user(
    identity: Optional[Identity] = Depends(get_optional_identity),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Caller's account when a token is present; invalid tokens still fail with 401."""
    if identity is None:
        return None
    return get_or_upsert_user(db, identity)
