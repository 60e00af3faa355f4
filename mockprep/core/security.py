import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from jose import jwt, JWTError

from mockprep.core import config
from mockprep.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)


@dataclass
class Identity:
    """Caller identity as asserted by the identity provider."""
    subject: str
    email: str = ""
    name: Optional[str] = None


def _email_from_claims(claims: dict) -> str:
    email = claims.get("email")
    if email:
        return email
    # Some providers only ship a list of addresses
    addresses = claims.get("email_addresses") or []
    if addresses and isinstance(addresses[0], dict):
        return addresses[0].get("email_address", "") or ""
    return ""


def _name_from_claims(claims: dict) -> Optional[str]:
    if claims.get("name"):
        return claims["name"]
    parts = [claims.get("given_name"), claims.get("family_name")]
    joined = " ".join(p for p in parts if p)
    return joined or None


def decode_identity_token(token: str) -> Identity:
    """
    Verify an identity-provider bearer token and return the caller identity.

    Raises:
        UnauthorizedError: if the secret is not configured, the signature or
            expiry is invalid, or the token carries no subject.
    """
    if not config.AUTH_JWT_SECRET:
        logger.error("AUTH_JWT_SECRET not configured - cannot verify identity tokens")
        raise UnauthorizedError("Authentication not configured")

    options = {"verify_aud": bool(config.AUTH_JWT_AUDIENCE)}
    try:
        claims = jwt.decode(
            token,
            config.AUTH_JWT_SECRET,
            algorithms=[config.AUTH_JWT_ALGORITHM],
            audience=config.AUTH_JWT_AUDIENCE,
            options=options,
        )
    except JWTError as e:
        logger.info(f"Rejected identity token: {e}")
        raise UnauthorizedError("Invalid token")

    subject = claims.get("sub")
    if not subject:
        raise UnauthorizedError("Invalid token")

    return Identity(
        subject=str(subject),
        email=_email_from_claims(claims),
        name=_name_from_claims(claims),
    )


def create_access_token(data: dict, expires_delta: timedelta = None):
    """Mint a token in the identity provider's format (local development and tests)."""
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=60))
    to_encode.update({"exp": expire})
    if config.AUTH_JWT_AUDIENCE and "aud" not in to_encode:
        to_encode["aud"] = config.AUTH_JWT_AUDIENCE
    return jwt.encode(to_encode, config.AUTH_JWT_SECRET, algorithm=config.AUTH_JWT_ALGORITHM)
