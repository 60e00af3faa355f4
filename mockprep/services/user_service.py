"""
User accounts mirrored lazily from the identity provider.
"""
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mockprep.core.security import Identity
from mockprep.db.models.user import User

logger = logging.getLogger(__name__)


def get_or_upsert_user(db: Session, identity: Identity) -> User:
    """
    Return the account for an identity-provider subject, creating it on first
    contact and refreshing email/name when the provider reports new values.
    """
    user = db.query(User).filter(User.external_id == identity.subject).first()

    if user is None:
        user = User(
            external_id=identity.subject,
            email=identity.email or "",
            name=identity.name,
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Another request created the same account first
            db.rollback()
            user = db.query(User).filter(User.external_id == identity.subject).one()
        else:
            db.refresh(user)
            logger.info(f"User created: user_id={user.id}")
            return user

    changed = False
    if identity.email and identity.email != user.email:
        user.email = identity.email
        changed = True
    if identity.name and identity.name != user.name:
        user.name = identity.name
        changed = True

    if changed:
        db.commit()
        db.refresh(user)
        logger.debug(f"User profile refreshed: user_id={user.id}")

    return user
