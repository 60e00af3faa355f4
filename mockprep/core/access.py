"""
Access/ownership rules for interviews.

Templates are readable by anyone, including anonymous callers. Everything
else, and every write, requires the caller to own the interview.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from mockprep.core.errors import ForbiddenError, NotFoundError, UnauthorizedError
from mockprep.db.models.interview import Interview
from mockprep.db.models.user import User

logger = logging.getLogger(__name__)

ALLOW = "allow"
NOT_FOUND = "not_found"
UNAUTHORIZED = "unauthorized"
FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    reason: str = ALLOW


def authorize(interview: Interview, caller: Optional[User], write: bool = False) -> AccessDecision:
    """Decide whether `caller` may read (or write, when `write`) `interview`."""
    if not write and interview.is_template:
        return AccessDecision(True)

    if caller is None:
        # Unknown readers are told the interview does not exist
        return AccessDecision(False, UNAUTHORIZED if write else NOT_FOUND)

    if interview.user_id != caller.id:
        return AccessDecision(False, FORBIDDEN)

    return AccessDecision(True)


def enforce_access(interview: Interview, caller: Optional[User], write: bool = False) -> None:
    """Raise the error matching a denied decision."""
    decision = authorize(interview, caller, write=write)
    if decision.allowed:
        return

    logger.info(
        f"Access denied: interview_id={interview.id}, "
        f"user_id={caller.id if caller else None}, write={write}, reason={decision.reason}"
    )
    if decision.reason == NOT_FOUND:
        raise NotFoundError("Interview not found")
    if decision.reason == UNAUTHORIZED:
        raise UnauthorizedError()
    raise ForbiddenError("You do not have access to this interview")
