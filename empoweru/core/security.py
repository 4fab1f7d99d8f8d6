"""
# `empoweru/core/security.py` - Access control gate

FastAPI dependencies that guard the routers. A request passes through them in order:

1. **Authentication** - `get_current_subject` verifies the bearer token (401 on failure).
2. **Role check** - `require_admin_or_mod` loads `users/{uid}` and accepts only the
   `admin` and `moderator` roles (403 otherwise).
3. **Self check** - `require_self` compares the `uid` query parameter with the token
   subject (403 on mismatch). Routes keyed by a path uid call `authorize_self` directly.

The role check and the self check are independent: an admin still fails the self check
when the supplied `uid` is not their own. Every check completes before the route body
touches the database.
"""
import logging
from typing import Iterable, Optional

from fastapi import Depends, HTTPException, Query, status

from empoweru.core.auth import get_current_subject
from empoweru.database import get_db
from empoweru.repositories.collections import USERS
from empoweru.repositories.documents import get_document

logger = logging.getLogger(__name__)

FORBIDDEN = "Forbidden Access"
PRIVILEGED_ROLES = ("admin", "moderator")


def authorize_self(subject_id: str, claimed_uid: Optional[str]) -> None:
    if claimed_uid != subject_id:
        logger.info("Ownership check failed for subject %s (claimed %r)", subject_id, claimed_uid)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN)


def authorize_role(db, subject_id: str, allowed_roles: Iterable[str] = PRIVILEGED_ROLES) -> dict:
    """Returns the caller's user document when its role is one of `allowed_roles`."""
    user = get_document(db, USERS, subject_id)
    if not user or user.get("role") not in tuple(allowed_roles):
        logger.info("Role check failed for subject %s", subject_id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN)
    return user


def require_admin_or_mod(subject: str = Depends(get_current_subject), db=Depends(get_db)) -> str:
    authorize_role(db, subject)
    return subject


def require_self(
    uid: Optional[str] = Query(None, description="Caller uid, must match the token subject"),
    subject: str = Depends(get_current_subject),
) -> str:
    authorize_self(subject, uid)
    return subject
