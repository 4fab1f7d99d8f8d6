# empoweru/services/user_service.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from google.api_core.exceptions import AlreadyExists
from google.cloud.firestore_v1 import FieldFilter

from empoweru.core.security import PRIVILEGED_ROLES
from empoweru.repositories.collections import USERS
from empoweru.repositories.documents import delete_document, get_document, stream, update_document

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "default"


def verify_role(db, uid: str, role: Optional[str]) -> bool:
    user = get_document(db, USERS, uid)
    return bool(user) and user.get("role") == role


def list_users(db, role: Optional[str] = None) -> List[Dict[str, Any]]:
    query = db.collection(USERS)
    if role and role != DEFAULT_ROLE:
        query = query.where(filter=FieldFilter("role", "==", role))
    return stream(query)


def upsert(db, uid: str, name: Optional[str], email: Optional[str], image: Optional[str],
           role: Optional[str] = None) -> bool:
    """
    Create `users/{uid}` on first sign-in, otherwise refresh name/email/image.

    `uid` and `role` are only written when the document is created; a sign-in can never
    grant itself a privileged role. Returns True when the user was created.
    """
    profile = {"name": name, "email": email, "image": image}
    ref = db.collection(USERS).document(uid)
    initial_role = role if role and role not in PRIVILEGED_ROLES else DEFAULT_ROLE
    try:
        ref.create({**profile, "uid": uid, "role": initial_role})
    except AlreadyExists:
        ref.update(profile)
        return False
    logger.info("User %s added", uid)
    return True


def update(db, user_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    result = update_document(db, USERS, user_id, fields)
    if "role" in fields and result["modifiedCount"]:
        logger.info("Role of user %s changed to %s", user_id, fields["role"])
    return result


def delete(db, user_id: str) -> Dict[str, Any]:
    return delete_document(db, USERS, user_id)
