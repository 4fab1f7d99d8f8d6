# empoweru/core/auth.py
import logging
from typing import Dict, Optional

from fastapi import HTTPException, Request, status
from firebase_admin import auth as firebase_auth

logger = logging.getLogger(__name__)

UNAUTHORIZED = "Unauthorized Access"

# Claims Firebase reserves for itself; they cannot be set as developer claims
RESERVED_CLAIMS = frozenset({
    "acr", "amr", "at_hash", "aud", "auth_time", "azp", "cnf", "c_hash",
    "exp", "firebase", "iat", "iss", "jti", "nbf", "nonce", "sub", "uid",
})


def _extract_bearer_token(request: Request) -> Optional[str]:
    """
    Returns the token from an `Authorization: Bearer <id_token>` header, or None.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None
    parts = auth_header.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def _decode_id_token(id_token: str) -> dict:
    """
    Verifies a Firebase ID token (signature, one-hour expiry, revocation).
    Any verification failure becomes a 401.
    """
    try:
        return firebase_auth.verify_id_token(id_token, check_revoked=True)
    except (ValueError, firebase_auth.InvalidIdTokenError, firebase_auth.UserDisabledError) as exc:
        logger.info("Rejected ID token: %s", exc)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED)


def get_current_subject(request: Request) -> str:
    """
    Token required: verifies it and returns the subject uid.
    The uid is also bound to `request.state.subject` for the rest of the request.
    Verification blocks on Firebase network calls; it must stay a sync dependency.
    """
    token = _extract_bearer_token(request)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED)
    decoded = _decode_id_token(token)
    uid = decoded.get("uid") or decoded.get("user_id")
    if not uid:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED)
    request.state.subject = uid
    return uid


def issue_access_token(uid: str, claims: Optional[Dict] = None) -> str:
    """
    Mint a Firebase custom token (valid one hour) for `uid` with extra developer claims.
    Custom tokens only sign in; `get_current_subject` accepts ID tokens.
    """
    developer_claims = {k: v for k, v in (claims or {}).items() if k not in RESERVED_CLAIMS}
    token = firebase_auth.create_custom_token(uid, developer_claims or None)
    return token.decode("utf-8") if isinstance(token, bytes) else token
