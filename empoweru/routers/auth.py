# empoweru/routers/auth.py
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends

from empoweru.core.auth import get_current_subject, issue_access_token
from empoweru.schemas.user import TokenOut

router = APIRouter(tags=["Auth"])


@router.post("/jwt", response_model=TokenOut, summary="Issue a one-hour custom token for the caller")
def issue_token(
    claims: Optional[Dict[str, Any]] = Body(None),
    subject: str = Depends(get_current_subject),
):
    """
    The token is minted for the verified caller; any `uid` in the body is ignored.
    Other keys become developer claims on the token.

    This is a Firebase custom token, not an ID token: the API rejects it as a bearer
    token. The client exchanges it with `signInWithCustomToken` and sends the ID token
    it gets back (which carries the developer claims).
    """
    return TokenOut(token=issue_access_token(subject, claims))
