"""
# `empoweru/routers/users.py` - Users

## Endpoints

### `GET /role/verify/{uid}?role=`
Whether the caller (path uid must be the caller) holds `role`.

### `GET /users?uid=&role=`
Admin/moderator. Lists users, optionally only those with `role` (`default` means all).

### `POST /users`
Sign-in upsert. Creates `users/{uid}` on first sign-in, refreshes name/email/image after.

### `PATCH /users/{id}?uid=`
Admin/moderator. Overwrites the given fields, typically `role`.

### `DELETE /users/{id}?uid=`
Admin/moderator. Removes the user document.
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query

from empoweru.core.auth import get_current_subject
from empoweru.core.security import authorize_self, require_admin_or_mod, require_self
from empoweru.database import get_db
from empoweru.schemas.results import DeleteResult, MessageOut, UpdateResult
from empoweru.schemas.user import RoleVerifyOut, UserOut, UserSignIn
from empoweru.services import user_service

router = APIRouter(tags=["Users"])


@router.get("/role/verify/{uid}", response_model=RoleVerifyOut)
def verify_role(
    uid: str,
    role: Optional[str] = Query(None),
    subject: str = Depends(get_current_subject),
    db=Depends(get_db),
):
    authorize_self(subject, uid)
    return RoleVerifyOut(role=user_service.verify_role(db, uid, role))


@router.get(
    "/users",
    response_model=List[UserOut],
    response_model_exclude_unset=True,
    dependencies=[Depends(require_admin_or_mod), Depends(require_self)],
)
def list_users(role: Optional[str] = Query(None), db=Depends(get_db)):
    return user_service.list_users(db, role)


@router.post("/users", response_model=MessageOut)
def store_user(
    user: UserSignIn,
    subject: str = Depends(get_current_subject),
    db=Depends(get_db),
):
    authorize_self(subject, user.uid)
    created = user_service.upsert(db, user.uid, user.name, user.email, user.image, user.role)
    return MessageOut(message="user added to database" if created else "user already exists")


@router.patch(
    "/users/{user_id}",
    response_model=UpdateResult,
    dependencies=[Depends(require_admin_or_mod), Depends(require_self)],
)
def change_user(user_id: str, data: Dict[str, Any] = Body(...), db=Depends(get_db)):
    return user_service.update(db, user_id, data)


@router.delete(
    "/users/{user_id}",
    response_model=DeleteResult,
    dependencies=[Depends(require_admin_or_mod), Depends(require_self)],
)
def delete_user(user_id: str, db=Depends(get_db)):
    return user_service.delete(db, user_id)
