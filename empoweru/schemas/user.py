"""
# `empoweru/schemas/user.py` - User schemas

| Field | Type          | Notes |
|-------|---------------|-------|
| uid   | `str`         | Firebase uid, also the document id |
| name  | `str` / `null`| |
| email | `str` / `null`| |
| image | `str` / `null`| Profile photo URL |
| role  | `str`         | default / moderator / admin |
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserSignIn(BaseModel):
    uid: str = Field(..., min_length=1)
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    image: Optional[str] = None
    role: Optional[str] = None


class UserOut(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    uid: Any = None
    name: Any = None
    email: Any = None
    image: Any = None
    role: Any = None


class RoleVerifyOut(BaseModel):
    role: bool


class TokenOut(BaseModel):
    token: str
