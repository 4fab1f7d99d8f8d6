# empoweru/schemas/review.py
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from empoweru.schemas.common import check_document_id


class ReviewCreate(BaseModel):
    model_config = ConfigDict(extra="allow")

    scholarshipId: str
    userUID: Optional[str] = None
    rating: Optional[float] = None
    reviewMessage: Optional[str] = None
    reviewDate: Optional[str] = None
    userName: Optional[str] = None
    userImage: Optional[str] = None

    @field_validator("scholarshipId")
    @classmethod
    def check_scholarship_id(cls, value):
        return check_document_id(value)


class ReviewOut(BaseModel):
    """Review row as stored; `more` or `scholarshipDetails` carry the joined scholarship fields."""
    id: str
    rating: Any = None
    reviewMessage: Any = None
    reviewDate: Any = None
    userName: Any = None
    userImage: Any = None
    more: Optional[Dict[str, Any]] = None
    scholarshipDetails: Optional[Dict[str, Any]] = None
