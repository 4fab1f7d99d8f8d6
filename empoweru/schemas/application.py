# empoweru/schemas/application.py
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from empoweru.schemas.common import check_document_id


class ApplicationCreate(BaseModel):
    """Application form. `ssc`/`hsc` arrive as strings from the form and are stored as numbers."""
    model_config = ConfigDict(extra="allow")

    scholarshipId: str
    userUID: Optional[str] = None
    userName: Optional[str] = None
    userEmail: Optional[str] = None
    applyDate: Optional[str] = None
    applicantDegree: Optional[str] = None
    ssc: Optional[float] = None
    hsc: Optional[float] = None
    status: Optional[str] = None

    @field_validator("scholarshipId")
    @classmethod
    def check_scholarship_id(cls, value):
        return check_document_id(value)


class ApplicationOut(BaseModel):
    """Application as stored; applicants may overwrite any field, so stored values are not re-typed."""
    model_config = ConfigDict(extra="allow")

    id: str
    scholarshipId: Any = None
    userUID: Any = None
    applyDate: Any = None
    applicantDegree: Any = None
    ssc: Any = None
    hsc: Any = None
    status: Any = None
    feedback: Any = None
    additionalDetails: Optional[Dict[str, Any]] = None
    reviewStatus: Optional[bool] = None


class ApplyStatusOut(BaseModel):
    result: int
