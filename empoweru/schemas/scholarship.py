"""
# `empoweru/schemas/scholarship.py` - Scholarship schemas

| Field                | Type    | Notes |
|----------------------|---------|-------|
| scholarshipName      | `str`   | |
| universityName       | `str`   | |
| universityCity       | `str`   | |
| universityCountry    | `str`   | |
| scholarshipCategory  | `str`   | Full fund / Partial fund / Self fund |
| subjectCategory      | `str`   | Agriculture / Engineering / Doctor |
| degree               | `str`   | Masters / Bachelor / Diploma |
| applicationFee       | `float` | |
| serviceCharge        | `float` | |
| applicationDeadline  | `str`   | "DD Month, YYYY" |
| scholarshipPostDate  | `str`   | "DD Month, YYYY" |
| postedUserName / postedUserEmail / postedUserUID | `str` | write-only |

Additional fields sent by the client are stored and returned as they are.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from empoweru.services.scholarship_service import SENSITIVE_FIELDS


class ScholarshipBase(BaseModel):
    model_config = ConfigDict(extra="allow")

    scholarshipName: Optional[str] = None
    universityName: Optional[str] = None
    universityCity: Optional[str] = None
    universityCountry: Optional[str] = None
    scholarshipCategory: Optional[str] = None
    subjectCategory: Optional[str] = None
    degree: Optional[str] = None
    applicationFee: Optional[float] = None
    serviceCharge: Optional[float] = None
    applicationDeadline: Optional[str] = None
    scholarshipPostDate: Optional[str] = None


class ScholarshipCreate(ScholarshipBase):
    postedUserName: Optional[str] = None
    postedUserEmail: Optional[str] = None
    postedUserUID: Optional[str] = None


class ScholarshipOut(BaseModel):
    """Scholarship as stored, minus the `postedUser*` fields."""
    model_config = ConfigDict(extra="allow")

    id: str
    scholarshipName: Any = None
    universityName: Any = None
    degree: Any = None
    applicationFee: Any = None
    serviceCharge: Any = None
    applicationDeadline: Any = None
    scholarshipPostDate: Any = None
    reviews: List[Dict[str, Any]] = []

    @model_validator(mode="before")
    @classmethod
    def drop_sensitive(cls, data):
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if k not in SENSITIVE_FIELDS}
        return data


class CountOut(BaseModel):
    count: int
