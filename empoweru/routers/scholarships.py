"""
# `empoweru/routers/scholarships.py` - Scholarships

Public read views never include `postedUserName`, `postedUserEmail`, `postedUserUID`.

| Method | Path                        | Access |
|--------|-----------------------------|--------|
| GET    | /count/scholarships         | public |
| GET    | /scholarships?page&limit    | public |
| GET    | /scholarships/top           | public |
| GET    | /scholarship/{id}           | public (unknown id -> `null`) |
| POST   | /adminOrMod/scholarship     | admin/moderator |
| PATCH  | /scholarships/{id}?uid=     | admin/moderator + self |
| DELETE | /scholarships/{id}?uid=     | admin/moderator + self |
"""
import re
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query

from empoweru.core.security import require_admin_or_mod, require_self
from empoweru.database import get_db
from empoweru.schemas.results import DeleteResult, InsertResult, UpdateResult
from empoweru.schemas.scholarship import CountOut, ScholarshipCreate, ScholarshipOut
from empoweru.services import scholarship_service

router = APIRouter(tags=["Scholarships"])

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 6
_LEADING_INT = re.compile(r"\s*[+-]?\d+")


def _positive_int(value: Optional[str], default: int) -> int:
    """Leading integer of `value` ("2.5" -> 2, "3rd" -> 3); default when absent or not positive."""
    match = _LEADING_INT.match(value or "")
    if not match:
        return default
    number = int(match.group())
    return number if number > 0 else default


@router.get("/count/scholarships", response_model=CountOut)
def count_scholarships(db=Depends(get_db)):
    return CountOut(count=scholarship_service.count(db))


@router.get("/scholarships", response_model=List[ScholarshipOut], response_model_exclude_unset=True)
def list_scholarships(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    db=Depends(get_db),
):
    return scholarship_service.list_page(
        db, _positive_int(page, DEFAULT_PAGE), _positive_int(limit, DEFAULT_LIMIT)
    )


@router.get("/scholarships/top", response_model=List[ScholarshipOut], response_model_exclude_unset=True)
def top_scholarships(db=Depends(get_db)):
    return scholarship_service.list_top(db)


@router.get("/scholarship/{scholarship_id}", response_model=Optional[ScholarshipOut], response_model_exclude_unset=True)
def get_scholarship(scholarship_id: str, db=Depends(get_db)):
    return scholarship_service.get_by_id(db, scholarship_id)


@router.post("/adminOrMod/scholarship", response_model=InsertResult, dependencies=[Depends(require_admin_or_mod)])
def create_scholarship(scholarship: ScholarshipCreate, db=Depends(get_db)):
    return scholarship_service.create(db, scholarship.model_dump(exclude_unset=True))


@router.patch(
    "/scholarships/{scholarship_id}",
    response_model=UpdateResult,
    dependencies=[Depends(require_admin_or_mod), Depends(require_self)],
)
def update_scholarship(scholarship_id: str, data: Dict[str, Any] = Body(...), db=Depends(get_db)):
    return scholarship_service.update(db, scholarship_id, data)


@router.delete(
    "/scholarships/{scholarship_id}",
    response_model=DeleteResult,
    dependencies=[Depends(require_admin_or_mod), Depends(require_self)],
)
def delete_scholarship(scholarship_id: str, db=Depends(get_db)):
    return scholarship_service.delete(db, scholarship_id)
