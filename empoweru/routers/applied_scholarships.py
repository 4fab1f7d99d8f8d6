"""
# `empoweru/routers/applied_scholarships.py` - Scholarship applications

## Endpoints

### `GET /appliedScholarships?uid=&sort=`
Admin/moderator. Every active (not cancelled) application with the scholarship details.
`sort`: `asc_ad` / `des_ad` by apply date, `asc_dl` / `des_dl` by application deadline.

### `GET /appliedScholarships/{uid}`
The caller's active applications, each with `reviewStatus`.

### `GET /appliedScholarships/applyStatus/{scholarship_id}`
`{"result": n}` - active applications the caller holds for the scholarship.

### `POST /appliedScholarships`
New application. `ssc`/`hsc` are stored as numbers, `scholarshipId` as a reference.

### `PATCH /appliedScholarships/{id}?uid=`
Applicant amends the application.

### `PATCH /appliedScholarships/feedback/{id}?uid=`
Admin/moderator feedback.

### `PATCH /appliedScholarships/reject/{id}?uid=`
Admin/moderator. Sets `status` to "Rejected"; the body is ignored.

### `DELETE /appliedScholarships/{id}?uid=`
Applicant cancels. The document is kept with `cancelledByUser = "true"`.
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query

from empoweru.core.auth import get_current_subject
from empoweru.core.security import authorize_self, require_admin_or_mod, require_self
from empoweru.database import get_db
from empoweru.schemas.application import ApplicationCreate, ApplicationOut, ApplyStatusOut
from empoweru.schemas.results import InsertResult, UpdateResult
from empoweru.services import application_service

router = APIRouter(prefix="/appliedScholarships", tags=["Applied Scholarships"])


@router.get(
    "",
    response_model=List[ApplicationOut],
    response_model_exclude_unset=True,
    dependencies=[Depends(require_admin_or_mod), Depends(require_self)],
)
def list_applications(sort: Optional[str] = Query(None), db=Depends(get_db)):
    return application_service.list_all_active(db, sort)


@router.get("/applyStatus/{scholarship_id}", response_model=ApplyStatusOut)
def apply_status(scholarship_id: str, subject: str = Depends(get_current_subject), db=Depends(get_db)):
    return ApplyStatusOut(result=application_service.check_status(db, subject, scholarship_id))


@router.get("/{uid}", response_model=List[ApplicationOut], response_model_exclude_unset=True)
def my_applications(uid: str, subject: str = Depends(get_current_subject), db=Depends(get_db)):
    authorize_self(subject, uid)
    return application_service.list_mine(db, uid)


@router.post("", response_model=InsertResult, dependencies=[Depends(get_current_subject)])
def apply(application: ApplicationCreate, db=Depends(get_db)):
    return application_service.create(db, application.model_dump(exclude_unset=True))


@router.patch(
    "/feedback/{application_id}",
    response_model=UpdateResult,
    dependencies=[Depends(require_admin_or_mod), Depends(require_self)],
)
def add_feedback(application_id: str, data: Dict[str, Any] = Body(...), db=Depends(get_db)):
    return application_service.set_feedback(db, application_id, data)


@router.patch(
    "/reject/{application_id}",
    response_model=UpdateResult,
    dependencies=[Depends(require_admin_or_mod), Depends(require_self)],
)
def reject_application(application_id: str, db=Depends(get_db)):
    return application_service.reject(db, application_id)


@router.patch("/{application_id}", response_model=UpdateResult, dependencies=[Depends(require_self)])
def update_application(application_id: str, data: Dict[str, Any] = Body(...), db=Depends(get_db)):
    return application_service.update(db, application_id, data)


@router.delete("/{application_id}", response_model=UpdateResult, dependencies=[Depends(require_self)])
def cancel_application(application_id: str, db=Depends(get_db)):
    return application_service.cancel(db, application_id)
