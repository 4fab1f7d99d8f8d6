"""
# `empoweru/routers/reviews.py` - Reviews

| Method | Path                           | Access |
|--------|--------------------------------|--------|
| GET    | /reviews?uid=                  | admin/moderator + self |
| GET    | /reviews/{uid}                 | self |
| GET    | /featured/reviews              | public, top 3 |
| POST   | /reviews                       | authenticated |
| PATCH  | /reviews/{id}?uid=             | self |
| DELETE | /reviews/adminOrMod/{id}?uid=  | admin/moderator + self |
| DELETE | /reviews/{id}?uid=             | self |
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends

from empoweru.core.auth import get_current_subject
from empoweru.core.security import authorize_self, require_admin_or_mod, require_self
from empoweru.database import get_db
from empoweru.schemas.results import DeleteResult, InsertResult, UpdateResult
from empoweru.schemas.review import ReviewCreate, ReviewOut
from empoweru.services import review_service

router = APIRouter(tags=["Reviews"])


@router.get(
    "/reviews",
    response_model=List[ReviewOut],
    response_model_exclude_unset=True,
    dependencies=[Depends(require_admin_or_mod), Depends(require_self)],
)
def list_reviews(db=Depends(get_db)):
    return review_service.list_all(db)


@router.get("/reviews/{uid}", response_model=List[ReviewOut], response_model_exclude_unset=True)
def my_reviews(uid: str, subject: str = Depends(get_current_subject), db=Depends(get_db)):
    authorize_self(subject, uid)
    return review_service.list_mine(db, uid)


@router.get("/featured/reviews", response_model=List[ReviewOut], response_model_exclude_unset=True)
def featured_reviews(db=Depends(get_db)):
    return review_service.list_featured(db)


@router.post("/reviews", response_model=InsertResult, dependencies=[Depends(get_current_subject)])
def create_review(review: ReviewCreate, db=Depends(get_db)):
    return review_service.create(db, review.model_dump(exclude_unset=True))


@router.patch("/reviews/{review_id}", response_model=UpdateResult, dependencies=[Depends(require_self)])
def update_review(review_id: str, data: Dict[str, Any] = Body(...), db=Depends(get_db)):
    return review_service.update(db, review_id, data)


@router.delete(
    "/reviews/adminOrMod/{review_id}",
    response_model=DeleteResult,
    dependencies=[Depends(require_admin_or_mod), Depends(require_self)],
)
def moderate_review(review_id: str, db=Depends(get_db)):
    return review_service.delete(db, review_id)


@router.delete("/reviews/{review_id}", response_model=DeleteResult, dependencies=[Depends(require_self)])
def delete_review(review_id: str, db=Depends(get_db)):
    return review_service.delete(db, review_id)
