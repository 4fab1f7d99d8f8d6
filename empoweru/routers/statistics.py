# empoweru/routers/statistics.py
from typing import List

from fastapi import APIRouter, Depends

from empoweru.core.security import require_admin_or_mod, require_self
from empoweru.database import get_db
from empoweru.schemas.statistics import DegreeStatistics
from empoweru.services import statistics_service

router = APIRouter(
    prefix="/statistics",
    tags=["Admin: Statistics"],
    dependencies=[Depends(require_admin_or_mod), Depends(require_self)],
)


@router.get("", response_model=List[DegreeStatistics])
def get_statistics(db=Depends(get_db)):
    """Scholarships offered and active applications, per degree."""
    return statistics_service.summary(db)
