# empoweru/services/statistics_service.py
from typing import Dict, List

from google.cloud.firestore_v1 import FieldFilter

from empoweru.repositories.collections import APPLIED_SCHOLARSHIPS, SCHOLARSHIPS
from empoweru.repositories.documents import count_documents, stream
from empoweru.services.application_service import is_cancelled

# Other degree values are not reported
DEGREES = ("Masters", "Bachelor", "Diploma")


def summary(db) -> List[Dict]:
    """Per degree: scholarships offered and active applications made."""
    rows = []
    for degree in DEGREES:
        total = count_documents(
            db.collection(SCHOLARSHIPS).where(filter=FieldFilter("degree", "==", degree))
        )
        applications = stream(
            db.collection(APPLIED_SCHOLARSHIPS).where(filter=FieldFilter("applicantDegree", "==", degree))
        )
        rows.append({
            "name": degree,
            "Total Scholarships": total,
            "Applied Scholarships": sum(1 for a in applications if not is_cancelled(a)),
        })
    return rows
