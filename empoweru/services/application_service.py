"""
empoweru/services/application_service.py - Scholarship application lifecycle.

An application has two independent pieces of state:

- `status`, moved by moderators (feedback, "Rejected"),
- `cancelledByUser`, a soft-delete flag set when the applicant cancels. Cancelled
  applications stay in the collection but are left out of every active view.

The flag is stored as the string "true" for compatibility with existing documents and
is compared case-insensitively; a boolean `True` counts as cancelled too.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from google.cloud.firestore_v1 import FieldFilter

from empoweru.repositories.collections import APPLIED_SCHOLARSHIPS, REVIEWS, SCHOLARSHIPS
from empoweru.repositories.documents import (
    insert_document,
    is_valid_id,
    lookup_one,
    ref_id,
    reference,
    sort_rows,
    stream,
    unmatched,
    update_document,
    with_reference,
)
from empoweru.utils.dates import parse_display_date

logger = logging.getLogger(__name__)

# Scholarship fields joined into the moderator listing
ALL_DETAIL_FIELDS = (
    "applicationFee",
    "serviceCharge",
    "scholarshipName",
    "universityName",
    "scholarshipCategory",
    "subjectCategory",
    "applicationDeadline",
)
# Scholarship fields joined into the applicant's own listing
MINE_DETAIL_FIELDS = (
    "universityCity",
    "universityCountry",
    "applicationFee",
    "serviceCharge",
    "universityName",
    "subjectCategory",
)


def _apply_date(row):
    return parse_display_date(row.get("applyDate"))


def _deadline(row):
    return parse_display_date((row.get("additionalDetails") or {}).get("applicationDeadline"))


SORT_OPTIONS = {
    "asc_ad": (_apply_date, False),
    "des_ad": (_apply_date, True),
    "asc_dl": (_deadline, False),
    "des_dl": (_deadline, True),
}


def is_cancelled(doc: Dict[str, Any]) -> bool:
    flag = doc.get("cancelledByUser")
    if isinstance(flag, bool):
        return flag
    return isinstance(flag, str) and flag.lower() == "true"


def _active(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [row for row in rows if not is_cancelled(row)]


def create(db, data: Dict[str, Any]) -> Dict[str, Any]:
    """Store a new application. The scholarship is neither checked for existence nor for duplicates."""
    result = insert_document(db, APPLIED_SCHOLARSHIPS, with_reference(db, data, "scholarshipId", SCHOLARSHIPS))
    logger.info("Application %s created by %s", result["insertedId"], data.get("userUID"))
    return result


def list_all_active(db, sort: Optional[str] = None) -> List[Dict[str, Any]]:
    rows = lookup_one(
        db, _active(stream(db.collection(APPLIED_SCHOLARSHIPS))),
        from_=SCHOLARSHIPS,
        local_field="scholarshipId",
        as_="additionalDetails",
        fields=ALL_DETAIL_FIELDS,
    )
    if sort in SORT_OPTIONS:
        rows = sort_rows(rows, SORT_OPTIONS[sort])
    return rows


def list_mine(db, uid: str) -> List[Dict[str, Any]]:
    """The caller's active applications with `reviewStatus` telling whether they reviewed the scholarship."""
    query = db.collection(APPLIED_SCHOLARSHIPS).where(filter=FieldFilter("userUID", "==", uid))
    rows = lookup_one(
        db, _active(stream(query)),
        from_=SCHOLARSHIPS,
        local_field="scholarshipId",
        as_="additionalDetails",
        fields=MINE_DETAIL_FIELDS,
    )
    reviews = db.collection(REVIEWS).where(filter=FieldFilter("userUID", "==", uid))
    reviewed = {ref_id(review.get("scholarshipId")) for review in stream(reviews)}
    return [{**row, "reviewStatus": row.get("scholarshipId") in reviewed} for row in rows]


def check_status(db, uid: str, scholarship_id: str) -> int:
    """Number of active applications `uid` holds for the scholarship."""
    if not is_valid_id(scholarship_id):
        return 0
    query = (
        db.collection(APPLIED_SCHOLARSHIPS)
        .where(filter=FieldFilter("userUID", "==", uid))
        .where(filter=FieldFilter("scholarshipId", "==", reference(db, SCHOLARSHIPS, scholarship_id)))
    )
    return len(_active(stream(query)))


def update(db, application_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    # No allow-list: the applicant may overwrite any field, status included
    try:
        fields = with_reference(db, fields, "scholarshipId", SCHOLARSHIPS)
    except ValueError:
        logger.info("Application %s not updated: malformed scholarshipId", application_id)
        return unmatched()
    return update_document(db, APPLIED_SCHOLARSHIPS, application_id, fields)


def set_feedback(db, application_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    return update_document(db, APPLIED_SCHOLARSHIPS, application_id, fields)


def reject(db, application_id: str) -> Dict[str, Any]:
    result = update_document(db, APPLIED_SCHOLARSHIPS, application_id, {"status": "Rejected"})
    if result["matchedCount"]:
        logger.info("Application %s rejected", application_id)
    return result


def cancel(db, application_id: str) -> Dict[str, Any]:
    result = update_document(db, APPLIED_SCHOLARSHIPS, application_id, {"cancelledByUser": "true"})
    if result["matchedCount"]:
        logger.info("Application %s cancelled by applicant", application_id)
    return result
