# empoweru/services/review_service.py
from __future__ import annotations

import logging
from typing import Any, Dict, List

from google.cloud.firestore_v1 import FieldFilter

from empoweru.repositories.collections import REVIEWS, SCHOLARSHIPS
from empoweru.repositories.documents import (
    delete_document,
    insert_document,
    lookup_one,
    project,
    sort_rows,
    stream,
    unmatched,
    update_document,
    with_reference,
)
from empoweru.utils.dates import parse_display_date

logger = logging.getLogger(__name__)

FEATURED_LIMIT = 3
PUBLIC_FIELDS = ("id", "rating", "reviewMessage", "reviewDate", "userName", "userImage", "more")
MINE_FIELDS = ("id", "rating", "reviewMessage", "reviewDate", "scholarshipDetails")


def _with_university(db, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    joined = lookup_one(
        db, rows,
        from_=SCHOLARSHIPS,
        local_field="scholarshipId",
        as_="more",
        fields=("universityName", "subjectCategory"),
    )
    return [project(row, include=PUBLIC_FIELDS) for row in joined]


def list_all(db) -> List[Dict[str, Any]]:
    return _with_university(db, stream(db.collection(REVIEWS)))


def list_mine(db, uid: str) -> List[Dict[str, Any]]:
    query = db.collection(REVIEWS).where(filter=FieldFilter("userUID", "==", uid))
    joined = lookup_one(
        db, stream(query),
        from_=SCHOLARSHIPS,
        local_field="scholarshipId",
        as_="scholarshipDetails",
        fields=("scholarshipName", "universityName"),
    )
    return [project(row, include=MINE_FIELDS) for row in joined]


def list_featured(db, n: int = FEATURED_LIMIT) -> List[Dict[str, Any]]:
    """Best rated reviews, newest first among equal ratings."""
    ranked = sort_rows(
        stream(db.collection(REVIEWS)),
        (lambda row: row.get("rating"), True),
        (lambda row: parse_display_date(row.get("reviewDate")), True),
    )[:n]
    return _with_university(db, ranked)


def create(db, data: Dict[str, Any]) -> Dict[str, Any]:
    result = insert_document(db, REVIEWS, with_reference(db, data, "scholarshipId", SCHOLARSHIPS))
    logger.info("Review %s created by %s", result["insertedId"], data.get("userUID"))
    return result


def update(db, review_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    try:
        fields = with_reference(db, fields, "scholarshipId", SCHOLARSHIPS)
    except ValueError:
        logger.info("Review %s not updated: malformed scholarshipId", review_id)
        return unmatched()
    return update_document(db, REVIEWS, review_id, fields)


def delete(db, review_id: str) -> Dict[str, Any]:
    return delete_document(db, REVIEWS, review_id)
