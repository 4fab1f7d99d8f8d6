# empoweru/services/scholarship_service.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from empoweru.repositories.collections import REVIEWS, SCHOLARSHIPS
from empoweru.repositories.documents import (
    count_documents,
    delete_document,
    get_document,
    insert_document,
    lookup_many,
    project,
    sort_rows,
    stream,
    update_document,
)
from empoweru.utils.dates import parse_display_date

logger = logging.getLogger(__name__)

# Written by admins/moderators, never returned by a read view
SENSITIVE_FIELDS = ("postedUserName", "postedUserEmail", "postedUserUID")
TOP_LIMIT = 6


def _public(doc: Dict[str, Any]) -> Dict[str, Any]:
    return project(doc, exclude=SENSITIVE_FIELDS)


def _with_reviews(db, rows: List[Dict[str, Any]], fields=("rating",)) -> List[Dict[str, Any]]:
    return lookup_many(
        db, rows,
        local_collection=SCHOLARSHIPS,
        from_=REVIEWS,
        foreign_field="scholarshipId",
        as_="reviews",
        fields=fields,
    )


def count(db) -> int:
    return count_documents(db.collection(SCHOLARSHIPS))


def list_page(db, page: int = 1, limit: int = 6) -> List[Dict[str, Any]]:
    """One page of scholarships in storage order, each with its review ratings."""
    query = db.collection(SCHOLARSHIPS).offset((page - 1) * limit).limit(limit)
    rows = [_public(doc) for doc in stream(query)]
    return _with_reviews(db, rows)


def list_top(db, n: int = TOP_LIMIT) -> List[Dict[str, Any]]:
    """Cheapest scholarships first, most recently posted first on equal fees."""
    rows = sort_rows(
        stream(db.collection(SCHOLARSHIPS)),
        (lambda row: row.get("applicationFee"), False),
        (lambda row: parse_display_date(row.get("scholarshipPostDate")), True),
    )[:n]
    return _with_reviews(db, [_public(row) for row in rows])


def get_by_id(db, scholarship_id: str) -> Optional[Dict[str, Any]]:
    doc = get_document(db, SCHOLARSHIPS, scholarship_id)
    if doc is None:
        return None
    return _with_reviews(db, [_public(doc)], fields=None)[0]


def create(db, data: Dict[str, Any]) -> Dict[str, Any]:
    result = insert_document(db, SCHOLARSHIPS, data)
    logger.info("Scholarship %s created", result["insertedId"])
    return result


def update(db, scholarship_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    return update_document(db, SCHOLARSHIPS, scholarship_id, fields)


def delete(db, scholarship_id: str) -> Dict[str, Any]:
    result = delete_document(db, SCHOLARSHIPS, scholarship_id)
    if result["deletedCount"]:
        logger.info("Scholarship %s deleted", scholarship_id)
    return result
