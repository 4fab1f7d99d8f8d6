"""
empoweru/repositories/documents.py - Shared Firestore read/write helpers.

Firestore has no server-side joins, so every read view in the services is composed
from the same few steps:

- `stream` turns a query into plain dicts (`id` added, references rendered as ids),
- `lookup_one` attaches the single document a reference field points to,
- `lookup_many` attaches every document of another collection that references the row,
- `project` keeps or strips fields,
- `sort_rows` orders rows on several keys with mixed directions.

Writes go through `insert_document`, `update_document` and `delete_document`, which
return results in the `insertedId` / `matchedCount` / `deletedCount` shape the web
client already understands.
"""
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from google.cloud.firestore_v1 import FieldFilter

# Firestore caps the number of values in an "in" filter
IN_QUERY_LIMIT = 30


def is_valid_id(value) -> bool:
    """True when `value` can be used as a Firestore document id."""
    if not isinstance(value, str) or not value:
        return False
    if "/" in value or value in (".", ".."):
        return False
    if value.startswith("__") and value.endswith("__"):
        return False
    return len(value.encode("utf-8")) <= 1500


def reference(db, collection: str, doc_id: str):
    if not is_valid_id(doc_id):
        raise ValueError(f"Invalid document id: {doc_id!r}")
    return db.collection(collection).document(doc_id)


def with_reference(db, data: Dict[str, Any], field: str, collection: str) -> Dict[str, Any]:
    """Copy of `data` with the id in `data[field]` replaced by a document reference."""
    out = dict(data)
    if isinstance(out.get(field), str):
        out[field] = reference(db, collection, out[field])
    return out


def ref_id(value) -> Optional[str]:
    """Document id of a reference field; plain string ids pass through."""
    if value is None or isinstance(value, str):
        return value
    return getattr(value, "id", None)


def _plain(value):
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    if hasattr(value, "path") and hasattr(value, "id"):
        return value.id
    return value


def to_dict(snap) -> Dict[str, Any]:
    data = _plain(snap.to_dict() or {})
    data["id"] = snap.id
    return data


def stream(query) -> List[Dict[str, Any]]:
    return [to_dict(snap) for snap in query.stream()]


def count_documents(query) -> int:
    result = query.count().get()
    return int(result[0][0].value)


def get_document(db, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
    if not is_valid_id(doc_id):
        return None
    snap = db.collection(collection).document(doc_id).get()
    return to_dict(snap) if snap.exists else None


def project(doc: Dict[str, Any], include: Optional[Iterable[str]] = None,
            exclude: Iterable[str] = ()) -> Dict[str, Any]:
    if include is not None:
        keep = set(include)
        return {k: v for k, v in doc.items() if k in keep}
    drop = set(exclude)
    return {k: v for k, v in doc.items() if k not in drop}


def fetch_by_ids(db, collection: str, ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
    unique = list(dict.fromkeys(i for i in ids if is_valid_id(i)))
    if not unique:
        return {}
    refs = [db.collection(collection).document(i) for i in unique]
    return {snap.id: to_dict(snap) for snap in db.get_all(refs) if snap.exists}


def lookup_one(db, rows: List[Dict[str, Any]], *, from_: str, local_field: str, as_: str,
               fields: Optional[Sequence[str]] = None, unwind: bool = True) -> List[Dict[str, Any]]:
    """
    Attach the document `row[local_field]` points to under `row[as_]`.

    With `unwind` rows whose reference does not resolve are dropped, otherwise they get
    `None`. `fields` limits the attached document to those keys (its `id` is dropped).
    """
    found = fetch_by_ids(db, from_, (row.get(local_field) for row in rows))
    out = []
    for row in rows:
        match = found.get(row.get(local_field))
        if match is None and unwind:
            continue
        if match is not None and fields is not None:
            match = project(match, include=fields)
        out.append({**row, as_: match})
    return out


def lookup_many(db, rows: List[Dict[str, Any]], *, local_collection: str, from_: str,
                foreign_field: str, as_: str,
                fields: Optional[Sequence[str]] = None) -> List[Dict[str, Any]]:
    """Attach every `from_` document whose `foreign_field` references the row as `row[as_]`."""
    refs = [db.collection(local_collection).document(row["id"]) for row in rows]
    grouped: Dict[str, List[Dict[str, Any]]] = {row["id"]: [] for row in rows}
    for start in range(0, len(refs), IN_QUERY_LIMIT):
        chunk = refs[start:start + IN_QUERY_LIMIT]
        query = db.collection(from_).where(filter=FieldFilter(foreign_field, "in", chunk))
        for doc in stream(query):
            owner = doc.get(foreign_field)
            if owner in grouped:
                grouped[owner].append(project(doc, include=fields) if fields is not None else doc)
    return [{**row, as_: grouped[row["id"]]} for row in rows]


def sort_value(value) -> Tuple[int, Any]:
    """Comparable key mixing types in a fixed order (missing values first)."""
    if value is None:
        return (0, 0)
    if isinstance(value, bool):
        return (4, value)
    if isinstance(value, (int, float)):
        return (1, value)
    if isinstance(value, str):
        return (2, value)
    if isinstance(value, datetime):
        return (5, value)
    return (3, str(value))


def sort_rows(rows: Iterable[Dict[str, Any]],
              *keys: Tuple[Callable[[Dict[str, Any]], Any], bool]) -> List[Dict[str, Any]]:
    """
    Sort on `(key_func, descending)` pairs, most significant first.

    Python's sort is stable, so sorting on the least significant key first gives a
    multi-key order with independent directions.
    """
    out = list(rows)
    for key_func, descending in reversed(keys):
        out.sort(key=lambda row: sort_value(key_func(row)), reverse=descending)
    return out


# ---------- Writes ----------

def unmatched() -> Dict[str, Any]:
    return {"acknowledged": True, "matchedCount": 0, "modifiedCount": 0}


def insert_document(db, collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
    _, ref = db.collection(collection).add(data)
    return {"acknowledged": True, "insertedId": ref.id}


def update_document(db, collection: str, doc_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    """Set `fields` on one document; missing documents and malformed ids match nothing."""
    if not is_valid_id(doc_id):
        return unmatched()
    ref = db.collection(collection).document(doc_id)
    snap = ref.get()
    if not snap.exists:
        return unmatched()
    current = snap.to_dict() or {}
    changed = {k: v for k, v in fields.items() if k not in current or current[k] != v}
    if changed:
        ref.update(changed)
    return {"acknowledged": True, "matchedCount": 1, "modifiedCount": 1 if changed else 0}


def delete_document(db, collection: str, doc_id: str) -> Dict[str, Any]:
    if not is_valid_id(doc_id):
        return {"acknowledged": True, "deletedCount": 0}
    ref = db.collection(collection).document(doc_id)
    if not ref.get().exists:
        return {"acknowledged": True, "deletedCount": 0}
    ref.delete()
    return {"acknowledged": True, "deletedCount": 1}
