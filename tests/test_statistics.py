"""Per-degree dashboard counts."""
from conftest import auth_header, reference, scholarship
from empoweru.services import statistics_service


def _apply(db, scholarship_id, degree, **fields):
    data = {"scholarshipId": reference(db, "scholarships", scholarship_id), "applicantDegree": degree}
    data.update(fields)
    return db.seed("appliedScholarships", data)


def test_counts_per_degree(client, db, admin):
    ids = [scholarship(db, degree="Masters") for _ in range(10)]
    scholarship(db, degree="Bachelor")
    _apply(db, ids[0], "Masters")
    _apply(db, ids[1], "Masters")
    _apply(db, ids[2], "Masters", cancelledByUser="true")

    resp = client.get("/statistics", params={"uid": admin}, headers=auth_header(admin))
    assert resp.status_code == 200
    assert resp.json() == [
        {"name": "Masters", "Total Scholarships": 10, "Applied Scholarships": 2},
        {"name": "Bachelor", "Total Scholarships": 1, "Applied Scholarships": 0},
        {"name": "Diploma", "Total Scholarships": 0, "Applied Scholarships": 0},
    ]


def test_unlisted_degrees_are_ignored(db):
    sid = scholarship(db, degree="PhD")
    _apply(db, sid, "PhD")
    assert all(row["Total Scholarships"] == 0 and row["Applied Scholarships"] == 0
               for row in statistics_service.summary(db))


def test_moderator_may_read(client, db, moderator):
    resp = client.get("/statistics", params={"uid": moderator}, headers=auth_header(moderator))
    assert resp.status_code == 200
    assert [row["name"] for row in resp.json()] == ["Masters", "Bachelor", "Diploma"]
