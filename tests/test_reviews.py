"""Reviews: public featured list, moderator and personal listings, writes."""
from conftest import auth_header, reference, scholarship
from empoweru.services import review_service
from fakes import FakeDocumentReference


def _review(db, scholarship_id, rating, date="01 March, 2025", uid="stu-1", **fields):
    data = {
        "scholarshipId": reference(db, "scholarships", scholarship_id),
        "userUID": uid,
        "rating": rating,
        "reviewMessage": f"rated {rating}",
        "reviewDate": date,
        "userName": "Sam",
        "userImage": "img",
    }
    data.update(fields)
    return db.seed("reviews", data)


class TestFeatured:
    def test_top_three_by_rating_then_date(self, client, db):
        sid = scholarship(db, universityName="MIT", subjectCategory="Agriculture")
        _review(db, sid, 3, "01 January, 2025")
        newest_five = _review(db, sid, 5, "10 February, 2025")
        older_five = _review(db, sid, 5, "01 February, 2025")
        four = _review(db, sid, 4, "20 March, 2025")
        _review(db, sid, 2, "25 March, 2025")

        body = client.get("/featured/reviews").json()
        assert [r["id"] for r in body] == [newest_five, older_five, four]
        assert body[0]["more"] == {"universityName": "MIT", "subjectCategory": "Agriculture"}
        assert set(body[0]) == {"id", "rating", "reviewMessage", "reviewDate", "userName", "userImage", "more"}

    def test_fewer_than_three(self, client, db):
        _review(db, scholarship(db), 4)
        assert len(client.get("/featured/reviews").json()) == 1

    def test_empty(self, client, db):
        assert client.get("/featured/reviews").json() == []


class TestListings:
    def test_all_reviews_for_moderators(self, client, db, moderator):
        sid = scholarship(db)
        _review(db, sid, 4)
        _review(db, sid, 2, uid="other")
        body = client.get("/reviews", params={"uid": moderator}, headers=auth_header(moderator)).json()
        assert len(body) == 2
        assert "userUID" not in body[0]
        assert body[0]["more"]["universityName"] == "Oxford"

    def test_all_reviews_forbidden_for_students(self, client, db, student):
        resp = client.get("/reviews", params={"uid": student}, headers=auth_header(student))
        assert resp.status_code == 403

    def test_mine(self, client, db, student):
        sid = scholarship(db, scholarshipName="Chevening")
        mine = _review(db, sid, 4)
        _review(db, sid, 1, uid="other")
        body = client.get(f"/reviews/{student}", headers=auth_header(student)).json()
        assert [r["id"] for r in body] == [mine]
        assert body[0]["scholarshipDetails"] == {"scholarshipName": "Chevening", "universityName": "Oxford"}
        assert "userName" not in body[0]

    def test_mine_for_someone_else_is_forbidden(self, client, student):
        assert client.get("/reviews/other", headers=auth_header(student)).status_code == 403

    def test_reviews_of_deleted_scholarship_are_dropped(self, db):
        _review(db, "gone", 5)
        assert review_service.list_all(db) == []


class TestWrites:
    def test_create_stores_reference(self, client, db, student):
        sid = scholarship(db)
        resp = client.post(
            "/reviews",
            json={"scholarshipId": sid, "userUID": student, "rating": 5, "reviewMessage": "Superb"},
            headers=auth_header(student),
        )
        stored = db.raw("reviews", resp.json()["insertedId"])
        assert isinstance(stored["scholarshipId"], FakeDocumentReference)
        assert stored["scholarshipId"].id == sid
        assert stored["reviewMessage"] == "Superb"

    def test_update(self, client, db, student):
        rid = _review(db, scholarship(db), 2)
        resp = client.patch(f"/reviews/{rid}", params={"uid": student},
                            json={"rating": 4, "reviewMessage": "Better now"}, headers=auth_header(student))
        assert resp.json() == {"acknowledged": True, "matchedCount": 1, "modifiedCount": 1}
        assert db.raw("reviews", rid)["rating"] == 4

    def test_update_without_changes(self, db):
        rid = _review(db, scholarship(db), 2)
        assert review_service.update(db, rid, {"rating": 2})["modifiedCount"] == 0

    def test_owner_delete(self, client, db, student):
        rid = _review(db, scholarship(db), 2)
        resp = client.delete(f"/reviews/{rid}", params={"uid": student}, headers=auth_header(student))
        assert resp.json() == {"acknowledged": True, "deletedCount": 1}
        assert db.raw("reviews", rid) is None

    def test_moderator_delete(self, client, db, moderator):
        rid = _review(db, scholarship(db), 1)
        resp = client.delete(f"/reviews/adminOrMod/{rid}", params={"uid": moderator},
                             headers=auth_header(moderator))
        assert resp.json()["deletedCount"] == 1

    def test_student_cannot_use_moderator_delete(self, client, db, student):
        rid = _review(db, scholarship(db), 1)
        resp = client.delete(f"/reviews/adminOrMod/{rid}", params={"uid": student},
                             headers=auth_header(student))
        assert resp.status_code == 403
        assert db.raw("reviews", rid) is not None


def test_listings_survive_free_form_rating(client, db, student, moderator):
    sid = scholarship(db)
    rid = _review(db, sid, 4)
    _review(db, sid, 5)
    resp = client.patch(f"/reviews/{rid}", params={"uid": student},
                        json={"rating": "five stars"}, headers=auth_header(student))
    assert resp.json()["modifiedCount"] == 1

    featured = client.get("/featured/reviews")
    assert featured.status_code == 200
    assert "five stars" in [r["rating"] for r in featured.json()]
    resp = client.get("/reviews", params={"uid": moderator}, headers=auth_header(moderator))
    assert resp.status_code == 200
    assert client.get(f"/scholarship/{sid}").json()["reviews"][0]["rating"] == "five stars"
    assert client.get("/scholarships").status_code == 200


def test_update_with_malformed_scholarship_id_matches_nothing(client, db, student):
    rid = _review(db, scholarship(db), 2)
    resp = client.patch(f"/reviews/{rid}", params={"uid": student},
                        json={"scholarshipId": "__bad__", "rating": 5}, headers=auth_header(student))
    assert resp.status_code == 200
    assert resp.json()["matchedCount"] == 0
    assert db.raw("reviews", rid)["rating"] == 2
