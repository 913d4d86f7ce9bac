"""
HTTP-level tests: auth, role checks and the error-to-status mapping.
"""
from datetime import timedelta

from app.repositories.user_repository import UserRepository
from app.utils.dates import utc_now


class TestAuth:
    def test_signup_and_login(self, client):
        response = client.post(
            "/api/auth/signup", json={"email": "New@Campus.test", "password": "s3cret!"}
        )
        assert response.status_code == 201
        assert response.json["user"]["role"] == "student"
        assert response.json["token"]

        response = client.post(
            "/api/auth/login", json={"email": "new@campus.test", "password": "s3cret!"}
        )
        assert response.status_code == 200

        me = client.get(
            "/api/auth/me", headers={"Authorization": f"Bearer {response.json['token']}"}
        )
        assert me.status_code == 200
        assert me.json["email"] == "new@campus.test"

    def test_duplicate_signup(self, client, student):
        response = client.post(
            "/api/auth/signup", json={"email": student.email, "password": "whatever"}
        )
        assert response.status_code == 400
        assert response.json["code"] == "INVALID_INPUT"

    def test_wrong_password(self, client, student):
        response = client.post(
            "/api/auth/login", json={"email": student.email, "password": "wrong"}
        )
        assert response.status_code == 401

    def test_login_requires_fields(self, client):
        response = client.post("/api/auth/login", json={"email": "a@b.c"})
        assert response.status_code == 400
        assert response.json["missing_fields"] == ["password"]

    def test_non_object_body_is_rejected(self, client):
        for path in ("/api/auth/signup", "/api/auth/login"):
            response = client.post(path, json=["email", "password"])
            assert response.status_code == 400

    def test_concurrent_signup_same_email(self, client, student, monkeypatch):
        # both requests passed the existence check before either committed
        monkeypatch.setattr(UserRepository, "find_by_email", staticmethod(lambda email: None))

        response = client.post(
            "/api/auth/signup", json={"email": student.email, "password": "whatever"}
        )

        assert response.status_code == 400
        assert response.json["errors"] == ["email"]

    def test_protected_route_without_token(self, client):
        assert client.get("/api/users/tickets").status_code == 401


class TestEventsApi:
    def test_public_listing(self, client, make_event):
        event = make_event()

        response = client.get("/api/events")

        assert response.status_code == 200
        assert [e["id"] for e in response.json] == [event.id]

    def test_get_missing_event(self, client, app):
        response = client.get("/api/events/nope")
        assert response.status_code == 404
        assert response.json["code"] == "NOT_FOUND"

    def test_register_flow(self, client, make_event, student, auth_headers, contact_fields):
        event = make_event(capacity=1)
        headers = auth_headers(student)

        response = client.post(f"/api/events/{event.id}/register", json=contact_fields, headers=headers)
        assert response.status_code == 201
        assert response.json["payment_status"] == "completed"
        ticket_id = response.json["ticket_id"]

        again = client.post(f"/api/events/{event.id}/register", json=contact_fields, headers=headers)
        assert again.status_code == 409
        assert again.json["code"] == "ALREADY_REGISTERED"

        mine = client.get(f"/api/events/{event.id}/my-registration", headers=headers)
        assert mine.json["ticket_id"] == ticket_id

        tickets = client.get("/api/users/tickets", headers=headers)
        assert tickets.json[0]["event"]["registered_count"] == 1

        qr = client.get(f"/api/users/tickets/{ticket_id}/qr", headers=headers)
        assert qr.status_code == 200
        assert qr.mimetype == "image/png"
        assert qr.data.startswith(b"\x89PNG")

    def test_sold_out(self, client, make_event, make_user, add_registration, student, auth_headers, contact_fields):
        event = make_event(capacity=1)
        add_registration(event, make_user("first@campus.test"))

        response = client.post(
            f"/api/events/{event.id}/register", json=contact_fields, headers=auth_headers(student)
        )

        assert response.status_code == 409
        assert response.json["code"] == "SOLD_OUT"

    def test_not_yet_open(self, client, make_event, student, auth_headers, contact_fields):
        now = utc_now()
        event = make_event(registration_opens=now + timedelta(hours=3))

        response = client.post(
            f"/api/events/{event.id}/register", json=contact_fields, headers=auth_headers(student)
        )

        assert response.status_code == 400
        assert response.json["code"] == "NOT_YET_OPEN"

    def test_invalid_registration_body(self, client, make_event, student, auth_headers):
        event = make_event()

        response = client.post(
            f"/api/events/{event.id}/register", json={"name": "Only name"}, headers=auth_headers(student)
        )

        assert response.status_code == 400
        assert response.json["errors"] == ["email", "phone", "branch", "year"]

    def test_non_object_registration_body(self, client, make_event, student, auth_headers):
        event = make_event()

        response = client.post(
            f"/api/events/{event.id}/register", json=[{"name": "x"}], headers=auth_headers(student)
        )

        assert response.status_code == 400
        assert response.json["code"] == "INVALID_INPUT"
        assert event.registered_count == 0

    def test_my_registration_empty(self, client, make_event, student, auth_headers):
        event = make_event()

        response = client.get(f"/api/events/{event.id}/my-registration", headers=auth_headers(student))

        assert response.status_code == 200
        assert response.json is None


class TestAdminApi:
    def test_student_is_forbidden(self, client, student, auth_headers):
        for path in ("/api/admin/stats", "/api/admin/events"):
            response = client.get(path, headers=auth_headers(student))
            assert response.status_code == 403

    def test_create_update_delete(self, client, organizer, auth_headers):
        headers = auth_headers(organizer)
        now = utc_now()
        payload = {
            "title": "Dance Night",
            "description": "Annual cultural night.",
            "venue": "Quad",
            "event_type": "cultural",
            "registration_opens": now.isoformat(),
            "registration_closes": (now + timedelta(days=3)).isoformat(),
            "event_starts": (now + timedelta(days=4)).isoformat(),
            "event_ends": (now + timedelta(days=4, hours=5)).isoformat(),
            "capacity": 300,
            "status": "published",
        }

        created = client.post("/api/admin/events", json=payload, headers=headers)
        assert created.status_code == 201
        event_id = created.json["id"]
        assert created.json["organizer_id"] == organizer.id

        updated = client.patch(f"/api/admin/events/{event_id}", json={"capacity": 250}, headers=headers)
        assert updated.status_code == 200
        assert updated.json["capacity"] == 250

        listing = client.get("/api/admin/events", headers=headers)
        assert [e["id"] for e in listing.json] == [event_id]

        deleted = client.delete(f"/api/admin/events/{event_id}", headers=headers)
        assert deleted.status_code == 200
        again = client.delete(f"/api/admin/events/{event_id}", headers=headers)
        assert again.status_code == 404

    def test_invalid_event_payload(self, client, organizer, auth_headers):
        response = client.post("/api/admin/events", json={"title": ""}, headers=auth_headers(organizer))

        assert response.status_code == 400
        assert "title" in response.json["errors"]

    def test_non_object_event_payload(self, client, make_event, organizer, auth_headers):
        headers = auth_headers(organizer)
        event = make_event()

        created = client.post("/api/admin/events", json=["title"], headers=headers)
        updated = client.patch(f"/api/admin/events/{event.id}", json=["title"], headers=headers)

        assert created.status_code == 400
        assert created.json["code"] == "INVALID_INPUT"
        assert updated.status_code == 400
        assert updated.json["code"] == "INVALID_INPUT"

    def test_other_organizer_cannot_edit(self, client, make_event, other_organizer, auth_headers):
        event = make_event()

        response = client.patch(
            f"/api/admin/events/{event.id}", json={"title": "Mine now"}, headers=auth_headers(other_organizer)
        )

        assert response.status_code == 403

    def test_event_registrations_for_owner(
        self, client, make_event, make_user, add_registration, organizer, other_organizer, auth_headers
    ):
        event = make_event()
        add_registration(event, make_user("guest@campus.test"))

        owner_view = client.get(f"/api/events/{event.id}/registrations", headers=auth_headers(organizer))
        assert owner_view.status_code == 200
        assert len(owner_view.json) == 1

        other_view = client.get(
            f"/api/events/{event.id}/registrations", headers=auth_headers(other_organizer)
        )
        assert other_view.status_code == 403

    def test_stats(self, client, make_event, make_user, add_registration, organizer, auth_headers):
        event = make_event()
        add_registration(event, make_user("guest@campus.test"))

        response = client.get("/api/admin/stats", headers=auth_headers(organizer))

        assert response.status_code == 200
        assert response.json["total_registrations"] == 1
        assert response.json["recent_registrations"][0]["event"]["id"] == event.id


def test_health(client):
    assert client.get("/api/health").json == {"status": "ok"}
