"""Tests for the JSON API."""

from datetime import date, timedelta
from decimal import Decimal

from fastapi.testclient import TestClient

from hotelbook.store import RecordStore


def _future(days: int) -> str:
    return (date.today() + timedelta(days=days)).isoformat()


def _signup_and_login(client: TestClient, username: str = "alice", phone: str = "5551234567",
                      profile: bool = True) -> None:
    res = client.post("/api/v1/auth/signup", json={"username": username, "phone": phone, "confirm_phone": phone})
    assert res.status_code == 201
    res = client.post("/api/v1/auth/login", json={"username": username, "phone": phone})
    assert res.status_code == 200
    if profile:
        res = client.put("/api/v1/profile", json={
            "full_name": f"{username.title()} Example",
            "id_number": "P-100",
            "email": f"{username}@example.com",
            "address": "1 Harbour Road",
            "phone": phone,
        })
        assert res.status_code == 200
        assert res.json()["complete"] is True


class TestAuth:
    def test_health(self, client: TestClient) -> None:
        assert client.get("/healthz").json() == {"status": "ok"}

    def test_signup_validation_messages(self, client: TestClient) -> None:
        res = client.post("/api/v1/auth/signup", json={"username": "ab", "phone": "5551234567", "confirm_phone": "5551234567"})
        assert res.status_code == 400
        assert res.json()["detail"].startswith("Username must be 3-20 characters")

        res = client.post("/api/v1/auth/signup", json={"username": "alice", "phone": "5551234567", "confirm_phone": "5551234560"})
        assert res.status_code == 400
        assert res.json()["detail"] == "Phone numbers don't match"

    def test_duplicate_signup(self, client: TestClient) -> None:
        body = {"username": "alice", "phone": "5551234567", "confirm_phone": "5551234567"}
        assert client.post("/api/v1/auth/signup", json=body).status_code == 201
        res = client.post("/api/v1/auth/signup", json=body)
        assert res.status_code == 409

    def test_login_reports_profile_state(self, client: TestClient) -> None:
        _signup_and_login(client, profile=False)
        res = client.get("/api/v1/auth/me")
        assert res.json() == {"username": "alice", "is_admin": False, "profile_complete": False}

    def test_bad_login(self, client: TestClient) -> None:
        res = client.post("/api/v1/auth/login", json={"username": "ghost", "phone": "5551234567"})
        assert res.status_code == 401
        assert res.json()["detail"] == "Invalid username or phone number."

    def test_requires_session(self, client: TestClient) -> None:
        res = client.get("/api/v1/bookings")
        assert res.status_code == 401
        assert res.json() == {"detail": "Not authenticated"}

    def test_logout(self, client: TestClient) -> None:
        _signup_and_login(client, profile=False)
        client.post("/api/v1/auth/logout")
        assert client.get("/api/v1/auth/me").status_code == 401


class TestRooms:
    def test_list_sorted(self, client: TestClient) -> None:
        res = client.get("/api/v1/rooms")
        assert res.status_code == 200
        assert [r["room_number"] for r in res.json()] == [101, 104, 102, 105, 103]

    def test_filters(self, client: TestClient) -> None:
        res = client.get("/api/v1/rooms", params={"min_price": "120", "max_price": "180", "facilities": "Balcony"})
        assert [r["room_number"] for r in res.json()] == [104, 105]
        res = client.get("/api/v1/rooms", params={"type": "Suite"})
        rooms = res.json()
        assert [r["room_number"] for r in rooms] == [103]
        assert rooms[0]["facilities"] == ["WiFi", "TV", "AC", "Meal Service", "Jacuzzi"]
        assert rooms[0]["status"] == "Available"

    def test_unknown_room_type_rejected(self, client: TestClient) -> None:
        assert client.get("/api/v1/rooms", params={"type": "Penthouse"}).status_code == 422


class TestBookingFlow:
    def test_book_list_receipt_cancel(self, client: TestClient, store: RecordStore) -> None:
        _signup_and_login(client)
        res = client.post("/api/v1/bookings", json={"room_number": 101, "check_in": _future(10), "check_out": _future(12)})
        assert res.status_code == 201
        body = res.json()
        assert body["nights"] == 2
        assert Decimal(str(body["total_price"])) == Decimal("200")
        assert body["message"] == f"Booking confirmed! ID: {body['booking_id']}, Total: $200.00 for 2 nights."

        listed = client.get("/api/v1/bookings").json()
        assert [b["booking_id"] for b in listed] == [body["booking_id"]]
        assert listed[0]["status"] == "active"

        receipt = client.get(f"/api/v1/bookings/{body['booking_id']}/receipt")
        assert receipt.status_code == 200
        assert "Total Price: $200.00" in receipt.text

        rooms = {r["room_number"]: r for r in client.get("/api/v1/rooms").json()}
        assert rooms[101]["status"] == "Booked"

        res = client.post(f"/api/v1/bookings/{body['booking_id']}/cancel")
        assert res.status_code == 200
        assert res.json()["status"] == "canceled"
        rooms = {r["room_number"]: r for r in client.get("/api/v1/rooms").json()}
        assert rooms[101]["status"] == "Available"

    def test_overlap_conflict(self, client: TestClient) -> None:
        _signup_and_login(client)
        client.post("/api/v1/bookings", json={"room_number": 102, "check_in": _future(5), "check_out": _future(8)})
        res = client.post("/api/v1/bookings", json={"room_number": 102, "check_in": _future(7), "check_out": _future(9)})
        assert res.status_code == 409
        assert res.json()["detail"] == "Room is already booked for those dates."

    def test_incomplete_profile(self, client: TestClient) -> None:
        _signup_and_login(client, profile=False)
        res = client.post("/api/v1/bookings", json={"room_number": 101, "check_in": _future(1), "check_out": _future(2)})
        assert res.status_code == 400
        assert res.json()["detail"] == "Please complete your profile before booking."

    def test_bad_dates(self, client: TestClient) -> None:
        _signup_and_login(client)
        res = client.post("/api/v1/bookings", json={"room_number": 101, "check_in": "soon", "check_out": _future(2)})
        assert res.json()["detail"] == "Invalid date format. Use YYYY-MM-DD or DD/MM/YYYY."
        res = client.post("/api/v1/bookings", json={"room_number": 101, "check_in": "2024-01-01", "check_out": "2024-01-03"})
        assert res.json()["detail"] == "Check-in date must be today or in the future."

    def test_cannot_cancel_someone_elses_booking(self, client: TestClient) -> None:
        _signup_and_login(client, "alice", "5551234567")
        booking_id = client.post(
            "/api/v1/bookings", json={"room_number": 101, "check_in": _future(3), "check_out": _future(4)}
        ).json()["booking_id"]
        _signup_and_login(client, "bob", "5559876543")
        assert client.post(f"/api/v1/bookings/{booking_id}/cancel").status_code == 404
        assert client.get(f"/api/v1/bookings/{booking_id}/receipt").status_code == 404

    def test_receipts_empty(self, client: TestClient) -> None:
        _signup_and_login(client)
        assert client.get("/api/v1/receipts").text == "No receipts found.\n"

    def test_profile_rejects_delimiter(self, client: TestClient) -> None:
        _signup_and_login(client, profile=False)
        res = client.put("/api/v1/profile", json={"full_name": "Alice", "id_number": "P1", "address": "Unit 4: Dock St"})
        assert res.status_code == 400


class TestAdmin:
    def _admin(self, client: TestClient) -> None:
        res = client.post("/api/v1/admin/login", json={"password": "admin123"})
        assert res.status_code == 200

    def test_bad_password(self, client: TestClient) -> None:
        res = client.post("/api/v1/admin/login", json={"password": "nope"})
        assert res.status_code == 401
        assert res.json()["detail"] == "Invalid admin password."

    def test_customer_is_forbidden(self, client: TestClient) -> None:
        _signup_and_login(client, profile=False)
        assert client.get("/api/v1/admin/bookings").status_code == 403

    def test_revenue_and_bookings(self, client: TestClient) -> None:
        _signup_and_login(client)
        client.post("/api/v1/bookings", json={"room_number": 103, "check_in": _future(2), "check_out": _future(3)})
        self._admin(client)

        today = date.today().isoformat()
        res = client.get("/api/v1/admin/revenue", params={"date": today})
        assert res.status_code == 200
        body = res.json()
        assert Decimal(str(body["daily"])) == Decimal("300")
        assert Decimal(str(body["weekly"])) == Decimal("300")
        assert body["message"] == f"Revenue for {today}: Daily: $300.00, Weekly: $300.00"

        res = client.get("/api/v1/admin/bookings", params={"username": "ali", "start_date": today})
        assert [b["room_number"] for b in res.json()] == [103]
        res = client.get("/api/v1/admin/bookings", params={"username": "bob"})
        assert res.json() == []

    def test_revenue_bad_date(self, client: TestClient) -> None:
        self._admin(client)
        res = client.get("/api/v1/admin/revenue", params={"date": "yesterday"})
        assert res.status_code == 400

    def test_change_password(self, client: TestClient) -> None:
        self._admin(client)
        res = client.post("/api/v1/admin/password", json={"new_password": "abc", "confirm_password": "abc"})
        assert res.status_code == 400
        res = client.post("/api/v1/admin/password", json={"new_password": "harbour9", "confirm_password": "harbour9"})
        assert res.status_code == 200
        assert client.post("/api/v1/admin/login", json={"password": "admin123"}).status_code == 401
        assert client.post("/api/v1/admin/login", json={"password": "harbour9"}).status_code == 200

    def test_reports(self, client: TestClient) -> None:
        self._admin(client)
        res = client.get("/api/v1/admin/reports/bookings.csv")
        assert res.status_code == 200
        assert res.headers["content-type"].startswith("text/csv")
        assert res.text.startswith("Booking ID,Customer")
        res = client.get("/api/v1/admin/reports/bookings.pdf")
        assert res.status_code == 200
        assert res.content.startswith(b"%PDF")
