from datetime import timedelta

import pytest

from pawwalk.core.time_utils import utc_now
from pawwalk.models import UserRole, WalkStatus


@pytest.fixture
def as_owner(login_as, owner):
    return login_as(owner)


class TestWalkRoutes:
    def test_requires_authorization_header(self, client):
        response = client.get("/api/v1/walks")

        assert response.status_code == 401
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "AUTH_401_1"
        assert body["path"] == "/api/v1/walks"

    def test_create_walk(self, client, as_owner, walker, owner, pet):
        scheduled = (utc_now() + timedelta(days=1)).replace(microsecond=0)

        response = client.post(
            "/api/v1/walks",
            json={
                "walker_id": walker.user_id,
                "owner_id": owner.user_id,
                "pet_ids": [pet.pet_id],
                "scheduled_date_time": scheduled.isoformat() + "Z",
                "start_address": "1 Park Ave",
                "total_price": 500,
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["status"] == 201
        assert body["walk"]["status"] == "requested"
        assert body["walk"]["scheduled_end_time"] == (scheduled + timedelta(hours=1)).isoformat()

    def test_create_walk_validation_error(self, client, as_owner, walker, owner, pet):
        response = client.post(
            "/api/v1/walks",
            json={
                "walker_id": walker.user_id,
                "owner_id": owner.user_id,
                "pet_ids": [pet.pet_id],
                "scheduled_date_time": (utc_now() + timedelta(days=1)).isoformat(),
                "start_address": "1 Park Ave",
                "total_price": 0,
            },
        )

        assert response.status_code == 400
        assert response.json()["code"] == "WALK_400_5"

    def test_malformed_body_uses_common_code(self, client, as_owner):
        response = client.post("/api/v1/walks", json={"walker_id": "not-a-number"})

        assert response.status_code == 400
        assert response.json()["code"] == "COMMON_400_1"

    def test_get_walk_and_not_found(self, client, as_owner, walker, owner, make_walk):
        walk = make_walk(walker, owner)

        ok = client.get(f"/api/v1/walks/{walk.walk_id}")
        missing = client.get("/api/v1/walks/99999")

        assert ok.status_code == 200
        assert ok.json()["walk"]["walk_id"] == walk.walk_id
        assert missing.status_code == 404
        assert missing.json()["code"] == "WALK_404_1"

    def test_static_lists_are_not_shadowed(self, client, as_owner, walker, owner, make_walk):
        make_walk(walker, owner, status=WalkStatus.ACTIVE)
        make_walk(walker, owner, status=WalkStatus.REQUESTED)

        active = client.get("/api/v1/walks/active")
        requested = client.get("/api/v1/walks/requested")

        assert active.status_code == 200
        assert active.json()["total"] == 1
        assert requested.json()["walks"][0]["status"] == "requested"

    def test_list_by_status_label(self, client, as_owner, walker, owner, make_walk):
        make_walk(walker, owner, status=WalkStatus.AWAITING_PAYMENT)

        response = client.get("/api/v1/walks/status/Awaiting payment")

        assert response.status_code == 200
        assert response.json()["total"] == 1

    def test_list_by_unknown_status(self, client, as_owner):
        response = client.get("/api/v1/walks/status/paused")

        assert response.status_code == 400
        assert response.json()["code"] == "WALK_STATUS_400_1"

    def test_lifecycle_through_api(self, client, as_owner, walker, owner, pet, make_walk):
        walk = make_walk(walker, owner, pets=[pet], scheduled_start_time=utc_now())
        base = f"/api/v1/walks/{walk.walk_id}"

        assert client.patch(f"{base}/accept").json()["walk"]["status"] == "awaiting_payment"
        assert client.patch(f"{base}/confirm-payment").json()["walk"]["status"] == "scheduled"
        started = client.patch(f"{base}/start")
        assert started.status_code == 200
        assert started.json()["walk"]["status"] == "active"
        assert client.patch(f"{base}/finish").json()["walk"]["status"] == "finished"

        again = client.patch(f"{base}/cancel")
        assert again.status_code == 400
        assert again.json()["code"] == "WALK_STATUS_400_2"

    def test_start_outside_window(self, client, as_owner, walker, owner, make_walk):
        walk = make_walk(
            walker,
            owner,
            status=WalkStatus.SCHEDULED,
            scheduled_start_time=utc_now() + timedelta(hours=2),
        )

        response = client.patch(f"/api/v1/walks/{walk.walk_id}/start")

        assert response.status_code == 400
        assert response.json()["code"] == "WALK_STATUS_400_3"
        assert "(UTC)" in response.json()["reason"]

    def test_generic_status_endpoint(self, client, as_owner, walker, owner, make_walk):
        walk = make_walk(walker, owner)

        response = client.patch(f"/api/v1/walks/{walk.walk_id}/status", json={"status": "Rejected"})

        assert response.status_code == 200
        assert response.json()["walk"]["status_label"] == "Rejected"

    def test_update_and_delete(self, client, as_owner, login_as, make_user, walker, owner, make_walk):
        walk = make_walk(walker, owner)

        updated = client.put(f"/api/v1/walks/{walk.walk_id}", json={"admin_notes": "checked"})
        login_as(make_user(name="Admin", role=UserRole.ADMIN))
        deleted = client.delete(f"/api/v1/walks/{walk.walk_id}")
        validated = client.get(f"/api/v1/walks/{walk.walk_id}/validate")

        assert updated.json()["walk"]["admin_notes"] == "checked"
        assert deleted.json()["walk_id"] == walk.walk_id
        assert validated.json()["is_valid"] is False

    def test_delete_requires_admin(self, client, as_owner, walker, owner, make_walk):
        walk = make_walk(walker, owner)

        response = client.delete(f"/api/v1/walks/{walk.walk_id}")
        still_there = client.get(f"/api/v1/walks/{walk.walk_id}/validate")

        assert response.status_code == 403
        assert response.json()["code"] == "AUTH_403_2"
        assert still_there.json()["is_valid"] is True

    def test_create_walk_rejects_owner_as_walker(self, client, as_owner, owner, pet):
        response = client.post(
            "/api/v1/walks",
            json={
                "walker_id": owner.user_id,
                "owner_id": owner.user_id,
                "pet_ids": [pet.pet_id],
                "scheduled_date_time": (utc_now() + timedelta(days=1)).isoformat(),
                "start_address": "1 Park Ave",
                "total_price": 25,
            },
        )

        assert response.status_code == 400
        assert response.json()["code"] == "WALK_400_13"

    def test_update_distance_on_requested_walk(self, client, as_owner, walker, owner, make_walk):
        walk = make_walk(walker, owner)

        response = client.put(f"/api/v1/walks/{walk.walk_id}", json={"distance_km": 2.5})

        assert response.status_code == 400
        assert response.json()["code"] == "WALK_400_12"


class TestReceiptRoutes:
    def test_receipt(self, client, as_owner, walker, owner, pet, make_walk, make_payment):
        walk = make_walk(walker, owner, pets=[pet], status=WalkStatus.FINISHED)
        make_payment(walk)

        response = client.get(f"/api/v1/walks/{walk.walk_id}/receipt")

        assert response.status_code == 200
        assert response.json()["receipt"]["pets"]["names"] == ["Rex"]

    def test_receipt_list(self, client, as_owner, walker, owner, make_walk, make_payment):
        make_payment(make_walk(walker, owner))

        response = client.get(f"/api/v1/walks/receipts/owner/{owner.user_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["user_type"] == "owner"

    def test_receipt_list_bad_type(self, client, as_owner, owner):
        response = client.get(f"/api/v1/walks/receipts/admin/{owner.user_id}")

        assert response.status_code == 400
        assert response.json()["code"] == "RECEIPT_400_2"
