"""
Tests for the funding and admin API endpoints.
"""

from uuid import uuid4

import pytest

API = "/api/v1"

CAMPAIGN = {
    "title": "Solar Kiosk",
    "description": "Off-grid solar charging kiosks for rural markets.",
    "goal": 10,
    "duration_days": 30,
    "category": "energy",
    "image_url": "https://images.example.com/kiosk.png",
    "on_chain_id": "42",
    "transaction_hash": "0xabc",
}


@pytest.fixture
def owner(register) -> dict:
    return register(name="Olivia Owner", email="olivia@example.com")


@pytest.fixture
def backer(register) -> dict:
    return register(name="Ben Backer", email="ben@example.com")


def _as(user: dict) -> dict:
    return {"X-User-Id": user["id"]}


@pytest.fixture
def campaign(client, owner) -> dict:
    response = client.post(f"{API}/campaigns", json=CAMPAIGN, headers=_as(owner))
    assert response.status_code == 201, response.text
    return response.json()


class TestUserEndpoints:
    def test_register_and_fetch_profile(self, client, owner):
        assert owner["email"] == "olivia@example.com"
        assert owner["is_admin"] is False
        me = client.get(f"{API}/users/me", headers=_as(owner))
        assert me.status_code == 200
        assert me.json()["id"] == owner["id"]

    def test_duplicate_email_conflict(self, client, owner):
        response = client.post(
            f"{API}/users", json={"name": "Impostor", "email": "OLIVIA@example.com"}
        )
        assert response.status_code == 409
        assert response.json()["error"] == "Email already registered"

    def test_update_profile(self, client, owner):
        response = client.patch(
            f"{API}/users/me",
            json={"wallet_address": "0xwallet", "image": "https://cdn.example.com/me.png"},
            headers=_as(owner),
        )
        assert response.status_code == 200
        body = response.json()
        assert body["wallet_address"] == "0xwallet"
        assert body["image"] == "https://cdn.example.com/me.png"
        assert body["name"] == "Olivia Owner"

    def test_user_listings(self, client, owner, backer, campaign):
        client.post(
            f"{API}/campaigns/{campaign['id']}/contribute",
            json={"amount": 1, "transaction_hash": "0x1"},
            headers=_as(backer),
        )
        campaigns = client.get(f"{API}/users/{owner['id']}/campaigns").json()["campaigns"]
        assert [c["id"] for c in campaigns] == [campaign["id"]]
        contributions = client.get(f"{API}/users/{backer['id']}/contributions").json()
        assert len(contributions["contributions"]) == 1


class TestCampaignEndpoints:
    def test_create(self, campaign, owner):
        assert campaign["status"] == "active"
        assert campaign["raised"] == 0
        assert campaign["user_id"] == owner["id"]
        assert campaign["image_url"] == "https://images.example.com/kiosk.png"

    def test_create_requires_auth(self, client):
        assert client.post(f"{API}/campaigns", json=CAMPAIGN).status_code == 401

    @pytest.mark.parametrize(
        "override",
        [{"title": "Tiny"}, {"description": "too short"}, {"goal": 0}, {"duration_days": 0}],
    )
    def test_create_validation(self, client, owner, override):
        response = client.post(
            f"{API}/campaigns", json={**CAMPAIGN, **override}, headers=_as(owner)
        )
        assert response.status_code == 400

    def test_list_and_filter(self, client, campaign):
        assert len(client.get(f"{API}/campaigns").json()["campaigns"]) == 1
        assert client.get(f"{API}/campaigns", params={"category": "art"}).json()["campaigns"] == []
        paused = client.get(f"{API}/campaigns", params={"status": "paused"}).json()
        assert paused["campaigns"] == []
        assert client.get(f"{API}/campaigns", params={"status": "bogus"}).status_code == 400

    def test_get_unknown(self, client):
        response = client.get(f"{API}/campaigns/{uuid4()}")
        assert response.status_code == 404
        assert response.json()["error"] == "Campaign not found"

    def test_owner_updates(self, client, owner, campaign):
        response = client.patch(
            f"{API}/campaigns/{campaign['id']}",
            json={"status": "paused", "title": "Solar Kiosk v2"},
            headers=_as(owner),
        )
        assert response.status_code == 200
        assert response.json()["status"] == "paused"
        assert response.json()["title"] == "Solar Kiosk v2"

    def test_stranger_forbidden(self, client, backer, campaign):
        patch = client.patch(
            f"{API}/campaigns/{campaign['id']}", json={"title": "Hijacked!"}, headers=_as(backer)
        )
        assert patch.status_code == 403
        delete = client.delete(f"{API}/campaigns/{campaign['id']}", headers=_as(backer))
        assert delete.status_code == 403

    def test_refunded_status_rejected(self, client, owner, campaign):
        response = client.patch(
            f"{API}/campaigns/{campaign['id']}", json={"status": "refunded"}, headers=_as(owner)
        )
        assert response.status_code == 400

    def test_owner_deletes(self, client, owner, campaign):
        assert client.delete(
            f"{API}/campaigns/{campaign['id']}", headers=_as(owner)
        ).status_code == 204
        assert client.get(f"{API}/campaigns/{campaign['id']}").status_code == 404

    def test_admin_deletes_any(self, client, backer, make_admin, campaign):
        make_admin(backer)
        response = client.delete(f"{API}/campaigns/{campaign['id']}", headers=_as(backer))
        assert response.status_code == 204


class TestContributeEndpoint:
    def test_contribution_recorded(self, client, backer, campaign):
        response = client.post(
            f"{API}/campaigns/{campaign['id']}/contribute",
            json={"amount": 2.5, "transaction_hash": "0xfeed"},
            headers=_as(backer),
        )
        assert response.status_code == 201
        assert response.json()["user_name"] == "Ben Backer"
        assert response.json()["campaign_title"] == "Solar Kiosk"

        assert client.get(f"{API}/campaigns/{campaign['id']}").json()["raised"] == 2.5
        listed = client.get(f"{API}/campaigns/{campaign['id']}/contributions").json()
        assert [c["amount"] for c in listed["contributions"]] == [2.5]

    def test_paused_campaign(self, client, owner, backer, campaign):
        client.patch(
            f"{API}/campaigns/{campaign['id']}", json={"status": "paused"}, headers=_as(owner)
        )
        response = client.post(
            f"{API}/campaigns/{campaign['id']}/contribute",
            json={"amount": 1, "transaction_hash": "0x1"},
            headers=_as(backer),
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Campaign is not active", "detail": "paused"}

    def test_non_positive_amount(self, client, backer, campaign):
        response = client.post(
            f"{API}/campaigns/{campaign['id']}/contribute",
            json={"amount": 0, "transaction_hash": "0x1"},
            headers=_as(backer),
        )
        assert response.status_code == 400

    def test_unknown_campaign(self, client, backer):
        response = client.post(
            f"{API}/campaigns/{uuid4()}/contribute",
            json={"amount": 1, "transaction_hash": "0x1"},
            headers=_as(backer),
        )
        assert response.status_code == 404
        assert client.get(f"{API}/campaigns/{uuid4()}/contributions").status_code == 404


class TestAdminEndpoints:
    @pytest.fixture
    def admin(self, register, make_admin) -> dict:
        user = register(name="Ada Admin", email="ada@example.com")
        make_admin(user)
        return user

    def test_non_admin_forbidden(self, client, owner):
        for path in ("/admin/stats", "/admin/users", "/admin/transactions"):
            assert client.get(f"{API}{path}", headers=_as(owner)).status_code == 403

    def test_stats(self, client, admin, backer, campaign):
        client.post(
            f"{API}/campaigns/{campaign['id']}/contribute",
            json={"amount": 3, "transaction_hash": "0x1"},
            headers=_as(backer),
        )
        stats = client.get(f"{API}/admin/stats", headers=_as(admin)).json()
        assert stats == {
            "total_campaigns": 1,
            "active_campaigns": 1,
            "total_users": 3,
            "total_funds_raised": 3.0,
            "transactions_today": 1,
        }

    def test_users_listed(self, client, admin, owner):
        users = client.get(f"{API}/admin/users", headers=_as(admin)).json()["users"]
        assert {u["email"] for u in users} == {"ada@example.com", "olivia@example.com"}

    def test_toggle_admin(self, client, admin, owner):
        url = f"{API}/admin/users/{owner['id']}/toggle-admin"
        assert client.post(url, headers=_as(admin)).json()["is_admin"] is True
        assert client.post(url, headers=_as(admin)).json()["is_admin"] is False
        explicit = client.post(url, json={"is_admin": True}, headers=_as(admin))
        assert explicit.json()["is_admin"] is True

    def test_toggle_unknown_user(self, client, admin):
        response = client.post(f"{API}/admin/users/{uuid4()}/toggle-admin", headers=_as(admin))
        assert response.status_code == 404

    def test_transactions_paginated(self, client, admin, backer, campaign):
        for i in range(3):
            client.post(
                f"{API}/campaigns/{campaign['id']}/contribute",
                json={"amount": 1, "transaction_hash": f"0x{i}"},
                headers=_as(backer),
            )
        page = client.get(
            f"{API}/admin/transactions", params={"page": 1, "limit": 2}, headers=_as(admin)
        ).json()
        assert page["total_count"] == 3
        assert page["total_pages"] == 2
        assert len(page["transactions"]) == 2
        assert page["transactions"][0]["status"] == "confirmed"

        failed = client.get(
            f"{API}/admin/transactions", params={"status": "failed"}, headers=_as(admin)
        ).json()
        assert failed["total_count"] == 0

    def test_transactions_bad_query(self, client, admin):
        for params in ({"page": 0}, {"limit": 101}, {"status": "bogus"}):
            response = client.get(f"{API}/admin/transactions", params=params, headers=_as(admin))
            assert response.status_code == 400
