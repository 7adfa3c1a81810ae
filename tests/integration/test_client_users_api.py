"""HTTP tests for the client user endpoints."""

from unittest.mock import patch

import pytest

from src.bilemo.entities.service.client_user import ClientUserRepository

JANE = {"first_name": "Jane", "last_name": "Doe", "email": "jane@example.com"}


@pytest.fixture
def create_user(api, auth_headers):
    def _create(client, **overrides):
        response = api.post(
            f"/api/clients/{client.id}/users",
            json={**JANE, **overrides},
            headers=auth_headers(client),
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create


class TestClientUserCrud:
    def test_create_returns_read_fields_and_links(self, api, client_a, create_user):
        body = create_user(client_a)

        assert set(body) == {"id", "first_name", "last_name", "email", "_links"}
        base = f"/api/clients/{client_a.id}/users/{body['id']}"
        assert body["_links"] == {
            "self": {"href": base},
            "update": {"href": base},
            "delete": {"href": base},
        }

    def test_create_then_fetch_round_trip(self, api, client_a, create_user, auth_headers):
        created = create_user(client_a)

        fetched = api.get(
            f"/api/clients/{client_a.id}/users/{created['id']}", headers=auth_headers(client_a)
        ).json()

        assert fetched == created

    def test_duplicate_email_is_rejected(self, api, client_a, create_user, auth_headers):
        create_user(client_a)

        response = api.post(
            f"/api/clients/{client_a.id}/users", json=JANE, headers=auth_headers(client_a)
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Email already exists"}
        users = api.get(f"/api/clients/{client_a.id}/users", headers=auth_headers(client_a)).json()
        assert len(users) == 1

    def test_list_reflects_every_mutation(self, api, client_a, create_user, auth_headers):
        headers = auth_headers(client_a)
        url = f"/api/clients/{client_a.id}/users"
        assert api.get(url, headers=headers).json() == []

        jane = create_user(client_a)
        assert [u["email"] for u in api.get(url, headers=headers).json()] == ["jane@example.com"]

        api.put(f"{url}/{jane['id']}", json={"first_name": "Janet"}, headers=headers)
        assert api.get(url, headers=headers).json()[0]["first_name"] == "Janet"

        response = api.delete(f"{url}/{jane['id']}", headers=headers)
        assert response.status_code == 204
        assert api.get(url, headers=headers).json() == []

    def test_list_is_served_from_cache(self, api, client_a, create_user, auth_headers):
        create_user(client_a)
        url = f"/api/clients/{client_a.id}/users"
        first = api.get(url, headers=auth_headers(client_a)).json()

        with patch.object(ClientUserRepository, "find_paginated") as find:
            assert api.get(url, headers=auth_headers(client_a)).json() == first
        find.assert_not_called()

    def test_pagination(self, api, client_a, create_user, auth_headers):
        for i in range(1, 13):
            create_user(client_a, email=f"user{i:02d}@example.com")

        page2 = api.get(
            f"/api/clients/{client_a.id}/users",
            params={"page": 2, "limit": 10},
            headers=auth_headers(client_a),
        ).json()

        assert [u["email"] for u in page2] == ["user11@example.com", "user12@example.com"]

    def test_huge_page_is_an_empty_page(self, api, client_a, create_user, auth_headers):
        create_user(client_a)

        response = api.get(
            f"/api/clients/{client_a.id}/users",
            params={"page": 10**17, "limit": 100},
            headers=auth_headers(client_a),
        )

        assert response.status_code == 200
        assert response.json() == []

    def test_partial_update_keeps_other_fields(self, api, client_a, create_user, auth_headers):
        jane = create_user(client_a)

        updated = api.put(
            f"/api/clients/{client_a.id}/users/{jane['id']}",
            json={"last_name": "Smith", "id": 999},
            headers=auth_headers(client_a),
        ).json()

        assert updated["id"] == jane["id"]
        assert updated["first_name"] == "Jane"
        assert updated["last_name"] == "Smith"

    def test_update_validation(self, api, client_a, create_user, auth_headers):
        jane = create_user(client_a)

        response = api.put(
            f"/api/clients/{client_a.id}/users/{jane['id']}",
            json={"email": "broken", "first_name": " "},
            headers=auth_headers(client_a),
        )

        assert response.status_code == 400
        assert {e["field"] for e in response.json()["errors"]} == {"email", "first_name"}

    def test_missing_user(self, api, client_a, auth_headers):
        response = api.get(f"/api/clients/{client_a.id}/users/404", headers=auth_headers(client_a))

        assert response.status_code == 404


class TestClientUserAccess:
    def test_requires_authentication(self, api, client_a):
        response = api.get(f"/api/clients/{client_a.id}/users")

        assert response.status_code == 401
        assert response.json() == {"message": "JWT Token not found"}

    def test_other_client_list_is_forbidden(self, api, client_a, client_b, auth_headers):
        response = api.get(f"/api/clients/{client_b.id}/users", headers=auth_headers(client_a))

        assert response.status_code == 403

    def test_cross_tenant_create_performs_no_mutation(self, api, client_a, client_b, auth_headers):
        with patch.object(ClientUserRepository, "create") as create:
            response = api.post(
                f"/api/clients/{client_b.id}/users", json=JANE, headers=auth_headers(client_a)
            )

        assert response.status_code == 403
        create.assert_not_called()

    def test_cannot_reach_other_clients_user_through_own_path(
        self, api, client_a, client_b, create_user, auth_headers
    ):
        user_b = create_user(client_b)
        url = f"/api/clients/{client_a.id}/users/{user_b['id']}"
        headers = auth_headers(client_a)

        assert api.get(url, headers=headers).status_code == 403
        assert api.put(url, json={"first_name": "Eve"}, headers=headers).status_code == 403
        assert api.delete(url, headers=headers).status_code == 403

        still_there = api.get(
            f"/api/clients/{client_b.id}/users/{user_b['id']}", headers=auth_headers(client_b)
        ).json()
        assert still_there["first_name"] == "Jane"

    def test_ownership_checked_before_lookup(self, api, client_a, client_b, auth_headers):
        response = api.get(f"/api/clients/{client_b.id}/users/404", headers=auth_headers(client_a))

        assert response.status_code == 403

    def test_same_email_in_two_tenants(self, api, client_a, client_b, create_user):
        create_user(client_a)
        assert create_user(client_b)["email"] == "jane@example.com"

    def test_mutation_only_invalidates_own_tenant(
        self, api, client_a, client_b, create_user, auth_headers
    ):
        create_user(client_b)
        url_b = f"/api/clients/{client_b.id}/users"
        api.get(url_b, headers=auth_headers(client_b))

        create_user(client_a)

        with patch.object(ClientUserRepository, "find_paginated") as find:
            api.get(url_b, headers=auth_headers(client_b))
        find.assert_not_called()
