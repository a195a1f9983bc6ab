"""API tests for the profile and staff user-lookup endpoints."""

import pytest


@pytest.fixture
def auth_headers(register, login) -> dict[str, str]:
    register()
    return login()


class TestProfile:
    def test_get_profile(self, test_client, api_prefix, auth_headers):
        response = test_client.get(f"{api_prefix}/users/profile", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["user"]["first_name"] == "Juan"

    def test_requires_token(self, test_client, api_prefix):
        response = test_client.get(f"{api_prefix}/users/profile")
        assert response.status_code == 401

    def test_partial_update(self, test_client, api_prefix, auth_headers):
        response = test_client.patch(
            f"{api_prefix}/users/profile",
            headers=auth_headers,
            json={"first_name": "Pedro", "address": {"street": "45 Mabini Street"}},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Profile updated successfully"
        user = body["user"]
        assert user["first_name"] == "Pedro"
        assert user["full_name"] == "Pedro Santos Dela Cruz Jr."
        assert user["address"]["street"] == "45 Mabini Street"
        assert user["address"]["barangay"] == "Bonuan Binloc"

        again = test_client.get(f"{api_prefix}/users/profile", headers=auth_headers)
        assert again.json()["user"]["first_name"] == "Pedro"

    def test_protected_fields_are_ignored(self, test_client, api_prefix, auth_headers):
        before = test_client.get(f"{api_prefix}/users/profile", headers=auth_headers).json()

        response = test_client.patch(
            f"{api_prefix}/users/profile",
            headers=auth_headers,
            json={"user_id": "PDAO-20000101-AAAAA", "form_id": "FORM-1", "password": "x"},
        )

        assert response.status_code == 200
        assert response.json()["user"]["user_id"] == before["user"]["user_id"]
        assert response.json()["user"]["form_id"] is None

    def test_invalid_update(self, test_client, api_prefix, auth_headers):
        response = test_client.patch(
            f"{api_prefix}/users/profile",
            headers=auth_headers,
            json={"address": {"zip_code": "24"}},
        )

        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "address.zip_code", "message": "ZIP code must be 4 digits"},
        ]

    def test_email_taken_by_someone_else(
        self,
        test_client,
        api_prefix,
        auth_headers,
        register,
    ):
        register(email="maria@example.com", contact_number="09181234567")

        response = test_client.patch(
            f"{api_prefix}/users/profile",
            headers=auth_headers,
            json={"email": "maria@example.com"},
        )

        assert response.status_code == 400
        assert response.json()["field"] == "email"


class TestPasswordChange:
    def test_change_password(self, test_client, api_prefix, auth_headers, login):
        response = test_client.patch(
            f"{api_prefix}/users/profile",
            headers=auth_headers,
            json={"current_password": "SecurePass123", "new_password": "EvenBetter456"},
        )

        assert response.status_code == 200
        login(password="EvenBetter456")

    def test_wrong_current_password(self, test_client, api_prefix, auth_headers):
        response = test_client.patch(
            f"{api_prefix}/users/profile",
            headers=auth_headers,
            json={"current_password": "NotMyPass1", "new_password": "EvenBetter456"},
        )

        assert response.status_code == 401
        body = response.json()
        assert body["message"] == "Current password is incorrect"
        assert body["field"] == "current_password"

    def test_new_password_needs_current(self, test_client, api_prefix, auth_headers):
        response = test_client.patch(
            f"{api_prefix}/users/profile",
            headers=auth_headers,
            json={"new_password": "EvenBetter456"},
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "new_password"


class TestUserLookup:
    def test_regular_user_is_forbidden(self, test_client, api_prefix, auth_headers):
        response = test_client.get(
            f"{api_prefix}/users/PDAO-20240101-ABCDE",
            headers=auth_headers,
        )

        assert response.status_code == 403
        assert response.json()["message"] == (
            "Access denied. Required roles: Admin, Supervisor, Staff"
        )

    def test_staff_can_look_up_users(
        self,
        test_client,
        api_prefix,
        register,
        login,
        set_account,
    ):
        target = register()["user"]
        register(email="staff@example.com", contact_number="09181234567")
        set_account("staff@example.com", role="Staff")
        headers = login(email="staff@example.com")

        response = test_client.get(
            f"{api_prefix}/users/{target['user_id']}",
            headers=headers,
        )

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "juan.delacruz@example.com"

    def test_unknown_user(self, test_client, api_prefix, register, login, set_account):
        register()
        set_account("juan.delacruz@example.com", role="Admin")
        headers = login()

        response = test_client.get(
            f"{api_prefix}/users/PDAO-20240101-ZZZZZ",
            headers=headers,
        )

        assert response.status_code == 404
        assert response.json()["code"] == "ENTITY_NOT_FOUND"
