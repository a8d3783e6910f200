"""
Component tests for registration, login and the current user endpoint
"""
from fastapi.testclient import TestClient

from models.log import Log


NEW_USER = {
    "email": "New.User@Example.com",
    "password": "long-enough-password",
    "first_name": "Yusuf",
    "last_name": "Ali",
    "phone": "+971501234567",
}


class TestRegister:
    def test_register_creates_customer(self, test_client: TestClient, db_session):
        response = test_client.post("/register", json=NEW_USER)

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "new.user@example.com"
        assert data["role"] == "customer"
        assert "password_hash" not in data
        assert db_session.query(Log).filter(Log.action == "REGISTER", Log.status == "SUCCESS").count() == 1

    def test_register_ignores_role_in_payload(self, test_client: TestClient):
        response = test_client.post("/register", json={**NEW_USER, "role": "admin"})

        assert response.json()["role"] == "customer"

    def test_duplicate_email_is_rejected(self, test_client: TestClient, customer):
        response = test_client.post("/register", json={**NEW_USER, "email": "CUSTOMER@example.com"})

        assert response.status_code == 400

    def test_short_password_is_rejected(self, test_client: TestClient):
        response = test_client.post("/register", json={**NEW_USER, "password": "short"})

        assert response.status_code == 422


class TestLogin:
    def test_login_returns_working_token(self, test_client: TestClient, customer):
        response = test_client.post("/login", json={"email": "customer@example.com", "password": "secret-password"})

        assert response.status_code == 200
        token = response.json()["access_token"]
        me = test_client.get("/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["id"] == customer.id

    def test_wrong_password(self, test_client: TestClient, customer, db_session):
        response = test_client.post("/login", json={"email": "customer@example.com", "password": "wrong-password"})

        assert response.status_code == 401
        assert db_session.query(Log).filter(Log.action == "LOGIN", Log.status == "FAIL").count() == 1

    def test_unknown_email(self, test_client: TestClient):
        response = test_client.post("/login", json={"email": "nobody@example.com", "password": "whatever-123"})

        assert response.status_code == 401

    def test_me_requires_token(self, test_client: TestClient):
        response = test_client.get("/me")

        assert response.status_code in (401, 403)
