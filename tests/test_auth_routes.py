"""
Tests for registration, login and the current-user endpoint
"""
from film_distribution.schemas import UserUpdate
from conftest import TEST_PASSWORD


def register_payload(**overrides):
    payload = {
        "username": "avamartin",
        "password": "harbor-lights-1",
        "email": "ava@example.com",
        "name": "Ava Martin",
        "profileImage": "https://cdn.example.com/ava.png",
    }
    payload.update(overrides)
    return payload


class TestRegister:
    """Test POST /api/register"""

    def test_register_returns_public_user(self, client, storage):
        response = client.post("/api/register", json=register_payload())

        assert response.status_code == 201
        data = response.json()
        assert data["username"] == "avamartin"
        assert data["profile_image"] == "https://cdn.example.com/ava.png"
        assert data["is_active_filmmaker"] is False
        assert "password" not in data

        stored = storage.users.get_by_username("avamartin").value
        assert stored.password != "harbor-lights-1"
        assert stored.password.startswith("$2")

    def test_duplicate_username_is_reported_before_email(self, client, make_user):
        make_user(username="avamartin", email="ava@example.com")

        response = client.post("/api/register", json=register_payload())

        assert response.status_code == 400
        assert response.json()["message"] == "Username already exists"

    def test_duplicate_email(self, client, make_user):
        make_user(username="someoneelse", email="ava@example.com")

        response = client.post("/api/register", json=register_payload())

        assert response.status_code == 400
        assert response.json()["message"] == "Email already exists"

    def test_short_password(self, client):
        response = client.post("/api/register", json=register_payload(password="short"))

        assert response.status_code == 400
        assert "at least 8 characters" in response.json()["message"]

    def test_invalid_email_is_a_validation_error(self, client):
        response = client.post("/api/register", json=register_payload(email="not-an-email"))

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"


class TestLogin:
    """Test POST /api/login"""

    def test_login_returns_token(self, client, make_user):
        user = make_user(username="luis")

        response = client.post("/api/login", json={"username": "luis", "password": TEST_PASSWORD})

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == user.id
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert "password" not in data

    def test_wrong_password(self, client, make_user):
        make_user(username="luis")

        response = client.post("/api/login", json={"username": "luis", "password": "wrong-password"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid username or password"

    def test_unknown_user(self, client):
        response = client.post("/api/login", json={"username": "ghost", "password": TEST_PASSWORD})

        assert response.status_code == 401

    def test_banned_user(self, client, storage, make_user):
        user = make_user(username="luis")
        storage.users.update(user.id, UserUpdate(is_banned=True))

        response = client.post("/api/login", json={"username": "luis", "password": TEST_PASSWORD})

        assert response.status_code == 403

    def test_registered_user_can_log_in(self, client):
        client.post("/api/register", json=register_payload())

        response = client.post("/api/login", json={"username": "avamartin", "password": "harbor-lights-1"})

        assert response.status_code == 200


class TestCurrentUser:
    """Test GET /api/user"""

    def test_with_token(self, client, auth_headers):
        response = client.get("/api/user", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["username"] == "authuser"

    def test_token_from_login(self, client, make_user):
        make_user(username="luis")
        token = client.post("/api/login", json={"username": "luis", "password": TEST_PASSWORD}).json()["access_token"]

        response = client.get("/api/user", headers={"Authorization": f"Bearer {token}"})

        assert response.json()["username"] == "luis"

    def test_without_token(self, client):
        response = client.get("/api/user")

        assert response.status_code == 401
        assert response.json()["code"] == "AUTH_ERROR"

    def test_with_garbage_token(self, client):
        response = client.get("/api/user", headers={"Authorization": "Bearer not.a.token"})

        assert response.status_code == 401
