"""
Tests for authentication endpoints.
"""
from mailmaster.auth import verify_password
from mailmaster.repositories import users
from mailmaster.models import Campaign, CampaignSubscriber, Newsletter, PersonalAccessToken, Subscriber, User


def register(client, **overrides):
    payload = {
        "name": "New User",
        "email": "newuser@example.com",
        "password": "securepassword123",
        "password_confirmation": "securepassword123",
    }
    payload.update(overrides)
    return client.post("/api/register", json=payload)


def login(client, email="test@example.com", password="testpassword123"):
    return client.post("/api/login", json={"email": email, "password": password})


class TestRegister:
    """Test account registration."""

    def test_register_user(self, client, db):
        response = register(client)
        assert response.status_code == 201
        data = response.json()
        assert data["message"]
        assert data["token"]
        assert data["user"]["email"] == "newuser@example.com"
        assert data["user"]["name"] == "New User"
        assert "password" not in data["user"]
        assert "hashed_password" not in data["user"]

    def test_password_is_hashed_at_rest(self, client, db):
        register(client)
        user = db.query(User).filter(User.email == "newuser@example.com").one()
        assert user.hashed_password != "securepassword123"
        assert verify_password("securepassword123", user.hashed_password)

    def test_register_token_is_usable(self, client):
        token = register(client).json()["token"]
        response = client.get("/api/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["email"] == "newuser@example.com"

    def test_register_duplicate_email(self, client, test_user):
        response = register(client, email="test@example.com")
        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"]["field"] == "email"

    def test_register_password_mismatch(self, client, db):
        response = register(client, password_confirmation="something-else")
        assert response.status_code == 422
        assert db.query(User).count() == 0

    def test_register_missing_name(self, client):
        response = client.post(
            "/api/register",
            json={
                "email": "newuser@example.com",
                "password": "securepassword123",
                "password_confirmation": "securepassword123",
            },
        )
        assert response.status_code == 422
        fields = [e["field"] for e in response.json()["details"]["errors"]]
        assert "name" in fields

    def test_register_invalid_email(self, client):
        response = register(client, email="not-an-email")
        assert response.status_code == 422


class TestLogin:
    """Test credential checks."""

    def test_login_success(self, client, test_user):
        response = login(client)
        assert response.status_code == 200
        data = response.json()
        assert data["token"]
        assert data["user"]["id"] == test_user.id

    def test_login_wrong_password(self, client, test_user):
        response = login(client, password="wrongpassword")
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid credentials"

    def test_login_unknown_email_gives_same_error(self, client, test_user):
        wrong_password = login(client, password="wrongpassword").json()
        unknown_email = login(client, email="nobody@example.com").json()
        assert unknown_email["error"] == wrong_password["error"]
        assert unknown_email["error_code"] == wrong_password["error_code"]

    def test_unknown_email_still_checks_a_password_hash(self, client, test_user, monkeypatch):
        checked = []

        def recording_verify(plain, hashed):
            checked.append(hashed)
            return verify_password(plain, hashed)

        monkeypatch.setattr(users, "verify_password", recording_verify)
        response = login(client, email="nobody@example.com")
        assert response.status_code == 401
        assert checked == [users.DUMMY_HASH]

    def test_each_login_issues_a_new_token(self, client, db, test_user):
        first = login(client).json()["token"]
        second = login(client).json()["token"]
        assert first != second
        assert db.query(PersonalAccessToken).filter(PersonalAccessToken.user_id == test_user.id).count() == 2


class TestCurrentUser:
    """Test token resolution."""

    def test_get_current_user(self, client, test_user, auth_headers):
        response = client.get("/api/me", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["email"] == test_user.email
        assert data["id"] == test_user.id

    def test_user_alias(self, client, test_user, auth_headers):
        response = client.get("/api/user", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["id"] == test_user.id

    def test_get_current_user_unauthenticated(self, client, db):
        response = client.get("/api/me")
        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_garbage_token_rejected(self, client, db):
        response = client.get("/api/me", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401


class TestLogout:
    """Test token revocation."""

    def test_logout(self, client, auth_headers):
        response = client.post("/api/logout", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["message"]

    def test_logout_revokes_every_token(self, client, db, test_user):
        first = {"Authorization": f"Bearer {login(client).json()['token']}"}
        second = {"Authorization": f"Bearer {login(client).json()['token']}"}

        assert client.post("/api/logout", headers=first).status_code == 200

        assert client.get("/api/me", headers=first).status_code == 401
        assert client.get("/api/me", headers=second).status_code == 401
        assert db.query(PersonalAccessToken).count() == 0

    def test_logout_leaves_other_users_signed_in(self, client, auth_headers, other_headers):
        client.post("/api/logout", headers=auth_headers)
        assert client.get("/api/me", headers=other_headers).status_code == 200

    def test_logout_requires_auth(self, client, db):
        assert client.post("/api/logout").status_code == 401


class TestAccountDeletion:
    """Removing a user takes every row they own with it."""

    def test_delete_user_cascades(self, client, db, test_user, other_user, auth_headers, other_headers):
        newsletter = client.post(
            "/api/newsletters", headers=auth_headers, json={"title": "N", "content": "C"}
        ).json()
        subscriber = client.post(
            "/api/subscribers", headers=auth_headers, json={"email": "a@x.com", "name": "A"}
        ).json()
        client.post(
            "/api/campaigns",
            headers=auth_headers,
            json={
                "subject": "S",
                "content": "C",
                "newsletter_id": newsletter["id"],
                "subscriber_ids": [subscriber["id"]],
            },
        )
        client.post("/api/newsletters", headers=other_headers, json={"title": "Kept", "content": "C"})

        db.delete(test_user)
        db.commit()

        assert db.query(Newsletter).filter(Newsletter.user_id == test_user.id).count() == 0
        assert db.query(Subscriber).count() == 0
        assert db.query(Campaign).count() == 0
        assert db.query(CampaignSubscriber).count() == 0
        assert db.query(PersonalAccessToken).filter(PersonalAccessToken.user_id == test_user.id).count() == 0

        assert client.get("/api/me", headers=auth_headers).status_code == 401
        assert [n["title"] for n in client.get("/api/newsletters", headers=other_headers).json()] == ["Kept"]
