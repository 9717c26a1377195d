from app.core.init import initialize_application
from app.models import User


def test_sign_up_starts_session(client):
    response = client.post(
        "/api/auth/sign-up/email",
        json={"name": "Alice", "email": "Alice@Example.com", "password": "s3cret-pass"},
    )

    assert response.status_code == 201
    assert response.json()["email"] == "alice@example.com"
    assert "session_token" in response.cookies

    session = client.get("/api/auth/get-session").json()
    assert session["user"]["name"] == "Alice"


def test_sign_up_duplicate_email(client, create_user):
    user = create_user()

    response = client.post(
        "/api/auth/sign-up/email",
        json={"name": "Copy", "email": user.email, "password": "s3cret-pass"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "User already exists"}


def test_sign_up_short_password(client):
    response = client.post(
        "/api/auth/sign-up/email",
        json={"name": "Bob", "email": "bob@example.com", "password": "short"},
    )

    assert response.status_code == 400


def test_sign_in_and_out(client, create_user):
    user = create_user()

    bad = client.post(
        "/api/auth/sign-in/email",
        json={"email": user.email, "password": "wrong-password"},
    )
    assert bad.status_code == 401
    assert bad.json() == {"error": "Invalid email or password"}

    good = client.post(
        "/api/auth/sign-in/email",
        json={"email": user.email, "password": "password123"},
    )
    assert good.status_code == 200
    assert client.get("/api/users/me").json()["id"] == user.id

    client.post("/api/auth/sign-out")
    assert client.get("/api/auth/get-session").json() == {"user": None}
    assert client.get("/api/users/me").status_code == 401


def test_invalid_session_is_anonymous_on_public_routes(client, create_post):
    post = create_post()
    headers = {"Authorization": "Bearer not-a-token"}

    assert client.get(f"/api/posts/{post.id}", headers=headers).status_code == 200
    response = client.post(
        "/api/posts", json={"title": "A", "content": "B"}, headers=headers
    )
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid or expired session"}


def test_session_for_deleted_user(client, create_user, auth_headers, db):
    user = create_user()
    headers = auth_headers(user)
    db.delete(user)
    db.commit()

    assert client.get("/api/users/me", headers=headers).status_code == 401


def test_initialize_application_skips_without_reviewer(db):
    initialize_application(db)

    assert db.query(User).count() == 0


def test_health(client):
    assert client.get("/").json()["status"] == "healthy"
    assert client.get("/health").status_code == 200


def test_password_limited_to_72_bytes(client, create_user):
    at_limit = client.post(
        "/api/auth/sign-up/email",
        json={"name": "Max", "email": "max@example.com", "password": "x" * 72},
    )
    assert at_limit.status_code == 201

    too_long = client.post(
        "/api/auth/sign-up/email",
        json={"name": "Long", "email": "long@example.com", "password": "x" * 100},
    )
    assert too_long.status_code == 400
    assert too_long.json()["error"] == "Validation error"

    # 40 two-byte characters fit the length bound but not the byte bound
    multibyte = client.post(
        "/api/auth/sign-up/email",
        json={"name": "Accent", "email": "accent@example.com", "password": "é" * 40},
    )
    assert multibyte.status_code == 400

    user = create_user()
    sign_in = client.post(
        "/api/auth/sign-in/email",
        json={"email": user.email, "password": "x" * 100},
    )
    assert sign_in.status_code == 400


def test_bearer_used_when_cookie_is_stale(client, create_user, auth_headers):
    user = create_user()
    client.cookies.set("session_token", "expired-token")

    response = client.get("/api/users/me", headers=auth_headers(user))

    assert response.status_code == 200
    assert response.json()["id"] == user.id

    assert client.get("/api/users/me").status_code == 401
