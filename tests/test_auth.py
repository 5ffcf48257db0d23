# tests/test_auth.py
from datetime import timedelta

from jose import jwt

from app.core.auth import create_access_token
from app.core.passwords import hash_password, verify_password

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "s3cret-pass"


def test_login_returns_admin_token(client, admin):
    resp = client.post(
        "/api/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["admin"] == {
        "id": admin.id,
        "name": "Site Admin",
        "email": ADMIN_EMAIL,
        "role": "admin",
    }

    claims = jwt.decode(body["token"], "test-secret", algorithms=["HS256"])
    assert claims["role"] == "admin"
    assert claims["id"] == admin.id
    assert claims["email"] == ADMIN_EMAIL


def test_token_expires_after_one_day(client, admin):
    resp = client.post(
        "/api/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    claims = jwt.get_unverified_claims(resp.json()["token"])

    lifetime = claims["exp"] - jwt.get_unverified_claims(
        create_access_token(1, "x@example.com", "admin", timedelta(0))
    )["exp"]
    assert 24 * 3600 - 60 <= lifetime <= 24 * 3600


def test_login_wrong_password(client, admin):
    resp = client.post(
        "/api/auth/login",
        json={"email": ADMIN_EMAIL, "password": "wrong"},
    )

    assert resp.status_code == 401
    assert resp.json() == {"detail": "Invalid credentials"}
    assert "token" not in resp.json()


def test_login_unknown_email(client, admin):
    resp = client.post(
        "/api/auth/login",
        json={"email": "nobody@example.com", "password": ADMIN_PASSWORD},
    )

    assert resp.status_code == 401


def test_login_requires_both_fields(client):
    for body in ({"email": ADMIN_EMAIL}, {"password": "x"}, {"email": "", "password": ""}):
        resp = client.post("/api/auth/login", json=body)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Email and password are required"


def test_registered_users_cannot_log_in_as_admin(client):
    client.post(
        "/api/users",
        json={"name": "Customer", "email": "c@example.com", "password": "pw"},
    )

    resp = client.post("/api/auth/login", json={"email": "c@example.com", "password": "pw"})

    assert resp.status_code == 401


# ----- gate -----


def test_missing_token_is_unauthenticated(client):
    resp = client.get("/api/users")

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Authentication required"


def test_garbage_token_is_unauthenticated(client):
    resp = client.get("/api/users", headers={"Authorization": "Bearer not-a-jwt"})

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid or expired token"


def test_expired_token_is_unauthenticated(client, admin):
    token = create_access_token(admin.id, admin.email, "admin", timedelta(seconds=-5))

    resp = client.get("/api/users", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401


def test_token_signed_with_other_secret_is_rejected(client):
    token = jwt.encode({"id": 1, "email": "a@b.c", "role": "admin", "exp": 9999999999}, "other")

    resp = client.get("/api/users", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401


def test_token_without_required_claims_is_rejected(client):
    token = jwt.encode({"role": "admin", "exp": 9999999999}, "test-secret")

    resp = client.get("/api/users", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401


def test_non_admin_role_is_forbidden(client, user_headers):
    resp = client.get("/api/users", headers=user_headers)

    assert resp.status_code == 403
    assert resp.json()["detail"] == "Admin access required"


def test_password_hashing():
    hashed = hash_password("s3cret")

    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("nope", hashed)
    assert not verify_password("s3cret", "s3cret")
    assert not verify_password("s3cret", None)
