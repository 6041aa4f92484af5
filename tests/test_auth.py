from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from wardrobe_api.core.errors import Unauthorized
from wardrobe_api.core.security import Identity, issue_token, verify_token
from wardrobe_api.db.models import User


def test_signup_returns_token_and_public_user(client):
	resp = client.post("/auth/signup", json={"username": "ana", "password": "secret1"})
	assert resp.status_code == 201
	body = resp.json()
	assert body["token"]
	assert body["user"]["username"] == "ana"
	assert set(body["user"]) == {"id", "username"}


def test_signup_normalizes_username(client):
	resp = client.post("/auth/signup", json={"username": "  Ana ", "password": "secret1"})
	assert resp.status_code == 201
	assert resp.json()["user"]["username"] == "ana"


def test_signup_rejects_duplicate_case_insensitive(client, signup):
	signup("ana")
	resp = client.post("/auth/signup", json={"username": "ANA", "password": "secret1"})
	assert resp.status_code == 409
	assert resp.json() == {"error": "Username already taken"}


@pytest.mark.parametrize(
	"payload",
	[
		{"username": "", "password": "secret1"},
		{"username": "   ", "password": "secret1"},
		{"username": "ana", "password": ""},
		{"username": "ana", "password": "short"},
		{"password": "secret1"},
		{},
	],
)
def test_signup_invalid_input(client, payload):
	resp = client.post("/auth/signup", json=payload)
	assert resp.status_code == 400
	assert list(resp.json()) == ["error"]


def test_password_is_not_stored_in_plaintext(client, app):
	client.post("/auth/signup", json={"username": "ana", "password": "secret1"})
	db = app.state.context.session_factory()
	try:
		user = db.query(User).filter(User.username == "ana").one()
		assert user.password_hash != "secret1"
		assert user.password_hash.startswith("$2")
	finally:
		db.close()


def test_login_case_insensitive(client):
	client.post("/auth/signup", json={"username": "Ana", "password": "secret1"})
	resp = client.post("/auth/login", json={"username": "ana", "password": "secret1"})
	assert resp.status_code == 200
	body = resp.json()
	assert body["user"]["username"] == "ana"
	assert body["token"]


def test_login_failures_are_indistinguishable(client, signup):
	signup("ana")
	unknown = client.post("/auth/login", json={"username": "nobody", "password": "secret1"})
	wrong = client.post("/auth/login", json={"username": "ana", "password": "wrong-pass"})
	assert unknown.status_code == wrong.status_code == 401
	assert unknown.json() == wrong.json() == {"error": "Invalid credentials"}


def test_me_returns_identity(client, signup):
	headers, user = signup("ana")
	resp = client.get("/auth/me", headers=headers)
	assert resp.status_code == 200
	assert resp.json() == user


@pytest.mark.parametrize(
	"headers",
	[
		{},
		{"Authorization": "Bearer not-a-jwt"},
		{"Authorization": "Basic YW5hOnNlY3JldDE="},
		{"Authorization": "Bearer "},
	],
)
def test_protected_routes_reject_bad_tokens(client, headers):
	for method, path in [("get", "/items"), ("get", "/categories"), ("get", "/auth/me"), ("post", "/upload")]:
		resp = getattr(client, method)(path, headers=headers)
		assert resp.status_code == 401, (method, path)
		assert resp.json() == {"error": "Unauthorized"}


def test_token_roundtrip_and_expiry(settings):
	token = issue_token(Identity(id=7, username="ana"), settings)
	assert verify_token(token, settings) == Identity(id=7, username="ana")

	claims = jwt.get_unverified_claims(token)
	assert claims["exp"] - claims["iat"] == 7 * 24 * 3600

	past = datetime.now(timezone.utc) - timedelta(days=1)
	expired = jwt.encode(
		{"sub": "7", "username": "ana", "type": "access", "iat": int(past.timestamp()) - 10, "exp": int(past.timestamp())},
		settings.JWT_SECRET,
		algorithm=settings.JWT_ALG,
	)
	with pytest.raises(Unauthorized):
		verify_token(expired, settings)


def test_token_signed_with_other_secret_rejected(settings):
	forged = jwt.encode(
		{"sub": "1", "username": "ana", "type": "access", "exp": 4102444800},
		"someone-else",
		algorithm="HS256",
	)
	with pytest.raises(Unauthorized):
		verify_token(forged, settings)
