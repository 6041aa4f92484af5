from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from wardrobe_api.core.config import Settings
from wardrobe_api.core.context import get_settings
from wardrobe_api.core.errors import Unauthorized

security = HTTPBearer(auto_error=False)

@dataclass(frozen=True)
class Identity:
	id: int
	username: str

	def public(self) -> dict:
		return {"id": self.id, "username": self.username}

def _normalize_password(password: str) -> bytes:
	# bcrypt only considers the first 72 bytes; truncate consistently to avoid errors.
	return password.encode("utf-8")[:72]

def hash_password(password: str) -> str:
	return bcrypt.hashpw(_normalize_password(password), bcrypt.gensalt()).decode("utf-8")

def verify_password(password: str, password_hash: str) -> bool:
	try:
		return bcrypt.checkpw(_normalize_password(password), password_hash.encode("utf-8"))
	except ValueError:
		return False

def issue_token(identity: Identity, settings: Settings) -> str:
	now = datetime.now(timezone.utc)
	payload = {
		"sub": str(identity.id),
		"username": identity.username,
		"type": "access",
		"iat": int(now.timestamp()),
		"exp": int((now + timedelta(days=settings.ACCESS_TOKEN_EXPIRES_DAYS)).timestamp()),
	}
	return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)

def verify_token(token: str | None, settings: Settings) -> Identity:
	if not token:
		raise Unauthorized()
	try:
		payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
	except JWTError:
		raise Unauthorized()

	if payload.get("type") != "access" or "exp" not in payload:
		raise Unauthorized()
	sub = payload.get("sub")
	username = payload.get("username")
	if not sub or not username:
		raise Unauthorized()
	try:
		user_id = int(sub)
	except (TypeError, ValueError):
		raise Unauthorized()
	return Identity(id=user_id, username=username)

def get_current_user(
	creds: HTTPAuthorizationCredentials | None = Depends(security),
	settings: Settings = Depends(get_settings),
) -> Identity:
	if creds is None or creds.scheme.lower() != "bearer":
		raise Unauthorized()
	return verify_token(creds.credentials, settings)
