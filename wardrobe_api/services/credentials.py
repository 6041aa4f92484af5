from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from wardrobe_api.core.errors import AlreadyExists, InvalidCredentials, InvalidInput
from wardrobe_api.core.security import Identity, hash_password, verify_password
from wardrobe_api.db.models import User

MIN_PASSWORD_LENGTH = 6

def normalize_username(username: str | None) -> str:
	return (username or "").strip().casefold()

def _find_user(db: Session, username: str) -> User | None:
	return db.query(User).filter(User.username == username).first()

def register(db: Session, username: str | None, password: str | None) -> Identity:
	name = normalize_username(username)
	if not name or not password:
		raise InvalidInput("username and password required")
	if len(password) < MIN_PASSWORD_LENGTH:
		raise InvalidInput(f"password must be at least {MIN_PASSWORD_LENGTH} characters")

	if _find_user(db, name):
		raise AlreadyExists()

	user = User(username=name, password_hash=hash_password(password))
	db.add(user)
	try:
		db.commit()
	except IntegrityError:
		# Lost a race against a concurrent signup for the same name
		db.rollback()
		raise AlreadyExists()
	db.refresh(user)
	return Identity(id=user.id, username=user.username)

def authenticate(db: Session, username: str | None, password: str | None) -> Identity:
	name = normalize_username(username)
	user = _find_user(db, name) if name else None
	if not user or not verify_password(password or "", user.password_hash):
		raise InvalidCredentials()
	return Identity(id=user.id, username=user.username)
