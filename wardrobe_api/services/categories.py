from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from wardrobe_api.core.errors import InvalidInput
from wardrobe_api.db.models import Category


def list_categories(db: Session, owner_id: int) -> list[Category]:
	return (
		db.query(Category)
		.filter(Category.owner_id == owner_id)
		.order_by(Category.name.asc())
		.all()
	)


def _find(db: Session, owner_id: int, name: str) -> Category | None:
	return db.query(Category).filter(Category.owner_id == owner_id, Category.name == name).first()


def create_category(db: Session, owner_id: int, name: str | None) -> tuple[Category, bool]:
	"""Create a category, or return the owner's existing one with that name.

	The second element is ``True`` when a new row was inserted. Concurrent
	creates for the same name are settled by the unique constraint: the loser
	rolls back and reads the winner's row.
	"""
	name = (name or "").strip()
	if not name:
		raise InvalidInput("name required")

	existing = _find(db, owner_id, name)
	if existing:
		return existing, False

	row = Category(owner_id=owner_id, name=name)
	db.add(row)
	try:
		db.commit()
	except IntegrityError:
		db.rollback()
		existing = _find(db, owner_id, name)
		if existing is None:
			raise
		return existing, False
	db.refresh(row)
	return row, True


def delete_category(db: Session, owner_id: int, name: str) -> bool:
	deleted = (
		db.query(Category)
		.filter(Category.owner_id == owner_id, Category.name == name.strip())
		.delete(synchronize_session=False)
	)
	db.commit()
	return bool(deleted)
