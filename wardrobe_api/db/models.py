from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from wardrobe_api.db.base import Base

ITEM_STATUSES = ("Washed", "Unwashed", "Lost/Unused")
DEFAULT_ITEM_STATUS = "Washed"

def utcnow() -> datetime:
	return datetime.now(timezone.utc)

class User(Base):
	__tablename__ = "users"

	id = Column(Integer, primary_key=True, index=True)
	username = Column(String, unique=True, index=True, nullable=False)  # stored case-folded
	password_hash = Column(String, nullable=False)
	created_at = Column(DateTime(timezone=True), default=utcnow)

	items = relationship("Item", back_populates="owner")
	categories = relationship("Category", back_populates="owner")

class Category(Base):
	__tablename__ = "categories"
	__table_args__ = (UniqueConstraint("owner_id", "name", name="uq_category_owner_name"),)

	id = Column(Integer, primary_key=True, index=True)
	owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
	name = Column(String, nullable=False)
	created_at = Column(DateTime(timezone=True), default=utcnow)

	owner = relationship("User", back_populates="categories")

class Item(Base):
	__tablename__ = "items"

	id = Column(Integer, primary_key=True, index=True)
	owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
	name = Column(String, nullable=False)
	# Plain label, not a foreign key: deleting a category leaves items untouched
	category = Column(String, nullable=False)
	status = Column(String, nullable=False, default=DEFAULT_ITEM_STATUS)
	image_url = Column(String, nullable=True)
	image_asset_id = Column(String, nullable=True)
	created_at = Column(DateTime(timezone=True), default=utcnow)
	updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

	owner = relationship("User", back_populates="items")
