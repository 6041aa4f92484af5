from sqlalchemy import or_
from sqlalchemy.orm import Session

from wardrobe_api.core.errors import InvalidInput, NotFound
from wardrobe_api.db.models import DEFAULT_ITEM_STATUS, Item
from wardrobe_api.schemas.items import ItemFields

# (image_url, image_asset_id)
ImageRef = tuple[str | None, str | None]


def list_items(db: Session, owner_id: int) -> list[Item]:
	return (
		db.query(Item)
		.filter(Item.owner_id == owner_id)
		.order_by(Item.created_at.asc(), Item.id.asc())
		.all()
	)


def get_owned_item(db: Session, owner_id: int, item_id: int) -> Item:
	# Missing and foreign rows look the same to the caller
	item = db.query(Item).filter(Item.id == item_id, Item.owner_id == owner_id).first()
	if not item:
		raise NotFound()
	return item


def _clean(fields: ItemFields) -> dict:
	name = (fields.name or "").strip()
	category = (fields.category or "").strip()
	if not name:
		raise InvalidInput("name required")
	if not category:
		raise InvalidInput("category required")
	return {
		"name": name,
		"category": category,
		"status": fields.status or DEFAULT_ITEM_STATUS,
		"image_url": fields.image_url or None,
		"image_asset_id": fields.image_asset_id or None,
	}


def create_item(db: Session, owner_id: int, fields: ItemFields) -> Item:
	item = Item(owner_id=owner_id, **_clean(fields))
	db.add(item)
	db.commit()
	db.refresh(item)
	return item


def update_item(db: Session, owner_id: int, item_id: int, fields: ItemFields) -> tuple[Item, ImageRef]:
	"""Replace every mutable field of an owned item.

	Fields left out of ``fields`` are cleared rather than kept, and an omitted
	status falls back to the default. Returns the updated row together with
	its previous image reference so the caller can release an image that is
	no longer referenced.
	"""
	values = _clean(fields)
	item = get_owned_item(db, owner_id, item_id)
	previous = (item.image_url, item.image_asset_id)
	for key, value in values.items():
		setattr(item, key, value)
	db.commit()
	db.refresh(item)
	return item, previous


def delete_item(db: Session, owner_id: int, item_id: int) -> ImageRef:
	"""Delete an owned item and return its image reference for cleanup."""
	item = get_owned_item(db, owner_id, item_id)
	image = (item.image_url, item.image_asset_id)
	db.delete(item)
	db.commit()
	return image


def image_in_use(db: Session, owner_id: int, handle: str, image_url: str | None) -> bool:
	"""True if any of the owner's remaining items still points at this image."""
	refs = [Item.image_asset_id == handle]
	if image_url:
		refs.append(Item.image_url == image_url)
	return db.query(Item.id).filter(Item.owner_id == owner_id, or_(*refs)).first() is not None
