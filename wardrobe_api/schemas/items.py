from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

ItemStatus = Literal["Washed", "Unwashed", "Lost/Unused"]


class ItemFields(BaseModel):
	"""Mutable item fields, used for both create and full-replace update.

	``name`` and ``category`` are optional at the schema level so that a
	missing value and a blank value produce the same ``InvalidInput`` from
	the service layer.
	"""
	name: Optional[str] = None
	category: Optional[str] = None
	status: Optional[ItemStatus] = None
	image_url: Optional[str] = None
	image_asset_id: Optional[str] = None

	class Config:
		alias_generator = to_camel
		populate_by_name = True


class ItemOut(BaseModel):
	id: int
	owner_id: int
	name: str
	category: str
	status: ItemStatus
	image_url: Optional[str] = None
	image_asset_id: Optional[str] = None
	created_at: Optional[datetime] = None
	updated_at: Optional[datetime] = None

	class Config:
		alias_generator = to_camel
		populate_by_name = True
		from_attributes = True
