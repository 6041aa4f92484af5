from datetime import datetime
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CategoryCreate(BaseModel):
	name: str = ""


class CategoryOut(BaseModel):
	id: int
	owner_id: int
	name: str
	created_at: Optional[datetime] = None

	class Config:
		alias_generator = to_camel
		populate_by_name = True
		from_attributes = True