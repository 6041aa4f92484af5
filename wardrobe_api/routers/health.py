from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wardrobe_api.core.context import AppContext, get_context
from wardrobe_api.core.logging import log_event
from wardrobe_api.db.models import Category, Item, User
from wardrobe_api.db.session import get_db

router = APIRouter(tags=["health"])

ENDPOINTS = ["/health", "/auth/signup", "/auth/login", "/upload", "/items", "/categories"]

@router.get("/")
def index():
	return {"status": "ok", "endpoints": ENDPOINTS}

def _count(db: Session, model) -> int:
	try:
		return db.query(model).count()
	except SQLAlchemyError:
		db.rollback()
		return 0

@router.get("/health")
def health(db: Session = Depends(get_db), ctx: AppContext = Depends(get_context)):
	try:
		db.execute(text("SELECT 1"))
		connected = True
	except SQLAlchemyError as exc:
		log_event("health_db_unreachable", error=str(exc))
		db.rollback()
		connected = False
	return {
		"connected": connected,
		"db": ctx.engine.url.database,
		"counts": {
			"items": _count(db, Item),
			"categories": _count(db, Category),
			"users": _count(db, User),
		},
	}
