"""Process-scoped application context.

Settings, database engine, session factory and asset backend are built once
in ``build_context`` during start-up and stored on ``app.state.context``.
Route dependencies read them from the request.
"""

from dataclasses import dataclass

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from wardrobe_api.core.config import Settings
from wardrobe_api.db.session import make_engine, make_session_factory
from wardrobe_api.services.assets import AssetStore, build_asset_store

@dataclass
class AppContext:
	settings: Settings
	engine: Engine
	session_factory: sessionmaker
	assets: AssetStore

def build_context(settings: Settings) -> AppContext:
	engine = make_engine(settings.DATABASE_URL)
	return AppContext(
		settings=settings,
		engine=engine,
		session_factory=make_session_factory(engine),
		assets=build_asset_store(settings),
	)

def get_context(request: Request) -> AppContext:
	return request.app.state.context

def get_settings(request: Request) -> Settings:
	return get_context(request).settings

def get_assets(request: Request) -> AssetStore:
	return get_context(request).assets
