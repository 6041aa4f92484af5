from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException

from wardrobe_api.core.config import Settings
from wardrobe_api.core.context import build_context
from wardrobe_api.core.errors import (
	AppError,
	app_error_handler,
	http_exception_handler,
	validation_exception_handler,
)
from wardrobe_api.core.logging import log_event, request_id_middleware
from wardrobe_api.db.base import Base
from wardrobe_api.db import models  # noqa: F401

from wardrobe_api.routers.auth import router as auth_router
from wardrobe_api.routers.categories import router as categories_router
from wardrobe_api.routers.health import router as health_router
from wardrobe_api.routers.items import router as items_router
from wardrobe_api.routers.uploads import router as uploads_router


def create_app(settings: Settings | None = None) -> FastAPI:
	settings = settings or Settings()
	app = FastAPI(title=settings.APP_NAME)

	# Process-scoped state: settings, DB engine, session factory, asset backend
	ctx = build_context(settings)
	Base.metadata.create_all(bind=ctx.engine)
	app.state.context = ctx
	log_event("app_started", storage_backend=ctx.assets.backend, db=ctx.engine.url.database)

	# Middleware
	app.middleware("http")(request_id_middleware)
	app.add_middleware(
		CORSMiddleware,
		allow_origins=settings.ALLOW_ORIGINS,
		allow_credentials="*" not in settings.ALLOW_ORIGINS,
		allow_methods=["*"],
		allow_headers=["*"],
	)

	# Every error body is {"error": "..."}
	app.add_exception_handler(AppError, app_error_handler)
	app.add_exception_handler(HTTPException, http_exception_handler)
	app.add_exception_handler(RequestValidationError, validation_exception_handler)

	# Routers
	app.include_router(health_router)
	app.include_router(auth_router)
	app.include_router(uploads_router)
	app.include_router(items_router)
	app.include_router(categories_router)

	return app
