from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import FileResponse
from starlette import status

from wardrobe_api.core.config import Settings
from wardrobe_api.core.context import get_assets, get_settings
from wardrobe_api.core.errors import InvalidAsset, InvalidInput
from wardrobe_api.core.logging import log_event
from wardrobe_api.core.security import Identity, get_current_user
from wardrobe_api.schemas.uploads import UploadOut
from wardrobe_api.services.assets import AssetStore

router = APIRouter(tags=["uploads"])

@router.post("/upload", response_model=UploadOut, status_code=status.HTTP_201_CREATED)
def upload_image(
	request: Request,
	image: UploadFile | None = File(None),
	user: Identity = Depends(get_current_user),
	assets: AssetStore = Depends(get_assets),
	settings: Settings = Depends(get_settings),
):
	if image is None or not image.filename:
		raise InvalidInput("image file required")
	# Reject on content type before reading anything
	if not (image.content_type or "").startswith("image/"):
		raise InvalidAsset("Only image files are allowed")

	data = image.file.read(settings.MAX_UPLOAD_BYTES + 1)
	asset = assets.store(
		user.id,
		data,
		image.content_type,
		image.filename,
		base_url=str(request.base_url),
	)
	log_event("image_uploaded", owner_id=user.id, handle=asset.handle, request_id=request.state.request_id)
	return {"url": asset.url, "asset_handle": asset.handle}

@router.get("/uploads/{owner_id}/{filename}")
def serve_upload(owner_id: str, filename: str, assets: AssetStore = Depends(get_assets)):
	return FileResponse(assets.open(owner_id, filename))
