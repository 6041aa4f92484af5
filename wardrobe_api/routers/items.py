from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response
from sqlalchemy.orm import Session
from starlette import status

from wardrobe_api.core.context import get_assets
from wardrobe_api.core.logging import log_event
from wardrobe_api.core.security import Identity, get_current_user
from wardrobe_api.db.session import get_db
from wardrobe_api.schemas.items import ItemFields, ItemOut
from wardrobe_api.services import items as item_service
from wardrobe_api.services.assets import AssetStore

router = APIRouter(prefix="/items", tags=["items"])

def _release_image(db: Session, assets: AssetStore, background_tasks: BackgroundTasks, owner_id: int, image):
	"""Schedule removal of an image no other item of this owner still shows."""
	image_url, image_asset_id = image
	handle = assets.handle_for(owner_id, image_url, image_asset_id)
	if handle and not item_service.image_in_use(db, owner_id, handle, image_url):
		background_tasks.add_task(assets.remove, owner_id, handle)

@router.get("", response_model=list[ItemOut])
def list_items(db: Session = Depends(get_db), user: Identity = Depends(get_current_user)):
	return item_service.list_items(db, user.id)

@router.post("", response_model=ItemOut, status_code=status.HTTP_201_CREATED)
def create_item(
	request: Request,
	payload: ItemFields,
	db: Session = Depends(get_db),
	user: Identity = Depends(get_current_user),
):
	item = item_service.create_item(db, user.id, payload)
	log_event("item_created", item_id=item.id, owner_id=user.id, request_id=request.state.request_id)
	return item

@router.put("/{item_id}", response_model=ItemOut)
def update_item(
	request: Request,
	item_id: int,
	payload: ItemFields,
	background_tasks: BackgroundTasks,
	db: Session = Depends(get_db),
	user: Identity = Depends(get_current_user),
	assets: AssetStore = Depends(get_assets),
):
	item, previous = item_service.update_item(db, user.id, item_id, payload)
	_release_image(db, assets, background_tasks, user.id, previous)
	log_event("item_updated", item_id=item.id, owner_id=user.id, request_id=request.state.request_id)
	return item

@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
	request: Request,
	item_id: int,
	background_tasks: BackgroundTasks,
	db: Session = Depends(get_db),
	user: Identity = Depends(get_current_user),
	assets: AssetStore = Depends(get_assets),
):
	image = item_service.delete_item(db, user.id, item_id)
	_release_image(db, assets, background_tasks, user.id, image)
	log_event("item_deleted", item_id=item_id, owner_id=user.id, request_id=request.state.request_id)
	return Response(status_code=status.HTTP_204_NO_CONTENT)
