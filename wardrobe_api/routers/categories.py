from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session
from starlette import status

from wardrobe_api.core.logging import log_event
from wardrobe_api.core.security import Identity, get_current_user
from wardrobe_api.db.session import get_db
from wardrobe_api.schemas.categories import CategoryCreate, CategoryOut
from wardrobe_api.services import categories as category_service

router = APIRouter(prefix="/categories", tags=["categories"])

@router.get("", response_model=list[CategoryOut])
def list_categories(db: Session = Depends(get_db), user: Identity = Depends(get_current_user)):
	return category_service.list_categories(db, user.id)

@router.post(
	"",
	response_model=CategoryOut,
	status_code=status.HTTP_201_CREATED,
	responses={200: {"model": CategoryOut, "description": "Category already existed"}},
)
def create_category(
	request: Request,
	payload: CategoryCreate,
	response: Response,
	db: Session = Depends(get_db),
	user: Identity = Depends(get_current_user),
):
	category, created = category_service.create_category(db, user.id, payload.name)
	if created:
		log_event("category_created", category_id=category.id, owner_id=user.id, request_id=request.state.request_id)
	else:
		response.status_code = status.HTTP_200_OK
	return category

@router.delete("/{name:path}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
	request: Request,
	name: str,
	db: Session = Depends(get_db),
	user: Identity = Depends(get_current_user),
):
	# Items keep their category label; there is no cascade
	if category_service.delete_category(db, user.id, name):
		log_event("category_deleted", name=name, owner_id=user.id, request_id=request.state.request_id)
	return Response(status_code=status.HTTP_204_NO_CONTENT)
