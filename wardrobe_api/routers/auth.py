from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from starlette import status

from wardrobe_api.core.config import Settings
from wardrobe_api.core.context import get_settings
from wardrobe_api.core.logging import log_event
from wardrobe_api.core.security import Identity, get_current_user, issue_token
from wardrobe_api.db.session import get_db
from wardrobe_api.schemas.auth import AuthResponse, LoginRequest, SignupRequest, UserOut
from wardrobe_api.services import credentials

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
	request: Request,
	payload: SignupRequest,
	db: Session = Depends(get_db),
	settings: Settings = Depends(get_settings),
):
	identity = credentials.register(db, payload.username, payload.password)
	log_event("user_registered", user_id=identity.id, request_id=request.state.request_id)
	return {"token": issue_token(identity, settings), "user": identity.public()}

@router.post("/login", response_model=AuthResponse)
def login(
	request: Request,
	payload: LoginRequest,
	db: Session = Depends(get_db),
	settings: Settings = Depends(get_settings),
):
	identity = credentials.authenticate(db, payload.username, payload.password)
	log_event("user_login", user_id=identity.id, request_id=request.state.request_id)
	return {"token": issue_token(identity, settings), "user": identity.public()}

@router.get("/me", response_model=UserOut)
def me(user: Identity = Depends(get_current_user)):
	return user.public()
