from pydantic import BaseModel

class SignupRequest(BaseModel):
	username: str = ""
	password: str = ""

class LoginRequest(BaseModel):
	username: str = ""
	password: str = ""

class UserOut(BaseModel):
	id: int
	username: str

class AuthResponse(BaseModel):
	token: str
	user: UserOut
