from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette import status
from starlette.exceptions import HTTPException

class AppError(Exception):
	status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
	message = "Internal Server Error"

	def __init__(self, message: str | None = None):
		super().__init__(message or self.message)
		if message:
			self.message = message

class InvalidInput(AppError):
	status_code = status.HTTP_400_BAD_REQUEST
	message = "Invalid input"

class Unauthorized(AppError):
	status_code = status.HTTP_401_UNAUTHORIZED
	message = "Unauthorized"

class InvalidCredentials(AppError):
	status_code = status.HTTP_401_UNAUTHORIZED
	message = "Invalid credentials"

class AlreadyExists(AppError):
	status_code = status.HTTP_409_CONFLICT
	message = "Username already taken"

class NotFound(AppError):
	status_code = status.HTTP_404_NOT_FOUND
	message = "Not found"

class InvalidAsset(AppError):
	status_code = status.HTTP_400_BAD_REQUEST
	message = "Only image files are allowed"

class StorageFailure(AppError):
	status_code = status.HTTP_502_BAD_GATEWAY
	message = "Storage backend unavailable"

class InternalError(AppError):
	pass

def error_response(status_code: int, message: str):
	return JSONResponse(status_code=status_code, content={"error": message})

async def app_error_handler(request: Request, exc: AppError):
	return error_response(exc.status_code, exc.message)

async def http_exception_handler(request: Request, exc: HTTPException):
	headers = getattr(exc, "headers", None)
	response = error_response(exc.status_code, str(exc.detail))
	if headers:
		response.headers.update(headers)
	return response

async def validation_exception_handler(request: Request, exc: RequestValidationError):
	# First failing field is enough for the client; full details stay server-side
	errors = exc.errors()
	if errors:
		loc = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
		message = f"Invalid input: {loc}" if loc else "Invalid input"
	else:
		message = "Invalid input"
	return error_response(status.HTTP_400_BAD_REQUEST, message)
