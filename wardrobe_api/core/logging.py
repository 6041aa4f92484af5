import json
import logging
import uuid
from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger("wardrobe")
logger.setLevel(logging.INFO)
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter("%(message)s"))
logger.addHandler(handler)

async def request_id_middleware(request: Request, call_next):
	request.state.request_id = str(uuid.uuid4())
	try:
		response = await call_next(request)
	except Exception:
		logger.exception(json.dumps({
			"event": "unhandled_error",
			"method": request.method,
			"path": request.url.path,
			"request_id": request.state.request_id,
		}))
		response = JSONResponse(status_code=500, content={"error": "Internal Server Error"})
	response.headers["X-Request-Id"] = request.state.request_id
	return response

def log_event(event: str, **kwargs):
	payload = {"event": event, **kwargs}
	logger.info(json.dumps(payload, ensure_ascii=False, default=str))
