import os
from dotenv import load_dotenv

load_dotenv()

def _csv(value: str) -> list[str]:
	return [part.strip() for part in value.split(",") if part.strip()]

class Settings:
	def __init__(self, **overrides):
		self.APP_NAME = os.getenv("APP_NAME", "wardrobe")
		self.DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./wardrobe.db")

		self.JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-change-me")
		self.JWT_ALG = "HS256"
		self.ACCESS_TOKEN_EXPIRES_DAYS = int(os.getenv("ACCESS_TOKEN_EXPIRES_DAYS", "7"))

		self.ALLOW_ORIGINS = _csv(os.getenv("ALLOW_ORIGINS", "*"))

		# "local" keeps uploads on disk, "s3" pushes them to a bucket
		self.STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "local").lower()
		self.UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
		self.PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "")
		self.MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))

		self.S3_BUCKET = os.getenv("S3_BUCKET", "")
		self.S3_REGION = os.getenv("S3_REGION", "us-east-1")
		self.S3_ENDPOINT_URL = os.getenv("S3_ENDPOINT_URL", "")
		self.S3_PREFIX = os.getenv("S3_PREFIX", "")
		self.S3_PUBLIC_BASE_URL = os.getenv("S3_PUBLIC_BASE_URL", "")
		self.S3_TIMEOUT_SEC = float(os.getenv("S3_TIMEOUT_SEC", "10"))

		for key, value in overrides.items():
			if not hasattr(self, key):
				raise AttributeError(f"Unknown setting: {key}")
			setattr(self, key, value)

	@property
	def s3_prefix(self) -> str:
		return (self.S3_PREFIX or self.APP_NAME).strip("/")
