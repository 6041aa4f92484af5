"""Image asset storage.

Two interchangeable backends share the ``AssetStore`` contract:

* ``LocalAssetStore`` writes files into ``UPLOAD_DIR/<owner_id>/`` and serves
  them back through ``GET /uploads/{owner_id}/{filename}``; the handle is
  ``<owner_id>/<filename>``.
* ``S3AssetStore`` puts objects under ``<prefix>/<owner_id>/`` in a bucket;
  the handle is the object key and the provider serves the bytes.

An owner can only release handles inside its own namespace, whatever an item
row claims.

The backend is picked once per process by ``build_asset_store``.
"""

import random
import time
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional
from urllib.parse import quote, urlparse

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from wardrobe_api.core.config import Settings
from wardrobe_api.core.errors import InvalidAsset, NotFound, StorageFailure
from wardrobe_api.core.logging import log_event

DEFAULT_EXTENSION = ".jpg"


@dataclass(frozen=True)
class StoredAsset:
	url: str
	handle: str


def generate_filename(original_filename: Optional[str]) -> str:
	suffix = PurePosixPath(original_filename or "").suffix
	ext = suffix if suffix[1:].isalnum() and len(suffix) <= 10 else DEFAULT_EXTENSION
	unique = f"{int(time.time() * 1000)}-{random.randint(0, 999_999_999):09d}"
	return f"{unique}{ext.lower()}"


class AssetStore:
	backend = "base"

	def __init__(self, max_bytes: int):
		self.max_bytes = max_bytes

	def validate(self, data: bytes, mime_type: Optional[str]) -> None:
		if not mime_type or not mime_type.startswith("image/"):
			raise InvalidAsset("Only image files are allowed")
		if not data:
			raise InvalidAsset("image file is empty")
		if len(data) > self.max_bytes:
			raise InvalidAsset(f"image exceeds {self.max_bytes} bytes")

	def store(
		self,
		owner_id: int,
		data: bytes,
		mime_type: Optional[str],
		original_filename: Optional[str],
		base_url: Optional[str] = None,
	) -> StoredAsset:
		self.validate(data, mime_type)
		asset = self._put(owner_id, data, mime_type, original_filename, base_url)
		log_event("asset_stored", backend=self.backend, owner_id=owner_id, handle=asset.handle, size=len(data))
		return asset

	def owns(self, owner_id: int, handle: str) -> bool:
		raise NotImplementedError

	def remove(self, owner_id: int, handle: Optional[str]) -> None:
		"""Best-effort delete of one of ``owner_id``'s assets; never raises."""
		if not handle:
			return
		if not self.owns(owner_id, handle):
			log_event("asset_remove_rejected", backend=self.backend, owner_id=owner_id, handle=handle)
			return
		try:
			self._delete(handle)
		except Exception as exc:
			log_event("asset_remove_failed", backend=self.backend, handle=handle, error=str(exc))
			return
		log_event("asset_removed", backend=self.backend, owner_id=owner_id, handle=handle)

	def handle_for(self, owner_id: int, image_url: Optional[str], image_asset_id: Optional[str]) -> Optional[str]:
		return image_asset_id or None

	def open(self, owner_id: int, filename: str) -> Path:
		raise NotFound()

	def _put(self, owner_id, data, mime_type, original_filename, base_url) -> StoredAsset:
		raise NotImplementedError

	def _delete(self, handle: str) -> None:
		raise NotImplementedError


class LocalAssetStore(AssetStore):
	"""Files live in ``<root>/<owner_id>/<name>``; the handle is ``<owner_id>/<name>``."""

	backend = "local"

	def __init__(self, upload_dir: str | Path, max_bytes: int, public_base_url: str = ""):
		super().__init__(max_bytes)
		self.root = Path(upload_dir).expanduser().resolve()
		self.root.mkdir(parents=True, exist_ok=True)
		self.public_base_url = public_base_url.rstrip("/")

	def _resolve(self, owner_id: int, filename: str) -> Optional[Path]:
		if not filename or filename in (".", ".."):
			return None
		owner_dir = self.root / str(owner_id)
		path = (owner_dir / filename).resolve()
		if path.parent != owner_dir:
			return None
		return path

	def _split(self, handle: str) -> Optional[tuple[int, str]]:
		owner, sep, filename = handle.partition("/")
		if not sep or not owner.isdigit() or not filename or "/" in filename:
			return None
		return int(owner), filename

	def owns(self, owner_id, handle):
		parts = self._split(handle)
		return parts is not None and parts[0] == owner_id and self._resolve(*parts) is not None

	def _put(self, owner_id, data, mime_type, original_filename, base_url) -> StoredAsset:
		filename = generate_filename(original_filename)
		owner_dir = self.root / str(owner_id)
		try:
			owner_dir.mkdir(exist_ok=True)
			(owner_dir / filename).write_bytes(data)
		except OSError as exc:
			log_event("asset_store_failed", backend=self.backend, error=str(exc))
			raise StorageFailure()
		handle = f"{owner_id}/{filename}"
		origin = self.public_base_url or (base_url or "").rstrip("/")
		return StoredAsset(url=f"{origin}/uploads/{quote(handle)}", handle=handle)

	def _delete(self, handle: str) -> None:
		path = self._resolve(*self._split(handle))
		path.unlink(missing_ok=True)

	def handle_for(self, owner_id, image_url, image_asset_id):
		if image_asset_id:
			return image_asset_id
		if not image_url:
			return None
		# Older items only carry the URL; only /uploads/<owner_id>/<name> maps back to a file
		segments = PurePosixPath(urlparse(image_url).path).parts
		if len(segments) >= 3 and segments[-3] == "uploads" and segments[-2] == str(owner_id):
			return f"{owner_id}/{segments[-1]}"
		return None

	def open(self, owner_id: int | str, filename: str) -> Path:
		path = self._resolve(owner_id, filename) if str(owner_id).isdigit() else None
		if path is None or not path.is_file():
			raise NotFound()
		return path


class S3AssetStore(AssetStore):
	backend = "s3"

	def __init__(
		self,
		bucket: str,
		prefix: str,
		max_bytes: int,
		client=None,
		region: str = "us-east-1",
		endpoint_url: str = "",
		public_base_url: str = "",
		timeout: float = 10,
	):
		super().__init__(max_bytes)
		if not bucket:
			raise ValueError("S3_BUCKET is required for the s3 storage backend")
		self.bucket = bucket
		self.prefix = prefix.strip("/")
		self.region = region
		self.public_base_url = public_base_url.rstrip("/")
		if client is None:
			client = boto3.client(
				"s3",
				region_name=region,
				endpoint_url=endpoint_url or None,
				config=Config(
					connect_timeout=timeout,
					read_timeout=timeout,
					retries={"max_attempts": 2, "mode": "standard"},
				),
			)
		self.client = client

	def _key(self, owner_id: int, filename: str) -> str:
		parts = [self.prefix, str(owner_id), filename]
		return "/".join(part for part in parts if part)

	def owns(self, owner_id, handle):
		owner_prefix = self._key(owner_id, "") + "/"
		rest = handle[len(owner_prefix):]
		return handle.startswith(owner_prefix) and bool(rest) and "/" not in rest

	def public_url(self, key: str) -> str:
		if self.public_base_url:
			return f"{self.public_base_url}/{quote(key)}"
		return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{quote(key)}"

	def _put(self, owner_id, data, mime_type, original_filename, base_url) -> StoredAsset:
		key = self._key(owner_id, generate_filename(original_filename))
		try:
			self.client.put_object(Bucket=self.bucket, Key=key, Body=data, ContentType=mime_type)
		except (BotoCoreError, ClientError) as exc:
			log_event("asset_store_failed", backend=self.backend, key=key, error=str(exc))
			raise StorageFailure()
		return StoredAsset(url=self.public_url(key), handle=key)

	def _delete(self, handle: str) -> None:
		self.client.delete_object(Bucket=self.bucket, Key=handle)


def build_asset_store(settings: Settings) -> AssetStore:
	backend = settings.STORAGE_BACKEND
	if backend == "local":
		return LocalAssetStore(settings.UPLOAD_DIR, settings.MAX_UPLOAD_BYTES, settings.PUBLIC_BASE_URL)
	if backend == "s3":
		return S3AssetStore(
			bucket=settings.S3_BUCKET,
			prefix=settings.s3_prefix,
			max_bytes=settings.MAX_UPLOAD_BYTES,
			region=settings.S3_REGION,
			endpoint_url=settings.S3_ENDPOINT_URL,
			public_base_url=settings.S3_PUBLIC_BASE_URL,
			timeout=settings.S3_TIMEOUT_SEC,
		)
	raise ValueError(f"Unknown STORAGE_BACKEND: {backend}")
