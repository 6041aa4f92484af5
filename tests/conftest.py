import pytest
from botocore.exceptions import EndpointConnectionError
from fastapi.testclient import TestClient

from wardrobe_api.core.config import Settings
from wardrobe_api.main import create_app


class FakeS3Client:
	"""Records put/delete calls the way boto3's S3 client would receive them."""

	def __init__(self, fail_put=False, fail_delete=False):
		self.objects = {}
		self.deleted = []
		self.fail_put = fail_put
		self.fail_delete = fail_delete

	def put_object(self, Bucket, Key, Body, ContentType):
		if self.fail_put:
			raise EndpointConnectionError(endpoint_url="https://s3.example.test")
		self.objects[(Bucket, Key)] = (Body, ContentType)
		return {"ETag": '"abc"'}

	def delete_object(self, Bucket, Key):
		self.deleted.append((Bucket, Key))
		if self.fail_delete:
			raise RuntimeError("remote delete failed")
		self.objects.pop((Bucket, Key), None)
		return {}


@pytest.fixture
def settings(tmp_path):
	return Settings(
		DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
		UPLOAD_DIR=str(tmp_path / "uploads"),
		JWT_SECRET="test-secret",
		STORAGE_BACKEND="local",
		PUBLIC_BASE_URL="",
	)


@pytest.fixture
def app(settings):
	return create_app(settings)


@pytest.fixture
def client(app):
	with TestClient(app) as c:
		yield c


@pytest.fixture
def signup(client):
	def _signup(username="ana", password="secret1"):
		resp = client.post("/auth/signup", json={"username": username, "password": password})
		assert resp.status_code == 201, resp.text
		body = resp.json()
		return {"Authorization": f"Bearer {body['token']}"}, body["user"]
	return _signup


@pytest.fixture
def auth(signup):
	headers, _ = signup()
	return headers


@pytest.fixture
def png_bytes():
	return b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def fake_s3():
	return FakeS3Client
