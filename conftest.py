from pathlib import Path
import sys

import pytest

# Ensure project root is on sys.path before tests import modules
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from components.apigateway.app import create_app  # noqa: E402
from components.apigateway.settings import AppSettings  # noqa: E402
from components.apigateway.wiring import assemble  # noqa: E402
from components.authservice import AuthConfig, InMemoryUserRepo  # noqa: E402
from components.blobstorageadapter import BlobService, LocalFSBlobAdapter  # noqa: E402
from components.postservice import InMemoryPostRepo  # noqa: E402

TEST_SECRET = "test-secret-0123456789abcdef0123456789"
UPLOAD_MS = 1700000000000


@pytest.fixture
def auth_cfg():
    # low rounds keep hashing fast in tests
    return AuthConfig(jwt_secret=TEST_SECRET, jwt_ttl_seconds=3600, password_hash_rounds=1000)


@pytest.fixture
def blob_service(tmp_path):
    adapter = LocalFSBlobAdapter(str(tmp_path / "blobs"), base_url="http://minio:9000")
    return BlobService(adapter, "localfs", bucket="uploads", max_upload_bytes=1024, clock_ms=lambda: UPLOAD_MS)


@pytest.fixture
def user_repo():
    return InMemoryUserRepo()


@pytest.fixture
def post_repo():
    return InMemoryPostRepo()


@pytest.fixture
def services(user_repo, post_repo, blob_service, auth_cfg):
    return assemble(users=user_repo, posts=post_repo, blob_service=blob_service, auth_cfg=auth_cfg)


@pytest.fixture
def app_settings():
    return AppSettings(app_env="development")


@pytest.fixture
def client(app_settings, services):
    return TestClient(create_app(app_settings, services=services))


@pytest.fixture
def login(client):
    """Register (if needed) and log in; returns the bearer header and user id."""
    def _login(name: str, email: str, password: str = "pw12345"):
        reg = client.post("/register", json={"name": name, "email": email, "password": password})
        assert reg.status_code in (201, 422), reg.text
        res = client.post("/login", json={"email": email, "password": password})
        assert res.status_code == 200, res.text
        token = res.json()["result"]["token"]
        me = client.get("/protected", headers={"Authorization": f"Bearer {token}"})
        return {"Authorization": f"Bearer {token}"}, me.json()["result"]["user"]["id"]
    return _login
