import pytest

from components.blobstorageadapter import BlobService, LocalFSBlobAdapter, sanitize_filename
from components.blobstorageadapter.contracts import BlobRef, PutBlobRequest
from components.blobstorageadapter.errors import BlobConflict, BlobValidation


@pytest.mark.asyncio
async def test_put_blob_writes_under_bucket(tmp_path):
    adapter = LocalFSBlobAdapter(str(tmp_path))
    ref = BlobRef(bucket="uploads", key="1_cat.png")

    res = await adapter.put_blob(PutBlobRequest(ref=ref, data=b"meow", content_type="image/png"))

    assert res.meta.size == 4
    assert (tmp_path / "uploads" / "1_cat.png").read_bytes() == b"meow"
    assert adapter.public_url(ref) == f"{tmp_path.resolve().as_uri()}/uploads/1_cat.png"


@pytest.mark.asyncio
async def test_put_blob_without_overwrite_conflicts(tmp_path):
    adapter = LocalFSBlobAdapter(str(tmp_path))
    ref = BlobRef(bucket="uploads", key="a.bin")
    await adapter.put_blob(PutBlobRequest(ref=ref, data=b"1"))
    with pytest.raises(BlobConflict):
        await adapter.put_blob(PutBlobRequest(ref=ref, data=b"2", overwrite=False))
    await adapter.put_blob(PutBlobRequest(ref=ref, data=b"3"))
    assert (tmp_path / "uploads" / "a.bin").read_bytes() == b"3"


@pytest.mark.asyncio
async def test_traversal_is_rejected(tmp_path):
    adapter = LocalFSBlobAdapter(str(tmp_path / "root"))
    with pytest.raises(BlobValidation):
        await adapter.put_blob(PutBlobRequest(ref=BlobRef(bucket="uploads", key="../escape"), data=b"x"))


@pytest.mark.asyncio
async def test_local_adapter_has_no_policies(tmp_path):
    assert await LocalFSBlobAdapter(str(tmp_path)).apply_public_read_policy("uploads") is False


@pytest.mark.parametrize("raw, expected", [
    ("cat.png", "cat.png"),
    ("my cat.png", "my_cat.png"),
    ("../../etc/passwd", "passwd"),
    ("C:\\photos\\dog.jpg", "dog.jpg"),
    ("héllo.png", "h_llo.png"),
    ("...", "upload"),
    (None, "upload"),
])
def test_sanitize_filename(raw, expected):
    assert sanitize_filename(raw) == expected


@pytest.mark.asyncio
async def test_upload_keys_by_time_and_name(blob_service):
    res = await blob_service.upload("my cat.png", b"meow", "image/png")
    assert res.file_name == "1700000000000_my_cat.png"
    assert res.url == "http://minio:9000/uploads/1700000000000_my_cat.png"
    assert res.size == 4


@pytest.mark.asyncio
async def test_upload_rejects_empty_and_oversized(blob_service):
    with pytest.raises(BlobValidation):
        await blob_service.upload("a.png", b"")
    with pytest.raises(BlobValidation):
        await blob_service.upload("a.png", b"x" * 1025)


def test_public_base_url_overrides_adapter(tmp_path):
    svc = BlobService(LocalFSBlobAdapter(str(tmp_path)), "localfs", bucket="uploads",
                      public_base_url="https://cdn.example.com/")
    assert svc.url_for("1 a.png") == "https://cdn.example.com/uploads/1%20a.png"
