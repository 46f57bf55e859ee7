
from __future__ import annotations
import asyncio
import json
import logging
from typing import Optional
from urllib.parse import quote

import boto3
from botocore.client import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from ..contracts import BlobMeta, BlobRef, PutBlobRequest, PutBlobResult
from ..errors import BlobConflict, BlobUpstream
from ..ports import BlobStoragePort

log = logging.getLogger("blobstorage")

def _status(e: ClientError) -> Optional[int]:
    return e.response.get("ResponseMetadata", {}).get("HTTPStatusCode")

def public_read_policy(bucket: str) -> str:
    return json.dumps({
        "Version": "2012-10-17",
        "Statement": [{
            "Effect": "Allow",
            "Principal": {"AWS": "*"},
            "Action": ["s3:GetObject"],
            "Resource": [f"arn:aws:s3:::{bucket}/*"],
        }],
    })

class S3BlobAdapter(BlobStoragePort):
    """
    S3-compatible adapter (AWS S3 or MinIO). Path-style addressing by default
    so a custom endpoint such as http://minio:9000 works without DNS tricks.
    """
    def __init__(self, *, region: Optional[str] = None, endpoint_url: Optional[str] = None,
                 force_path_style: bool = True, access_key_id: Optional[str] = None,
                 secret_access_key: Optional[str] = None, client=None):
        self.s3 = client or boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            config=BotoConfig(signature_version="s3v4",
                              s3={"addressing_style": "path" if force_path_style else "auto"}),
        )
        self.region = region
        self.endpoint_url = endpoint_url.rstrip("/") if endpoint_url else None
        self.adapter = "s3"

    async def put_blob(self, req: PutBlobRequest) -> PutBlobResult:
        ref = req.ref
        kwargs = {"Bucket": ref.bucket, "Key": ref.key, "Body": req.data}
        if req.content_type:
            kwargs["ContentType"] = req.content_type

        if not req.overwrite:
            try:
                await asyncio.to_thread(self.s3.head_object, Bucket=ref.bucket, Key=ref.key)
            except ClientError as e:
                if _status(e) != 404:
                    raise BlobUpstream(str(e)) from e
            else:
                raise BlobConflict("blob exists and overwrite=False")

        try:
            resp = await asyncio.to_thread(lambda: self.s3.put_object(**kwargs))
        except (ClientError, BotoCoreError) as e:
            raise BlobUpstream(str(e)) from e

        meta = BlobMeta(size=len(req.data), content_type=req.content_type, etag=resp.get("ETag"))
        return PutBlobResult(ref=ref, meta=meta)

    def public_url(self, ref: BlobRef) -> str:
        key = quote(ref.key, safe="/")
        if self.endpoint_url:
            return f"{self.endpoint_url}/{ref.bucket}/{key}"
        return f"https://{ref.bucket}.s3.{self.region or 'us-east-1'}.amazonaws.com/{key}"

    async def apply_public_read_policy(self, bucket: str) -> bool:
        try:
            await asyncio.to_thread(self.s3.put_bucket_policy, Bucket=bucket, Policy=public_read_policy(bucket))
        except (ClientError, BotoCoreError):
            # not fatal: uploads still work, image URLs just need another access path
            log.exception("blob.policy err bucket=%s", bucket)
            return False
        log.info("blob.policy ok bucket=%s public_read=true", bucket)
        return True
