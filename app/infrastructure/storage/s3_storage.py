import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ...application.ports.storage_repo import ObjectStore
from ...exceptions import StorageError
from .keys import generate_storage_key

logger = logging.getLogger(__name__)


class S3ObjectStore(ObjectStore):
    def __init__(
        self,
        bucket: str,
        region: Optional[str] = None,
        namespace: str = "artworks",
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        public_read: bool = True,
        client: Any = None,
    ) -> None:
        self.bucket = bucket
        self.region = region
        self.namespace = namespace
        self.public_read = public_read
        if client is None:
            session = boto3.session.Session(
                aws_access_key_id=access_key_id,
                aws_secret_access_key=secret_access_key,
                region_name=region,
            )
            client = session.client("s3")
        self.client = client

    def generate_key(self, original_filename: str, content_type: Optional[str] = None) -> str:
        return generate_storage_key(self.namespace, original_filename, content_type)

    def public_url(self, key: str) -> str:
        if self.region:
            return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"
        return f"https://{self.bucket}.s3.amazonaws.com/{key}"

    def put(self, data: bytes, key: str, content_type: str) -> str:
        params = {
            "Bucket": self.bucket,
            "Key": key,
            "Body": data,
            "ContentType": content_type,
        }
        if self.public_read:
            params["ACL"] = "public-read"
        try:
            self.client.put_object(**params)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"S3 upload error for {key}: {e}")
            raise StorageError("Failed to upload image to S3") from e
        logger.info(f"Uploaded {len(data)} bytes to s3://{self.bucket}/{key}")
        return self.public_url(key)

    def delete(self, key: str) -> None:
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"S3 delete error for {key}: {e}")
            raise StorageError("Failed to delete image from S3") from e
