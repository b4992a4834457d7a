"""
Image Storage
Thin wrapper over an S3 client for reading source images and writing
derived variants.
"""
import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from generation_errors import SourceFetchError, StoreError

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class S3ImageStorage:
    """
    Reads and writes image objects through an injected boto3 S3 client.

    Args:
        s3_client: boto3 S3 client, or any object with get_object/put_object
    """

    def __init__(self, s3_client: Any):
        self.s3_client = s3_client

    def get(self, bucket: str, key: str) -> bytes:
        """
        Fetch an object body.

        Raises:
            SourceFetchError: Object missing or the read failed
        """
        try:
            response = self.s3_client.get_object(Bucket=bucket, Key=key)
            body = response['Body']
            data = body.read() if hasattr(body, 'read') else body
        except (ClientError, BotoCoreError, KeyError) as e:
            raise SourceFetchError(key, e) from e

        logger.debug(f'Fetched s3://{bucket}/{key} ({len(data)} bytes)')
        return data

    def put(self, bucket: str, key: str, body: bytes, content_type: str,
            storage_class: str = 'STANDARD') -> None:
        """
        Store a derived image.

        Raises:
            StoreError: The write was rejected
        """
        try:
            self.s3_client.put_object(
                Body=body,
                Bucket=bucket,
                ContentType=content_type,
                Key=key,
                StorageClass=storage_class
            )
        except (ClientError, BotoCoreError) as e:
            raise StoreError(key, e, bucket=bucket) from e

        logger.info(f'Stored s3://{bucket}/{key} ({content_type}, {len(body)} bytes)')
