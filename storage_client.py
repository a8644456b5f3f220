"""
S3 storage client.

Clients are created lazily, one per region, and kept for the life of the
process so warm invocations reuse their connections. Set S3_ENDPOINT to point
at an S3-compatible store for local runs.
"""
import logging

import boto3
import botocore.config
import botocore.exceptions

from errors import StorageFetchError
from models import StorageLocation, StoredObject
from settings import DEFAULT_REGION, S3_ENDPOINT

logger = logging.getLogger(__name__)


class S3Storage:
    def __init__(self, endpoint_url: str | None = S3_ENDPOINT, default_region: str | None = DEFAULT_REGION):
        self.endpoint_url   = endpoint_url
        self.default_region = default_region
        self._clients: dict[str | None, object] = {}

    def client(self, region: str | None = None):
        region = region or self.default_region
        if region not in self._clients:
            self._clients[region] = boto3.client(
                "s3",
                region_name=region,
                endpoint_url=self.endpoint_url,
                config=botocore.config.Config(signature_version="s3v4"),
            )
            logger.info("S3 client initialized for region: %s", region or "(default)")
        return self._clients[region]

    def fetch(self, location: StorageLocation, key: str) -> StoredObject:
        """
        Fetch an object and drain its body into memory.

        Raises:
            StorageFetchError: on any network, permission or not-found error.
        """
        try:
            response = self.client(location.region).get_object(Bucket=location.bucket, Key=key)
            body     = response["Body"].read()
        except (botocore.exceptions.BotoCoreError, botocore.exceptions.ClientError) as e:
            raise StorageFetchError(location.bucket, key, str(e)) from e

        return StoredObject(content_type=response.get("ContentType"), body=body)
