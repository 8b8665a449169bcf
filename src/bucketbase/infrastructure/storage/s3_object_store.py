"""Amazon S3 (or S3-compatible) object store."""

import asyncio
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel, ConfigDict

from bucketbase.core.config import Settings
from bucketbase.core.exceptions import NotFoundError, ObjectStoreError
from bucketbase.core.logging import get_logger
from bucketbase.infrastructure.storage.object_store import (
    ObjectAcl,
    ObjectMetadata,
    ObjectStore,
    dump_json,
    load_json,
)

logger = get_logger(__name__)

ALL_USERS_URI = "http://acs.amazonaws.com/groups/global/AllUsers"
NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


class S3StorageSettings(BaseModel):
    """Configuration settings for the S3 object store."""

    model_config = ConfigDict(from_attributes=True)

    bucket: str
    region: str = "us-east-1"
    access_key_id: str | None = None
    secret_access_key: str | None = None
    endpoint_url: str | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3StorageSettings":
        return cls(
            bucket=settings.s3_bucket,
            region=settings.s3_region,
            access_key_id=settings.s3_access_key_id,
            secret_access_key=settings.s3_secret_access_key,
            endpoint_url=settings.s3_endpoint_url,
        )


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "Unknown")


class S3ObjectStore(ObjectStore):
    """Object store on an S3 bucket.

    boto3 is synchronous, so every call is off-loaded with
    :func:`asyncio.to_thread`.
    """

    def __init__(self, settings: S3StorageSettings) -> None:
        self.settings = settings
        self._client = None

    def _get_client(self):
        """Get or create the S3 client."""
        if self._client is None:
            client_kwargs: dict[str, Any] = {"region_name": self.settings.region}
            if self.settings.access_key_id and self.settings.secret_access_key:
                client_kwargs["aws_access_key_id"] = self.settings.access_key_id
                client_kwargs["aws_secret_access_key"] = self.settings.secret_access_key
            if self.settings.endpoint_url:
                client_kwargs["endpoint_url"] = self.settings.endpoint_url

            self._client = boto3.client("s3", **client_kwargs)
        return self._client

    async def get_json(self, key: str) -> Any | None:
        try:
            response = await asyncio.to_thread(
                self._get_client().get_object,
                Bucket=self.settings.bucket,
                Key=key,
            )
            body = await asyncio.to_thread(response["Body"].read)
        except ClientError as e:
            if _error_code(e) in NOT_FOUND_CODES:
                return None
            raise ObjectStoreError(f"Failed to fetch {key} from S3: {str(e)}") from e
        except BotoCoreError as e:
            raise ObjectStoreError(f"Failed to fetch {key} from S3: {str(e)}") from e

        return load_json(key, body)

    async def put_json(self, key: str, data: Any, acl: ObjectAcl = "private") -> None:
        try:
            await asyncio.to_thread(
                self._get_client().put_object,
                Bucket=self.settings.bucket,
                Key=key,
                Body=dump_json(data),
                ContentType="application/json",
                ACL=acl,
            )
        except (ClientError, BotoCoreError) as e:
            raise ObjectStoreError(f"Failed to upload {key} to S3: {str(e)}") from e
        logger.debug("Object written", key=key, acl=acl)

    async def head(self, key: str) -> ObjectMetadata | None:
        try:
            response = await asyncio.to_thread(
                self._get_client().head_object,
                Bucket=self.settings.bucket,
                Key=key,
            )
        except ClientError as e:
            if _error_code(e) in NOT_FOUND_CODES:
                return None
            raise ObjectStoreError(f"Failed to read metadata of {key}: {str(e)}") from e
        except BotoCoreError as e:
            raise ObjectStoreError(f"Failed to read metadata of {key}: {str(e)}") from e

        return ObjectMetadata(
            last_modified=response.get("LastModified"),
            size=response.get("ContentLength"),
            content_type=response.get("ContentType"),
        )

    async def delete(self, key: str) -> None:
        try:
            await asyncio.to_thread(
                self._get_client().delete_object,
                Bucket=self.settings.bucket,
                Key=key,
            )
        except (ClientError, BotoCoreError) as e:
            raise ObjectStoreError(f"Failed to delete {key} from S3: {str(e)}") from e

    async def list_prefixes(self, prefix: str, delimiter: str = "/") -> list[str]:
        try:
            response = await asyncio.to_thread(
                self._get_client().list_objects_v2,
                Bucket=self.settings.bucket,
                Prefix=prefix,
                Delimiter=delimiter,
            )
        except (ClientError, BotoCoreError) as e:
            raise ObjectStoreError(f"Failed to list objects under {prefix}: {str(e)}") from e

        return [p["Prefix"] for p in response.get("CommonPrefixes", []) if p.get("Prefix")]

    async def is_public(self, key: str) -> bool:
        try:
            response = await asyncio.to_thread(
                self._get_client().get_object_acl,
                Bucket=self.settings.bucket,
                Key=key,
            )
        except (ClientError, BotoCoreError) as e:
            # ACLs may be disabled on the bucket
            logger.warning(
                "Could not determine object ACL, assuming private", key=key, error=str(e)
            )
            return False

        return any(
            grant.get("Grantee", {}).get("URI") == ALL_USERS_URI
            and grant.get("Permission") in ("READ", "FULL_CONTROL")
            for grant in response.get("Grants", [])
        )

    async def set_acl(self, key: str, acl: ObjectAcl) -> None:
        # S3 has no in-place ACL change that keeps the body; copy onto itself
        try:
            await asyncio.to_thread(
                self._get_client().copy_object,
                Bucket=self.settings.bucket,
                CopySource={"Bucket": self.settings.bucket, "Key": key},
                Key=key,
                ACL=acl,
                MetadataDirective="REPLACE",
                ContentType="application/json",
            )
        except ClientError as e:
            if _error_code(e) in NOT_FOUND_CODES:
                raise NotFoundError(f"Object not found: {key}") from e
            raise ObjectStoreError(f"Failed to set ACL of {key} to '{acl}': {str(e)}") from e
        except BotoCoreError as e:
            raise ObjectStoreError(f"Failed to set ACL of {key} to '{acl}': {str(e)}") from e
        logger.info("Object ACL changed", key=key, acl=acl)

    async def presigned_get_url(self, key: str, expires_in: int = 3600) -> str:
        try:
            return await asyncio.to_thread(
                self._get_client().generate_presigned_url,
                "get_object",
                Params={"Bucket": self.settings.bucket, "Key": key},
                ExpiresIn=expires_in,
            )
        except (ClientError, BotoCoreError) as e:
            raise ObjectStoreError(f"Failed to presign {key}: {str(e)}") from e
