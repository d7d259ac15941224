"""
Amazon S3 storage service implementation.

Blobs are stored as S3 objects under an optional key prefix; metadata, when
given, is stored as a sibling ``.meta`` JSON object.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import ClientError, NoCredentialsError

from .base import (
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageService,
)

logger = logging.getLogger(__name__)

METADATA_SUFFIX = ".meta"
_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}
_FORBIDDEN_CODES = {"403", "AccessDenied"}


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


class S3StorageService(StorageService):
    """Amazon S3 storage service."""

    def __init__(
        self,
        bucket_name: str,
        region_name: str = "us-east-1",
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
        prefix: str = "",
    ):
        """
        Initialize the S3 storage service.

        Args:
            bucket_name: Name of the S3 bucket
            region_name: AWS region name
            aws_access_key_id: AWS access key ID (optional, can use IAM roles)
            aws_secret_access_key: AWS secret access key (optional, can use IAM roles)
            prefix: Optional prefix for all stored keys

        Raises:
            StorageError: If the bucket is unreachable or credentials are missing
        """
        self.bucket_name = bucket_name
        self.region_name = region_name
        self.prefix = prefix.strip("/")

        try:
            client_kwargs: Dict[str, Any] = {"region_name": region_name}
            if aws_access_key_id and aws_secret_access_key:
                client_kwargs.update(
                    {
                        "aws_access_key_id": aws_access_key_id,
                        "aws_secret_access_key": aws_secret_access_key,
                    }
                )

            self.s3_client = boto3.client("s3", **client_kwargs)
            self.s3_client.head_bucket(Bucket=bucket_name)

        except NoCredentialsError:
            raise StorageError("AWS credentials not found")
        except ClientError as e:
            code = _error_code(e)
            if code in _NOT_FOUND_CODES:
                raise StorageError(f"S3 bucket '{bucket_name}' not found")
            elif code in _FORBIDDEN_CODES:
                raise StoragePermissionError(
                    f"Access denied to S3 bucket '{bucket_name}'"
                )
            raise StorageError(f"Failed to connect to S3: {e}")

    def _get_s3_key(self, key: str) -> str:
        clean_key = key.lstrip("/")
        if self.prefix:
            return f"{self.prefix}/{clean_key}"
        return clean_key

    def _get_metadata_key(self, key: str) -> str:
        return f"{self._get_s3_key(key)}{METADATA_SUFFIX}"

    def _wrap(self, action: str, key: str, error: ClientError) -> StorageError:
        code = _error_code(error)
        if code in _NOT_FOUND_CODES:
            return StorageNotFoundError(f"Key not found: {key}")
        if code in _FORBIDDEN_CODES:
            return StoragePermissionError(f"Permission denied {action} {key}: {error}")
        return StorageError(f"Failed {action} {key}: {error}")

    def write(
        self, key: str, content: bytes, metadata: Optional[Dict[str, Any]] = None
    ) -> str:
        content_type = (
            metadata.get("content_type", "application/octet-stream")
            if metadata
            else "application/octet-stream"
        )
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=self._get_s3_key(key),
                Body=content,
                ContentType=content_type,
            )

            if metadata is not None:
                metadata_data = {
                    "created_at": datetime.now(timezone.utc).isoformat(),
                    "size": len(content),
                    "content_type": content_type,
                    **metadata,
                }
                self.s3_client.put_object(
                    Bucket=self.bucket_name,
                    Key=self._get_metadata_key(key),
                    Body=json.dumps(metadata_data, indent=2).encode("utf-8"),
                    ContentType="application/json",
                )

            return key

        except ClientError as e:
            raise self._wrap("writing", key, e)

    def read(self, key: str) -> bytes:
        try:
            response = self.s3_client.get_object(
                Bucket=self.bucket_name, Key=self._get_s3_key(key)
            )
            return response["Body"].read()
        except ClientError as e:
            raise self._wrap("reading", key, e)

    def delete(self, key: str) -> bool:
        # delete_object succeeds for missing keys, so check first
        existed = self.exists(key)
        try:
            self.s3_client.delete_object(
                Bucket=self.bucket_name, Key=self._get_s3_key(key)
            )
            self.s3_client.delete_object(
                Bucket=self.bucket_name, Key=self._get_metadata_key(key)
            )
        except ClientError as e:
            raise self._wrap("deleting", key, e)
        return existed

    def exists(self, key: str) -> bool:
        try:
            self.s3_client.head_object(Bucket=self.bucket_name, Key=self._get_s3_key(key))
            return True
        except ClientError as e:
            if _error_code(e) in _NOT_FOUND_CODES:
                return False
            raise self._wrap("checking", key, e)

    def get_metadata(self, key: str) -> Dict[str, Any]:
        try:
            response = self.s3_client.head_object(
                Bucket=self.bucket_name, Key=self._get_s3_key(key)
            )
        except ClientError as e:
            raise self._wrap("getting metadata for", key, e)

        metadata: Dict[str, Any] = {
            "size": response["ContentLength"],
            "modified_at": response["LastModified"].isoformat(),
            "content_type": response.get("ContentType", "application/octet-stream"),
            "etag": response.get("ETag", "").strip('"'),
        }

        try:
            metadata_response = self.s3_client.get_object(
                Bucket=self.bucket_name, Key=self._get_metadata_key(key)
            )
            metadata.update(json.loads(metadata_response["Body"].read().decode("utf-8")))
        except ClientError as e:
            if _error_code(e) not in _NOT_FOUND_CODES:
                logger.warning(f"Could not read metadata object for {key}: {e}")

        return metadata

    def list_keys(self, prefix: str = "") -> List[str]:
        try:
            keys = []
            s3_prefix = self._get_s3_key(prefix) if prefix else self.prefix

            paginator = self.s3_client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self.bucket_name, Prefix=s3_prefix):
                for obj in page.get("Contents", []):
                    s3_key = obj["Key"]
                    if s3_key.endswith(METADATA_SUFFIX):
                        continue
                    if self.prefix and s3_key.startswith(f"{self.prefix}/"):
                        s3_key = s3_key[len(self.prefix) + 1 :]
                    keys.append(s3_key)

            return sorted(keys)

        except ClientError as e:
            raise self._wrap("listing", prefix, e)
