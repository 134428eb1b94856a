import logging
from pathlib import Path
from typing import Any, Optional, Tuple
from urllib.parse import urlparse

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from datamagic.config import Settings
from datamagic.exceptions import DataSourceError

from .credentials import CredentialProvider

logger = logging.getLogger(__name__)


def is_s3_path(path: str) -> bool:
    return path.startswith("s3://")


def split_s3_path(path: str) -> Tuple[str, str]:
    parsed = urlparse(path)
    return parsed.netloc, parsed.path.lstrip("/")


def join_path(directory: str, name: str) -> str:
    if is_s3_path(directory):
        return f"{directory.rstrip('/')}/{name}"
    return str(Path(directory) / name)


class DataSource:
    """Reads configuration and data files from a local directory or an S3 bucket."""

    def __init__(self, s3_client: Optional[Any] = None):
        self.s3_client = s3_client

    def read(self, path: str) -> str:
        if is_s3_path(path):
            return self._read_s3(path)
        try:
            return Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise DataSourceError(f"cannot read {path}: {e}") from e

    def list_csv(self, directory: str) -> list[str]:
        """Names of the csv files directly inside a local directory."""
        if is_s3_path(directory):
            return []
        root = Path(directory)
        if not root.is_dir():
            return []
        return sorted(p.name for p in root.glob("*.csv"))

    def _read_s3(self, path: str) -> str:
        if self.s3_client is None:
            raise DataSourceError(f"no S3 client configured to read {path}")
        bucket, key = split_s3_path(path)
        try:
            response = self.s3_client.get_object(Bucket=bucket, Key=key)
            return response["Body"].read().decode("utf-8")
        except (BotoCoreError, ClientError) as e:
            raise DataSourceError(f"cannot read {path}: {e}") from e


def make_s3_client(settings: Settings, credentials: CredentialProvider):
    """Build a boto3 S3 client from the credential provider's keys."""
    cred = credentials.s3_credentials()
    logger.info(f"Creating S3 client for region {settings.s3.region}")
    return boto3.client(
        "s3",
        region_name=settings.s3.region,
        aws_access_key_id=cred["access_key"],
        aws_secret_access_key=cred["secret_key"],
    )


def make_data_source(settings: Settings, credentials: CredentialProvider) -> DataSource:
    s3_client = None
    if is_s3_path(settings.data_path):
        s3_client = make_s3_client(settings, credentials)
    return DataSource(s3_client=s3_client)
