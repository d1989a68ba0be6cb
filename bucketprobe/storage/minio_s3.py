"""MinIO-backed storage adapter."""

from __future__ import annotations

import logging
from typing import Optional

from minio import Minio
from minio.credentials import (
    AWSConfigProvider,
    ChainedProvider,
    EnvAWSProvider,
    EnvMinioProvider,
    IamAwsProvider,
)

from bucketprobe.config import Settings, get_settings
from bucketprobe.storage.object_store import ObjectStore

logger = logging.getLogger(__name__)


def _default_credentials() -> ChainedProvider:
    """Resolve credentials the way the AWS SDKs do: env, config files, IAM."""
    return ChainedProvider(
        [
            EnvAWSProvider(),
            EnvMinioProvider(),
            AWSConfigProvider(),
            IamAwsProvider(),
        ]
    )


def build_minio_client(settings: Settings) -> Minio:
    """Create a MinIO client for either an emulator or AWS itself.

    Static keys from settings win; otherwise the SDK provider chain is used.
    Path-style addressing keeps bucket names out of the host name, so an
    emulator on localhost needs no per-bucket DNS entries.
    """
    if settings.static_credentials:
        client = Minio(
            settings.endpoint,
            access_key=settings.access_key,
            secret_key=settings.secret_key,
            session_token=settings.session_token,
            secure=settings.secure,
            region=settings.region,
        )
    else:
        client = Minio(
            settings.endpoint,
            secure=settings.secure,
            region=settings.region,
            credentials=_default_credentials(),
        )
    if settings.path_style:
        client.disable_virtual_style_endpoint()
    logger.debug(
        "Configured object store client endpoint=%s secure=%s region=%s path_style=%s",
        settings.endpoint,
        settings.secure,
        settings.region,
        settings.path_style,
    )
    return client


class MinioStorage(ObjectStore):
    """Object store wired to a MinIO client built from process settings."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        super().__init__(build_minio_client(self.settings))
