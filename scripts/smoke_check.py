"""Create a bucket, upload one object and probe for it."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from bucketprobe.config import get_settings
from bucketprobe.storage import CallContext, MinioStorage, ObjectStore, StorageError

LOGGER = logging.getLogger(__name__)


def run(
    store: ObjectStore,
    bucket: str,
    key: str,
    content: bytes,
    ctx: Optional[CallContext] = None,
) -> bool:
    store.ensure_bucket(bucket, ctx=ctx)
    LOGGER.info("Bucket %s created", bucket)
    store.put_object(bucket, key, content, ctx=ctx)
    LOGGER.info("Uploaded %s/%s (%d bytes)", bucket, key, len(content))
    return store.object_exists(bucket, key, ctx=ctx)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--bucket", default=None, help="Bucket to create (default: S3_BUCKET)")
    parser.add_argument("--key", default="foo.bar", help="Object key to upload")
    parser.add_argument("--content", default="hello world", help="Object body")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Abort the whole run after this many seconds",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    args = _parse_args(argv)
    try:
        settings = get_settings()
        store = MinioStorage(settings)
        ctx = CallContext.with_timeout(args.timeout) if args.timeout is not None else None
    except (RuntimeError, ValueError) as exc:
        LOGGER.error("error: %s", exc)
        return 1
    bucket = args.bucket or settings.bucket

    try:
        found = run(store, bucket, args.key, args.content.encode(), ctx)
    except StorageError as exc:
        LOGGER.error("error: %s", exc)
        return 1

    if not found:
        LOGGER.error("Object %s/%s not found after upload", bucket, args.key)
        return 1
    LOGGER.info("Object %s/%s exists", bucket, args.key)
    return 0


if __name__ == "__main__":
    sys.exit(main())
