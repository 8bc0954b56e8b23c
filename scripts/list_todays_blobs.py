#!/usr/bin/env python
"""List the blobs stored under today's date directory.

Lists ``<root>/<YYYYMMDD>/`` in the configured bucket and logs every entry
together with its public download URL.

Usage:
    python scripts/list_todays_blobs.py [root]
"""

import asyncio
import sys
from datetime import date

import structlog
from returns.result import Failure

from blobnav.application.dtos.blob_dtos import ListBlobsRequest
from blobnav.application.use_cases.blob_use_cases import ListBlobsUseCase
from blobnav.domain.value_objects.search_policy import SearchPolicy
from blobnav.infrastructure.di.container import create_container
from blobnav.infrastructure.logging import setup_logging

setup_logging()
logger = structlog.get_logger()

DEFAULT_ROOT = "lifecycle-images"


async def list_todays_blobs(root: str = DEFAULT_ROOT) -> int:
    container = create_container()
    use_case = container[ListBlobsUseCase]

    prefix = f"{root.rstrip('/')}/{date.today():%Y%m%d}/"
    result = await use_case.execute(ListBlobsRequest(prefix=prefix, policy=SearchPolicy.ALL))

    if isinstance(result, Failure):
        error = result.failure()
        logger.error("list_todays_blobs_failed", prefix=prefix, category=error.category, error=str(error))
        return 1

    response = result.unwrap()

    logger.info("listing_blobs", prefix=prefix, count=len(response.blobs))
    for blob in response.blobs:
        logger.info(
            "blob",
            key=blob.key,
            is_directory=blob.is_directory,
            size=blob.size,
            download_url=blob.download_url,
        )
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(list_todays_blobs(*sys.argv[1:2])))
