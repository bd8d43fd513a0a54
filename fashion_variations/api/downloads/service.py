from typing import Tuple
from urllib.parse import urlparse

import aiohttp

from fashion_variations.config import DOWNLOAD_DEFAULT_CONTENT_TYPE
from fashion_variations.exceptions import DownloadError
from fashion_variations.logger import json_logger as logger


async def fetch_remote_image(url: str) -> Tuple[bytes, str]:
    """
    Downloads ``url`` in full and returns its bytes with the upstream content type.

    Raises:
        DownloadError: the URL is not http(s) or upstream answered with a non-2xx status.
    """
    scheme = urlparse(url).scheme.lower()
    if scheme not in ("http", "https"):
        raise DownloadError(f"Unsupported URL scheme: {scheme or 'none'}")

    async with aiohttp.ClientSession() as session:
        async with session.get(url) as response:
            if not 200 <= response.status < 300:
                raise DownloadError(f"Failed to fetch image: {response.status}")
            data = await response.read()
            content_type = response.headers.get("Content-Type") or DOWNLOAD_DEFAULT_CONTENT_TYPE

    logger.info(f"Fetched {len(data)} bytes ({content_type}) for download proxy")
    return data, content_type
