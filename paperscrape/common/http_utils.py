"""Async HTTP helpers used by the web importers."""

from pathlib import Path
from typing import Dict, Any, Optional

import aiofiles
import aiohttp

from paperscrape.errors import HttpRequestError
from paperscrape.logging import get_logger

logger = get_logger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/118.0 Safari/537.36",
}


def _merge_headers(headers: Optional[Dict[str, str]]) -> Dict[str, str]:
    return {**DEFAULT_HEADERS, **(headers or {})}


async def get_text(
    url: str,
    headers: Optional[Dict[str, str]] = None,
    timeout: int = 30,
    proxy: Optional[str] = None,
) -> str:
    """
    Make an async GET request and return the body as text.

    Args:
        url: The URL to fetch
        headers: Extra request headers
        timeout: Request timeout in seconds
        proxy: Optional proxy URL

    Returns:
        Response body

    Raises:
        HttpRequestError: On any non-200 status
    """
    async with aiohttp.ClientSession(headers=_merge_headers(headers)) as session:
        async with session.get(
            url,
            proxy=proxy,
            timeout=aiohttp.ClientTimeout(total=timeout)
        ) as response:
            if response.status != 200:
                logger.error(f"GET {url} failed with status {response.status}")
                raise HttpRequestError(url, response.status)
            return await response.text()


async def get_json(
    url: str,
    headers: Optional[Dict[str, str]] = None,
    timeout: int = 30,
    proxy: Optional[str] = None,
) -> Any:
    """Same as `get_text` but decodes the body as JSON."""
    async with aiohttp.ClientSession(headers=_merge_headers(headers)) as session:
        async with session.get(
            url,
            proxy=proxy,
            timeout=aiohttp.ClientTimeout(total=timeout)
        ) as response:
            if response.status != 200:
                logger.error(f"GET {url} failed with status {response.status}")
                raise HttpRequestError(url, response.status)
            return await response.json(content_type=None)


async def download_file(
    url: str,
    destination: Path,
    headers: Optional[Dict[str, str]] = None,
    timeout: int = 30,
    proxy: Optional[str] = None,
    chunk_size: int = 64 * 1024,
) -> Path:
    """
    Stream `url` into `destination`, creating parent directories.

    Returns:
        The destination path
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    async with aiohttp.ClientSession(headers=_merge_headers(headers)) as session:
        async with session.get(
            url,
            proxy=proxy,
            timeout=aiohttp.ClientTimeout(total=timeout)
        ) as response:
            if response.status != 200:
                logger.error(f"Download of {url} failed with status {response.status}")
                raise HttpRequestError(url, response.status)
            async with aiofiles.open(destination, "wb") as f:
                async for chunk in response.content.iter_chunked(chunk_size):
                    await f.write(chunk)

    logger.info(f"Downloaded {url} to {destination}")
    return destination
