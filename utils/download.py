"""
Resource download: fetch a URL with httpx and hand back the bytes or write
them to disk under a normalised filename.

Only public http(s) hosts are fetched. Every redirect hop is checked again
before it is followed.
"""

import asyncio
import ipaddress
import socket
from pathlib import Path
from urllib.parse import urlparse

import httpx

from core.config import get_settings
from core.errors import AppError, DownloadError, handle_error
from utils.images import download_filename
from utils.logging import get_logger

logger = get_logger(__name__)

ALLOWED_SCHEMES = ("http", "https")
MAX_REDIRECTS = 5


async def fetch_resource(url: str, client: httpx.AsyncClient | None = None) -> bytes:
    """
    GET `url` and return the body.
    Raises AppError for a missing or non-public URL, DownloadError for a
    non-2xx answer or an unreachable host.
    """
    if not url:
        raise AppError("Resource URL not provided! You need to provide one")
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=get_settings().DOWNLOAD_TIMEOUT_SECONDS)
    try:
        response = await _get_public(client, url)
        if not response.is_success:
            raise DownloadError(f"Failed to fetch resource: {response.reason_phrase}")
        logger.info("resource_fetched", extra={"url": url, "bytes": len(response.content)})
        return response.content
    except httpx.TransportError as e:
        logger.warning("resource_unreachable", extra={"url": url, "error": str(e)})
        raise DownloadError(f"Failed to fetch resource: {e}") from e
    except Exception as e:
        handle_error(e)
    finally:
        if owns_client:
            await client.aclose()


async def _get_public(client: httpx.AsyncClient, url: str) -> httpx.Response:
    for _ in range(MAX_REDIRECTS + 1):
        await ensure_public_url(url)
        response = await client.get(url, follow_redirects=False)
        if response.next_request is None:
            return response
        url = str(response.next_request.url)
    raise DownloadError("Failed to fetch resource: too many redirects")


async def ensure_public_url(url: str) -> None:
    """Reject non-http(s) URLs and hosts that resolve to private, loopback or link-local addresses."""
    parsed = urlparse(url)
    if parsed.scheme not in ALLOWED_SCHEMES or not parsed.hostname:
        raise AppError("Resource URL must be an http(s) URL")
    host = parsed.hostname
    try:
        addresses = [ipaddress.ip_address(host)]
    except ValueError:
        addresses = [ipaddress.ip_address(a) for a in await _resolve_addresses(host)]
    for address in addresses:
        if not address.is_global or address.is_multicast:
            logger.warning("resource_host_blocked", extra={"host": host, "address": str(address)})
            raise AppError("Resource URL points to a non-public address")


async def _resolve_addresses(host: str) -> list[str]:
    loop = asyncio.get_running_loop()
    try:
        infos = await loop.getaddrinfo(host, None, type=socket.SOCK_STREAM)
    except socket.gaierror as e:
        raise DownloadError(f"Failed to fetch resource: cannot resolve {host}") from e
    # strip IPv6 zone ids
    return [info[4][0].split("%", 1)[0] for info in infos]


async def download(
    url: str,
    filename: str | None,
    directory: str | Path = ".",
    client: httpx.AsyncClient | None = None,
) -> Path:
    """Fetch `url` and save it as `directory/<filename>.png`; returns the written path."""
    content = await fetch_resource(url, client=client)
    target = Path(directory) / download_filename(filename, url)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(content)
    logger.info("resource_saved", extra={"path": str(target)})
    return target
