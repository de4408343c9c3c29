"""
Resource fetch and download, with httpx.MockTransport standing in for the network.
"""

import asyncio
from pathlib import Path

import httpx
import pytest

from core.errors import AppError, DownloadError
from utils.download import download, fetch_resource

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, content=PNG_BYTES)


def test_fetch_requires_url() -> None:
    with pytest.raises(AppError, match="Resource URL not provided"):
        asyncio.run(fetch_resource(""))


def test_fetch_returns_body() -> None:
    async def run() -> bytes:
        async with _client(_ok) as client:
            return await fetch_resource("https://cdn.example.com/a.png", client=client)

    assert asyncio.run(run()) == PNG_BYTES


def test_fetch_non_success_raises_download_error() -> None:
    async def run() -> bytes:
        async with _client(lambda request: httpx.Response(404)) as client:
            return await fetch_resource("https://cdn.example.com/missing.png", client=client)

    with pytest.raises(DownloadError, match="Failed to fetch resource: Not Found"):
        asyncio.run(run())


def test_fetch_unreachable_host_is_gateway_error() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async def run() -> bytes:
        async with _client(refuse) as client:
            return await fetch_resource("https://cdn.example.com/a.png", client=client)

    with pytest.raises(DownloadError) as info:
        asyncio.run(run())
    assert info.value.message == "Failed to fetch resource: connection refused"
    assert info.value.status_code == 502
    assert isinstance(info.value.__cause__, httpx.ConnectError)


def test_download_writes_normalised_file(tmp_path: Path) -> None:
    async def run() -> Path:
        async with _client(_ok) as client:
            return await download(
                "https://cdn.example.com/a.png", "summer trip", tmp_path / "out", client=client
            )

    target = asyncio.run(run())
    assert target == tmp_path / "out" / "summer_trip.png"
    assert target.read_bytes() == PNG_BYTES


@pytest.mark.parametrize(
    "url",
    [
        "http://169.254.169.254/latest/meta-data/",
        "http://127.0.0.1:8000/health",
        "http://10.0.0.5/internal.png",
        "http://[::1]/a.png",
        "file:///etc/passwd",
        "ftp://cdn.example.com/a.png",
    ],
)
def test_fetch_rejects_non_public_urls(url: str) -> None:
    requests: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, content=PNG_BYTES)

    async def run() -> bytes:
        async with _client(record) as client:
            return await fetch_resource(url, client=client)

    with pytest.raises(AppError) as info:
        asyncio.run(run())
    assert info.value.status_code == 400
    assert requests == []


def test_fetch_rejects_hostname_resolving_to_private_address(monkeypatch) -> None:
    async def resolve(host: str) -> list[str]:
        return ["192.168.1.10"]

    monkeypatch.setattr("utils.download._resolve_addresses", resolve)

    async def run() -> bytes:
        async with _client(_ok) as client:
            return await fetch_resource("https://intranet.example.com/a.png", client=client)

    with pytest.raises(AppError, match="non-public address"):
        asyncio.run(run())


def test_fetch_checks_every_redirect_hop() -> None:
    def redirect_inward(request: httpx.Request) -> httpx.Response:
        if request.url.host == "cdn.example.com":
            return httpx.Response(302, headers={"Location": "http://169.254.169.254/latest/"})
        return httpx.Response(200, content=b"secret")

    async def run() -> bytes:
        async with _client(redirect_inward) as client:
            return await fetch_resource("https://cdn.example.com/a.png", client=client)

    with pytest.raises(AppError, match="non-public address"):
        asyncio.run(run())


def test_fetch_follows_public_redirects() -> None:
    def moved(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/old.png":
            return httpx.Response(301, headers={"Location": "/new.png"})
        return httpx.Response(200, content=PNG_BYTES)

    async def run() -> bytes:
        async with _client(moved) as client:
            return await fetch_resource("https://cdn.example.com/old.png", client=client)

    assert asyncio.run(run()) == PNG_BYTES
