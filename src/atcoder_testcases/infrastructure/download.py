"""Concurrent downloads with one progress bar per file."""

import asyncio
from dataclasses import dataclass, field
from typing import Optional, Sequence, TextIO

import httpx
from loguru import logger
from tqdm import tqdm

from atcoder_testcases.domain.exceptions import EncodingError, TransportError, UnexpectedStatusError

from .http_client import AsyncHTTPClient


@dataclass(frozen=True)
class DownloadRequest:
    name: str
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)


def download_with_progress(
    client: AsyncHTTPClient,
    requests: Sequence[DownloadRequest],
    progress_file: Optional[TextIO] = None,
) -> list[str]:
    """
    Download every request concurrently and decode the bodies as UTF-8.

    Results are in request order. All downloads run to completion; the
    first failure in request order is then raised.
    """
    if not requests:
        return []
    return asyncio.run(download_all(client, requests, progress_file))


async def download_all(
    client: AsyncHTTPClient,
    requests: Sequence[DownloadRequest],
    progress_file: Optional[TextIO] = None,
) -> list[str]:
    width = max((len(request.name) for request in requests), default=0)

    async with client.open() as http:
        results = await asyncio.gather(
            *(
                _download(http, request, position, width, progress_file, client.timeout)
                for position, request in enumerate(requests)
            ),
            return_exceptions=True,
        )

    for result in results:
        if isinstance(result, BaseException):
            raise result
    logger.info(f"Downloaded {len(results)} file(s)")
    return list(results)


async def _download(
    http: httpx.AsyncClient,
    request: DownloadRequest,
    position: int,
    width: int,
    progress_file: Optional[TextIO],
    timeout: float,
) -> str:
    bar = tqdm(
        desc=request.name.ljust(width),
        unit="B",
        unit_scale=True,
        position=position,
        file=progress_file,
        disable=progress_file is None,
    )
    try:
        # httpx applies its timeout per phase; this one bounds the whole transfer.
        content = await asyncio.wait_for(_fetch(http, request, bar), timeout)
    except asyncio.TimeoutError as e:
        raise TransportError(request.method, request.url, f"timed out after {timeout}s") from e
    except httpx.TransportError as e:
        raise TransportError(request.method, request.url, str(e) or type(e).__name__) from e
    finally:
        bar.close()

    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(request.name) from e


async def _fetch(http: httpx.AsyncClient, request: DownloadRequest, bar: tqdm) -> bytes:
    content = bytearray()
    async with http.stream(request.method, request.url, headers=request.headers) as response:
        if response.status_code != 200:
            await response.aread()
            raise UnexpectedStatusError(
                request.url,
                (200,),
                response.status_code,
                detail=f"could not download `{request.name}`",
            )

        length = response.headers.get("Content-Length")
        if length is not None and length.isdigit():
            bar.reset(total=int(length))

        async for chunk in response.aiter_bytes():
            content.extend(chunk)
            bar.update(len(chunk))
    return bytes(content)
