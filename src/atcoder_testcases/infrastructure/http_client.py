"""HTTP clients sharing one cookie jar and reporting to a shell."""

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Collection, Mapping, Optional

import httpx
from loguru import logger

from atcoder_testcases.domain.exceptions import TransportError, UnexpectedStatusError

from .cookies import CookieStorage
from .shell import Shell, StatusCodeColor


class HTTPClient:
    """Blocking client used for the site pages and the archive listing.

    Every request is announced to the shell, and every response is
    reported with a colour derived from the statuses the caller expects.
    ``timeout`` bounds each request as a whole, body included.
    """

    def __init__(self, client: httpx.Client, shell: Shell, timeout: Optional[float] = None):
        self.client = client
        self.shell = shell
        self.timeout = timeout

    def send(
        self,
        method: str,
        url: str,
        *,
        passing: Collection[int] = (200,),
        warning: Collection[int] = (),
        accept: Optional[Collection[int]] = None,
        check: bool = True,
        bearer: Optional[str] = None,
        data: Optional[Mapping[str, str]] = None,
        json: Optional[Any] = None,
    ) -> httpx.Response:
        """
        Send a request.

        ``passing`` and ``warning`` only pick the colour of the reported
        status. With ``check`` set, a status outside ``accept`` (by default
        ``passing`` and ``warning``) raises ``UnexpectedStatusError``.
        """
        if accept is None:
            accept = (*passing, *warning)
        headers = {"Authorization": f"Bearer {bearer}"} if bearer else None

        self.shell.on_request(method, url)
        try:
            request = self.client.build_request(method, url, headers=headers, data=data, json=json)
            response = self._receive(request)
        except httpx.TransportError as e:
            raise TransportError(method, url, str(e) or type(e).__name__) from e

        color = StatusCodeColor.classify(response.status_code, passing, warning)
        self.shell.on_response(response.status_code, color)
        logger.debug(f"{method} {url} -> {response.status_code}")

        if check and response.status_code not in accept:
            raise UnexpectedStatusError(url, accept, response.status_code)
        return response

    def _receive(self, request: httpx.Request) -> httpx.Response:
        deadline = None if self.timeout is None else time.monotonic() + self.timeout
        response = self.client.send(request, stream=True)
        try:
            body = bytearray()
            for chunk in response.iter_raw():
                body.extend(chunk)
                if deadline is not None and time.monotonic() > deadline:
                    raise TransportError(
                        request.method, str(request.url), f"timed out after {self.timeout}s"
                    )
        finally:
            response.close()
        return httpx.Response(
            response.status_code,
            headers=response.headers,
            content=bytes(body),
            request=request,
        )

    def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return self.send("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return self.send("POST", url, **kwargs)

    def close(self) -> None:
        self.client.close()


class AsyncHTTPClient:
    """Factory of async clients for concurrent downloads.

    Async clients are bound to the event loop they run in, so one is
    opened per download batch. Cookies, headers and timeout are the same
    as those of the blocking client.
    """

    def __init__(
        self,
        cookies: CookieStorage,
        headers: Mapping[str, str],
        timeout: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.cookies = cookies
        self.headers = dict(headers)
        self.timeout = timeout
        self.transport = transport

    @asynccontextmanager
    async def open(self) -> AsyncIterator[httpx.AsyncClient]:
        async with httpx.AsyncClient(
            cookies=self.cookies,
            headers=self.headers,
            timeout=self.timeout,
            follow_redirects=False,
            transport=self.transport,
        ) as client:
            yield client


def build_clients(
    cookies: CookieStorage,
    shell: Shell,
    user_agent: str,
    timeout: float,
    transport: Optional[httpx.BaseTransport] = None,
) -> tuple[HTTPClient, AsyncHTTPClient]:
    """
    Build the blocking and async clients over one cookie jar.

    ``transport`` replaces the network for both clients (tests pass an
    ``httpx.MockTransport``, which serves either side).
    """
    headers = {"User-Agent": user_agent}
    client = httpx.Client(
        cookies=cookies,
        headers=headers,
        timeout=timeout,
        follow_redirects=False,
        transport=transport,
    )
    async_transport = transport if isinstance(transport, httpx.AsyncBaseTransport) else None
    return (
        HTTPClient(client, shell, timeout),
        AsyncHTTPClient(cookies, headers, timeout, async_transport),
    )
