"""HTTP executor: performs request descriptors with ``httpx``.

Usage::

    async with HttpExecutor("http://localhost:8098") as executor:
        client = AsyncYokozunaClient({}, executor)
        await client.create_index("books")
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

import httpx

from yokozuna.models.descriptor import RequestDescriptor
from yokozuna.models.response import ResponseMeta
from yokozuna.transport.exceptions import TransportError

logger = logging.getLogger(__name__)


class HttpExecutor:
    """Executor backed by ``httpx.AsyncClient``.

    ``execute()`` schedules one task per descriptor on the running event loop
    and returns immediately.  The task invokes ``descriptor.callback`` once
    with ``(error, body, meta)``:

      - ``(None, body_bytes, meta)`` for 2xx/3xx responses,
      - ``(TransportError, body_bytes, meta)`` for 4xx/5xx responses,
      - ``(TransportError, None, meta)`` when no response arrived.

    A descriptor's ``client`` (an ``httpx.AsyncClient``) is used in place of
    the executor's own, and its ``host``/``port`` replace those of
    ``base_url``.

    Args:
        base_url: Riak HTTP endpoint, e.g. ``"http://localhost:8098"``.
        timeout: HTTP request timeout in seconds.
        client: Optional shared ``httpx.AsyncClient``; not closed by ``aclose()``.
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8098",
        *,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = httpx.URL(base_url.rstrip("/"))
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None
        self._pending: set[asyncio.Task[None]] = set()

    async def __aenter__(self) -> HttpExecutor:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Wait for in-flight requests, then close the owned HTTP client."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def execute(self, descriptor: RequestDescriptor) -> None:
        """Schedule ``descriptor`` on the running event loop."""
        task = asyncio.get_running_loop().create_task(self.send(descriptor))
        self._pending.add(task)
        task.add_done_callback(self._on_done)

    async def send(self, descriptor: RequestDescriptor) -> None:
        """Perform ``descriptor`` and invoke its callback."""
        callback = descriptor.callback
        method = descriptor.method.upper()
        meta = ResponseMeta(method=method, url=descriptor.path)

        client = descriptor.client if isinstance(descriptor.client, httpx.AsyncClient) else self._http()
        try:
            url = self.url_for(descriptor)
            meta = ResponseMeta(method=method, url=str(url))
            start = time.monotonic()
            resp = await client.request(
                method,
                url,
                params=descriptor.query_params() or None,
                **self._body_kwargs(descriptor),
            )
            took_ms = int((time.monotonic() - start) * 1000)
        except (httpx.HTTPError, httpx.InvalidURL, TypeError, ValueError) as e:
            logger.warning("Riak request %s %s failed: %s", method, meta.url, e)
            if callback is not None:
                callback(TransportError(f"Riak request failed: {e}"), None, meta)
            return

        meta = ResponseMeta(
            method=method,
            url=str(resp.request.url),
            status_code=resp.status_code,
            headers=dict(resp.headers),
            took_ms=took_ms,
        )
        body = resp.content

        error: TransportError | None = None
        if resp.status_code >= 400:
            logger.warning("Riak returned HTTP %s for %s %s", resp.status_code, method, url)
            error = TransportError(
                f"Riak returned HTTP {resp.status_code}",
                status_code=resp.status_code,
                body=body,
            )

        if callback is not None:
            callback(error, body, meta)

    def url_for(self, descriptor: RequestDescriptor) -> httpx.URL:
        """Absolute URL for ``descriptor``, without query parameters."""
        return self._base_url.copy_with(
            host=descriptor.host or self._base_url.host,
            port=descriptor.port or self._base_url.port,
            path=self._base_url.path.rstrip("/") + descriptor.path,
        )

    # ── Helpers ──────────────────────────────────────────────────────────

    def _on_done(self, task: asyncio.Task[None]) -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Riak request callback raised", exc_info=task.exception())

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self._timeout))
        return self._client

    @staticmethod
    def _body_kwargs(descriptor: RequestDescriptor) -> dict[str, Any]:
        """Request body arguments: text/bytes verbatim, anything else as JSON."""
        data = descriptor.data
        if data is None:
            return {}
        if isinstance(data, (str, bytes)):
            headers = {"Content-Type": descriptor.content_type} if descriptor.content_type else {}
            return {"content": data, "headers": headers}
        kwargs: dict[str, Any] = {"json": data}
        if descriptor.content_type:
            kwargs["headers"] = {"Content-Type": descriptor.content_type}
        return kwargs
