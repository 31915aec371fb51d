"""Yokozuna search clients: index administration and queries over an executor.

The clients translate each operation into a ``RequestDescriptor`` and hand it
to an injected executor; they never open connections themselves.

Usage::

    # Callback style
    client = YokozunaClient({"host": "riak1", "port": 8098}, executor)
    client.create_index("books", on_done)
    client.find("books", "title:dune", {"rows": 5}, on_result)

    # Async style
    async with HttpExecutor() as executor:
        client = AsyncYokozunaClient({}, executor)
        await client.create_index("books")
        result = await client.find("books", "title:dune", rows=5)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, overload

from yokozuna.client.normalizer import install_normalizer
from yokozuna.models.descriptor import (
    AnyRequest,
    AssociateIndexRequest,
    Callback,
    ClientDefaults,
    CreateIndexRequest,
    CreateSchemaRequest,
    DestroyIndexRequest,
    DisassociateIndexRequest,
    QueryRequest,
    RequestDescriptor,
    build_descriptor,
)
from yokozuna.models.response import ResponseMeta
from yokozuna.transport.base import Executor
from yokozuna.transport.exceptions import TransportError

if TYPE_CHECKING:
    from yokozuna.config.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA = "_yz_default"
"""Schema used by ``create_index`` when none is given."""

DISABLED_INDEX = "_dont_index_"
"""``search_index`` bucket property value that turns indexing off."""

SEARCH_RESOURCE = {"resource": "search"}
BUCKETS_RESOURCE = {"resource": "buckets"}

SearchResult = dict[str, Any]
"""Normalized query result: Solr's ``response`` plus facet/stats/grouping."""


# ═══════════════════════════════════════════════════════════════════════════════
# Callback client
# ═══════════════════════════════════════════════════════════════════════════════


class YokozunaClient:
    """Callback-style client for Riak Search (Yokozuna).

    Every operation returns ``None`` and reports completion through
    ``callback(error, result, meta)``, invoked by the executor.

    Args:
        options: Connection defaults.  Only ``host``, ``port`` and ``client``
            are read, and only when truthy.
        executor: An ``Executor`` or a plain callable taking a descriptor.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | None,
        executor: Executor | Callable[[RequestDescriptor], None],
    ) -> None:
        options = options or {}
        self._defaults = ClientDefaults(
            host=options.get("host") or None,
            port=options.get("port") or None,
            client=options.get("client") or None,
        )
        self._execute = executor.execute if isinstance(executor, Executor) else executor

    @classmethod
    def from_settings(cls, settings: Settings, executor: Executor) -> YokozunaClient:
        """Build a client whose defaults point at ``settings.connection``."""
        return cls(
            {"host": settings.connection.host, "port": settings.connection.port},
            executor,
        )

    @property
    def defaults(self) -> ClientDefaults:
        return self._defaults

    # ── Schemas ──

    def create_schema(self, name: str, schema_xml: str | bytes, callback: Callback) -> None:
        """Upload a Solr schema document under ``name``.

        Args:
            name: Schema name.
            schema_xml: The schema XML, sent verbatim.
            callback: ``callback(error, result, meta)``.
        """
        descriptor = build_descriptor(
            CreateSchemaRequest,
            self._defaults.as_layer(),
            SEARCH_RESOURCE,
            {
                "content_type": "application/xml",
                "method": "put",
                "callback": callback,
                "index": "schema",
                "operation": name,
                "data": schema_xml,
            },
        )
        self._dispatch(descriptor)

    # ── Indexes ──

    @overload
    def create_index(self, index: str, schema: Callback) -> None: ...

    @overload
    def create_index(self, index: str, schema: str, callback: Callback) -> None: ...

    def create_index(self, index: str, schema: str | Callback, callback: Callback | None = None) -> None:
        """Create search index ``index`` using ``schema``.

        May be called as ``create_index(index, callback)``, in which case the
        default schema (``_yz_default``) is used.
        """
        if callable(schema):
            callback = schema
            schema = DEFAULT_SCHEMA

        descriptor = build_descriptor(
            CreateIndexRequest,
            self._defaults.as_layer(),
            SEARCH_RESOURCE,
            {
                "method": "put",
                "callback": callback,
                "index": "index",
                "operation": index,
                "data": {"schema": schema},
            },
        )
        self._dispatch(descriptor)

    def destroy_index(self, index: str, callback: Callback) -> None:
        """Delete search index ``index``."""
        descriptor = build_descriptor(
            DestroyIndexRequest,
            self._defaults.as_layer(),
            SEARCH_RESOURCE,
            {"method": "delete", "callback": callback, "index": "index", "operation": index},
        )
        self._dispatch(descriptor)

    # ── Bucket association ──

    def associate_index_with_bucket(self, index: str, bucket: str, callback: Callback) -> None:
        """Index objects stored in ``bucket`` into search index ``index``."""
        descriptor = build_descriptor(
            AssociateIndexRequest,
            self._defaults.as_layer(),
            BUCKETS_RESOURCE,
            {
                "method": "put",
                "callback": callback,
                "index": bucket,
                "operation": "props",
                "data": {"props": {"search_index": index}},
            },
        )
        self._dispatch(descriptor)

    def disassociate_index_from_bucket(self, bucket: str, callback: Callback) -> None:
        """Stop indexing ``bucket``."""
        descriptor = build_descriptor(
            DisassociateIndexRequest,
            self._defaults.as_layer(),
            BUCKETS_RESOURCE,
            {
                "method": "put",
                "callback": callback,
                "index": bucket,
                "operation": "props",
                "data": {"props": {"search_index": DISABLED_INDEX}},
            },
        )
        self._dispatch(descriptor)

    # ── Query ──

    def find(
        self,
        index: str,
        query: str,
        options: Mapping[str, Any] | None,
        callback: Callback,
    ) -> None:
        """Query search index ``index``.

        Args:
            index: Search index name.
            query: Solr query string, passed through as ``q``.
            options: Any further Solr query parameters (``rows``, ``sort``,
                ``fq``, ``facet.field`` ...).  ``q`` and ``wt`` always win.
            callback: Receives ``(None, SearchResult, meta)`` on success.
        """
        descriptor = build_descriptor(
            QueryRequest,
            self._defaults.as_layer(),
            options,
            {"callback": callback, "index": index, "q": query, "wt": "json"},
        )
        self._dispatch(install_normalizer(descriptor))

    def _dispatch(self, descriptor: AnyRequest) -> None:
        logger.debug("Dispatching %s: %s %s", descriptor.kind, descriptor.method.upper(), descriptor.path)
        self._execute(descriptor)


# ═══════════════════════════════════════════════════════════════════════════════
# Async client (wraps YokozunaClient)
# ═══════════════════════════════════════════════════════════════════════════════


class AsyncYokozunaClient:
    """Asyncio client for Riak Search.

    Wraps :class:`YokozunaClient`; each call resolves a single-shot future
    from the executor callback.  Failures are raised as ``TransportError``
    (the node was unreachable or rejected the request) or
    ``ResponseDecodeError`` (a query returned a malformed body).

    Args:
        options: Connection defaults, as for :class:`YokozunaClient`.
        executor: The executor performing requests.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | None,
        executor: Executor | Callable[[RequestDescriptor], None],
    ) -> None:
        self._client = YokozunaClient(options, executor)

    @classmethod
    def from_settings(cls, settings: Settings, executor: Executor) -> AsyncYokozunaClient:
        return cls({"host": settings.connection.host, "port": settings.connection.port}, executor)

    async def create_schema(self, name: str, schema_xml: str | bytes) -> ResponseMeta | None:
        future, callback = _result_channel()
        self._client.create_schema(name, schema_xml, callback)
        return _meta_of(await future)

    async def create_index(self, index: str, schema: str = DEFAULT_SCHEMA) -> ResponseMeta | None:
        future, callback = _result_channel()
        self._client.create_index(index, schema, callback)
        return _meta_of(await future)

    async def destroy_index(self, index: str) -> ResponseMeta | None:
        future, callback = _result_channel()
        self._client.destroy_index(index, callback)
        return _meta_of(await future)

    async def associate_index_with_bucket(self, index: str, bucket: str) -> ResponseMeta | None:
        future, callback = _result_channel()
        self._client.associate_index_with_bucket(index, bucket, callback)
        return _meta_of(await future)

    async def disassociate_index_from_bucket(self, bucket: str) -> ResponseMeta | None:
        future, callback = _result_channel()
        self._client.disassociate_index_from_bucket(bucket, callback)
        return _meta_of(await future)

    async def find(self, index: str, query: str, **options: Any) -> SearchResult:
        """Query ``index`` and return the normalized result.

        Keyword arguments become Solr query parameters.  Use a dict unpack for
        dotted names: ``find("books", "*:*", **{"facet.field": "genre"})``.
        """
        future, callback = _result_channel()
        self._client.find(index, query, options, callback)
        result, _meta = await future
        return result  # type: ignore[no-any-return]


def _result_channel() -> tuple[asyncio.Future[tuple[Any, Any]], Callback]:
    """Create a future and a callback that settles it exactly once.

    The callback may be invoked from any thread.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[tuple[Any, Any]] = loop.create_future()

    def _settle(error: Any, result: Any, meta: Any) -> None:
        if future.done():
            return
        if not error:
            future.set_result((result, meta))
        elif isinstance(error, BaseException):
            future.set_exception(error)
        else:
            future.set_exception(TransportError(str(error)))

    def callback(error: Any, result: Any, meta: Any) -> None:
        loop.call_soon_threadsafe(_settle, error, result, meta)

    return future, callback


def _meta_of(outcome: tuple[Any, Any]) -> ResponseMeta | None:
    _result, meta = outcome
    return meta if isinstance(meta, ResponseMeta) else None
