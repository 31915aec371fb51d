"""Request descriptors: the merged, per-call description of one request.

A descriptor is built by overlaying three layers of options, left to right:

  1. the client defaults (``ClientDefaults.as_layer()``),
  2. an operation-specific resource override (e.g. ``{"resource": "buckets"}``),
  3. the operation parameters (method, callback, routing fields, payload).

The overlay is shallow: a key defined by a later layer replaces the earlier
value wholesale, nested mappings included.

Each operation produces its own descriptor variant, tagged by ``kind``.  The
``index``/``operation`` routing fields are kept on every variant because
executors build the request path from them.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Literal, TypeVar, Union
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

Callback = Callable[[Any, Any, Any], None]
"""Completion handler invoked as ``callback(error, result, meta)``."""

QUERY_RESOURCE = "search/query"
DEFAULT_METHOD = "get"

_D = TypeVar("_D", bound="RequestDescriptor")


def merge_layers(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Shallow-merge option layers into a new dict.

    Later layers win on colliding keys.  ``None`` layers are skipped and no
    input mapping is modified.
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        if layer:
            merged.update(layer)
    return merged


class ClientDefaults(BaseModel):
    """Connection-independent defaults, fixed at client construction."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    resource: str = QUERY_RESOURCE
    method: str = DEFAULT_METHOD
    host: str | None = None
    port: int | None = None
    client: Any = None

    def as_layer(self) -> dict[str, Any]:
        """Return the defaults as a merge layer, omitting unset connection keys."""
        layer: dict[str, Any] = {"resource": self.resource, "method": self.method}
        for key in ("host", "port", "client"):
            value = getattr(self, key)
            if value is not None:
                layer[key] = value
        return layer


class RequestDescriptor(BaseModel):
    """Fully merged description of a single request.

    Unknown keys are kept (``model_extra``) so caller-supplied query options
    such as ``rows`` or ``fq`` reach the executor as query parameters.
    """

    model_config = ConfigDict(frozen=True, extra="allow", arbitrary_types_allowed=True)

    kind: str = "request"
    resource: str = QUERY_RESOURCE
    method: str = DEFAULT_METHOD
    host: str | None = None
    port: int | None = None
    client: Any = None
    content_type: str | None = None
    index: str | None = None
    operation: str | None = None
    data: Any = None
    q: str | None = None
    wt: str | None = None
    callback: Callback | None = Field(default=None, exclude=True)

    @property
    def path(self) -> str:
        """Request path, e.g. ``/search/index/books`` or ``/buckets/b1/props``."""
        segments = [self.resource.strip("/")]
        segments.extend(quote(str(s), safe="") for s in (self.index, self.operation) if s is not None)
        return "/" + "/".join(segments)

    def query_params(self) -> dict[str, Any]:
        """Caller-supplied extra options followed by the fixed ``q``/``wt`` pair."""
        params = dict(self.model_extra or {})
        if self.q is not None:
            params["q"] = self.q
        if self.wt is not None:
            params["wt"] = self.wt
        return params

    def with_callback(self: _D, callback: Callback) -> _D:
        """Return a copy of this descriptor with ``callback`` replaced."""
        return self.model_copy(update={"callback": callback})


class CreateSchemaRequest(RequestDescriptor):
    kind: Literal["create_schema"] = "create_schema"
    data: str | bytes


class CreateIndexRequest(RequestDescriptor):
    kind: Literal["create_index"] = "create_index"
    data: dict[str, str]


class DestroyIndexRequest(RequestDescriptor):
    kind: Literal["destroy_index"] = "destroy_index"


class AssociateIndexRequest(RequestDescriptor):
    kind: Literal["associate_index"] = "associate_index"
    data: dict[str, dict[str, str]]


class DisassociateIndexRequest(RequestDescriptor):
    kind: Literal["disassociate_index"] = "disassociate_index"
    data: dict[str, dict[str, str]]


class QueryRequest(RequestDescriptor):
    kind: Literal["query"] = "query"


AnyRequest = Union[
    CreateSchemaRequest,
    CreateIndexRequest,
    DestroyIndexRequest,
    AssociateIndexRequest,
    DisassociateIndexRequest,
    QueryRequest,
]


def build_descriptor(variant: type[_D], *layers: Mapping[str, Any] | None) -> _D:
    """Merge ``layers`` and validate the result as ``variant``."""
    return variant.model_validate(merge_layers(*layers))
