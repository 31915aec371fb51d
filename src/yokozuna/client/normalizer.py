"""Response normalizer for query results.

Solr places facet counts, stats and grouping next to the ``response``
object instead of inside it.  The normalizer lifts those siblings into
``response`` so callers receive one self-contained result dict.
"""

from __future__ import annotations

import json
import logging
from typing import Any, TypeVar

from yokozuna.models.descriptor import Callback, RequestDescriptor
from yokozuna.transport.exceptions import ResponseDecodeError

logger = logging.getLogger(__name__)

_D = TypeVar("_D", bound=RequestDescriptor)

LIFTED_FIELDS = ("facet_counts", "stats", "grouped")


def normalize_search_body(raw: bytes | str | None) -> dict[str, Any]:
    """Parse a raw query response body and return its normalized ``response``.

    Args:
        raw: Response body as returned by the executor.

    Returns:
        The ``response`` object (``{}`` if absent) carrying ``facet_counts``,
        ``stats`` and ``grouped`` copied from the top level.  Siblings missing
        from the document are set to ``None``.

    Raises:
        ResponseDecodeError: If the body is not UTF-8 JSON.  Any other shape
            is accepted: a document or ``response`` that is not an object is
            treated as missing.
    """
    try:
        text = raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else raw
        document = json.loads(text)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise ResponseDecodeError(f"Malformed search response: {e}") from e

    if not isinstance(document, dict):
        document = {}

    response = document.get("response")
    if not response or not isinstance(response, dict):
        response = {}

    for field in LIFTED_FIELDS:
        response[field] = document.get(field)
    return response


def wrap_search_callback(callback: Callback) -> Callback:
    """Wrap ``callback`` so it receives a normalized query result.

    Executor errors are forwarded untouched.  A body that cannot be parsed is
    reported as ``(error, error, meta)`` with a ``ResponseDecodeError``.
    """

    def _normalizing_callback(error: Any, data: Any, meta: Any) -> None:
        if error:
            callback(error, data, meta)
            return

        try:
            response = normalize_search_body(data)
        except ResponseDecodeError as e:
            logger.warning("Discarding malformed search response: %s", e)
            callback(e, e, meta)
            return

        callback(None, response, meta)

    return _normalizing_callback


def install_normalizer(descriptor: _D) -> _D:
    """Return a copy of ``descriptor`` whose callback normalizes the result."""
    if descriptor.callback is None:
        return descriptor
    return descriptor.with_callback(wrap_search_callback(descriptor.callback))
