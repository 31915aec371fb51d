"""Executor interface: the transport capability the client is built on.

The client never performs I/O itself.  It hands a fully merged
``RequestDescriptor`` to an executor, which is expected to perform the
request and eventually invoke ``descriptor.callback(error, body, meta)``
exactly once.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from yokozuna.models.descriptor import RequestDescriptor


@runtime_checkable
class Executor(Protocol):
    """Anything that accepts a descriptor and eventually calls it back."""

    def execute(self, descriptor: RequestDescriptor) -> None:
        """Perform the request described by ``descriptor``.

        Must not block.  Completion is reported solely through
        ``descriptor.callback``.
        """
