"""Yokozuna clients: callback and asyncio facades over an executor.

Quick start::

    from yokozuna.client import AsyncYokozunaClient
    from yokozuna.transport import HttpExecutor

    async with HttpExecutor("http://localhost:8098") as executor:
        client = AsyncYokozunaClient({}, executor)
        await client.create_index("books")
        await client.associate_index_with_bucket("books", "library")
        result = await client.find("books", "title:dune", rows=10)
        print(result["numFound"], result["facet_counts"])
"""

from yokozuna.client.client import (
    DEFAULT_SCHEMA,
    DISABLED_INDEX,
    AsyncYokozunaClient,
    SearchResult,
    YokozunaClient,
)

__all__ = ["DEFAULT_SCHEMA", "DISABLED_INDEX", "AsyncYokozunaClient", "SearchResult", "YokozunaClient"]
