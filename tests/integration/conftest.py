"""Integration test fixtures: a live Riak node with search enabled.

Expects a node to be running, e.g.:
    docker run -d -p 8098:8098 -e RIAK_SEARCH=true basho/riak-kv

Set ``YOKOZUNA_TEST_URL`` to point elsewhere.  Tests skip when the node is
unreachable.
"""

from __future__ import annotations

import os
import uuid

import httpx
import pytest

RIAK_URL = os.environ.get("YOKOZUNA_TEST_URL", "http://127.0.0.1:8098")


@pytest.fixture(scope="session")
def riak_url() -> str:
    try:
        resp = httpx.get(f"{RIAK_URL}/ping", timeout=2.0)
    except httpx.HTTPError:
        pytest.skip(f"Riak not reachable at {RIAK_URL}")
    if resp.status_code != 200:
        pytest.skip(f"Riak at {RIAK_URL} returned HTTP {resp.status_code}")
    return RIAK_URL


@pytest.fixture
def unique_name() -> str:
    return f"yz_test_{uuid.uuid4().hex[:8]}"

