"""Client for Riak Search (Yokozuna) index administration and queries."""

__version__ = "0.1.0"
