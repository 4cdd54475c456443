"""HTTP API for dynswap."""
