"""
Core logic for the Dev Content MCP.

    classifier    Tag search result metadata with a known shape
    qa            Assemble a Stack Overflow question and its answers
    thread        Flatten a discussion comment tree into ordered blocks
    dispatch      Route a URL to the adapter for its host
    errors        Structured failures reported to the tool caller

Only the error types are re-exported here; import the other modules
directly (they depend on ``api``, which itself depends on ``core.errors``).
"""

from core.errors import (
    GatewayError,
    InvalidInput,
    InvalidUrl,
    MissingIdentifier,
    NotFound,
    UnsupportedHost,
    UpstreamEmpty,
    UpstreamFailure,
)

__all__ = [
    "GatewayError",
    "InvalidInput",
    "InvalidUrl",
    "MissingIdentifier",
    "UpstreamEmpty",
    "UpstreamFailure",
    "NotFound",
    "UnsupportedHost",
]
