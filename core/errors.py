"""Error taxonomy for the Dev Content MCP.

Every failure a tool call can report is a ``GatewayError``. The server turns
these into MCP tool errors; nothing is swallowed into empty output.
"""

from typing import Any, Dict, Optional

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


class GatewayError(Exception):
    """Base class for structured tool failures."""

    kind = "GatewayError"

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.kind, "message": self.message, **self.context}

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class InvalidInput(GatewayError):
    """Malformed input, rejected before any network call."""

    kind = "InvalidInput"


class InvalidUrl(InvalidInput):
    kind = "InvalidUrl"

    def __init__(self, url: str, reason: str = "URL has no host"):
        super().__init__(f"{reason}: {url!r}", url=url)


class MissingIdentifier(InvalidInput):
    kind = "MissingIdentifier"

    def __init__(self, url: str, what: str):
        super().__init__(f"No {what} found in {url!r}", url=url)


class UpstreamEmpty(GatewayError):
    """A valid-looking identifier produced zero results upstream."""

    kind = "UpstreamEmpty"

    def __init__(self, service: str, identifier: str):
        super().__init__(
            f"{service} returned no results for id {identifier!r}",
            service=service,
            id=identifier,
        )


class UpstreamFailure(GatewayError):
    """Network, HTTP status or decoding failure talking to an external API.

    Raise with ``from exc`` so the underlying cause stays attached.
    """

    kind = "UpstreamFailure"

    def __init__(self, service: str, detail: str, status: Optional[int] = None):
        context: Dict[str, Any] = {"service": service}
        if status is not None:
            context["status"] = status
        super().__init__(f"{service}: {detail}", **context)


class NotFound(GatewayError):
    kind = "NotFound"

    def __init__(self, path: str):
        super().__init__(f"No document at {path}", path=path)


class UnsupportedHost(GatewayError):
    kind = "UnsupportedHost"

    def __init__(self, host: str):
        super().__init__(
            f"No adapter for host {host!r} and no fallback scraper configured",
            host=host,
        )
