"""Error taxonomy for the proxy pipeline.

Each error knows the HTTP status it maps to and the JSON body sent back to the
caller. The pipeline raises them internally and converts them at the top level.
"""
from __future__ import annotations
from typing import Any


class ProxyError(Exception):
    """Base class for failures that terminate one invocation."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None, **extra: Any) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.extra = extra

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"success": False, "message": self.message}
        body.update(self.extra)
        return body


class MethodNotAllowed(ProxyError):
    status_code = 405


class MalformedRequest(ProxyError):
    """Missing or unparseable body, or a missing required field."""

    status_code = 400


class ConfigurationError(ProxyError):
    """Deployment problem detected while serving a request (e.g. missing secret)."""

    status_code = 500


class UpstreamShapeError(ProxyError):
    """Upstream answered, but not with a usable candidate."""

    status_code = 500


class UpstreamError(ProxyError):
    """The outbound call failed or its body could not be parsed."""

    status_code = 500
