"""Dataclasses for request/response and policy types."""
from __future__ import annotations
import json
from dataclasses import dataclass, field
from typing import Any, Literal

JSON_HEADERS = {"Content-Type": "application/json"}

GenerationMode = Literal["structured", "embedded"]

@dataclass
class ProxyEvent:
    """Inbound request as seen by the pipeline; a bytes body must be UTF-8 JSON."""
    method: str
    body: str | bytes | None = None

@dataclass
class ProxyResult:
    """Outbound response; ``body`` is already JSON-encoded."""
    status_code: int
    body: str
    headers: dict[str, str] = field(default_factory=lambda: dict(JSON_HEADERS))

    @classmethod
    def json(cls, status_code: int, payload: dict[str, Any]) -> "ProxyResult":
        return cls(status_code=status_code, body=json.dumps(payload))

    def to_netlify(self) -> dict[str, Any]:
        return {"statusCode": self.status_code, "body": self.body, "headers": dict(self.headers)}

@dataclass(frozen=True)
class VariantPolicy:
    """Per-endpoint behavior switches for the shared pipeline."""
    name: str
    mode: GenerationMode = "embedded"
    strip_markdown_fence: bool = False
    require_prompt: bool = False
    distinguish_invalid_json: bool = False
    require_upstream_ok: bool = False
