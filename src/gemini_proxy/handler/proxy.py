"""The request pipeline shared by every proxy variant.

validate method -> parse body -> read secret -> check prompt -> call Gemini ->
validate shape -> post-process text -> respond
"""
from __future__ import annotations
import json
import logging
from typing import Any

from gemini_proxy.common.config import Settings, load_settings
from gemini_proxy.common.errors import (
    ConfigurationError,
    MalformedRequest,
    MethodNotAllowed,
    ProxyError,
    UpstreamShapeError,
)
from gemini_proxy.common.schema import ProxyEvent, ProxyResult, VariantPolicy
from gemini_proxy.common.text import strip_markdown_fence
from gemini_proxy.upstream.gemini import (
    build_payload,
    extract_text,
    generate_content,
    upstream_error_message,
)

LOGGER = logging.getLogger("gemini_proxy.handler")


def _parse_body(body: str | bytes | None, policy: VariantPolicy) -> dict[str, Any]:
    if not body:
        raise MalformedRequest("Request body is missing.")
    message = (
        "Invalid JSON in request body."
        if policy.distinguish_invalid_json
        else "Request body could not be parsed."
    )
    try:
        parsed = json.loads(body)
    except ValueError as e:
        raise MalformedRequest(message, error=str(e)) from e
    if not isinstance(parsed, dict):
        raise MalformedRequest(message, error="Expected a JSON object.")
    return parsed


def _shape_error(data: Any, status_code: int | None = None) -> UpstreamShapeError:
    extra: dict[str, Any] = {"details": data}
    upstream_message = upstream_error_message(data)
    if upstream_message:
        extra["error"] = upstream_message
    return UpstreamShapeError(
        "Failed to get a valid response from Gemini API.", status_code=status_code, **extra
    )


def _run(event: ProxyEvent, policy: VariantPolicy, settings: Settings) -> ProxyResult:
    if event.method != "POST":
        raise MethodNotAllowed("Only POST requests are allowed.")

    request_body = _parse_body(event.body, policy)
    prompt = request_body.get("prompt")

    if not settings.api_key:
        LOGGER.error("GEMINI_API_KEY is not set in the environment.")
        raise ConfigurationError("Server configuration error: API key missing.")

    if policy.require_prompt and not prompt:
        raise MalformedRequest("Missing prompt.")

    payload = build_payload(prompt, policy, settings.max_output_tokens)
    status, data = generate_content(settings, payload)

    if policy.require_upstream_ok and not 200 <= status < 300:
        LOGGER.error("Gemini API returned status %s: %s", status, data)
        raise _shape_error(data, status_code=status)

    text = extract_text(data)
    if text is None:
        LOGGER.error("Unexpected Gemini API response structure: %s", data)
        raise _shape_error(data)

    if policy.strip_markdown_fence:
        text = strip_markdown_fence(text)
    return ProxyResult.json(200, {"success": True, "response": text})


def handle(event: ProxyEvent, policy: VariantPolicy, settings: Settings | None = None) -> ProxyResult:
    """
    Run one invocation through the pipeline.

    Never raises: every failure is turned into a JSON error response.

    Args:
        event: Inbound method and raw body.
        policy: Variant switches (generation mode, fence stripping, checks).
        settings: Environment settings; read fresh when omitted.
    """
    try:
        return _run(event, policy, settings or load_settings())
    except ProxyError as e:
        if e.status_code >= 500:
            LOGGER.error("[%s] %s (%s)", policy.name, e.message, e.status_code)
        else:
            LOGGER.warning("[%s] %s (%s)", policy.name, e.message, e.status_code)
        return ProxyResult.json(e.status_code, e.to_body())
    except Exception as e:
        LOGGER.exception("[%s] Unhandled error in proxy handler", policy.name)
        return ProxyResult.json(
            500, {"success": False, "message": "Internal server error.", "error": str(e)}
        )
