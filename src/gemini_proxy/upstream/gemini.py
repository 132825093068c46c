"""Client side of the Gemini ``generateContent`` call."""
from __future__ import annotations
import logging
from typing import Any

import httpx

from gemini_proxy.common.config import Settings
from gemini_proxy.common.errors import UpstreamError
from gemini_proxy.common.schema import VariantPolicy

LOGGER = logging.getLogger("gemini_proxy.upstream")

def build_url(settings: Settings) -> str:
    return f"{settings.base_url}/models/{settings.model_id}:generateContent"

def build_payload(prompt: Any, policy: VariantPolicy, max_output_tokens: int) -> dict[str, Any]:
    """
    Build the upstream request body for one prompt.

    Structured mode asks Gemini for a JSON document as the whole output.
    Embedded mode leaves the output free-form so the model can wrap a JSON
    fragment in prose or a markdown fence.

    Args:
        prompt: Prompt text. ``None`` yields a part without ``text``.
        policy: Variant whose mode selects the generation config.
        max_output_tokens: Token cap for structured mode.
    """
    part = {} if prompt is None else {"text": prompt}
    payload: dict[str, Any] = {"contents": [{"role": "user", "parts": [part]}]}
    if policy.mode == "structured":
        payload["generationConfig"] = {
            "responseMimeType": "application/json",
            "maxOutputTokens": max_output_tokens,
        }
    return payload

def generate_content(settings: Settings, payload: dict[str, Any]) -> tuple[int, Any]:
    """
    POST the payload to Gemini and parse the body whatever the status.

    Returns:
        ``(status_code, parsed_json)``.

    Raises:
        UpstreamError: on transport failure or a body that is not JSON.
    """
    url = build_url(settings)
    try:
        with httpx.Client(timeout=settings.timeout) as client:
            r = client.post(
                url,
                params={"key": settings.api_key},
                headers={"Content-Type": "application/json"},
                json=payload,
            )
    except httpx.HTTPError as e:
        LOGGER.error("Gemini request failed: %s", e)
        raise UpstreamError("Internal server error.", error=str(e)) from e

    try:
        data = r.json()
    except ValueError as e:
        LOGGER.error("Gemini returned non-JSON body (status %s): %s", r.status_code, e)
        raise UpstreamError("Internal server error.", error=str(e)) from e
    return r.status_code, data

def extract_text(data: Any) -> str | None:
    """Return ``candidates[0].content.parts[0].text`` if present and non-empty."""
    if not isinstance(data, dict):
        return None
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    if not isinstance(text, str) or not text:
        return None
    return text

def upstream_error_message(data: Any) -> str | None:
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        message = data["error"].get("message")
        return message if isinstance(message, str) else None
    return None
