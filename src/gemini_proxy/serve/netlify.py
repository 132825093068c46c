"""Netlify Functions / AWS Lambda entry points.

Each variant gets a module-level callable taking the ``(event, context)`` pair
Netlify passes. Point a function file at one of them, e.g.
``from gemini_proxy.serve.netlify import gemini_proxy as handler``.
"""
from __future__ import annotations
import base64
import logging
from typing import Any, Callable

from gemini_proxy.common.config import load_variants
from gemini_proxy.common.logging_setup import setup_logging
from gemini_proxy.common.schema import ProxyEvent, ProxyResult
from gemini_proxy.handler.proxy import handle

LOGGER = logging.getLogger("gemini_proxy.netlify")
setup_logging()

NetlifyHandler = Callable[[dict[str, Any], Any], dict[str, Any]]

def event_from_netlify(event: dict[str, Any]) -> ProxyEvent:
    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        body = base64.b64decode(body, validate=True)
    return ProxyEvent(method=event.get("httpMethod") or "", body=body)

def make_handler(variant: str) -> NetlifyHandler:
    """
    Build the ``(event, context)`` handler for a named variant.

    The variant table is resolved on each call, like the rest of the
    configuration.
    """
    def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
        policy = load_variants().get(variant)
        if policy is None:
            LOGGER.error("Unknown proxy variant: %s", variant)
            return ProxyResult.json(
                404, {"success": False, "message": f"Unknown proxy variant: {variant}"}
            ).to_netlify()
        LOGGER.debug("[%s] %s invocation", variant, event.get("httpMethod"))
        try:
            proxy_event = event_from_netlify(event)
        except ValueError as e:
            LOGGER.warning("[%s] Undecodable base64 body: %s", variant, e)
            return ProxyResult.json(
                400, {"success": False, "message": "Request body could not be parsed.", "error": str(e)}
            ).to_netlify()
        return handle(proxy_event, policy).to_netlify()

    handler.__name__ = variant.replace("-", "_")
    return handler

gemini_proxy = make_handler("gemini-proxy")
gemini_recommendations_proxy = make_handler("gemini-recommendations-proxy")
gemini_scoring_proxy = make_handler("gemini-scoring-proxy")
