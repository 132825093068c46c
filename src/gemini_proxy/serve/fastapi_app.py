"""FastAPI front for the proxy variants.

Endpoints:
- GET /health
- ANY /.netlify/functions/{variant}  { "prompt": "..." }
- ANY /api/{variant}                 (alias)
"""
from __future__ import annotations
import logging

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from gemini_proxy.common.config import load_settings, load_variants
from gemini_proxy.common.logging_setup import setup_logging
from gemini_proxy.common.schema import ProxyEvent
from gemini_proxy.handler.proxy import handle

LOGGER = logging.getLogger("gemini_proxy.app")
setup_logging()

METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

class HealthOut(BaseModel):
    status: str
    model: str
    variants: list[str]

app = FastAPI()

@app.on_event("startup")
def _log_variants_on_startup() -> None:
    """Log the mounted variants and warn if the secret is missing."""
    variants = load_variants()
    LOGGER.info("Serving proxy variants: %s", ", ".join(sorted(variants)))
    if not load_settings().api_key:
        LOGGER.warning("GEMINI_API_KEY is not set; proxy calls will fail with 500")

@app.get("/health", response_model=HealthOut)
def health() -> HealthOut:
    return HealthOut(status="ok", model=load_settings().model_id, variants=sorted(load_variants()))

async def _proxy(variant: str, request: Request) -> Response:
    policy = load_variants().get(variant)
    if policy is None:
        return JSONResponse(
            status_code=404,
            content={"success": False, "message": f"Unknown proxy variant: {variant}"},
        )
    raw = await request.body()
    event = ProxyEvent(method=request.method, body=raw or None)
    result = await run_in_threadpool(handle, event, policy)
    return Response(content=result.body, status_code=result.status_code, headers=result.headers)

@app.api_route("/.netlify/functions/{variant}", methods=METHODS)
async def netlify_function(variant: str, request: Request) -> Response:
    return await _proxy(variant, request)

@app.api_route("/api/{variant}", methods=METHODS)
async def api_function(variant: str, request: Request) -> Response:
    return await _proxy(variant, request)
