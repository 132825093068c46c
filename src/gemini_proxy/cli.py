"""Command line entry point.

- ``gemini-proxy serve``: run the FastAPI app under uvicorn.
- ``gemini-proxy ask --prompt "..."``: push one prompt through a variant and
  print the JSON response body.
"""
from __future__ import annotations
import argparse
import json
import logging
import sys

import uvicorn

from gemini_proxy.common.config import load_variants
from gemini_proxy.common.logging_setup import setup_logging
from gemini_proxy.common.schema import ProxyEvent
from gemini_proxy.handler.proxy import handle

LOGGER = logging.getLogger("gemini_proxy.cli")

def serve(host: str, port: int) -> None:
    uvicorn.run("gemini_proxy.serve.fastapi_app:app", host=host, port=port)

def ask(prompt: str, variant: str) -> int:
    """Run a prompt through ``variant``; return a process exit code."""
    variants = load_variants()
    if variant not in variants:
        LOGGER.error("Unknown variant %s (known: %s)", variant, ", ".join(sorted(variants)))
        return 2
    event = ProxyEvent(method="POST", body=json.dumps({"prompt": prompt}))
    result = handle(event, variants[variant])
    print(result.body)
    return 0 if result.status_code == 200 else 1

def main(argv: list[str] | None = None) -> None:
    setup_logging()
    ap = argparse.ArgumentParser(prog="gemini-proxy", description="Gemini prompt proxy")
    sub = ap.add_subparsers(dest="command", required=True)

    sp = sub.add_parser("serve", help="Serve all variants over HTTP")
    sp.add_argument("--host", default="127.0.0.1")
    sp.add_argument("--port", type=int, default=8888)

    ak = sub.add_parser("ask", help="Send one prompt and print the response")
    ak.add_argument("--prompt", required=True, help="Prompt text")
    ak.add_argument("--variant", default="gemini-proxy", help="Variant name")

    args = ap.parse_args(argv)
    if args.command == "serve":
        serve(args.host, args.port)
        return
    sys.exit(ask(args.prompt, args.variant))

if __name__ == "__main__":
    main()
