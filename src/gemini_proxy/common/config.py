"""Environment settings and the variant table."""
from __future__ import annotations
import os
from dataclasses import dataclass, fields
from typing import Any

import yaml

from gemini_proxy.common.schema import VariantPolicy

DEFAULT_MODEL_ID = "gemini-2.5-flash-preview-05-20"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MAX_OUTPUT_TOKENS = 4096

DEFAULT_VARIANTS: dict[str, VariantPolicy] = {
    "gemini-proxy": VariantPolicy(name="gemini-proxy", mode="embedded"),
    "gemini-recommendations-proxy": VariantPolicy(
        name="gemini-recommendations-proxy", mode="structured"
    ),
    "gemini-scoring-proxy": VariantPolicy(
        name="gemini-scoring-proxy",
        mode="embedded",
        strip_markdown_fence=True,
        require_prompt=True,
        distinguish_invalid_json=True,
        require_upstream_ok=True,
    ),
}

@dataclass(frozen=True)
class Settings:
    api_key: str | None
    model_id: str = DEFAULT_MODEL_ID
    base_url: str = DEFAULT_BASE_URL
    max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS
    timeout: float | None = None

def load_settings() -> Settings:
    """
    Read settings from the process environment.

    Called once per invocation so a secret added or rotated after import is
    picked up without a restart.
    """
    timeout = os.getenv("GEMINI_TIMEOUT")
    return Settings(
        api_key=os.getenv("GEMINI_API_KEY") or None,
        model_id=os.getenv("GEMINI_MODEL_ID", DEFAULT_MODEL_ID),
        base_url=os.getenv("GEMINI_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        max_output_tokens=int(os.getenv("MAX_OUTPUT_TOKENS", str(DEFAULT_MAX_OUTPUT_TOKENS))),
        timeout=float(timeout) if timeout else None,
    )

def load_cfg(path: str) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

def _policy_from_cfg(name: str, raw: dict[str, Any]) -> VariantPolicy:
    known = {f.name for f in fields(VariantPolicy)} - {"name"}
    unknown = set(raw) - known
    if unknown:
        raise ValueError(f"Unknown keys for variant {name!r}: {sorted(unknown)}")
    mode = raw.get("mode", "embedded")
    if mode not in ("structured", "embedded"):
        raise ValueError(f"Variant {name!r} has invalid mode {mode!r}")
    flags = {k: bool(v) for k, v in raw.items() if k != "mode"}
    return VariantPolicy(name=name, mode=mode, **flags)

def load_variants(path: str | None = None) -> dict[str, VariantPolicy]:
    """
    Load the variant table.

    Args:
        path: YAML file with a top-level ``variants`` mapping. Falls back to
            ``GEMINI_PROXY_VARIANTS`` and then to the built-in table.
    """
    path = path or os.getenv("GEMINI_PROXY_VARIANTS")
    if not path:
        return dict(DEFAULT_VARIANTS)
    cfg = load_cfg(path)
    variants = cfg.get("variants") or {}
    return {name: _policy_from_cfg(name, raw or {}) for name, raw in variants.items()}
