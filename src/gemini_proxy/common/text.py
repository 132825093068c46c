"""Text post-processing helpers."""
from __future__ import annotations

FENCE_PREFIX = "```json"
FENCE_SUFFIX = "```"

def strip_markdown_fence(text: str) -> str:
    """
    Remove a markdown ```json fence wrapped around embedded JSON.

    Prefix and suffix are matched literally and independently, so text carrying
    only one of the markers is partially stripped and markers in the middle of
    the text are left alone.

    Args:
        text: Model output.

    Returns:
        Text without the fence markers, whitespace-trimmed.
    """
    if text.startswith(FENCE_PREFIX):
        text = text[len(FENCE_PREFIX):]
    if text.endswith(FENCE_SUFFIX):
        text = text[: -len(FENCE_SUFFIX)]
    return text.strip()
