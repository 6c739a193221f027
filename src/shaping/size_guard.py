"""Response size guard.

Measures the serialized size of outgoing text blocks, warns when a response
gets large and truncates it when it exceeds the hard limit.

Truncation is best-effort: after the banner is added, every text block is cut
to an equal share of the limit minus a fixed overhead, without re-measuring.
The result can still exceed the limit slightly when there are many blocks.

Structured metadata shares the same limit: when text plus metadata would
exceed it, the hub data keys are dropped from the metadata.
"""

import json
import logging
from typing import Any

from config import ResponseLimits
from shaping.models import TextBlock

logger = logging.getLogger(__name__)

TRUNCATION_MARKER = "\n\n[TRUNCATED - Use pagination or summary mode for full data]"

# Metadata keys carrying hub data rather than counts or echoes
PAYLOAD_KEYS = (
    "accessories",
    "accessory",
    "rooms",
    "hubs",
    "methods",
    "schema",
    "result",
    "version",
    "categories",
)

# Characters reserved per block for the marker and JSON framing
BLOCK_OVERHEAD = 100


def measure(content: list[TextBlock]) -> int:
    """Serialized length of the content in characters."""
    return len(json.dumps(content, ensure_ascii=False, separators=(",", ":")))


def measure_meta(meta: dict[str, Any]) -> int:
    """Serialized length of structured metadata in characters."""
    return len(json.dumps(meta, ensure_ascii=False, separators=(",", ":"), default=str))


def truncation_banner(size: int, limit: int) -> str:
    return (
        f"⚠️ RESPONSE TRUNCATED: original size {size} chars exceeds limit of {limit} chars. "
        "Use pagination (page/limit), summary mode or metaOnly to reduce response size.\n\n"
    )


class SizeGuard:
    """Applies the configured size limits to tool responses."""

    def __init__(self, limits: ResponseLimits):
        self.limits = limits

    def check_response_size(self, content: list[TextBlock]) -> int:
        """Measure the response and warn when it crosses the warn threshold."""
        size = measure(content)
        if size > self.limits.warn_threshold:
            logger.warning(
                f"Large response detected ({size} chars, threshold "
                f"{self.limits.warn_threshold}) - consider using pagination or summary mode"
            )
        return size

    def truncate_response(self, content: list[TextBlock], original_size: int) -> list[TextBlock]:
        """Cut an oversized response down towards ``max_response_size``."""
        limit = self.limits.max_response_size
        if not self.limits.enable_truncation or original_size <= limit:
            return content

        result = [dict(block) for block in content]
        banner = truncation_banner(original_size, limit)
        first_text = next((b for b in result if b.get("type") == "text"), None)
        if first_text is not None:
            first_text["text"] = banner + first_text.get("text", "")
        else:
            result.insert(0, {"type": "text", "text": banner})

        if measure(result) > limit:
            budget = max(0, limit // len(result) - BLOCK_OVERHEAD)
            for block in result:
                text = block.get("text")
                if block.get("type") == "text" and text is not None and len(text) > budget:
                    block["text"] = text[:budget] + TRUNCATION_MARKER

        logger.warning(
            f"Response truncated due to size limit (original {original_size} chars, limit {limit})"
        )
        return result

    def process_response(self, content: list[TextBlock]) -> list[TextBlock]:
        """Measure, warn and truncate as configured."""
        size = self.check_response_size(content)
        return self.truncate_response(content, size)

    def bound_meta(self, meta: dict[str, Any], content_size: int) -> dict[str, Any]:
        """Drop hub data from metadata that would push the response past the limit.

        ``content_size`` is the size of the already processed text blocks. The
        metadata gets what is left of ``max_response_size``. Counts, pagination
        and filter echoes are kept; ``omitted`` lists the dropped keys.
        """
        if not self.limits.enable_truncation:
            return meta

        limit = self.limits.max_response_size
        size = measure_meta(meta)
        if content_size + size <= limit:
            return meta

        omitted = [key for key in meta if key in PAYLOAD_KEYS]
        if not omitted:
            return meta

        bounded = {key: value for key, value in meta.items() if key not in PAYLOAD_KEYS}
        bounded["truncated"] = True
        bounded["omitted"] = omitted
        logger.warning(
            f"Structured metadata reduced due to size limit "
            f"({size} chars, dropped {', '.join(omitted)})"
        )
        return bounded
