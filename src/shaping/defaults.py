"""Smart defaults for display parameters.

Large result sets get compact output automatically. Only fields the caller
left unset are filled, with one exception: page sizes above
``REDUCED_PAGE_SIZE`` are capped once the result set is large.
"""

import logging
from dataclasses import replace

from config import ResponseLimits
from shaping.models import DisplaySpec

logger = logging.getLogger(__name__)

# Result counts above which the page size is reduced / only metadata is sent
LARGE_RESULT_COUNT = 50
HUGE_RESULT_COUNT = 100
REDUCED_PAGE_SIZE = 10


def compute_defaults(
    filtered_count: int,
    requested: DisplaySpec,
    limits: ResponseLimits,
) -> DisplaySpec:
    """Fill unset display fields based on how many accessories matched."""
    if not limits.force_smart_defaults:
        return requested

    resolved = requested

    if filtered_count > limits.auto_summary_threshold and requested.summary is None:
        resolved = replace(resolved, summary=True)
        logger.info(
            f"Smart default: summary mode for {filtered_count} accessories "
            f"(threshold {limits.auto_summary_threshold})"
        )

    if filtered_count > LARGE_RESULT_COUNT and (
        requested.limit is None or requested.limit > REDUCED_PAGE_SIZE
    ):
        new_limit = min(
            requested.limit if requested.limit is not None else REDUCED_PAGE_SIZE,
            REDUCED_PAGE_SIZE,
        )
        resolved = replace(resolved, limit=new_limit)
        logger.info(f"Smart default: page size {new_limit} for {filtered_count} accessories")

    if filtered_count > HUGE_RESULT_COUNT and requested.meta_only is None:
        resolved = replace(resolved, meta_only=True)
        logger.info(f"Smart default: metadata only for {filtered_count} accessories")

    return resolved
