"""Response shaping: filtering, smart defaults, pagination and size limits."""

from shaping.assembler import assemble, summarize_accessory
from shaping.capabilities import CAPABILITY_MAP, characteristic_matches
from shaping.defaults import compute_defaults
from shaping.filters import (
    apply_filters,
    build_filter_description,
    expand_search_terms,
    is_controllable,
)
from shaping.models import Accessory, DisplaySpec, FilterSpec, ResponseEnvelope, text_block
from shaping.pagination import Page, paginate
from shaping.size_guard import SizeGuard

__all__ = [
    "Accessory",
    "CAPABILITY_MAP",
    "DisplaySpec",
    "FilterSpec",
    "Page",
    "ResponseEnvelope",
    "SizeGuard",
    "apply_filters",
    "assemble",
    "build_filter_description",
    "characteristic_matches",
    "compute_defaults",
    "expand_search_terms",
    "is_controllable",
    "paginate",
    "summarize_accessory",
    "text_block",
]
