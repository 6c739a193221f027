"""Build the text and metadata envelope for accessory listings."""

import json
from typing import Any

from shaping.filters import is_controllable
from shaping.models import Accessory, FilterSpec, ResponseEnvelope, text_block
from shaping.pagination import Page


def pluralize(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def accessory_noun(count: int) -> str:
    return pluralize(count, "accessory", "accessories")


def summarize_accessory(accessory: Accessory) -> dict[str, Any]:
    """Reduced shape without nested services and characteristics."""
    return {
        "id": accessory.get("id"),
        "name": accessory.get("name"),
        "manufacturer": accessory.get("manufacturer"),
        "model": accessory.get("model"),
        "online": accessory.get("online"),
        "roomId": accessory.get("roomId"),
        "servicesCount": len(accessory.get("services") or []),
        "controllable": is_controllable(accessory),
    }


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def assemble(
    page: Page[Accessory],
    total_count: int,
    summary: bool,
    meta_only: bool,
    filters: FilterSpec,
    filter_desc: str,
) -> ResponseEnvelope:
    """Project one page of accessories into a response envelope."""
    noun = accessory_noun(total_count)

    meta: dict[str, Any] = {
        "totalCount": total_count,
        "totalPages": page.total_pages,
        "currentPage": page.page_num,
        "pageSize": page.page_size,
        "hasMore": page.has_more,
        "filters": {**filters.to_dict(), "summary": summary, "metaOnly": meta_only},
    }

    if meta_only:
        text = (
            f"Found {total_count} {noun}{filter_desc}: {page.total_pages} "
            f"{pluralize(page.total_pages, 'page', 'pages')} of up to {page.page_size}. "
            "Details omitted (metaOnly); narrow the filters or set metaOnly=false "
            "and use page/limit to browse."
        )
        return ResponseEnvelope(content=[text_block(text)], meta=meta)

    if summary:
        items = [summarize_accessory(a) for a in page.items]
    else:
        items = list(page.items)

    if total_count == 0:
        text = f"No accessories found{filter_desc}"
    else:
        text = (
            f"Page {page.page_num}/{page.total_pages}: "
            f"Showing {len(items)} of {total_count} {noun}{filter_desc}"
        )
        if page.has_more:
            text += f". Use page={page.page_num + 1} for more"

    meta["accessories"] = items
    return ResponseEnvelope(content=[text_block(text), text_block(to_json(items))], meta=meta)
