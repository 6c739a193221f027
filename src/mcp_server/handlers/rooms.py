"""Room and hub listing handlers."""

from typing import Any

from config import ResponseLimits
from hub.client import HubResult
from hub.connection import HubConnection
from mcp_server.handlers.common import PageArgs, call_upstream, parse_args, require_success
from shaping import ResponseEnvelope, paginate, text_block
from shaping.assembler import to_json

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20


class RoomHandlers:
    """Handlers for room and hub inventory tools."""

    def __init__(self, connection: HubConnection, limits: ResponseLimits):
        self.connection = connection
        self.limits = limits

    async def _list_page(self, kind: str, query: PageArgs, fetch) -> ResponseEnvelope:
        result: HubResult = await call_upstream(f"list {kind}", fetch())
        items = require_success(f"list {kind}", result)

        page = paginate(
            items,
            query.page if query.page is not None else DEFAULT_PAGE,
            query.limit if query.limit is not None else DEFAULT_LIMIT,
            self.limits.max_devices_per_page,
        )

        text = f"Found {len(items)} {kind} in the Spruthub system"
        if page.has_more:
            text += f". Page {page.page_num}/{page.total_pages}, use page={page.page_num + 1} for more"

        return ResponseEnvelope(
            content=[text_block(text), text_block(to_json(page.items))],
            meta={
                "totalCount": len(items),
                "totalPages": page.total_pages,
                "currentPage": page.page_num,
                "pageSize": page.page_size,
                "hasMore": page.has_more,
                kind: page.items,
            },
        )

    async def list_rooms(self, args: dict[str, Any]) -> ResponseEnvelope:
        """List rooms, one page at a time."""
        query = parse_args(PageArgs, args)
        client = await self.connection.ensure_connected()
        return await self._list_page("rooms", query, client.list_rooms)

    async def list_hubs(self, args: dict[str, Any]) -> ResponseEnvelope:
        """List hubs, one page at a time."""
        query = parse_args(PageArgs, args)
        client = await self.connection.ensure_connected()
        return await self._list_page("hubs", query, client.list_hubs)
