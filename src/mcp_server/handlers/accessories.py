"""Accessory listing, counting and lookup handlers.

``list_accessories`` runs the full shaping pipeline: fetch a fresh inventory,
filter it, fill smart defaults from the filtered size, paginate and build the
response envelope. Size limits are applied by the server on the way out.
"""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from config import ResponseLimits
from hub.client import SprutClient
from hub.connection import HubConnection
from mcp_server.handlers.common import PageArgs, call_upstream, parse_args, require_success
from shaping import (
    DisplaySpec,
    FilterSpec,
    ResponseEnvelope,
    apply_filters,
    assemble,
    build_filter_description,
    compute_defaults,
    paginate,
    text_block,
)
from shaping.assembler import accessory_noun, to_json
from utils.errors import BadInput, NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_SUMMARY = True
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
DEFAULT_META_ONLY = False


class AccessoryFilterArgs(BaseModel):
    """Filter arguments accepted by the listing and counting tools."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    room_id: int | None = Field(None, alias="roomId")
    controllable_only: bool = Field(False, alias="controllableOnly")
    name_filter: str | None = Field(None, alias="nameFilter")
    device_type_filter: str | None = Field(None, alias="deviceTypeFilter")
    manufacturer_filter: str | None = Field(None, alias="manufacturerFilter")
    model_filter: str | None = Field(None, alias="modelFilter")
    online_only: bool = Field(False, alias="onlineOnly")
    offline_only: bool = Field(False, alias="offlineOnly")

    def to_filter_spec(self) -> FilterSpec:
        return FilterSpec(
            room_id=self.room_id,
            controllable_only=self.controllable_only,
            name_filter=self.name_filter,
            device_type_filter=self.device_type_filter,
            manufacturer_filter=self.manufacturer_filter,
            model_filter=self.model_filter,
            online_only=self.online_only,
            offline_only=self.offline_only,
        )


class AccessoryListArgs(AccessoryFilterArgs, PageArgs):
    """Listing arguments: filters plus display options."""

    summary: bool | None = None
    meta_only: bool | None = Field(None, alias="metaOnly")

    def to_display_spec(self) -> DisplaySpec:
        return DisplaySpec(
            summary=self.summary,
            page=self.page,
            limit=self.limit,
            meta_only=self.meta_only,
        )


class AccessoryLookupArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    accessory_id: int | str | None = Field(None, alias="accessoryId")


class AccessoryHandlers:
    """Handlers for accessory tools."""

    def __init__(self, connection: HubConnection, limits: ResponseLimits):
        self.connection = connection
        self.limits = limits

    async def _fetch_accessories(self) -> tuple[SprutClient, list[dict[str, Any]]]:
        client = await self.connection.ensure_connected()
        result = await call_upstream("list accessories", client.list_accessories())
        return client, require_success("list accessories", result)

    async def _filtered(self, filters: FilterSpec) -> list[dict[str, Any]]:
        client, accessories = await self._fetch_accessories()
        return apply_filters(
            accessories,
            filters,
            room_lookup=client.get_devices_by_room,
            multilingual=self.limits.multilingual_search,
        )

    async def list_accessories(self, args: dict[str, Any]) -> ResponseEnvelope:
        """List accessories with filters, smart defaults and pagination."""
        query = parse_args(AccessoryListArgs, args)
        filters = query.to_filter_spec()

        filtered = await self._filtered(filters)
        display = compute_defaults(len(filtered), query.to_display_spec(), self.limits)

        summary = display.summary if display.summary is not None else DEFAULT_SUMMARY
        meta_only = display.meta_only if display.meta_only is not None else DEFAULT_META_ONLY
        page = paginate(
            filtered,
            display.page if display.page is not None else DEFAULT_PAGE,
            display.limit if display.limit is not None else DEFAULT_LIMIT,
            self.limits.max_devices_per_page,
        )

        return assemble(
            page,
            total_count=len(filtered),
            summary=summary,
            meta_only=meta_only,
            filters=filters,
            filter_desc=build_filter_description(filters),
        )

    async def count_accessories(self, args: dict[str, Any]) -> ResponseEnvelope:
        """Count accessories matching the filters without returning them."""
        query = parse_args(AccessoryFilterArgs, args)
        filters = query.to_filter_spec()

        count = len(await self._filtered(filters))
        text = f"Found {count} {accessory_noun(count)}{build_filter_description(filters)}"
        return ResponseEnvelope(
            content=[text_block(text)],
            meta={"count": count, "filters": filters.to_dict()},
        )

    async def get_accessory(self, args: dict[str, Any]) -> ResponseEnvelope:
        """Get one accessory with all services and characteristics."""
        query = parse_args(AccessoryLookupArgs, args)
        if query.accessory_id is None or query.accessory_id == "":
            raise BadInput("accessoryId parameter is required")

        _, accessories = await self._fetch_accessories()
        wanted = str(query.accessory_id)
        accessory = next((a for a in accessories if str(a.get("id")) == wanted), None)
        if accessory is None:
            raise NotFoundError("Accessory", query.accessory_id)

        name = accessory.get("name") or "(unnamed)"
        return ResponseEnvelope(
            content=[
                text_block(f"Accessory {accessory.get('id')}: {name}"),
                text_block(to_json(accessory)),
            ],
            meta={"accessory": accessory},
        )
