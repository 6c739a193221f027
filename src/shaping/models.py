"""Request-scoped value types for the response-shaping pipeline."""

from dataclasses import dataclass, field
from typing import Any

# Raw hub inventory entities are passed around as decoded JSON objects.
Accessory = dict[str, Any]
TextBlock = dict[str, str]


@dataclass(frozen=True)
class FilterSpec:
    """Accessory filters supplied by the caller. ``None`` means not set."""

    room_id: int | None = None
    controllable_only: bool = False
    name_filter: str | None = None
    device_type_filter: str | None = None
    manufacturer_filter: str | None = None
    model_filter: str | None = None
    online_only: bool = False
    offline_only: bool = False

    @property
    def is_empty(self) -> bool:
        return not (
            self.room_id is not None
            or self.controllable_only
            or self.name_filter
            or self.device_type_filter
            or self.manufacturer_filter
            or self.model_filter
            or self.online_only
            or self.offline_only
        )

    def to_dict(self) -> dict[str, Any]:
        """Active filters keyed the way callers send them."""
        result: dict[str, Any] = {}
        if self.room_id is not None:
            result["roomId"] = self.room_id
        if self.controllable_only:
            result["controllableOnly"] = True
        if self.name_filter:
            result["nameFilter"] = self.name_filter
        if self.device_type_filter:
            result["deviceTypeFilter"] = self.device_type_filter
        if self.manufacturer_filter:
            result["manufacturerFilter"] = self.manufacturer_filter
        if self.model_filter:
            result["modelFilter"] = self.model_filter
        if self.online_only:
            result["onlineOnly"] = True
        elif self.offline_only:
            result["offlineOnly"] = True
        return result


@dataclass(frozen=True)
class DisplaySpec:
    """How much of the result to return. ``None`` fields are left to defaults."""

    summary: bool | None = None
    page: int | None = None
    limit: int | None = None
    meta_only: bool | None = None


@dataclass
class ResponseEnvelope:
    """Text blocks for the caller plus machine-readable metadata."""

    content: list[TextBlock]
    meta: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"content": self.content, "meta": self.meta}


def text_block(text: str) -> TextBlock:
    return {"type": "text", "text": text}
