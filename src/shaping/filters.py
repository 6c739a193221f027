"""Accessory filtering.

Predicates run in a fixed order: room, controllable, name, device type,
manufacturer, model, online/offline. Each step narrows the previous result
and never mutates the input inventory.
"""

import logging
from typing import Any, Callable, Sequence

from shaping.capabilities import accessory_has_device_type
from shaping.models import Accessory, FilterSpec

logger = logging.getLogger(__name__)

RoomLookup = Callable[[list[Accessory], Any], list[Accessory]]

# English term -> equivalents used by multilingual name search
SEARCH_SYNONYMS: dict[str, tuple[str, ...]] = {
    "air": ("воздух", "воздуха"),
    "sensor": ("датчик", "сенсор"),
    "light": ("свет", "лампа", "освещение"),
    "lamp": ("лампа", "светильник"),
    "switch": ("выключатель", "переключатель"),
    "socket": ("розетка",),
    "outlet": ("розетка",),
    "temperature": ("температура",),
    "humidity": ("влажность",),
    "motion": ("движение", "движения"),
    "door": ("дверь", "двери"),
    "window": ("окно", "окна"),
    "thermostat": ("термостат",),
    "leak": ("протечка", "протечки"),
    "smoke": ("дым", "дыма"),
    "curtain": ("штора", "шторы"),
    "lock": ("замок",),
    "kitchen": ("кухня",),
    "bedroom": ("спальня",),
    "bathroom": ("ванная",),
}


def expand_search_terms(term: str) -> list[str]:
    """Expand a search term into its English/Russian equivalents.

    The lower-cased term is always first. A synonym group joins when one of
    its words equals the term, is contained in it, or starts with it (for
    terms of three or more characters).
    """
    needle = term.strip().lower()
    terms = [needle]
    if not needle:
        return terms

    for english, equivalents in SEARCH_SYNONYMS.items():
        group = (english, *equivalents)
        if any(
            word == needle or word in needle or (len(needle) >= 3 and word.startswith(needle))
            for word in group
        ):
            for word in group:
                if word not in terms:
                    terms.append(word)
    return terms


def is_controllable(accessory: Accessory) -> bool:
    """True if any characteristic of any service is writable."""
    for service in accessory.get("services") or []:
        for characteristic in service.get("characteristics") or []:
            control = characteristic.get("control") or {}
            if control.get("write") is True:
                return True
    return False


def _contains(value: Any, needle: str) -> bool:
    if not value:
        return False
    return needle.lower() in str(value).lower()


def default_room_lookup(accessories: list[Accessory], room_id: Any) -> list[Accessory]:
    """Direct room membership by ``roomId``."""
    return [a for a in accessories if a.get("roomId") == room_id]


def apply_filters(
    accessories: Sequence[Accessory],
    spec: FilterSpec,
    room_lookup: RoomLookup | None = None,
    multilingual: bool = False,
) -> list[Accessory]:
    """Apply every active filter in ``spec`` and return a new list."""
    result = list(accessories)

    if spec.room_id is not None:
        lookup = room_lookup or default_room_lookup
        result = list(lookup(result, spec.room_id))

    if spec.controllable_only:
        controllable_ids = {a.get("id") for a in result if is_controllable(a)}
        result = [a for a in result if a.get("id") in controllable_ids]

    if spec.name_filter:
        if multilingual:
            terms = expand_search_terms(spec.name_filter)
        else:
            terms = [spec.name_filter.lower()]
        result = [
            a for a in result
            if a.get("name") and any(t in str(a["name"]).lower() for t in terms)
        ]

    if spec.device_type_filter:
        result = [a for a in result if accessory_has_device_type(a, spec.device_type_filter)]

    if spec.manufacturer_filter:
        result = [a for a in result if _contains(a.get("manufacturer"), spec.manufacturer_filter)]

    if spec.model_filter:
        result = [a for a in result if _contains(a.get("model"), spec.model_filter)]

    if spec.online_only:
        result = [a for a in result if a.get("online") is True]
    elif spec.offline_only:
        result = [a for a in result if a.get("online") is False]

    logger.debug(f"Filtered {len(accessories)} accessories down to {len(result)}")
    return result


def build_filter_description(spec: FilterSpec) -> str:
    """Render active filters as a parenthetical clause, e.g. " (in room 3, controllable only)"."""
    parts: list[str] = []
    if spec.room_id is not None:
        parts.append(f"in room {spec.room_id}")
    if spec.controllable_only:
        parts.append("controllable only")
    if spec.name_filter:
        parts.append(f'name contains "{spec.name_filter}"')
    if spec.device_type_filter:
        parts.append(f'device type "{spec.device_type_filter}"')
    if spec.manufacturer_filter:
        parts.append(f'manufacturer contains "{spec.manufacturer_filter}"')
    if spec.model_filter:
        parts.append(f'model contains "{spec.model_filter}"')
    if spec.online_only:
        parts.append("online only")
    elif spec.offline_only:
        parts.append("offline only")

    if not parts:
        return ""
    return f" ({', '.join(parts)})"
