"""Device-type capability table.

Maps a coarse device-type token to the characteristic-type substrings that
identify it. The table is versioned data: callers depend on these exact
entries, so extend it rather than editing existing rows.
"""

from typing import Any

CAPABILITY_MAP: dict[str, tuple[str, ...]] = {
    "air_quality": ("airqualitysensor", "airquality"),
    "temperature": ("temperature", "currenttemperature"),
    "humidity": ("humidity", "currentrelativehumidity"),
    "co2": ("carbondioxide", "co2"),
    "pm25": ("pm2_5density", "pm25"),
    "pm10": ("pm10density", "pm10"),
    "voc": ("vocdensity", "voc"),
    "light": ("brightness", "hue", "saturation", "on"),
    "switch": ("on", "switch"),
    "motion": ("motiondetected", "motion"),
    "contact": ("contactsensorstate", "contact"),
}


def characteristic_matches(characteristic_type: str, token: str) -> bool:
    """Check a characteristic type against a device-type token.

    Known tokens match any of their mapped substrings; unknown tokens fall
    back to a plain substring match. Comparison is case-insensitive.
    """
    char_type = characteristic_type.lower()
    token = token.lower()
    patterns = CAPABILITY_MAP.get(token)
    if patterns is None:
        return token in char_type
    return any(pattern in char_type for pattern in patterns)


def accessory_has_device_type(accessory: dict[str, Any], token: str) -> bool:
    """True if a service type contains the token or a characteristic matches it."""
    token = token.lower()
    for service in accessory.get("services") or []:
        service_type = service.get("type")
        if service_type and token in str(service_type).lower():
            return True
        for characteristic in service.get("characteristics") or []:
            char_type = characteristic.get("type")
            if char_type and characteristic_matches(str(char_type), token):
                return True
    return False
