"""Configuration loading for Spruthub MCP."""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

ENV_PREFIX = "SPRUTHUB_"

FALSE_VALUES = {"false", "0", "no", "off"}


class ResponseLimits(BaseModel):
    """Size and pagination limits applied to every tool response."""

    max_response_size: int = 50000
    max_devices_per_page: int = 20
    warn_threshold: int = 30000
    enable_truncation: bool = True
    force_smart_defaults: bool = True
    auto_summary_threshold: int = 10
    multilingual_search: bool = False


class HubConnectionConfig(BaseModel):
    """Connection parameters for the Sprut.hub server."""

    ws_url: str | None = None
    email: str | None = None
    password: str | None = None
    serial: str | None = None

    def missing_parameters(self) -> list[str]:
        """Environment variable names of the parameters that are not set."""
        return [
            ENV_PREFIX + name.upper()
            for name in ("ws_url", "email", "password", "serial")
            if not getattr(self, name)
        ]


class SpruthubConfig(BaseModel):
    """Main configuration model."""

    limits: ResponseLimits = Field(default_factory=ResponseLimits)
    hub: HubConnectionConfig = Field(default_factory=HubConnectionConfig)


# Environment variable -> ResponseLimits field
LIMIT_ENV_VARS = {
    "MAX_RESPONSE_SIZE": "max_response_size",
    "MAX_DEVICES_PER_PAGE": "max_devices_per_page",
    "WARN_THRESHOLD": "warn_threshold",
    "ENABLE_TRUNCATION": "enable_truncation",
    "FORCE_SMART_DEFAULTS": "force_smart_defaults",
    "AUTO_SUMMARY_THRESHOLD": "auto_summary_threshold",
    "MULTILINGUAL_SEARCH": "multilingual_search",
}

HUB_ENV_VARS = {
    "WS_URL": "ws_url",
    "EMAIL": "email",
    "PASSWORD": "password",
    "SERIAL": "serial",
}


def find_config_dir() -> Path:
    """Find the config directory.

    Looks for config directory in the following order:
    1. ./config (relative to cwd)
    2. ../config (parent of cwd)
    3. ~/.config/spruthub
    """
    cwd = Path.cwd()

    if (cwd / "config").is_dir():
        return cwd / "config"

    if (cwd.parent / "config").is_dir():
        return cwd.parent / "config"

    home_config = Path.home() / ".config" / "spruthub"
    if home_config.is_dir():
        return home_config

    return cwd / "config"


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning empty dict if not found."""
    if not path.exists():
        return {}
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_bool(value: str) -> bool:
    """Parse an environment flag. Anything not explicitly false is true."""
    return value.strip().lower() not in FALSE_VALUES


def _limits_from_env(env: dict[str, str], base: dict[str, Any]) -> dict[str, Any]:
    limits = dict(base)
    defaults = ResponseLimits()
    for suffix, field_name in LIMIT_ENV_VARS.items():
        raw = env.get(ENV_PREFIX + suffix)
        if raw is None or raw == "":
            continue
        if isinstance(getattr(defaults, field_name), bool):
            limits[field_name] = parse_bool(raw)
            continue
        try:
            limits[field_name] = int(raw)
        except ValueError:
            logger.warning(
                f"Ignoring invalid {ENV_PREFIX}{suffix}={raw!r}, "
                f"using {getattr(defaults, field_name)}"
            )
    return limits


def _hub_from_env(env: dict[str, str], base: dict[str, Any]) -> dict[str, Any]:
    hub = dict(base)
    for suffix, field_name in HUB_ENV_VARS.items():
        raw = env.get(ENV_PREFIX + suffix)
        if raw:
            hub[field_name] = raw
    return hub


def load_config(
    config_dir: Path | None = None,
    env: dict[str, str] | None = None,
) -> SpruthubConfig:
    """Load configuration from config.yaml, then apply environment overrides."""
    if config_dir is None:
        config_dir = find_config_dir()
    if env is None:
        env = dict(os.environ)

    data = load_yaml(config_dir / "config.yaml")
    data["limits"] = _limits_from_env(env, data.get("limits") or {})
    data["hub"] = _hub_from_env(env, data.get("hub") or {})
    return SpruthubConfig.model_validate(data)
