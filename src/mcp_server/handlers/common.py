"""Helpers shared by tool handlers."""

import math
from typing import Any, Awaitable, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from hub.client import HubResult
from utils.errors import BadInput, UpstreamFailure

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


class PageArgs(BaseModel):
    """Optional page and limit arguments of listing tools."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    page: int | None = None
    limit: int | None = None

    @field_validator("page", "limit", mode="before")
    @classmethod
    def _floor_numbers(cls, value: Any) -> Any:
        if isinstance(value, float) and math.isfinite(value):
            return math.floor(value)
        return value


async def call_upstream(operation: str, call: Awaitable[T]) -> T:
    """Await a hub call, reporting any failure as ``Failed to <operation>: <cause>``."""
    try:
        return await call
    except UpstreamFailure as e:
        raise UpstreamFailure(operation, e.cause) from e
    except Exception as e:
        raise UpstreamFailure(operation, e) from e


def require_success(operation: str, result: HubResult) -> list[Any]:
    """Return the data of a successful inventory result."""
    if not result.success:
        raise UpstreamFailure(operation, result.error or "unknown error")
    return list(result.data or [])


def parse_args(model: type[M], args: dict[str, Any]) -> M:
    """Validate tool arguments, reporting problems as ``BadInput``."""
    try:
        return model.model_validate(args or {})
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}"
            for err in e.errors()
        )
        raise BadInput(f"Invalid parameters: {problems}") from e
