"""Per-operation option objects.

Options are validated when constructed and are frozen afterwards, so
``to_params()`` is a pure mapping that cannot fail. Map-valued options are
sent as JSON strings, the convention the engine uses for ``filters``,
``labels`` and ``driveropts``.
"""

import json

from pydantic import BaseModel, ConfigDict, Field, field_validator

_OPTIONS_CONFIG = ConfigDict(frozen=True, extra="forbid")


def _encode_json(value: dict) -> str:
    return json.dumps(value, sort_keys=True)


class ListOptions(BaseModel):
    """Options for listing secrets.

    Example:
        ListOptions(filters={"name": ["db-pass"]})
    """

    model_config = _OPTIONS_CONFIG

    filters: dict[str, tuple[str, ...]] = Field(default_factory=dict)

    @field_validator("filters")
    @classmethod
    def _check_filter_keys(cls, value: dict[str, tuple[str, ...]]) -> dict[str, tuple[str, ...]]:
        if any(not key for key in value):
            raise ValueError("filter names must be non-empty")
        return value

    def to_params(self) -> dict[str, str]:
        """Convert to query parameters."""
        if not self.filters:
            return {}
        return {"filters": _encode_json({k: list(v) for k, v in self.filters.items()})}


class InspectOptions(BaseModel):
    """Options for inspecting a secret. The engine currently accepts none."""

    model_config = _OPTIONS_CONFIG

    def to_params(self) -> dict[str, str]:
        """Convert to query parameters."""
        return {}


class CreateOptions(BaseModel):
    """Options for creating a secret.

    Only encoded into the query string; the request body carries the
    secret payload alone.
    """

    model_config = _OPTIONS_CONFIG

    name: str | None = None
    driver: str | None = None
    driver_opts: dict[str, str] = Field(default_factory=dict)
    labels: dict[str, str] = Field(default_factory=dict)

    @field_validator("name", "driver")
    @classmethod
    def _check_not_blank(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("must be non-empty when given")
        return value

    def to_params(self) -> dict[str, str]:
        """Convert to query parameters."""
        params: dict[str, str] = {}
        if self.name is not None:
            params["name"] = self.name
        if self.driver is not None:
            params["driver"] = self.driver
        if self.driver_opts:
            params["driveropts"] = _encode_json(self.driver_opts)
        if self.labels:
            params["labels"] = _encode_json(self.labels)
        return params
