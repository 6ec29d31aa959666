"""Base model for backend API payloads.

Every response model inherits from :class:`OrdersBaseModel`, which
provides:

* frozen instances, so fetched records can be shared between snapshots.
* ``populate_by_name`` so tests and callers can use snake_case names
  while the wire uses camelCase aliases.
* A ``raw`` dict capturing the original payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class OrdersBaseModel(BaseModel):
    """Base for backend response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict, repr=False, exclude=True)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        # Only auto-stash when constructed from an API dict; an explicit
        # ``raw=`` keyword keeps the caller's value.
        if not isinstance(values, dict) or "raw" in values:
            return values
        merged = dict(values)
        merged["raw"] = dict(values)
        return merged
