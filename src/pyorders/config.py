"""Client configuration for pyorders."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyorders._constants import BASE_URL, VENDOR_PAGE_SIZE
from pyorders.exceptions import OrdersConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class OrdersConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Backend API base URL, without a trailing slash.
    access_token : str or None
        Bearer credential attached to every request.  When ``None`` every
        gateway call fails with :class:`~pyorders.exceptions.OrdersAuthError`
        before touching the network.
    vendor_page_size : int
        Page size requested from the vendors-by-station endpoint.  Large
        enough to mean "all vendors of the station".
    request_timeout : float
        Total per-request timeout in seconds.  ``0`` leaves the timeout
        to aiohttp's defaults.
    export_day_bounds : bool
        Send export dates as start-of-day / end-of-day timestamps
        (``YYYY-MM-DDTHH:MM:SS``) instead of plain ``YYYY-MM-DD``.
    output_dir : str
        Default directory exported files are written to.
    api_trace_enabled : bool
        Log a redacted trace line for every HTTP response.
    """

    base_url: str = BASE_URL
    access_token: str | None = dataclasses.field(default=None, repr=False)
    vendor_page_size: int = VENDOR_PAGE_SIZE
    request_timeout: float = 60.0
    export_day_bounds: bool = False
    output_dir: str = "."
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        if not self.base_url or not self.base_url.strip():
            raise OrdersConfigError("base_url must be non-empty")
        if self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        if self.vendor_page_size <= 0:
            raise OrdersConfigError(f"vendor_page_size must be positive, got {self.vendor_page_size}")
        if self.request_timeout < 0:
            raise OrdersConfigError(f"request_timeout must be >= 0, got {self.request_timeout}")

    @classmethod
    def from_env(cls, **overrides: Any) -> OrdersConfig:
        """Create configuration from environment variables.

        Reads ``ORDERS_BASE_URL``, ``ORDERS_ACCESS_TOKEN`` and the optional
        ``ORDERS_*`` tuning variables. Explicit keyword arguments override
        environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "ORDERS_BASE_URL": "base_url",
            "ORDERS_ACCESS_TOKEN": "access_token",
            "ORDERS_OUTPUT_DIR": "output_dir",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        try:
            page_env = env.get("ORDERS_VENDOR_PAGE_SIZE")
            if page_env is not None and "vendor_page_size" not in overrides:
                config_kwargs["vendor_page_size"] = int(page_env)

            timeout_env = env.get("ORDERS_REQUEST_TIMEOUT")
            if timeout_env is not None and "request_timeout" not in overrides:
                config_kwargs["request_timeout"] = float(timeout_env)
        except ValueError as exc:
            raise OrdersConfigError(f"Invalid numeric ORDERS_* setting: {exc}") from exc

        if "export_day_bounds" not in overrides:
            config_kwargs["export_day_bounds"] = _env_bool(env.get("ORDERS_EXPORT_DAY_BOUNDS"), False)

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(
                env.get("ORDERS_API_TRACE_ENABLED"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
