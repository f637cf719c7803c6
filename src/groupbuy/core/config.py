"""Settings: built once (env or code), passed to Application(config=...), resolved from DI by type."""
from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from typing import Any

from groupbuy.core.errors import ConfigurationError

STORAGE_BACKENDS = ("memory", "postgrest")
ORDER_PRICING_POLICIES = ("tiered", "linear")


class Config:
    """Helpers for turning environment variables into settings objects."""

    @classmethod
    def load_from_env(cls, prefix: str = "GROUPBUY_", **defaults: Any) -> dict[str, Any]:
        """Read os.environ entries starting with prefix; keys are lowercased without the prefix."""
        result = dict(defaults)
        for key, value in os.environ.items():
            if key.startswith(prefix):
                name = key[len(prefix):].lower()
                result[name] = value
        return result


@dataclass(frozen=True)
class Settings:
    """
    Service configuration.

    storage_backend: "memory" keeps campaigns and orders in process;
        "postgrest" talks to a PostgREST (Supabase REST) endpoint at data_store_url.
    order_pricing: unit price charged to a new order, "tiered" (starting price until
        the target is reached, final price afterwards) or "linear" (current interpolated price).
    """

    storage_backend: str = "memory"
    data_store_url: str = ""
    data_store_key: str = ""
    request_timeout: float = 10.0
    order_pricing: str = "tiered"
    log_level: str = "INFO"
    title: str = "Group Buy API"

    def __post_init__(self) -> None:
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ConfigurationError(
                f"storage_backend must be one of {', '.join(STORAGE_BACKENDS)}, got {self.storage_backend!r}"
            )
        if self.order_pricing not in ORDER_PRICING_POLICIES:
            raise ConfigurationError(
                f"order_pricing must be one of {', '.join(ORDER_PRICING_POLICIES)}, got {self.order_pricing!r}"
            )
        if self.storage_backend == "postgrest" and not self.data_store_url:
            raise ConfigurationError("data_store_url is required for the postgrest backend")
        if self.request_timeout <= 0:
            raise ConfigurationError("request_timeout must be positive")

    @classmethod
    def from_env(cls, prefix: str = "GROUPBUY_") -> Settings:
        """Build settings from GROUPBUY_* variables (e.g. GROUPBUY_DATA_STORE_URL); unknown keys are ignored."""
        raw = Config.load_from_env(prefix)
        kwargs: dict[str, Any] = {}
        for f in dataclasses.fields(cls):
            if f.name not in raw:
                continue
            value = raw[f.name]
            if f.name == "request_timeout":
                try:
                    value = float(value)
                except ValueError:
                    raise ConfigurationError(f"{prefix}REQUEST_TIMEOUT must be a number, got {value!r}") from None
            elif f.name in ("storage_backend", "order_pricing"):
                value = value.strip().lower()
            kwargs[f.name] = value
        return cls(**kwargs)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
