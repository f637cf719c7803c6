from groupbuy.core.app import Application
from groupbuy.core.config import Config, Settings, configure_logging
from groupbuy.core.container import Container
from groupbuy.core.errors import (
    ConfigurationError,
    ConflictError,
    DataStoreError,
    GroupBuyError,
    NotFoundError,
    ValidationError,
)
from groupbuy.core.module import Module

__all__ = [
    "Application",
    "Config",
    "ConfigurationError",
    "ConflictError",
    "Container",
    "DataStoreError",
    "GroupBuyError",
    "Module",
    "NotFoundError",
    "Settings",
    "ValidationError",
    "configure_logging",
]
