"""
DataStoreModule: building block for the external data store.
Register with app.register(DataStoreModule()) before the domain modules that use it.
"""
from __future__ import annotations

import logging

from groupbuy.core.app import Application
from groupbuy.core.config import Settings
from groupbuy.core.module import Module
from groupbuy.storage.postgrest import PostgrestClient

logger = logging.getLogger(__name__)


class DataStoreModule(Module):
    """Puts a PostgrestClient in the container (built from Settings unless given) and closes it on shutdown."""

    def __init__(self, client: PostgrestClient | None = None) -> None:
        self._client = client

    def register_into(self, app: Application) -> None:
        if self._client is None:
            settings = app.container.resolve(Settings)
            self._client = PostgrestClient(settings)
            logger.info("data store: %s", settings.data_store_url)
        app.container.register_instance(PostgrestClient, self._client)
        app.on_shutdown(self._client.aclose)
