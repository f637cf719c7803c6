"""
App composition: every context is a module object attached with app.register().
To run: ``groupbuy serve`` or ``uvicorn --factory groupbuy.main:create_app``.
"""
from __future__ import annotations

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from groupbuy import __version__
from groupbuy.campaigns import build_campaigns_module
from groupbuy.core import Application, Settings
from groupbuy.orders import build_orders_module
from groupbuy.pricing.module import pricing_module
from groupbuy.storage import DataStoreModule, PostgrestClient


def create_app(settings: Settings | None = None, *, data_store: PostgrestClient | None = None) -> Application:
    """Build the application; settings default to the GROUPBUY_* environment."""
    if settings is None:
        settings = Settings.from_env()
    app = Application(config=settings)

    if settings.storage_backend == "postgrest":
        app.register(DataStoreModule(data_store))
    app.register(pricing_module)
    app.register(build_campaigns_module(settings.storage_backend))
    app.register(build_orders_module(settings.storage_backend))

    async def health(request: Request) -> Response:
        return JSONResponse({"status": "ok", "storage_backend": settings.storage_backend})

    app.add_route("/health", health, methods=["GET"], openapi_tags=["health"])
    app.openapi(title=settings.title, version=__version__)
    return app
