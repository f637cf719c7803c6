"""Application: composed from modules via app.register(module), served as a Starlette ASGI app."""
from __future__ import annotations

import contextlib
import logging
from typing import Any, AsyncIterator, Awaitable, Callable

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, Response
from starlette.routing import Route

from groupbuy.core.container import Container
from groupbuy.core.errors import GroupBuyError
from groupbuy.core.module import Module
from groupbuy.core.openapi import SWAGGER_UI_HTML, RouteSchemas, build_openapi_spec

logger = logging.getLogger(__name__)


async def _groupbuy_error_handler(request: Request, exc: GroupBuyError) -> Response:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


class Application:
    """
    Application composed from modules via register(module).

    Modules add routes and DI registrations; the Starlette app is built on first
    use, so every module must be registered before the app serves a request.
    The instance itself is an ASGI callable (``uvicorn groupbuy.main:app``).
    """

    def __init__(self, config: Any = None) -> None:
        self._modules: list[Module] = []
        self._container = Container()
        self._routes: list[Route] = []
        self._route_schemas: RouteSchemas = {}
        self._shutdown_hooks: list[Callable[[], Awaitable[None]]] = []
        self._openapi_title = "API"
        self._openapi_version = "0.1.0"
        self._docs_path = "/docs"
        self._openapi_path = "/openapi.json"
        self._asgi: Starlette | None = None
        self.config = config
        if config is not None:
            self._container.register_instance(type(config), config)
            self._container.register_instance("config", config)

    @property
    def container(self) -> Container:
        return self._container

    def register(self, module: Module) -> Application:
        """Register a module (DomainModule, DataStoreModule, ...). Returns self for chaining."""
        if self._asgi is not None:
            raise RuntimeError("cannot register modules after the application has started")
        module.register_into(self)
        self._modules.append(module)
        return self

    def add_route(
        self,
        path: str,
        endpoint: Callable[[Request], Awaitable[Response]],
        methods: list[str] | None = None,
        *,
        openapi_body_schema: dict[str, Any] | None = None,
        openapi_parameters: list[dict[str, Any]] | None = None,
        openapi_tags: list[str] | None = None,
    ) -> None:
        if methods is None:
            methods = ["GET"]
        path = "/" + path.lstrip("/")
        self._routes.append(Route(path, endpoint, methods=methods))
        for method in methods:
            schema: dict[str, Any] = {}
            if openapi_tags:
                schema["tags"] = openapi_tags
            if method == "GET" and openapi_parameters:
                schema["parameters"] = openapi_parameters
            elif method != "GET" and openapi_body_schema:
                schema["requestBody"] = {
                    "required": True,
                    "content": {"application/json": {"schema": openapi_body_schema}},
                }
            self._route_schemas[(path, method.lower())] = schema

    def on_shutdown(self, hook: Callable[[], Awaitable[None]]) -> None:
        """Run hook (e.g. closing an HTTP client) when the server shuts down."""
        self._shutdown_hooks.append(hook)

    def openapi(
        self,
        *,
        title: str = "API",
        version: str = "0.1.0",
        docs_path: str = "/docs",
        openapi_path: str = "/openapi.json",
    ) -> Application:
        self._openapi_title = title
        self._openapi_version = version
        self._docs_path = docs_path
        self._openapi_path = openapi_path
        return self

    def openapi_spec(self) -> dict[str, Any]:
        return build_openapi_spec(
            self._routes,
            title=self._openapi_title,
            version=self._openapi_version,
            route_schemas=self._route_schemas,
        )

    @contextlib.asynccontextmanager
    async def _lifespan(self, app: Starlette) -> AsyncIterator[None]:
        logger.info("%s started with %d routes", self._openapi_title, len(self._routes))
        try:
            yield
        finally:
            for hook in self._shutdown_hooks:
                await hook()

    def build(self) -> Starlette:
        """Build (once) the Starlette app serving module routes, /openapi.json and /docs."""
        if self._asgi is not None:
            return self._asgi

        async def openapi_endpoint(request: Request) -> Response:
            return JSONResponse(self.openapi_spec())

        async def docs_endpoint(request: Request) -> Response:
            return HTMLResponse(
                SWAGGER_UI_HTML.format(title=self._openapi_title, openapi_path=self._openapi_path)
            )

        routes = list(self._routes) + [
            Route(self._openapi_path, openapi_endpoint, include_in_schema=False),
            Route(self._docs_path, docs_endpoint, include_in_schema=False),
        ]
        self._asgi = Starlette(
            routes=routes,
            exception_handlers={GroupBuyError: _groupbuy_error_handler},
            lifespan=self._lifespan,
        )
        return self._asgi

    async def __call__(self, scope: Any, receive: Any, send: Any) -> None:
        await self.build()(scope, receive, send)

    def run(self, host: str = "127.0.0.1", port: int = 8000) -> None:
        """Serve with uvicorn (blocks)."""
        import uvicorn

        uvicorn.run(self, host=host, port=port)
