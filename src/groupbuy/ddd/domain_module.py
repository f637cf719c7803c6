"""
DomainModule: one object per bounded context.
Describes aggregates, repositories, bindings, commands, queries and event subscriptions.
"""
from __future__ import annotations

import dataclasses
import json
import logging
import math
import re
from typing import Any, Callable, Type

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from groupbuy.core.app import Application
from groupbuy.core.container import Container
from groupbuy.core.errors import ValidationError
from groupbuy.core.module import Module
from groupbuy.core.openapi import field_types, parameters_from_dataclass, schema_from_dataclass, unwrap_optional
from groupbuy.ddd.commands import Command, Query
from groupbuy.domain.events import EventBus, InProcessEventDispatcher
from groupbuy.domain.repository import Repository

logger = logging.getLogger(__name__)

Handler = Type[Any] | Callable[..., Any]

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _snake(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def _coerce(value: Any, target: Any, name: str) -> Any:
    """Convert query-string (or loosely typed JSON) values to the declared field type."""
    target = unwrap_optional(target)
    if isinstance(value, bool) and target in (int, float):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if value is None or not isinstance(target, type):
        return value
    if isinstance(value, target) and target is not float:
        return value
    try:
        if target is bool:
            text = str(value).strip().lower()
            if text in _TRUE:
                return True
            if text in _FALSE:
                return False
            raise ValueError(value)
        if target is int:
            if isinstance(value, float) and not value.is_integer():
                raise ValueError(value)
            return int(value)
        if target is float:
            value = float(value)
        if target is str:
            return str(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{name} must be of type {target.__name__}, got {value!r}") from None
    # JSON responses cannot carry NaN or Infinity
    if target is float and not math.isfinite(value):
        raise ValidationError(f"{name} must be a finite number, got {value!r}")
    return value


def build_payload(payload_type: type, body: dict[str, Any]) -> Any:
    """Instantiate a command/query dataclass from a request body, with type coercion."""
    if not isinstance(body, dict):
        raise ValidationError("request body must be a JSON object")
    types = field_types(payload_type)
    unknown = sorted(set(body) - set(types))
    if unknown:
        raise ValidationError(f"unexpected field(s): {', '.join(unknown)}")
    missing = [
        f.name
        for f in dataclasses.fields(payload_type)
        if f.name not in body
        and f.default is dataclasses.MISSING
        and f.default_factory is dataclasses.MISSING
    ]
    if missing:
        raise ValidationError(f"missing field(s): {', '.join(missing)}")
    kwargs = {name: _coerce(value, types[name], name) for name, value in body.items()}
    return payload_type(**kwargs)


async def _json_body(request: Request) -> Any:
    raw = await request.body()
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        raise ValidationError("request body is not valid JSON") from None


class DomainModule(Module):
    """
    One object = full bounded context.
    .aggregate() .repository() .bind() .command() .query() .on_event()
    Register via app.register(module).
    """

    def __init__(self, name: str, prefix: str | None = None) -> None:
        self.name = name
        self.prefix = prefix or f"/{name}"
        self._aggregates: list[Type[Any]] = []
        self._repositories: list[tuple[Type[Repository[Any]], Type[Any]]] = []
        self._bindings: list[tuple[Type[Any], Type[Any]]] = []
        self._commands: list[tuple[Type[Command], Handler]] = []
        self._queries: list[tuple[Type[Query], Handler]] = []
        self._event_handlers: list[tuple[type, Any]] = []

    @property
    def aggregates(self) -> list[Type[Any]]:
        return list(self._aggregates)

    def aggregate(self, root: Type[Any]) -> DomainModule:
        self._aggregates.append(root)
        return self

    def repository(self, interface: Type[Repository[Any]], impl: Type[Any]) -> DomainModule:
        self._repositories.append((interface, impl))
        return self

    def bind(self, interface: Type[Any], impl: Type[Any]) -> DomainModule:
        """Register any interface -> implementation for DI (domain services, adapters)."""
        self._bindings.append((interface, impl))
        return self

    def command(self, cmd_type: Type[Command], handler: Handler) -> DomainModule:
        self._commands.append((cmd_type, handler))
        return self

    def query(self, query_type: Type[Query], handler: Handler) -> DomainModule:
        self._queries.append((query_type, handler))
        return self

    def on_event(self, event_type: type, handler: Any) -> DomainModule:
        self._event_handlers.append((event_type, handler))
        return self

    def register_into(self, app: Application) -> None:
        container = app.container

        for iface, impl in self._repositories + self._bindings:
            container.register_class(impl)
            container.register(iface, lambda c=container, i=impl: c.resolve(i))

        # Event bus is shared by every context of the app
        if container.has(EventBus):
            event_bus = container.resolve(EventBus)
        else:
            event_bus = InProcessEventDispatcher()
            container.register_instance(EventBus, event_bus)
            container.register_instance(InProcessEventDispatcher, event_bus)
        for event_type, handler in self._event_handlers:
            if isinstance(handler, type):
                container.register_class(handler)
                event_bus.subscribe(event_type, lambda e, c=container, h=handler: c.resolve(h)(e))
            else:
                event_bus.subscribe(event_type, handler)

        base = self.prefix.rstrip("/")
        for cmd_type, handler in self._commands:
            if isinstance(handler, type):
                container.register_class(handler)
            app.add_route(
                f"{base}/commands/{_snake(cmd_type.__name__)}",
                self._make_command_endpoint(cmd_type, handler, container),
                methods=["POST"],
                openapi_body_schema=schema_from_dataclass(cmd_type),
                openapi_tags=[self.name],
            )

        for query_type, handler in self._queries:
            if isinstance(handler, type):
                container.register_class(handler)
            app.add_route(
                f"{base}/queries/{_snake(query_type.__name__)}",
                self._make_query_endpoint(query_type, handler, container),
                methods=["GET", "POST"],
                openapi_parameters=parameters_from_dataclass(query_type),
                openapi_body_schema=schema_from_dataclass(query_type),
                openapi_tags=[self.name],
            )
        logger.debug(
            "context %s: %d command(s), %d query(ies)", self.name, len(self._commands), len(self._queries)
        )

    def _make_command_endpoint(self, cmd_type: Type[Command], handler: Handler, container: Container) -> Callable:
        async def endpoint(request: Request) -> Response:
            cmd = build_payload(cmd_type, await _json_body(request))
            result = await self._call_handler(self._handler_instance(handler, container), cmd)
            return JSONResponse({"ok": True, "result": result} if result is not None else {"ok": True})

        return endpoint

    def _make_query_endpoint(self, query_type: Type[Query], handler: Handler, container: Container) -> Callable:
        async def endpoint(request: Request) -> Response:
            if request.method == "POST":
                body = await _json_body(request)
            else:
                body = dict(request.query_params)
            query = build_payload(query_type, body)
            result = await self._call_handler(self._handler_instance(handler, container), query)
            return JSONResponse(result if result is not None else {})

        return endpoint

    @staticmethod
    def _handler_instance(handler: Handler, container: Container) -> Callable[..., Any]:
        return container.resolve(handler) if isinstance(handler, type) else handler

    @staticmethod
    async def _call_handler(handler: Callable[..., Any], payload: Any) -> Any:
        result = handler(payload)
        if hasattr(result, "__await__"):
            return await result
        return result
