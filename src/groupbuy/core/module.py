"""Module protocol: anything with register_into(app) can be attached to the application."""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from groupbuy.core.app import Application


@runtime_checkable
class Module(Protocol):
    """Building block (bounded context, data store, ...) attached via app.register(module)."""

    def register_into(self, app: Application) -> None:
        ...
