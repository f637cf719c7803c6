"""Minimal DI container: handlers and repositories are resolved by their __init__ annotations."""
from __future__ import annotations

import inspect
import sys
from typing import Any, Callable, TypeVar

T = TypeVar("T")

Key = type[Any] | str


def _resolve_annotation(ann: str, cls: type[Any]) -> Any:
    """Turn a postponed (string) annotation into the object it names in cls's module."""
    mod = sys.modules.get(cls.__module__)
    if mod is not None and hasattr(mod, ann):
        return getattr(mod, ann)
    return ann


def _instantiate_with_container(container: Container, cls: type[T]) -> T:
    sig = inspect.signature(cls)
    kwargs: dict[str, Any] = {}
    for name, param in sig.parameters.items():
        if param.annotation is inspect.Parameter.empty:
            continue
        ann = param.annotation
        if isinstance(ann, str):
            ann = _resolve_annotation(ann, cls)
        # optional dependencies fall back to their default
        if param.default is not inspect.Parameter.empty and not container.has(ann):
            continue
        kwargs[name] = container.resolve(ann)
    return cls(**kwargs)


class Container:
    """
    Registry of factories keyed by type (usually an interface) or string.
    Singletons are built on first resolve and reused afterwards.
    """

    def __init__(self) -> None:
        self._registry: dict[Key, Callable[[], Any]] = {}
        self._singletons: dict[Key, Any] = {}
        self._singleton_keys: set[Key] = set()

    def register(self, key: Key, factory: Callable[[], T], singleton: bool = True) -> None:
        self._registry[key] = factory
        self._singletons.pop(key, None)
        if singleton:
            self._singleton_keys.add(key)
        else:
            self._singleton_keys.discard(key)

    def register_instance(self, key: Key, instance: T) -> None:
        self._registry[key] = lambda: instance
        self._singletons[key] = instance
        self._singleton_keys.add(key)

    def register_class(self, cls: type[T], singleton: bool = True) -> None:
        """On resolve, cls is built with its constructor dependencies taken from the container."""
        self.register(cls, lambda: _instantiate_with_container(self, cls), singleton=singleton)

    def has(self, key: Any) -> bool:
        return key in self._registry

    def resolve(self, key: Key) -> Any:
        if key not in self._registry:
            raise KeyError(f"No registration for {key}")
        if key in self._singletons:
            return self._singletons[key]
        instance = self._registry[key]()
        if key in self._singleton_keys:
            self._singletons[key] = instance
        return instance
