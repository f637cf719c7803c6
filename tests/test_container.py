from dataclasses import dataclass

import pytest

from groupbuy.core import Container, Settings
from groupbuy.domain import DomainEvent, InProcessEventDispatcher


class Clock:
    pass


class Greeter:
    def __init__(self, clock: Clock, greeting: str = "hello"):
        self.clock = clock
        self.greeting = greeting


def test_register_class_injects_dependencies():
    container = Container()
    container.register_class(Clock)
    container.register_class(Greeter)
    greeter = container.resolve(Greeter)
    assert isinstance(greeter.clock, Clock)
    assert greeter.greeting == "hello"


def test_singletons_are_reused():
    container = Container()
    container.register_class(Clock)
    assert container.resolve(Clock) is container.resolve(Clock)


def test_transient_registrations_build_new_instances():
    container = Container()
    container.register_class(Clock, singleton=False)
    assert container.resolve(Clock) is not container.resolve(Clock)


def test_register_instance_by_type_and_key():
    container = Container()
    settings = Settings(order_pricing="linear")
    container.register_instance(Settings, settings)
    container.register_instance("config", settings)
    assert container.resolve(Settings) is settings
    assert container.resolve("config") is settings


def test_missing_registration_raises_key_error():
    with pytest.raises(KeyError):
        Container().resolve(Clock)


@dataclass
class Ping(DomainEvent):
    n: int


@dataclass
class Pong(DomainEvent):
    n: int


@pytest.mark.asyncio
async def test_dispatcher_runs_sync_and_async_handlers_in_order():
    bus = InProcessEventDispatcher()
    seen = []

    def sync_handler(event):
        seen.append(("sync", event.n))

    async def async_handler(event):
        seen.append(("async", event.n))

    bus.subscribe(Ping, sync_handler)
    bus.subscribe(Ping, async_handler)
    await bus.publish(Ping(1))
    await bus.publish(Pong(2))
    assert seen == [("sync", 1), ("async", 1)]


@pytest.mark.asyncio
async def test_dispatcher_propagates_handler_errors():
    bus = InProcessEventDispatcher()

    def failing(event):
        raise RuntimeError("handler failed")

    bus.subscribe(Ping, failing)
    with pytest.raises(RuntimeError):
        await bus.publish(Ping(1))
