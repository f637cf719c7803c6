"""One object = full bounded context «orders». Register after «pricing» and «campaigns»."""
from __future__ import annotations

import logging

from groupbuy.ddd import DomainModule

from .application import (
    GetOrder,
    GetOrderHandler,
    ListCampaignOrders,
    ListCampaignOrdersHandler,
    PlaceOrder,
    PlaceOrderHandler,
)
from .domain import Order, OrderPlaced
from .infrastructure import IOrderRepository, InMemoryOrderRepository, PostgrestOrderRepository

logger = logging.getLogger(__name__)


def log_order_placed(event: OrderPlaced) -> None:
    logger.info(
        "order %s: %d unit(s) of campaign %s at %.2f",
        event.order_id,
        event.quantity,
        event.campaign_id,
        event.price_paid,
    )


def build_orders_module(storage_backend: str = "memory") -> DomainModule:
    repository_impl = PostgrestOrderRepository if storage_backend == "postgrest" else InMemoryOrderRepository
    return (
        DomainModule("orders")
        .aggregate(Order)
        .repository(IOrderRepository, repository_impl)
        .command(PlaceOrder, PlaceOrderHandler)
        .query(GetOrder, GetOrderHandler)
        .query(ListCampaignOrders, ListCampaignOrdersHandler)
        .on_event(OrderPlaced, log_order_placed)
    )
