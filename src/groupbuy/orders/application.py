"""Application layer: placing and reading orders."""
from __future__ import annotations

from dataclasses import dataclass

from groupbuy.campaigns.application import load_campaign
from groupbuy.campaigns.infrastructure import ICampaignRepository
from groupbuy.core.errors import ConflictError, NotFoundError
from groupbuy.ddd import Command, Query
from groupbuy.domain import EventBus
from groupbuy.pricing.service import IPricingService

from .domain import Order, OrderPlaced
from .infrastructure import IOrderRepository


@dataclass
class PlaceOrder(Command):
    """Multi-aggregate: creates an Order and grows the Campaign's committed quantity."""
    campaign_id: str
    buyer_name: str
    buyer_email: str
    quantity: int = 1


@dataclass
class GetOrder(Query):
    order_id: str


@dataclass
class ListCampaignOrders(Query):
    campaign_id: str


def order_view(order: Order) -> dict:
    view = order.to_record()
    view["total"] = order.total
    return view


class PlaceOrderHandler:
    def __init__(
        self,
        order_repository: IOrderRepository,
        campaign_repository: ICampaignRepository,
        pricing_service: IPricingService,
        event_bus: EventBus,
    ):
        self._order_repo = order_repository
        self._campaign_repo = campaign_repository
        self._pricing = pricing_service
        self._event_bus = event_bus

    async def __call__(self, cmd: PlaceOrder) -> dict:
        campaign = await load_campaign(self._campaign_repo, cmd.campaign_id)
        if not campaign.accepts_orders:
            raise ConflictError(f"campaign {campaign.id} is {campaign.status.value} and does not accept orders")
        # priced on the quantity committed before this order
        price = self._pricing.order_unit_price(
            campaign.starting_price, campaign.final_price, campaign.target_quantity, campaign.current_quantity
        )
        order = Order.place(
            campaign_id=campaign.id,
            buyer_name=cmd.buyer_name,
            buyer_email=cmd.buyer_email,
            quantity=cmd.quantity,
            price_paid=price,
        )
        await self._order_repo.add(order)
        campaign.record_commitment(order.quantity)
        await self._campaign_repo.save(campaign)

        await self._event_bus.publish(
            OrderPlaced(order_id=order.id, campaign_id=campaign.id, quantity=order.quantity, price_paid=order.price_paid)
        )
        for event in campaign.collect_pending_events():
            await self._event_bus.publish(event)
        return {"id": order.id, "price_paid": order.price_paid, "quantity": order.quantity, "total": order.total}


class GetOrderHandler:
    def __init__(self, order_repository: IOrderRepository):
        self._repo = order_repository

    async def __call__(self, query: GetOrder) -> dict:
        order = await self._repo.get(query.order_id)
        if order is None:
            raise NotFoundError(f"order {query.order_id} not found")
        return order_view(order)


class ListCampaignOrdersHandler:
    def __init__(self, order_repository: IOrderRepository):
        self._repo = order_repository

    async def __call__(self, query: ListCampaignOrders) -> list:
        return [order_view(o) for o in await self._repo.for_campaign(query.campaign_id)]
