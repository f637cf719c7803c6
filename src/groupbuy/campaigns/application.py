"""Application layer: seller commands and storefront queries."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from groupbuy.core.errors import NotFoundError
from groupbuy.ddd import Command, Query
from groupbuy.domain import EventBus

from .domain import Campaign, CampaignDeleted, CampaignStatus
from .infrastructure import ICampaignRepository
from .views import campaign_view, seller_campaign_view


@dataclass
class CreateCampaign(Command):
    seller_id: str
    title: str
    starting_price: float
    final_price: float
    target_quantity: int
    description: str = ""
    image_url: str = ""


@dataclass
class ToggleCampaignStatus(Command):
    campaign_id: str


@dataclass
class DeleteCampaign(Command):
    campaign_id: str


@dataclass
class ListActiveCampaigns(Query):
    pass


@dataclass
class GetCampaign(Query):
    campaign_id: str


@dataclass
class ListSellerCampaigns(Query):
    seller_id: Optional[str] = None


async def load_campaign(repository: ICampaignRepository, campaign_id: str) -> Campaign:
    campaign = await repository.get(campaign_id)
    if campaign is None:
        raise NotFoundError(f"campaign {campaign_id} not found")
    return campaign


class CreateCampaignHandler:
    def __init__(self, campaign_repository: ICampaignRepository, event_bus: EventBus):
        self._repo = campaign_repository
        self._event_bus = event_bus

    async def __call__(self, cmd: CreateCampaign) -> str:
        campaign = Campaign.create(
            seller_id=cmd.seller_id,
            title=cmd.title,
            starting_price=cmd.starting_price,
            final_price=cmd.final_price,
            target_quantity=cmd.target_quantity,
            description=cmd.description,
            image_url=cmd.image_url,
        )
        await self._repo.add(campaign)
        for event in campaign.collect_pending_events():
            await self._event_bus.publish(event)
        return campaign.id


class ToggleCampaignStatusHandler:
    def __init__(self, campaign_repository: ICampaignRepository, event_bus: EventBus):
        self._repo = campaign_repository
        self._event_bus = event_bus

    async def __call__(self, cmd: ToggleCampaignStatus) -> str:
        campaign = await load_campaign(self._repo, cmd.campaign_id)
        status = campaign.toggle_status()
        await self._repo.save(campaign)
        for event in campaign.collect_pending_events():
            await self._event_bus.publish(event)
        return status.value


class DeleteCampaignHandler:
    def __init__(self, campaign_repository: ICampaignRepository, event_bus: EventBus):
        self._repo = campaign_repository
        self._event_bus = event_bus

    async def __call__(self, cmd: DeleteCampaign) -> None:
        if not await self._repo.delete(cmd.campaign_id):
            raise NotFoundError(f"campaign {cmd.campaign_id} not found")
        await self._event_bus.publish(CampaignDeleted(campaign_id=cmd.campaign_id))


class ListActiveCampaignsHandler:
    def __init__(self, campaign_repository: ICampaignRepository):
        self._repo = campaign_repository

    async def __call__(self, query: ListActiveCampaigns) -> list:
        campaigns = await self._repo.list(status=CampaignStatus.ACTIVE)
        return [campaign_view(c) for c in campaigns]


class GetCampaignHandler:
    def __init__(self, campaign_repository: ICampaignRepository):
        self._repo = campaign_repository

    async def __call__(self, query: GetCampaign) -> dict:
        return campaign_view(await load_campaign(self._repo, query.campaign_id))


class ListSellerCampaignsHandler:
    def __init__(self, campaign_repository: ICampaignRepository):
        self._repo = campaign_repository

    async def __call__(self, query: ListSellerCampaigns) -> list:
        campaigns = await self._repo.list(seller_id=query.seller_id or None)
        return [seller_campaign_view(c) for c in campaigns]
