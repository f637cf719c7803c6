"""One object = full bounded context «campaigns»."""
from __future__ import annotations

import logging

from groupbuy.ddd import DomainModule

from .application import (
    CreateCampaign,
    CreateCampaignHandler,
    DeleteCampaign,
    DeleteCampaignHandler,
    GetCampaign,
    GetCampaignHandler,
    ListActiveCampaigns,
    ListActiveCampaignsHandler,
    ListSellerCampaigns,
    ListSellerCampaignsHandler,
    ToggleCampaignStatus,
    ToggleCampaignStatusHandler,
)
from .domain import Campaign, CampaignCreated, CampaignDeleted, CampaignStatusChanged, TargetReached
from .infrastructure import ICampaignRepository, InMemoryCampaignRepository, PostgrestCampaignRepository

logger = logging.getLogger(__name__)


def log_campaign_created(event: CampaignCreated) -> None:
    logger.info("campaign %s created by seller %s: %s", event.campaign_id, event.seller_id, event.title)


def log_status_changed(event: CampaignStatusChanged) -> None:
    logger.info("campaign %s: %s -> %s", event.campaign_id, event.old_status, event.new_status)


def log_campaign_deleted(event: CampaignDeleted) -> None:
    logger.info("campaign %s deleted", event.campaign_id)


def log_target_reached(event: TargetReached) -> None:
    logger.info(
        "campaign %s reached its target (%d/%d), final price %.2f unlocked",
        event.campaign_id,
        event.current_quantity,
        event.target_quantity,
        event.final_price,
    )


def build_campaigns_module(storage_backend: str = "memory") -> DomainModule:
    repository_impl = PostgrestCampaignRepository if storage_backend == "postgrest" else InMemoryCampaignRepository
    return (
        DomainModule("campaigns")
        .aggregate(Campaign)
        .repository(ICampaignRepository, repository_impl)
        .command(CreateCampaign, CreateCampaignHandler)
        .command(ToggleCampaignStatus, ToggleCampaignStatusHandler)
        .command(DeleteCampaign, DeleteCampaignHandler)
        .query(ListActiveCampaigns, ListActiveCampaignsHandler)
        .query(GetCampaign, GetCampaignHandler)
        .query(ListSellerCampaigns, ListSellerCampaignsHandler)
        .on_event(CampaignCreated, log_campaign_created)
        .on_event(CampaignStatusChanged, log_status_changed)
        .on_event(CampaignDeleted, log_campaign_deleted)
        .on_event(TargetReached, log_target_reached)
    )
