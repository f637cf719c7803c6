"""Read models for the storefront listing, the campaign detail page and the seller dashboard."""
from __future__ import annotations

from typing import Any

from groupbuy.pricing import engine

from .domain import Campaign


def campaign_view(campaign: Campaign) -> dict[str, Any]:
    view = campaign.to_record()
    view.update(campaign.quote().to_dict())
    view["accepting_orders"] = campaign.accepts_orders
    return view


def seller_campaign_view(campaign: Campaign) -> dict[str, Any]:
    view = campaign_view(campaign)
    view["estimated_revenue"] = engine.estimated_revenue(
        campaign.starting_price, campaign.final_price, campaign.target_quantity, campaign.current_quantity
    )
    return view
