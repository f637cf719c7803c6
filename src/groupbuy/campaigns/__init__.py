from groupbuy.campaigns.domain import Campaign, CampaignStatus
from groupbuy.campaigns.infrastructure import ICampaignRepository
from groupbuy.campaigns.module import build_campaigns_module

__all__ = [
    "Campaign",
    "CampaignStatus",
    "ICampaignRepository",
    "build_campaigns_module",
]
