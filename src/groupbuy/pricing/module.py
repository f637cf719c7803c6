"""Pricing bounded context: no aggregate, no repository; a domain service bound via .bind()."""
from groupbuy.ddd import DomainModule

from .application import QuotePrice, QuotePriceHandler
from .service import IPricingService, PricingService

pricing_module = (
    DomainModule("pricing")
    .bind(IPricingService, PricingService)
    .query(QuotePrice, QuotePriceHandler)
)
