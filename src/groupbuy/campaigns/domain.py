"""Campaigns domain: the Campaign aggregate and its events."""
from __future__ import annotations

import enum
import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from groupbuy.core.errors import ConflictError, ValidationError
from groupbuy.domain import AggregateRoot, DomainEvent
from groupbuy.pricing import engine
from groupbuy.pricing.engine import PriceQuote


def utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_id() -> str:
    return uuid.uuid4().hex


class CampaignStatus(str, enum.Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


@dataclass
class CampaignCreated(DomainEvent):
    campaign_id: str
    seller_id: str
    title: str


@dataclass
class CampaignStatusChanged(DomainEvent):
    campaign_id: str
    old_status: str
    new_status: str


@dataclass
class CampaignDeleted(DomainEvent):
    campaign_id: str


@dataclass
class TargetReached(DomainEvent):
    campaign_id: str
    target_quantity: int
    current_quantity: int
    final_price: float


def _positive_price(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a number")
    try:
        price = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(price) or price <= 0:
        raise ValidationError(f"{name} must be a positive number")
    return price


def _positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer")
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{name} must be an integer, got {value!r}") from None
    if not number.is_integer() or number <= 0:
        raise ValidationError(f"{name} must be a positive integer")
    return int(number)


@dataclass(eq=False)
class Campaign(AggregateRoot):
    """
    A seller's group-buy offer.

    ``current_quantity`` only grows, through record_commitment(); ``status``
    decides whether orders are accepted and plays no part in pricing.
    """

    id: str
    seller_id: str
    title: str
    starting_price: float
    final_price: float
    target_quantity: int
    current_quantity: int = 0
    status: CampaignStatus = CampaignStatus.ACTIVE
    description: str = ""
    image_url: str = ""
    created_at: str = field(default_factory=utcnow)
    updated_at: str = field(default_factory=utcnow)

    @classmethod
    def create(
        cls,
        *,
        seller_id: str,
        title: str,
        starting_price: Any,
        final_price: Any,
        target_quantity: Any,
        description: str = "",
        image_url: str = "",
        id: str | None = None,
    ) -> Campaign:
        """Validate seller input and open a new active campaign."""
        if not (seller_id or "").strip():
            raise ValidationError("seller_id is required")
        if not (title or "").strip():
            raise ValidationError("title is required")
        campaign = cls(
            id=id or new_id(),
            seller_id=seller_id.strip(),
            title=title.strip(),
            starting_price=_positive_price("starting_price", starting_price),
            final_price=_positive_price("final_price", final_price),
            target_quantity=_positive_int("target_quantity", target_quantity),
            description=description or "",
            image_url=image_url or "",
        )
        campaign.raise_event(CampaignCreated(campaign_id=campaign.id, seller_id=campaign.seller_id, title=campaign.title))
        return campaign

    # -- state changes ------------------------------------------------------

    @property
    def accepts_orders(self) -> bool:
        return self.status is CampaignStatus.ACTIVE

    def _set_status(self, new_status: CampaignStatus) -> None:
        old = self.status
        if old is new_status:
            return
        self.status = new_status
        self.updated_at = utcnow()
        self.raise_event(CampaignStatusChanged(campaign_id=self.id, old_status=old.value, new_status=new_status.value))

    def pause(self) -> None:
        if self.status is CampaignStatus.COMPLETED:
            raise ConflictError(f"campaign {self.id} is completed")
        self._set_status(CampaignStatus.PAUSED)

    def resume(self) -> None:
        if self.status is CampaignStatus.COMPLETED:
            raise ConflictError(f"campaign {self.id} is completed")
        self._set_status(CampaignStatus.ACTIVE)

    def toggle_status(self) -> CampaignStatus:
        """active -> paused, paused -> active."""
        if self.status is CampaignStatus.ACTIVE:
            self.pause()
        else:
            self.resume()
        return self.status

    def record_commitment(self, quantity: int) -> None:
        """Add units committed by an order; raises TargetReached when this crosses the target."""
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError("quantity must be a positive integer")
        was_reached = self.target_reached
        self.current_quantity += quantity
        self.updated_at = utcnow()
        if not was_reached and self.target_reached:
            self.raise_event(
                TargetReached(
                    campaign_id=self.id,
                    target_quantity=self.target_quantity,
                    current_quantity=self.current_quantity,
                    final_price=self.final_price,
                )
            )

    # -- pricing ------------------------------------------------------------

    @property
    def current_price(self) -> Any:
        return engine.current_price(self.starting_price, self.final_price, self.target_quantity, self.current_quantity)

    @property
    def discount_percent(self) -> int:
        return engine.discount_percent(self.starting_price, self.final_price)

    @property
    def target_reached(self) -> bool:
        return engine.is_target_reached(self.current_quantity, self.target_quantity)

    def quote(self) -> PriceQuote:
        return engine.quote(self.starting_price, self.final_price, self.target_quantity, self.current_quantity)

    # -- records ------------------------------------------------------------

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "seller_id": self.seller_id,
            "title": self.title,
            "description": self.description,
            "image_url": self.image_url,
            "starting_price": self.starting_price,
            "final_price": self.final_price,
            "target_quantity": self.target_quantity,
            "current_quantity": self.current_quantity,
            "status": self.status.value,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_record(cls, row: dict[str, Any]) -> Campaign:
        return cls(
            id=str(row["id"]),
            seller_id=str(row.get("seller_id") or ""),
            title=row.get("title") or "",
            starting_price=float(row["starting_price"]),
            final_price=float(row["final_price"]),
            target_quantity=int(row.get("target_quantity") or 0),
            current_quantity=int(row.get("current_quantity") or 0),
            status=CampaignStatus(row.get("status") or CampaignStatus.ACTIVE.value),
            description=row.get("description") or "",
            image_url=row.get("image_url") or "",
            created_at=row.get("created_at") or utcnow(),
            updated_at=row.get("updated_at") or utcnow(),
        )
