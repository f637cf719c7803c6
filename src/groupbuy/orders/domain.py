"""Orders domain: immutable order records and the OrderPlaced event."""
from __future__ import annotations

import enum
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any

from groupbuy.core.errors import ValidationError
from groupbuy.domain import DomainEvent
from groupbuy.pricing import round_half_up


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


@dataclass
class OrderPlaced(DomainEvent):
    order_id: str
    campaign_id: str
    quantity: int
    price_paid: float


@dataclass(frozen=True)
class Order:
    """A buyer's commitment to one campaign at ``price_paid`` per unit."""

    id: str
    campaign_id: str
    buyer_name: str
    buyer_email: str
    quantity: int
    price_paid: float
    status: OrderStatus = OrderStatus.CONFIRMED
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @classmethod
    def place(cls, *, campaign_id: str, buyer_name: str, buyer_email: str, quantity: Any, price_paid: float) -> Order:
        name = (buyer_name or "").strip()
        email = (buyer_email or "").strip()
        if not name:
            raise ValidationError("buyer_name is required")
        local, _, domain = email.partition("@")
        if not local or not domain:
            raise ValidationError(f"buyer_email {buyer_email!r} is not a valid address")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError("quantity must be a positive integer")
        return cls(
            id=uuid.uuid4().hex,
            campaign_id=campaign_id,
            buyer_name=name,
            buyer_email=email,
            quantity=quantity,
            price_paid=price_paid,
        )

    @property
    def total(self) -> float:
        return round_half_up(self.quantity * self.price_paid)

    def to_record(self) -> dict[str, Any]:
        record = asdict(self)
        record["status"] = self.status.value
        return record

    @classmethod
    def from_record(cls, row: dict[str, Any]) -> Order:
        return cls(
            id=str(row["id"]),
            campaign_id=str(row["campaign_id"]),
            buyer_name=row.get("buyer_name") or "",
            buyer_email=row.get("buyer_email") or "",
            quantity=int(row["quantity"]),
            price_paid=float(row["price_paid"]),
            status=OrderStatus(row.get("status") or OrderStatus.CONFIRMED.value),
            created_at=row.get("created_at") or "",
        )
