"""Infrastructure: order repositories. Orders are immutable, so save() only re-stores the record."""
from __future__ import annotations

from abc import abstractmethod
from typing import Optional

from groupbuy.domain import Repository
from groupbuy.storage import PostgrestClient

from .domain import Order

TABLE = "orders"


class IOrderRepository(Repository[Order]):
    @abstractmethod
    async def for_campaign(self, campaign_id: str) -> list[Order]:
        """Orders of one campaign, newest first."""
        ...


class InMemoryOrderRepository(IOrderRepository):
    def __init__(self):
        self._store: dict[str, Order] = {}

    async def get(self, id: str) -> Optional[Order]:
        return self._store.get(id)

    async def add(self, aggregate: Order) -> None:
        self._store[aggregate.id] = aggregate

    async def save(self, aggregate: Order) -> None:
        self._store[aggregate.id] = aggregate

    async def delete(self, id: str) -> bool:
        return self._store.pop(id, None) is not None

    async def for_campaign(self, campaign_id: str) -> list[Order]:
        orders = [o for o in reversed(list(self._store.values())) if o.campaign_id == campaign_id]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)


class PostgrestOrderRepository(IOrderRepository):
    def __init__(self, client: PostgrestClient):
        self._client = client

    async def get(self, id: str) -> Optional[Order]:
        row = await self._client.select_one(TABLE, id)
        return Order.from_record(row) if row else None

    async def add(self, aggregate: Order) -> None:
        await self._client.insert(TABLE, aggregate.to_record())

    async def save(self, aggregate: Order) -> None:
        record = aggregate.to_record()
        record.pop("id")
        await self._client.update(TABLE, aggregate.id, record)

    async def delete(self, id: str) -> bool:
        return bool(await self._client.delete(TABLE, id))

    async def for_campaign(self, campaign_id: str) -> list[Order]:
        rows = await self._client.select(TABLE, {"campaign_id": campaign_id}, order="created_at.desc")
        return [Order.from_record(row) for row in rows]
