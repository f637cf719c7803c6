"""Infrastructure: campaign repositories (in-process and PostgREST)."""
from __future__ import annotations

from abc import abstractmethod
from typing import Optional

from groupbuy.domain import Repository
from groupbuy.storage import PostgrestClient

from .domain import Campaign, CampaignStatus

TABLE = "campaigns"


class ICampaignRepository(Repository[Campaign]):
    @abstractmethod
    async def list(self, *, status: CampaignStatus | None = None, seller_id: str | None = None) -> list[Campaign]:
        """Campaigns matching the filters, newest first."""
        ...


class InMemoryCampaignRepository(ICampaignRepository):
    def __init__(self):
        self._store: dict[str, Campaign] = {}

    async def get(self, id: str) -> Optional[Campaign]:
        return self._store.get(id)

    async def add(self, aggregate: Campaign) -> None:
        self._store[aggregate.id] = aggregate

    async def save(self, aggregate: Campaign) -> None:
        self._store[aggregate.id] = aggregate

    async def delete(self, id: str) -> bool:
        return self._store.pop(id, None) is not None

    async def list(self, *, status: CampaignStatus | None = None, seller_id: str | None = None) -> list[Campaign]:
        # newest inserted first among equal timestamps
        campaigns = [
            c
            for c in reversed(list(self._store.values()))
            if (status is None or c.status is status) and (seller_id is None or c.seller_id == seller_id)
        ]
        return sorted(campaigns, key=lambda c: c.created_at, reverse=True)


class PostgrestCampaignRepository(ICampaignRepository):
    def __init__(self, client: PostgrestClient):
        self._client = client

    async def get(self, id: str) -> Optional[Campaign]:
        row = await self._client.select_one(TABLE, id)
        return Campaign.from_record(row) if row else None

    async def add(self, aggregate: Campaign) -> None:
        row = await self._client.insert(TABLE, aggregate.to_record())
        # keep server-assigned values (timestamps, defaults)
        stored = Campaign.from_record(row)
        aggregate.created_at = stored.created_at
        aggregate.updated_at = stored.updated_at

    async def save(self, aggregate: Campaign) -> None:
        record = aggregate.to_record()
        record.pop("id")
        record.pop("created_at")
        await self._client.update(TABLE, aggregate.id, record)

    async def delete(self, id: str) -> bool:
        return bool(await self._client.delete(TABLE, id))

    async def list(self, *, status: CampaignStatus | None = None, seller_id: str | None = None) -> list[Campaign]:
        filters: dict[str, str] = {}
        if status is not None:
            filters["status"] = status.value
        if seller_id is not None:
            filters["seller_id"] = seller_id
        rows = await self._client.select(TABLE, filters, order="created_at.desc")
        return [Campaign.from_record(row) for row in rows]
