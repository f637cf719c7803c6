import json

import httpx
import pytest
from starlette.testclient import TestClient

from groupbuy.campaigns.domain import CampaignStatus
from groupbuy.campaigns.infrastructure import PostgrestCampaignRepository
from groupbuy.core import DataStoreError, Settings
from groupbuy.main import create_app
from groupbuy.orders.domain import OrderStatus
from groupbuy.orders.infrastructure import PostgrestOrderRepository
from groupbuy.storage import PostgrestClient

SETTINGS = Settings(
    storage_backend="postgrest",
    data_store_url="https://project.supabase.co/",
    data_store_key="anon-key",
)

ROW = {
    "id": "c1",
    "seller_id": "seller-1",
    "title": "Kettle",
    "description": "",
    "image_url": "",
    "starting_price": 30,
    "final_price": 20,
    "target_quantity": 10,
    "current_quantity": 5,
    "status": "active",
    "created_at": "2024-05-01T10:00:00+00:00",
    "updated_at": "2024-05-01T10:00:00+00:00",
}


def make_client(handler) -> PostgrestClient:
    return PostgrestClient(SETTINGS, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_select_sends_auth_headers_and_filters():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=[ROW])

    client = make_client(handler)
    rows = await client.select("campaigns", {"status": "active"}, order="created_at.desc")
    await client.aclose()

    assert rows == [ROW]
    request = requests[0]
    assert request.method == "GET"
    assert request.url.path == "/rest/v1/campaigns"
    assert request.url.params["select"] == "*"
    assert request.url.params["status"] == "eq.active"
    assert request.url.params["order"] == "created_at.desc"
    assert request.headers["apikey"] == "anon-key"
    assert request.headers["authorization"] == "Bearer anon-key"


@pytest.mark.asyncio
async def test_insert_asks_for_representation():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["prefer"] = request.headers.get("prefer")
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json=[{**seen["body"], "created_at": "2024-05-02T00:00:00+00:00"}])

    client = make_client(handler)
    row = await client.insert("orders", {"id": "o1", "quantity": 2})
    await client.aclose()

    assert seen["prefer"] == "return=representation"
    assert seen["body"] == {"id": "o1", "quantity": 2}
    assert row["created_at"] == "2024-05-02T00:00:00+00:00"


@pytest.mark.asyncio
async def test_http_error_becomes_data_store_error():
    client = make_client(lambda request: httpx.Response(500, text="boom"))
    with pytest.raises(DataStoreError) as exc_info:
        await client.select("campaigns")
    await client.aclose()
    assert "500" in exc_info.value.message


@pytest.mark.asyncio
async def test_transport_error_becomes_data_store_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    with pytest.raises(DataStoreError):
        await client.delete("campaigns", "c1")
    await client.aclose()


@pytest.mark.asyncio
async def test_campaign_repository_maps_rows():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=[ROW])

    client = make_client(handler)
    repo = PostgrestCampaignRepository(client)

    campaigns = await repo.list(status=CampaignStatus.ACTIVE, seller_id="seller-1")
    assert [c.id for c in campaigns] == ["c1"]
    assert campaigns[0].current_price == 25.0

    campaign = await repo.get("c1")
    campaign.record_commitment(1)
    await repo.save(campaign)
    await client.aclose()

    list_params = requests[0].url.params
    assert list_params["status"] == "eq.active"
    assert list_params["seller_id"] == "eq.seller-1"
    patch = requests[-1]
    assert patch.method == "PATCH"
    assert patch.url.params["id"] == "eq.c1"
    body = json.loads(patch.content)
    assert body["current_quantity"] == 6
    assert "id" not in body


@pytest.mark.asyncio
async def test_missing_campaign_is_none():
    client = make_client(lambda request: httpx.Response(200, json=[]))
    repo = PostgrestCampaignRepository(client)
    assert await repo.get("nope") is None
    assert await repo.delete("nope") is False
    await client.aclose()


def test_app_serves_campaigns_from_data_store():
    data_store = make_client(lambda request: httpx.Response(200, json=[ROW]))
    with TestClient(create_app(SETTINGS, data_store=data_store)) as client:
        resp = client.get("/campaigns/queries/get_campaign", params={"campaign_id": "c1"})
        health = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["current_price"] == 25.0
    assert body["progress_percent"] == 50.0
    assert health.json()["storage_backend"] == "postgrest"


def test_data_store_failure_is_reported_as_bad_gateway():
    data_store = make_client(lambda request: httpx.Response(503))
    with TestClient(create_app(SETTINGS, data_store=data_store)) as client:
        resp = client.get("/campaigns/queries/list_active_campaigns")
    assert resp.status_code == 502
    assert resp.json()["error"]["code"] == "DATA_STORE_ERROR"


def test_place_order_writes_order_and_campaign_quantity():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.method == "GET":
            return httpx.Response(200, json=[ROW])
        body = json.loads(request.content)
        if request.url.path == "/rest/v1/campaigns":
            return httpx.Response(200, json=[{**ROW, **body}])
        return httpx.Response(201, json=[body])

    payload = {"campaign_id": "c1", "buyer_name": "Ada", "buyer_email": "ada@example.com", "quantity": 2}
    with TestClient(create_app(SETTINGS, data_store=make_client(handler))) as client:
        resp = client.post("/orders/commands/place_order", json=payload)

    assert resp.status_code == 200
    result = resp.json()["result"]
    assert result["price_paid"] == 30
    assert result["total"] == 60

    insert = next(r for r in requests if r.method == "POST")
    assert insert.url.path == "/rest/v1/orders"
    assert insert.headers["prefer"] == "return=representation"
    order_row = json.loads(insert.content)
    assert order_row["id"] == result["id"]
    assert order_row["campaign_id"] == "c1"
    assert order_row["quantity"] == 2
    assert order_row["price_paid"] == 30
    assert order_row["status"] == "confirmed"

    patch = next(r for r in requests if r.method == "PATCH")
    assert patch.url.path == "/rest/v1/campaigns"
    assert patch.url.params["id"] == "eq.c1"
    assert json.loads(patch.content)["current_quantity"] == 7


@pytest.mark.asyncio
async def test_order_repository_reads_campaign_orders():
    order_row = {
        "id": "o1",
        "campaign_id": "c1",
        "buyer_name": "Ada",
        "buyer_email": "ada@example.com",
        "quantity": 3,
        "price_paid": "20.00",
        "status": "confirmed",
        "created_at": "2024-05-02T00:00:00+00:00",
    }
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=[order_row])

    client = make_client(handler)
    repo = PostgrestOrderRepository(client)
    [order] = await repo.for_campaign("c1")
    fetched = await repo.get("o1")
    await client.aclose()

    assert order.price_paid == 20.0
    assert order.total == 60.0
    assert order.status is OrderStatus.CONFIRMED
    assert fetched == order
    params = requests[0].url.params
    assert params["campaign_id"] == "eq.c1"
    assert params["order"] == "created_at.desc"
    assert requests[1].url.params["id"] == "eq.o1"
