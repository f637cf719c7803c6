"""Shared fixtures: settings, an in-memory app and its HTTP test client."""
from typing import Any, Callable, Dict

import pytest
from starlette.testclient import TestClient

from groupbuy.core import Settings
from groupbuy.main import create_app


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def campaign_payload() -> Dict[str, Any]:
    return {
        "seller_id": "seller-1",
        "title": "Espresso grinder",
        "description": "Flat burrs, 64mm",
        "image_url": "https://example.com/grinder.jpg",
        "starting_price": 100,
        "final_price": 50,
        "target_quantity": 10,
    }


@pytest.fixture
def create_campaign(client, campaign_payload) -> Callable[..., str]:
    """POST create_campaign with the default payload (overridable) and return the new id."""

    def _create(**overrides: Any) -> str:
        resp = client.post("/campaigns/commands/create_campaign", json={**campaign_payload, **overrides})
        assert resp.status_code == 200, resp.text
        return resp.json()["result"]

    return _create
