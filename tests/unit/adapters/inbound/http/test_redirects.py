"""Unit tests for the /ship and /store redirects."""

import pytest
from fastapi import FastAPI, status
from fastapi.datastructures import QueryParams
from fastapi.testclient import TestClient

from dormant_leads.adapters.inbound.http.redirects import resolve_lead_id, router


@pytest.fixture
def client():
    app = FastAPI()
    app.include_router(router)
    return TestClient(app)


@pytest.mark.parametrize("page", ["ship", "store"])
def test_redirects_to_lead_page(client, page):
    response = client.get(f"/{page}", params={"id": "lead-42"}, follow_redirects=False)

    assert response.status_code == status.HTTP_308_PERMANENT_REDIRECT
    assert response.headers["location"] == f"/lead/lead-42/{page}"


@pytest.mark.parametrize(
    "params, expected",
    [
        ({}, "demo-lead"),
        ({"lead": "abc"}, "abc"),
        ({"leadId": "xyz"}, "xyz"),
        ({"id": "first", "lead": "second", "leadId": "third"}, "first"),
        ({"id": "", "lead": "second"}, "second"),
        ({"id": "  padded  "}, "padded"),
        ({"id": "   "}, "demo-lead"),
        ("id=first&id=second", "first"),
        ("id=&id=second&lead=other", "other"),
    ],
)
def test_resolve_lead_id(params, expected):
    assert resolve_lead_id(QueryParams(params)) == expected


def test_missing_id_falls_back_to_demo_lead(client):
    response = client.get("/store", follow_redirects=False)

    assert response.status_code == status.HTTP_308_PERMANENT_REDIRECT
    assert response.headers["location"] == "/lead/demo-lead/store"


def test_lead_id_is_percent_encoded(client):
    response = client.get("/ship", params={"id": "a b/c"}, follow_redirects=False)

    assert response.headers["location"] == "/lead/a%20b%2Fc/ship"


def test_repeated_id_uses_first_value(client):
    response = client.get("/ship?id=first&id=second", follow_redirects=False)

    assert response.headers["location"] == "/lead/first/ship"
