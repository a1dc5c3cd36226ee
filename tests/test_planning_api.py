"""Budgets, goals, loans, subscriptions and scheduled payments."""

import asyncio
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from backend.app.db.base import AsyncSessionLocal
from backend.app.models import OWNED_MODELS
from conftest import API, auth_header, register

RESOURCES = {
    "budgets": {
        "payload": {
            "category": "FOOD",
            "amount": "400.00",
            "period": "MONTHLY",
            "startDate": "2025-03-01T00:00:00Z",
            "alertAt": 80,
        },
        "update": {"amount": "450.00"},
        "required": "period",
        "action": "BUDGET",
        "label": "Budget",
    },
    "goals": {
        "payload": {"name": "Emergency fund", "targetAmount": "5000.00"},
        "update": {"targetAmount": "6000.00"},
        "required": "targetAmount",
        "action": "GOAL",
        "label": "Goal",
    },
    "loans": {
        "payload": {"name": "Car repair", "type": "lent", "amount": "300.00"},
        "update": {"amount": "250.00"},
        "required": "type",
        "action": "LOAN",
        "label": "Loan",
    },
    "subscriptions": {
        "payload": {
            "name": "Streaming",
            "amount": "12.99",
            "frequency": "MONTHLY",
            "startDate": "2025-01-10T00:00:00Z",
            "nextBilling": "2025-04-10T00:00:00Z",
        },
        "update": {"amount": "14.99"},
        "required": "nextBilling",
        "action": "SUBSCRIPTION",
        "label": "Subscription",
    },
    "scheduled-payments": {
        "payload": {
            "name": "Rent",
            "amount": "950.00",
            "frequency": "MONTHLY",
            "nextDate": "2025-04-01T00:00:00Z",
        },
        "update": {"amount": "975.00"},
        "required": "frequency",
        "action": "SCHEDULED_PAYMENT",
        "label": "Scheduled payment",
    },
}

resources = pytest.mark.parametrize("resource", list(RESOURCES))


@pytest.fixture
def headers(client):
    session = register(client, "planner@example.com").json()["data"]
    return auth_header(session["accessToken"])


def _create(client, headers, resource, **overrides):
    payload = dict(RESOURCES[resource]["payload"], **overrides)
    return client.post(f"{API}/{resource}/", json=payload, headers=headers)


def _owned_row_count(user_id):
    async def count():
        async with AsyncSessionLocal() as session:
            total = 0
            for model in OWNED_MODELS:
                total += await session.scalar(
                    select(func.count()).select_from(model).where(model.user_id == user_id)
                )
            return total

    return asyncio.run(count())


def _amount_field(resource):
    return "targetAmount" if resource == "goals" else "amount"


@resources
def test_crud_round(client, headers, resource):
    config = RESOURCES[resource]
    created = _create(client, headers, resource)
    assert created.status_code == 201
    item = created.json()["data"]

    fetched = client.get(f"{API}/{resource}/{item['id']}", headers=headers)
    assert fetched.status_code == 200
    assert fetched.json()["data"]["id"] == item["id"]

    update = config["update"]
    updated = client.put(f"{API}/{resource}/{item['id']}", json=update, headers=headers)
    assert updated.status_code == 200
    field = _amount_field(resource)
    assert Decimal(str(updated.json()["data"][field])) == Decimal(update[field])

    deleted = client.delete(f"{API}/{resource}/{item['id']}", headers=headers)
    assert deleted.status_code == 200
    assert deleted.json()["data"]["message"] == f"{config['label']} deleted successfully"

    missing = client.get(f"{API}/{resource}/{item['id']}", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["error"] == {
        "message": f"{config['label']} not found",
        "code": "NOT_FOUND",
    }


@resources
def test_writes_are_logged(client, headers, resource):
    action = RESOURCES[resource]["action"]
    item = _create(client, headers, resource).json()["data"]
    client.put(f"{API}/{resource}/{item['id']}", json={}, headers=headers)
    client.delete(f"{API}/{resource}/{item['id']}", headers=headers)

    logs = client.get(f"{API}/activity-logs/", headers=headers).json()["data"]
    assert [entry["action"] for entry in logs[:3]] == [
        f"DELETED_{action}",
        f"UPDATED_{action}",
        f"CREATED_{action}",
    ]
    assert {entry["entityId"] for entry in logs[:3]} == {item["id"]}


@resources
def test_list_is_paginated_and_scoped(client, headers, resource):
    for _ in range(3):
        _create(client, headers, resource)

    page = client.get(f"{API}/{resource}/", params={"page": 1, "limit": 2}, headers=headers).json()
    assert page["meta"] == {"page": 1, "limit": 2, "total": 3}
    assert len(page["data"]) == 2

    other = register(client, "someone-else@example.com").json()["data"]
    other_headers = auth_header(other["accessToken"])
    theirs = client.get(f"{API}/{resource}/", headers=other_headers).json()
    assert theirs["data"] == [] and theirs["meta"]["total"] == 0

    item_id = page["data"][0]["id"]
    assert client.get(f"{API}/{resource}/{item_id}", headers=other_headers).status_code == 404
    assert client.put(
        f"{API}/{resource}/{item_id}", json={}, headers=other_headers
    ).status_code == 404


@resources
def test_update_rejects_null_for_required_field(client, headers, resource):
    required = RESOURCES[resource]["required"]
    item = _create(client, headers, resource).json()["data"]
    response = client.put(
        f"{API}/{resource}/{item['id']}", json={required: None}, headers=headers
    )
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert [d["path"] for d in error["details"]] == [required]


@resources
def test_create_rejects_non_positive_amount(client, headers, resource):
    response = _create(client, headers, resource, **{_amount_field(resource): "0"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@resources
def test_requires_authentication(client, resource):
    assert client.get(f"{API}/{resource}/").status_code == 401
    assert client.post(f"{API}/{resource}/", json={}).status_code == 401


@resources
def test_write_after_account_deletion(client, headers, resource):
    client.delete(f"{API}/users/me", headers=headers)
    response = _create(client, headers, resource)
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "USER_NOT_FOUND"


def test_goal_defaults(client, headers):
    goal = _create(client, headers, "goals").json()["data"]
    assert goal["type"] == "SAVINGS"
    assert Decimal(str(goal["currentAmount"])) == 0
    assert goal["startDate"]


def test_loan_end_date_must_follow_start(client, headers):
    response = _create(
        client,
        headers,
        "loans",
        startDate="2025-05-01T00:00:00Z",
        endDate="2025-04-01T00:00:00Z",
    )
    assert response.status_code == 400
    details = response.json()["error"]["details"]
    assert [d["message"] for d in details] == ["End date must be after the start date"]


def test_scheduled_payments_listed_by_next_date(client, headers):
    for next_date in ("2025-06-01", "2025-04-01", "2025-05-01"):
        _create(client, headers, "scheduled-payments", nextDate=f"{next_date}T00:00:00Z")

    payments = client.get(f"{API}/scheduled-payments/", headers=headers).json()["data"]
    assert [p["nextDate"][:10] for p in payments] == ["2025-04-01", "2025-05-01", "2025-06-01"]


def test_account_deletion_removes_planning_records(client, headers):
    user_id = client.get(f"{API}/auth/me", headers=headers).json()["data"]["id"]
    for resource in RESOURCES:
        _create(client, headers, resource)
    assert _owned_row_count(user_id) == len(RESOURCES)

    client.delete(f"{API}/users/me", headers=headers)
    assert _owned_row_count(user_id) == 0
