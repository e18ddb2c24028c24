"""Integration tests for API endpoints"""

import pytest
import uuid
from decimal import Decimal
from fastapi.testclient import TestClient

ALL_YES = [True, True, "$10", True, 2, True, True, True, True, True, True]


@pytest.fixture
def seeded_client(client: TestClient) -> TestClient:
    """Client with monthly rent and two one-off food purchases"""
    for body in [
        {"title": "Rent", "amount": 1000, "date": "2024-04-15T09:00:00", "category": "Housing", "is_recurring": True},
        {"title": "Groceries", "amount": "50.00", "date": "2024-06-20T18:30:00", "category": "Food"},
        {"title": "Coffee", "amount": "$4.50", "date": "2024-06-29T08:00:00", "category": "Food"},
    ]:
        assert client.post("/v1/expenses", json=body).status_code == 201
    return client


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_request_id_header(client: TestClient):
    """Test caller's request ID is echoed back"""
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/need-score", json={"item_name": "Socks", "answers": []})

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "broke_need_score_total" in response.text


def test_create_expense_parses_currency_text(client: TestClient):
    """Test POST /v1/expenses accepts '$4.50' and keeps exact decimals"""
    response = client.post(
        "/v1/expenses",
        json={"title": "Coffee", "amount": "$4.50", "date": "2024-06-29T08:00:00", "category": "Food"},
    )

    assert response.status_code == 201
    data = response.json()
    assert Decimal(data["amount"]) == Decimal("4.50")
    assert data["is_recurring"] is False
    assert uuid.UUID(data["id"])


@pytest.mark.parametrize("amount", ["abc", 0, -3])
def test_create_expense_rejects_bad_amount(client: TestClient, amount):
    response = client.post("/v1/expenses", json={"title": "Coffee", "amount": amount, "date": "2024-06-29T08:00:00"})
    assert response.status_code == 422


def test_create_expense_rejects_empty_title(client: TestClient):
    response = client.post("/v1/expenses", json={"title": "", "amount": 3, "date": "2024-06-29T08:00:00"})
    assert response.status_code == 422


def test_expense_update_and_delete(client: TestClient):
    """Test PUT then DELETE /v1/expenses/{expense_id}"""
    created = client.post(
        "/v1/expenses", json={"title": "Lunch", "amount": 12, "date": "2024-06-28T12:00:00"}
    ).json()

    updated = client.put(f"/v1/expenses/{created['id']}", json={"amount": "15.25", "category": "Food"})
    assert updated.status_code == 200
    assert Decimal(updated.json()["amount"]) == Decimal("15.25")
    assert updated.json()["category"] == "Food"
    assert updated.json()["title"] == "Lunch"

    assert client.delete(f"/v1/expenses/{created['id']}").status_code == 204
    assert client.get(f"/v1/expenses/{created['id']}").status_code == 404


def test_get_expense_invalid_id(client: TestClient):
    assert client.get("/v1/expenses/not-a-uuid").status_code == 400


def test_get_expense_not_found(client: TestClient):
    fake_uuid = "00000000-0000-0000-0000-000000000000"
    assert client.get(f"/v1/expenses/{fake_uuid}").status_code == 404


def test_list_expenses_newest_first(seeded_client: TestClient):
    titles = [e["title"] for e in seeded_client.get("/v1/expenses").json()]
    assert titles == ["Coffee", "Groceries", "Rent"]


def test_occurrences_default_cutoff(seeded_client: TestClient):
    """Test recurring rent expands monthly up to now (Jun 30)"""
    data = seeded_client.get("/v1/expenses/occurrences").json()

    rent = [o["date"] for o in data["occurrences"] if o["title"] == "Rent"]
    assert rent == ["2024-04-15T09:00:00", "2024-05-15T09:00:00", "2024-06-15T09:00:00"]
    assert len(data["occurrences"]) == 5
    assert data["through"] == "2024-06-30T12:00:00"


def test_occurrences_explicit_cutoff(seeded_client: TestClient):
    data = seeded_client.get("/v1/expenses/occurrences", params={"through": "2024-08-15T09:00:00"}).json()

    rent = [o for o in data["occurrences"] if o["title"] == "Rent"]
    assert len(rent) == 5


def test_insights_endpoint(seeded_client: TestClient):
    """Test GET /v1/insights rollup as of Jun 30"""
    response = seeded_client.get("/v1/insights")

    assert response.status_code == 200
    data = response.json()
    assert data["total_all_time"] == pytest.approx(3054.5)
    assert data["last30_total"] == pytest.approx(1054.5)
    assert data["average_daily_last30"] == pytest.approx(35.15)
    assert data["top_category"] == "Housing"
    assert data["top_category_total"] == pytest.approx(1000.0)
    assert data["biggest_day"]["date"] == "2024-04-15T00:00:00"
    assert data["last7_total"] == pytest.approx(4.5)
    assert data["previous7_total"] == pytest.approx(50.0)
    assert data["trend_percent"] == pytest.approx(-91.0)
    assert len(data["daily_totals"]) == 5


def test_insights_empty(client: TestClient):
    data = client.get("/v1/insights").json()

    assert data["total_all_time"] == 0
    assert data["top_category"] is None
    assert data["biggest_day"] is None
    assert data["trend_percent"] is None
    assert data["daily_totals"] == []


def test_questions_endpoint(client: TestClient):
    questions = client.get("/v1/need-score/questions").json()

    assert len(questions) == 11
    assert questions[2]["kind"] == "number"
    assert questions[4]["choices"] == ["<1 month", "1-6 months", ">6 months"]


def test_need_score_endpoint(client: TestClient):
    """Test POST /v1/need-score answering yes to everything"""
    response = client.post("/v1/need-score", json={"item_name": "Winter coat", "answers": ALL_YES})

    assert response.status_code == 200
    data = response.json()
    assert data["need_percent"] == 100
    assert data["want_percent"] == 0
    assert data["verdict"] == "NEED"
    assert data["message"].startswith("Winter coat is quite likely a NEED")
    assert data["total_score"] == 56
    assert data["max_score"] == 56
    assert data["answered"] == 11


def test_need_score_partial_answers(client: TestClient):
    data = client.post("/v1/need-score", json={"item_name": "Gadget", "answers": [True, True]}).json()

    assert data["need_percent"] == 36
    assert data["verdict"] == "WANT"


def test_need_score_blank_item_name(client: TestClient):
    response = client.post("/v1/need-score", json={"item_name": "   ", "answers": []})
    assert response.status_code == 422


def test_need_score_history_dedupes_repeat(client: TestClient):
    """Test resubmitting the same item and score keeps one history entry"""
    for _ in range(2):
        client.post("/v1/need-score", json={"item_name": "Winter coat", "answers": ALL_YES})

    entries = client.get("/v1/need-score/history").json()["entries"]
    assert len(entries) == 1
    assert entries[0]["item_name"] == "Winter coat"
    assert entries[0]["need_percent"] == 100


def test_need_score_history_cap(client: TestClient):
    """Test 21 results keep the newest 20"""
    for i in range(21):
        client.post("/v1/need-score", json={"item_name": f"item-{i}", "answers": []})

    entries = client.get("/v1/need-score/history").json()["entries"]
    assert len(entries) == 20
    assert entries[0]["item_name"] == "item-20"
    assert entries[-1]["item_name"] == "item-1"


def test_goal_plan_with_target_date(client: TestClient):
    """Test GET /v1/goals/{goal_id}/plan for a dated goal"""
    goal = client.post(
        "/v1/goals",
        json={
            "title": "Bike",
            "target_amount": "300",
            "target_date": "2024-07-20T00:00:00",
            "weekly_income": 500,
            "savings_rate": 0.1,
        },
    ).json()

    data = client.get(f"/v1/goals/{goal['id']}/plan").json()

    assert data["weekly_savings"] == pytest.approx(50.0)
    assert data["plan"]["weeks"] == 3
    assert data["plan"]["months"] == 1
    assert data["plan"]["required_weekly"] == pytest.approx(100.0)
    assert data["plan"]["extra_weekly"] == pytest.approx(50.0)
    assert data["plan"]["on_track"] is False
    assert data["time_to_goal"] is None


def test_goal_plan_after_clearing_target_date(client: TestClient):
    """Test removing the target date switches to a time-to-goal estimate"""
    goal = client.post(
        "/v1/goals",
        json={"title": "Bike", "target_amount": 300, "target_date": "2024-07-20T00:00:00", "weekly_income": 500, "savings_rate": 0.1},
    ).json()

    updated = client.put(f"/v1/goals/{goal['id']}", json={"target_date": None})
    assert updated.json()["target_date"] is None

    data = client.get(f"/v1/goals/{goal['id']}/plan").json()
    assert data["plan"] is None
    assert data["time_to_goal"]["weeks"] == 6
    assert data["time_to_goal"]["estimated_date"] == "2024-08-11T12:00:00"


def test_goal_rejects_savings_rate_above_limit(client: TestClient):
    response = client.post("/v1/goals", json={"title": "Bike", "target_amount": 300, "savings_rate": 0.9})
    assert response.status_code == 422


def test_goal_from_score(client: TestClient):
    """Test POST /v1/goals/from-score prefills title and price"""
    response = client.post("/v1/goals/from-score", json={"item_name": "Headphones", "answers": [True, False, "149.99"]})

    assert response.status_code == 201
    goal = response.json()
    assert goal["title"] == "Headphones"
    assert Decimal(goal["target_amount"]) == Decimal("149.99")
    assert goal["savings_rate"] == pytest.approx(0.2)

    plan = client.get(f"/v1/goals/{goal['id']}/plan").json()
    assert plan["weekly_savings"] == 0
    assert plan["plan"] is None
    assert plan["time_to_goal"] is None


def test_goal_delete(client: TestClient):
    goal = client.post("/v1/goals", json={"title": "Bike", "target_amount": 300}).json()

    assert client.delete(f"/v1/goals/{goal['id']}").status_code == 204
    assert client.get(f"/v1/goals/{goal['id']}").status_code == 404
    assert client.get("/v1/goals").json() == []


def test_settings_endpoint(client: TestClient):
    data = client.get("/v1/settings").json()

    assert data["accent_choice"] == "green"
    assert data["sound_enabled"] is True
    assert data["default_savings_rate"] == pytest.approx(0.2)


def test_need_score_history_export(client: TestClient):
    """Test exported history uses the flat camelCase record format"""
    client.post("/v1/need-score", json={"item_name": "Winter coat", "answers": ALL_YES})

    exported = client.get("/v1/need-score/history/export").json()

    assert len(exported) == 1
    assert set(exported[0]) == {"id", "itemName", "needPercent", "wantPercent", "date"}
    assert exported[0]["itemName"] == "Winter coat"
    assert exported[0]["needPercent"] == 100
    assert exported[0]["date"] == "2024-06-30T12:00:00"
