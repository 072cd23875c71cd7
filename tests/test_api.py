"""
API tests using FastAPI's TestClient.
"""

import pytest
from fastapi.testclient import TestClient

import statement
from main import app, default_rate_tables
from schemas import RateEntry, RateTables


def side(**overrides):
    data = {"cpc": "7th", "basic_pay": 50000, "pay_level": "10", "increment_month": 7}
    data.update(overrides)
    return data


def run_payload(rates=None, **request_overrides):
    request = {
        "employee_id": "E12345",
        "employee_name": "A. K. Sharma",
        "designation": "Senior Officer",
        "department": "Accounts",
        "from_date": "2023-02-01",
        "to_date": "2023-02-28",
        "paid": side(),
        "to_be_paid": side(basic_pay=56000, da={"applicable": True}),
    }
    request.update(request_overrides)
    return {"request": request, "rates": rates}


DA_RATES = {"da": [{"from_date": "2016-01-01", "rate": 50}]}


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestCalculate:
    def test_calculate_with_rates_in_body(self, client):
        response = client.post("/api/arrears/calculate", json=run_payload(DA_RATES))
        assert response.status_code == 200
        data = response.json()
        assert data["rows"][0]["month"] == "Feb 2023"
        assert data["rows"][0]["due"]["total"] == 84000
        assert data["totals"] == {"drawn_total": 50000, "due_total": 84000, "difference_total": 34000}
        assert data["employee"]["employee_name"] == "A. K. Sharma"

    def test_falls_back_to_configured_rates(self, client):
        app.dependency_overrides[default_rate_tables] = lambda: RateTables(
            da=[RateEntry.model_validate({"from_date": "2016-01-01", "rate": 50})]
        )
        response = client.post("/api/arrears/calculate", json=run_payload())
        assert response.status_code == 200
        assert response.json()["totals"]["difference_total"] == 34000

    def test_period_must_not_be_reversed(self, client):
        payload = run_payload(DA_RATES, from_date="2023-03-01", to_date="2023-02-01")
        assert client.post("/api/arrears/calculate", json=payload).status_code == 422

    def test_refixed_pay_requires_date(self, client):
        payload = run_payload(DA_RATES, to_be_paid=side(refixed_basic_pay=60000))
        assert client.post("/api/arrears/calculate", json=payload).status_code == 422

    def test_increment_month_must_be_january_or_july(self, client):
        payload = run_payload(DA_RATES, paid=side(increment_month=4))
        assert client.post("/api/arrears/calculate", json=payload).status_code == 422

    def test_calculation_failure(self, client, monkeypatch):
        def boom(*args, **kwargs):
            raise ZeroDivisionError("division by zero")

        monkeypatch.setattr(statement, "_build", boom)
        response = client.post("/api/arrears/calculate", json=run_payload(DA_RATES))
        assert response.status_code == 422
        assert response.json() == {"detail": "Calculation failed", "reason": "division by zero"}


class TestReferenceData:
    def test_root(self, client):
        assert client.get("/").json() == {"message": "Arrear Calculator API Running"}

    def test_seventh_cpc_pay_levels(self, client):
        response = client.get("/api/pay-levels/7th")
        assert response.status_code == 200
        assert {"level": "10", "label": "Level 10"} in response.json()

    def test_sixth_cpc_pay_levels(self, client):
        levels = [item["level"] for item in client.get("/api/pay-levels/6th").json()]
        assert levels[0] == "PB-1S/1300"

    def test_unknown_cpc(self, client):
        assert client.get("/api/pay-levels/5th").status_code == 404

    def test_configured_rates(self, client):
        app.dependency_overrides[default_rate_tables] = lambda: RateTables(
            npa=[RateEntry.model_validate({"from_date": "2017-07-01", "rate": 20})]
        )
        data = client.get("/api/rates").json()
        assert data["npa"][0]["rate"] == 20
        assert data["da"] == []
