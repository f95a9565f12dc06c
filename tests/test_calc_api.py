"""Tests for the HTTP surface."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from rdcredit.calc_api import get_active_regime
from rdcredit.law_regime import DEFAULT_REGIME_ID, resolve_regime
from rdcredit.main import app

from conftest import TAX_YEAR


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def _body(**overrides):
    body = {
        "business_type": "technology",
        "current_year_revenue": "1200000",
        "year_of_first_revenue": TAX_YEAR - 2,
        "has_income_tax_liability": False,
        "quarterly_payroll_tax": "30000",
        "technical_employee_count": 4,
        "average_technical_salary": "120000",
        "rd_allocation_percentage": 50,
        "contractor_costs": "40000",
        "supplies_costs": "5000",
        "software_costs": "6000",
        "cloud_costs": "9000",
        "prior_year_qres": [],
        "is_first_time_filer": True,
        "section_280c_election": "full",
        "tax_year": TAX_YEAR,
    }
    body.update(overrides)
    return body


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.json()["law_regime"] == DEFAULT_REGIME_ID


def test_calculate(client):
    resp = client.post("/calculate", json=_body())
    assert resp.status_code == 200
    data = resp.json()
    assert Decimal(data["federal_credit"]) == Decimal("17160")
    assert Decimal(data["qualified_expenses"]["total"]) == Decimal("286000")
    assert data["pricing_tier"] == 2
    assert data["is_qsb_eligible"] is True
    assert data["provenance"]["regime_id"] == DEFAULT_REGIME_ID
    assert Decimal(data["immediate_cash_impact"]) == Decimal("303160")
    # 750 fee / 4,290 quarterly offset x 90 days = 15.7
    assert data["roi"]["payback_days"] == 16


def test_calculate_uses_active_regime(client):
    app.dependency_overrides[get_active_regime] = lambda: resolve_regime("capitalize_amortize")
    data = client.post("/calculate", json=_body()).json()
    assert data["capitalization_required"] is True
    assert data["provenance"]["regime_id"] == "capitalize_amortize"
    assert len(data["warnings"]) == 1


def test_out_of_range_input_is_422(client):
    resp = client.post("/calculate", json=_body(rd_allocation_percentage=140, contractor_costs="-5"))
    assert resp.status_code == 422
    errors = resp.json()["errors"]
    assert len(errors) == 2


def test_malformed_body_is_rejected_before_engine(client):
    resp = client.post("/calculate", json=_body(tax_year="next year"))
    assert resp.status_code == 422
    assert "errors" not in resp.json()


def test_regimes(client):
    data = client.get("/regimes").json()
    assert data["active"] == DEFAULT_REGIME_ID
    assert "capitalize_amortize" in data["regimes"]

    regime = client.get("/regimes/proposed").json()
    assert Decimal(regime["credit_rate_repeat"]) == Decimal("0.16")

    assert client.get("/regimes/bogus").status_code == 404


def test_pricing_endpoints(client):
    tiers = client.get("/pricing/tiers").json()
    assert len(tiers) == 8
    assert tiers[-1]["max_credit"] is None

    assert client.get("/pricing/tier", params={"credit": "5000"}).json()["tier"] == 1
    assert client.get("/pricing/tier", params={"credit": "4999.99"}).json()["tier"] == 0
    assert client.get("/pricing/tier", params={"credit": "-1"}).status_code == 422
