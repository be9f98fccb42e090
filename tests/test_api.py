"""Tests for the HTTP surface: health check and the v1 ITR endpoints."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from itr_engine.domain.models.enums import AssessmentYear
from itr_engine.main import app

D = Decimal

SALARIED = {
    "assessee_name": "Test Assessee",
    "assessment_year": "2024-25",
    "salary": {"basic_salary": [{"amount": "1200000"}]},
    "tds": "179400",
}


@pytest.fixture
def client():
    return TestClient(app)


def _amount(value) -> Decimal:
    return Decimal(str(value))


class TestHealth:

    def test_root(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"
        assert "running" in resp.json()["message"]


class TestYears:

    def test_lists_every_year(self, client):
        resp = client.get("/api/v1/itr/years")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        years = [entry["assessment_year"] for entry in body["data"]]
        assert years == [ay.value for ay in AssessmentYear]
        latest = body["data"][-1]
        assert latest["new_regime_available"] is True
        assert latest["filing_due_date_non_audit"]


class TestCompute:

    def test_salaried(self, client):
        resp = client.post("/api/v1/itr/compute", json=SALARIED)
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        data = body["data"]
        assert data["assessment_year"] == "2024-25"
        assert data["regime"] == "old"
        assert _amount(data["net_taxable_income"]) == D("1200000")
        assert _amount(data["total_tax_payable"]) == D("179400")
        assert _amount(data["net_payable"]) == D("0")
        assert "u_s_234c" in data["interest"]

    def test_unknown_year_error_envelope(self, client):
        resp = client.post("/api/v1/itr/compute", json={**SALARIED, "assessment_year": "2030-31"})
        assert resp.status_code == 404
        body = resp.json()
        assert body["status"] == "error"
        assert body["data"] is None
        assert "2030-31" in body["message"]

    def test_invalid_declaration(self, client):
        resp = client.post("/api/v1/itr/compute", json={**SALARIED, "entity_type": "partnership"})
        assert resp.status_code == 422


class TestCompare:

    def test_recommends_new_regime(self, client):
        resp = client.post("/api/v1/itr/compare", json=SALARIED)
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["recommended_regime"] == "new"
        assert _amount(data["new_regime"]["total_tax_payable"]) == D("93600")
        assert _amount(data["savings"]) == (
            _amount(data["old_regime"]["net_payable"]) - _amount(data["new_regime"]["net_payable"])
        )

    def test_firm_has_no_new_regime(self, client):
        resp = client.post("/api/v1/itr/compare", json={"entity_type": "firm"})
        assert resp.status_code == 200
        assert resp.json()["data"]["new_regime"] is None

    def test_unknown_year(self, client):
        resp = client.post("/api/v1/itr/compare", json={"assessment_year": "1999-00"})
        assert resp.status_code == 404
