from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tastegraph.app import app
from tastegraph.sales.csv_loader import SalesParseError, parse_sales_csv

client = TestClient(app)

SAMPLE_CSV = """\
sku_id,tags,qty,margin
M-01,"matcha, latte",12,1.4
C-02,"coffee,Cold Brew",30,
P-03,pastry,0,0.8
"""


# ── Parsing ──────────────────────────────────────────────────────────────


class TestParseSalesCsv:
    def test_parses_records(self):
        records = parse_sales_csv(SAMPLE_CSV)
        assert [r.sku_id for r in records] == ["M-01", "C-02", "P-03"]
        assert records[0].tags == ["matcha", "latte"]
        assert records[0].qty == 12
        assert records[0].margin == pytest.approx(1.4)

    def test_blank_margin_defaults_to_one(self):
        records = parse_sales_csv(SAMPLE_CSV)
        assert records[1].margin == 1.0
        assert records[1].tags == ["coffee", "cold brew"]

    def test_missing_margin_column_defaults_to_one(self):
        records = parse_sales_csv("SKU,tags,quantity\nA,tea,3\n")
        assert records[0].sku_id == "A"
        assert records[0].qty == 3
        assert records[0].margin == 1.0

    def test_lowercase_sku_header(self):
        records = parse_sales_csv("sku,tags,qty\nA,tea,3\n")
        assert records[0].sku_id == "A"

    def test_missing_required_columns(self):
        with pytest.raises(SalesParseError, match="tags, qty"):
            parse_sales_csv("sku_id,name\nA,Tea\n")

    def test_empty_file(self):
        with pytest.raises(SalesParseError, match="empty"):
            parse_sales_csv("")

    def test_header_only(self):
        with pytest.raises(SalesParseError, match="no sales rows"):
            parse_sales_csv("sku_id,tags,qty\n")

    def test_non_numeric_quantity_fails_whole_upload(self):
        with pytest.raises(SalesParseError, match="Row 3: qty 'lots'"):
            parse_sales_csv("sku_id,tags,qty\nA,tea,1\nB,coffee,lots\n")

    def test_blank_tags_rejected(self):
        with pytest.raises(SalesParseError, match="Row 2: tags"):
            parse_sales_csv('sku_id,tags,qty\nA," , ",1\n')

    def test_blank_sku_rejected(self):
        with pytest.raises(SalesParseError, match="Row 2: sku_id"):
            parse_sales_csv("sku_id,tags,qty\n,tea,1\n")

    def test_negative_quantity_rejected(self):
        with pytest.raises(SalesParseError, match="Row 2: qty"):
            parse_sales_csv("sku_id,tags,qty\nA,tea,-4\n")


# ── Endpoint ─────────────────────────────────────────────────────────────


def test_parse_endpoint_returns_records():
    resp = client.post("/sales/parse", json={"csv": SAMPLE_CSV})
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 3
    assert body["records"][2]["sku_id"] == "P-03"


def test_parse_endpoint_rejects_bad_csv():
    resp = client.post("/sales/parse", json={"csv": "sku_id,name\nA,Tea\n"})
    assert resp.status_code == 400
    assert "missing required column" in resp.json()["detail"]


def test_parse_endpoint_validates_body():
    resp = client.post("/sales/parse", json={"csv": ""})
    assert resp.status_code == 422
