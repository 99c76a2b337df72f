"""
Sales analytics tests.

Tests:
1.    Range start dates
2-3.  Summary (counts by status, revenue, items sold, range filter)
4-5.  Time series (daily, monthly, from/to)
6.    Top categories
7-8.  Material breakdowns (all invoices, one invoice)
9.    Top clients (including invoices without a client)
"""

import copy
from datetime import date, timedelta

from invoicer.analytics import TimeRange, range_start


def _dated_payload(payload, invoice_no, days_ago=0, client=True):
    data = copy.deepcopy(payload)
    data["meta"]["invoice_no"] = invoice_no
    data["meta"]["invoice_date"] = (date.today() - timedelta(days=days_ago)).isoformat()
    if not client:
        data["client"] = None
    return data


def _seed(client, payload):
    """Three invoices: two recent (one paid), one 60 days old without a client."""
    ids = []
    for invoice_no, days_ago, has_client in [("INV-1", 0, True), ("INV-2", 1, True),
                                             ("INV-3", 60, False)]:
        response = client.post("/api/invoices/",
                               json=_dated_payload(payload, invoice_no, days_ago, has_client))
        assert response.status_code == 200
        ids.append(response.json()["id"])
    client.patch(f"/api/invoices/{ids[0]}/status", json={"status": "paid"})
    return ids


def test_range_start():
    today = date(2026, 10, 19)
    assert range_start(TimeRange.DAYS_7, today=today) == date(2026, 10, 12)
    assert range_start(TimeRange.DAYS_90, today=today) == date(2026, 7, 21)
    assert range_start(TimeRange.ALL, today=today) is None
    assert range_start("30days", today=today) == date(2026, 9, 19)


def test_summary_all_time(client, invoice_payload):
    _seed(client, invoice_payload)
    summary = client.get("/api/analytics/summary").json()
    assert summary["total_invoices"] == 3
    assert summary["total_revenue"] == 3 * 27360
    assert summary["avg_invoice_value"] == 27360
    assert summary["total_items_sold"] == 9
    assert summary["draft_count"] == 2
    assert summary["paid_count"] == 1
    assert summary["sent_count"] == 0


def test_summary_range_and_empty(client, invoice_payload):
    empty = client.get("/api/analytics/summary").json()
    assert empty["total_invoices"] == 0
    assert empty["avg_invoice_value"] == 0

    _seed(client, invoice_payload)
    recent = client.get("/api/analytics/summary?range=7days").json()
    assert recent["total_invoices"] == 2
    assert recent["total_items_sold"] == 6


def test_timeseries_daily(client, invoice_payload):
    _seed(client, invoice_payload)
    series = client.get("/api/analytics/timeseries?range=30days").json()
    assert [p["period"] for p in series] == [
        (date.today() - timedelta(days=1)).isoformat(),
        date.today().isoformat(),
    ]
    assert all(p["invoice_count"] == 1 and p["revenue"] == 27360 for p in series)

    today = date.today().isoformat()
    only_today = client.get(f"/api/analytics/timeseries?from={today}&to={today}").json()
    assert len(only_today) == 1


def test_timeseries_monthly(client, invoice_payload):
    _seed(client, invoice_payload)
    series = client.get("/api/analytics/timeseries?interval=monthly").json()
    assert all(p["period"].endswith("-01") for p in series)
    assert sum(p["invoice_count"] for p in series) == 3
    assert series == sorted(series, key=lambda p: p["period"])


def test_top_categories(client, invoice_payload):
    _seed(client, invoice_payload)
    categories = client.get("/api/analytics/categories").json()
    assert [c["category"] for c in categories] == ["Cabinet", "Door"]
    assert categories[0]["item_count"] == 6
    assert categories[0]["revenue"] == 60000
    assert categories[1]["revenue"] == 15000


def test_material_breakdown(client, invoice_payload):
    _seed(client, invoice_payload)
    materials = client.get("/api/analytics/materials?range=7days").json()
    assert [m["material_name"] for m in materials] == [
        "Door hinges", "Cabinet body core (MDF 16mm)"]
    hinges = materials[0]
    assert hinges["unit"] == "pcs"
    assert hinges["total_qty"] == 40
    assert hinges["total_cost"] == 3560
    assert hinges["usage_count"] == 2


def test_invoice_materials(client, invoice_payload):
    ids = _seed(client, invoice_payload)
    materials = client.get(f"/api/analytics/invoices/{ids[0]}/materials").json()
    assert {m["material_name"]: m["total_qty"] for m in materials} == {
        "Door hinges": 20, "Cabinet body core (MDF 16mm)": 1}
    assert client.get("/api/analytics/invoices/999/materials").status_code == 404


def test_top_clients(client, invoice_payload):
    _seed(client, invoice_payload)
    clients = client.get("/api/analytics/top-clients").json()
    assert clients[0] == {"client_name": "Nour Hassan", "invoice_count": 2,
                          "total_revenue": 54720}
    assert clients[1]["client_name"] == "Unknown"
