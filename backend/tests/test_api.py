from datetime import date
from decimal import Decimal
from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from kiraya.api.deps import db
from kiraya.core.security import create_access_token
from kiraya.db.base import Base
from kiraya.main import app
from kiraya.models.paid_expense import PaidExpense
from kiraya.models.property import Property
from kiraya.models.tenant import Tenant
from kiraya.models.tenant_expense import TenantExpense
from kiraya.models.unit import Unit
from kiraya.seed import seed_catalogs


@pytest.fixture()
def Session():
    eng = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(eng)
    factory = sessionmaker(bind=eng, autoflush=False, autocommit=False, future=True)
    s = factory()
    try:
        seed_catalogs(s)
    finally:
        s.close()
    yield factory
    eng.dispose()


@pytest.fixture()
def ids(Session):
    s = Session()
    try:
        p = Property(name="Green Villa", owner_id=1)
        s.add(p)
        s.flush()
        u = Unit(property_id=p.id, name="A-101")
        s.add(u)
        s.flush()
        t = Tenant(unit_id=u.id, name="Asha Verma", contact_number="9876543210", government_id_type_id=1)
        s.add(t)
        s.flush()

        rent = TenantExpense(
            tenant_id=t.id,
            expense_type_id=1,
            expense_cycle_id=2,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 3, 31),
            amount=Decimal("1000"),
        )
        water = TenantExpense(
            tenant_id=t.id,
            expense_type_id=4,
            expense_cycle_id=3,
            start_date=date(2024, 1, 15),
            amount=Decimal("300"),
            comments="shared meter",
        )
        s.add_all([rent, water])
        s.flush()

        s.add_all(
            [
                PaidExpense(
                    tenant_id=t.id,
                    expense_type_id=1,
                    tenant_expense_id=rent.id,
                    payment_date=date(2024, 3, 10),
                    amount=Decimal("400"),
                    comments="cash",
                ),
                PaidExpense(tenant_id=t.id, expense_type_id=4, payment_date=date(2024, 2, 2), amount=Decimal("100")),
            ]
        )
        s.commit()
        return {"property": p.id, "unit": u.id, "tenant": t.id, "rent": rent.id, "water": water.id}
    finally:
        s.close()


@pytest.fixture()
def client(Session):
    def _db():
        s = Session()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[db] = _db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def auth():
    return {"Authorization": f"Bearer {create_access_token('1')}"}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/api/health").status_code == 200


def test_requires_valid_token(client, ids):
    r = client.get(f"/tenants/{ids['tenant']}/pending")
    assert r.status_code in (401, 403)

    r = client.get(f"/tenants/{ids['tenant']}/pending", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json()["detail"] == "invalid_token"


def test_monthly_statement(client, ids, auth):
    r = client.get(f"/tenants/{ids['tenant']}/statement", params={"year": 2024, "month": 3}, headers=auth)
    assert r.status_code == 200, r.text
    body = r.json()

    assert body["tenant_id"] == ids["tenant"]
    assert body["tenant_details"]["name"] == "Asha Verma"
    assert body["tenant_details"]["government_id_type_name"] == "Aadhar"

    lines = [(li["date"], li["type"], li["amount"], li["running_balance"]) for li in body["line_items"]]
    assert lines == [
        ("2024-03-01", "Expense", 1000.0, 1000.0),
        ("2024-03-10", "Payment", -400.0, 600.0),
    ]
    assert body["line_items"][0]["description"] == "Rent (Month)"
    assert body["line_items"][1]["comments"] == "cash"
    assert body["line_items"][1]["linked_expense_id"] == ids["rent"]

    summary = body["summary"]
    assert summary["total_expected"] == 1000.0
    assert summary["total_paid"] == 400.0
    assert summary["pending_amount"] == 600.0


def test_statement_rejects_bad_month_and_unknown_tenant(client, ids, auth):
    r = client.get(f"/tenants/{ids['tenant']}/statement", params={"year": 2024, "month": 13}, headers=auth)
    assert r.status_code == 422

    r = client.get("/tenants/999999/statement", params={"year": 2024, "month": 3}, headers=auth)
    assert r.status_code == 404
    assert r.json()["detail"] == "tenant_not_found"


def test_pending_endpoints_agree(client, ids, auth):
    q = {"as_of": "2024-04-15"}

    rent = client.get(f"/tenant-expenses/{ids['rent']}/pending", params=q, headers=auth).json()
    assert rent == {"scope": "obligation", "id": ids["rent"], "as_of": "2024-04-15", "pending_amount": 2600.0}

    # water: quarterly from Jan 15, the unlinked 100 does not count
    water = client.get(f"/tenant-expenses/{ids['water']}/pending", params=q, headers=auth).json()
    assert water["pending_amount"] == 600.0

    tenant = client.get(f"/tenants/{ids['tenant']}/pending", params=q, headers=auth).json()
    unit = client.get(f"/units/{ids['unit']}/pending", params=q, headers=auth).json()
    prop = client.get(f"/properties/{ids['property']}/pending", params=q, headers=auth).json()
    assert tenant["pending_amount"] == unit["pending_amount"] == prop["pending_amount"] == 3200.0
    assert prop["scope"] == "property"


@pytest.mark.parametrize(
    "path, detail",
    [
        ("/tenant-expenses/999999/pending", "tenant_expense_not_found"),
        ("/tenants/999999/pending", "tenant_not_found"),
        ("/units/999999/pending", "unit_not_found"),
        ("/properties/999999/pending", "property_not_found"),
        ("/properties/999999/pending/breakdown", "property_not_found"),
    ],
)
def test_pending_not_found(client, auth, path, detail):
    r = client.get(path, headers=auth)
    assert r.status_code == 404
    assert r.json()["detail"] == detail


def test_property_breakdown(client, ids, auth):
    r = client.get(f"/properties/{ids['property']}/pending/breakdown", params={"as_of": "2024-04-15"}, headers=auth)
    assert r.status_code == 200, r.text
    body = r.json()

    assert body["total_pending"] == 3200.0
    (unit,) = body["units"]
    (tenant,) = unit["tenants"]
    assert unit["unit_name"] == "A-101"
    assert tenant["tenant_name"] == "Asha Verma"

    by_id = {e["tenant_expense_id"]: e for e in tenant["expenses"]}
    assert by_id[ids["rent"]]["cycles_due"] == 3
    assert by_id[ids["rent"]]["total_paid"] == 400.0
    assert by_id[ids["water"]]["cycles_due"] == 2
    assert by_id[ids["water"]]["cycle_name"] == "Quarter"


def test_active_expenses(client, ids, auth):
    r = client.get(f"/tenants/{ids['tenant']}/expenses/active", headers=auth)
    assert r.status_code == 200
    (only,) = r.json()
    assert only["tenant_expense_id"] == ids["water"]
    assert only["expense_type_name"] == "Water"
    assert only["is_advance_payment"] is False
    assert only["comments"] == "shared meter"

    assert client.get("/tenants/999999/expenses/active", headers=auth).status_code == 404


def test_statement_export(client, ids, auth):
    openpyxl = pytest.importorskip("openpyxl")

    r = client.get(f"/tenants/{ids['tenant']}/statement/export", params={"year": 2024, "month": 3}, headers=auth)
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/vnd.openxmlformats")
    assert 'filename="Asha_Verma_2024-03.xlsx"' in r.headers["content-disposition"]

    ws = openpyxl.load_workbook(BytesIO(r.content))["Statement"]
    assert ws.cell(row=1, column=2).value == "Asha Verma"
    assert ws.cell(row=5, column=3).value == "Rent (Month)"
    assert ws.cell(row=6, column=5).value == 600
