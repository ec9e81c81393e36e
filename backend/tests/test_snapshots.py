import logging
from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from kiraya.db.base import Base
from kiraya.models.expense_cycle import ExpenseCycle
from kiraya.models.expense_type import ExpenseType
from kiraya.models.paid_expense import PaidExpense
from kiraya.models.property import Property
from kiraya.models.tenant import Tenant
from kiraya.models.tenant_expense import TenantExpense
from kiraya.models.unit import Unit
from kiraya.models.government_id_type import GovernmentIdType
from kiraya.seed import seed_catalogs
from kiraya.services import snapshots
from kiraya.services.pending import pending_for_property, pending_for_tenant, pending_for_unit
from kiraya.services.records import PeriodKind

AS_OF = date(2024, 4, 15)


@pytest.fixture(scope="session")
def engine():
    eng = create_engine("sqlite+pysqlite:///:memory:", future=True)
    Base.metadata.create_all(eng)
    return eng


@pytest.fixture()
def session(engine):
    connection = engine.connect()
    trans = connection.begin()
    Session = sessionmaker(bind=connection, autoflush=False, autocommit=False, future=True)
    s = Session()
    try:
        seed_catalogs(s)
        yield s
    finally:
        s.close()
        trans.rollback()
        connection.close()


def _mk_property(session, units: int = 1):
    p = Property(name=f"Property-{uuid4().hex[:8]}", owner_id=1)
    session.add(p)
    session.flush()
    out = []
    for i in range(units):
        u = Unit(property_id=p.id, name=f"U-{i + 1}")
        session.add(u)
        session.flush()
        out.append(u)
    session.commit()
    return p, out


def _mk_tenant(session, unit_id: int, name: str = "Tenant", gov_type_id: int | None = None):
    t = Tenant(unit_id=unit_id, name=name, contact_number="9000000000", government_id="X123", government_id_type_id=gov_type_id)
    session.add(t)
    session.commit()
    return t


def _add_expense(session, tenant_id: int, type_id: int, cycle_id: int, start: date, amount: str, end: date | None = None):
    te = TenantExpense(
        tenant_id=tenant_id,
        expense_type_id=type_id,
        expense_cycle_id=cycle_id,
        start_date=start,
        end_date=end,
        amount=Decimal(amount),
    )
    session.add(te)
    session.commit()
    return te


def _add_payment(session, tenant_id: int, type_id: int, d: date, amount: str, linked: int | None = None):
    pe = PaidExpense(
        tenant_id=tenant_id,
        expense_type_id=type_id,
        tenant_expense_id=linked,
        payment_date=d,
        amount=Decimal(amount),
    )
    session.add(pe)
    session.commit()
    return pe


def test_seed_is_idempotent(session):
    assert seed_catalogs(session) == 0
    rent = session.get(ExpenseType, 1)
    assert rent.name == "Rent" and rent.is_advance_payment
    assert session.get(ExpenseType, 3).is_advance_payment is False
    assert session.get(ExpenseCycle, 4).name == "HalfYear"
    assert session.get(GovernmentIdType, 1).name == "Aadhar"


def test_obligation_records_carry_names_and_advance_flag(session):
    _, (unit,) = _mk_property(session)
    t = _mk_tenant(session, unit.id)
    rent = _add_expense(session, t.id, 1, 2, date(2024, 1, 1), "12000")
    power = _add_expense(session, t.id, 3, 3, date(2023, 12, 1), "1500", end=date(2024, 5, 31))

    obs = snapshots.obligations_for_tenant(session, t.id)
    assert [o.id for o in obs] == [power.id, rent.id]

    r = snapshots.load_obligation(session, rent.id)
    assert r.expense_type_name == "Rent"
    assert r.cycle_name == "Month"
    assert r.period_kind == PeriodKind.MONTHLY
    assert r.is_advance_payment is True
    assert r.amount == Decimal("12000")

    active = snapshots.obligations_for_tenant(session, t.id, open_ended_only=True)
    assert [o.id for o in active] == [rent.id]

    assert snapshots.load_obligation(session, 999999) is None


def test_unrecognised_cycle_logs_warning(session, caplog):
    _, (unit,) = _mk_property(session)
    t = _mk_tenant(session, unit.id)
    cycle = ExpenseCycle(name=f"Fortnight-{uuid4().hex[:6]}")
    session.add(cycle)
    session.commit()
    te = _add_expense(session, t.id, 100, cycle.id, date(2024, 1, 1), "50")

    with caplog.at_level(logging.WARNING, logger="kiraya.services.snapshots"):
        o = snapshots.load_obligation(session, te.id)

    assert o.period_kind is None
    assert "unrecognised cycle" in caplog.text
    assert pending_for_tenant([o], [], AS_OF) == Decimal("0")


def test_payments_filtered_by_date_range(session):
    _, (unit,) = _mk_property(session)
    t = _mk_tenant(session, unit.id)
    te = _add_expense(session, t.id, 1, 2, date(2024, 1, 1), "1000")
    _add_payment(session, t.id, 1, date(2024, 2, 29), "1000", linked=te.id)
    _add_payment(session, t.id, 1, date(2024, 3, 1), "1000", linked=te.id)
    _add_payment(session, t.id, 4, date(2024, 3, 31), "80")

    march = snapshots.payments_for_tenant(session, t.id, date(2024, 3, 1), date(2024, 3, 31))
    assert [p.payment_date for p in march] == [date(2024, 3, 1), date(2024, 3, 31)]
    assert march[1].tenant_expense_id is None
    assert march[1].expense_type_name == "Water"

    assert len(snapshots.payments_for_tenant(session, t.id)) == 3
    assert len(snapshots.payments_for_obligation(session, te.id)) == 2


def test_tenant_details_resolves_government_id_type(session):
    _, (unit,) = _mk_property(session)
    t = _mk_tenant(session, unit.id, name="Kiran", gov_type_id=2)

    d = snapshots.tenant_details(session, t.id)
    assert d.name == "Kiran"
    assert d.unit_id == unit.id
    assert d.government_id_type_name == "Pancard"
    assert d.is_active is True

    assert snapshots.tenant_details(session, 999999) is None


def test_property_snapshot_aggregates_consistently(session):
    p, (u1, u2, u3) = _mk_property(session, units=3)
    a = _mk_tenant(session, u1.id, "A")
    b = _mk_tenant(session, u1.id, "B")
    c = _mk_tenant(session, u2.id, "C")

    ra = _add_expense(session, a.id, 1, 2, date(2024, 1, 1), "1000")
    _add_payment(session, a.id, 1, date(2024, 1, 1), "2500", linked=ra.id)
    _add_expense(session, b.id, 2, 1, date(2024, 1, 5), "20000")
    rc = _add_expense(session, c.id, 3, 3, date(2024, 1, 1), "600")
    _add_payment(session, c.id, 3, date(2024, 1, 10), "600", linked=rc.id)
    _add_payment(session, c.id, 3, date(2024, 1, 10), "999")

    snap = snapshots.property_snapshot(session, p.id)
    assert [u.unit_id for u in snap.units] == [u1.id, u2.id, u3.id]
    assert [t.tenant_id for t in snap.units[0].tenants] == [a.id, b.id]
    assert snap.units[2].tenants == []

    per_unit = [pending_for_unit(snapshots.unit_snapshot(session, u.id).tenants, AS_OF) for u in (u1, u2, u3)]
    total = pending_for_property(snap.units, AS_OF)

    assert per_unit == [Decimal("21500"), Decimal("600"), Decimal("0")]
    assert total == sum(per_unit)

    ts = snapshots.tenant_snapshot(session, c.id)
    assert len(ts.payments) == 2
    assert pending_for_tenant(ts.obligations, ts.payments, AS_OF) == Decimal("600")

    assert snapshots.property_snapshot(session, 999999) is None
    assert snapshots.unit_snapshot(session, 999999) is None
    assert snapshots.tenant_snapshot(session, 999999) is None
