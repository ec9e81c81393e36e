"""Read-only accessors that load obligation/payment snapshots for the billing core."""
from __future__ import annotations

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from kiraya.models.expense_cycle import ExpenseCycle
from kiraya.models.expense_type import ExpenseType
from kiraya.models.government_id_type import GovernmentIdType
from kiraya.models.paid_expense import PaidExpense
from kiraya.models.property import Property
from kiraya.models.tenant import Tenant
from kiraya.models.tenant_expense import TenantExpense
from kiraya.models.unit import Unit
from kiraya.services.cycles import parse_period_kind
from kiraya.services.records import (
    Obligation,
    Payment,
    PropertySnapshot,
    TenantDetails,
    TenantSnapshot,
    UnitSnapshot,
)

logger = logging.getLogger(__name__)


def _to_obligation(te: TenantExpense, et: ExpenseType | None, cycle: ExpenseCycle | None) -> Obligation:
    cycle_name = cycle.name if cycle is not None else ""
    kind = parse_period_kind(cycle_name)
    if kind is None:
        logger.warning("tenant expense %s has unrecognised cycle %r; treating as never due", te.id, cycle_name)
    return Obligation(
        id=te.id,
        tenant_id=te.tenant_id,
        start_date=te.start_date,
        end_date=te.end_date,
        amount=te.amount,
        period_kind=kind,
        expense_type_id=te.expense_type_id,
        expense_type_name=et.name if et is not None else "",
        cycle_name=cycle_name,
        is_advance_payment=bool(et.is_advance_payment) if et is not None else False,
        comments=te.comments,
    )


def _to_payment(pe: PaidExpense, et: ExpenseType | None) -> Payment:
    return Payment(
        id=pe.id,
        tenant_id=pe.tenant_id,
        payment_date=pe.payment_date,
        amount=pe.amount,
        tenant_expense_id=pe.tenant_expense_id,
        expense_type_id=pe.expense_type_id,
        expense_type_name=et.name if et is not None else "",
        comments=pe.comments,
    )


def _obligation_query():
    return (
        select(TenantExpense, ExpenseType, ExpenseCycle)
        .outerjoin(ExpenseType, ExpenseType.id == TenantExpense.expense_type_id)
        .outerjoin(ExpenseCycle, ExpenseCycle.id == TenantExpense.expense_cycle_id)
    )


def _payment_query():
    return select(PaidExpense, ExpenseType).outerjoin(ExpenseType, ExpenseType.id == PaidExpense.expense_type_id)


def load_tenant(s: Session, tenant_id: int) -> Tenant | None:
    return s.execute(select(Tenant).where(Tenant.id == tenant_id)).scalar_one_or_none()


def tenant_details(s: Session, tenant_id: int) -> TenantDetails | None:
    row = s.execute(
        select(Tenant, GovernmentIdType)
        .outerjoin(GovernmentIdType, GovernmentIdType.id == Tenant.government_id_type_id)
        .where(Tenant.id == tenant_id)
    ).one_or_none()
    if row is None:
        return None
    t, gid = row
    return TenantDetails(
        tenant_id=t.id,
        unit_id=t.unit_id,
        name=t.name,
        contact_number=t.contact_number,
        government_id=t.government_id,
        government_id_type_id=t.government_id_type_id,
        government_id_type_name=gid.name if gid is not None else None,
        is_active=bool(t.is_active),
    )


def load_obligation(s: Session, tenant_expense_id: int) -> Obligation | None:
    row = s.execute(_obligation_query().where(TenantExpense.id == tenant_expense_id)).one_or_none()
    if row is None:
        return None
    return _to_obligation(*row)


def obligations_for_tenant(s: Session, tenant_id: int, open_ended_only: bool = False) -> list[Obligation]:
    q = _obligation_query().where(TenantExpense.tenant_id == tenant_id)
    if open_ended_only:
        q = q.where(TenantExpense.end_date.is_(None))
    q = q.order_by(TenantExpense.start_date.asc(), TenantExpense.id.asc())
    return [_to_obligation(*row) for row in s.execute(q).all()]


def payments_for_tenant(s: Session, tenant_id: int, start: date | None = None, end: date | None = None) -> list[Payment]:
    q = _payment_query().where(PaidExpense.tenant_id == tenant_id)
    if start is not None:
        q = q.where(PaidExpense.payment_date >= start)
    if end is not None:
        q = q.where(PaidExpense.payment_date <= end)
    q = q.order_by(PaidExpense.payment_date.asc(), PaidExpense.id.asc())
    return [_to_payment(*row) for row in s.execute(q).all()]


def payments_for_obligation(s: Session, tenant_expense_id: int) -> list[Payment]:
    q = (
        _payment_query()
        .where(PaidExpense.tenant_expense_id == tenant_expense_id)
        .order_by(PaidExpense.payment_date.asc(), PaidExpense.id.asc())
    )
    return [_to_payment(*row) for row in s.execute(q).all()]


def _tenant_snapshots(s: Session, tenants: list[Tenant]) -> list[TenantSnapshot]:
    if not tenants:
        return []
    ids = [t.id for t in tenants]
    out = {t.id: TenantSnapshot(tenant_id=t.id, name=t.name) for t in tenants}

    oq = (
        _obligation_query()
        .where(TenantExpense.tenant_id.in_(ids))
        .order_by(TenantExpense.start_date.asc(), TenantExpense.id.asc())
    )
    for row in s.execute(oq).all():
        o = _to_obligation(*row)
        out[o.tenant_id].obligations.append(o)

    pq = _payment_query().where(PaidExpense.tenant_id.in_(ids)).order_by(PaidExpense.payment_date.asc(), PaidExpense.id.asc())
    for row in s.execute(pq).all():
        p = _to_payment(*row)
        out[p.tenant_id].payments.append(p)

    return [out[i] for i in ids]


def tenant_snapshot(s: Session, tenant_id: int) -> TenantSnapshot | None:
    t = load_tenant(s, tenant_id)
    if t is None:
        return None
    return _tenant_snapshots(s, [t])[0]


def _tenants_of_units(s: Session, unit_ids: list[int]) -> list[Tenant]:
    if not unit_ids:
        return []
    return list(
        s.execute(select(Tenant).where(Tenant.unit_id.in_(unit_ids)).order_by(Tenant.id.asc())).scalars().all()
    )


def unit_snapshot(s: Session, unit_id: int) -> UnitSnapshot | None:
    u = s.execute(select(Unit).where(Unit.id == unit_id)).scalar_one_or_none()
    if u is None:
        return None
    return UnitSnapshot(unit_id=u.id, name=u.name, tenants=_tenant_snapshots(s, _tenants_of_units(s, [u.id])))


def property_snapshot(s: Session, property_id: int) -> PropertySnapshot | None:
    p = s.execute(select(Property).where(Property.id == property_id)).scalar_one_or_none()
    if p is None:
        return None

    units = s.execute(select(Unit).where(Unit.property_id == p.id).order_by(Unit.id.asc())).scalars().all()
    tenants = _tenants_of_units(s, [u.id for u in units])
    by_unit: dict[int, list[TenantSnapshot]] = {}
    for t, snap in zip(tenants, _tenant_snapshots(s, tenants)):
        by_unit.setdefault(t.unit_id, []).append(snap)

    return PropertySnapshot(
        property_id=p.id,
        name=p.name,
        units=[UnitSnapshot(unit_id=u.id, name=u.name, tenants=by_unit.get(u.id, [])) for u in units],
    )
