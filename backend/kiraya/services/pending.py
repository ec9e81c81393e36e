"""Pending (due minus paid) amounts for an obligation, tenant, unit or property.

Every figure is recomputed from the snapshot on each call. Per-obligation
pending is floored at zero unless ``allow_negative`` is set, so an
overpayment on one charge does not offset another.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable

from kiraya.services.cycles import count_periods_due
from kiraya.services.records import Obligation, Payment, PropertySnapshot, TenantSnapshot, UnitSnapshot

ZERO = Decimal("0")


def apply_balance_policy(amount: Decimal, allow_negative: bool) -> Decimal:
    if allow_negative or amount > ZERO:
        return amount
    return ZERO


def expected_for_obligation(o: Obligation, as_of: date) -> Decimal:
    return count_periods_due(o, as_of) * o.amount


def paid_for_obligation(o: Obligation, payments: Iterable[Payment]) -> Decimal:
    return sum((p.amount for p in payments if p.tenant_expense_id == o.id), ZERO)


def pending_for_obligation(
    o: Obligation,
    payments: Iterable[Payment],
    as_of: date,
    allow_negative: bool = False,
) -> Decimal:
    pending = expected_for_obligation(o, as_of) - paid_for_obligation(o, payments)
    return apply_balance_policy(pending, allow_negative)


def pending_for_tenant(
    obligations: Iterable[Obligation],
    payments: Iterable[Payment],
    as_of: date,
    allow_negative: bool = False,
) -> Decimal:
    payments = list(payments)
    return sum(
        (pending_for_obligation(o, payments, as_of, allow_negative) for o in obligations),
        ZERO,
    )


def pending_for_unit(tenants: Iterable[TenantSnapshot], as_of: date, allow_negative: bool = False) -> Decimal:
    return sum(
        (pending_for_tenant(t.obligations, t.payments, as_of, allow_negative) for t in tenants),
        ZERO,
    )


def pending_for_property(units: Iterable[UnitSnapshot], as_of: date, allow_negative: bool = False) -> Decimal:
    return sum((pending_for_unit(u.tenants, as_of, allow_negative) for u in units), ZERO)


@dataclass
class ObligationPending:
    tenant_expense_id: int
    expense_type: str
    cycle_name: str
    cycle_amount: Decimal
    cycles_due: int
    expected_amount: Decimal
    total_paid: Decimal
    pending_amount: Decimal


@dataclass
class TenantPending:
    tenant_id: int
    tenant_name: str
    total_pending: Decimal = ZERO
    expenses: list[ObligationPending] = field(default_factory=list)


@dataclass
class UnitPending:
    unit_id: int
    unit_name: str
    total_pending: Decimal = ZERO
    tenants: list[TenantPending] = field(default_factory=list)


@dataclass
class PropertyPending:
    property_id: int
    total_pending: Decimal = ZERO
    units: list[UnitPending] = field(default_factory=list)


def property_breakdown(prop: PropertySnapshot, as_of: date, allow_negative: bool = False) -> PropertyPending:
    out = PropertyPending(property_id=prop.property_id)
    for u in prop.units:
        ub = UnitPending(unit_id=u.unit_id, unit_name=u.name)
        for t in u.tenants:
            tb = TenantPending(tenant_id=t.tenant_id, tenant_name=t.name)
            for o in t.obligations:
                expected = expected_for_obligation(o, as_of)
                paid = paid_for_obligation(o, t.payments)
                pending = apply_balance_policy(expected - paid, allow_negative)
                tb.expenses.append(
                    ObligationPending(
                        tenant_expense_id=o.id,
                        expense_type=o.expense_type_name or "Unknown",
                        cycle_name=o.cycle_name or "Unknown",
                        cycle_amount=o.amount,
                        cycles_due=count_periods_due(o, as_of),
                        expected_amount=expected,
                        total_paid=paid,
                        pending_amount=pending,
                    )
                )
                tb.total_pending += pending
            ub.tenants.append(tb)
            ub.total_pending += tb.total_pending
        out.units.append(ub)
        out.total_pending += ub.total_pending
    return out
