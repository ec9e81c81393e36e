"""Plain value records the billing core computes over.

They are built fresh from the database (see ``kiraya.services.snapshots``)
for every calculation and are never mutated by the core.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


class PeriodKind(str, enum.Enum):
    ONE_TIME = "onetime"
    MONTHLY = "month"
    QUARTERLY = "quarter"
    HALF_YEARLY = "halfyear"
    ANNUAL = "annual"

    @property
    def months(self) -> int | None:
        return _MONTH_STEPS[self]


_MONTH_STEPS = {
    PeriodKind.ONE_TIME: None,
    PeriodKind.MONTHLY: 1,
    PeriodKind.QUARTERLY: 3,
    PeriodKind.HALF_YEARLY: 6,
    PeriodKind.ANNUAL: 12,
}


class LineKind(str, enum.Enum):
    DUE = "Expense"
    PAYMENT = "Payment"


@dataclass(frozen=True)
class Obligation:
    """A recurring (or one-time) charge owed by a tenant.

    ``period_kind`` is None when the stored cycle name is not recognised;
    such an obligation never falls due.
    """

    id: int
    tenant_id: int
    start_date: date
    amount: Decimal
    period_kind: PeriodKind | None
    end_date: date | None = None
    expense_type_id: int | None = None
    expense_type_name: str = ""
    cycle_name: str = ""
    is_advance_payment: bool = False
    comments: str | None = None


@dataclass(frozen=True)
class Payment:
    id: int
    tenant_id: int
    payment_date: date
    amount: Decimal
    tenant_expense_id: int | None = None
    expense_type_id: int | None = None
    expense_type_name: str = ""
    comments: str | None = None


@dataclass
class LedgerLine:
    date: date
    kind: LineKind
    description: str
    amount: Decimal
    line_item_id: int
    linked_expense_id: int | None = None
    comments: str | None = None
    running_balance: Decimal | None = None


@dataclass(frozen=True)
class TenantDetails:
    tenant_id: int
    unit_id: int
    name: str
    contact_number: str = ""
    government_id: str | None = None
    government_id_type_id: int | None = None
    government_id_type_name: str | None = None
    is_active: bool = True


@dataclass
class TenantSnapshot:
    tenant_id: int
    name: str = ""
    obligations: list[Obligation] = field(default_factory=list)
    payments: list[Payment] = field(default_factory=list)


@dataclass
class UnitSnapshot:
    unit_id: int
    name: str = ""
    tenants: list[TenantSnapshot] = field(default_factory=list)


@dataclass
class PropertySnapshot:
    property_id: int
    name: str = ""
    units: list[UnitSnapshot] = field(default_factory=list)
