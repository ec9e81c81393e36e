from pydantic import BaseModel
from datetime import date
from typing import Literal

PendingScope = Literal["obligation", "tenant", "unit", "property"]

class PendingOut(BaseModel):
    scope: PendingScope
    id: int
    as_of: date
    pending_amount: float

class ExpensePendingOut(BaseModel):
    tenant_expense_id: int
    expense_type: str
    cycle_name: str
    cycle_amount: float
    cycles_due: int
    expected_amount: float
    total_paid: float
    pending_amount: float

class TenantPendingOut(BaseModel):
    tenant_id: int
    tenant_name: str
    total_pending: float
    expenses: list[ExpensePendingOut]

class UnitPendingOut(BaseModel):
    unit_id: int
    unit_name: str
    total_pending: float
    tenants: list[TenantPendingOut]

class PropertyBreakdownOut(BaseModel):
    property_id: int
    as_of: date
    total_pending: float
    units: list[UnitPendingOut]
