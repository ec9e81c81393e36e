from pydantic import BaseModel
from datetime import date
from typing import Literal

LineType = Literal["Expense", "Payment"]

class TenantDetailsOut(BaseModel):
    tenant_id: int
    unit_id: int
    name: str
    contact_number: str
    government_id: str | None = None
    government_id_type_id: int | None = None
    government_id_type_name: str | None = None
    is_active: bool

class LineItemOut(BaseModel):
    line_item_id: int
    date: date
    type: LineType
    description: str
    amount: float
    running_balance: float
    comments: str | None = None
    linked_expense_id: int | None = None

class StatementSummaryOut(BaseModel):
    total_expected: float
    total_paid: float
    pending_amount: float
    total_all_time_pending: float

class TenantStatementOut(BaseModel):
    tenant_id: int
    year: int
    month: int
    tenant_details: TenantDetailsOut
    line_items: list[LineItemOut]
    summary: StatementSummaryOut
