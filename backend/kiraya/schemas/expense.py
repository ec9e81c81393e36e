from pydantic import BaseModel
from datetime import date

class TenantExpenseOut(BaseModel):
    tenant_expense_id: int
    tenant_id: int
    expense_type_id: int | None
    expense_type_name: str | None
    cycle_name: str | None
    start_date: date
    end_date: date | None
    amount: float
    is_advance_payment: bool
    comments: str | None = None
