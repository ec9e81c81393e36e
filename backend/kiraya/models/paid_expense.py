from datetime import date
from decimal import Decimal

from sqlalchemy import Integer, Date, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column
from kiraya.db.base import Base

class PaidExpense(Base):
    __tablename__ = "paid_expenses"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tenant_id: Mapped[int] = mapped_column(ForeignKey("tenants.id", ondelete="CASCADE"), index=True)
    expense_type_id: Mapped[int] = mapped_column(ForeignKey("expense_types.id"))
    # optional; manual payments are recorded against a category only
    tenant_expense_id: Mapped[int | None] = mapped_column(ForeignKey("tenant_expenses.id"), nullable=True, index=True)
    payment_date: Mapped[date] = mapped_column(Date, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    comments: Mapped[str | None] = mapped_column(String(500), nullable=True)
