from datetime import date
from decimal import Decimal

from sqlalchemy import Integer, Date, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column
from kiraya.db.base import Base

class TenantExpense(Base):
    __tablename__ = "tenant_expenses"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tenant_id: Mapped[int] = mapped_column(ForeignKey("tenants.id", ondelete="CASCADE"), index=True)
    expense_type_id: Mapped[int] = mapped_column(ForeignKey("expense_types.id"))
    expense_cycle_id: Mapped[int] = mapped_column(ForeignKey("expense_cycles.id"))
    start_date: Mapped[date] = mapped_column(Date, index=True)
    # null while the charge is ongoing
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    comments: Mapped[str | None] = mapped_column(String(500), nullable=True)
