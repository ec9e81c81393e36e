from sqlalchemy import String, Integer, Boolean, false
from sqlalchemy.orm import Mapped, mapped_column
from kiraya.db.base import Base

class ExpenseType(Base):
    __tablename__ = "expense_types"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), unique=True)
    # Charged for the whole month on the due date, even before it arrives.
    is_advance_payment: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false())
