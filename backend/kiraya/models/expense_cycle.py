from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column
from kiraya.db.base import Base

class ExpenseCycle(Base):
    __tablename__ = "expense_cycles"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), unique=True)
