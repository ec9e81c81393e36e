from sqlalchemy import String, Integer, Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from kiraya.db.base import Base

class Tenant(Base):
    __tablename__ = "tenants"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    unit_id: Mapped[int] = mapped_column(ForeignKey("units.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(100))
    contact_number: Mapped[str] = mapped_column(String(15))
    government_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
    government_id_type_id: Mapped[int | None] = mapped_column(ForeignKey("government_id_types.id"), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
