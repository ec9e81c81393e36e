from sqlalchemy import select
from sqlalchemy.orm import Session

from kiraya.core.logging import setup_logging
from kiraya.db.session import SessionLocal
from kiraya.models.expense_cycle import ExpenseCycle
from kiraya.models.expense_type import ExpenseType
from kiraya.models.government_id_type import GovernmentIdType

EXPENSE_CYCLES = [(1, "OneTime"), (2, "Month"), (3, "Quarter"), (4, "HalfYear"), (5, "Annual")]

# (id, name, is_advance_payment)
EXPENSE_TYPES = [
    (1, "Rent", True),
    (2, "SecurityDeposit", False),
    (3, "Electricity", False),
    (4, "Water", False),
    (100, "Others", False),
]

GOVERNMENT_ID_TYPES = [(1, "Aadhar"), (2, "Pancard"), (3, "DrivingLicense")]


def seed_catalogs(s: Session) -> int:
    added = 0
    for cid, name in EXPENSE_CYCLES:
        if s.execute(select(ExpenseCycle).where(ExpenseCycle.id == cid)).scalar_one_or_none() is None:
            s.add(ExpenseCycle(id=cid, name=name))
            added += 1
    for tid, name, advance in EXPENSE_TYPES:
        if s.execute(select(ExpenseType).where(ExpenseType.id == tid)).scalar_one_or_none() is None:
            s.add(ExpenseType(id=tid, name=name, is_advance_payment=advance))
            added += 1
    for gid, name in GOVERNMENT_ID_TYPES:
        if s.execute(select(GovernmentIdType).where(GovernmentIdType.id == gid)).scalar_one_or_none() is None:
            s.add(GovernmentIdType(id=gid, name=name))
            added += 1
    s.commit()
    return added

def main():
    setup_logging()
    db = SessionLocal()
    try:
        seed_catalogs(db)
    finally:
        db.close()

if __name__ == "__main__":
    main()
