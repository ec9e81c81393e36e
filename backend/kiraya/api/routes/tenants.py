from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from kiraya.api.deps import db, current_user
from kiraya.schemas.expense import TenantExpenseOut
from kiraya.services import snapshots

router = APIRouter(prefix="/tenants/{tenant_id}", tags=["tenants"])


@router.get("/expenses/active", response_model=list[TenantExpenseOut])
def active_expenses(tenant_id: int, s: Session = Depends(db), u=Depends(current_user)):
    if snapshots.load_tenant(s, tenant_id) is None:
        raise HTTPException(status_code=404, detail="tenant_not_found")
    return [
        TenantExpenseOut(
            tenant_expense_id=o.id,
            tenant_id=o.tenant_id,
            expense_type_id=o.expense_type_id,
            expense_type_name=o.expense_type_name or None,
            cycle_name=o.cycle_name or None,
            start_date=o.start_date,
            end_date=o.end_date,
            amount=float(o.amount),
            is_advance_payment=o.is_advance_payment,
            comments=o.comments,
        )
        for o in snapshots.obligations_for_tenant(s, tenant_id, open_ended_only=True)
    ]
