from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from kiraya.api.deps import db, current_user
from kiraya.core.config import settings
from kiraya.schemas.pending import PendingOut, PropertyBreakdownOut
from kiraya.services import snapshots
from kiraya.services.pending import (
    pending_for_obligation,
    pending_for_property,
    pending_for_tenant,
    pending_for_unit,
    property_breakdown,
)
from kiraya.utils.timezone import today_local

router = APIRouter(tags=["pending"])


def _as_of(v: date | None) -> date:
    return v if v is not None else today_local()


@router.get("/tenant-expenses/{tenant_expense_id}/pending", response_model=PendingOut)
def obligation_pending(
    tenant_expense_id: int,
    as_of: date | None = Query(None),
    s: Session = Depends(db),
    u=Depends(current_user),
):
    o = snapshots.load_obligation(s, tenant_expense_id)
    if o is None:
        raise HTTPException(status_code=404, detail="tenant_expense_not_found")
    d = _as_of(as_of)
    amt = pending_for_obligation(o, snapshots.payments_for_obligation(s, o.id), d, settings.pending_allow_negative)
    return PendingOut(scope="obligation", id=o.id, as_of=d, pending_amount=float(amt))


@router.get("/tenants/{tenant_id}/pending", response_model=PendingOut)
def tenant_pending(tenant_id: int, as_of: date | None = Query(None), s: Session = Depends(db), u=Depends(current_user)):
    snap = snapshots.tenant_snapshot(s, tenant_id)
    if snap is None:
        raise HTTPException(status_code=404, detail="tenant_not_found")
    d = _as_of(as_of)
    amt = pending_for_tenant(snap.obligations, snap.payments, d, settings.pending_allow_negative)
    return PendingOut(scope="tenant", id=tenant_id, as_of=d, pending_amount=float(amt))


@router.get("/units/{unit_id}/pending", response_model=PendingOut)
def unit_pending(unit_id: int, as_of: date | None = Query(None), s: Session = Depends(db), u=Depends(current_user)):
    snap = snapshots.unit_snapshot(s, unit_id)
    if snap is None:
        raise HTTPException(status_code=404, detail="unit_not_found")
    d = _as_of(as_of)
    amt = pending_for_unit(snap.tenants, d, settings.pending_allow_negative)
    return PendingOut(scope="unit", id=unit_id, as_of=d, pending_amount=float(amt))


@router.get("/properties/{property_id}/pending", response_model=PendingOut)
def property_pending(property_id: int, as_of: date | None = Query(None), s: Session = Depends(db), u=Depends(current_user)):
    snap = snapshots.property_snapshot(s, property_id)
    if snap is None:
        raise HTTPException(status_code=404, detail="property_not_found")
    d = _as_of(as_of)
    amt = pending_for_property(snap.units, d, settings.pending_allow_negative)
    return PendingOut(scope="property", id=property_id, as_of=d, pending_amount=float(amt))


@router.get("/properties/{property_id}/pending/breakdown", response_model=PropertyBreakdownOut)
def property_pending_breakdown(
    property_id: int,
    as_of: date | None = Query(None),
    s: Session = Depends(db),
    u=Depends(current_user),
):
    snap = snapshots.property_snapshot(s, property_id)
    if snap is None:
        raise HTTPException(status_code=404, detail="property_not_found")
    d = _as_of(as_of)
    b = property_breakdown(snap, d, settings.pending_allow_negative)
    return {
        "property_id": b.property_id,
        "as_of": d,
        "total_pending": float(b.total_pending),
        "units": [
            {
                "unit_id": ub.unit_id,
                "unit_name": ub.unit_name,
                "total_pending": float(ub.total_pending),
                "tenants": [
                    {
                        "tenant_id": tb.tenant_id,
                        "tenant_name": tb.tenant_name,
                        "total_pending": float(tb.total_pending),
                        "expenses": [
                            {
                                "tenant_expense_id": e.tenant_expense_id,
                                "expense_type": e.expense_type,
                                "cycle_name": e.cycle_name,
                                "cycle_amount": float(e.cycle_amount),
                                "cycles_due": e.cycles_due,
                                "expected_amount": float(e.expected_amount),
                                "total_paid": float(e.total_paid),
                                "pending_amount": float(e.pending_amount),
                            }
                            for e in tb.expenses
                        ],
                    }
                    for tb in ub.tenants
                ],
            }
            for ub in b.units
        ],
    }
