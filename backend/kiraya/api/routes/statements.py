from __future__ import annotations

import logging
import re
from io import BytesIO

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from kiraya.api.deps import db, current_user
from kiraya.core.config import settings
from kiraya.schemas.statement import TenantStatementOut
from kiraya.services import snapshots
from kiraya.services.reports import build_statement_report
from kiraya.services.statement import Statement, build_monthly_statement
from kiraya.utils.timezone import today_local

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tenants/{tenant_id}/statement", tags=["statements"])


def _safe_part(v: str) -> str:
    s = (v or "").strip()
    s = re.sub(r"\s+", "_", s)
    s = re.sub(r"[^A-Za-z0-9._-]+", "_", s)
    s = re.sub(r"_+", "_", s).strip("_")
    return (s[:40] or "unknown")


def _load_statement(s: Session, tenant_id: int, year: int, month: int) -> Statement:
    try:
        st = build_monthly_statement(
            snapshots.tenant_details(s, tenant_id),
            snapshots.obligations_for_tenant(s, tenant_id),
            snapshots.payments_for_tenant(s, tenant_id),
            year,
            month,
            today_local(),
            allow_negative=settings.statement_allow_negative,
        )
    except Exception:
        logger.exception("statement failed for tenant %s %04d-%02d", tenant_id, year, month)
        raise
    if st is None:
        logger.warning("statement requested for unknown tenant %s", tenant_id)
        raise HTTPException(status_code=404, detail="tenant_not_found")
    return st


def _statement_out(st: Statement) -> dict:
    d = st.tenant_details
    return {
        "tenant_id": st.tenant_id,
        "year": st.year,
        "month": st.month,
        "tenant_details": {
            "tenant_id": d.tenant_id,
            "unit_id": d.unit_id,
            "name": d.name,
            "contact_number": d.contact_number,
            "government_id": d.government_id,
            "government_id_type_id": d.government_id_type_id,
            "government_id_type_name": d.government_id_type_name,
            "is_active": d.is_active,
        },
        "line_items": [
            {
                "line_item_id": li.line_item_id,
                "date": li.date,
                "type": li.kind.value,
                "description": li.description,
                "amount": float(li.amount),
                "running_balance": float(li.running_balance or 0),
                "comments": li.comments,
                "linked_expense_id": li.linked_expense_id,
            }
            for li in st.line_items
        ],
        "summary": {
            "total_expected": float(st.summary.total_expected),
            "total_paid": float(st.summary.total_paid),
            "pending_amount": float(st.summary.pending_amount),
            "total_all_time_pending": float(st.summary.total_all_time_pending),
        },
    }


@router.get("", response_model=TenantStatementOut)
def monthly_statement(
    tenant_id: int,
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    s: Session = Depends(db),
    u=Depends(current_user),
):
    return _statement_out(_load_statement(s, tenant_id, year, month))


@router.get("/export")
def export_statement(
    tenant_id: int,
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    s: Session = Depends(db),
    u=Depends(current_user),
):
    st = _load_statement(s, tenant_id, year, month)

    buf = BytesIO()
    build_statement_report(st, buf)
    buf.seek(0)

    filename = f"{_safe_part(st.tenant_details.name)}_{year:04d}-{month:02d}.xlsx"
    return StreamingResponse(
        buf,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
