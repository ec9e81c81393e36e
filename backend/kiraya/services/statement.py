from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable

from kiraya.services.cycles import due_dates_in_window
from kiraya.services.pending import ZERO, apply_balance_policy, expected_for_obligation
from kiraya.services.records import LedgerLine, LineKind, Obligation, Payment, TenantDetails

logger = logging.getLogger(__name__)


@dataclass
class StatementSummary:
    total_expected: Decimal = ZERO
    total_paid: Decimal = ZERO
    pending_amount: Decimal = ZERO
    total_all_time_pending: Decimal = ZERO


@dataclass
class Statement:
    tenant_id: int
    year: int
    month: int
    tenant_details: TenantDetails
    line_items: list[LedgerLine] = field(default_factory=list)
    summary: StatementSummary = field(default_factory=StatementSummary)


def _next_month_start(d: date) -> date:
    if d.month == 12:
        return date(d.year + 1, 1, 1)
    return date(d.year, d.month + 1, 1)


def month_window(year: int, month: int) -> tuple[date, date]:
    start = date(year, month, 1)
    return start, _next_month_start(start) - timedelta(days=1)


def _due_lines(obligations: Iterable[Obligation], start: date, end: date, today: date) -> list[LedgerLine]:
    out: list[LedgerLine] = []
    for o in obligations:
        if o.end_date is not None and o.end_date < start:
            continue
        dues = due_dates_in_window(o, start, end, today)
        logger.debug(
            "obligation %s (%s, %s, advance=%s) due in %s..%s: %s",
            o.id, o.expense_type_name, o.cycle_name, o.is_advance_payment, start, end, dues,
        )
        for d in dues:
            out.append(
                LedgerLine(
                    date=d,
                    kind=LineKind.DUE,
                    description=f"{o.expense_type_name} ({o.cycle_name})",
                    amount=o.amount,
                    line_item_id=o.id,
                    linked_expense_id=o.id,
                )
            )
    return out


def _payment_lines(payments: Iterable[Payment], start: date, end: date) -> list[LedgerLine]:
    return [
        LedgerLine(
            date=p.payment_date,
            kind=LineKind.PAYMENT,
            description=f"Payment - {p.expense_type_name}",
            amount=-p.amount,
            line_item_id=p.id,
            linked_expense_id=p.tenant_expense_id,
            comments=p.comments,
        )
        for p in payments
        if start <= p.payment_date <= end
    ]


def all_time_pending(
    obligations: Iterable[Obligation],
    payments: Iterable[Payment],
    today: date,
    allow_negative: bool = True,
) -> Decimal:
    """Everything due up to ``today`` minus every payment the tenant made.

    Unlinked payments count here, unlike the per-obligation pending figure.
    """
    expected = sum((expected_for_obligation(o, today) for o in obligations), ZERO)
    paid = sum((p.amount for p in payments), ZERO)
    return apply_balance_policy(expected - paid, allow_negative)


def build_monthly_statement(
    tenant: TenantDetails | None,
    obligations: Iterable[Obligation],
    payments: Iterable[Payment],
    year: int,
    month: int,
    today: date,
    allow_negative: bool = True,
) -> Statement | None:
    if tenant is None:
        return None

    obligations = list(obligations)
    payments = list(payments)
    start, end = month_window(year, month)

    lines = _due_lines(obligations, start, end, today) + _payment_lines(payments, start, end)
    # sorted() is stable: same-day dues stay ahead of payments
    lines = sorted(lines, key=lambda x: x.date)

    running = ZERO
    total_expected = ZERO
    total_paid = ZERO
    for line in lines:
        running += line.amount
        line.running_balance = running
        if line.kind == LineKind.DUE:
            total_expected += line.amount
        else:
            total_paid += -line.amount

    summary = StatementSummary(
        total_expected=total_expected,
        total_paid=total_paid,
        pending_amount=apply_balance_policy(total_expected - total_paid, allow_negative),
        total_all_time_pending=all_time_pending(obligations, payments, today, allow_negative),
    )

    logger.info(
        "statement tenant=%s %04d-%02d: %d lines, expected=%s paid=%s",
        tenant.tenant_id, year, month, len(lines), total_expected, total_paid,
    )
    return Statement(
        tenant_id=tenant.tenant_id,
        year=year,
        month=month,
        tenant_details=tenant,
        line_items=lines,
        summary=summary,
    )
