from __future__ import annotations

import re
from datetime import date
from typing import Iterator

from dateutil.relativedelta import relativedelta

from kiraya.services.records import Obligation, PeriodKind

# Stored cycle names are free text; every accepted spelling is listed here.
_SPELLINGS: dict[str, PeriodKind] = {
    "onetime": PeriodKind.ONE_TIME,
    "once": PeriodKind.ONE_TIME,
    "month": PeriodKind.MONTHLY,
    "monthly": PeriodKind.MONTHLY,
    "quarter": PeriodKind.QUARTERLY,
    "quarterly": PeriodKind.QUARTERLY,
    "halfyear": PeriodKind.HALF_YEARLY,
    "halfyearly": PeriodKind.HALF_YEARLY,
    "semiannual": PeriodKind.HALF_YEARLY,
    "semiannually": PeriodKind.HALF_YEARLY,
    "semi": PeriodKind.HALF_YEARLY,
    "annual": PeriodKind.ANNUAL,
    "annually": PeriodKind.ANNUAL,
    "year": PeriodKind.ANNUAL,
    "yearly": PeriodKind.ANNUAL,
}


def parse_period_kind(name: str | None) -> PeriodKind | None:
    if not name:
        return None
    key = re.sub(r"[\s_-]+", "", name).lower()
    return _SPELLINGS.get(key)


def add_months(d: date, months: int) -> date:
    # relativedelta clamps to the last day of the target month
    return d + relativedelta(months=months)


def _schedule(o: Obligation) -> Iterator[date]:
    """Due dates of ``o`` in order, starting with ``o.start_date``.

    Each date steps from the previous one, so a day clamped in a short month
    carries forward (Jan 31, Feb 29, Mar 29, ...).
    """
    if o.period_kind is None:
        return
    d = o.start_date
    yield d
    step = o.period_kind.months
    if step is None:
        return
    while True:
        d = add_months(d, step)
        yield d


def count_periods_due(o: Obligation, as_of: date) -> int:
    if o.period_kind is None:
        return 0
    if o.start_date > as_of:
        return 0

    effective_end = as_of
    if o.end_date is not None and o.end_date < as_of:
        effective_end = o.end_date

    count = 0
    for i, d in enumerate(_schedule(o)):
        # the start date is always the first period (due in advance)
        if i > 0 and d > effective_end:
            break
        count += 1
    return count


def due_dates_in_window(o: Obligation, window_start: date, window_end: date, cutoff: date) -> list[date]:
    bound = window_end if o.is_advance_payment else min(window_end, cutoff)

    out: list[date] = []
    for i, d in enumerate(_schedule(o)):
        if d > bound:
            break
        if i > 0 and o.end_date is not None and d > o.end_date:
            break
        if d >= window_start:
            out.append(d)
    return out
