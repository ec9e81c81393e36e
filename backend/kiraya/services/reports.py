from __future__ import annotations

import calendar
from datetime import datetime, time

import xlsxwriter

from kiraya.services.statement import Statement
from kiraya.utils.timezone import now_local


def build_statement_report(st: Statement, out_file) -> None:
    wb = xlsxwriter.Workbook(out_file, {"in_memory": True})
    base_font = "Calibri"

    # ----------------------------
    # Formats
    # ----------------------------
    meta_label = wb.add_format({"bold": True, "font_name": base_font, "font_size": 11, "font_color": "#334155"})
    meta_value = wb.add_format({"font_name": base_font, "font_size": 11, "font_color": "#0f172a"})
    subtle = wb.add_format({"font_name": base_font, "font_size": 10, "font_color": "#64748b"})

    header = wb.add_format(
        {
            "bold": True,
            "font_name": base_font,
            "font_size": 11,
            "bg_color": "#F1F5F9",
            "border": 1,
            "align": "center",
            "valign": "vcenter",
        }
    )
    date_fmt = wb.add_format({"font_name": base_font, "font_size": 11, "num_format": "yyyy-mm-dd", "border": 1})
    money2 = wb.add_format(
        {"font_name": base_font, "font_size": 11, "num_format": "#,##0.00", "border": 1, "align": "right"}
    )
    text_cell = wb.add_format({"font_name": base_font, "font_size": 11, "border": 1, "align": "left"})

    total_label = wb.add_format(
        {
            "bold": True,
            "font_name": base_font,
            "font_size": 11,
            "bg_color": "#F8FAFC",
            "border": 1,
            "align": "left",
        }
    )
    total_money2 = wb.add_format(
        {
            "bold": True,
            "font_name": base_font,
            "font_size": 11,
            "bg_color": "#F8FAFC",
            "border": 1,
            "num_format": "#,##0.00",
            "align": "right",
        }
    )

    # ----------------------------
    # Sheet: Statement
    # ----------------------------
    ws = wb.add_worksheet("Statement")

    ws.set_column(0, 0, 12)  # Date
    ws.set_column(1, 1, 10)  # Type
    ws.set_column(2, 2, 32)  # Description
    ws.set_column(3, 4, 16)  # Amount, Balance
    ws.set_column(5, 5, 30)  # Comments

    ws.write(0, 0, "Tenant", meta_label)
    ws.write(0, 1, st.tenant_details.name, meta_value)

    ws.write(1, 0, "Period", meta_label)
    ws.write(1, 1, f"{calendar.month_name[st.month]} {st.year}", meta_value)

    ws.write(2, 0, "Generated", meta_label)
    ws.write(2, 1, now_local().strftime("%Y-%m-%d %H:%M"), subtle)

    headers = ["Date", "Type", "Description", "Amount", "Balance", "Comments"]
    ws.set_row(3, 18)
    for c, h in enumerate(headers):
        ws.write(3, c, h, header)
    ws.freeze_panes(4, 0)

    r = 4
    for line in st.line_items:
        ws.write_datetime(r, 0, datetime.combine(line.date, time.min), date_fmt)
        ws.write_string(r, 1, line.kind.value, text_cell)
        ws.write_string(r, 2, line.description, text_cell)
        ws.write_number(r, 3, float(line.amount), money2)
        ws.write_number(r, 4, float(line.running_balance or 0), money2)
        ws.write_string(r, 5, line.comments or "", text_cell)
        r += 1

    last_data_row = r - 1
    if last_data_row >= 4:
        ws.autofilter(3, 0, last_data_row, 5)

    # Totals block
    r += 1
    totals = [
        ("Total Expected", st.summary.total_expected),
        ("Total Paid", st.summary.total_paid),
        ("Pending (month)", st.summary.pending_amount),
        ("Pending (all time)", st.summary.total_all_time_pending),
    ]
    for label, value in totals:
        ws.write(r, 2, label, total_label)
        ws.write_number(r, 3, float(value), total_money2)
        r += 1

    wb.close()
