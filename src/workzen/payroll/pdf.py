"""Payslip rendering.

Takes the payslip detail dict produced by `PayrollService.get_payslip_detail`
and draws it on an A4 page with Pillow, saved through Pillow's PDF writer.
No figures are computed here.
"""
from __future__ import annotations

import io
import re

from PIL import Image, ImageDraw, ImageFont

from ..core.constants import DEFAULT_COMPANY_NAME

# A4 at 150 dpi
PAGE_SIZE = (1240, 1754)
RESOLUTION = 150.0
MARGIN = 90
LINE = 34

INK = (33, 37, 41)
MUTED = (108, 117, 125)
ACCENT = (113, 75, 103)
RULE = (206, 212, 218)


def _font(size: int):
    return ImageFont.load_default(size=size)


def _money(value) -> str:
    return f"{float(value or 0):,.2f}"


def payslip_filename(detail: dict) -> str:
    name = str((detail.get("employee") or {}).get("name") or "employee")
    safe = re.sub(r"[^A-Za-z0-9]+", "_", name).strip("_") or "employee"
    return f"payslip-{safe}-{detail.get('month')}-{detail.get('year')}.pdf"


class _Page:
    def __init__(self):
        self.image = Image.new("RGB", PAGE_SIZE, "white")
        self.draw = ImageDraw.Draw(self.image)
        self.y = MARGIN
        self.width = PAGE_SIZE[0]
        self.regular = _font(22)
        self.small = _font(18)
        self.bold = _font(26)
        self.title = _font(40)

    def text(self, x: int, text: str, *, font=None, fill=INK) -> None:
        self.draw.text((x, self.y), text, font=font or self.regular, fill=fill)

    def right(self, x_right: int, text: str, *, font=None, fill=INK) -> None:
        font = font or self.regular
        width = self.draw.textlength(text, font=font)
        self.draw.text((x_right - width, self.y), text, font=font, fill=fill)

    def rule(self, gap: int = 14) -> None:
        self.y += gap
        self.draw.line((MARGIN, self.y, self.width - MARGIN, self.y), fill=RULE, width=2)
        self.y += gap

    def newline(self, times: float = 1) -> None:
        self.y += int(LINE * times)

    def to_pdf(self) -> bytes:
        buf = io.BytesIO()
        self.image.save(buf, "PDF", resolution=RESOLUTION)
        return buf.getvalue()


def render_payslip_pdf(detail: dict, company_name: str = DEFAULT_COMPANY_NAME) -> bytes:
    employee = detail.get("employee") or {}
    payrun = detail.get("payrun") or {}
    worked = detail.get("worked_days") or {}
    computation = detail.get("salary_computation") or {}

    page = _Page()
    left = MARGIN
    mid = page.width // 2 + 20
    right = page.width - MARGIN

    page.text(left, company_name, font=page.title, fill=ACCENT)
    page.newline(1.6)
    page.text(left, f"Salary slip for {payrun.get('month_name', '')} {payrun.get('year', '')}", font=page.bold)
    page.newline()
    page.text(left, f"{payrun.get('name', '')}  |  {payrun.get('period', '')}", font=page.small, fill=MUTED)
    page.rule()

    info = [
        ("Employee name", employee.get("name"), "PAN", employee.get("pan")),
        ("Employee code", employee.get("employee_code"), "UAN", employee.get("uan")),
        ("Department", employee.get("department"), "Bank A/c No.", employee.get("bank_account")),
        ("Designation", employee.get("designation"), "Bank", employee.get("bank_name")),
        ("Location", employee.get("location"), "Pay period", payrun.get("period")),
        ("Date of joining", employee.get("date_of_joining"), "Salary structure", detail.get("salary_structure")),
    ]
    for label_a, value_a, label_b, value_b in info:
        page.text(left, label_a, fill=MUTED)
        page.text(left + 230, str(value_a or "N/A"))
        page.text(mid, label_b, fill=MUTED)
        page.text(mid + 230, str(value_b or "N/A"))
        page.newline()
    page.rule()

    page.text(left, "Worked days", font=page.bold)
    page.right(right - 260, "Days", font=page.bold)
    page.right(right, "Amount", font=page.bold)
    page.newline(1.3)
    for label, key in (("Attendance", "attendance"), ("Paid time off", "paid_time_off"), ("Total", "total")):
        line = worked.get(key) or {}
        page.text(left, label)
        page.right(right - 260, str(line.get("days", 0)))
        page.right(right, _money(line.get("amount")))
        page.newline()
    page.text(left, f"Working days in month: {worked.get('working_days_in_month', 0)}", font=page.small, fill=MUTED)
    page.newline()
    page.rule()

    page.text(left, "Earnings", font=page.bold)
    page.right(mid - 40, "Amount", font=page.bold)
    page.text(mid, "Deductions", font=page.bold)
    page.right(right, "Amount", font=page.bold)
    page.newline(1.3)

    earnings = computation.get("earnings") or []
    deductions = computation.get("deductions") or []
    for i in range(max(len(earnings), len(deductions))):
        if i < len(earnings):
            page.text(left, str(earnings[i].get("rule_name", "")))
            page.right(mid - 40, _money(earnings[i].get("amount")))
        if i < len(deductions):
            page.text(mid, str(deductions[i].get("rule_name", "")))
            page.right(right, _money(deductions[i].get("amount")))
        page.newline()

    page.rule()
    page.text(left, "Gross", font=page.bold)
    page.right(mid - 40, _money(computation.get("gross")), font=page.bold)
    page.text(mid, "Total deductions", font=page.bold)
    page.right(right, _money(computation.get("total_deductions")), font=page.bold)
    page.newline(1.6)

    page.text(left, "Net payable", font=page.title, fill=ACCENT)
    page.right(right, _money(computation.get("net_amount")), font=page.title, fill=ACCENT)
    page.newline(2.2)

    if detail.get("source") == "preview":
        page.text(left, "Preview: payroll for this period has not been marked done.", font=page.small, fill=MUTED)
        page.newline()

    return page.to_pdf()
