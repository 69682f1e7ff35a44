from __future__ import annotations

from workzen.payroll.pdf import payslip_filename, render_payslip_pdf


def test_renders_pdf_document(container):
    detail = container.payroll_service.get_payslip_detail(1, month=1, year=2025)

    pdf = render_payslip_pdf(detail, "Acme Ltd")

    assert pdf.startswith(b"%PDF")
    assert b"%%EOF" in pdf[-64:]


def test_renders_stored_payslip(container):
    container.payroll_service.mark_done(1, month=1, year=2025)
    detail = container.payroll_service.get_payslip_detail(1, month=1, year=2025)

    assert render_payslip_pdf(detail).startswith(b"%PDF")


def test_filename_uses_name_month_and_year():
    detail = {"employee": {"name": "Asha Rao"}, "month": 1, "year": 2025}
    assert payslip_filename(detail) == "payslip-Asha_Rao-1-2025.pdf"


def test_filename_survives_missing_name():
    assert payslip_filename({"month": 2, "year": 2025}) == "payslip-employee-2-2025.pdf"


def test_renders_sparse_detail():
    assert render_payslip_pdf({"employee": {}, "month": 1, "year": 2025}).startswith(b"%PDF")
