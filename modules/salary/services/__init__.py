"""Salary services."""

from modules.salary.services.exporter import (
    SalaryExportService,
    TransferLetter,
    compose_transfer_letter,
    render_spreadsheet,
    render_transfer_letter_pdf,
)
from modules.salary.services.salary_sheet import SALARY_SHEET_ENDPOINT, SalarySheetService, require_month

__all__ = [
    "SALARY_SHEET_ENDPOINT",
    "SalaryExportService",
    "SalarySheetService",
    "TransferLetter",
    "compose_transfer_letter",
    "render_spreadsheet",
    "render_transfer_letter_pdf",
    "require_month",
]
