"""
Salary Report Exporter.

Two exports of a month's salary sheet:

    - a spreadsheet (pandas + openpyxl), one sheet "Salary Sheet"
    - a bank fund-transfer letter as PDF (reportlab) listing every employee,
      the grand total and the total in words

Both fetch the whole month in one request and refuse to run without a
reporting month.
"""

import io
import logging
import re
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Iterable, Optional, Sequence
from xml.sax.saxutils import escape

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from core.config import ConsoleSettings
from core.exceptions import ApiError
from core.notifications import Notifier
from modules.salary.schemas import SalaryRow
from modules.salary.services.salary_sheet import SalarySheetService, require_month
from utils.number_words import amount_in_words

logger = logging.getLogger(__name__)

SHEET_NAME = "Salary Sheet"
SPREADSHEET_COLUMNS = [
    "Name",
    "Email",
    "Account Number",
    "Salary",
    "Per Day Salary",
    "Present",
    "Absent",
    "Total Payable",
]
TABLE_HEADINGS = ("SL", "Name", "Account No.", "Salary", "Per Day", "Present", "Absent", "Total")

_CENTS = Decimal("0.01")
_PAGE_MARGIN = 40


def format_money(value: Decimal) -> str:
    """Fixed two decimals, halves rounded up: Decimal("2.005") -> "2.01"."""
    return str(value.quantize(_CENTS, rounding=ROUND_HALF_UP))


def spreadsheet_filename(month: str, year: int) -> str:
    slug = re.sub(r"\s+", "_", month).lower()
    return f"salary_sheet_{slug}_{year}.xlsx"


def pdf_filename(month: str) -> str:
    return f"salary_transfer_{month}.pdf"


# =============================================================================
# Spreadsheet
# =============================================================================


def build_spreadsheet_rows(rows: Iterable[SalaryRow]) -> list[dict]:
    return [
        {
            "Name": row.name,
            "Email": row.email,
            "Account Number": row.account_number,
            "Salary": format_money(row.salary),
            "Per Day Salary": format_money(row.per_day_salary),
            "Present": "" if row.present is None else row.present,
            "Absent": "" if row.absent is None else row.absent,
            "Total Payable": format_money(row.total),
        }
        for row in rows
    ]


def render_spreadsheet(rows: Iterable[SalaryRow]) -> bytes:
    """Salary sheet as .xlsx bytes."""
    df = pd.DataFrame(build_spreadsheet_rows(rows), columns=SPREADSHEET_COLUMNS)
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=SHEET_NAME)
    return output.getvalue()


# =============================================================================
# Bank transfer letter
# =============================================================================


@dataclass(frozen=True)
class TransferLetter:
    """Text content of the fund-transfer letter, independent of layout."""

    date_line: str
    recipient_lines: tuple[str, ...]
    subject: str
    body: str
    title: str
    table_rows: tuple[tuple[str, ...], ...]
    total: Decimal
    total_line: str
    words_line: str
    closing: str


def _table_row(index: int, row: SalaryRow) -> tuple[str, ...]:
    return (
        str(index),
        row.name or "-",
        row.account_number or "-",
        format_money(row.salary),
        format_money(row.per_day_salary),
        "-" if row.present is None else str(row.present),
        "-" if row.absent is None else str(row.absent),
        format_money(row.total),
    )


def compose_transfer_letter(
    rows: Sequence[SalaryRow],
    month: str,
    settings: ConsoleSettings,
    today: Optional[date] = None,
) -> TransferLetter:
    """
    Build the letter text for a month.

    The year in the title is the current year, the same year the letter is
    dated with.
    """
    today = today or date.today()
    total = sum((row.total for row in rows), Decimal("0"))
    account_name = settings.letter_account_name
    account_number = settings.letter_account_number
    currency = settings.letter_currency

    return TransferLetter(
        date_line=f"Date: {today.strftime('%d/%m/%Y')}",
        recipient_lines=(
            "To",
            settings.letter_recipient_title,
            settings.letter_bank_name,
            settings.letter_bank_branch,
        ),
        subject=f"Subject: Request for fund transfer from account no. {account_number} named: {account_name}",
        body=(
            "Dear Sir,\n\n"
            "We request you to transfer the below listed employee salaries\n"
            "from our current account:\n\n"
            f"Account Name: {account_name}\n"
            f"Account Number: {account_number}"
        ),
        title=f"Salary Sheet - {month} {today.year}",
        table_rows=tuple(_table_row(i, row) for i, row in enumerate(rows, start=1)),
        total=total,
        total_line=f"Total Amount to Transfer: {format_money(total)} {currency}",
        words_line=f"In Words: {amount_in_words(total, currency)}",
        closing=f"With best regards\n\n{account_name}\nAuthorized Signatory",
    )


def _paragraph(text: str, style) -> Paragraph:
    return Paragraph(escape(text).replace("\n", "<br/>"), style)


def render_transfer_letter_pdf(letter: TransferLetter) -> bytes:
    """Lay out the letter on A4 and return the PDF bytes."""
    output = io.BytesIO()
    doc = SimpleDocTemplate(
        output,
        pagesize=A4,
        leftMargin=_PAGE_MARGIN,
        rightMargin=_PAGE_MARGIN,
        topMargin=_PAGE_MARGIN,
        bottomMargin=_PAGE_MARGIN,
        title=letter.title,
    )
    styles = getSampleStyleSheet()
    normal = styles["Normal"]
    bold = styles["Heading4"]

    # Blank space at the top is left for the company letterhead
    story = [Spacer(1, 1.6 * inch), _paragraph(letter.date_line, normal), Spacer(1, 12)]
    story += [_paragraph(line, normal) for line in letter.recipient_lines]
    story += [
        Spacer(1, 12),
        _paragraph(letter.subject, bold),
        _paragraph(letter.body, normal),
        Spacer(1, 18),
        _paragraph(letter.title, bold),
    ]

    table = Table([list(TABLE_HEADINGS)] + [list(row) for row in letter.table_rows], repeatRows=1)
    table.setStyle(TableStyle([
        ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("BACKGROUND", (0, 0), (-1, 0), colors.Color(245 / 255, 245 / 255, 245 / 255)),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("ALIGN", (0, 0), (-1, 0), "CENTER"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]))
    story += [
        table,
        Spacer(1, 24),
        _paragraph(letter.total_line, bold),
        _paragraph(letter.words_line, normal),
        Spacer(1, 48),
        _paragraph(letter.closing, normal),
    ]

    doc.build(story)
    return output.getvalue()


# =============================================================================
# Export service
# =============================================================================


class SalaryExportService:
    """
    Runs the exports and writes the files into the export directory.

    Missing month: warning plus FilterRequiredError, nothing fetched.
    Fetch or write failure: error notification and None.
    """

    def __init__(
        self,
        sheet: SalarySheetService,
        notifier: Notifier,
        settings: ConsoleSettings,
        export_dir: Optional[Path] = None,
    ) -> None:
        self._sheet = sheet
        self._notifier = notifier
        self._settings = settings
        self._export_dir = Path(export_dir or settings.export_dir)

    def _write(self, filename: str, content: bytes) -> Path:
        self._export_dir.mkdir(parents=True, exist_ok=True)
        path = self._export_dir / filename
        path.write_bytes(content)
        logger.info(f"Wrote {path} ({len(content)} bytes)")
        return path

    async def export_spreadsheet(self, month: Optional[str], search: str = "", year: Optional[int] = None) -> Optional[Path]:
        month = require_month(month, self._notifier, "exporting")
        year = year or date.today().year
        try:
            rows = await self._sheet.fetch_all(month, search)
            path = self._write(spreadsheet_filename(month, year), render_spreadsheet(rows))
        except (ApiError, OSError, ValueError) as e:
            logger.error(f"Spreadsheet export for {month} failed: {e}")
            self._notifier.error("Export failed.")
            return None
        self._notifier.success("Excel exported successfully!")
        return path

    async def export_pdf(self, month: Optional[str], search: str = "", today: Optional[date] = None) -> Optional[Path]:
        month = require_month(month, self._notifier, "exporting PDF")
        try:
            rows = await self._sheet.fetch_all(month, search)
            letter = compose_transfer_letter(rows, month, self._settings, today=today)
            path = self._write(pdf_filename(month), render_transfer_letter_pdf(letter))
        except (ApiError, OSError, ValueError) as e:
            logger.error(f"PDF generation for {month} failed: {e}")
            self._notifier.error("PDF generation failed!")
            return None
        self._notifier.success("PDF generated!")
        return path
