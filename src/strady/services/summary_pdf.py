"""
PDF rendering of a project summary.

The document is laid out with reportlab's platypus engine: a centered title,
then three sections in a fixed order, each with a bold heading and a few
labelled amounts. Amounts are formatted the Belgian-French way
(``343 200,00 €``); this is the only place figures get rounded.
"""
from __future__ import annotations

from collections.abc import Iterator
from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from strady.adapters.logging_utils import get_logger
from strady.domain.finance import SummaryFigures

logger = get_logger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
PDF_FILENAME = "Strady-imo-Summary.pdf"
DOCUMENT_TITLE = "Strady.imo Project Summary"

SECTION_ACQUISITION = "Acquisition & Renovation"
SECTION_FINANCING = "Financing Overview"
SECTION_RENTAL = "Rental Performance"

# fr-BE groups thousands with a (non-breaking) space and uses a decimal comma
_NBSP = "\u00a0"
_CURRENCY_SYMBOL = "\u20ac"


def format_currency(value: float | None) -> str:
    amount = float(value or 0.0)
    cents = round(abs(amount), 2)
    digits = f"{cents:,.2f}".replace(",", _NBSP).replace(".", ",")
    sign = "-" if amount < 0 and cents > 0 else ""
    return f"{sign}{digits}{_NBSP}{_CURRENCY_SYMBOL}"


def format_percent(rate: float) -> str:
    return f"{rate * 100:.1f}".replace(".", ",") + f"{_NBSP}%"


def summary_sections(figures: SummaryFigures) -> list[tuple[str, list[str]]]:
    """(heading, lines) pairs in display order."""
    return [
        (
            SECTION_ACQUISITION,
            [
                f"Property Price: {format_currency(figures.property_price)}",
                f"Total Renovation Cost: {format_currency(figures.renovation_cost)}",
                f"Registration Tax ({format_percent(figures.registration_tax_rate)}): "
                f"{format_currency(figures.registration_tax)}",
                f"Notary Fees: {format_currency(figures.notary_fees)}",
            ],
        ),
        (
            SECTION_FINANCING,
            [
                f"Total Project Cost: {format_currency(figures.total_project_cost)}",
                f"Initial Cash Outlay: {format_currency(figures.initial_cash_outlay)}",
            ],
        ),
        (
            SECTION_RENTAL,
            [
                f"Gross Annual Income: {format_currency(figures.gross_annual_income)}",
                f"Effective Gross Income: {format_currency(figures.effective_gross_income)}",
                f"Total Annual Expenses: {format_currency(figures.total_annual_expenses)}",
                f"Net Operating Income (NOI): {format_currency(figures.net_operating_income)} / year",
            ],
        ),
    ]


def _styles() -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            "SummaryTitle",
            parent=base["Title"],
            fontName="Helvetica-Bold",
            fontSize=20,
            leading=24,
            alignment=TA_CENTER,
        ),
        "heading": ParagraphStyle(
            "SummaryHeading",
            parent=base["Heading2"],
            fontName="Helvetica-Bold",
            fontSize=16,
            leading=20,
            spaceAfter=4,
        ),
        "line": ParagraphStyle(
            "SummaryLine",
            parent=base["Normal"],
            fontName="Helvetica",
            fontSize=12,
            leading=16,
        ),
    }


def render_summary_pdf(figures: SummaryFigures) -> bytes:
    buf = BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=18 * mm,
        rightMargin=18 * mm,
        topMargin=18 * mm,
        bottomMargin=18 * mm,
        title=DOCUMENT_TITLE,
        pageCompression=0,
    )
    styles = _styles()

    story = [Paragraph(escape(DOCUMENT_TITLE), styles["title"]), Spacer(1, 12 * mm)]
    for heading, lines in summary_sections(figures):
        story.append(Paragraph(escape(heading), styles["heading"]))
        for line in lines:
            story.append(Paragraph(escape(line), styles["line"]))
        story.append(Spacer(1, 6 * mm))

    doc.build(story)
    data = buf.getvalue()
    logger.info("Summary PDF rendered", extra={"context": {"bytes": len(data)}})
    return data


def iter_pdf_chunks(data: bytes, chunk_size: int = 8192) -> Iterator[bytes]:
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")
    for start in range(0, len(data), chunk_size):
        yield data[start:start + chunk_size]
