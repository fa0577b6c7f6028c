"""
PDF rendering of report documents with reportlab platypus.

Layout: company name, report title and period at the top of the first page,
one table per section with a bold shaded totals row, and a footer on every
page with the generation time and "Page i of n".
"""

from datetime import datetime
from decimal import Decimal
from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4, LETTER, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import (
    HRFlowable,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from jobcost.core.config import settings
from jobcost.domain.cost_calculator import to_money

from .data import Cell, ReportDocument, ReportSection

HEADER_BLUE = colors.Color(41 / 255, 128 / 255, 185 / 255)
TOTALS_GREY = colors.Color(240 / 255, 240 / 255, 240 / 255)
FOOTER_GREY = colors.Color(0.5, 0.5, 0.5)
MARGIN = 14 * mm
WRAP_AT = 28


def format_inr(amount: Decimal | int | float, symbol: str | None = None) -> str:
    """
    Format an amount with Indian digit grouping, e.g. 123456.78 -> 1,23,456.78.

    The last three digits of the whole part form one group and the remaining
    digits are grouped in pairs.
    """
    symbol = settings.CURRENCY_SYMBOL if symbol is None else symbol
    value = to_money(amount)
    sign = "-" if value < 0 else ""
    whole, fraction = f"{abs(value):.2f}".split(".")

    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join([*groups, tail])

    return f"{sign}{symbol}{whole}.{fraction}"


def page_size(wide: bool = False) -> tuple[float, float]:
    size = LETTER if settings.REPORT_PAGE_SIZE == "LETTER" else A4
    return landscape(size) if wide else size


def numbered_canvas(generated_at: str, company: str) -> type[canvas.Canvas]:
    """
    Canvas class that defers page output until the page count is known,
    then draws the footer on every page.
    """

    class NumberedCanvas(canvas.Canvas):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            self._saved_page_states: list[dict] = []

        def showPage(self):
            self._saved_page_states.append(dict(self.__dict__))
            self._startPage()

        def save(self):
            page_count = len(self._saved_page_states)
            for state in self._saved_page_states:
                self.__dict__.update(state)
                self._draw_footer(page_count)
                super().showPage()
            super().save()

        def _draw_footer(self, page_count: int) -> None:
            width, _ = self._pagesize
            y = 8 * mm
            self.saveState()
            self.setFont("Helvetica", 7)
            self.setFillColor(FOOTER_GREY)
            self.drawString(MARGIN, y, f"Generated: {generated_at}")
            self.drawCentredString(
                width / 2, y, f"Page {self._pageNumber} of {page_count}"
            )
            self.drawRightString(width - MARGIN, y, company)
            self.restoreState()

    return NumberedCanvas


def _styles() -> dict[str, ParagraphStyle]:
    sample = getSampleStyleSheet()
    return {
        "company": ParagraphStyle(
            "Company", parent=sample["Title"], fontSize=18, spaceAfter=2
        ),
        "title": ParagraphStyle(
            "ReportTitle", parent=sample["Heading2"], alignment=TA_CENTER
        ),
        "period": ParagraphStyle(
            "Period",
            parent=sample["Italic"],
            alignment=TA_CENTER,
            fontSize=10,
        ),
        "section": ParagraphStyle("Section", parent=sample["Heading4"]),
        "info": ParagraphStyle("Info", parent=sample["Normal"], fontSize=9),
        "cell": ParagraphStyle("Cell", parent=sample["Normal"], fontSize=7, leading=8),
    }


def _cell(value: Cell, style: ParagraphStyle) -> str | Paragraph:
    if isinstance(value, Decimal):
        return format_inr(value)
    if isinstance(value, int):
        return str(value)
    if len(value) > WRAP_AT:
        return Paragraph(escape(value), style)
    return value


def _section_table(section: ReportSection, styles: dict[str, ParagraphStyle]) -> Table:
    data = [section.columns]
    data += [[_cell(v, styles["cell"]) for v in row] for row in section.rows]
    if section.totals is not None:
        data.append([_cell(v, styles["cell"]) for v in section.totals])

    commands = [
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_BLUE),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 7),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ]
    if section.totals is not None:
        commands += [
            ("BACKGROUND", (0, -1), (-1, -1), TOTALS_GREY),
            ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
        ]
    numeric_columns = {
        index
        for row in [*section.rows, section.totals or []]
        for index, value in enumerate(row)
        if isinstance(value, Decimal | int)
    }
    for index in numeric_columns:
        commands.append(("ALIGN", (index, 1), (index, -1), "RIGHT"))

    table = Table(data, repeatRows=1, hAlign="LEFT")
    table.setStyle(TableStyle(commands))
    return table


def render_report(
    document: ReportDocument,
    output_path: Path,
    generated_at: datetime | None = None,
) -> Path:
    """Write the document as a PDF and return the path written."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    generated = (generated_at or datetime.now()).strftime("%d/%m/%Y, %H:%M:%S")
    styles = _styles()

    story = [
        Paragraph(settings.PROJECT_NAME, styles["company"]),
        Paragraph(escape(document.title), styles["title"]),
    ]
    if document.period:
        story.append(Paragraph(document.period, styles["period"]))
    story += [
        Spacer(1, 2 * mm),
        HRFlowable(width="100%", thickness=0.5, color=colors.grey),
        Spacer(1, 4 * mm),
    ]
    for label, value in document.info:
        story.append(Paragraph(f"<b>{escape(label)}:</b> {escape(value)}", styles["info"]))
    if document.info:
        story.append(Spacer(1, 4 * mm))

    for section in document.sections:
        if section.title:
            story.append(Paragraph(section.title, styles["section"]))
        if section.rows or section.totals is not None:
            story.append(_section_table(section, styles))
        else:
            story.append(Paragraph("No records for this period.", styles["info"]))
        story.append(Spacer(1, 6 * mm))

    if document.notes:
        story += [
            Paragraph("Notes", styles["section"]),
            Paragraph(escape(document.notes), styles["info"]),
        ]

    pdf = SimpleDocTemplate(
        str(output_path),
        pagesize=page_size(document.landscape),
        leftMargin=MARGIN,
        rightMargin=MARGIN,
        topMargin=12 * mm,
        bottomMargin=16 * mm,
        title=document.title,
        author=settings.PROJECT_NAME,
    )
    pdf.build(
        story,
        canvasmaker=numbered_canvas(generated, settings.PROJECT_NAME),
    )
    return output_path
