# Overview: Sales record -> paginated A4 PDF (reportlab).

"""
Layout is planned first, then drawn, so pagination can be checked without
parsing PDF output.

Coordinates in the plan are millimetres from the TOP of the page:
- title at 16, first block at 22
- a date block (heading + table) moves to a new page when y > 260; y resets to 15
- table rows also move to a new page past 260 and repeat the column header
- the grand total moves to a new page when y > 270
"""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from ..formatting import format_cents
from .inventory_tree import SalesRecord


TITLE_Y = 16
FIRST_BLOCK_Y = 22
PAGE_TOP_Y = 15
BLOCK_BREAK_Y = 260
TOTAL_BREAK_Y = 270

HEADING_GAP = 6
ROW_HEIGHT = 7
BLOCK_GAP = 10

LEFT_X = 14
RIGHT_X = 196

HEADER_FILL = (41 / 255, 128 / 255, 185 / 255)
STRIPE_FILL = (0.95, 0.95, 0.95)


@dataclass(frozen=True)
class PlacedLine:
    """One drawn line: kind is title | heading | table_header | row | total."""
    kind: str
    y: float
    left: str
    right: str = ""
    stripe: bool = False


def plan_sales_record(record: SalesRecord, currency: str = "KSH") -> list[list[PlacedLine]]:
    """Pages of placed lines for the sales record."""
    pages: list[list[PlacedLine]] = [[PlacedLine("title", TITLE_Y, "Sales Record")]]
    y = FIRST_BLOCK_Y

    def new_page() -> float:
        pages.append([])
        return PAGE_TOP_Y

    def table_header(at: float) -> float:
        pages[-1].append(PlacedLine("table_header", at, "Item Name", "Price"))
        return at + ROW_HEIGHT

    for group in record.groups:
        if y > BLOCK_BREAK_Y:
            y = new_page()
        heading = (
            f"Date: {group.sold_date.isoformat()} - "
            f"Daily Total: {format_cents(group.subtotal_cents, currency)}"
        )
        pages[-1].append(PlacedLine("heading", y, heading))
        y += HEADING_GAP

        y = table_header(y)
        for index, item in enumerate(group.items):
            if y > BLOCK_BREAK_Y:
                y = table_header(new_page())
            pages[-1].append(
                PlacedLine(
                    "row",
                    y,
                    f"{item.name} #{item.item_number}",
                    format_cents(item.selling_price_cents, currency),
                    stripe=index % 2 == 1,
                )
            )
            y += ROW_HEIGHT
        y += BLOCK_GAP

    if y > TOTAL_BREAK_Y:
        y = new_page()
    pages[-1].append(
        PlacedLine("total", y, f"Grand Total: {format_cents(record.grand_total_cents, currency)}")
    )
    return pages


def _draw_line(c: canvas.Canvas, line: PlacedLine, page_height: float) -> None:
    base = page_height - line.y * mm

    if line.kind == "title":
        c.setFont("Helvetica", 16)
        c.drawString(LEFT_X * mm, base, line.left)
    elif line.kind == "heading":
        c.setFont("Helvetica", 12)
        c.drawString(LEFT_X * mm, base, line.left)
    elif line.kind == "total":
        c.setFont("Helvetica-Bold", 14)
        c.drawString(LEFT_X * mm, base, line.left)
    else:
        top = base + 5 * mm
        if line.kind == "table_header":
            c.setFillColorRGB(*HEADER_FILL)
            c.rect(LEFT_X * mm, top - ROW_HEIGHT * mm, (RIGHT_X - LEFT_X) * mm, ROW_HEIGHT * mm, stroke=0, fill=1)
            c.setFillColorRGB(1, 1, 1)
            c.setFont("Helvetica-Bold", 10)
        else:
            if line.stripe:
                c.setFillColorRGB(*STRIPE_FILL)
                c.rect(LEFT_X * mm, top - ROW_HEIGHT * mm, (RIGHT_X - LEFT_X) * mm, ROW_HEIGHT * mm, stroke=0, fill=1)
            c.setFillColorRGB(0, 0, 0)
            c.setFont("Helvetica", 10)
        c.drawString((LEFT_X + 2) * mm, base, line.left[:70])
        c.drawRightString((RIGHT_X - 2) * mm, base, line.right)
        c.setFillColorRGB(0, 0, 0)


def render_sales_record_pdf(record: SalesRecord, currency: str = "KSH") -> bytes:
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.setTitle("Sales Record")
    _, h = A4

    for page in plan_sales_record(record, currency):
        for line in page:
            _draw_line(c, line, h)
        c.showPage()

    c.save()
    return buf.getvalue()
