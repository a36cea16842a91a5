from datetime import datetime
from typing import Dict, List, Sequence
from reportlab.pdfgen import canvas
from reportlab.lib.pagesizes import A4
from reportlab.lib.colors import HexColor, white
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from sportnest.schemas.report import EventsSummary, ReportFilters

BRAND = HexColor("#0D1B2A")
ACCENT = HexColor("#FF6700")
GREEN = HexColor("#22C55E")
RED = HexColor("#EF4444")
BLUE = HexColor("#3B82F6")
MUTED = HexColor("#6B7280")
TEXT = HexColor("#111827")
RULE = HexColor("#E5E7EB")
BG_CARD = HexColor("#F7F7F9")

STATUS_COLORS = {"approved": GREEN, "pending": ACCENT, "rejected": RED}

MARGIN = 12 * mm
ROW_HEIGHT = 18

def fit_text(text: str, font_name: str, font_size: int, max_width: float) -> str:
    """Truncate text with an ellipsis so it fits in a table cell."""
    if stringWidth(text, font_name, font_size) <= max_width:
        return text
    while text and stringWidth(text + "...", font_name, font_size) > max_width:
        text = text[:-1]
    return text + "..."

def kpi_card(c: canvas.Canvas, x: float, y: float, w: float, h: float, label: str, value) -> None:
    c.setFillColor(BG_CARD)
    c.setStrokeColor(RULE)
    c.roundRect(x, y, w, h, 8, stroke=1, fill=1)
    c.setFillColor(MUTED)
    c.setFont("Helvetica", 10)
    c.drawString(x + 12, y + h - 18, label)
    c.setFillColor(BRAND)
    c.setFont("Helvetica-Bold", 22)
    c.drawString(x + 12, y + 14, str(value))

def section_title(c: canvas.Canvas, text: str, y: float, page_width: float) -> float:
    c.setFillColor(BRAND)
    c.setFont("Helvetica-Bold", 14)
    c.drawString(MARGIN, y, text)
    c.setStrokeColor(RULE)
    c.setLineWidth(1)
    c.line(MARGIN, y - 6, page_width - MARGIN, y - 6)
    return y - 24

def chip(c: canvas.Canvas, text: str, color, x: float, y: float) -> float:
    """Draw a rounded status label and return its width."""
    pad_x = 8
    width = stringWidth(text, "Helvetica-Bold", 10) + pad_x * 2
    c.setFillColor(color)
    c.roundRect(x, y - 5, width, 18, 6, stroke=0, fill=1)
    c.setFillColor(white)
    c.setFont("Helvetica-Bold", 10)
    c.drawString(x + pad_x, y, text)
    return width

def draw_table(
    c: canvas.Canvas,
    x: float,
    y: float,
    columns: Sequence[Dict],
    rows: List[Dict],
    page_height: float,
) -> float:
    """Draw a simple ruled table, starting a new page when rows run out of room."""
    total_width = sum(col["w"] for col in columns)

    def header(top: float) -> float:
        c.setFillColor(BRAND)
        c.setFont("Helvetica-Bold", 11)
        cx = x
        for col in columns:
            c.drawString(cx + 6, top, col["label"])
            cx += col["w"]
        c.setStrokeColor(RULE)
        c.line(x, top - 6, x + total_width, top - 6)
        return top - ROW_HEIGHT

    y = header(y)
    for row in rows:
        if y < MARGIN + ROW_HEIGHT:
            c.showPage()
            y = header(page_height - MARGIN - 10)
        c.setFillColor(TEXT)
        c.setFont("Helvetica", 10)
        cx = x
        for col in columns:
            value = fit_text(str(row.get(col["key"], "")), "Helvetica", 10, col["w"] - 12)
            c.drawString(cx + 6, y, value)
            cx += col["w"]
        c.setStrokeColor(RULE)
        c.line(x, y - 6, x + total_width, y - 6)
        y -= ROW_HEIGHT
    return y

def generate_events_report_pdf(summary: EventsSummary, filters: ReportFilters, output) -> None:
    c = canvas.Canvas(output, pagesize=A4)
    page_width, page_height = A4
    generated_at = datetime.now().strftime("%Y-%m-%d %H:%M")

    # -------- Banner --------
    banner_height = 28 * mm
    c.setFillColor(BRAND)
    c.rect(0, page_height - banner_height, page_width, banner_height, stroke=0, fill=1)
    c.setFillColor(white)
    c.setFont("Helvetica-Bold", 22)
    c.drawString(MARGIN, page_height - 17 * mm, "SportNest")
    c.setFillColor(ACCENT)
    c.setFont("Helvetica-Bold", 12)
    c.drawRightString(page_width - MARGIN, page_height - 16 * mm, "Events Report")

    c.setFillColor(MUTED)
    c.setFont("Helvetica", 10)
    date_range = f"{filters.date_from or '-'}  to  {filters.date_to or '-'}"
    status_note = f"   •   Status: {filters.status}" if filters.status else ""
    c.drawString(MARGIN, page_height - 34 * mm, f"Generated: {generated_at}")
    c.drawString(MARGIN, page_height - 39 * mm, f"Range: {date_range}{status_note}")

    # -------- KPI cards --------
    card_h = 60
    card_w = (page_width - MARGIN * 2 - 16) / 3
    card_y = page_height - 46 * mm - card_h
    kpi_card(c, MARGIN, card_y, card_w, card_h, "Total Events", summary.kpis.events)
    kpi_card(c, MARGIN + card_w + 8, card_y, card_w, card_h, "Total Capacity", summary.kpis.capacity)
    kpi_card(c, MARGIN + (card_w + 8) * 2, card_y, card_w, card_h, "Total Registered", summary.kpis.regs)

    # -------- Status chips --------
    y = section_title(c, "Events by Status", card_y - 24, page_width)
    cx = MARGIN
    for entry in summary.by_status:
        label = f"{entry.status.upper()}  •  {entry.count}"
        width = chip(c, label, STATUS_COLORS.get(entry.status, BLUE), cx, y)
        cx += width + 8
        if cx > page_width - MARGIN - 120:
            cx = MARGIN
            y -= 26
    y -= 36

    # -------- Top venues --------
    y = section_title(c, "Top Venues", y, page_width)
    venue_rows = [{"venue": v.venue, "events": v.count} for v in summary.top_venues]
    y = draw_table(
        c, MARGIN, y,
        [{"label": "Venue", "key": "venue", "w": 120 * mm}, {"label": "Events", "key": "events", "w": 60 * mm}],
        venue_rows,
        page_height,
    ) - 16

    # -------- Approved events --------
    if y < MARGIN + 80:
        c.showPage()
        y = page_height - MARGIN - 10
    y = section_title(c, "Approved Events (within range)", y, page_width)
    approved_rows = [
        {
            "name": e.name,
            "date": e.date,
            "time": e.time or "-",
            "venue": e.venue,
            "rc": f"{e.registered}/{e.capacity}",
        }
        for e in summary.approved_list
    ]
    draw_table(
        c, MARGIN, y,
        [
            {"label": "Event", "key": "name", "w": 62 * mm},
            {"label": "Date", "key": "date", "w": 26 * mm},
            {"label": "Time", "key": "time", "w": 28 * mm},
            {"label": "Venue", "key": "venue", "w": 44 * mm},
            {"label": "Reg/Cap", "key": "rc", "w": 26 * mm},
        ],
        approved_rows,
        page_height,
    )

    # -------- Footer --------
    c.setFillColor(MUTED)
    c.setFont("Helvetica", 9)
    c.drawString(MARGIN, 8 * mm, "SportNest • Automated Report")
    c.drawRightString(page_width - MARGIN, 8 * mm, generated_at)

    c.save()
