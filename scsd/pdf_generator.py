"""
PDF Proposal Generator.

Renders a client-facing quote proposal with fpdf2 (pure Python, no system
dependencies).

Sections:
1. Header (company, quote number, date, client, job site)
2. Labour
3. Equipment
4. Materials
5. Quote total (subtotal ex GST, GST, total inc GST)
6. Notes and terms

Cost base, markup, profit and margin are internal figures and never appear
on the document.
"""

import logging
from datetime import datetime

from fpdf import FPDF

from .config import settings
from .pricing import depth_label, quantity_unit

logger = logging.getLogger(__name__)

PHASE_ORDER = ["Preparation", "Seal", "Asphalt"]


def _fmt(amount) -> str:
    """Format a number as $X,XXX.XX"""
    try:
        return f"${float(amount):,.2f}"
    except (ValueError, TypeError):
        return "$0.00"


def _fmt_qty(quantity) -> str:
    try:
        return f"{float(quantity):,.2f}"
    except (ValueError, TypeError):
        return "0.00"


def _safe(text) -> str:
    """Replace Unicode chars that can't be rendered by built-in PDF fonts (latin-1)."""
    if not text:
        return ""
    return (
        str(text)
        .replace("•", "-")
        .replace("—", " - ")
        .replace("–", "-")
        .replace("“", '"')
        .replace("”", '"')
        .replace("‘", "'")
        .replace("’", "'")
        .replace("²", "2")
        .encode("latin-1", errors="replace")
        .decode("latin-1")
    )


def _phase_sorted(lines: list) -> list:
    def key(line):
        phase = line.get("required_for", "")
        return PHASE_ORDER.index(phase) if phase in PHASE_ORDER else len(PHASE_ORDER)
    return sorted(lines, key=key)


class ProposalPDF(FPDF):
    """Quote proposal document."""

    def __init__(self):
        super().__init__()
        self.set_auto_page_break(auto=True, margin=20)

    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(150, 150, 150)
        self.cell(0, 10, f"Page {self.page_no()}/{{nb}}", align="C")

    def section_header(self, title):
        self.set_font("Helvetica", "B", 11)
        self.set_fill_color(45, 55, 72)
        self.set_text_color(255, 255, 255)
        self.cell(0, 8, f"  {title}", fill=True, new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        self.ln(2)

    def table_header(self, cols):
        """cols: [(label, width), ...]"""
        self.set_font("Helvetica", "B", 8)
        self.set_fill_color(240, 240, 240)
        for label, width in cols:
            align = "R" if label in ("Qty", "Quantity", "Area") else "L"
            self.cell(width, 6, label, border="B", fill=True, align=align)
        self.ln()

    def table_row(self, values, cols):
        self.set_font("Helvetica", "", 8)
        for val, (label, width) in zip(values, cols):
            align = "R" if label in ("Qty", "Quantity", "Area") else "L"
            self.cell(width, 5.5, _safe(val), align=align)
        self.ln()

    def empty_row(self, text):
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(120, 120, 120)
        self.cell(0, 5.5, text, new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)


def generate_quote_pdf(quote: dict, company: dict = None) -> bytes:
    """
    Generate a proposal PDF.

    Args:
        quote: quote dict with header fields, the three line lists (each line
               carrying a "name") and the subtotal/gst/total figures
        company: optional {"name", "email", "phone"}; defaults from settings

    Returns:
        PDF bytes
    """
    company = company or {
        "name": settings.COMPANY_NAME,
        "email": settings.COMPANY_EMAIL,
        "phone": settings.COMPANY_PHONE,
    }
    company_name = company.get("name") or "Quote"
    company_info = " | ".join(p for p in [company.get("phone"), company.get("email")] if p)

    pdf = ProposalPDF()
    pdf.alias_nb_pages()
    pdf.add_page()
    pw = pdf.w - pdf.l_margin - pdf.r_margin

    # -- Header --
    pdf.set_font("Helvetica", "B", 20)
    pdf.cell(0, 10, _safe(company_name), new_x="LMARGIN", new_y="NEXT")
    if company_info:
        pdf.set_font("Helvetica", "", 9)
        pdf.set_text_color(100, 100, 100)
        pdf.cell(0, 5, _safe(company_info), new_x="LMARGIN", new_y="NEXT")
        pdf.set_text_color(0, 0, 0)
    pdf.ln(4)

    created = quote.get("date_created")
    if isinstance(created, datetime):
        date_str = created.strftime("%d %B %Y")
    else:
        date_str = datetime.utcnow().strftime("%d %B %Y")

    pdf.set_font("Helvetica", "B", 14)
    pdf.cell(0, 8, _safe(f"QUOTE {quote.get('quote_number', '')}"), new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 10)
    pdf.cell(0, 5, f"Date: {date_str}", new_x="LMARGIN", new_y="NEXT")
    pdf.cell(0, 5, f"Valid for: {settings.QUOTE_VALID_DAYS} days", new_x="LMARGIN", new_y="NEXT")

    if quote.get("client_name"):
        pdf.ln(2)
        pdf.cell(0, 5, _safe(f"Prepared for: {quote['client_name']}"), new_x="LMARGIN", new_y="NEXT")
    if quote.get("job_site_address"):
        pdf.cell(0, 5, _safe(f"Job site: {quote['job_site_address']}"), new_x="LMARGIN", new_y="NEXT")
    if quote.get("total_area"):
        pdf.cell(0, 5, f"Total area: {float(quote['total_area']):,.0f} m2", new_x="LMARGIN", new_y="NEXT")

    pdf.ln(4)
    pdf.set_font("Helvetica", "B", 11)
    pdf.cell(0, 6, _safe(quote.get("title") or "Untitled"), new_x="LMARGIN", new_y="NEXT")
    if quote.get("summary"):
        pdf.set_font("Helvetica", "", 9)
        pdf.multi_cell(0, 4.5, _safe(quote["summary"]))
    particulars = quote.get("particulars") or []
    if particulars:
        pdf.set_font("Helvetica", "", 9)
        pdf.cell(0, 5, _safe("Scope: " + ", ".join(particulars)), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(6)

    # -- Labour --
    pdf.section_header("LABOUR")
    cols = [("Description", 80), ("Phase", 40), ("Shift", 30), ("Qty", 40)]
    pdf.table_header(cols)
    labour = _phase_sorted(quote.get("labour_lines", []))
    for line in labour:
        pdf.table_row([
            line.get("name", ""),
            line.get("required_for", ""),
            "Night" if line.get("is_night") else "Day",
            f"{_fmt_qty(line.get('quantity'))} hrs",
        ], cols)
    if not labour:
        pdf.empty_row("No labour on this quote")
    pdf.ln(4)

    # -- Equipment --
    pdf.section_header("EQUIPMENT")
    pdf.table_header(cols)
    equipment = _phase_sorted(quote.get("equipment_lines", []))
    for line in equipment:
        pdf.table_row([
            line.get("name", ""),
            line.get("required_for", ""),
            "Night" if line.get("is_night") else "Day",
            _fmt_qty(line.get("quantity")),
        ], cols)
    if not equipment:
        pdf.empty_row("No equipment on this quote")
    pdf.ln(4)

    # -- Materials --
    pdf.section_header("MATERIALS")
    mat_cols = [("Material", 60), ("Type", 30), ("Area", 30), ("Rate / Depth", 30), ("Quantity", 40)]
    pdf.table_header(mat_cols)
    materials = quote.get("material_lines", [])
    for line in materials:
        mat_type = line.get("material_type", "")
        pdf.table_row([
            line.get("name", ""),
            mat_type,
            f"{_fmt_qty(line.get('sqm'))} m2",
            f"{line.get('depth', 0)} {depth_label(mat_type)}",
            f"{_fmt_qty(line.get('quantity'))} {quantity_unit(mat_type)}",
        ], mat_cols)
    if not materials:
        pdf.empty_row("No materials on this quote")
    pdf.ln(6)

    # -- Quote total --
    pdf.section_header("QUOTE TOTAL")
    pdf.set_font("Helvetica", "", 10)
    gst_pct = settings.GST_RATE * 100
    for label, amount in [
        ("Subtotal (ex GST)", quote.get("subtotal", 0)),
        (f"GST ({gst_pct:g}%)", quote.get("gst", 0)),
    ]:
        pdf.cell(130, 6, label)
        pdf.cell(60, 6, _fmt(amount), align="R")
        pdf.ln()

    pdf.ln(1)
    pdf.set_fill_color(45, 55, 72)
    pdf.set_text_color(255, 255, 255)
    pdf.set_font("Helvetica", "B", 13)
    pdf.cell(130, 10, "  TOTAL (inc GST)", fill=True)
    pdf.cell(60, 10, f"{_fmt(quote.get('total', 0))}  ", fill=True, align="R")
    pdf.set_text_color(0, 0, 0)
    pdf.ln(14)

    # -- Notes & terms --
    if quote.get("notes"):
        pdf.section_header("NOTES")
        pdf.set_font("Helvetica", "", 9)
        pdf.multi_cell(0, 4.5, _safe(quote["notes"]))
        pdf.ln(4)

    pdf.set_font("Helvetica", "I", 8)
    pdf.set_text_color(100, 100, 100)
    pdf.set_x(pdf.l_margin)
    pdf.cell(
        pw, 4, f"This quote is valid for {settings.QUOTE_VALID_DAYS} days from the date above.",
        new_x="LMARGIN", new_y="NEXT",
    )
    pdf.set_text_color(0, 0, 0)

    logger.info("Rendered proposal PDF for quote %s", quote.get("quote_number"))
    return bytes(pdf.output())
