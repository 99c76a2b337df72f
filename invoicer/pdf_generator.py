"""
PDF Invoice Generator.

Renders the invoice preview payload (see preview.py) as a printable PDF.
Uses fpdf2 (pure Python, no system dependencies).

Sections:
1. Company header + invoice meta
2. Bill to (client)
3. Items
4. Totals (subtotal / discount / taxable / VAT rows only when they apply)
5. Notes
"""

from fpdf import FPDF
from fpdf.enums import MethodReturnValue


def _fmt(amount, currency: str = "EGP") -> str:
    """Format a number as X,XXX.XX EGP"""
    try:
        return f"{float(amount):,.2f} {currency}"
    except (ValueError, TypeError):
        return f"0.00 {currency}"


def _fmt_qty(qty) -> str:
    try:
        value = float(qty)
    except (ValueError, TypeError):
        return "0"
    return str(int(value)) if value.is_integer() else f"{value:g}"


def _safe(text: str) -> str:
    """Replace Unicode chars that can't be rendered by built-in PDF fonts (latin-1)."""
    if not text:
        return ""
    return (
        str(text)
        .replace("\u2022", "-")    # bullet
        .replace("\u2014", " - ")  # em dash
        .replace("\u2013", "-")    # en dash
        .replace("\u201c", '"')    # left double quote
        .replace("\u201d", '"')    # right double quote
        .replace("\u2018", "'")    # left single quote
        .replace("\u2019", "'")    # right single quote
        .encode("latin-1", errors="replace")
        .decode("latin-1")
    )


class InvoicePDF(FPDF):
    """Custom PDF class for printable invoices."""

    def __init__(self, company_name=""):
        super().__init__()
        self.company_name = company_name
        self.set_auto_page_break(auto=True, margin=20)

    def header(self):
        pass  # Company header is drawn once on the first page

    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(150, 150, 150)
        self.cell(0, 10, _safe(f"{self.company_name} - Page {self.page_no()}/{{nb}}"), align="C")

    def section_header(self, title):
        """Render a section header bar."""
        self.set_font("Helvetica", "B", 11)
        self.set_fill_color(45, 55, 72)
        self.set_text_color(255, 255, 255)
        self.cell(0, 8, f"  {title}", fill=True, new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        self.ln(2)

    def table_header(self, cols):
        """Render a table header row. cols: [(label, width), ...]"""
        self.set_font("Helvetica", "B", 8)
        self.set_fill_color(240, 240, 240)
        for label, width in cols:
            align = "R" if label in ("Qty", "Unit Price", "Total") else "L"
            self.cell(width, 6, label, border="B", fill=True, align=align)
        self.ln()

    def item_row(self, values, widths):
        """Render an item row. Description wraps; numbers are right aligned."""
        self.set_font("Helvetica", "", 8)
        line_h = 5
        x0, y0 = self.get_x(), self.get_y()

        # Description column wraps onto several lines
        desc_lines = self.multi_cell(widths[1], line_h, values[1], dry_run=True,
                                     output=MethodReturnValue.LINES)
        row_h = max(1, len(desc_lines)) * line_h
        if y0 + row_h > self.page_break_trigger:
            self.add_page()
            x0, y0 = self.get_x(), self.get_y()

        x = x0
        for i, (val, width) in enumerate(zip(values, widths)):
            self.set_xy(x, y0)
            if i == 1:
                self.multi_cell(width, line_h, val, border=0)
            else:
                align = "R" if i >= len(widths) - 3 else "L"
                self.cell(width, line_h, val, align=align)
            x += width
        self.set_xy(x0, y0 + row_h)
        self.set_draw_color(230, 230, 230)
        self.line(self.l_margin, self.get_y(), self.w - self.r_margin, self.get_y())

    def totals_row(self, label, amount, currency, bold=False):
        self.set_font("Helvetica", "B" if bold else "", 10)
        self.cell(130, 6, _safe(label), align="R")
        self.cell(60, 6, _fmt(amount, currency), align="R")
        self.ln()


def generate_invoice_pdf(preview: dict) -> bytes:
    """
    Generate a PDF invoice document.

    Args:
        preview: invoice preview payload (company, client, meta, items,
                 totals_rows, notes, currency)

    Returns:
        PDF bytes
    """
    company = preview.get("company", {})
    client = preview.get("client", {})
    meta = preview.get("meta", {})
    currency = preview.get("currency", "EGP")

    company_name = company.get("name") or "Company Name"
    pdf = InvoicePDF(company_name=_safe(company_name))
    pdf.alias_nb_pages()
    pdf.add_page()
    pw = pdf.w - pdf.l_margin - pdf.r_margin  # printable width

    # ── SECTION 1: Header ──
    pdf.set_font("Helvetica", "B", 18)
    pdf.cell(0, 10, _safe(company_name), new_x="LMARGIN", new_y="NEXT")

    info = [p for p in [company.get("address"), company.get("phone"), company.get("email")] if p]
    if info:
        pdf.set_font("Helvetica", "", 9)
        pdf.set_text_color(100, 100, 100)
        pdf.cell(0, 5, _safe(" | ".join(info)), new_x="LMARGIN", new_y="NEXT")
        pdf.set_text_color(0, 0, 0)

    pdf.ln(4)
    pdf.set_font("Helvetica", "B", 14)
    pdf.cell(0, 8, _safe(f"INVOICE #{meta.get('invoice_no') or '-'}"), new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 10)
    pdf.cell(0, 5, _safe(f"Date: {meta.get('invoice_date') or '-'}"), new_x="LMARGIN", new_y="NEXT")
    if meta.get("due_date"):
        pdf.cell(0, 5, _safe(f"Due: {meta['due_date']}"), new_x="LMARGIN", new_y="NEXT")
    pdf.cell(0, 5, _safe(f"Project: {meta.get('project_name') or '-'}"), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(4)

    # ── SECTION 2: Bill to ──
    pdf.section_header("BILL TO")
    pdf.set_font("Helvetica", "B", 10)
    pdf.cell(0, 5, _safe(client.get("name") or "Client Name"), new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 9)
    if client.get("company"):
        pdf.cell(0, 5, _safe(client["company"]), new_x="LMARGIN", new_y="NEXT")
    if client.get("address"):
        pdf.cell(0, 5, _safe(client["address"]), new_x="LMARGIN", new_y="NEXT")
    contact = []
    if client.get("phone"):
        contact.append(f"Tel: {client['phone']}")
    if client.get("email"):
        contact.append(client["email"])
    if contact:
        pdf.cell(0, 5, _safe(" - ".join(contact)), new_x="LMARGIN", new_y="NEXT")
    if client.get("site_address"):
        pdf.cell(0, 5, _safe(f"Site: {client['site_address']}"), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(4)

    # ── SECTION 3: Items ──
    pdf.section_header("ITEMS")
    cols = [("Code", 22), ("Description", 72), ("Dimensions", 28), ("Qty", 12),
            ("Unit Price", 28), ("Total", 28)]
    widths = [c[1] for c in cols]
    pdf.table_header(cols)

    for item in preview.get("items", []):
        description = item.get("description") or item.get("category") or ""
        pdf.item_row(
            [
                _safe(item.get("code") or ""),
                _safe(description),
                _safe(item.get("dimensions") or ""),
                _fmt_qty(item.get("qty", 0)),
                _fmt(item.get("unit_price", 0), currency),
                _fmt(item.get("line_total", 0), currency),
            ],
            widths,
        )
    pdf.ln(4)

    # ── SECTION 4: Totals ──
    rows = preview.get("totals_rows", [])
    for row in rows[:-1]:
        pdf.totals_row(row["label"], row["amount"], currency)
    if rows:
        grand = rows[-1]
        pdf.ln(1)
        pdf.set_fill_color(45, 55, 72)
        pdf.set_text_color(255, 255, 255)
        pdf.set_font("Helvetica", "B", 13)
        pdf.cell(130, 10, f"  {grand['label'].upper()}", fill=True)
        pdf.cell(60, 10, f"{_fmt(grand['amount'], currency)}  ", fill=True, align="R")
        pdf.set_text_color(0, 0, 0)
        pdf.ln(14)

    # ── SECTION 5: Notes ──
    notes = preview.get("notes")
    if notes:
        pdf.section_header("NOTES")
        pdf.set_font("Helvetica", "", 9)
        pdf.set_x(pdf.l_margin)
        pdf.multi_cell(pw, 4.5, _safe(notes))

    return pdf.output()
