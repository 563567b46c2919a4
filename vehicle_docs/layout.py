"""
Page layout engine
Cursor-driven A4 composition on top of a reportlab canvas.

Coordinates are millimetres measured from the top-left corner of the page;
``state.cursor_y`` is the next baseline to write on. The engine converts to
reportlab's bottom-up points at the drawing-primitive boundary only.
"""

import base64
import binascii
import io
from contextlib import contextmanager
from dataclasses import dataclass
from typing import NamedTuple

import structlog
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from vehicle_docs.formatting import format_currency, format_km, format_short_date
from vehicle_docs.style import (
    BODY_TOP, BOX_FILL, BOX_STROKE, GRAY, HEADER_HEIGHT, PAGE_HEIGHT, PAGE_WIDTH,
    ROW_RULE, RULE_GRAY, SIGN_LINE, TABLE_HEAD, WHITE,
    resolve_company, resolve_style, rl_color,
)

logger = structlog.get_logger(__name__)

LOGO_SIZE = 25
SIGNATURE_HEIGHT = 50


@dataclass
class LayoutState:
    cursor_y: float
    page_index: int = 1


class LayoutBlock(NamedTuple):
    kind: str
    first_page: int
    last_page: int
    top: float
    bottom: float


class _DeferredPageCanvas(canvas.Canvas):
    """Keeps finished pages in memory so every page can be stamped at save time."""

    def __init__(self, *args, **kwargs):
        canvas.Canvas.__init__(self, *args, **kwargs)
        self._page_states = []

    def showPage(self):
        self._page_states.append(dict(self.__dict__))
        self._startPage()

    def save_stamped(self, stamp):
        for number, page_state in enumerate(self._page_states, start=1):
            self.__dict__.update(page_state)
            stamp(number)
            canvas.Canvas.showPage(self)
        canvas.Canvas.save(self)


class LayoutEngine:
    """Builder handle passed to every document composition.

    One instance per generated document; it is not reusable and not shared.
    """

    def __init__(self, style=None, company=None, title=None):
        self.style = resolve_style(style)
        self.company = resolve_company(company)
        self.page_width = PAGE_WIDTH
        self.page_height = PAGE_HEIGHT
        self.margins = self.style.margins
        self.content_width = self.style.content_width
        self.sizes = self.style.font_sizes

        self._buffer = io.BytesIO()
        self.c = _DeferredPageCanvas(
            self._buffer,
            pagesize=(PAGE_WIDTH * mm, PAGE_HEIGHT * mm),
            pageCompression=1 if self.style.compress else 0,
            invariant=1,
        )
        if title:
            self.c.setTitle(title)
        self.c.setAuthor(self.company.name)

        self.state = LayoutState(cursor_y=self.margins.top)
        self.trace = []
        self._logo = None
        self._logo_failed = False
        self._output = None

    @property
    def page_count(self):
        return self.state.page_index

    @property
    def finalized(self):
        return self._output is not None

    # ─── DRAWING PRIMITIVES ───

    def _font(self, weight="normal"):
        if weight == "bold":
            return self.style.bold_font
        if weight == "italic":
            return self.style.italic_font
        return self.style.font_family

    def _pt_y(self, y):
        return (self.page_height - y) * mm

    def draw_rect(self, x, y, w, h, fill=None, stroke=None, stroke_w=0.3):
        """Rectangle whose top-left corner is (x, y)."""
        self.c.saveState()
        if fill:
            self.c.setFillColor(rl_color(fill))
        if stroke:
            self.c.setStrokeColor(rl_color(stroke))
            self.c.setLineWidth(stroke_w)
        self.c.rect(x * mm, self._pt_y(y + h), w * mm, h * mm,
                    fill=1 if fill else 0, stroke=1 if stroke else 0)
        self.c.restoreState()

    def draw_line(self, x1, y1, x2, y2, color=RULE_GRAY, width=0.3):
        self.c.saveState()
        self.c.setStrokeColor(rl_color(color))
        self.c.setLineWidth(width)
        self.c.line(x1 * mm, self._pt_y(y1), x2 * mm, self._pt_y(y2))
        self.c.restoreState()

    def draw_text(self, text, x, y, weight="normal", size=None, color=None, align="left"):
        size = size or self.sizes.normal
        self.c.saveState()
        self.c.setFont(self._font(weight), size)
        self.c.setFillColor(rl_color(color or self.style.secondary_color))
        if align == "center":
            self.c.drawCentredString(x * mm, self._pt_y(y), text)
        elif align == "right":
            self.c.drawRightString(x * mm, self._pt_y(y), text)
        else:
            self.c.drawString(x * mm, self._pt_y(y), text)
        self.c.restoreState()

    def text_width(self, text, weight="normal", size=None):
        """Rendered width of ``text`` in millimetres."""
        return pdfmetrics.stringWidth(text, self._font(weight), size or self.sizes.normal) / mm

    def wrap_text(self, text, max_width, weight="normal", size=None):
        """Word-wrap to ``max_width`` mm; explicit newlines are kept."""
        lines = []
        for raw_line in str(text).split("\n"):
            words = raw_line.split()
            if not words:
                lines.append("")
                continue
            current = ""
            for word in words:
                test = current + (" " if current else "") + word
                if self.text_width(test, weight, size) <= max_width:
                    current = test
                else:
                    if current:
                        lines.append(current)
                    current = word
            if current:
                lines.append(current)
        return lines

    def _draw_logo(self, x, y):
        if not self.company.logo or self._logo_failed:
            return False
        try:
            if self._logo is None:
                self._logo = ImageReader(_logo_source(self.company.logo))
            self.c.drawImage(self._logo, x * mm, self._pt_y(y + LOGO_SIZE),
                             LOGO_SIZE * mm, LOGO_SIZE * mm, mask="auto")
            return True
        except Exception as exc:
            # a broken logo must never stop the document
            self._logo_failed = True
            self._logo = None
            logger.warning("logo_embed_failed", error=str(exc))
            return False

    @contextmanager
    def _block(self, kind):
        first_page, top = self.state.page_index, self.state.cursor_y
        yield
        self.trace.append(LayoutBlock(kind, first_page, self.state.page_index, top, self.state.cursor_y))

    # ─── PAGE INFRASTRUCTURE ───

    def add_header(self):
        """Branded band at the top of the current page."""
        self.draw_rect(0, 0, self.page_width, HEADER_HEIGHT, fill=self.style.primary_color)

        text_x = self.margins.left
        if self._draw_logo(self.margins.left, 5):
            text_x = self.margins.left + LOGO_SIZE + 5

        company = self.company
        self.draw_text(company.name, text_x, 12, "bold", 16, WHITE)
        if company.legal_name and company.legal_name != company.name:
            self.draw_text(company.legal_name, text_x, 17, "italic", 8, WHITE)
        self.draw_text(company.address_line, text_x, 22, size=8, color=WHITE)
        self.draw_text(company.contact_line, text_x, 27, size=8, color=WHITE)
        self.draw_text(f"CIF: {company.tax_id}", text_x, 32, size=8, color=WHITE)

        self.trace.append(LayoutBlock("header", self.state.page_index, self.state.page_index, 0, BODY_TOP))
        self.state.cursor_y = BODY_TOP

    def new_page(self):
        self.c.showPage()
        self.state.page_index += 1
        self.state.cursor_y = self.margins.top
        logger.debug("page_break", page=self.state.page_index)
        self.add_header()

    def check_page_break(self, required_space=20):
        """Start a new page when ``required_space`` mm no longer fit."""
        if self.state.cursor_y + required_space > self.page_height - self.margins.bottom:
            self.new_page()
            return True
        return False

    def add_line_break(self, height=5):
        self.state.cursor_y += height
        self.check_page_break()

    def _draw_footer(self, number):
        footer_y = self.page_height - 10
        self.draw_line(self.margins.left, footer_y - 5,
                       self.page_width - self.margins.right, footer_y - 5, RULE_GRAY)
        self.draw_text(f"Página {number}", self.page_width / 2, footer_y,
                       size=self.sizes.small, color=GRAY, align="center")
        self.trace.append(LayoutBlock("footer", number, number, footer_y - 5, footer_y))

    # ─── HEADINGS ───

    def add_document_title(self, text, size=18):
        self.draw_text(text, self.page_width / 2, self.state.cursor_y, "bold", size,
                       self.style.primary_color, align="center")
        self.state.cursor_y += 10

    def add_centered_line(self, text):
        self.draw_text(text, self.page_width / 2, self.state.cursor_y, align="center")
        self.state.cursor_y += 10

    def add_section_title(self, text, with_background=True):
        self.check_page_break(15)
        with self._block("section_title"):
            y = self.state.cursor_y
            if with_background:
                self.draw_rect(self.margins.left, y - 5, self.content_width, 10,
                               fill=self.style.primary_color)
                self.draw_text(text, self.margins.left + 3, y + 2, "bold",
                               self.sizes.subtitle, WHITE)
            else:
                self.draw_text(text, self.margins.left, y, "bold",
                               self.sizes.subtitle, self.style.primary_color)
            self.state.cursor_y += 10

    def add_subtitle(self, text):
        self.check_page_break(10)
        self.draw_text(text, self.margins.left, self.state.cursor_y, "bold")
        self.state.cursor_y += 6

    # ─── CONTENT ELEMENTS ───

    def add_paragraph(self, text, indent=0, size=None, leading=5, color=None):
        """Wrapped body text, checking for a page break before every line."""
        with self._block("paragraph"):
            for line in self.wrap_text(text, self.content_width - indent, size=size):
                self.check_page_break(leading + 1)
                if line:
                    self.draw_text(line, self.margins.left + indent, self.state.cursor_y,
                                   size=size, color=color)
                self.state.cursor_y += leading
            self.state.cursor_y += 2

    def add_label_value(self, label, value, indent=0):
        self.check_page_break(6)
        with self._block("label_value"):
            x = self.margins.left + indent
            self.draw_text(label, x, self.state.cursor_y, "bold")
            value_x = x + self.text_width(label + " ", "bold")
            lines = self.wrap_text(value or "", self.margins.left + self.content_width - value_x) or [""]
            for i, line in enumerate(lines):
                if i:
                    self.check_page_break(6)
                self.draw_text(line, value_x, self.state.cursor_y)
                self.state.cursor_y += 5

    def add_two_column_table(self, rows, start_x=None):
        """``rows`` is a sequence of (label, value) pairs, laid out two per line."""
        x = start_x or self.margins.left
        col_width = (self.content_width - (x - self.margins.left)) / 2
        with self._block("two_column_table"):
            for i in range(0, len(rows), 2):
                self.check_page_break(6)
                for offset, (label, value) in enumerate(rows[i:i + 2]):
                    cx = x + offset * col_width
                    self.draw_text(label, cx, self.state.cursor_y, "bold")
                    self.draw_text(value, cx + self.text_width(label + " ", "bold"), self.state.cursor_y)
                self.state.cursor_y += 5

    def add_economic_table(self, line_items, total=None):
        """Concept/amount table; ``total`` is an optional (label, amount) pair."""
        left = self.margins.left
        amount_x = left + self.content_width * 0.7 + 2

        self.check_page_break(16)
        with self._block("economic_table"):
            y = self.state.cursor_y
            self.draw_rect(left, y - 4, self.content_width, 8, fill=TABLE_HEAD)
            self.draw_text("Concepto", left + 2, y, "bold")
            self.draw_text("Importe", amount_x, y, "bold")
            self.state.cursor_y += 8

            for concept, amount in line_items:
                self.check_page_break(8)
                y = self.state.cursor_y
                self.draw_line(left, y + 3, left + self.content_width, y + 3, ROW_RULE)
                self.draw_text(concept, left + 2, y)
                self.draw_text(format_currency(amount), amount_x, y)
                self.state.cursor_y += 8

            if total:
                label, amount = total
                self.check_page_break(12)
                y = self.state.cursor_y
                self.draw_rect(left, y - 4, self.content_width, 10, fill=self.style.primary_color)
                self.draw_text(label, left + 2, y + 2, "bold", self.sizes.subtitle, WHITE)
                self.draw_text(format_currency(amount), amount_x, y + 2, "bold",
                               self.sizes.subtitle, WHITE)
                self.state.cursor_y += 12

    def add_key_value_box(self, rows, label_width=70):
        """Bordered box of label/value rows, never split across pages."""
        height = len(rows) * 8 + 4
        self.check_page_break(height + 6)
        with self._block("key_value_box"):
            left = self.margins.left
            top = self.state.cursor_y - 4
            self.draw_rect(left, top, self.content_width, height, fill=BOX_FILL)
            self.draw_rect(left, top, self.content_width, height, stroke=BOX_STROKE)
            for label, value in rows:
                self.draw_text(label, left + 5, self.state.cursor_y, "bold")
                self.draw_text(value, left + label_width, self.state.cursor_y)
                self.state.cursor_y += 8
            self.state.cursor_y += 5

    def add_checklist(self, items, indent=5):
        """Checkbox lines; ``items`` is a sequence of (label, checked)."""
        with self._block("checklist"):
            for label, checked in items:
                self.check_page_break(6)
                x = self.margins.left + indent
                y = self.state.cursor_y
                self.draw_rect(x, y - 3, 3, 3, stroke=self.style.secondary_color)
                if checked:
                    self.draw_line(x + 0.6, y - 1.5, x + 1.3, y - 0.6, self.style.accent_color, 0.8)
                    self.draw_line(x + 1.3, y - 0.6, x + 2.6, y - 2.6, self.style.accent_color, 0.8)
                self.draw_text(label, x + 5, y)
                self.state.cursor_y += 5

    def add_banner(self, text, palette):
        """Full-width highlighted strip with centred bold text."""
        fill, stroke, text_color = palette
        self.check_page_break(20)
        with self._block("banner"):
            y = self.state.cursor_y
            self.draw_rect(self.margins.left, y, self.content_width, 12, fill=fill)
            self.draw_rect(self.margins.left, y, self.content_width, 12, stroke=stroke)
            self.draw_text(text, self.page_width / 2, y + 7, "bold", color=text_color, align="center")
            self.state.cursor_y += 20

    def add_amount_callout(self, label, amount, palette):
        fill, stroke, text_color = palette
        self.check_page_break(25)
        with self._block("amount_callout"):
            y = self.state.cursor_y
            self.draw_rect(self.margins.left, y - 5, self.content_width, 20, fill=fill)
            self.draw_rect(self.margins.left, y - 5, self.content_width, 20, stroke=stroke)
            self.draw_text(label, self.margins.left + 5, y + 2, "bold", color=text_color)
            self.draw_text(format_currency(amount), self.margins.left + 5, y + 10, "bold",
                           self.sizes.subtitle, text_color)
            self.state.cursor_y += 25

    def add_notice_box(self, title, lines, palette):
        """Callout with a bold title and one bullet per line."""
        fill, stroke, text_color = palette
        height = 12 + 5 * len(lines)
        self.check_page_break(height + 5)
        with self._block("notice_box"):
            y = self.state.cursor_y
            self.draw_rect(self.margins.left, y - 5, self.content_width, height, fill=fill)
            self.draw_rect(self.margins.left, y - 5, self.content_width, height, stroke=stroke)
            self.draw_text(title, self.margins.left + 5, y + 2, "bold", color=text_color)
            for i, line in enumerate(lines):
                self.draw_text(f"• {line}", self.margins.left + 5, y + 8 + i * 5, color=text_color)
            self.state.cursor_y += height + 5

    def add_clauses(self, clauses, keep_together=30):
        """Numbered clause list; a heading is never left alone at a page bottom."""
        for clause in clauses:
            self.check_page_break(keep_together)
            self.draw_text(clause.heading, self.margins.left, self.state.cursor_y, "bold",
                           color=self.style.primary_color)
            self.state.cursor_y += 6
            self.add_paragraph(clause.body)
            self.add_line_break(2)

    # ─── COMPOSITE BLOCKS ───

    def add_person_data(self, party, title=""):
        if title:
            self.add_subtitle(title)
        self.add_label_value("Nombre:", party.display_name)
        self.add_label_value("Identificación:", party.identification)
        self.add_label_value("Domicilio:", party.postal_address)
        self.add_label_value("Teléfono:", party.phone)
        if party.email:
            self.add_label_value("Email:", party.email)
        self.add_line_break(3)

    def add_vehicle_data(self, vehicle):
        self.add_subtitle("DATOS DEL VEHÍCULO")
        model = vehicle.model + (f" {vehicle.trim}" if vehicle.trim else "")
        rows = [
            ("Marca:", vehicle.make),
            ("Modelo:", model),
            ("Matrícula:", vehicle.plate),
            ("Bastidor:", vehicle.vin),
            ("Fecha matriculación:", format_short_date(vehicle.registration_date) or "N/D"),
            ("Kilómetros:", format_km(vehicle.odometer_km)),
            ("Combustible:", vehicle.fuel_type),
            ("Color:", vehicle.color or "N/D"),
        ]
        if vehicle.power_hp:
            rows.append(("Potencia:", f"{vehicle.power_hp} CV"))
        if vehicle.displacement_cc:
            rows.append(("Cilindrada:", f"{vehicle.displacement_cc} cc"))
        if vehicle.seats:
            rows.append(("Plazas:", str(vehicle.seats)))
        if vehicle.doors:
            rows.append(("Puertas:", str(vehicle.doors)))
        if vehicle.last_inspection_date:
            rows.append(("Última ITV:", format_short_date(vehicle.last_inspection_date)))
        if vehicle.next_inspection_date:
            rows.append(("Próxima ITV:", format_short_date(vehicle.next_inspection_date)))

        self.add_two_column_table(rows)
        self.add_line_break(3)

    def add_signature_area(self, left_label="EL VENDEDOR", right_label="EL COMPRADOR"):
        """Two signature blocks side by side, always on a single page."""
        self.check_page_break(SIGNATURE_HEIGHT)
        with self._block("signature"):
            self.state.cursor_y += 10
            left_x = self.margins.left + 10
            right_x = self.page_width / 2 + 10
            line_width = 60

            self.draw_text(left_label, left_x, self.state.cursor_y, "bold")
            self.draw_text(right_label, right_x, self.state.cursor_y, "bold")
            self.state.cursor_y += 25

            y = self.state.cursor_y
            self.draw_line(left_x, y, left_x + line_width, y, SIGN_LINE)
            self.draw_line(right_x, y, right_x + line_width, y, SIGN_LINE)
            self.state.cursor_y += 5

            self.draw_text("Fdo.:", left_x, self.state.cursor_y, size=self.sizes.small)
            self.draw_text("Fdo.:", right_x, self.state.cursor_y, size=self.sizes.small)

    # ─── OUTPUT ───

    def finalize(self):
        """Stamp 'Página N' on every page and serialize; later calls reuse the bytes."""
        if self._output is None:
            self.c.showPage()
            self.c.save_stamped(self._draw_footer)
            self._output = self._buffer.getvalue()
        return self._output

    def get_bytes(self):
        return self.finalize()

    def get_data_url(self):
        return "data:application/pdf;base64," + base64.b64encode(self.finalize()).decode("ascii")

    def download(self, filename):
        with open(filename, "wb") as fh:
            fh.write(self.finalize())
        return filename


def _logo_source(logo):
    """Turn bytes, a data:image URI or a path into something ImageReader reads."""
    if isinstance(logo, bytes):
        return io.BytesIO(logo)
    if logo.startswith("data:"):
        _, _, payload = logo.partition(",")
        try:
            return io.BytesIO(base64.b64decode(payload, validate=True))
        except binascii.Error as exc:
            raise ValueError("logo data URI is not valid base64") from exc
    return logo
