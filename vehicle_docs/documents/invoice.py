"""
Factura and the shared invoice body.

The pro-forma reuses ``compose_invoice_body`` and plugs its own blocks in
through ``InvoiceHooks`` instead of subclassing.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from vehicle_docs.clauses import INVOICE_LEGAL_NOTES, interpolate
from vehicle_docs.formatting import format_currency, format_date, format_km, format_short_date
from vehicle_docs.numbering import INVOICE_PREFIX, resolve_number
from vehicle_docs.style import BOX_FILL, BOX_STROKE, GRAY, RULE_GRAY, WHITE


@dataclass(frozen=True)
class InvoiceHooks:
    title: Callable
    after_totals: Optional[Callable] = None
    closing: Optional[Callable] = None


def compose_invoice_body(engine, data, hooks):
    engine.add_header()
    hooks.title(engine)
    add_party_columns(engine, data)
    add_vehicle_description(engine, data)
    add_tax_breakdown(engine, data.conditions)
    if hooks.after_totals:
        hooks.after_totals(engine)
    add_payment_block(engine, data.conditions)
    if hooks.closing:
        hooks.closing(engine)


def compose_invoice(engine, data, numberer=None):
    number = resolve_number(data.invoice_number, INVOICE_PREFIX, data.invoice_date, numberer)

    def title(engine):
        add_numbered_title(engine, "FACTURA", number, data.invoice_date)
        add_separator(engine)

    def closing(engine):
        add_legal_notes(engine, _issuer_province(engine, data))

    compose_invoice_body(engine, data, InvoiceHooks(title=title, closing=closing))
    return number


# ─── INVOICE BLOCKS ───

def add_numbered_title(engine, title, number, issue_date):
    y = engine.state.cursor_y
    right_x = engine.page_width - engine.margins.right - 50
    engine.draw_text(title, engine.margins.left, y, "bold", 20, engine.style.primary_color)
    engine.draw_text(f"Nº: {number}", right_x, y - 5, "bold", color=engine.style.primary_color)
    engine.draw_text(f"Fecha: {format_date(issue_date)}", right_x, y + 2,
                     color=engine.style.primary_color)
    engine.state.cursor_y += 10


def add_separator(engine):
    engine.state.cursor_y += 5
    y = engine.state.cursor_y
    engine.draw_line(engine.margins.left, y, engine.page_width - engine.margins.right, y, RULE_GRAY)
    engine.state.cursor_y += 10


def issuer_lines(engine, data):
    seller = data.seller
    if seller is None:
        company = engine.company
        return [
            company.name,
            f"CIF: {company.tax_id}",
            company.street,
            f"{company.postal_code} {company.locality}",
        ]
    return [
        (seller.company_name or "") if seller.is_company else seller.full_name,
        f"CIF: {seller.tax_id or ''}" if seller.is_company else f"DNI/NIE: {seller.national_id}",
        seller.street,
        f"{seller.postal_code} {seller.locality}",
    ]


def customer_lines(buyer):
    return [
        (buyer.company_name or "") if buyer.is_company else buyer.full_name,
        f"CIF: {buyer.tax_id or ''}" if buyer.is_company else f"DNI/NIE: {buyer.national_id}",
        buyer.street,
        f"{buyer.postal_code} {buyer.locality} ({buyer.province})",
    ]


COLUMN_WIDTH = 80


def _draw_column(engine, heading, lines, x, y):
    engine.draw_text(heading, x, y, "bold", engine.sizes.small, GRAY)
    y += 5
    for line in lines:
        for part in engine.wrap_text(line, COLUMN_WIDTH) or [""]:
            engine.draw_text(part, x, y)
            y += 5
    return y


def add_party_columns(engine, data):
    """EMISOR on the left, CLIENTE on the right."""
    engine.check_page_break(30)
    top = engine.state.cursor_y
    left_end = _draw_column(engine, "EMISOR", issuer_lines(engine, data), engine.margins.left, top)
    right_end = _draw_column(engine, "CLIENTE", customer_lines(data.buyer),
                             engine.page_width / 2 + 10, top)
    engine.state.cursor_y = max(left_end, right_end) + 10


def add_vehicle_description(engine, data):
    vehicle = data.vehicle
    details = [
        f"Matrícula: {vehicle.plate}",
        f"Bastidor: {vehicle.vin}",
        f"Fecha matriculación: {format_short_date(vehicle.registration_date) or 'N/D'}",
        f"Kilómetros: {format_km(vehicle.odometer_km)}",
        f"Combustible: {vehicle.fuel_type}",
    ]
    left = engine.margins.left
    engine.check_page_break(60)

    y = engine.state.cursor_y
    engine.draw_rect(left, y - 5, engine.content_width, 10, fill=engine.style.primary_color)
    engine.draw_text("DESCRIPCIÓN", left + 5, y + 1, "bold", color=WHITE)
    engine.state.cursor_y += 10

    y = engine.state.cursor_y
    engine.draw_rect(left, y - 4, engine.content_width, 35, fill=BOX_FILL)
    engine.draw_rect(left, y - 4, engine.content_width, 35, stroke=BOX_STROKE)
    engine.draw_text(vehicle.description, left + 5, y + 2, "bold", engine.sizes.subtitle)
    engine.state.cursor_y += 8
    for detail in details:
        engine.draw_text(detail, left + 5, engine.state.cursor_y)
        engine.state.cursor_y += 5

    if data.extra_concept:
        lines = engine.wrap_text(data.extra_concept, engine.content_width - 10)
        height = 5 * len(lines) + 5
        engine.state.cursor_y += 5
        engine.check_page_break(height)
        y = engine.state.cursor_y
        engine.draw_rect(left, y - 4, engine.content_width, height, stroke=BOX_STROKE)
        for i, line in enumerate(lines):
            engine.draw_text(line, left + 5, y + 2 + i * 5)
        engine.state.cursor_y += height

    engine.state.cursor_y += 10


def add_tax_breakdown(engine, conditions):
    """Right-aligned box with base, tax and an emphasized total."""
    engine.check_page_break(50)
    label_x = engine.page_width - engine.margins.right - 80
    amount_x = label_x + 70
    y = engine.state.cursor_y

    engine.draw_rect(label_x - 10, y - 5, 90, 40, fill=BOX_FILL)
    engine.draw_rect(label_x - 10, y - 5, 90, 40, stroke=BOX_STROKE)

    engine.draw_text("Base imponible:", label_x, y)
    engine.draw_text(format_currency(conditions.tax_base), amount_x, y, align="right")
    y += 8
    engine.draw_text(f"IVA ({conditions.tax_rate_label}%):", label_x, y)
    engine.draw_text(format_currency(conditions.tax_amount), amount_x, y, align="right")
    y += 8
    engine.draw_line(label_x, y, amount_x, y, RULE_GRAY)
    y += 8
    engine.draw_text("TOTAL:", label_x, y, "bold", engine.sizes.subtitle, engine.style.primary_color)
    engine.draw_text(format_currency(conditions.total_with_tax), amount_x, y, "bold",
                     engine.sizes.subtitle, engine.style.primary_color, align="right")

    engine.state.cursor_y = y + 20


def add_payment_block(engine, conditions):
    engine.add_section_title("FORMA DE PAGO", False)
    engine.add_label_value("Forma de pago:", conditions.payment_method.label)
    if conditions.bank_account:
        engine.add_label_value("Cuenta bancaria:", conditions.bank_account)
    if conditions.payment_notes:
        engine.add_label_value("Observaciones:", conditions.payment_notes)
    engine.add_line_break(10)


def add_legal_notes(engine, province):
    engine.check_page_break(10)
    for note in INVOICE_LEGAL_NOTES:
        engine.draw_text(interpolate(note, province=province), engine.margins.left,
                         engine.state.cursor_y, size=engine.sizes.small, color=GRAY)
        engine.state.cursor_y += 4


def _issuer_province(engine, data):
    if data.seller is not None and data.seller.province:
        return data.seller.province
    return engine.company.province
