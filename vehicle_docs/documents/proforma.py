"""Factura proforma: the invoice body plus reservation, disclaimer and validity blocks."""

from datetime import timedelta

from vehicle_docs.clauses import PROFORMA_BANNER, PROFORMA_DISCLAIMERS, PROFORMA_VALIDITY, interpolate
from vehicle_docs.documents.invoice import (
    InvoiceHooks, add_numbered_title, add_separator, compose_invoice_body,
)
from vehicle_docs.formatting import format_date
from vehicle_docs.numbering import PROFORMA_PREFIX, resolve_number
from vehicle_docs.style import AMBER_NOTICE, GRAY, GREEN_NOTICE, RED_NOTICE


def expiry_date(data):
    return data.proforma_date + timedelta(days=data.validity_days)


def compose_proforma(engine, data, numberer=None):
    number = resolve_number(data.proforma_number, PROFORMA_PREFIX, data.proforma_date, numberer)

    def title(engine):
        add_numbered_title(engine, "FACTURA PROFORMA", number, data.proforma_date)
        engine.add_banner(PROFORMA_BANNER, AMBER_NOTICE)
        add_separator(engine)

    def after_totals(engine):
        reservation = data.suggested_reservation
        if reservation > 0:
            engine.add_amount_callout("IMPORTE RESERVA SUGERIDO:", reservation, GREEN_NOTICE)

    def closing(engine):
        engine.add_notice_box("IMPORTANTE:", PROFORMA_DISCLAIMERS, RED_NOTICE)
        _add_validity(engine, data)

    compose_invoice_body(engine, data, InvoiceHooks(title=title, after_totals=after_totals,
                                                    closing=closing))
    return number


def _add_validity(engine, data):
    engine.check_page_break(15)
    engine.draw_text(interpolate(PROFORMA_VALIDITY, days=data.validity_days),
                     engine.margins.left, engine.state.cursor_y, color=GRAY)
    engine.state.cursor_y += 5
    engine.draw_text(f"Fecha de expiración: {format_date(expiry_date(data))}",
                     engine.margins.left, engine.state.cursor_y, color=GRAY)
    engine.state.cursor_y += 10
