"""Contrato de señal / reserva de vehículo."""

from vehicle_docs.clauses import (
    DATA_PROTECTION_NOTICE, DEPOSIT_CLAUSES, DEPOSIT_CLOSING, DEPOSIT_RECITALS, STIPULATIONS_TITLE,
)
from vehicle_docs.documents.common import add_closing, add_contract_opening, add_parties
from vehicle_docs.economics import (
    DEPOSIT_PERCENT_OPTIONS, deposit_percent, highlighted_deposit_option, remaining_balance,
)
from vehicle_docs.formatting import format_currency, format_date

TITLE = "CONTRATO DE SEÑAL / RESERVA DE VEHÍCULO"


def percent_selector(deposit_amount, total_price):
    """'5%   [10%]   15%   20%' with the matching option bracketed, if any."""
    selected = highlighted_deposit_option(deposit_amount, total_price)
    return "   ".join(f"[{option}%]" if option == selected else f"{option}%"
                       for option in DEPOSIT_PERCENT_OPTIONS)


def reservation_rows(data):
    """Label/value rows of the CONDICIONES DE LA RESERVA box."""
    percent = deposit_percent(data.deposit_amount, data.total_price)
    rows = [
        ("Importe de la señal:", f"{format_currency(data.deposit_amount)} ({percent}%)"),
        ("Porcentaje de señal:", percent_selector(data.deposit_amount, data.total_price)),
        ("Precio total del vehículo:", format_currency(data.total_price)),
        ("Resto a pagar:", format_currency(remaining_balance(data.total_price, data.deposit_amount))),
        ("Cuenta bancaria:", data.bank_account),
    ]
    if data.deposit_date:
        rows.append(("Fecha de la señal:", format_date(data.deposit_date)))
    rows.append(("Fecha límite para formalizar:", format_date(data.deadline_date)))
    return rows


def compose_deposit_agreement(engine, data, clauses=DEPOSIT_CLAUSES):
    engine.add_header()
    add_contract_opening(engine, TITLE, data.contract_place, data.contract_date)
    add_parties(engine, data.seller, data.buyer)

    engine.add_section_title("MANIFIESTAN")
    engine.add_paragraph(DEPOSIT_RECITALS.strip())
    engine.add_vehicle_data(data.vehicle)

    engine.add_section_title("CONDICIONES DE LA RESERVA", False)
    engine.add_key_value_box(reservation_rows(data))

    engine.add_section_title(STIPULATIONS_TITLE)
    engine.add_line_break(3)
    engine.add_clauses(clauses, keep_together=35)

    engine.check_page_break(80)
    engine.add_section_title("PROTECCIÓN DE DATOS PERSONALES", False)
    engine.add_paragraph(DATA_PROTECTION_NOTICE.strip(), size=engine.sizes.small, leading=3.5)
    engine.add_line_break(5)

    if data.remarks:
        engine.add_section_title("OBSERVACIONES", False)
        engine.add_paragraph(data.remarks)
        engine.add_line_break(3)

    add_closing(engine, DEPOSIT_CLOSING, data.extra_clauses)
