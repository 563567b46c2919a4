"""Contrato de compraventa de vehículo."""

from vehicle_docs.clauses import (
    ACCESSORY_LABELS, DATA_PROTECTION_NOTICE_SHORT, DOCUMENTATION_LABELS, NO_WARRANTY_TEXT,
    PURCHASE_CLAUSES, PURCHASE_CLOSING, PURCHASE_RECITALS, STIPULATIONS_TITLE, WARRANTY_TEXT,
    interpolate,
)
from vehicle_docs.documents.common import add_closing, add_contract_opening, add_parties
from vehicle_docs.formatting import format_date, format_number

TITLE = "CONTRATO DE COMPRAVENTA DE VEHÍCULO"


def warranty_text(warranty) -> str:
    if warranty.months > 0:
        return interpolate(WARRANTY_TEXT, months=warranty.months,
                           mileage=format_number(warranty.mileage_km))
    return NO_WARRANTY_TEXT


def compose_purchase_contract(engine, data, clauses=PURCHASE_CLAUSES):
    engine.add_header()
    add_contract_opening(engine, TITLE, data.contract_place, data.contract_date)
    add_parties(engine, data.seller, data.buyer)

    engine.add_section_title("EXPONEN")
    engine.add_paragraph(interpolate(PURCHASE_RECITALS, vehicle=_vehicle_reference(data.vehicle)))
    engine.add_vehicle_data(data.vehicle)

    engine.add_section_title(STIPULATIONS_TITLE)
    engine.add_line_break(3)
    engine.add_clauses(clauses)
    if data.extra_clauses:
        engine.add_section_title("CLÁUSULAS ADICIONALES", False)
        engine.add_paragraph(data.extra_clauses)
        engine.add_line_break(3)

    _add_warranty(engine, data.warranty)
    _add_accessories(engine, data.accessories)
    _add_documentation(engine, data.documentation)

    engine.check_page_break(30)
    engine.add_section_title("PROTECCIÓN DE DATOS", False)
    engine.add_paragraph(DATA_PROTECTION_NOTICE_SHORT.strip(), size=engine.sizes.small, leading=4)
    engine.add_line_break(5)

    _add_economic_summary(engine, data.conditions)

    engine.add_line_break(5)
    engine.add_label_value("Fecha de entrega:", format_date(data.delivery_date))
    engine.add_label_value("Lugar de entrega:", data.delivery_place)
    engine.add_line_break(5)

    add_closing(engine, PURCHASE_CLOSING)


def _vehicle_reference(vehicle):
    reference = vehicle.description
    if vehicle.plate:
        reference = f"{reference} con matrícula {vehicle.plate}"
    return reference


def _add_warranty(engine, warranty):
    engine.check_page_break(30)
    engine.add_section_title("CONDICIONES DE GARANTÍA", False)
    engine.add_paragraph(warranty_text(warranty))
    if warranty.notes:
        engine.add_paragraph(f"Observaciones: {warranty.notes}")
    engine.add_line_break(3)


def _add_accessories(engine, accessories):
    engine.check_page_break(25)
    engine.add_section_title("ACCESORIOS ENTREGADOS", False)
    engine.add_checklist([(label, getattr(accessories, field)) for field, label in ACCESSORY_LABELS])
    if accessories.other:
        engine.state.cursor_y += 2
        engine.add_label_value("Otros:", accessories.other)
    engine.add_line_break(3)


def _add_documentation(engine, documentation):
    engine.check_page_break(25)
    engine.add_section_title("DOCUMENTACIÓN ENTREGADA", False)
    engine.add_checklist([(label, getattr(documentation, field)) for field, label in DOCUMENTATION_LABELS])
    engine.add_line_break(3)


def _add_economic_summary(engine, conditions):
    engine.check_page_break(60)
    engine.add_section_title("CONDICIONES ECONÓMICAS", False)
    engine.add_economic_table(
        [
            ("Base imponible", conditions.tax_base),
            (f"IVA ({conditions.tax_rate_label}%)", conditions.tax_amount),
        ],
        total=("TOTAL A PAGAR", conditions.total_with_tax),
    )
    engine.add_label_value("Forma de pago:", conditions.payment_method.label)
    if conditions.bank_account:
        engine.add_label_value("Cuenta bancaria:", conditions.bank_account)
    if conditions.payment_notes:
        engine.add_label_value("Detalles:", conditions.payment_notes)
