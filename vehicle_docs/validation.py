"""
Strict checks run before finalizing a legal document.

Rendering is lenient by default so half-filled data can still be previewed;
these checks are only applied when the caller asks for ``strict=True``.
"""

from vehicle_docs.errors import DocumentValidationError
from vehicle_docs.identity import check_identity, is_valid_cif
from vehicle_docs.models import DocumentKind


def party_problems(party, role):
    problems = []
    if not party.full_name:
        problems.append(f"{role}: falta el nombre")
    identity = check_identity(party.national_id)
    if identity.kind not in ("DNI", "NIE") or not identity.is_valid:
        problems.append(f"{role}: DNI/NIE no válido ({party.national_id or 'vacío'})")
    if party.is_company:
        if not party.company_name:
            problems.append(f"{role}: falta la razón social")
        if not party.tax_id or not is_valid_cif(party.tax_id):
            problems.append(f"{role}: CIF no válido ({party.tax_id or 'vacío'})")
    if not party.street or not party.locality:
        problems.append(f"{role}: falta el domicilio")
    return problems


def vehicle_problems(vehicle):
    problems = []
    for field, label in (("make", "marca"), ("model", "modelo"), ("plate", "matrícula"), ("vin", "bastidor")):
        if not getattr(vehicle, field):
            problems.append(f"vehículo: falta {label}")
    if vehicle.odometer_km < 0:
        problems.append("vehículo: kilometraje negativo")
    return problems


def conditions_problems(conditions):
    problems = []
    if conditions.gross_price <= 0:
        problems.append("precio de venta no indicado")
    if conditions.tax_rate < 0:
        problems.append("tipo de IVA negativo")
    return problems


def bundle_problems(bundle):
    kind = DocumentKind(bundle.kind)
    problems = vehicle_problems(bundle.vehicle)
    problems += party_problems(bundle.buyer, "comprador")

    if kind in (DocumentKind.PURCHASE_CONTRACT, DocumentKind.DEPOSIT_AGREEMENT):
        problems += party_problems(bundle.seller, "vendedor")
        if not bundle.contract_place:
            problems.append("falta el lugar del contrato")
    elif bundle.seller is not None:
        problems += party_problems(bundle.seller, "emisor")

    if kind == DocumentKind.DEPOSIT_AGREEMENT:
        if bundle.total_price <= 0:
            problems.append("precio total no indicado")
        if bundle.deposit_amount <= 0:
            problems.append("importe de la señal no indicado")
        if bundle.deposit_amount > bundle.total_price:
            problems.append("la señal supera el precio total")
        if bundle.deadline_date is None:
            problems.append("falta la fecha límite")
        elif bundle.deadline_date < bundle.contract_date:
            problems.append("la fecha límite es anterior al contrato")
    else:
        problems += conditions_problems(bundle.conditions)

    if kind == DocumentKind.PURCHASE_CONTRACT:
        if bundle.warranty.months < 0 or bundle.warranty.mileage_km < 0:
            problems.append("garantía negativa")
        if bundle.delivery_date is None:
            problems.append("falta la fecha de entrega")

    if kind == DocumentKind.PROFORMA_INVOICE:
        if bundle.validity_days <= 0:
            problems.append("validez de la proforma no indicada")
        if bundle.reservation_amount is not None and bundle.reservation_amount < 0:
            problems.append("importe de reserva negativo")

    return problems


def validate_bundle(bundle):
    """Raise DocumentValidationError listing every problem found."""
    problems = bundle_problems(bundle)
    if problems:
        raise DocumentValidationError(problems)
    return bundle
