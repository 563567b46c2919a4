"""Demonstration bundles for the ``sample`` command."""

from datetime import date
from decimal import Decimal

from vehicle_docs.models import (
    AccessoryChecklist, DepositAgreementData, DocumentationChecklist, DocumentKind,
    EconomicConditions, InvoiceData, PartyData, PaymentMethod, ProformaInvoiceData,
    PurchaseContractData, VehicleRecord, WarrantyTerms,
)

ISSUE_DATE = date(2024, 3, 5)

VEHICLE = VehicleRecord(
    make="SEAT",
    model="León",
    trim="1.5 TSI FR",
    plate="1234 LMN",
    vin="VSSZZZKLZMR012345",
    registration_date=date(2021, 6, 14),
    odometer_km=45200,
    fuel_type="Gasolina",
    color="Gris Magnético",
    power_hp=150,
    displacement_cc=1498,
    seats=5,
    doors=5,
    last_inspection_date=date(2023, 6, 20),
)

SELLER = PartyData(
    first_name="Laura",
    last_name="Martín Ruiz",
    national_id="12345678Z",
    street="Calle Principal, 123",
    postal_code="28001",
    locality="Madrid",
    province="Madrid",
    phone="912 345 678",
    email="ventas@midcar.es",
    is_company=True,
    company_name="MIDCAR AUTOMOCIÓN S.L.",
    tax_id="B12345674",
)

BUYER = PartyData(
    first_name="Javier",
    last_name="López García",
    national_id="00000000T",
    street="Avenida de la Constitución, 45, 3º B",
    postal_code="41001",
    locality="Sevilla",
    province="Sevilla",
    phone="600 123 456",
    email="javier.lopez@example.com",
)


def sample_bundle(kind, tax_rate=Decimal("21")):
    kind = DocumentKind(kind)
    conditions = EconomicConditions(
        gross_price=Decimal("12100.00"),
        tax_rate=tax_rate,
        payment_method=PaymentMethod.TRANSFER,
        bank_account="ES12 1234 5678 9012 3456 7890",
    )
    if kind == DocumentKind.PURCHASE_CONTRACT:
        return PurchaseContractData(
            vehicle=VEHICLE, seller=SELLER, buyer=BUYER, conditions=conditions,
            warranty=WarrantyTerms(months=12, mileage_km=12000),
            accessories=AccessoryChecklist(spare_wheel=True, jack=True, spare_keys=True, manuals=True),
            documentation=DocumentationChecklist(inspection_card=True, circulation_permit=True,
                                                 last_tax_receipt=True),
            contract_date=ISSUE_DATE, contract_place="Madrid",
            delivery_date=date(2024, 3, 12), delivery_place="Calle Principal, 123, Madrid",
        )
    if kind == DocumentKind.DEPOSIT_AGREEMENT:
        return DepositAgreementData(
            vehicle=VEHICLE, seller=SELLER, buyer=BUYER,
            deposit_amount=Decimal("1500"), total_price=Decimal("15000"),
            bank_account="ES12 1234 5678 9012 3456 7890",
            deposit_date=ISSUE_DATE, deadline_date=date(2024, 3, 20),
            contract_date=ISSUE_DATE, contract_place="Madrid",
        )
    if kind == DocumentKind.INVOICE:
        return InvoiceData(
            vehicle=VEHICLE, buyer=BUYER, conditions=conditions,
            invoice_number="F-2024-0001", invoice_date=ISSUE_DATE,
        )
    return ProformaInvoiceData(
        vehicle=VEHICLE, buyer=BUYER, conditions=conditions,
        proforma_number="PF-2024-0001", proforma_date=ISSUE_DATE, validity_days=15,
    )
