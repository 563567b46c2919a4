"""Shared fixtures: fixed-date bundles and an uncompressed layout engine."""

from datetime import date
from decimal import Decimal

import pytest
import structlog

from vehicle_docs.layout import LayoutEngine
from vehicle_docs.models import (
    AccessoryChecklist, DepositAgreementData, DocumentationChecklist, EconomicConditions,
    InvoiceData, PartyData, PaymentMethod, ProformaInvoiceData, PurchaseContractData,
    VehicleRecord, WarrantyTerms,
)
from vehicle_docs.style import StyleConfig


@pytest.fixture(autouse=True)
def reset_structlog():
    """The CLI callback reconfigures structlog globally; undo it between tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def vehicle():
    return VehicleRecord(
        make="Volkswagen",
        model="Golf",
        trim="2.0 TDI",
        plate="5678 KLM",
        vin="WVWZZZAUZKW123456",
        registration_date="2019-04-10",
        odometer_km=87500,
        fuel_type="Diésel",
        color="Blanco",
        power_hp=150,
        last_inspection_date="2023-04-02",
    )


@pytest.fixture
def seller():
    return PartyData(
        first_name="Laura",
        last_name="Martín Ruiz",
        national_id="12345678Z",
        street="Calle Principal, 123",
        postal_code="28001",
        locality="Madrid",
        province="Madrid",
        phone="912 345 678",
        is_company=True,
        company_name="MIDCAR AUTOMOCIÓN S.L.",
        tax_id="B12345674",
    )


@pytest.fixture
def buyer():
    return PartyData(
        first_name="Javier",
        last_name="López García",
        national_id="00000000T",
        street="Avenida de la Constitución, 45",
        postal_code="41001",
        locality="Sevilla",
        province="Sevilla",
        phone="600 123 456",
        email="javier@example.com",
    )


@pytest.fixture
def conditions():
    return EconomicConditions(
        gross_price=Decimal("12100.00"),
        tax_rate=Decimal("21"),
        payment_method=PaymentMethod.TRANSFER,
        bank_account="ES12 1234 5678 9012 3456 7890",
    )


@pytest.fixture
def purchase_data(vehicle, seller, buyer, conditions):
    return PurchaseContractData(
        vehicle=vehicle,
        seller=seller,
        buyer=buyer,
        conditions=conditions,
        warranty=WarrantyTerms(months=12, mileage_km=12000),
        accessories=AccessoryChecklist(spare_wheel=True, manuals=True, other="Alfombrillas"),
        documentation=DocumentationChecklist(circulation_permit=True),
        contract_date=date(2024, 3, 5),
        contract_place="Madrid",
        delivery_date=date(2024, 3, 12),
        delivery_place="Madrid",
    )


@pytest.fixture
def deposit_data(vehicle, seller, buyer):
    return DepositAgreementData(
        vehicle=vehicle,
        seller=seller,
        buyer=buyer,
        deposit_amount=Decimal("1500"),
        total_price=Decimal("15000"),
        bank_account="ES12 1234 5678 9012 3456 7890",
        deadline_date=date(2024, 3, 20),
        contract_date=date(2024, 3, 5),
        contract_place="Madrid",
    )


@pytest.fixture
def invoice_data(vehicle, buyer, conditions):
    return InvoiceData(
        vehicle=vehicle,
        buyer=buyer,
        conditions=conditions,
        invoice_number="F-2024-0042",
        invoice_date=date(2024, 3, 5),
        extra_concept="Transferencia de titularidad incluida",
    )


@pytest.fixture
def proforma_data(vehicle, buyer):
    return ProformaInvoiceData(
        vehicle=vehicle,
        buyer=buyer,
        conditions=EconomicConditions(gross_price=Decimal("20000")),
        proforma_number="PF-2024-0007",
        proforma_date=date(2024, 3, 5),
        validity_days=15,
    )


@pytest.fixture
def style():
    return StyleConfig(compress=False)


@pytest.fixture
def engine(style):
    return LayoutEngine(style=style)
