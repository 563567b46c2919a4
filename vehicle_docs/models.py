"""
Document data model
===================

Immutable snapshots handed over by the calling application, one bundle per
document type. Bundles form a tagged union discriminated by ``kind``.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, computed_field, field_validator

from vehicle_docs.economics import DEFAULT_TAX_RATE, TaxBreakdown, derive_from_gross, suggested_deposit


def _missing(value) -> bool:
    return value is None or value == ""


class Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, extra="ignore")


class DocumentKind(str, Enum):
    PURCHASE_CONTRACT = "compraventa"
    DEPOSIT_AGREEMENT = "senal"
    INVOICE = "factura"
    PROFORMA_INVOICE = "proforma"


class PaymentMethod(str, Enum):
    CASH = "efectivo"
    TRANSFER = "transferencia"
    FINANCED = "financiacion"
    MIXED = "mixto"

    @property
    def label(self) -> str:
        return PAYMENT_METHOD_LABELS[self]


PAYMENT_METHOD_LABELS = {
    PaymentMethod.CASH: "Efectivo",
    PaymentMethod.TRANSFER: "Transferencia bancaria",
    PaymentMethod.FINANCED: "Financiación",
    PaymentMethod.MIXED: "Pago mixto",
}


class PartyData(Snapshot):
    """Buyer, seller or company with its legal representative."""

    first_name: str = ""
    last_name: str = ""
    national_id: str = Field("", description="DNI/NIE of the person or representative")
    street: str = ""
    postal_code: str = ""
    locality: str = ""
    province: str = ""
    phone: str = ""
    email: Optional[str] = None
    is_company: bool = False
    company_name: Optional[str] = None
    tax_id: Optional[str] = Field(None, description="CIF of the company")

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @property
    def display_name(self) -> str:
        if self.is_company:
            return f"{self.company_name or ''} ({self.full_name})"
        return self.full_name

    @property
    def identification(self) -> str:
        if self.is_company:
            return f"CIF: {self.tax_id or ''} / DNI Rep.: {self.national_id}"
        return f"DNI/NIE: {self.national_id}"

    @property
    def postal_address(self) -> str:
        return f"{self.street}, {self.postal_code} {self.locality} ({self.province})"


class VehicleRecord(Snapshot):
    make: str = ""
    model: str = ""
    trim: Optional[str] = None
    plate: str = ""
    vin: str = ""
    registration_date: Optional[date] = None
    odometer_km: int = 0
    fuel_type: str = ""
    color: Optional[str] = None
    power_hp: Optional[int] = None
    displacement_cc: Optional[int] = None
    seats: Optional[int] = None
    doors: Optional[int] = None
    last_inspection_date: Optional[date] = None
    next_inspection_date: Optional[date] = None

    @field_validator("odometer_km", mode="before")
    @classmethod
    def _none_is_zero(cls, value):
        return 0 if _missing(value) else value

    @property
    def description(self) -> str:
        return " ".join(part for part in (self.make, self.model, self.trim) if part)


class EconomicConditions(Snapshot):
    """Sale terms. Base, tax and total are always derived from ``gross_price``."""

    gross_price: Decimal = Decimal("0")
    tax_rate: Decimal = DEFAULT_TAX_RATE
    payment_method: PaymentMethod = PaymentMethod.TRANSFER
    bank_account: Optional[str] = None
    payment_notes: Optional[str] = None

    @field_validator("gross_price", "tax_rate", mode="before")
    @classmethod
    def _none_is_zero(cls, value):
        return Decimal("0") if _missing(value) else value

    @property
    def breakdown(self) -> TaxBreakdown:
        return derive_from_gross(self.gross_price, self.tax_rate)

    @computed_field
    @property
    def tax_base(self) -> Decimal:
        return self.breakdown.tax_base

    @computed_field
    @property
    def tax_amount(self) -> Decimal:
        return self.breakdown.tax_amount

    @computed_field
    @property
    def total_with_tax(self) -> Decimal:
        return self.breakdown.total_with_tax

    @property
    def tax_rate_label(self) -> str:
        return f"{self.tax_rate.normalize():f}"


class WarrantyTerms(Snapshot):
    months: int = 0
    mileage_km: int = 0
    notes: Optional[str] = None

    @field_validator("months", "mileage_km", mode="before")
    @classmethod
    def _none_is_zero(cls, value):
        return 0 if _missing(value) else value

    @property
    def has_warranty(self) -> bool:
        return self.months > 0


class AccessoryChecklist(Snapshot):
    spare_wheel: bool = False
    jack: bool = False
    spare_keys: bool = False
    manuals: bool = False
    other: Optional[str] = None


class DocumentationChecklist(Snapshot):
    inspection_card: bool = False
    circulation_permit: bool = False
    last_tax_receipt: bool = False


class PurchaseContractData(Snapshot):
    kind: Literal["compraventa"] = "compraventa"
    vehicle: VehicleRecord
    seller: PartyData
    buyer: PartyData
    conditions: EconomicConditions = EconomicConditions()
    warranty: WarrantyTerms = WarrantyTerms()
    accessories: AccessoryChecklist = AccessoryChecklist()
    documentation: DocumentationChecklist = DocumentationChecklist()
    contract_date: date = Field(default_factory=date.today)
    contract_place: str = ""
    delivery_date: Optional[date] = None
    delivery_place: str = ""
    extra_clauses: Optional[str] = None


class DepositAgreementData(Snapshot):
    kind: Literal["senal"] = "senal"
    vehicle: VehicleRecord
    seller: PartyData
    buyer: PartyData
    deposit_amount: Decimal = Decimal("0")
    total_price: Decimal = Decimal("0")
    bank_account: str = ""
    deposit_date: Optional[date] = None
    deadline_date: Optional[date] = None
    contract_date: date = Field(default_factory=date.today)
    contract_place: str = ""
    extra_clauses: Optional[str] = None
    remarks: Optional[str] = None

    @field_validator("deposit_amount", "total_price", mode="before")
    @classmethod
    def _none_is_zero(cls, value):
        return Decimal("0") if _missing(value) else value


class InvoiceData(Snapshot):
    kind: Literal["factura"] = "factura"
    vehicle: VehicleRecord
    buyer: PartyData
    seller: Optional[PartyData] = None
    conditions: EconomicConditions = EconomicConditions()
    invoice_number: Optional[str] = None
    invoice_date: date = Field(default_factory=date.today)
    extra_concept: Optional[str] = None


class ProformaInvoiceData(InvoiceData):
    kind: Literal["proforma"] = "proforma"
    proforma_number: Optional[str] = None
    proforma_date: date = Field(default_factory=date.today)
    validity_days: int = 15
    reservation_amount: Optional[Decimal] = None

    @field_validator("validity_days", mode="before")
    @classmethod
    def _default_validity(cls, value):
        return cls.model_fields["validity_days"].default if _missing(value) else value

    @property
    def suggested_reservation(self) -> Decimal:
        """Caller override, or 10% of the total when none was given."""
        if self.reservation_amount is not None:
            return self.reservation_amount
        return suggested_deposit(self.conditions.total_with_tax)


DocumentBundle = Annotated[
    Union[PurchaseContractData, DepositAgreementData, InvoiceData, ProformaInvoiceData],
    Field(discriminator="kind"),
]

bundle_adapter = TypeAdapter(DocumentBundle)


def parse_bundle(payload) -> BaseModel:
    """Validate a dict or JSON string into the matching bundle type."""
    if isinstance(payload, (str, bytes)):
        return bundle_adapter.validate_json(payload)
    return bundle_adapter.validate_python(payload)
