"""Contract, deposit agreement and invoice PDFs for vehicle dealerships."""

from vehicle_docs.economics import TaxBreakdown, derive_from_gross, round2
from vehicle_docs.errors import ConfigurationError, DocumentError, DocumentValidationError
from vehicle_docs.layout import LayoutEngine, LayoutState
from vehicle_docs.models import (
    AccessoryChecklist,
    DepositAgreementData,
    DocumentationChecklist,
    DocumentKind,
    EconomicConditions,
    InvoiceData,
    PartyData,
    PaymentMethod,
    ProformaInvoiceData,
    PurchaseContractData,
    VehicleRecord,
    WarrantyTerms,
    parse_bundle,
)
from vehicle_docs.numbering import RandomNumberer, SequenceNumberer
from vehicle_docs.output import RenderedDocument, render_document
from vehicle_docs.style import CompanyProfile, StyleConfig

__version__ = "0.1.0"

__all__ = [
    "AccessoryChecklist",
    "CompanyProfile",
    "ConfigurationError",
    "DepositAgreementData",
    "DocumentError",
    "DocumentKind",
    "DocumentValidationError",
    "DocumentationChecklist",
    "EconomicConditions",
    "InvoiceData",
    "LayoutEngine",
    "LayoutState",
    "PartyData",
    "PaymentMethod",
    "ProformaInvoiceData",
    "PurchaseContractData",
    "RandomNumberer",
    "RenderedDocument",
    "SequenceNumberer",
    "StyleConfig",
    "TaxBreakdown",
    "VehicleRecord",
    "WarrantyTerms",
    "derive_from_gross",
    "parse_bundle",
    "render_document",
    "round2",
]
