"""Document variants and the dispatcher that picks one per bundle kind."""

from vehicle_docs.documents.deposit import compose_deposit_agreement
from vehicle_docs.documents.invoice import compose_invoice
from vehicle_docs.documents.proforma import compose_proforma
from vehicle_docs.documents.purchase import compose_purchase_contract
from vehicle_docs.models import DocumentKind


def _purchase(engine, data, numberer):
    compose_purchase_contract(engine, data)
    return None


def _deposit(engine, data, numberer):
    compose_deposit_agreement(engine, data)
    return None


COMPOSERS = {
    DocumentKind.PURCHASE_CONTRACT: _purchase,
    DocumentKind.DEPOSIT_AGREEMENT: _deposit,
    DocumentKind.INVOICE: compose_invoice,
    DocumentKind.PROFORMA_INVOICE: compose_proforma,
}

TITLES = {
    DocumentKind.PURCHASE_CONTRACT: "Contrato de Compraventa",
    DocumentKind.DEPOSIT_AGREEMENT: "Contrato de Señal",
    DocumentKind.INVOICE: "Factura",
    DocumentKind.PROFORMA_INVOICE: "Factura Proforma",
}


def compose(engine, bundle, numberer=None):
    """Run the variant for ``bundle``; returns the document number, if any."""
    composer = COMPOSERS[DocumentKind(bundle.kind)]
    return composer(engine, bundle, numberer)


__all__ = [
    "COMPOSERS",
    "TITLES",
    "compose",
    "compose_deposit_agreement",
    "compose_invoice",
    "compose_proforma",
    "compose_purchase_contract",
]
