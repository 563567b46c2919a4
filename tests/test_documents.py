"""
Tests for the four document variants and the render_document adapter.
"""

import re
from datetime import date
from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from vehicle_docs.clauses import NO_WARRANTY_TEXT, PURCHASE_CLAUSES, Clause
from vehicle_docs.documents import COMPOSERS, compose
from vehicle_docs.documents.deposit import compose_deposit_agreement, percent_selector, reservation_rows
from vehicle_docs.documents.invoice import (
    InvoiceHooks, add_party_columns, add_vehicle_description, compose_invoice_body, issuer_lines,
)
from vehicle_docs.documents.proforma import compose_proforma, expiry_date
from vehicle_docs.documents.purchase import compose_purchase_contract, warranty_text
from vehicle_docs.errors import DocumentValidationError
from vehicle_docs.layout import LayoutEngine
from vehicle_docs.models import DocumentKind, EconomicConditions, InvoiceData, PartyData, WarrantyTerms
from vehicle_docs.numbering import SequenceNumberer
from vehicle_docs.output import default_filename, render_document
from vehicle_docs.samples import sample_bundle
from vehicle_docs.style import StyleConfig
from vehicle_docs.validation import bundle_problems

UNCOMPRESSED = StyleConfig(compress=False)


def kinds(engine):
    return [block.kind for block in engine.trace]


def assert_well_paginated(engine):
    pages = list(range(1, engine.page_count + 1))
    assert [b.first_page for b in engine.trace if b.kind == "header"] == pages
    assert [b.first_page for b in engine.trace if b.kind == "footer"] == pages
    for block in engine.trace:
        if block.kind == "signature":
            assert block.first_page == block.last_page


@pytest.mark.parametrize("kind", list(DocumentKind))
def test_every_variant_renders(kind):
    document = render_document(sample_bundle(kind), style=UNCOMPRESSED)

    assert document.kind == kind
    assert document.content.startswith(b"%PDF")
    assert document.page_count >= 1
    assert document.stream().read() == document.content


@pytest.mark.parametrize("kind", list(DocumentKind))
def test_rendering_is_repeatable(kind):
    first = render_document(sample_bundle(kind))
    second = render_document(sample_bundle(kind))
    assert first.content == second.content


@pytest.mark.parametrize("kind", list(DocumentKind))
def test_samples_pass_strict_validation(kind):
    assert bundle_problems(sample_bundle(kind)) == []


def test_dispatcher_covers_every_kind():
    assert set(COMPOSERS) == set(DocumentKind)


class TestPurchaseContract:
    def test_sections_in_order(self, engine, purchase_data):
        compose_purchase_contract(engine, purchase_data)
        engine.finalize()

        trace = kinds(engine)
        assert trace[0] == "header"
        assert trace.index("economic_table") < trace.index("signature")
        assert trace.count("checklist") == 2
        assert_well_paginated(engine)

    def test_long_clause_list_paginates(self, engine, purchase_data):
        body = "El COMPRADOR declara conocer el estado del vehículo. " * 12
        clauses = [Clause(number=n, title=f"CLÁUSULA {n}", body=body) for n in range(1, 41)]
        compose_purchase_contract(engine, purchase_data, clauses=clauses)
        engine.finalize()

        assert engine.page_count >= 2
        assert_well_paginated(engine)

    def test_warranty_text(self):
        assert warranty_text(WarrantyTerms()) == NO_WARRANTY_TEXT
        text = warranty_text(WarrantyTerms(months=12, mileage_km=12000))
        assert "12 meses o 12.000 kilómetros" in text

    def test_default_clauses(self):
        assert len(PURCHASE_CLAUSES) == 11
        assert PURCHASE_CLAUSES[0].heading == "1ª - OBJETO DEL CONTRATO"

    def test_extra_clauses(self, engine, purchase_data):
        data = purchase_data.model_copy(update={"extra_clauses": "El vehículo se entrega lavado."})
        compose_purchase_contract(engine, data)
        assert kinds(engine).count("section_title") > 0
        assert engine.finalize().startswith(b"%PDF")


class TestDepositAgreement:
    def test_reservation_rows(self, deposit_data):
        rows = dict(reservation_rows(deposit_data))
        assert rows["Importe de la señal:"] == "1.500,00 € (10%)"
        assert rows["Precio total del vehículo:"] == "15.000,00 €"
        assert rows["Resto a pagar:"] == "13.500,00 €"
        assert rows["Fecha límite para formalizar:"] == "20 de marzo de 2024"
        assert "Fecha de la señal:" not in rows

    def test_percent_selector_highlights_matching_option(self, deposit_data):
        rows = dict(reservation_rows(deposit_data))
        assert rows["Porcentaje de señal:"] == "5%   [10%]   15%   20%"

    def test_percent_selector_without_match(self):
        assert percent_selector(1234, 15000) == "5%   10%   15%   20%"
        assert percent_selector(500, 0) == "5%   10%   15%   20%"

    def test_renders_with_remarks(self, engine, deposit_data):
        data = deposit_data.model_copy(update={"remarks": "Pendiente de revisión de frenos."})
        compose_deposit_agreement(engine, data)
        engine.finalize()

        assert "key_value_box" in kinds(engine)
        assert_well_paginated(engine)

    def test_signature_labels_are_plain_text(self, deposit_data):
        document = render_document(deposit_data, style=UNCOMPRESSED)
        assert b"EL VENDEDOR" in document.content
        assert b"EL COMPRADOR" in document.content


class TestInvoice:
    def test_explicit_number(self, invoice_data):
        document = render_document(invoice_data, style=UNCOMPRESSED)
        assert document.number == "F-2024-0042"
        assert document.filename == "Factura_F-2024-0042.pdf"
        assert b"F-2024-0042" in document.content

    def test_random_number_fallback(self, invoice_data):
        data = invoice_data.model_copy(update={"invoice_number": None})
        with capture_logs() as logs:
            document = render_document(data)

        assert re.match(r"^F-2024-\d{4}$", document.number)
        assert "random_document_number" in [entry["event"] for entry in logs]

    def test_injected_numberer(self, invoice_data):
        data = invoice_data.model_copy(update={"invoice_number": None})
        numberer = SequenceNumberer()
        assert render_document(data, numberer=numberer).number == "F-2024-0001"
        assert render_document(data, numberer=numberer).number == "F-2024-0002"

    def test_totals_are_printed(self, invoice_data):
        content = render_document(invoice_data, style=UNCOMPRESSED).content
        assert b"10.000,00" in content
        assert b"2.100,00" in content
        assert b"12.100,00" in content

    def test_zero_conditions_still_render(self, vehicle, buyer):
        data = InvoiceData(vehicle=vehicle, buyer=buyer, conditions=EconomicConditions(),
                           invoice_number="F-2024-0003", invoice_date=date(2024, 1, 1))
        content = render_document(data, style=UNCOMPRESSED).content
        assert b"0,00" in content

    def test_issuer_defaults_to_company(self, engine, invoice_data, seller):
        assert issuer_lines(engine, invoice_data)[0] == engine.company.name
        with_seller = invoice_data.model_copy(update={"seller": seller})
        assert issuer_lines(engine, with_seller)[1] == "CIF: B12345674"

    def test_company_issuer_without_name_or_cif(self, engine, invoice_data):
        data = invoice_data.model_copy(update={"seller": PartyData(first_name="Ana", is_company=True)})

        assert issuer_lines(engine, data)[:2] == ["", "CIF: "]
        assert render_document(data).content.startswith(b"%PDF")

    def test_long_extra_concept_wraps(self, style, invoice_data):
        short, long_ = LayoutEngine(style=style), LayoutEngine(style=style)
        long_data = invoice_data.model_copy(
            update={"extra_concept": "Incluye transferencia, revisión previa y garantía mecánica. " * 8})

        add_vehicle_description(short, invoice_data)
        add_vehicle_description(long_, long_data)

        assert long_.state.cursor_y > short.state.cursor_y

    def test_long_party_address_wraps(self, style, invoice_data, buyer):
        short, long_ = LayoutEngine(style=style), LayoutEngine(style=style)
        long_buyer = buyer.model_copy(update={"street": "Urbanización Los Olivos, calle del Marqués " * 4})

        add_party_columns(short, invoice_data)
        add_party_columns(long_, invoice_data.model_copy(update={"buyer": long_buyer}))

        assert long_.state.cursor_y > short.state.cursor_y

    def test_hooks_run_in_order(self, engine, invoice_data):
        calls = []
        hooks = InvoiceHooks(
            title=lambda e: calls.append("title"),
            after_totals=lambda e: calls.append("after_totals"),
            closing=lambda e: calls.append("closing"),
        )
        compose_invoice_body(engine, invoice_data, hooks)
        assert calls == ["title", "after_totals", "closing"]


class TestProforma:
    def test_expiry_date(self, proforma_data):
        assert expiry_date(proforma_data) == date(2024, 3, 20)

    def test_reservation_callout(self, engine, proforma_data):
        number = compose_proforma(engine, proforma_data)
        assert number == "PF-2024-0007"
        trace = kinds(engine)
        assert trace.index("banner") < trace.index("amount_callout") < trace.index("notice_box")

    def test_no_callout_without_reservation(self, engine, proforma_data):
        data = proforma_data.model_copy(update={"reservation_amount": Decimal("0")})
        compose_proforma(engine, data)
        assert "amount_callout" not in kinds(engine)

    def test_numbered_from_sequence(self, proforma_data):
        data = proforma_data.model_copy(update={"proforma_number": None})
        document = render_document(data, numberer=SequenceNumberer(start=12))
        assert document.number == "PF-2024-0012"
        assert document.filename == "Proforma_PF-2024-0012.pdf"


class TestStrictMode:
    def test_incomplete_invoice_is_rejected(self, invoice_data):
        data = invoice_data.model_copy(update={"conditions": EconomicConditions()})
        with pytest.raises(DocumentValidationError) as excinfo:
            render_document(data, strict=True)
        assert "precio de venta no indicado" in excinfo.value.problems

    def test_lenient_mode_renders_anyway(self, invoice_data):
        data = invoice_data.model_copy(update={"conditions": EconomicConditions()})
        assert render_document(data).content.startswith(b"%PDF")

    def test_bad_identity_documents(self, deposit_data, buyer):
        bad_buyer = buyer.model_copy(update={"national_id": "12345678A"})
        data = deposit_data.model_copy(update={"buyer": bad_buyer, "deposit_amount": Decimal("20000")})
        problems = bundle_problems(data)
        assert "comprador: DNI/NIE no válido (12345678A)" in problems
        assert "la señal supera el precio total" in problems

    def test_company_requires_cif(self, purchase_data, seller):
        data = purchase_data.model_copy(update={"seller": seller.model_copy(update={"tax_id": None})})
        assert "vendedor: CIF no válido (vacío)" in bundle_problems(data)


class TestFilenames:
    def test_contract_names_use_plate(self, purchase_data, deposit_data):
        assert default_filename(purchase_data) == "Contrato_Compraventa_5678_KLM.pdf"
        assert default_filename(deposit_data) == "Contrato_Senal_5678_KLM.pdf"

    def test_save_into_directory(self, tmp_path, purchase_data):
        document = render_document(purchase_data)
        path = document.save(tmp_path)
        assert path == tmp_path / "Contrato_Compraventa_5678_KLM.pdf"
        assert path.read_bytes() == document.content

    def test_data_url(self, invoice_data):
        document = render_document(invoice_data)
        assert document.data_url().startswith("data:application/pdf;base64,")


def test_compose_returns_number(invoice_data):
    engine = LayoutEngine(style=UNCOMPRESSED)
    assert compose(engine, invoice_data) == "F-2024-0042"
