"""Blocks shared by the two contracts."""

from vehicle_docs.clauses import BUYER_INTRO, SELLER_INTRO
from vehicle_docs.formatting import format_date


def add_contract_opening(engine, title, place, contract_date):
    """Centred title followed by 'En {place}, a {date}'."""
    engine.add_document_title(title)
    engine.add_centered_line(f"En {place}, a {format_date(contract_date)}")


def add_parties(engine, seller, buyer):
    engine.add_section_title("REUNIDOS")
    engine.add_line_break(3)
    engine.add_subtitle(SELLER_INTRO)
    engine.add_person_data(seller)
    engine.add_subtitle(BUYER_INTRO)
    engine.add_person_data(buyer)


def add_closing(engine, closing_text, extra_clauses=None):
    if extra_clauses:
        engine.add_section_title("CLÁUSULAS ADICIONALES", False)
        engine.add_paragraph(extra_clauses)
        engine.add_line_break(3)
    engine.add_paragraph(closing_text.strip())
    engine.add_signature_area()
