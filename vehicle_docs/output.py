"""
Output adapter
Runs a document variant on a fresh LayoutEngine and hands back the finished PDF.
"""

import base64
import io
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import structlog

from vehicle_docs.documents import TITLES, compose
from vehicle_docs.layout import LayoutEngine
from vehicle_docs.models import DocumentKind
from vehicle_docs.validation import validate_bundle

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RenderedDocument:
    """One finalized PDF; bytes, stream and data URI are views of the same output."""

    kind: DocumentKind
    content: bytes
    filename: str
    page_count: int
    number: Optional[str] = None

    def stream(self):
        return io.BytesIO(self.content)

    def data_url(self):
        return "data:application/pdf;base64," + base64.b64encode(self.content).decode("ascii")

    def save(self, path=None):
        """Write the PDF to ``path`` (a file or a directory) and return the file path."""
        target = Path(path) if path else Path(self.filename)
        if target.is_dir():
            target = target / self.filename
        target.write_bytes(self.content)
        return target


def _safe(part):
    return re.sub(r'[\\/*?:"<>|\s]+', "_", str(part or "")).strip("_") or "documento"


def default_filename(bundle, number=None):
    kind = DocumentKind(bundle.kind)
    if kind == DocumentKind.PURCHASE_CONTRACT:
        return f"Contrato_Compraventa_{_safe(bundle.vehicle.plate)}.pdf"
    if kind == DocumentKind.DEPOSIT_AGREEMENT:
        return f"Contrato_Senal_{_safe(bundle.vehicle.plate)}.pdf"
    if kind == DocumentKind.INVOICE:
        return f"Factura_{_safe(number)}.pdf"
    if kind == DocumentKind.PROFORMA_INVOICE:
        return f"Proforma_{_safe(number)}.pdf"
    raise ValueError(f"unknown document kind: {kind}")


def render_document(bundle, style=None, company=None, strict=False, numberer=None):
    """Compose ``bundle`` into a PDF.

    Each call builds its own LayoutEngine, so concurrent calls never share
    cursor or page state. ``strict`` rejects incomplete legal data before any
    drawing happens; otherwise missing values render blank or as zero.
    """
    if strict:
        validate_bundle(bundle)

    kind = DocumentKind(bundle.kind)
    log = logger.bind(kind=kind.value)
    log.info("document_render_started")

    engine = LayoutEngine(style=style, company=company, title=TITLES[kind])
    number = compose(engine, bundle, numberer)
    content = engine.finalize()

    log.info("document_render_finished", pages=engine.page_count, bytes=len(content), number=number)
    return RenderedDocument(
        kind=kind,
        content=content,
        filename=default_filename(bundle, number),
        page_count=engine.page_count,
        number=number,
    )
