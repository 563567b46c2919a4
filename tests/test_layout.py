"""
Tests for the cursor-driven layout engine.

Pagination is checked through ``engine.trace`` rather than by parsing PDFs.
"""

import base64
import io
import re

import pytest
from structlog.testing import capture_logs

from vehicle_docs.clauses import Clause
from vehicle_docs.errors import ConfigurationError
from vehicle_docs.layout import LayoutEngine, LayoutState
from vehicle_docs.style import BODY_TOP, CompanyProfile, StyleConfig

BOTTOM = 297 - 20


def blocks(engine, kind):
    return [block for block in engine.trace if block.kind == kind]


def pdf_page_count(content):
    return len(re.findall(rb"/Type /Page\b", content))


def png_bytes():
    from PIL import Image

    buf = io.BytesIO()
    Image.new("RGB", (8, 8), (19, 91, 236)).save(buf, "PNG")
    return buf.getvalue()


class TestPageBreaks:
    def test_header_resets_cursor(self, engine):
        engine.add_header()
        assert engine.state == LayoutState(cursor_y=BODY_TOP, page_index=1)
        assert len(blocks(engine, "header")) == 1

    def test_no_break_when_space_remains(self, engine):
        engine.add_header()
        assert engine.check_page_break(20) is False
        assert engine.page_count == 1

    def test_break_redraws_header(self, engine):
        engine.add_header()
        engine.state.cursor_y = 270
        assert engine.check_page_break(20) is True
        assert engine.state == LayoutState(cursor_y=BODY_TOP, page_index=2)
        assert [block.first_page for block in blocks(engine, "header")] == [1, 2]

    def test_long_paragraph_spans_pages(self, engine):
        engine.add_header()
        engine.add_paragraph("palabra " * 3000)

        paragraph = blocks(engine, "paragraph")[0]
        assert paragraph.first_page == 1
        assert paragraph.last_page == engine.page_count > 2

    def test_every_page_gets_header_and_footer(self, engine):
        engine.add_header()
        engine.add_paragraph("texto de relleno " * 1500)
        content = engine.finalize()

        pages = list(range(1, engine.page_count + 1))
        assert [block.first_page for block in blocks(engine, "header")] == pages
        assert [block.first_page for block in blocks(engine, "footer")] == pages
        assert pdf_page_count(content) == engine.page_count

    @pytest.mark.parametrize("cursor", range(BODY_TOP, BOTTOM + 1, 8))
    def test_signature_never_split(self, engine, cursor):
        engine.add_header()
        engine.state.cursor_y = cursor
        engine.add_signature_area()

        signature = blocks(engine, "signature")[-1]
        assert signature.first_page == signature.last_page
        assert signature.bottom <= BOTTOM

    def test_key_value_box_moves_whole(self, engine):
        engine.add_header()
        engine.state.cursor_y = 250
        engine.add_key_value_box([("Importe:", "1,00 €")] * 5)

        box = blocks(engine, "key_value_box")[0]
        assert box.first_page == box.last_page == 2

    def test_clause_heading_not_orphaned(self, engine):
        engine.add_header()
        engine.state.cursor_y = 260
        engine.add_clauses([Clause(number=1, title="OBJETO", body="Texto breve.")])

        assert engine.page_count == 2
        assert blocks(engine, "paragraph")[0].first_page == 2


class TestText:
    def test_wrap_respects_width(self, engine):
        lines = engine.wrap_text("El VENDEDOR transmite al COMPRADOR la propiedad del vehículo " * 6, 80)
        assert len(lines) > 1
        assert all(engine.text_width(line) <= 80 for line in lines)

    def test_wrap_keeps_explicit_newlines(self, engine):
        assert engine.wrap_text("uno\n\ndos", 100) == ["uno", "", "dos"]

    def test_label_value_wraps_long_values(self, engine):
        engine.add_header()
        engine.add_label_value("Domicilio:", "Calle " * 60)
        block = blocks(engine, "label_value")[0]
        assert block.bottom - block.top > 5


class TestLogo:
    def test_broken_logo_is_skipped_with_warning(self, style):
        engine = LayoutEngine(style=style, company=CompanyProfile(logo=b"not an image"))
        with capture_logs() as logs:
            engine.add_header()
            engine.new_page()

        assert [entry["event"] for entry in logs if entry["log_level"] == "warning"] == ["logo_embed_failed"]
        assert engine.finalize().startswith(b"%PDF")

    def test_bad_data_uri_is_skipped(self, style):
        engine = LayoutEngine(style=style, company=CompanyProfile(logo="data:image/png;base64,@@@"))
        engine.add_header()
        assert engine._logo_failed

    def test_png_bytes_logo(self, style):
        engine = LayoutEngine(style=style, company=CompanyProfile(logo=png_bytes()))
        engine.add_header()
        assert not engine._logo_failed
        assert engine.finalize().startswith(b"%PDF")

    def test_png_data_uri_logo(self, style):
        uri = "data:image/png;base64," + base64.b64encode(png_bytes()).decode("ascii")
        engine = LayoutEngine(style=style, company=CompanyProfile(logo=uri))
        engine.add_header()
        assert not engine._logo_failed


class TestConfiguration:
    @pytest.mark.parametrize(
        "style",
        [
            {"primary_color": (300, 0, 0)},
            {"font_sizes": {"normal": 0}},
            {"margins": {"left": 110, "right": 110}},
            {"margins": {"top": -1}},
        ],
    )
    def test_invalid_style(self, style):
        with pytest.raises(ConfigurationError):
            LayoutEngine(style=style)

    def test_unregistered_font(self):
        with pytest.raises(ConfigurationError, match="NoSuchFont"):
            LayoutEngine(style={"font_family": "NoSuchFont"})

    def test_invalid_company(self):
        with pytest.raises(ConfigurationError):
            LayoutEngine(company={"name": ["not", "a", "string"]})

    def test_content_width_follows_margins(self):
        engine = LayoutEngine(style=StyleConfig(margins={"left": 15, "right": 15}))
        assert engine.content_width == 180


class TestOutput:
    def test_finalize_is_idempotent(self, engine):
        engine.add_header()
        first = engine.finalize()
        assert engine.finalized
        assert engine.finalize() is first
        assert engine.get_bytes() is first

    def test_data_url(self, engine):
        engine.add_header()
        url = engine.get_data_url()
        assert url.startswith("data:application/pdf;base64,")
        assert base64.b64decode(url.split(",", 1)[1]) == engine.get_bytes()

    def test_download(self, engine, tmp_path):
        engine.add_header()
        target = tmp_path / "prueba.pdf"
        engine.download(str(target))
        assert target.read_bytes() == engine.get_bytes()

    def test_engines_do_not_share_state(self, style):
        first = LayoutEngine(style=style)
        second = LayoutEngine(style=style)
        first.add_header()
        first.new_page()

        assert second.state == LayoutState(cursor_y=20, page_index=1)
        assert second.trace == []
