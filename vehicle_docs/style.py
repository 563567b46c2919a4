"""
Document styling and issuer branding
Page geometry, palette, fonts and the company shown in every header band.
"""

import os
from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from reportlab.lib.colors import Color
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from vehicle_docs.errors import ConfigurationError

# ─── PAGE GEOMETRY (mm) ───
PAGE_WIDTH = 210
PAGE_HEIGHT = 297
HEADER_HEIGHT = 35
BODY_TOP = 45

RGB = Tuple[int, int, int]

# ─── COLOR PALETTE ───
MIDCAR_BLUE = (19, 91, 236)
SLATE_DARK = (30, 41, 59)
EMERALD = (16, 185, 129)
WHITE = (255, 255, 255)
GRAY = (128, 128, 128)
RULE_GRAY = (200, 200, 200)
ROW_RULE = (220, 220, 220)
TABLE_HEAD = (240, 240, 240)
BOX_FILL = (248, 250, 252)
BOX_STROKE = (226, 232, 240)
SIGN_LINE = (100, 100, 100)

# (fill, stroke, text) for callout boxes
AMBER_NOTICE = ((254, 243, 199), (251, 191, 36), (146, 64, 14))
GREEN_NOTICE = ((236, 253, 245), (16, 185, 129), (6, 95, 70))
RED_NOTICE = ((254, 242, 242), (239, 68, 68), (153, 27, 27))


def rl_color(rgb):
    """reportlab Color from an (r, g, b) tuple in 0-255."""
    r, g, b = rgb
    return Color(r / 255.0, g / 255.0, b / 255.0)


class FontSizes(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: float = 16
    subtitle: float = 12
    normal: float = 10
    small: float = 8

    @field_validator("title", "subtitle", "normal", "small")
    @classmethod
    def _positive(cls, value):
        if value <= 0:
            raise ValueError("font sizes must be positive")
        return value


class Margins(BaseModel):
    model_config = ConfigDict(frozen=True)

    top: float = 20
    bottom: float = 20
    left: float = 20
    right: float = 20

    @field_validator("top", "bottom", "left", "right")
    @classmethod
    def _not_negative(cls, value):
        if value < 0:
            raise ValueError("margins cannot be negative")
        return value


class StyleConfig(BaseModel):
    """Visual configuration, fixed for the lifetime of a LayoutEngine."""

    model_config = ConfigDict(frozen=True)

    primary_color: RGB = MIDCAR_BLUE
    secondary_color: RGB = SLATE_DARK
    accent_color: RGB = EMERALD
    font_family: str = "Helvetica"
    bold_font: str = "Helvetica-Bold"
    italic_font: str = "Helvetica-Oblique"
    font_sizes: FontSizes = FontSizes()
    margins: Margins = Margins()
    compress: bool = True

    @field_validator("primary_color", "secondary_color", "accent_color")
    @classmethod
    def _rgb_range(cls, value):
        if any(channel < 0 or channel > 255 for channel in value):
            raise ValueError("color channels must be within 0-255")
        return value

    @model_validator(mode="after")
    def _content_fits(self):
        if self.margins.left + self.margins.right >= PAGE_WIDTH:
            raise ValueError("horizontal margins leave no content width")
        if self.margins.bottom + BODY_TOP >= PAGE_HEIGHT:
            raise ValueError("bottom margin leaves no body height")
        return self

    @property
    def content_width(self) -> float:
        return PAGE_WIDTH - self.margins.left - self.margins.right

    def check_fonts(self):
        """Every font must be registered with reportlab before drawing."""
        for name in (self.font_family, self.bold_font, self.italic_font):
            try:
                pdfmetrics.getFont(name)
            except KeyError as exc:
                raise ConfigurationError(f"font {name!r} is not registered") from exc


DEFAULT_STYLE = StyleConfig()


class CompanyProfile(BaseModel):
    """Issuer data printed in the header band and on invoices."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field("MIDCAR AUTOMOCIÓN S.L.", description="Trade name")
    legal_name: Optional[str] = None
    tax_id: str = "B12345678"
    street: str = "Calle Principal, 123"
    postal_code: str = "28001"
    locality: str = "Madrid"
    province: str = "Madrid"
    phone: str = "912 345 678"
    email: str = "info@midcar.es"
    web: Optional[str] = "www.midcar.es"
    bank_account: Optional[str] = "ES12 1234 5678 9012 3456 7890"
    logo: Optional[Union[bytes, str]] = Field(
        None, description="Image bytes, file path or data:image URI"
    )

    @property
    def address_line(self) -> str:
        return f"{self.street} | {self.postal_code} {self.locality}"

    @property
    def contact_line(self) -> str:
        parts = [f"Tel: {self.phone}" if self.phone else None, self.email, self.web]
        return " | ".join(part for part in parts if part)


DEFAULT_COMPANY = CompanyProfile()


def register_font_family(name, font_dir, regular=None, bold=None, italic=None):
    """Register a TTF family and return a StyleConfig-compatible mapping.

    Files default to ``{name}-Regular.ttf``, ``{name}-Bold.ttf`` and
    ``{name}-Italic.ttf`` inside ``font_dir``.
    """
    files = {
        name: regular or f"{name}-Regular.ttf",
        f"{name}-Bold": bold or f"{name}-Bold.ttf",
        f"{name}-Italic": italic or f"{name}-Italic.ttf",
    }
    for font_name, filename in files.items():
        path = os.path.join(font_dir, filename)
        try:
            pdfmetrics.registerFont(TTFont(font_name, path))
        except Exception as exc:
            raise ConfigurationError(f"cannot register font {font_name!r} from {path}: {exc}") from exc
    return {"font_family": name, "bold_font": f"{name}-Bold", "italic_font": f"{name}-Italic"}


def resolve_style(style=None) -> StyleConfig:
    """Accept None, a StyleConfig or a plain mapping; fonts are checked too."""
    if style is None:
        style = DEFAULT_STYLE
    elif not isinstance(style, StyleConfig):
        try:
            style = StyleConfig.model_validate(style)
        except ValidationError as exc:
            raise ConfigurationError(f"invalid style configuration: {exc}") from exc
    style.check_fonts()
    return style


def resolve_company(company=None) -> CompanyProfile:
    if company is None:
        return DEFAULT_COMPANY
    if isinstance(company, CompanyProfile):
        return company
    try:
        return CompanyProfile.model_validate(company)
    except ValidationError as exc:
        raise ConfigurationError(f"invalid company profile: {exc}") from exc
