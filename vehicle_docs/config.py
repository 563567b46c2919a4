"""
Configuration Management
========================

Environment-driven settings (prefix ``VEHICLE_DOCS_``, optional ``.env``) for
the issuer shown on documents, its logo and custom fonts.
"""

from decimal import Decimal
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from vehicle_docs.errors import ConfigurationError
from vehicle_docs.style import DEFAULT_COMPANY, CompanyProfile, StyleConfig, register_font_family


class EngineSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="VEHICLE_DOCS_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    company_name: str = Field(DEFAULT_COMPANY.name, description="Trade name in the header band")
    company_legal_name: Optional[str] = None
    company_tax_id: str = DEFAULT_COMPANY.tax_id
    company_street: str = DEFAULT_COMPANY.street
    company_postal_code: str = DEFAULT_COMPANY.postal_code
    company_locality: str = DEFAULT_COMPANY.locality
    company_province: str = DEFAULT_COMPANY.province
    company_phone: str = DEFAULT_COMPANY.phone
    company_email: str = DEFAULT_COMPANY.email
    company_web: Optional[str] = DEFAULT_COMPANY.web
    company_bank_account: Optional[str] = DEFAULT_COMPANY.bank_account
    logo_path: Optional[Path] = Field(None, description="PNG/JPEG printed in the header")
    font_dir: Optional[Path] = Field(None, description="Directory holding a TTF family")
    font_family: Optional[str] = Field(None, description="Family name, e.g. 'DejaVuSans'")
    default_tax_rate: Decimal = Decimal("21")
    compress: bool = True

    def company_profile(self) -> CompanyProfile:
        logo = None
        if self.logo_path is not None:
            if not self.logo_path.is_file():
                raise ConfigurationError(f"logo file not found: {self.logo_path}")
            logo = str(self.logo_path)
        return CompanyProfile(
            name=self.company_name,
            legal_name=self.company_legal_name,
            tax_id=self.company_tax_id,
            street=self.company_street,
            postal_code=self.company_postal_code,
            locality=self.company_locality,
            province=self.company_province,
            phone=self.company_phone,
            email=self.company_email,
            web=self.company_web,
            bank_account=self.company_bank_account,
            logo=logo,
        )

    def style(self) -> StyleConfig:
        fonts = {}
        if self.font_family:
            if self.font_dir is None:
                raise ConfigurationError("font_family requires font_dir")
            fonts = register_font_family(self.font_family, str(self.font_dir))
        return StyleConfig(compress=self.compress, **fonts)


def load_settings(**overrides) -> EngineSettings:
    return EngineSettings(**overrides)
