"""Checksum validation for Spanish identity documents (DNI, NIE, CIF)."""

import re
from typing import NamedTuple

DNI_LETTERS = "TRWAGMYFPDXBNJZSQVHLCKE"
NIE_PREFIXES = "XYZ"
CIF_LETTERS = "ABCDEFGHJKLMNPQRSUVW"
CIF_CONTROL_LETTERS = "JABCDEFGHI"

_DNI_RE = re.compile(r"^[0-9]{8}[A-Z]$")
_NIE_RE = re.compile(r"^[XYZ][0-9]{7}[A-Z]$")
_CIF_RE = re.compile(r"^[ABCDEFGHJKLMNPQRSUVW][0-9]{7}[0-9A-J]$")


class IdentityCheck(NamedTuple):
    is_valid: bool
    kind: str  # 'DNI', 'NIE', 'CIF' or 'unknown'
    normalized: str


def normalize(document: str) -> str:
    return re.sub(r"[^0-9A-Z]", "", (document or "").upper())


def is_valid_dni(dni: str) -> bool:
    clean = normalize(dni)
    if not _DNI_RE.match(clean):
        return False
    return DNI_LETTERS[int(clean[:8]) % 23] == clean[8]


def is_valid_nie(nie: str) -> bool:
    clean = normalize(nie)
    if not _NIE_RE.match(clean):
        return False
    number = int(str(NIE_PREFIXES.index(clean[0])) + clean[1:8])
    return DNI_LETTERS[number % 23] == clean[8]


def is_valid_cif(cif: str) -> bool:
    clean = normalize(cif)
    if not _CIF_RE.match(clean):
        return False

    letter, digits, control = clean[0], clean[1:8], clean[8]
    even_sum = 0
    odd_sum = 0
    for i, char in enumerate(digits):
        digit = int(char)
        if i % 2 == 0:
            doubled = digit * 2
            odd_sum += doubled - 9 if doubled > 9 else doubled
        else:
            even_sum += digit

    control_digit = (10 - (even_sum + odd_sum) % 10) % 10
    control_letter = CIF_CONTROL_LETTERS[control_digit]

    if letter in "KPQS":
        return control == control_letter
    if letter in "ABEH":
        return control == str(control_digit)
    return control in (str(control_digit), control_letter)


def check_identity(document: str) -> IdentityCheck:
    """Detect the document type and validate its control character."""
    clean = normalize(document)
    if not clean:
        return IdentityCheck(False, "unknown", "")
    if _DNI_RE.match(clean):
        return IdentityCheck(is_valid_dni(clean), "DNI", clean)
    if _NIE_RE.match(clean):
        return IdentityCheck(is_valid_nie(clean), "NIE", clean)
    if re.match(r"^[A-Z][0-9]{7}[0-9A-Z]$", clean) and clean[0] in CIF_LETTERS:
        return IdentityCheck(is_valid_cif(clean), "CIF", clean)
    return IdentityCheck(False, "unknown", clean)
