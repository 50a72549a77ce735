"""
Checksum-bearing national identifiers.

Each generator draws a digit body and appends the check symbol computed by
``checksums``. Where a standard declares a check value invalid (Polish NIP
remainder 10) the body is redrawn; where the standard maps it (CPF, CNPJ,
REGON) the mapping is applied inside the checksum function.
"""

import logging
import re
from datetime import date
from typing import Optional

from . import checksums
from .errors import UnsupportedError, test_range
from .models import MrzFields
from .person import birthday as draw_birthday
from .person import canonical_gender
from .person import first as draw_first
from .person import gender as draw_gender
from .person import last as draw_last
from .person import _years_before
from .primitives import NUMBERS, natural, pad, pickone, string

logger = logging.getLogger(__name__)

CF_MONTH_LETTERS = "ABCDEHLMPRST"
CF_CONSONANTS = "BCDFGHJKLMNPQRSTVWXYZ"
CF_VOWELS = "AEIOU"
CF_CITY_LETTERS = "ABCDEFGHILMZ"


def _digits(ctx, count: int) -> str:
    return string(ctx, pool=NUMBERS, length=count)


def cpf(ctx, formatted: bool = True) -> str:
    """Brazilian CPF: 9 digits + 2 mod-11 check digits."""
    body = _digits(ctx, 9)
    d1, d2 = checksums.cpf_check_digits(body)
    if not formatted:
        return f"{body}{d1}{d2}"
    return f"{body[:3]}.{body[3:6]}.{body[6:]}-{d1}{d2}"


def cnpj(ctx, formatted: bool = True) -> str:
    """Brazilian CNPJ for a head office (branch 0001)."""
    base = _digits(ctx, 8)
    body = base + "0001"
    d1, d2 = checksums.cnpj_check_digits(body)
    if not formatted:
        return f"{body}{d1}{d2}"
    return f"{base[:2]}.{base[2:5]}.{base[5:]}/0001-{d1}{d2}"


def pl_pesel(ctx) -> str:
    body = pad(natural(ctx, 1, 9999999999), 10)
    return body + str(checksums.pesel_check_digit(body))


def pl_nip(ctx) -> str:
    """Polish NIP. Bodies whose control value is 10 are redrawn."""
    while True:
        body = pad(natural(ctx, 1, 999999999), 9)
        control = checksums.nip_check_digit(body)
        if control != 10:
            return body + str(control)
        logger.debug(f"Redrawing NIP body {body}: control value 10")


def pl_regon(ctx) -> str:
    body = pad(natural(ctx, 1, 99999999), 8)
    return body + str(checksums.regon_check_digit(body))


def it_vat(ctx) -> str:
    """Italian partita IVA: 7-digit number, 3-digit office code, Luhn digit."""
    number = pad(natural(ctx, 1, 1800000), 7)
    office = pad(pickone(ctx, ctx.get("it_provinces")).code, 3)
    body = number + office
    return body + str(checksums.luhn_calculate(body))


def israel_id(ctx) -> str:
    body = _digits(ctx, 8)
    return body + str(checksums.israel_id_check_digit(body))


VAT_GENERATORS = {
    "it": it_vat,
}


def vat(ctx, country: str = "it") -> str:
    generator = VAT_GENERATORS.get(country.lower())
    if generator is None:
        supported = ", ".join(sorted(VAT_GENERATORS))
        raise UnsupportedError(
            f"seedforge: VAT numbers for country '{country}' are not supported (supported: {supported})"
        )
    return generator(ctx)


# ---------------------------------------------------------------------------
# Codice fiscale
# ---------------------------------------------------------------------------


def _cf_name_part(name: str, is_last: bool) -> str:
    upper = "".join(ch for ch in name.upper() if ch.isalpha())
    consonants = "".join(ch for ch in upper if ch in CF_CONSONANTS)
    vowels = "".join(ch for ch in upper if ch in CF_VOWELS)

    # first names with 4+ consonants skip the second one
    if not is_last and len(consonants) > 3:
        return consonants[0] + consonants[2:4]
    return (consonants + vowels + "XXX")[:3]


def _cf_date_part(born: date, gender_name: str) -> str:
    day = born.day + (40 if gender_name.lower() == "female" else 0)
    return f"{born.year % 100:02d}{CF_MONTH_LETTERS[born.month - 1]}{day:02d}"


def codice_fiscale(
    ctx,
    first: Optional[str] = None,
    last: Optional[str] = None,
    gender: Optional[str] = None,
    birthday: Optional[date] = None,
    city: Optional[str] = None,
) -> str:
    """
    Italian codice fiscale (16 characters).

    Inputs not given are drawn; they are not checked for real-world
    validity (e.g. that `city` is an existing cadastral code). `gender`
    may be spelled "Male"/"Female" or "M"/"F".
    """
    gender = canonical_gender(gender or draw_gender(ctx))
    first = first or draw_first(ctx, gender, "it")
    last = last or draw_last(ctx, "it")
    birthday = birthday or draw_birthday(ctx)
    city = city or pickone(ctx, CF_CITY_LETTERS) + pad(natural(ctx, 0, 999), 3)

    body = (
        _cf_name_part(last, is_last=True)
        + _cf_name_part(first, is_last=False)
        + _cf_date_part(birthday, gender)
        + city.upper()
    )
    return body + checksums.codice_fiscale_check_char(body)


# ---------------------------------------------------------------------------
# Passport MRZ
# ---------------------------------------------------------------------------


def _yymmdd(day: date) -> str:
    return f"{day.year % 100:02d}{day.month:02d}{day.day:02d}"


def _mrz_text(value: str) -> str:
    """Upper-case and replace anything outside A-Z, 0-9 and '<' with '<'."""
    return re.sub(r"[^A-Z0-9<]", "<", value.upper())


def _mrz_field(value: str, width: int, label: str) -> str:
    text = _mrz_text(value)
    test_range(len(text) > width, f"MRZ {label} '{value}' is longer than {width} characters.")
    return text.ljust(width, "<")


def _mrz_date(value: str, label: str) -> str:
    test_range(
        re.fullmatch(r"\d{6}", value) is None,
        f"MRZ {label} must be six digits (YYMMDD), got '{value}'.",
    )
    return value


def format_mrz(fields: MrzFields) -> str:
    """
    Render TD3 machine readable zone lines (44 + 44 characters, no newline).

    Short document numbers and country codes are padded with '<'; names are
    cut to fit line 1. Values too long for their field raise RangeError.
    """
    issuer = _mrz_field(fields.issuer, 3, "issuer")
    nationality = _mrz_field(fields.nationality, 3, "nationality")
    passport_number = _mrz_field(fields.passport_number, 9, "passport number")
    dob = _mrz_date(fields.dob, "date of birth")
    expiry = _mrz_date(fields.expiry, "expiry date")
    gender = fields.gender.upper()
    test_range(gender not in ("M", "F", "<"), f"MRZ gender must be M, F or <, got '{fields.gender}'.")

    names = f"{_mrz_text(fields.last)}<<{_mrz_text(fields.first)}"
    line1 = f"P<{issuer}{names}"[:44].ljust(44, "<")

    personal = "<" * 14
    line2 = (
        passport_number
        + str(checksums.mrz_check_digit(passport_number))
        + nationality
        + dob
        + str(checksums.mrz_check_digit(dob))
        + gender
        + expiry
        + str(checksums.mrz_check_digit(expiry))
        + personal
        + str(checksums.mrz_check_digit(personal))
    )
    composite = line2[0:10] + line2[13:20] + line2[21:43]
    return line1 + line2 + str(checksums.mrz_check_digit(composite))


def mrz(
    ctx,
    first: Optional[str] = None,
    last: Optional[str] = None,
    passport_number: Optional[str] = None,
    dob: Optional[str] = None,
    expiry: Optional[str] = None,
    gender: Optional[str] = None,
    issuer: str = "GBR",
    nationality: str = "GBR",
    today: Optional[date] = None,
) -> str:
    """Passport MRZ with document, birth, expiry and composite check digits."""
    today = today or date.today()
    if gender is None:
        gender = draw_gender(ctx)
    gender = {"Male": "M", "Female": "F"}.get(canonical_gender(gender), gender)
    fields = MrzFields(
        first=first or draw_first(ctx),
        last=last or draw_last(ctx),
        passport_number=passport_number or _digits(ctx, 9),
        dob=dob or _yymmdd(draw_birthday(ctx, today=today)),
        expiry=expiry or _yymmdd(_years_before(today, -5)),
        gender=gender,
        issuer=issuer,
        nationality=nationality,
    )
    return format_mrz(fields)


GENERATORS = {
    "cpf": cpf,
    "cnpj": cnpj,
    "pl_pesel": pl_pesel,
    "pl_nip": pl_nip,
    "pl_regon": pl_regon,
    "it_vat": it_vat,
    "israel_id": israel_id,
    "vat": vat,
    "cf": codice_fiscale,
    "codice_fiscale": codice_fiscale,
    "mrz": mrz,
}
