"""
Checksum algorithms for checksum-bearing identifiers.

Pure functions over digit/letter strings: no randomness here. Each
``*_check_digit(s)`` computes the symbol(s) a generator appends to a body;
the ``*_check`` validators never raise.
"""

import math
import string
from typing import Iterable, List, Sequence, Tuple

LETTERS = string.ascii_uppercase

PESEL_WEIGHTS = (1, 3, 7, 9, 1, 3, 7, 9, 1, 3)
NIP_WEIGHTS = (6, 5, 7, 2, 3, 4, 5, 6, 7)
REGON_WEIGHTS = (8, 9, 2, 3, 4, 5, 6, 7)
CNPJ_FIRST_WEIGHTS = (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
CNPJ_SECOND_WEIGHTS = (6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
MRZ_WEIGHTS = (7, 3, 1)

# Codice fiscale: value of a character in an odd (1-based) position is its
# index in this ordering; digits 0-9 map onto A-J first.
CF_ODD_ORDER = "BAKPLCQDREVOSFTGUHMINJWZYX"


def to_digits(value, expected_length: int = None) -> List[int]:
    """Split a digit string (or int) into ints, rejecting anything else."""
    text = str(value)
    for ch in text:
        if ch not in string.digits:
            raise ValueError(f"seedforge: '{ch}' is not a digit in {text!r}")
    if expected_length is not None and len(text) != expected_length:
        raise ValueError(
            f"seedforge: Expected {expected_length} digits, got {len(text)} in {text!r}"
        )
    return [int(ch) for ch in text]


def weighted_sum(digits: Sequence[int], weights: Sequence[int]) -> int:
    return sum(d * w for d, w in zip(digits, weights))


# ---------------------------------------------------------------------------
# Luhn
# ---------------------------------------------------------------------------


def luhn_calculate(digits) -> int:
    """
    Check digit that makes `digits` + check Luhn-valid.

    Walking left from the rightmost existing digit, every digit at an even
    offset is doubled (minus 9 when above 9) because the check digit will
    occupy offset zero once appended.
    """
    values = to_digits(digits)
    total = 0
    for offset, digit in enumerate(reversed(values)):
        if offset % 2 == 0:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return (math.ceil(total / 10) * 10 - total) % 10


def luhn_check(number) -> bool:
    """True when the full sequence, check digit included, is Luhn-valid."""
    text = str(number)
    if len(text) < 2 or not text.isdigit() or not text.isascii():
        return False
    return luhn_calculate(text[:-1]) == int(text[-1])


# ---------------------------------------------------------------------------
# Modulus 11 / modulus 10 national identifiers
# ---------------------------------------------------------------------------


def _mod11_digit(total: int) -> int:
    """Brazilian rule: 11 - (total mod 11), with 10 and 11 collapsing to 0."""
    digit = 11 - (total % 11)
    return 0 if digit >= 10 else digit


def cpf_check_digits(body) -> Tuple[int, int]:
    """Both CPF check digits for a 9-digit body."""
    n = to_digits(body, 9)
    first = _mod11_digit(weighted_sum(n, range(10, 1, -1)))
    second = _mod11_digit(weighted_sum(n + [first], range(11, 1, -1)))
    return first, second


def cnpj_check_digits(body) -> Tuple[int, int]:
    """Both CNPJ check digits for a 12-digit body (8 base + 4 branch)."""
    n = to_digits(body, 12)
    first = _mod11_digit(weighted_sum(n, CNPJ_FIRST_WEIGHTS))
    second = _mod11_digit(weighted_sum(n + [first], CNPJ_SECOND_WEIGHTS))
    return first, second


def pesel_check_digit(body) -> int:
    total = weighted_sum(to_digits(body, 10), PESEL_WEIGHTS)
    return (10 - total % 10) % 10


def nip_check_digit(body) -> int:
    """Polish NIP control value; 10 means no valid NIP has this body."""
    return weighted_sum(to_digits(body, 9), NIP_WEIGHTS) % 11


def regon_check_digit(body) -> int:
    digit = weighted_sum(to_digits(body, 8), REGON_WEIGHTS) % 11
    return 0 if digit == 10 else digit


def israel_id_check_digit(body) -> int:
    total = 0
    for i, digit in enumerate(to_digits(body, 8)):
        product = digit * (1 if i % 2 == 0 else 2)
        total += product // 10 + product % 10
    return (10 - total % 10) % 10


# ---------------------------------------------------------------------------
# Letter-bearing schemes
# ---------------------------------------------------------------------------


def mrz_value(ch: str) -> int:
    if ch == "<":
        return 0
    if ch in string.digits:
        return int(ch)
    if ch in LETTERS:
        return LETTERS.index(ch) + 10
    raise ValueError(f"seedforge: '{ch}' is not a valid MRZ character")


def mrz_check_digit(text) -> int:
    """ICAO 9303 check digit (weights 7, 3, 1 repeating)."""
    return sum(
        mrz_value(ch) * MRZ_WEIGHTS[i % 3] for i, ch in enumerate(str(text))
    ) % 10


def _cf_normalize(ch: str) -> str:
    if ch in string.digits:
        return LETTERS[int(ch)]
    if ch in LETTERS:
        return ch
    raise ValueError(f"seedforge: '{ch}' is not a valid codice fiscale character")


def codice_fiscale_check_char(body: str) -> str:
    """Control letter for the first 15 characters of a codice fiscale."""
    text = body.upper()
    if len(text) != 15:
        raise ValueError(f"seedforge: Expected 15 characters, got {len(text)} in {body!r}")
    total = 0
    for i, ch in enumerate(text):
        mapped = _cf_normalize(ch)
        if i % 2 == 0:
            total += CF_ODD_ORDER.index(mapped)
        else:
            total += LETTERS.index(mapped)
    return LETTERS[total % 26]


# ---------------------------------------------------------------------------
# IBAN (ISO 7064 mod 97-10)
# ---------------------------------------------------------------------------


def _iban_numeric(chars: Iterable[str]) -> int:
    out = []
    for ch in chars:
        if ch in string.digits:
            out.append(ch)
        elif ch in LETTERS:
            out.append(str(LETTERS.index(ch) + 10))
        else:
            raise ValueError(f"seedforge: '{ch}' is not a valid IBAN character")
    return int("".join(out))


def iban_check_digits(country: str, bban: str) -> str:
    remainder = _iban_numeric(bban.upper() + country.upper() + "00") % 97
    return f"{98 - remainder:02d}"


def iban_check(iban: str) -> bool:
    text = str(iban).replace(" ", "").upper()
    if len(text) < 5 or not text.isalnum() or not text.isascii():
        return False
    return _iban_numeric(text[4:] + text[:4]) % 97 == 1
