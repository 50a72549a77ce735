"""
Financial generators: payment cards and expiry dates, IBANs, currencies,
dollar and euro amounts.
"""

from datetime import date
from typing import List, Optional, Tuple, Union

from . import checksums
from .data import CardType, Currency
from .errors import test_range
from .models import CardExpiry
from .primitives import CHARS_UPPER, NUMBERS, floating, integer, pickone, string, unique

# Country code -> BBAN length (digits and upper-case letters)
IBAN_BBAN_LENGTHS = {
    "DE": 18,
    "ES": 20,
    "FR": 23,
    "GB": 18,
    "IT": 23,
    "NL": 14,
    "PL": 24,
}


def cc_types(ctx) -> Tuple[CardType, ...]:
    return ctx.get("cc_types")


def cc_type(ctx, name: Optional[str] = None, raw: bool = False) -> Union[CardType, str]:
    """
    A card type, by full or short name, or drawn at random.

    Returns the card's name unless raw=True, which returns the CardType.
    """
    types = cc_types(ctx)
    if name is None:
        card = pickone(ctx, types)
    else:
        matches = [t for t in types if t.name == name or t.short_name == name]
        test_range(
            not matches,
            f"Credit card type '{name}' is not supported",
        )
        card = matches[0]
    return card if raw else card.name


def cc(ctx, card_type: Optional[str] = None) -> str:
    """Luhn-valid card number: issuer prefix, random body, check digit."""
    card = cc_type(ctx, name=card_type, raw=True)
    body_length = card.length - len(card.prefix) - 1
    number = card.prefix + string(ctx, pool=NUMBERS, length=body_length)
    return number + str(checksums.luhn_calculate(number))


def currency(ctx) -> Currency:
    return pickone(ctx, ctx.get("currency_types"))


def _same_code(collected: List[Currency], value: Currency) -> bool:
    return any(c.code == value.code for c in collected)


def currency_pair(ctx, as_string: bool = False) -> Union[List[Currency], str]:
    """Two currencies with distinct codes, e.g. 'EUR/USD' when as_string."""
    pair = unique(currency, 2, _same_code, ctx)
    if as_string:
        return f"{pair[0].code}/{pair[1].code}"
    return pair


def dollar(ctx, min_value: float = 0, max_value: float = 10000) -> str:
    """Dollar amount with two decimals, e.g. '$1234.50' or '-$0.25'."""
    amount = floating(ctx, min_value=min_value, max_value=max_value, fixed=2)
    text = f"${abs(amount):.2f}"
    return "-" + text if amount < 0 else text


def euro(ctx, min_value: float = 0, max_value: float = 10000) -> str:
    """Euro amount with thousands separators and trailing zeros dropped, e.g. '1,234.5€'."""
    amount = floating(ctx, min_value=min_value, max_value=max_value, fixed=2)
    text = f"{amount:,.2f}".rstrip("0").rstrip(".")
    return text + "€"


def exp_year(ctx, today: Optional[date] = None) -> str:
    """Expiry year within the next ten years; next year onwards in December."""
    today = today or date.today()
    first_year = today.year + 1 if today.month == 12 else today.year
    return str(integer(ctx, first_year, today.year + 10))


def exp_month(ctx, future: bool = False, today: Optional[date] = None) -> str:
    """Two-digit expiry month; with future=True, later than the current month."""
    today = today or date.today()
    if future and today.month != 12:
        month = integer(ctx, today.month + 1, 12)
    else:
        month = integer(ctx, 1, 12)
    return f"{month:02d}"


def exp(ctx, raw: bool = False, today: Optional[date] = None) -> Union[CardExpiry, str]:
    """
    Card expiry that has not passed as of `today`, as 'MM/YYYY'.

    raw=True returns the CardExpiry instead.
    """
    today = today or date.today()
    year = exp_year(ctx, today=today)
    month = exp_month(ctx, future=year == str(today.year), today=today)
    expiry = CardExpiry(month=month, year=year)
    return expiry if raw else str(expiry)


def iban(ctx, country: Optional[str] = None) -> str:
    """IBAN with ISO 7064 mod 97-10 check digits."""
    if country is None:
        country = pickone(ctx, sorted(IBAN_BBAN_LENGTHS))
    country = country.upper()
    test_range(
        country not in IBAN_BBAN_LENGTHS,
        f"IBAN country '{country}' is not supported. "
        f"Expected one of {', '.join(sorted(IBAN_BBAN_LENGTHS))}",
    )
    bban = string(ctx, pool=NUMBERS + CHARS_UPPER, length=IBAN_BBAN_LENGTHS[country])
    return country + checksums.iban_check_digits(country, bban) + bban


GENERATORS = {
    "cc": cc,
    "cc_type": cc_type,
    "cc_types": cc_types,
    "currency": currency,
    "currency_pair": currency_pair,
    "dollar": dollar,
    "euro": euro,
    "exp": exp,
    "exp_month": exp_month,
    "exp_year": exp_year,
    "iban": iban,
}
