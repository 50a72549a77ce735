"""
Minimal person attributes needed by the identifier generators.
"""

from datetime import date, timedelta
from typing import List, Optional

from .errors import test_range
from .primitives import integer, pickone

GENDERS = ["Male", "Female"]
GENDER_ALIASES = {"m": "Male", "male": "Male", "f": "Female", "female": "Female"}


def gender(ctx, extra_genders: Optional[List[str]] = None) -> str:
    return pickone(ctx, GENDERS + list(extra_genders or []))


def canonical_gender(value: str) -> str:
    """Spell M/F (any case) as Male/Female; other values pass through."""
    return GENDER_ALIASES.get(value.strip().lower(), value)


def first(ctx, gender_name: Optional[str] = None, nationality: str = "en") -> str:
    """First name from the `first_names` table."""
    gender_name = canonical_gender(gender_name or gender(ctx)).lower()
    tables = ctx.get("first_names")
    test_range(gender_name not in tables, f"No first names for gender '{gender_name}'.")
    by_nationality = tables[gender_name]
    test_range(
        nationality.lower() not in by_nationality,
        f"No first names for nationality '{nationality}'.",
    )
    return pickone(ctx, by_nationality[nationality.lower()])


def last(ctx, nationality: str = "*") -> str:
    """Last name; '*' draws from every nationality."""
    tables = ctx.get("last_names")
    if nationality == "*":
        names = [name for group in tables.values() for name in group]
    else:
        test_range(
            nationality.lower() not in tables,
            f"No last names for nationality '{nationality}'.",
        )
        names = tables[nationality.lower()]
    return pickone(ctx, names)


def name(ctx, gender_name: Optional[str] = None, nationality: str = "en") -> str:
    return f"{first(ctx, gender_name, nationality)} {last(ctx, nationality)}"


def birthday(
    ctx,
    min_age: int = 18,
    max_age: int = 65,
    today: Optional[date] = None,
) -> date:
    """A date of birth putting the person between min_age and max_age."""
    test_range(min_age < 0, "min_age cannot be less than zero.")
    test_range(min_age > max_age, "min_age cannot be greater than max_age.")

    today = today or date.today()
    latest = _years_before(today, min_age)
    earliest = _years_before(today, max_age + 1) + timedelta(days=1)
    offset = integer(ctx, 0, (latest - earliest).days)
    return earliest + timedelta(days=offset)


def _years_before(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # 29 February in a non-leap target year
        return day.replace(year=day.year - years, day=28)


GENERATORS = {
    "gender": gender,
    "first": first,
    "last": last,
    "name": name,
    "birthday": birthday,
}
