"""
Sampling primitives.

Every function takes the drawing context as its first argument: any object
with a ``random()`` method returning a float in [0, 1) (an Engine, a Forge,
or a test double). Nothing here keeps state between calls.
"""

import logging
import math
import numbers
from decimal import Decimal
from typing import Any, Callable, List, Optional, Sequence

import numpy as np

from .errors import RangeError, SeedforgeError, test_range

logger = logging.getLogger(__name__)

MAX_INT = 9007199254740992
MIN_INT = -MAX_INT
NUMBERS = "0123456789"
CHARS_LOWER = "abcdefghijklmnopqrstuvwxyz"
CHARS_UPPER = CHARS_LOWER.upper()
HEX_POOL = NUMBERS + "abcdef"
SYMBOLS = "!@#$%^&*()[]"

# unique() gives up after num * UNIQUE_RETRY_FACTOR consecutive duplicates
UNIQUE_RETRY_FACTOR = 50
NORMAL_POOL_MAX_RETRIES = 100

SMALL_PRIMES = [
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53, 59, 61, 67,
    71, 73, 79, 83, 89, 97,
]


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


def integer(ctx, min_value: int = MIN_INT, max_value: int = MAX_INT) -> int:
    """Uniform integer in [min_value, max_value], both inclusive."""
    test_range(min_value > max_value, "Min cannot be greater than Max.")
    span = max_value - min_value + 1
    value = min_value + int(math.floor(ctx.random() * span))
    # float rounding on very wide spans must not escape the range
    return min(value, max_value)


def natural(
    ctx,
    min_value: int = 0,
    max_value: int = MAX_INT,
    numerals: Optional[int] = None,
    exclude: Optional[Sequence[int]] = None,
) -> int:
    """Non-negative integer, optionally with a fixed digit count or exclusions."""
    if numerals is not None:
        test_range(numerals < 1, "Numerals cannot be less than one.")
        min_value = 10 ** (numerals - 1)
        max_value = 10 ** numerals - 1

    test_range(min_value < 0, "Min cannot be less than zero.")

    if exclude is None:
        return integer(ctx, min_value, max_value)

    test_range(not isinstance(exclude, (list, tuple)), "exclude must be a list.")
    for item in exclude:
        if not isinstance(item, int) or isinstance(item, bool):
            raise TypeError("seedforge: exclude must contain only integers.")

    exclusions = sorted(set(e for e in exclude if min_value <= e <= max_value))
    test_range(
        max_value - min_value + 1 <= len(exclusions),
        "exclude leaves no values in range.",
    )
    value = integer(ctx, min_value, max_value - len(exclusions))
    for excluded in exclusions:
        if value < excluded:
            break
        value += 1
    return value


def floating(
    ctx,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
    fixed: int = 4,
) -> float:
    """
    Float in [min_value, max_value] with `fixed` decimal places.

    Draws an integer over the scaled range and divides it back down, so the
    result carries exactly `fixed` decimals.
    """
    if not isinstance(fixed, int) or isinstance(fixed, bool):
        raise TypeError("seedforge: fixed must be an integer.")
    test_range(fixed < 0, "fixed cannot be less than zero.")

    scale = 10 ** fixed
    bound = MAX_INT / scale
    if min_value is None:
        min_value = -bound
    if max_value is None:
        max_value = bound

    test_range(
        min_value < -bound,
        f"Min specified is out of range with fixed. Min should be, at least, {-bound}",
    )
    test_range(
        max_value > bound,
        f"Max specified is out of range with fixed. Max should be, at most, {bound}",
    )
    test_range(min_value > max_value, "Min cannot be greater than Max.")

    # scale in decimal so 0.7 * 10 is exactly 7 and no bound is rounded past
    low = math.ceil(Decimal(str(min_value)) * scale)
    high = math.floor(Decimal(str(max_value)) * scale)
    test_range(low > high, f"No value with {fixed} decimals lies between {min_value} and {max_value}.")

    return round(integer(ctx, low, high) / scale, fixed)


def boolean(ctx, likelihood: float = 50) -> bool:
    """True with `likelihood` percent probability."""
    test_range(likelihood < 0 or likelihood > 100, "Likelihood accepts values from 0 to 100.")
    return ctx.random() * 100 < likelihood


def is_prime(n: Any) -> bool:
    """Trial division over 6k +/- 1 candidates."""
    if not _is_number(n) or n % 1 != 0 or n < 2:
        return False
    n = int(n)
    if n in (2, 3):
        return True
    if n % 2 == 0 or n % 3 == 0:
        return False
    i = 5
    while i * i <= n:
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6
    return True


def prime(ctx, min_value: int = 0, max_value: int = 10000) -> int:
    """A prime in [min_value, max_value], both inclusive."""
    test_range(min_value < 0, "Min cannot be less than zero.")
    test_range(min_value > max_value, "Min cannot be greater than Max.")

    candidates = [p for p in SMALL_PRIMES if min_value <= p <= max_value]
    start = max(SMALL_PRIMES[-1] + 2, min_value | 1)
    candidates.extend(p for p in range(start, max_value + 1, 2) if is_prime(p))

    if not candidates:
        raise RangeError(f"seedforge: No primes found between {min_value} and {max_value}")
    return pickone(ctx, candidates)


def hex_string(ctx, min_value: int = 0, max_value: int = MAX_INT, casing: str = "lower") -> str:
    test_range(min_value < 0, "Min cannot be less than zero.")
    value = format(natural(ctx, min_value, max_value), "x")
    return value.upper() if casing == "upper" else value


# ---------------------------------------------------------------------------
# Characters and strings
# ---------------------------------------------------------------------------


def character(
    ctx,
    pool: Optional[str] = None,
    alpha: bool = False,
    numeric: bool = False,
    symbols: bool = False,
    casing: Optional[str] = None,
) -> str:
    """A single character from `pool`, or from the requested classes."""
    if pool is not None:
        test_range(len(pool) == 0, "Cannot pick a character from an empty pool.")
    else:
        if casing == "lower":
            letters = CHARS_LOWER
        elif casing == "upper":
            letters = CHARS_UPPER
        else:
            letters = CHARS_LOWER + CHARS_UPPER

        pool = ""
        if alpha:
            pool += letters
        if numeric:
            pool += NUMBERS
        if symbols:
            pool += SYMBOLS
        if not pool:
            pool = letters + NUMBERS + SYMBOLS

    return pool[integer(ctx, 0, len(pool) - 1)]


def string(
    ctx,
    length: Optional[int] = None,
    min_length: int = 5,
    max_length: int = 20,
    **char_options: Any,
) -> str:
    """`length` independent characters (random length when not given)."""
    if length is None:
        length = natural(ctx, min_length, max_length)
    test_range(length < 0, "Length cannot be less than zero.")
    return "".join(character(ctx, **char_options) for _ in range(length))


def letter(ctx, casing: str = "lower") -> str:
    value = character(ctx, pool=CHARS_LOWER)
    return value.upper() if casing == "upper" else value


_TEMPLATE_REPLACERS = {
    "#": NUMBERS,
    "A": CHARS_UPPER,
    "a": CHARS_LOWER,
}


def template(ctx, pattern: str) -> str:
    """
    Fill a template such as ``{AA###}-{##}``.

    Inside braces ``#`` is a digit, ``A`` an upper case letter and ``a`` a
    lower case letter. Outside braces characters are copied; a backslash
    escapes a brace or another backslash.
    """
    if not pattern:
        raise SeedforgeError("seedforge: Template string is required")

    out: List[str] = []
    mode = "identity"
    for c in pattern:
        if mode == "escape":
            if c not in "{}\\":
                raise SeedforgeError(f'seedforge: Invalid escape sequence: "\\{c}".')
            out.append(c)
            mode = "identity"
        elif mode == "identity":
            if c == "{":
                mode = "replace"
            elif c == "\\":
                mode = "escape"
            else:
                out.append(c)
        else:
            if c == "}":
                mode = "identity"
                continue
            pool = _TEMPLATE_REPLACERS.get(c)
            if pool is None:
                raise SeedforgeError(f'seedforge: Invalid replacement character: "{c}".')
            out.append(character(ctx, pool=pool))
    return "".join(out)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def pad(number: Any, width: int, fill: str = "0") -> str:
    """Left-pad str(number) with `fill` up to `width` characters."""
    text = str(number)
    if len(text) >= width:
        return text
    return fill * (width - len(text)) + text


def capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def n(fn: Callable[..., Any], count: int = 1, *args: Any, **kwargs: Any) -> List[Any]:
    """Call `fn` `count` times and collect the results."""
    if not callable(fn):
        raise TypeError("seedforge: The first argument must be a function.")
    test_range(count < 0, "count cannot be less than zero.")
    return [fn(*args, **kwargs) for _ in range(count)]


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


def pickone(ctx, pool: Sequence[Any]) -> Any:
    test_range(len(pool) == 0, "Cannot pickone() from an empty pool")
    return pool[integer(ctx, 0, len(pool) - 1)]


def pick(ctx, pool: Sequence[Any], count: Optional[int] = None) -> Any:
    """One element when count is None, otherwise a list of `count` elements."""
    test_range(len(pool) == 0, "Cannot pick() from an empty pool")
    if count is None:
        return pool[integer(ctx, 0, len(pool) - 1)]
    return pickset(ctx, pool, count)


def pickset(ctx, pool: Sequence[Any], count: int = 1) -> List[Any]:
    """
    `count` elements taken from distinct positions of `pool`.

    Partial Fisher-Yates over a copy; the caller's sequence is untouched.
    """
    test_range(len(pool) == 0, "Cannot pickset() from an empty pool")
    if not isinstance(count, int) or isinstance(count, bool):
        raise TypeError("seedforge: Count must be an integer")
    test_range(count < 0, "Count must be a positive number")
    test_range(
        count > len(pool),
        f"Count ({count}) cannot exceed the pool size ({len(pool)})",
    )

    items = list(pool)
    size = len(items)
    for i in range(count):
        j = integer(ctx, i, size - 1)
        items[i], items[j] = items[j], items[i]
    return items[:count]


def shuffle(ctx, pool: Sequence[Any]) -> List[Any]:
    """Fisher-Yates shuffle of a copy of `pool`."""
    items = list(pool)
    for i in range(len(items) - 1, 0, -1):
        j = integer(ctx, 0, i)
        items[i], items[j] = items[j], items[i]
    return items


def weighted(ctx, pool: List[Any], weights: List[float], trim: bool = False) -> Any:
    """
    Pick from `pool` with probability proportional to `weights`.

    With trim=True the chosen item and its weight are removed from the
    caller's lists.
    """
    test_range(len(pool) != len(weights), "Length of pool and weights must match")
    for weight in weights:
        if not _is_number(weight):
            raise TypeError("seedforge: All weights must be numbers")

    values = np.asarray(weights, dtype=np.float64)
    test_range(bool(np.isnan(values).any()), "All weights must be numbers")
    test_range(bool((values < 0).any()), "Weights cannot be negative")

    cumulative = np.cumsum(values)
    total = float(cumulative[-1]) if len(cumulative) else 0.0
    test_range(total <= 0, "No valid entries in pool weights")

    selected = ctx.random() * total
    index = int(np.searchsorted(cumulative, selected, side="right"))
    # a draw landing on the float ceiling falls back to the last positive weight
    if index >= len(pool):
        index = int(np.flatnonzero(values > 0)[-1])

    chosen = pool[index]
    if trim:
        del pool[index]
        del weights[index]
    return chosen


def unique(
    fn: Callable[..., Any],
    num: int,
    comparator: Optional[Callable[[List[Any], Any], bool]] = None,
    *args: Any,
    retry_factor: int = UNIQUE_RETRY_FACTOR,
    **kwargs: Any,
) -> List[Any]:
    """
    Collect `num` values from `fn` that `comparator` reports as new.

    comparator(collected, value) returns True when value is a duplicate.
    Raises RangeError after num * retry_factor consecutive duplicates.
    """
    if not callable(fn):
        raise TypeError("seedforge: The first argument must be a function.")
    if comparator is None:
        comparator = _contains
    elif not callable(comparator):
        raise TypeError("seedforge: comparator must be a function.")
    test_range(num < 0, "num cannot be less than zero.")

    max_duplicates = num * retry_factor
    collected: List[Any] = []
    duplicates = 0
    while len(collected) < num:
        value = fn(*args, **kwargs)
        if comparator(collected, value):
            duplicates += 1
            if duplicates > max_duplicates:
                logger.warning(
                    f"unique() gave up after {duplicates} duplicates with "
                    f"{len(collected)}/{num} values collected"
                )
                raise RangeError("seedforge: num is likely too large for sample set")
        else:
            collected.append(value)
            duplicates = 0
    return collected


def _contains(collected: List[Any], value: Any) -> bool:
    return value in collected


# ---------------------------------------------------------------------------
# Normal distribution
# ---------------------------------------------------------------------------


def normal(ctx, mean: float = 0.0, dev: float = 1.0, pool: Optional[Sequence[Any]] = None) -> Any:
    """
    Normal deviate by the Marsaglia polar method.

    With a non-empty pool, returns a pool element picked by a rounded deviate.
    """
    if pool is not None and not isinstance(pool, (list, tuple)):
        raise TypeError("seedforge: The pool option must be a list.")
    if not _is_number(mean):
        raise TypeError("seedforge: Mean (mean) must be a number")
    if not _is_number(dev):
        raise TypeError("seedforge: Standard deviation (dev) must be a number")

    if pool:
        return normal_pool(ctx, pool, mean=mean, dev=dev)

    while True:
        u = ctx.random() * 2 - 1
        v = ctx.random() * 2 - 1
        s = u * u + v * v
        if 0 < s < 1:
            break

    return dev * u * math.sqrt(-2 * math.log(s) / s) + mean


def normal_pool(
    ctx,
    pool: Sequence[Any],
    mean: float = 0.0,
    dev: float = 1.0,
    max_retries: int = NORMAL_POOL_MAX_RETRIES,
) -> Any:
    """Pool element at a normally distributed index (rounded half up)."""
    for _ in range(max_retries):
        index = math.floor(normal(ctx, mean=mean, dev=dev) + 0.5)
        if 0 <= index < len(pool):
            return pool[index]

    logger.warning(
        f"normal_pool() exhausted {max_retries} draws for pool of size {len(pool)} "
        f"(mean={mean}, dev={dev})"
    )
    raise RangeError(
        "seedforge: Your pool is too small for the given mean and standard deviation. Please adjust."
    )


GENERATORS = {
    "integer": integer,
    "natural": natural,
    "floating": floating,
    "bool": boolean,
    "boolean": boolean,
    "prime": prime,
    "hex": hex_string,
    "character": character,
    "string": string,
    "letter": letter,
    "template": template,
    "pickone": pickone,
    "pick": pick,
    "pickset": pickset,
    "shuffle": shuffle,
    "weighted": weighted,
    "normal": normal,
    "normal_pool": normal_pool,
}
