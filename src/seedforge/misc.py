"""
Small utility generators: coins, dice, GUIDs, hashes, MAC addresses, bytes.
"""

from typing import List, Optional, Union

from .errors import SeedforgeError, test_range
from .primitives import HEX_POOL, boolean, integer, natural, string

DICE = (4, 6, 8, 10, 12, 20, 30, 100)


def coin(ctx) -> str:
    return "heads" if boolean(ctx) else "tails"


def die(ctx, sides: int) -> int:
    test_range(sides < 1, "A die needs at least one side.")
    return natural(ctx, 1, sides)


def _dice_fn(sides: int):
    def roll(ctx) -> int:
        return die(ctx, sides)

    roll.__name__ = f"d{sides}"
    roll.__doc__ = f"Roll a {sides}-sided die."
    return roll


def rpg(ctx, thrown: str, sum_rolls: bool = False) -> Union[List[int], int]:
    """Roll dice in #d# notation, e.g. '3d6'."""
    if not thrown:
        raise SeedforgeError("seedforge: A type of die roll must be included")

    bits = thrown.lower().split("d")
    if len(bits) != 2 or not bits[0].isdigit() or not bits[1].isdigit() or int(bits[0]) < 1 or int(bits[1]) < 1:
        raise SeedforgeError(
            "seedforge: Invalid format provided. Please provide #d# where the first # "
            "is the number of dice to roll, the second # is the max of each die"
        )

    rolls = [natural(ctx, 1, int(bits[1])) for _ in range(int(bits[0]))]
    return sum(rolls) if sum_rolls else rolls


def guid(ctx, version: int = 5) -> str:
    """GUID-shaped string with the given version nibble and an RFC variant."""
    test_range(not 1 <= version <= 8, "GUID version must be between 1 and 8.")
    pool = "abcdef1234567890"
    return "-".join([
        string(ctx, pool=pool, length=8),
        string(ctx, pool=pool, length=4),
        str(version) + string(ctx, pool=pool, length=3),
        string(ctx, pool="ab89", length=1) + string(ctx, pool=pool, length=3),
        string(ctx, pool=pool, length=12),
    ])


def hash_hex(ctx, length: int = 40, casing: str = "lower") -> str:
    pool = HEX_POOL.upper() if casing == "upper" else HEX_POOL
    return string(ctx, pool=pool, length=length)


def mac_address(ctx, separator: Optional[str] = None, network_version: bool = False) -> str:
    """Six colon-separated octets, or three dotted groups for the network form."""
    pool = "ABCDEF1234567890"
    if separator is None:
        separator = "." if network_version else ":"
    if network_version:
        parts = [string(ctx, pool=pool, length=4) for _ in range(3)]
    else:
        parts = [string(ctx, pool=pool, length=2) for _ in range(6)]
    return separator.join(parts)


def buffer(ctx, length: Optional[int] = None) -> bytes:
    """Random bytes."""
    if length is None:
        length = natural(ctx, 5, 20)
    test_range(length < 0, "Length cannot be less than zero.")
    return bytes(integer(ctx, 0, 255) for _ in range(length))


GENERATORS = {
    "coin": coin,
    "die": die,
    "rpg": rpg,
    "guid": guid,
    "hash": hash_hex,
    "mac_address": mac_address,
    "buffer": buffer,
}
GENERATORS.update({f"d{sides}": _dice_fn(sides) for sides in DICE})
