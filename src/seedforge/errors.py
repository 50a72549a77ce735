"""
Error taxonomy for seedforge.

RangeError means an input constraint makes a valid result impossible.
Wrong-shaped structural input raises the builtin TypeError.
"""


class SeedforgeError(Exception):
    """Generic invalid-state error (unsupported sub-algorithm, bad template)."""


class RangeError(SeedforgeError, ValueError):
    """An input constraint was violated."""


class UnsupportedError(SeedforgeError):
    """A requested variant of a generator is not available (e.g. VAT for an unimplemented country)."""

    def __init__(self, message: str = "seedforge: This feature is not supported"):
        super().__init__(message)


def test_range(condition: bool, message: str) -> None:
    """Raise RangeError with message when condition holds."""
    if condition:
        raise RangeError(f"seedforge: {message}")


# Keep pytest from collecting the helper when imported into test modules
test_range.__test__ = False
