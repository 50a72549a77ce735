"""
seedforge: deterministic, seedable fake data.

One seed drives a linear congruential engine; sampling primitives and
domain generators (checksum-valid identifiers, cards, files) draw from it.
"""

from .engine import Engine, FunctionSource, normalize_seed
from .errors import RangeError, SeedforgeError, UnsupportedError
from .models import CardExpiry, ExtensionGroups, ExtensionList, FileWithContent, MrzFields
from .data import DataStore, default_store
from .registry import Registry, default_registry
from .config import Settings, environment_settings, load_settings, setup_logging
from .forge import Forge
from .checksums import luhn_calculate, luhn_check, iban_check

__all__ = [
    # Engine
    "Engine",
    "FunctionSource",
    "normalize_seed",
    # Errors
    "RangeError",
    "SeedforgeError",
    "UnsupportedError",
    # Models
    "CardExpiry",
    "ExtensionGroups",
    "ExtensionList",
    "FileWithContent",
    "MrzFields",
    # Data and registry
    "DataStore",
    "default_store",
    "Registry",
    "default_registry",
    # Configuration
    "Settings",
    "load_settings",
    "environment_settings",
    "setup_logging",
    # Facade
    "Forge",
    # Checksums
    "luhn_calculate",
    "luhn_check",
    "iban_check",
]
