"""
Data models shared across generators.
"""

from dataclasses import dataclass, field
from typing import Mapping, Tuple, Union


@dataclass(frozen=True)
class ExtensionList:
    """A flat pool of file extensions."""
    extensions: Tuple[str, ...]


@dataclass(frozen=True)
class ExtensionGroups:
    """Extensions grouped by category name (e.g. raster -> (png, gif))."""
    groups: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self.groups.keys())


# Tagged variant: decided once by files.extension_pool()
ExtensionPool = Union[ExtensionList, ExtensionGroups]


@dataclass
class FileWithContent:
    """A generated file name together with its random payload."""
    file_name: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def extension(self) -> str:
        return self.file_name.rsplit(".", 1)[-1] if "." in self.file_name else ""


@dataclass
class MrzFields:
    """Inputs of a passport machine readable zone (TD3, two 44-char lines)."""
    first: str
    last: str
    passport_number: str
    dob: str  # YYMMDD
    expiry: str  # YYMMDD
    gender: str  # M / F / <
    issuer: str = "GBR"
    nationality: str = "GBR"


@dataclass(frozen=True)
class CardExpiry:
    """Payment card expiry: two-digit month, four-digit year."""
    month: str
    year: str

    def __str__(self) -> str:
        return f"{self.month}/{self.year}"
