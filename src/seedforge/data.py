"""
DataStore: static lookup tables read by domain generators.

Tables ship in ``resources/tables.yaml``. A store is immutable: replacing a
table returns a new store, so instances can share the packaged defaults.
"""

import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_TABLES_PATH = Path(__file__).parent / "resources" / "tables.yaml"


class CardType(BaseModel):
    """Issuer identification for a payment card network."""
    model_config = ConfigDict(frozen=True)

    name: str
    short_name: str
    prefix: str
    length: int


class Currency(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    name: str


class Province(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    abbreviation: str
    code: int


# Tables with a known shape are validated on load and on replace
TABLE_SCHEMAS: Dict[str, TypeAdapter] = {
    "cc_types": TypeAdapter(List[CardType]),
    "currency_types": TypeAdapter(List[Currency]),
    "it_provinces": TypeAdapter(List[Province]),
    "file_extensions": TypeAdapter(Dict[str, List[str]]),
    "first_names": TypeAdapter(Dict[str, Dict[str, List[str]]]),
    "last_names": TypeAdapter(Dict[str, List[str]]),
}


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def validate_table(name: str, data: Any) -> Any:
    """Validate a table against its schema (if it has one) and freeze it."""
    schema = TABLE_SCHEMAS.get(name)
    if schema is not None:
        try:
            data = schema.validate_python(data)
        except ValidationError as e:
            raise TypeError(f"seedforge: Table '{name}' has an invalid shape: {e}") from e
    return _freeze(data)


class DataStore:
    """Read-only keyed store of lookup tables."""

    def __init__(self, tables: Optional[Mapping[str, Any]] = None):
        frozen = {name: validate_table(name, data) for name, data in (tables or {}).items()}
        self._tables = MappingProxyType(frozen)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "DataStore":
        """Load tables from a YAML file (the packaged tables by default)."""
        path = Path(path) if path else DEFAULT_TABLES_PATH
        if not path.exists():
            raise FileNotFoundError(f"Data tables not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, Mapping):
            raise TypeError(f"seedforge: {path} must contain a mapping of table names")

        logger.debug(f"Loaded {len(data)} tables from {path}")
        return cls(data)

    def get(self, name: str) -> Any:
        try:
            return self._tables[name]
        except KeyError:
            available = ", ".join(sorted(self._tables))
            raise KeyError(f"seedforge: Unknown table '{name}'. Available: {available}") from None

    def replace(self, name: str, data: Any) -> "DataStore":
        """Return a new store with `name` set to `data`."""
        tables = dict(self._tables)
        tables[name] = validate_table(name, data)
        store = DataStore.__new__(DataStore)
        store._tables = MappingProxyType(tables)
        return store

    def names(self) -> List[str]:
        return sorted(self._tables)

    def __contains__(self, name: object) -> bool:
        return name in self._tables

    def __iter__(self) -> Iterator[str]:
        return iter(self._tables)

    def __len__(self) -> int:
        return len(self._tables)


@lru_cache(maxsize=8)
def default_store(path: Optional[Path] = None) -> DataStore:
    """Packaged (or configured) tables, loaded once per path."""
    return DataStore.load(path)
