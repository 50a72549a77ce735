"""
Forge: the user-facing generator object.

Binds one entropy source, one data store and one generator registry.
Every registered generator is reachable as a method and receives the
forge as its first argument:

    forge = Forge(42)
    forge.integer(1, 10)
    forge.cc(card_type="visa")
    forge.mixin({"user": lambda ctx: {"name": ctx.name(), "age": ctx.natural(18, 90)}})
    forge.user()
"""

import functools
import logging
from functools import lru_cache
from typing import Any, Callable, List, Mapping, Optional, Union

from . import primitives
from .config import Settings, environment_settings
from .data import DataStore, default_store
from .engine import Engine, FunctionSource, SeedValue
from .registry import Registry, default_registry, validate_mixin

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _builtin_registry() -> Registry:
    return default_registry()


class Forge:
    """Seeded fake-data generator."""

    def __init__(
        self,
        *seeds: Union[SeedValue, Callable[[], float]],
        data: Optional[Union[DataStore, Mapping[str, Any]]] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings if settings is not None else environment_settings()

        if len(seeds) == 1 and callable(seeds[0]):
            self._source = FunctionSource(seeds[0])
        else:
            if all(seed is None for seed in seeds) and self.settings.default_seed is not None:
                seeds = (self.settings.default_seed,)
            self._source = Engine(*seeds)

        if data is None:
            self._data = default_store(self.settings.data_path)
        elif isinstance(data, DataStore):
            self._data = data
        else:
            self._data = DataStore(data)

        self._registry = _builtin_registry().copy()

    # -- entropy -----------------------------------------------------------

    @property
    def source(self) -> Union[Engine, FunctionSource]:
        return self._source

    @property
    def seed_value(self) -> Optional[int]:
        return self._source.seed_value

    def random(self) -> float:
        """Uniform float in [0, 1) from this forge's source."""
        return self._source.random()

    def seed(self, *values: SeedValue) -> None:
        self._source.seed(*values)

    # -- data tables -------------------------------------------------------

    @property
    def data(self) -> DataStore:
        return self._data

    def get(self, name: str) -> Any:
        return self._data.get(name)

    def set(self, name: str, data: Any) -> None:
        """Replace one table for this forge only."""
        self._data = self._data.replace(name, data)
        logger.debug(f"Replaced table '{name}'")

    # -- registry ----------------------------------------------------------

    @property
    def registry(self) -> Registry:
        return self._registry

    def mixin(self, extensions: Mapping[str, Callable[..., Any]]) -> "Forge":
        """Add generators to this forge; each is called as fn(forge, ...)."""
        self._registry.update(validate_mixin(extensions))
        logger.debug(f"Mixed in {', '.join(extensions)}")
        return self

    # -- helpers that take a function rather than a context ----------------

    def n(self, fn: Callable[..., Any], count: int = 1, *args: Any, **kwargs: Any) -> List[Any]:
        return primitives.n(fn, count, *args, **kwargs)

    def unique(
        self,
        fn: Callable[..., Any],
        num: int,
        comparator: Optional[Callable[[List[Any], Any], bool]] = None,
        *args: Any,
        **kwargs: Any,
    ) -> List[Any]:
        return primitives.unique(fn, num, comparator, *args, **kwargs)

    pad = staticmethod(primitives.pad)
    capitalize = staticmethod(primitives.capitalize)
    is_prime = staticmethod(primitives.is_prime)

    # -- generator dispatch ------------------------------------------------

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            fn = self._registry.lookup(name)
        except KeyError:
            raise AttributeError(f"'Forge' object has no attribute or generator '{name}'") from None
        return functools.partial(fn, self)

    def __dir__(self) -> List[str]:
        return sorted(set(super().__dir__()) | set(self._registry.names()))

    def __repr__(self) -> str:
        return f"Forge(seed={self.seed_value}, generators={len(self._registry)}, tables={len(self._data)})"
