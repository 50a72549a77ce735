"""
Generator registry: name -> function(ctx, ...).

Each Forge owns a copy, so mixins added to one instance never reach another.
"""

import logging
from typing import Callable, Dict, Iterator, List, Mapping, Optional

logger = logging.getLogger(__name__)

Generator = Callable[..., object]


class Registry:
    """Named generator functions whose first parameter is the drawing context."""

    def __init__(self, generators: Optional[Mapping[str, Generator]] = None):
        self._generators: Dict[str, Generator] = {}
        if generators:
            self.update(generators)

    def register(self, name: str, fn: Optional[Generator] = None):
        """
        Add one generator.

        Usable directly (`registry.register("x", fn)`) or as a decorator
        (`@registry.register("x")`).
        """
        if fn is None:
            def decorator(func: Generator) -> Generator:
                self.register(name, func)
                return func
            return decorator

        if not isinstance(name, str) or not name:
            raise TypeError("seedforge: Generator names must be non-empty strings")
        if not callable(fn):
            raise TypeError(f"seedforge: Generator '{name}' must be callable")

        if name in self._generators:
            logger.debug(f"Replacing generator '{name}'")
        self._generators[name] = fn
        return fn

    def update(self, generators: Mapping[str, Generator]) -> None:
        """Register every entry of a mapping of name -> callable."""
        if not isinstance(generators, Mapping):
            raise TypeError("seedforge: Generators must be a mapping of names to functions")
        for name, fn in generators.items():
            self.register(name, fn)

    def lookup(self, name: str) -> Generator:
        try:
            return self._generators[name]
        except KeyError:
            raise KeyError(f"seedforge: Unknown generator '{name}'") from None

    def names(self) -> List[str]:
        return sorted(self._generators)

    def copy(self) -> "Registry":
        return Registry(self._generators)

    def __contains__(self, name: object) -> bool:
        return name in self._generators

    def __iter__(self) -> Iterator[str]:
        return iter(self._generators)

    def __len__(self) -> int:
        return len(self._generators)


def validate_mixin(extensions: object) -> Mapping[str, Generator]:
    """Check that mixin extensions are a mapping of name -> callable."""
    if not isinstance(extensions, Mapping):
        raise TypeError("seedforge: mixin() expects a mapping of names to functions")
    for name, fn in extensions.items():
        if not callable(fn):
            raise TypeError(f"seedforge: mixin entry '{name}' is not callable")
    return extensions


def default_registry() -> Registry:
    """A fresh registry holding every built-in generator."""
    from . import files, finance, identifiers, misc, person, primitives, text

    registry = Registry()
    for module in (primitives, text, person, misc, files, identifiers, finance):
        registry.update(module.GENERATORS)
    logger.debug(f"Built default registry with {len(registry)} generators")
    return registry
