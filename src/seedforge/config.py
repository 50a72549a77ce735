"""
Runtime settings read from the environment (and a local .env file).
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

ENV_SEED = "SEEDFORGE_SEED"
ENV_DATA_PATH = "SEEDFORGE_DATA_PATH"
ENV_LOG_LEVEL = "SEEDFORGE_LOG_LEVEL"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class Settings:
    """Defaults applied when a Forge is built without explicit arguments."""
    default_seed: Optional[Union[int, str]] = None  # None seeds from the clock
    data_path: Optional[Path] = None  # None uses the packaged tables
    log_level: str = "WARNING"


def _parse_seed(raw: Optional[str]) -> Optional[Union[int, str]]:
    if raw is None or raw.strip() == "":
        return None
    raw = raw.strip()
    try:
        return int(raw)
    except ValueError:
        # non-numeric seeds are hashed like any string seed
        return raw


def load_settings(dotenv: bool = True, env_file: Optional[Path] = None) -> Settings:
    """
    Build Settings from SEEDFORGE_* environment variables.

    With dotenv=True a .env file (env_file, or the nearest one found) is
    loaded first; variables already in the environment take precedence.
    """
    if dotenv:
        load_dotenv(env_file)

    data_path = os.getenv(ENV_DATA_PATH)
    return Settings(
        default_seed=_parse_seed(os.getenv(ENV_SEED)),
        data_path=Path(data_path) if data_path else None,
        log_level=os.getenv(ENV_LOG_LEVEL, "WARNING").upper(),
    )


@lru_cache(maxsize=1)
def _load_default_dotenv() -> bool:
    return load_dotenv()


def environment_settings() -> Settings:
    """
    Settings for a Forge built without explicit ones.

    The nearest .env file is loaded once per process; SEEDFORGE_* variables
    are re-read on every call.
    """
    _load_default_dotenv()
    return load_settings(dotenv=False)


def setup_logging(level: str = "INFO") -> None:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
