"""
Tests for environment-driven settings and logging setup.
"""

from pathlib import Path

import pytest

from src.seedforge import config
from src.seedforge.config import (
    ENV_DATA_PATH,
    ENV_LOG_LEVEL,
    ENV_SEED,
    Settings,
    environment_settings,
    load_settings,
    setup_logging,
)
from src.seedforge.forge import Forge


@pytest.fixture
def clean_env(monkeypatch):
    # set-then-delete so teardown also removes values loaded from .env files
    for name in (ENV_SEED, ENV_DATA_PATH, ENV_LOG_LEVEL):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


def test_defaults(clean_env):
    settings = load_settings(dotenv=False)
    assert settings == Settings()
    assert settings.default_seed is None
    assert settings.data_path is None
    assert settings.log_level == "WARNING"


def test_numeric_seed(clean_env):
    clean_env.setenv(ENV_SEED, "123")
    assert load_settings(dotenv=False).default_seed == 123


def test_string_seed(clean_env):
    clean_env.setenv(ENV_SEED, "alpha")
    assert load_settings(dotenv=False).default_seed == "alpha"


def test_blank_seed(clean_env):
    clean_env.setenv(ENV_SEED, "  ")
    assert load_settings(dotenv=False).default_seed is None


def test_data_path_and_level(clean_env, tmp_path: Path):
    clean_env.setenv(ENV_DATA_PATH, str(tmp_path / "tables.yaml"))
    clean_env.setenv(ENV_LOG_LEVEL, "debug")
    settings = load_settings(dotenv=False)
    assert settings.data_path == tmp_path / "tables.yaml"
    assert settings.log_level == "DEBUG"


def test_dotenv_file(clean_env, tmp_path: Path):
    env_file = tmp_path / ".env"
    env_file.write_text(f"{ENV_SEED}=99\n", encoding="utf-8")
    assert load_settings(env_file=env_file).default_seed == 99


def test_environment_beats_dotenv_file(clean_env, tmp_path: Path):
    env_file = tmp_path / ".env"
    env_file.write_text(f"{ENV_SEED}=99\n", encoding="utf-8")
    clean_env.setenv(ENV_SEED, "5")
    assert load_settings(env_file=env_file).default_seed == 5


def test_forge_reads_environment(clean_env, tmp_path: Path):
    tables = tmp_path / "tables.yaml"
    tables.write_text("file_extensions:\n  text: [txt]\n", encoding="utf-8")
    clean_env.setenv(ENV_SEED, "11")
    clean_env.setenv(ENV_DATA_PATH, str(tables))

    forge = Forge()
    assert forge.seed_value == Forge(11, settings=Settings()).seed_value
    assert forge.file_extension() == "txt"


def test_dotenv_loaded_once_for_default_forges(clean_env):
    calls = []
    clean_env.setattr(config, "load_dotenv", lambda *args, **kwargs: calls.append(args) or False)
    config._load_default_dotenv.cache_clear()
    try:
        Forge()
        Forge()
        environment_settings()
    finally:
        config._load_default_dotenv.cache_clear()
    assert len(calls) == 1


def test_environment_settings_rereads_variables(clean_env):
    clean_env.setenv(ENV_SEED, "1")
    assert environment_settings().default_seed == 1
    clean_env.setenv(ENV_SEED, "2")
    assert environment_settings().default_seed == 2


def test_setup_logging_rejects_unknown_level():
    with pytest.raises(ValueError, match="Unknown log level"):
        setup_logging("chatty")


def test_setup_logging_accepts_lower_case():
    setup_logging("debug")
