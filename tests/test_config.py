import os
from pathlib import Path

import pytest

from wordboard.config import DEFAULT_MODEL, Settings

VARS = ["WORDBOARD_DICTIONARY", "WORDBOARD_SEED", "WORDBOARD_MODEL", "WORDBOARD_LOG_LEVEL", "WORDBOARD_LOG_DIR"]


def forget_env():
    # load_dotenv writes straight into os.environ, behind monkeypatch's back
    for name in VARS:
        os.environ.pop(name, None)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in VARS:
        monkeypatch.delenv(name, raising=False)
    yield
    forget_env()


def test_defaults(tmp_path):
    settings = Settings(env_file=tmp_path / "missing.env")
    assert settings.DICTIONARY is None
    assert settings.SEED is None
    assert settings.MODEL == DEFAULT_MODEL
    assert settings.LOG_LEVEL == "WARNING"
    assert settings.LOG_DIR == Path("logs")


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("WORDBOARD_DICTIONARY", "https://example.com/words.json")
    monkeypatch.setenv("WORDBOARD_SEED", "12")
    monkeypatch.setenv("WORDBOARD_LOG_LEVEL", "debug")
    settings = Settings(env_file=tmp_path / "missing.env")
    assert settings.DICTIONARY == "https://example.com/words.json"
    assert settings.SEED == 12
    assert settings.LOG_LEVEL == "DEBUG"


def test_reads_dotenv_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("WORDBOARD_MODEL=groq/openai/gpt-oss-120b\n")
    settings = Settings(env_file=env_file)
    assert settings.MODEL == "groq/openai/gpt-oss-120b"


def test_bad_seed(monkeypatch, tmp_path):
    monkeypatch.setenv("WORDBOARD_SEED", "abc")
    with pytest.raises(ValueError):
        Settings(env_file=tmp_path / "missing.env")


def test_dotenv_values_are_forgotten(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("WORDBOARD_LOG_DIR=/tmp/rollouts\n")
    Settings(env_file=env_file)
    assert os.environ["WORDBOARD_LOG_DIR"] == "/tmp/rollouts"

    forget_env()
    assert "WORDBOARD_LOG_DIR" not in os.environ
