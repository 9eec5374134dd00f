# devto_publisher/tests/test_config.py

import logging
from pathlib import Path

import pytest

from devto_publisher import config

ENV_VARS = ("DEVTO_API_KEY", "DEVTO_BASE_URL", "ARTICLES_DIRECTORY", "LOG_LEVEL", "LOG_DIR")


@pytest.fixture
def clean_env(monkeypatch):
    """Unsets the publisher's variables and restores them (or their absence) afterwards."""
    for name in ENV_VARS:
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def empty_dotenv(tmp_path):
    path = tmp_path / ".env"
    path.write_text("")
    return path


def test_load_settings_defaults(clean_env, empty_dotenv, caplog):
    with caplog.at_level(logging.WARNING, logger="devto_publisher"):
        settings = config.load_settings(empty_dotenv)

    assert settings == config.Settings(
        api_key=None,
        base_url="https://dev.to/api",
        articles_directory="articles",
        log_level="INFO",
        log_dir=Path("logs"),
    )
    assert "DEVTO_API_KEY is not set" in caplog.text


def test_load_settings_reads_dotenv_file(clean_env, tmp_path):
    dotenv_path = tmp_path / ".env"
    dotenv_path.write_text("DEVTO_API_KEY=from-file\nARTICLES_DIRECTORY=posts\nLOG_LEVEL=debug\n")

    settings = config.load_settings(dotenv_path)

    assert settings.api_key == "from-file"
    assert settings.articles_directory == "posts"
    assert settings.log_level == "DEBUG"


def test_environment_wins_over_dotenv(clean_env, tmp_path):
    dotenv_path = tmp_path / ".env"
    dotenv_path.write_text("DEVTO_API_KEY=from-file\n")
    clean_env.setenv("DEVTO_API_KEY", "from-env")
    clean_env.setenv("DEVTO_BASE_URL", "https://forem.example/api")

    settings = config.load_settings(dotenv_path)

    assert settings.api_key == "from-env"
    assert settings.base_url == "https://forem.example/api"


def test_build_logging_config_targets_package_logger(tmp_path):
    logging_config = config.build_logging_config(tmp_path, "WARNING")

    assert logging_config["handlers"]["console"]["level"] == "WARNING"
    assert logging_config["handlers"]["publisher_file"]["filename"] == str(tmp_path / "publisher.log")
    assert logging_config["loggers"]["devto_publisher"]["handlers"] == ["console", "publisher_file"]


def test_configure_logging_creates_dir_and_applies_config(mocker, tmp_path):
    mock_dict_config = mocker.patch("logging.config.dictConfig")
    settings = config.Settings(
        api_key="KEY",
        base_url=config.DEFAULT_BASE_URL,
        articles_directory="articles",
        log_level="DEBUG",
        log_dir=tmp_path / "logs" / "nested",
    )

    config.configure_logging(settings)

    assert settings.log_dir.is_dir()
    mock_dict_config.assert_called_once_with(config.build_logging_config(settings.log_dir, "DEBUG"))
