import logging

import pytest

from poster_dashboard.currency import SupportedCurrency
from poster_dashboard.settings import Settings
from poster_dashboard.utils.logger import setup_logger

ENV_VARS = [
    "RATES_PROVIDER",
    "RATES_BASE_URL",
    "RATES_ACCESS_KEY",
    "RATES_TIMEOUT",
    "RATES_CACHE_TTL",
    "DEFAULT_CURRENCY",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings.from_env()
    assert settings.rates_provider == "exchangerate_host"
    assert settings.rates_cache_ttl == 3600.0
    assert settings.default_currency is SupportedCurrency.GBP
    assert settings.provider_kwargs() == {
        "base_url": "https://api.exchangerate.host",
        "access_key": None,
        "timeout": 10.0,
    }


def test_overrides(clean_env):
    clean_env.setenv("RATES_PROVIDER", "static")
    clean_env.setenv("RATES_CACHE_TTL", "0")
    clean_env.setenv("DEFAULT_CURRENCY", "dkk")
    clean_env.setenv("LOG_LEVEL", "debug")
    clean_env.setenv("RATES_ACCESS_KEY", "secret")

    settings = Settings.from_env()

    assert settings.provider_kwargs() == {}
    assert settings.rates_cache_ttl == 0
    assert settings.default_currency is SupportedCurrency.DKK
    assert settings.log_level == "DEBUG"
    assert settings.to_dict()["default_currency"] == "DKK"
    assert "rates_access_key" not in settings.to_dict()


@pytest.mark.parametrize("name,value", [("RATES_TIMEOUT", "soon"), ("DEFAULT_CURRENCY", "XXX")])
def test_invalid_environment(clean_env, name, value):
    clean_env.setenv(name, value)
    with pytest.raises(ValueError, match=name):
        Settings.from_env()


def test_setup_logger_does_not_duplicate_handlers():
    logger = setup_logger("poster_dashboard.test_logger", level="DEBUG")
    again = setup_logger("poster_dashboard.test_logger", level="WARNING")

    assert logger is again
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
    assert logger.propagate is True


@pytest.fixture
def package_logger():
    logger = logging.getLogger("poster_dashboard")
    level, handlers = logger.level, list(logger.handlers)
    yield logger
    logger.setLevel(level)
    logger.handlers[:] = handlers


def test_log_level_reaches_library_modules(package_logger, caplog):
    from poster_dashboard.communication.event_bus import EventBus

    setup_logger(level="DEBUG")
    bus_logger = logging.getLogger("poster_dashboard.communication.event_bus")
    assert bus_logger.getEffectiveLevel() == logging.DEBUG

    EventBus().subscribe("currency_changed", print)

    assert any(
        r.name == bus_logger.name and r.levelno == logging.DEBUG and "Subscribed" in r.getMessage()
        for r in caplog.records
    )


def test_app_configures_package_logger_from_settings(package_logger):
    from poster_dashboard import app as app_module

    expected = logging.getLevelName(app_module.settings.log_level)
    assert logging.getLogger("poster_dashboard.dashboard.preference").getEffectiveLevel() == expected
