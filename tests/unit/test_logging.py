import logging

from drafter.core.config import Settings
from drafter.core.logging import TRANSPORT_LOGGERS
from drafter.core.logging import build_logging_config
from drafter.core.logging import setup_logging


def test_default_levels():
    loggers = build_logging_config()["loggers"]

    assert loggers["drafter"]["level"] == "INFO"
    assert loggers["uvicorn.access"]["handlers"] == ["access"]
    for name in TRANSPORT_LOGGERS:
        assert loggers[name]["level"] == "WARNING"


def test_levels_follow_arguments():
    loggers = build_logging_config("debug", "info")["loggers"]

    assert loggers["drafter"]["level"] == "DEBUG"
    assert loggers["openai"]["level"] == "INFO"
    assert loggers["uvicorn.error"]["level"] == "INFO"


def test_setup_logging_applies_settings(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "error")
    config = Settings(_env_file=None, log_transport_level="debug")

    setup_logging(config)

    assert logging.getLogger("drafter").level == logging.ERROR
    assert logging.getLogger("httpx").level == logging.DEBUG
    setup_logging(Settings(_env_file=None, log_level="INFO"))
