from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from sms_yolla.config import get_settings

CREDENTIAL_ENV = {
    "SMS_USER_NO": "1",
    "SMS_USERNAME": "user",
    "SMS_PASSWORD": "pass",
    "SMS_ORIGINATOR": "TEST",
}

SETTINGS_ENV = (
    "SMS_GATEWAY_URL",
    "SMS_TIMEOUT_SECONDS",
    "SMS_ESCAPE_XML",
    "SMS_STRICT_STATUS",
    "LOG_LEVEL",
    "LOG_JSON",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Each test starts from default settings and no credentials in the environment."""
    for name in (*CREDENTIAL_ENV, *SETTINGS_ENV):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def credential_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    for name, value in CREDENTIAL_ENV.items():
        monkeypatch.setenv(name, value)
    return dict(CREDENTIAL_ENV)


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    """Drop handlers that configure_logging() attached during a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
