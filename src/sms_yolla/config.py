from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, Field

from .payload import GATEWAY_URL


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_seconds(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return float(raw)


class Settings(BaseModel):
    # Gateway endpoint. Fixed in production; overridable for a local mock gateway.
    gateway_url: str = Field(default_factory=lambda: os.getenv("SMS_GATEWAY_URL", GATEWAY_URL))

    # None means the request may wait on the gateway indefinitely.
    timeout_seconds: float | None = Field(
        default_factory=lambda: _env_seconds("SMS_TIMEOUT_SECONDS")
    )

    # --- Payload / response handling ---
    escape_xml: bool = Field(default_factory=lambda: _env_flag("SMS_ESCAPE_XML", True))
    strict_status: bool = Field(default_factory=lambda: _env_flag("SMS_STRICT_STATUS", False))

    # --- Logging ---
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_json: bool = Field(default_factory=lambda: _env_flag("LOG_JSON", False))


class Credentials(BaseModel):
    """
    Gateway account credentials.

    Never cached: `from_env()` reads the process environment on every call,
    so a changed value is picked up by the next send.
    """

    user_no: str = ""
    username: str = ""
    password: str = ""
    originator: str = ""

    @classmethod
    def from_env(cls) -> Credentials:
        return cls(
            user_no=os.getenv("SMS_USER_NO", ""),
            username=os.getenv("SMS_USERNAME", ""),
            password=os.getenv("SMS_PASSWORD", ""),
            originator=os.getenv("SMS_ORIGINATOR", ""),
        )

    def missing(self) -> list[str]:
        return [name for name, value in self.model_dump().items() if not value]


@lru_cache
def get_settings() -> Settings:
    return Settings()
