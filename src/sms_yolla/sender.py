from __future__ import annotations

from typing import Final

import httpx

from .config import Credentials, Settings, get_settings
from .logging import get_logger
from .payload import GATEWAY_URL, build_form, build_sms_xml
from .result import FailureKind, SendResult

logger = get_logger(__name__)

FORM_HEADERS: Final[dict[str, str]] = {"Content-Type": "application/x-www-form-urlencoded"}

# Marks "no per-call timeout given"; None already means "wait forever".
_DEFAULT: Final = object()


def classify_error(exc: BaseException) -> FailureKind:
    # TimeoutException must be checked first: ConnectTimeout is also a transport error.
    if isinstance(exc, httpx.TimeoutException):
        return FailureKind.TRANSPORT_TIMEOUT
    if isinstance(exc, httpx.ConnectError):
        return FailureKind.CONNECTION_REFUSED
    if isinstance(exc, httpx.DecodingError):
        return FailureKind.RESPONSE_DECODE_ERROR
    return FailureKind.TRANSPORT_ERROR


class SmsSender:
    """
    Submit one SMS to the toplusmsyolla gateway per `send()` call.

    - credentials=None reads SMS_USER_NO / SMS_USERNAME / SMS_PASSWORD /
      SMS_ORIGINATOR from the environment on every call.
    - Without an injected client, each call opens and closes its own
      httpx.AsyncClient, so concurrent sends share nothing.
    - Any completed HTTP response counts as success unless
      treat_http_errors_as_failure is set; the body is never parsed.
    """

    def __init__(
        self,
        credentials: Credentials | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        url: str = GATEWAY_URL,
        timeout: float | None = None,
        escape_xml: bool = True,
        treat_http_errors_as_failure: bool = False,
    ) -> None:
        self.credentials = credentials
        self.client = client
        self.url = url
        self.timeout = timeout
        self.escape_xml = escape_xml
        self.treat_http_errors_as_failure = treat_http_errors_as_failure

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        credentials: Credentials | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> SmsSender:
        settings = settings or get_settings()
        return cls(
            credentials,
            client=client,
            url=settings.gateway_url,
            timeout=settings.timeout_seconds,
            escape_xml=settings.escape_xml,
            treat_http_errors_as_failure=settings.strict_status,
        )

    def _current_credentials(self) -> Credentials:
        if self.credentials is not None:
            return self.credentials
        return Credentials.from_env()

    def build_payload(self, phone: str, message: str) -> str:
        credentials = self._current_credentials()
        missing = credentials.missing()
        if missing:
            logger.warning("SMS credentials not configured: %s", ", ".join(missing))
        return build_sms_xml(credentials, phone, message, escape=self.escape_xml)

    async def _post(self, form: dict[str, str], timeout: float | None) -> httpx.Response:
        if self.client is not None:
            return await self.client.post(self.url, data=form, headers=FORM_HEADERS, timeout=timeout)
        async with httpx.AsyncClient() as client:
            return await client.post(self.url, data=form, headers=FORM_HEADERS, timeout=timeout)

    async def send(self, phone: str, message: str, *, timeout: object = _DEFAULT) -> SendResult:
        """
        Post the message and wrap the outcome.

        Transport faults come back as a failure result holding the original
        exception; nothing is raised to the caller. `timeout` (seconds)
        overrides the sender default for this call, None disables it.
        """
        form = build_form(self.build_payload(phone, message))
        effective = self.timeout if timeout is _DEFAULT else timeout

        logger.debug("Posting SMS to %s", self.url)
        try:
            response = await self._post(form, effective)  # type: ignore[arg-type]
            body = response.text
        except httpx.HTTPError as exc:
            kind = classify_error(exc)
            logger.warning("SMS send failed (%s): %s", kind.value, exc)
            return SendResult.failure(exc, kind)

        if self.treat_http_errors_as_failure and not response.is_success:
            try:
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                logger.warning("SMS gateway rejected request with status %s", response.status_code)
                return SendResult.failure(
                    exc,
                    FailureKind.GATEWAY_REJECTED,
                    status_code=response.status_code,
                    body=body,
                )

        logger.info("SMS gateway responded with status %s", response.status_code)
        return SendResult.success(body, status_code=response.status_code)


async def send_sms(phone: str, message: str) -> SendResult:
    """Send one SMS using settings and credentials from the environment."""
    return await SmsSender.from_settings().send(phone, message)
