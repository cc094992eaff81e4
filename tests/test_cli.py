from __future__ import annotations

import httpx
import pytest
import respx

from sms_yolla.cli import main
from sms_yolla.payload import GATEWAY_URL


@respx.mock
def test_cli_prints_gateway_body(credential_env: dict[str, str], capsys: pytest.CaptureFixture[str]) -> None:
    route = respx.post(GATEWAY_URL).mock(return_value=httpx.Response(200, text="OK 42"))

    code = main(["5551234567", "Hello"])

    assert code == 0
    assert route.called
    assert capsys.readouterr().out.strip() == "OK 42"


@respx.mock
def test_cli_reports_failure(credential_env: dict[str, str], capsys: pytest.CaptureFixture[str]) -> None:
    respx.post(GATEWAY_URL).mock(side_effect=httpx.ConnectError("connection refused"))

    code = main(["5551234567", "Hello"])

    assert code == 1
    assert "error (connection_refused): connection refused" in capsys.readouterr().err


@respx.mock
def test_cli_strict_flag(credential_env: dict[str, str], capsys: pytest.CaptureFixture[str]) -> None:
    respx.post(GATEWAY_URL).mock(return_value=httpx.Response(503, text="busy"))

    assert main(["5551234567", "Hello", "--strict"]) == 1
    assert "gateway_rejected" in capsys.readouterr().err


@respx.mock
def test_cli_timeout_and_no_escape(credential_env: dict[str, str]) -> None:
    route = respx.post(GATEWAY_URL).mock(return_value=httpx.Response(200, text="OK"))

    assert main(["5551234567", "a & b", "--timeout", "4", "--no-escape"]) == 0

    request = route.calls.last.request
    assert request.extensions["timeout"]["read"] == 4.0
    assert b"a+%26+b" in request.content


@respx.mock
def test_cli_timeout_zero_disables_configured_timeout(
    credential_env: dict[str, str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("SMS_TIMEOUT_SECONDS", "9")
    route = respx.post(GATEWAY_URL).mock(return_value=httpx.Response(200, text="OK"))

    assert main(["5551234567", "Hello"]) == 0
    assert route.calls.last.request.extensions["timeout"]["read"] == 9.0

    assert main(["5551234567", "Hello", "--timeout", "0"]) == 0
    assert route.calls.last.request.extensions["timeout"]["read"] is None
