from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class Outcome(enum.Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class FailureKind(enum.Enum):
    TRANSPORT_TIMEOUT = "transport_timeout"
    CONNECTION_REFUSED = "connection_refused"
    RESPONSE_DECODE_ERROR = "response_decode_error"
    TRANSPORT_ERROR = "transport_error"
    # Only produced when non-2xx statuses are configured to count as failures.
    GATEWAY_REJECTED = "gateway_rejected"


@dataclass(frozen=True)
class SendResult:
    outcome: Outcome
    raw_response_body: str | None = None
    error: BaseException | None = None
    failure_kind: FailureKind | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    @classmethod
    def success(cls, body: str, *, status_code: int | None = None) -> SendResult:
        return cls(outcome=Outcome.SUCCESS, raw_response_body=body, status_code=status_code)

    @classmethod
    def failure(
        cls,
        error: BaseException,
        kind: FailureKind,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ) -> SendResult:
        return cls(
            outcome=Outcome.FAILURE,
            error=error,
            failure_kind=kind,
            status_code=status_code,
            raw_response_body=body,
        )

    def to_dict(self) -> dict[str, Any]:
        """Legacy envelope: {"success": True, "result": ...} or {"success": False, "error": ...}."""
        if self.ok:
            return {"success": True, "result": self.raw_response_body}
        kind = self.failure_kind.value if self.failure_kind else None
        return {"success": False, "error": str(self.error), "kind": kind}


__all__ = ["Outcome", "FailureKind", "SendResult"]
