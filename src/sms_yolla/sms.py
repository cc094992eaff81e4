from __future__ import annotations

from pydantic import BaseModel


class OutboundSms(BaseModel):
    # Passed to the gateway verbatim; no number normalization.
    phone: str
    message: str
