from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from .logging import configure_logging
from .sender import SmsSender
from .sms import OutboundSms


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: runs once before the app starts serving requests
    configure_logging()
    yield


app = FastAPI(title="sms-yolla", version="0.1.0", lifespan=lifespan)


def get_sender() -> SmsSender:
    return SmsSender.from_settings()


@app.get("/health")
def health() -> JSONResponse:
    return JSONResponse({"status": "ok"})


@app.post("/sms/send")
async def sms_send(payload: OutboundSms) -> JSONResponse:
    """
    Submit one SMS to the gateway.

    Accepts JSON:

      { "phone": "5551234567", "message": "Merhaba" }

    Returns {"success": true, "result": <gateway body>} when the gateway
    answered, or {"success": false, "error": ..., "kind": ...} with a 502
    for any failure, including gateway_rejected in strict-status mode.
    """
    result = await get_sender().send(payload.phone, payload.message)
    status_code = 200 if result.ok else 502
    return JSONResponse(result.to_dict(), status_code=status_code)
