"""FastAPI application exposing the VietQR payload builder and validator."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .banks import BANK_BINS
from .config import settings
from .crc import crc_matches
from .logging_conf import configure_logging
from .middleware import RequestLoggingMiddleware
from .monitoring import metrics_payload, record_service_error
from .schemas import (
    BankInfo,
    DecodeResponse,
    GenerateQRRequest,
    GenerateQRResponse,
    PayloadRequest,
    ValidateResponse,
)
from .services.errors import ServiceError
from .services.generator import PaymentQRGenerator
from .services.inspector import PayloadInspector
from .vietqr_encoder import PaymentRequest

app = FastAPI(title="vietqr-payload", version="0.1.0")
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(CORSMiddleware, allow_origins=settings.allowed_origins, allow_methods=["GET", "POST"], allow_headers=["*"])

logger = logging.getLogger("vietqr.api")


def _route_path(request: Request) -> str:
    route = request.scope.get("route")
    return route.path if route else request.url.path


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    if settings.environment == "production" and not settings.require_reference:
        logger.warning(
            "payloads without transaction_id fall back to clock-derived references",
            extra={"config_key": "require_reference"},
        )


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    route_path = _route_path(request)
    logger.warning(
        "service error",
        extra={"code": exc.code, "path": route_path, "method": request.method},
    )
    record_service_error(exc.code, route_path)
    return JSONResponse(status_code=exc.status_code, content={"code": exc.code, "message": exc.message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled exception",
        extra={"path": _route_path(request), "method": request.method},
    )
    return JSONResponse(status_code=500, content={"code": "ERR_INTERNAL", "message": "Internal server error"})


@app.get("/health", tags=["system"])
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metrics", tags=["system"])
async def metrics() -> Response:
    payload, content_type = metrics_payload()
    return Response(content=payload, media_type=content_type)


@app.get("/v1/banks", response_model=list[BankInfo], tags=["banks"])
async def list_banks() -> list[BankInfo]:
    return [BankInfo(code=code, bin=bank_bin) for code, bank_bin in BANK_BINS.items()]


@app.post("/v1/vietqr", response_model=GenerateQRResponse, tags=["vietqr"])
async def generate_qr(payload: GenerateQRRequest) -> GenerateQRResponse:
    generator = PaymentQRGenerator()
    request = PaymentRequest(
        bank_bin=generator.resolve_bank_bin(payload.bank_bin, payload.bank_code),
        account_number=payload.account_number,
        account_name=payload.account_name,
        amount=payload.amount,
        transaction_id=payload.transaction_id,
        template=payload.template or settings.default_template,
        purpose=payload.purpose,
    )
    result = generator.create(request)

    return GenerateQRResponse(
        payload=result.encoded.payload,
        crc=result.encoded.crc,
        amount_display=result.amount_display,
        template=request.template,
    )


@app.post("/v1/vietqr/validate", response_model=ValidateResponse, tags=["vietqr"])
async def validate_qr(payload: PayloadRequest) -> ValidateResponse:
    result = PayloadInspector(strict=payload.strict).validate(payload.payload)
    return ValidateResponse(**result.to_dict())


@app.post("/v1/vietqr/decode", response_model=DecodeResponse, tags=["vietqr"])
async def decode_qr(payload: PayloadRequest) -> DecodeResponse:
    decoded = PayloadInspector().decode(payload.payload)
    return DecodeResponse(**decoded.to_dict(), crc_valid=crc_matches(payload.payload))
