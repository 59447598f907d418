from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ministore import catalog

router = APIRouter()


@router.get("/api/checkout-fields", tags=["api/checkout"])
async def api_checkout_fields(request: Request) -> JSONResponse:
    manager = request.app.state.form_config
    return JSONResponse([field.as_dict() for field in manager.load_saved()])


@router.get("/api/field-catalog", tags=["api/checkout"])
async def api_field_catalog() -> JSONResponse:
    return JSONResponse([field.as_dict() for field in catalog.list_all()])


@router.get("/healthz", tags=["system"])
async def healthz() -> dict[str, str]:
    return {"status": "ok"}
