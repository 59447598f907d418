from __future__ import annotations

from typing import Any

import orjson
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ministore import catalog
from ministore.auth import Principal, Requester
from ministore.config import AJAX_ACTION, MANAGE_OPTIONS, NONCE_ACTION, NONCE_FIELD
from ministore.errors import AuthorizationError, MalformedRequestError
from ministore.schemas import SaveFieldsRequest

router = APIRouter()

SAVE_PATH = "/admin/checkout-form"


def current_principal(request: Request) -> Principal:
    return request.app.state.auth_provider.current_principal(request)


def admin_guard(principal: Principal = Depends(current_principal)) -> Principal:
    if not principal.can(MANAGE_OPTIONS):
        raise AuthorizationError()
    return principal


def extract_token(payload: Any) -> str:
    if isinstance(payload, dict):
        token = payload.get(NONCE_FIELD)
        if isinstance(token, str):
            return token
    return ""


@router.get(SAVE_PATH, tags=["admin"])
async def form_builder_bootstrap(
    request: Request, principal: Principal = Depends(admin_guard)
) -> JSONResponse:
    manager = request.app.state.form_config
    nonces = request.app.state.nonces
    return JSONResponse(
        {
            "ajaxUrl": SAVE_PATH,
            "action": AJAX_ACTION,
            "nonce": nonces.issue_token(NONCE_ACTION, principal),
            "nonceField": NONCE_FIELD,
            "fields": catalog.catalog_by_id(),
            "saved": [field.as_dict() for field in manager.load_saved()],
        }
    )


@router.post(SAVE_PATH, tags=["admin"])
async def save_checkout_fields(
    request: Request, principal: Principal = Depends(current_principal)
) -> JSONResponse:
    manager = request.app.state.form_config
    body = await request.body()
    try:
        payload = orjson.loads(body) if body else {}
    except orjson.JSONDecodeError:
        payload = None

    requester = Requester(principal=principal, token=extract_token(payload))
    manager.check_access(requester)

    if not isinstance(payload, dict):
        raise MalformedRequestError("The request body must be a JSON object.")
    try:
        data = SaveFieldsRequest.model_validate(payload)
    except ValidationError as exc:
        raise MalformedRequestError("The request body is invalid.") from exc
    if data.action != AJAX_ACTION:
        raise MalformedRequestError("Unknown action.")

    manager.save_checked(data.fields, requester)
    return JSONResponse(
        {"success": True, "data": {"message": "Checkout form saved successfully."}}
    )
