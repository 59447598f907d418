from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ministore.auth import NonceService, get_auth_provider
from ministore.config import Settings
from ministore.errors import MiniStoreError
from ministore.form_config import FormConfigurationManager
from ministore.routes.admin import router as admin_router
from ministore.routes.api import router as api_router
from ministore.storage import init_storage

logger = logging.getLogger(__name__)


async def handle_ministore_error(request: Request, exc: MiniStoreError) -> JSONResponse:
    return JSONResponse(
        {"success": False, "data": {"message": exc.message}},
        status_code=exc.status_code,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    storage = init_storage(settings)
    auth = get_auth_provider(settings)
    nonces = NonceService(settings.secret_key, settings.nonce_lifetime)

    app = FastAPI(
        title="Mini Store checkout form builder",
        openapi_tags=[
            {"name": "admin", "description": "Checkout form builder (admin)"},
            {"name": "api/checkout", "description": "REST API: checkout fields"},
            {"name": "system", "description": "System"},
        ],
    )

    app.state.settings = settings
    app.state.storage = storage
    app.state.auth_provider = auth
    app.state.nonces = nonces
    app.state.form_config = FormConfigurationManager(storage.options, nonces)

    app.add_exception_handler(MiniStoreError, handle_ministore_error)

    app.include_router(admin_router)
    app.include_router(api_router)

    logger.info(
        "Mini Store ready (storage=%s, auth=%s)",
        settings.storage_backend,
        settings.auth_mode,
    )
    return app
