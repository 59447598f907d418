from __future__ import annotations

import logging
from typing import Any

import httpx

from ministore.canvas import CanvasState, Notice

logger = logging.getLogger(__name__)

BOOTSTRAP_PATH = "/admin/checkout-form"


class FormBuilderClient:
    """Drives the form builder endpoints the way the admin page does."""

    def __init__(
        self,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
        headers: dict[str, str] | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._base_url = base_url
        self._transport = transport
        self._headers = headers or {}
        self._timeout = timeout
        self._config: dict[str, Any] = {}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            transport=self._transport,
            headers=self._headers,
            timeout=self._timeout,
        )

    async def bootstrap(self) -> CanvasState:
        async with self._client() as client:
            response = await client.get(BOOTSTRAP_PATH)
            response.raise_for_status()
        self._config = response.json()
        return CanvasState.from_bootstrap(self._config)

    async def save(self, canvas: CanvasState) -> Notice:
        if not self._config:
            raise RuntimeError("bootstrap() must be called before save()")
        url = self._config["ajaxUrl"]
        payload: dict[str, Any] = {
            "action": self._config["action"],
            self._config["nonceField"]: self._config["nonce"],
        }
        payload["fields"] = canvas.begin_save()

        try:
            async with self._client() as client:
                response = await client.post(url, json=payload)
            body = response.json()
        except (httpx.HTTPError, ValueError):
            logger.exception("Checkout form save request failed")
            return canvas.finish_save(False)

        data = body.get("data") if isinstance(body, dict) else None
        message = data.get("message") if isinstance(data, dict) else None
        success = bool(isinstance(body, dict) and body.get("success"))
        return canvas.finish_save(success, message)
