from __future__ import annotations

import hashlib
import hmac
import math
import secrets
import time
from dataclasses import dataclass, field
from typing import Callable, Protocol

from fastapi import Request

from ministore.config import MANAGE_OPTIONS, Settings

TOKEN_LENGTH = 20


@dataclass(frozen=True)
class Principal:
    user_id: str
    capabilities: frozenset[str] = field(default_factory=frozenset)

    def can(self, capability: str) -> bool:
        return capability in self.capabilities


ADMINISTRATOR = Principal("admin", frozenset({MANAGE_OPTIONS}))
ANONYMOUS = Principal("anonymous")


@dataclass(frozen=True)
class Requester:
    principal: Principal
    token: str


class AuthProvider(Protocol):
    def current_principal(self, request: Request) -> Principal: ...


class NoAuthProvider:
    def current_principal(self, request: Request) -> Principal:
        return ADMINISTRATOR


class APIKeyAuthProvider:
    def __init__(self, api_key: str) -> None:
        self._api_key = api_key

    def current_principal(self, request: Request) -> Principal:
        header = request.headers.get("authorization", "")
        scheme, _, credential = header.partition(" ")
        if (
            self._api_key
            and scheme.lower() == "bearer"
            and secrets.compare_digest(
                credential.strip().encode("utf-8"), self._api_key.encode("utf-8")
            )
        ):
            return ADMINISTRATOR
        return ANONYMOUS


def get_auth_provider(settings: Settings) -> AuthProvider:
    if settings.auth_mode == "apikey":
        return APIKeyAuthProvider(settings.admin_api_key)
    return NoAuthProvider()


class NonceService:
    """Anti-forgery tokens bound to a scope and a principal.

    Time is split into ticks of half the lifetime. A token verifies during the
    tick it was issued in and the one after, so it stays valid for between
    ``lifetime / 2`` and ``lifetime`` seconds.
    """

    def __init__(
        self,
        secret: str,
        lifetime: int = 86400,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._secret = secret.encode("utf-8")
        self._lifetime = max(int(lifetime), 2)
        self._clock = clock

    def _tick(self) -> int:
        return math.ceil(self._clock() / (self._lifetime / 2))

    def _digest(self, tick: int, scope: str, principal: Principal) -> str:
        message = f"{tick}|{scope}|{principal.user_id}".encode("utf-8")
        return hmac.new(self._secret, message, hashlib.sha256).hexdigest()[:TOKEN_LENGTH]

    def issue_token(self, scope: str, principal: Principal) -> str:
        return self._digest(self._tick(), scope, principal)

    def verify_token(self, token: str | None, scope: str, principal: Principal) -> bool:
        if not token or not isinstance(token, str):
            return False
        presented = token.encode("utf-8")
        tick = self._tick()
        for candidate in (tick, tick - 1):
            expected = self._digest(candidate, scope, principal).encode("utf-8")
            if hmac.compare_digest(presented, expected):
                return True
        return False
