from __future__ import annotations

import os
import secrets
from pathlib import Path

OPTION_KEY = "ms_checkout_fields"
AJAX_ACTION = "ms_save_checkout_fields"
NONCE_ACTION = "ms_form_builder_save"
NONCE_FIELD = "ms_form_builder_nonce"
MANAGE_OPTIONS = "manage_options"


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


class Settings:
    def __init__(self) -> None:
        self.storage_backend = os.getenv("STORAGE_BACKEND", "sqlite").lower()
        self.sqlite_path = Path(os.getenv("SQLITE_PATH", "./data/ministore.db"))
        self.json_path = Path(os.getenv("JSON_PATH", "./data/options.json"))
        self.auth_mode = os.getenv("AUTH_MODE", "none").lower()
        self.admin_api_key = os.getenv("ADMIN_API_KEY", "")
        # Tokens issued with a generated key stop verifying after a restart.
        self.secret_key = os.getenv("SECRET_KEY") or secrets.token_hex(32)
        self.nonce_lifetime = _int_env("NONCE_LIFETIME", 86400)
        self.host = os.getenv("HOST", "0.0.0.0")
        self.port = _int_env("PORT", 8000)
        self.log_level = os.getenv("LOG_LEVEL", "info").lower()


def ensure_dirs(settings: Settings) -> None:
    settings.sqlite_path.parent.mkdir(parents=True, exist_ok=True)
    settings.json_path.parent.mkdir(parents=True, exist_ok=True)
