# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Mirrowel

import os
from dataclasses import dataclass


class SecurityValidationError(RuntimeError):
    pass


def parse_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def get_app_env() -> str:
    value = (os.getenv("APP_ENV") or "dev").strip().lower()
    if value in {"prod", "production"}:
        return "prod"
    return "dev"


def is_prod() -> bool:
    return get_app_env() == "prod"


def expose_error_details() -> bool:
    return parse_bool_env("EXPOSE_ERROR_DETAILS", not is_prod())


@dataclass(frozen=True)
class CORSSettings:
    allow_origins: list[str]
    allow_credentials: bool
    allow_methods: list[str]
    allow_headers: list[str]


def _split_csv_env(name: str, default: str) -> list[str]:
    raw = os.getenv(name, default)
    values = [value.strip() for value in raw.split(",")]
    return [value for value in values if value]


def get_cors_settings() -> CORSSettings:
    # The token page is served from arbitrary static hosts, so any origin may call it.
    origins = _split_csv_env("CORS_ALLOW_ORIGINS", "*")
    allow_credentials = parse_bool_env("CORS_ALLOW_CREDENTIALS", False)

    if not origins:
        allow_credentials = False

    if allow_credentials and "*" in origins:
        raise SecurityValidationError(
            "Invalid CORS config: CORS_ALLOW_ORIGINS cannot include '*' when "
            "CORS_ALLOW_CREDENTIALS=true."
        )

    return CORSSettings(
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=_split_csv_env("CORS_ALLOW_METHODS", "POST,OPTIONS"),
        allow_headers=_split_csv_env("CORS_ALLOW_HEADERS", "Content-Type"),
    )
