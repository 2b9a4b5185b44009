# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional


lib_logger = logging.getLogger("kiro_token_library")


KIRO_REFRESH_URL_TEMPLATE = "https://prod.{region}.auth.desktop.kiro.dev/refreshToken"
AWS_SSO_OIDC_URL_TEMPLATE = "https://oidc.{region}.amazonaws.com/token"
KIRO_Q_HOST_TEMPLATE = "https://q.{region}.amazonaws.com"

# The social refresh service only lives in us-east-1, whatever the account region.
SOCIAL_REFRESH_REGION = "us-east-1"

REFRESH_TOKEN_PREFIX = "aor"

DEFAULT_REGION = os.getenv("KIRO_DEFAULT_REGION", "us-east-1")
DEFAULT_PROVIDER = "Google"
HTTP_TIMEOUT = float(os.getenv("KIRO_HTTP_TIMEOUT", "30"))
DEFAULT_TOKEN_LIFETIME = int(os.getenv("KIRO_DEFAULT_TOKEN_LIFETIME", "3600"))
USER_AGENT = os.getenv("KIRO_USER_AGENT", "KiroTokenTools/1.0")


def get_kiro_refresh_url(region: str = SOCIAL_REFRESH_REGION) -> str:
    return KIRO_REFRESH_URL_TEMPLATE.format(region=region)


def get_aws_sso_oidc_url(region: str) -> str:
    return AWS_SSO_OIDC_URL_TEMPLATE.format(region=region)


def get_kiro_q_host(region: str) -> str:
    return KIRO_Q_HOST_TEMPLATE.format(region=region)


def get_usage_limits_url(region: str) -> str:
    return f"{get_kiro_q_host(region)}/getUsageLimits"


def looks_like_refresh_token(value: Optional[str]) -> bool:
    return bool(value) and value.startswith(REFRESH_TOKEN_PREFIX)


def coerce_seconds(value: Any) -> Optional[float]:
    """Return ``value`` as a number of seconds, or None if it is empty or not numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        lib_logger.debug(f"Ignoring non-numeric expiry value: {value!r}")
        return None
    return seconds or None


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def expires_at_from_now(seconds: float, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return format_timestamp(now + timedelta(seconds=seconds))


def get_oidc_headers() -> Dict[str, str]:
    return {
        "Content-Type": "application/x-www-form-urlencoded",
        "Accept": "application/json",
        "User-Agent": USER_AGENT,
    }


def get_social_headers() -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "User-Agent": USER_AGENT,
    }


def get_usage_headers(access_token: str) -> Dict[str, str]:
    return {
        "Accept": "application/json",
        "Authorization": f"Bearer {access_token}",
        "User-Agent": f"aws-sdk-js/1.0.0 {USER_AGENT}",
        "x-amz-user-agent": f"aws-sdk-js/1.0.0 {USER_AGENT}",
    }
