# src/kiro_token_library/providers/utilities/kiro_quota_tracker.py
"""
Kiro Quota Lookup

Fetches the usage limits of an account from the CodeWhisperer/Q endpoint and
reduces the response to a single UsageSnapshot.

Response Structure (getUsageLimits):
- usageBreakdownList[0]: plan usage (usageLimit / currentUsage, each with an
  optional *WithPrecision twin)
- usageBreakdownList[0].freeTrialInfo: trial quota, counted only while
  freeTrialStatus is ACTIVE
- userInfo.email or email: present at the top level or on the breakdown entry,
  depending on account type
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from .kiro_utils import get_usage_headers, get_usage_limits_url
from ...types import UsageSnapshot

lib_logger = logging.getLogger("kiro_token_library")


# =============================================================================
# CONFIGURATION
# =============================================================================

FREE_TRIAL_ACTIVE = "ACTIVE"

LIMIT_FIELDS = ("usageLimit", "usageLimitWithPrecision")
USED_FIELDS = ("currentUsage", "currentUsageWithPrecision")


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def _quantity(source: Dict[str, Any], fields: tuple) -> float:
    """First truthy numeric field of ``fields``, else 0."""
    for name in fields:
        value = source.get(name)
        if value and isinstance(value, (int, float)) and not isinstance(value, bool):
            return value
    return 0


def _email_from(source: Any) -> Optional[str]:
    if not isinstance(source, dict):
        return None
    user_info = source.get("userInfo")
    if isinstance(user_info, dict) and user_info.get("email"):
        return user_info["email"]
    return None


def _resolve_email(data: Dict[str, Any], entry: Dict[str, Any]) -> Optional[str]:
    # Top-level user info, top-level field, entry user info, entry field.
    return (
        _email_from(data)
        or data.get("email")
        or _email_from(entry)
        or entry.get("email")
        or None
    )


# =============================================================================
# NORMALIZATION
# =============================================================================


def normalize_usage(data: Any) -> Optional[UsageSnapshot]:
    """
    Reduce a getUsageLimits response to plan + active trial totals.

    Args:
        data: Decoded response body

    Returns:
        UsageSnapshot, or None when the response carries no usage breakdown
    """
    if not isinstance(data, dict):
        return None
    breakdown = data.get("usageBreakdownList")
    if not isinstance(breakdown, list) or not breakdown or not breakdown[0]:
        return None

    entry = breakdown[0]
    if not isinstance(entry, dict):
        return None

    total_limit = _quantity(entry, LIMIT_FIELDS)
    total_used = _quantity(entry, USED_FIELDS)

    free_trial = entry.get("freeTrialInfo")
    if isinstance(free_trial, dict) and free_trial.get("freeTrialStatus") == FREE_TRIAL_ACTIVE:
        total_limit += _quantity(free_trial, LIMIT_FIELDS)
        total_used += _quantity(free_trial, USED_FIELDS)

    email = _resolve_email(data, entry)
    lib_logger.debug(f"Usage normalized: limit={total_limit}, used={total_used}, email={email}")

    return UsageSnapshot(
        limit=total_limit,
        used=total_used,
        remaining=total_limit - total_used,
        email=email,
    )


# =============================================================================
# FETCHER
# =============================================================================


class KiroUsageFetcher:
    """Single best-effort usage lookup; every failure is reported as None."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def fetch(self, access_token: str, region: str) -> Optional[UsageSnapshot]:
        url = get_usage_limits_url(region)
        try:
            response = await self.client.get(url, headers=get_usage_headers(access_token))
        except httpx.HTTPError as exc:
            lib_logger.warning(f"Usage query to {url} failed: {exc}")
            return None

        if not response.is_success:
            lib_logger.warning(f"Usage query failed with status: {response.status_code}")
            return None

        try:
            raw = response.json()
        except ValueError as exc:
            lib_logger.warning(f"Usage query returned an undecodable body: {exc}")
            return None

        usage = normalize_usage(raw)
        if usage is None:
            lib_logger.warning("Usage query response had no usage breakdown")
            return None

        lib_logger.info(f"Usage query successful, email: {usage.email}")
        return usage
