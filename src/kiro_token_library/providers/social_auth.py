# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

import logging
from typing import Any, Dict, Optional

import httpx

from .exchanger_interface import TokenExchanger
from .utilities.kiro_utils import (
    coerce_seconds,
    get_kiro_refresh_url,
    get_social_headers,
    looks_like_refresh_token,
)
from ..types import ParsedCredential, TokenExchangeResult
from ..utils.credential_formatter import format_token_for_display


lib_logger = logging.getLogger("kiro_token_library")


class SocialTokenExchanger(TokenExchanger):
    """
    Access credential resolution for Google/GitHub linked (Kiro desktop) accounts.

    Never raises for an ordinary failure. Resolution order:

    1. A supplied access token that is not itself a refresh token is reused.
    2. The Kiro desktop refresh endpoint is called once.
    3. The refresh token is used as the access credential.
    """

    def __init__(self, client: httpx.AsyncClient, refresh_url: Optional[str] = None):
        super().__init__(client)
        self.refresh_url = refresh_url or get_kiro_refresh_url()

    async def exchange(self, parsed: ParsedCredential, region: str) -> TokenExchangeResult:
        if parsed.access_token and not looks_like_refresh_token(parsed.access_token):
            lib_logger.debug("Reusing supplied access token, skipping refresh")
            return TokenExchangeResult(access_token=parsed.access_token)

        refreshed = await self._refresh(parsed)
        if refreshed is not None:
            return refreshed

        lib_logger.warning(
            f"Falling back to refresh token {format_token_for_display(parsed.refresh_token)} "
            "as access token"
        )
        return TokenExchangeResult(access_token=parsed.refresh_token)

    async def _refresh(self, parsed: ParsedCredential) -> Optional[TokenExchangeResult]:
        payload: Dict[str, Any] = {"refreshToken": parsed.refresh_token}
        if parsed.profile_arn:
            payload["profileArn"] = parsed.profile_arn

        try:
            response = await self.client.post(
                self.refresh_url, json=payload, headers=get_social_headers()
            )
        except httpx.HTTPError as exc:
            lib_logger.warning(f"Kiro token refresh failed: {exc}")
            return None

        if not response.is_success:
            lib_logger.warning(f"Kiro token refresh failed with status {response.status_code}")
            return None

        try:
            data = response.json()
        except ValueError as exc:
            lib_logger.warning(f"Kiro token refresh returned an undecodable body: {exc}")
            return None
        if not isinstance(data, dict):
            return None

        access_token = data.get("accessToken") or data.get("access_token")
        if not access_token:
            lib_logger.warning("Kiro token refresh response missing accessToken")
            return None

        lib_logger.info("Kiro token refresh succeeded")
        return TokenExchangeResult(
            access_token=access_token,
            expires_at=data.get("expiresAt") or None,
            expires_in=coerce_seconds(data.get("expiresIn") or data.get("expires_in")),
            profile_arn=data.get("profileArn") or None,
        )
