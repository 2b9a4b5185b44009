# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

from .exchanger_interface import TokenExchanger
from .utilities.kiro_utils import (
    coerce_seconds,
    expires_at_from_now,
    get_aws_sso_oidc_url,
    get_oidc_headers,
)
from ..error_handler import MissingCredentialError, UpstreamExchangeError
from ..types import ParsedCredential, TokenExchangeResult
from ..utils.credential_formatter import format_token_for_display


lib_logger = logging.getLogger("kiro_token_library")


def _decode_body(text: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


class BuilderIdTokenExchanger(TokenExchanger):
    """AWS SSO OIDC ``refresh_token`` grant for BuilderId accounts."""

    async def exchange(
        self,
        parsed: ParsedCredential,
        region: str,
        now: Optional[datetime] = None,
    ) -> TokenExchangeResult:
        if not parsed.client_id or not parsed.client_secret:
            raise MissingCredentialError()

        url = get_aws_sso_oidc_url(region)
        form = {
            "grant_type": "refresh_token",
            "refresh_token": parsed.refresh_token,
            "client_id": parsed.client_id,
            "client_secret": parsed.client_secret,
        }

        try:
            response = await self.client.post(url, data=form, headers=get_oidc_headers())
        except httpx.RequestError as exc:
            lib_logger.error(f"BuilderId refresh request to {url} failed: {exc}")
            raise UpstreamExchangeError(None, str(exc)) from exc

        text = response.text
        data = _decode_body(text)

        if not response.is_success:
            message = data.get("error_description") or data.get("error") or text
            lib_logger.error(
                f"BuilderId refresh failed: status={response.status_code}, body={text}"
            )
            raise UpstreamExchangeError(response.status_code, message)

        access_token = data.get("access_token")
        expires_in = coerce_seconds(data.get("expires_in"))
        expires_at = None
        if expires_in:
            expires_at = expires_at_from_now(
                expires_in, now or datetime.now(timezone.utc)
            )

        lib_logger.info(
            f"BuilderId refresh succeeded for client {format_token_for_display(parsed.client_id)}"
        )
        return TokenExchangeResult(
            access_token=access_token,
            expires_at=expires_at,
            expires_in=expires_in,
            client_id=parsed.client_id,
            client_secret=parsed.client_secret,
        )
