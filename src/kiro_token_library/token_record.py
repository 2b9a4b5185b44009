# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

import hashlib
from datetime import datetime, timezone
from typing import Optional

from .providers.utilities.kiro_utils import (
    DEFAULT_PROVIDER,
    DEFAULT_TOKEN_LIFETIME,
    expires_at_from_now,
)
from .types import (
    AuthFlow,
    CanonicalTokenRecord,
    ClientSecretArtifact,
    FlowSelection,
    ParsedCredential,
    TokenExchangeResult,
)


def client_id_hash(client_id: str) -> str:
    """SHA-1 of the client id, the key AWS SSO uses for its cache files."""
    return hashlib.sha1(client_id.encode("utf-8")).hexdigest()


def resolve_expires_at(exchange: TokenExchangeResult, now: Optional[datetime] = None) -> str:
    if exchange.expires_at:
        return exchange.expires_at
    now = now or datetime.now(timezone.utc)
    if exchange.expires_in:
        return expires_at_from_now(exchange.expires_in, now)
    return expires_at_from_now(DEFAULT_TOKEN_LIFETIME, now)


def assemble_token_record(
    parsed: ParsedCredential,
    flow: AuthFlow,
    exchange: TokenExchangeResult,
    now: Optional[datetime] = None,
) -> CanonicalTokenRecord:
    """Build the kiro-auth-token.json record from the input and the exchange result."""
    record = CanonicalTokenRecord(
        access_token=exchange.access_token,
        refresh_token=parsed.refresh_token,
        auth_method=flow.value,
        provider=parsed.provider or DEFAULT_PROVIDER,
        expires_at=resolve_expires_at(exchange, now),
    )

    client_id = parsed.client_id or exchange.client_id
    if client_id:
        record.client_id = client_id
    client_secret = parsed.client_secret or exchange.client_secret
    if client_secret:
        record.client_secret = client_secret
    profile_arn = parsed.profile_arn or exchange.profile_arn
    if profile_arn:
        record.profile_arn = profile_arn

    return record


def build_client_secret_artifact(
    selection: FlowSelection,
    parsed: ParsedCredential,
    exchange: TokenExchangeResult,
) -> Optional[ClientSecretArtifact]:
    """
    Build the ``<sha1(clientId)>.json`` device registration companion file.

    Only BuilderId accounts have one; returns None for social accounts or when
    no client id is known.
    """
    if not selection.is_builder_id:
        return None

    client_id = parsed.client_id or exchange.client_id
    if not client_id:
        return None

    return ClientSecretArtifact(
        filename=f"{client_id_hash(client_id)}.json",
        client_id=client_id,
        client_secret=parsed.client_secret or exchange.client_secret,
        region=selection.region,
    )
