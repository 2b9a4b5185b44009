# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

import logging
from typing import Optional

import httpx

from .error_handler import ExchangeFailure
from .flow_selector import select_flow
from .input_parser import parse_input
from .providers.builder_id_auth import BuilderIdTokenExchanger
from .providers.exchanger_interface import TokenExchanger
from .providers.social_auth import SocialTokenExchanger
from .providers.utilities.kiro_quota_tracker import KiroUsageFetcher
from .providers.utilities.kiro_utils import HTTP_TIMEOUT
from .token_record import assemble_token_record, build_client_secret_artifact
from .types import ParsedCredential, ProcessResult, UsageSnapshot
from .utils.credential_formatter import format_token_for_display


lib_logger = logging.getLogger("kiro_token_library")

USAGE_PLACEHOLDER = "-"
USAGE_UNAVAILABLE_NOTE = (
    "Usage query failed, the token may have expired or lack the required permissions"
)


def placeholder_usage(parsed: ParsedCredential) -> UsageSnapshot:
    return UsageSnapshot(
        limit=USAGE_PLACEHOLDER,
        used=USAGE_PLACEHOLDER,
        remaining=USAGE_PLACEHOLDER,
        email=parsed.email,
        note=USAGE_UNAVAILABLE_NOTE,
    )


class KiroTokenPipeline:
    """
    Pasted credentials in, kiro-auth-token.json record and usage out.

    Holds no per-request state, so a single instance (and its pooled HTTP
    client) can serve concurrent requests. The exchangers and the usage fetcher
    default to live implementations on the shared client and can be replaced.
    """

    def __init__(
        self,
        shared_client: Optional[httpx.AsyncClient] = None,
        builder_id_exchanger: Optional[TokenExchanger] = None,
        social_exchanger: Optional[TokenExchanger] = None,
        usage_fetcher: Optional[KiroUsageFetcher] = None,
    ) -> None:
        self._owns_client = shared_client is None
        self.client = shared_client or httpx.AsyncClient(timeout=HTTP_TIMEOUT)
        self.builder_id_exchanger = builder_id_exchanger or BuilderIdTokenExchanger(self.client)
        self.social_exchanger = social_exchanger or SocialTokenExchanger(self.client)
        self.usage_fetcher = usage_fetcher or KiroUsageFetcher(self.client)

    async def process(self, text: str) -> ProcessResult:
        """
        Run the whole pipeline for one pasted credential block.

        Raises:
            InputFormatError: the text holds no recognizable refresh token.
            MissingCredentialError: BuilderId input without client id / secret.
            UpstreamExchangeError: the BuilderId OIDC endpoint rejected the refresh.
            ExchangeFailure: no access token could be obtained.
        """
        parsed = parse_input(text)
        selection = select_flow(parsed)
        lib_logger.info(
            f"Processing {selection.flow.value} credential "
            f"{format_token_for_display(parsed.refresh_token)} in {selection.region}"
        )

        exchanger = (
            self.builder_id_exchanger if selection.is_builder_id else self.social_exchanger
        )
        exchange = await exchanger.exchange(parsed, selection.region)
        if not exchange.access_token:
            raise ExchangeFailure()

        kiro_token = assemble_token_record(parsed, selection.flow, exchange)
        artifact = build_client_secret_artifact(selection, parsed, exchange)

        usage = await self.usage_fetcher.fetch(exchange.access_token, selection.region)
        if usage is None:
            usage = placeholder_usage(parsed)
        elif not usage.email and parsed.email:
            usage.email = parsed.email

        return ProcessResult(
            usage=usage,
            kiro_token=kiro_token,
            is_builder_id_type=selection.is_builder_id,
            client_id_hash_file=artifact,
        )

    async def close(self) -> None:
        if not self._owns_client:
            return
        if not self.client.is_closed:
            try:
                await self.client.aclose()
            except Exception as exc:
                lib_logger.warning(f"Error closing HTTP client: {exc}")

    async def __aenter__(self) -> "KiroTokenPipeline":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


async def process_credentials(
    text: str, shared_client: Optional[httpx.AsyncClient] = None
) -> ProcessResult:
    """One-shot helper around KiroTokenPipeline."""
    async with KiroTokenPipeline(shared_client=shared_client) as pipeline:
        return await pipeline.process(text)
