# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

import logging

from .error_handler import MissingCredentialError
from .providers.utilities.kiro_utils import DEFAULT_REGION
from .types import AuthFlow, FlowSelection, ParsedCredential

lib_logger = logging.getLogger("kiro_token_library")


def detect_auth_flow(parsed: ParsedCredential) -> AuthFlow:
    if (parsed.provider or "").lower() == AuthFlow.BUILDER_ID.value:
        return AuthFlow.BUILDER_ID
    if parsed.client_id and parsed.client_secret:
        return AuthFlow.BUILDER_ID
    return AuthFlow.SOCIAL


def select_flow(parsed: ParsedCredential) -> FlowSelection:
    """
    Pick the refresh protocol for a credential and resolve its region.

    Raises:
        MissingCredentialError: the credential is BuilderId but lacks client id or secret.
    """
    flow = detect_auth_flow(parsed)
    if flow is AuthFlow.BUILDER_ID and not (parsed.client_id and parsed.client_secret):
        raise MissingCredentialError()

    region = parsed.region or DEFAULT_REGION
    lib_logger.debug(f"Selected {flow.value} flow in region {region}")
    return FlowSelection(flow=flow, region=region)
