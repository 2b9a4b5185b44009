# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

from typing import Optional


class KiroTokenError(Exception):
    """Base class for failures that abort the token pipeline."""

    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputFormatError(KiroTokenError):
    """No parsing strategy recognized a refresh token in the pasted text."""

    def __init__(self, message: str = "No refreshToken recognized, check the pasted content format"):
        super().__init__(message)


class EmptyInputError(InputFormatError):
    def __init__(self, message: str = "Empty input"):
        super().__init__(message)


class MissingCredentialError(KiroTokenError):
    """A BuilderId account was supplied without its client id / client secret."""

    def __init__(self, message: str = "BuilderId account is missing clientId / clientSecret"):
        super().__init__(message)


class ExchangeFailure(KiroTokenError):
    def __init__(
        self,
        message: str = "Failed to obtain an accessToken (refreshToken may be invalid or expired)",
    ):
        super().__init__(message)


class UpstreamExchangeError(KiroTokenError):
    """
    The BuilderId OIDC endpoint rejected the refresh.

    Reported with server-error severity, like any unexpected failure, even though
    the usual cause is an expired or revoked refresh token supplied by the user.
    """

    status_code = 500

    def __init__(self, upstream_status: Optional[int], upstream_message: str):
        self.upstream_status = upstream_status
        self.upstream_message = upstream_message
        if upstream_status is None:
            message = f"BuilderId refresh failed: {upstream_message}"
        else:
            message = f"BuilderId refresh failed: HTTP {upstream_status} {upstream_message}"
        super().__init__(message)


def is_user_input_error(e: Exception) -> bool:
    """Checks if the exception was caused by the pasted credentials rather than the service."""
    return isinstance(e, KiroTokenError) and 400 <= e.status_code < 500


def is_upstream_error(e: Exception) -> bool:
    """Checks if the exception carries an error reported by an upstream token endpoint."""
    return isinstance(e, UpstreamExchangeError)
