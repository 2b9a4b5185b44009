# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Data model shared by every stage of the token pipeline.

Wire-facing records (token record, artifact, usage, result) serialize through
``to_dict()`` using the camelCase keys the Kiro IDE expects in
``kiro-auth-token.json``. Optional fields are omitted rather than emitted as
null where the file format calls for absence.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union


class AuthFlow(Enum):
    BUILDER_ID = "builderid"
    SOCIAL = "social"


def _pick(data: Mapping[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = data.get(key)
        if isinstance(value, str) and value:
            return value
    return None


@dataclass(frozen=True)
class ParsedCredential:
    refresh_token: str
    access_token: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    profile_arn: Optional[str] = None
    provider: Optional[str] = None
    region: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Optional["ParsedCredential"]:
        """Build from a decoded JSON object, or return None if it has no refresh token."""
        refresh_token = _pick(data, "refreshToken", "refresh_token")
        if not refresh_token:
            return None
        return cls(
            refresh_token=refresh_token,
            access_token=_pick(data, "accessToken", "access_token"),
            client_id=_pick(data, "clientId", "client_id"),
            client_secret=_pick(data, "clientSecret", "client_secret"),
            profile_arn=_pick(data, "profileArn", "profile_arn"),
            provider=_pick(data, "provider"),
            region=_pick(data, "region"),
            email=_pick(data, "email"),
        )


@dataclass(frozen=True)
class FlowSelection:
    flow: AuthFlow
    region: str

    @property
    def is_builder_id(self) -> bool:
        return self.flow is AuthFlow.BUILDER_ID


@dataclass
class TokenExchangeResult:
    access_token: Optional[str]
    expires_at: Optional[str] = None
    expires_in: Optional[float] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    profile_arn: Optional[str] = None


@dataclass
class CanonicalTokenRecord:
    access_token: str
    refresh_token: str
    auth_method: str
    provider: str
    expires_at: str
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    profile_arn: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "accessToken": self.access_token,
            "refreshToken": self.refresh_token,
            "authMethod": self.auth_method,
            "provider": self.provider,
            "expiresAt": self.expires_at,
        }
        if self.client_id:
            record["clientId"] = self.client_id
        if self.client_secret:
            record["clientSecret"] = self.client_secret
        if self.profile_arn:
            record["profileArn"] = self.profile_arn
        return record


@dataclass(frozen=True)
class ClientSecretArtifact:
    filename: str
    client_id: str
    client_secret: Optional[str]
    region: str

    @property
    def content(self) -> Dict[str, Any]:
        return {
            "clientId": self.client_id,
            "clientSecret": self.client_secret,
            "region": self.region,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {"filename": self.filename, "content": self.content}


Quantity = Union[int, float, str]


@dataclass
class UsageSnapshot:
    """Plan plus trial quota; numeric fields hold a placeholder string in degraded mode."""

    limit: Quantity
    used: Quantity
    remaining: Quantity
    email: Optional[str] = None
    note: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        usage: Dict[str, Any] = {
            "limit": self.limit,
            "used": self.used,
            "remaining": self.remaining,
            "email": self.email,
        }
        if self.note:
            usage["note"] = self.note
        return usage


@dataclass
class ProcessResult:
    usage: UsageSnapshot
    kiro_token: CanonicalTokenRecord
    is_builder_id_type: bool
    client_id_hash_file: Optional[ClientSecretArtifact] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "usage": self.usage.to_dict(),
            "kiroToken": self.kiro_token.to_dict(),
            "isBuilderIdType": self.is_builder_id_type,
            "clientIdHashFile": (
                self.client_id_hash_file.to_dict() if self.client_id_hash_file else None
            ),
        }
