# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Parsing of pasted Kiro credentials.

Accepted shapes, tried in this order:

1. A bare refresh token: ``aor<base64url>:<base64>``
2. A JSON object carrying ``refreshToken``
3. Account export text: ``账号：{...}登录token：{...}``
4. Two JSON objects joined by a pipe: ``{...}|{...}``

Every strategy returns a candidate mapping or None; the first candidate with a
refresh token wins and later strategies are not consulted.
"""

import json
import logging
import re
from typing import Any, Callable, Dict, Optional, Tuple

from .error_handler import EmptyInputError, InputFormatError
from .types import ParsedCredential

lib_logger = logging.getLogger("kiro_token_library")

Candidate = Optional[Dict[str, Any]]

BARE_REFRESH_TOKEN_PATTERN = re.compile(r"^aor[A-Za-z0-9_+-]{50,}:[A-Za-z0-9+/=]{50,}$")
ACCOUNT_BLOCK_PATTERN = re.compile(r"账号\s*[：:]\s*(\{[^}]+\})")
LOGIN_TOKEN_BLOCK_PATTERN = re.compile(r"登录token\s*[：:]\s*(\{[^}]+\})", re.IGNORECASE)


def _load_json_object(text: str) -> Candidate:
    try:
        value = json.loads(text)
    except ValueError:
        return None
    return value if isinstance(value, dict) else None


def _merge(first: Candidate, second: Candidate) -> Candidate:
    if first is None or second is None:
        return None
    return {**first, **second}


def parse_bare_refresh_token(text: str) -> Candidate:
    if BARE_REFRESH_TOKEN_PATTERN.match(text):
        return {"refreshToken": text}
    return None


def parse_json_object(text: str) -> Candidate:
    return _load_json_object(text)


def parse_labelled_blocks(text: str) -> Candidate:
    account = ACCOUNT_BLOCK_PATTERN.search(text)
    token = LOGIN_TOKEN_BLOCK_PATTERN.search(text)
    if not account or not token:
        return None
    return _merge(_load_json_object(account.group(1)), _load_json_object(token.group(1)))


def parse_pipe_joined(text: str) -> Candidate:
    if "|" not in text:
        return None
    left, _, right = text.partition("|")
    return _merge(_load_json_object(left.strip()), _load_json_object(right.strip()))


PARSE_STRATEGIES: Tuple[Tuple[str, Callable[[str], Candidate]], ...] = (
    ("bare_refresh_token", parse_bare_refresh_token),
    ("json", parse_json_object),
    ("labelled_blocks", parse_labelled_blocks),
    ("pipe_joined", parse_pipe_joined),
)


def parse_input(text: str) -> ParsedCredential:
    """
    Turn pasted text into a ParsedCredential.

    Raises:
        EmptyInputError: the text is empty or whitespace only.
        InputFormatError: no strategy produced a candidate with a refresh token.
    """
    text = (text or "").strip()
    if not text:
        raise EmptyInputError()

    for name, strategy in PARSE_STRATEGIES:
        candidate = strategy(text)
        if candidate is None:
            continue
        parsed = ParsedCredential.from_mapping(candidate)
        if parsed is not None:
            lib_logger.debug(f"Credential input recognized by '{name}' strategy")
            return parsed

    raise InputFormatError()
