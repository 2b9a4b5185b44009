"""
Utility for formatting credentials for display in logs.

Tokens and client secrets pass through the pipeline in clear text; this module
provides the one place where they are shortened before they reach a log line,
so that only the last 6 characters are ever shown.
"""

from typing import Optional


def format_token_for_display(token: Optional[str]) -> str:
    """
    Format a token or secret for display in logs.

    Args:
        token: The credential string, possibly None or empty

    Returns:
        A display-safe string representation of the credential

    Examples:
        >>> format_token_for_display("aorAAAAAbbbbbCCCCC123456")
        "...123456"
        >>> format_token_for_display(None)
        "<none>"
    """
    if not token:
        return "<none>"
    if len(token) <= 6:
        return "..."
    return f"...{token[-6:]}"
