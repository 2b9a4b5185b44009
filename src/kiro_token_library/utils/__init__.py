# src/kiro_token_library/utils/__init__.py

from .credential_formatter import format_token_for_display

__all__ = ['format_token_for_display']
