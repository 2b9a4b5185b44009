# src/kiro_token_library/providers/utilities/__init__.py
