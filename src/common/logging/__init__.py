"""
Common Logging Utilities

Log sanitization so provider credentials never reach log output.
"""

from src.common.logging.sanitizer import (
    SanitizingFilter,
    clear_registered_secrets,
    configure_sanitized_logging,
    register_secret,
)

__all__ = [
    "SanitizingFilter",
    "clear_registered_secrets",
    "configure_sanitized_logging",
    "register_secret",
]
