"""
Resilience Patterns

Retry with backoff for operations that can fail transiently.
"""

from src.common.resilience.retry import RetryConfig, compute_delay, retry_with_backoff

__all__ = [
    "RetryConfig",
    "compute_delay",
    "retry_with_backoff",
]
