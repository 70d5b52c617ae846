"""
Pytest configuration for unit tests.

Disables telemetry export and keeps provider settings out of the
environment so tests never depend on the developer's machine.
"""

import os


def pytest_configure(config):
    """Configure telemetry and settings isolation for unit tests."""
    os.environ["NL2SCRY_TELEMETRY_ENABLED"] = "false"
    for var in ("NL2SCRY_PROVIDER", "NL2SCRY_API_KEY", "NL2SCRY_MODEL_ID"):
        os.environ.pop(var, None)
