"""Shared infrastructure: resilience, telemetry and logging."""
