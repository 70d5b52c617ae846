"""Transports that expose the RequestGateway to the UI process."""
