"""Adapters connecting lagercheck to sinks, stdlib logging and ASGI."""
