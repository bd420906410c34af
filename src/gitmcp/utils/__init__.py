"""Shared helpers — logging and tracing."""
