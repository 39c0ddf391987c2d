"""Core infrastructure helpers (configuration, logging, request context)."""
