"""Router registrations for the intake service."""

from __future__ import annotations

from .health import router as health_router
from .intake import build_intake_router

__all__ = ["build_intake_router", "health_router"]
