"""Authenticated actor on whose behalf intake records are created."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Principal:
    """A user id, optionally belonging to exactly one firm (tenant)."""

    user_id: str
    tenant_id: str | None = None

    @property
    def is_independent(self) -> bool:
        return not self.tenant_id


__all__ = ["Principal"]
