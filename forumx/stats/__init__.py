"""Dashboard and badge statistics."""

from .service import AdminStats, PublicCounts, StatsService


__all__ = ["AdminStats", "PublicCounts", "StatsService"]
