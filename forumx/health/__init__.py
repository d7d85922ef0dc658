"""Health check module."""

from forumx.health.router import router


__all__ = ["router"]
