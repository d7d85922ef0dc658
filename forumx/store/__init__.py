"""Content store facade."""

from forumx.store.repository import ContentStore


__all__ = ["ContentStore"]
