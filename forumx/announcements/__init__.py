"""Announcements module."""

from .models import ANNOUNCEMENTS_TABLES_CQL, Announcement
from .service import AnnouncementService


__all__ = ["ANNOUNCEMENTS_TABLES_CQL", "Announcement", "AnnouncementService"]
