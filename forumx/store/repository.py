# ruff: noqa: S608 - All CQL queries use keyspace from config, not user input
"""Content store facade over Cassandra.

One repository for every forum collection (users, posts, comments, reports,
notifications, tags, announcements, payments). Services never touch the
Cassandra session directly; they go through the typed methods here, which
return entity dataclasses and convert driver failures into ``StoreError``.

Vote-carrying documents (posts, comments) expose a save method that is either
a plain overwrite or a lightweight-transaction compare-and-set on ``version``.
"""

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID

import structlog
from cassandra import DriverException
from cassandra.cluster import NoHostAvailable

from forumx.announcements.models import Announcement
from forumx.comments.models import Comment
from forumx.core.errors import StoreError
from forumx.moderation.models import Report, ReportStatus
from forumx.notifications.models import Notification
from forumx.payments.models import Payment
from forumx.posts.models import Post
from forumx.tags.models import Tag
from forumx.users.models import Badge, User


if TYPE_CHECKING:
    from cassandra.cluster import Session

    from forumx.auth.permissions import UserRole


logger = structlog.get_logger(__name__)


class ContentStore:
    """Typed access to the forum keyspace."""

    def __init__(self, session: "Session", keyspace: str):
        """Initialize with Cassandra session."""
        self.session = session
        self.keyspace = keyspace
        self._prepare_statements()

    def _prepare_statements(self) -> None:
        """Prepare CQL statements for efficient queries."""
        ks = self.keyspace
        prepare = self.session.prepare

        # Users
        self._insert_user = prepare(f"""
            INSERT INTO {ks}.users
            (email, user_id, uid, name, photo_url, role, membership, badge,
             created_at, last_login)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            IF NOT EXISTS
        """)
        self._get_user_by_email = prepare(
            f"SELECT * FROM {ks}.users WHERE email = ?"
        )
        self._get_user_by_id = prepare(f"SELECT * FROM {ks}.users WHERE user_id = ?")
        self._get_user_by_uid = prepare(f"SELECT * FROM {ks}.users WHERE uid = ?")
        self._touch_last_login = prepare(
            f"UPDATE {ks}.users SET last_login = ? WHERE email = ?"
        )
        self._update_user_profile = prepare(
            f"UPDATE {ks}.users SET name = ?, photo_url = ? WHERE email = ?"
        )
        self._set_user_role = prepare(f"UPDATE {ks}.users SET role = ? WHERE email = ?")
        self._set_membership = prepare(
            f"UPDATE {ks}.users SET membership = ?, badge = ? WHERE email = ?"
        )
        self._list_users = prepare(f"SELECT * FROM {ks}.users")
        self._count_users = prepare(f"SELECT COUNT(*) FROM {ks}.users")
        self._count_users_by_badge = prepare(
            f"SELECT COUNT(*) FROM {ks}.users WHERE badge = ?"
        )

        # Posts
        self._insert_post = prepare(f"""
            INSERT INTO {ks}.posts
            (post_id, author_email, author_name, author_photo, title, body, tags,
             votes, up_vote, down_vote, version, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """)
        self._get_post = prepare(f"SELECT * FROM {ks}.posts WHERE post_id = ?")
        self._list_posts = prepare(f"SELECT * FROM {ks}.posts")
        self._list_posts_by_author = prepare(
            f"SELECT * FROM {ks}.posts WHERE author_email = ?"
        )
        self._count_posts = prepare(f"SELECT COUNT(*) FROM {ks}.posts")
        self._count_posts_by_author = prepare(
            f"SELECT COUNT(*) FROM {ks}.posts WHERE author_email = ?"
        )
        self._delete_post = prepare(f"DELETE FROM {ks}.posts WHERE post_id = ?")
        self._save_post_votes = prepare(f"""
            UPDATE {ks}.posts
            SET votes = ?, up_vote = ?, down_vote = ?, version = ?
            WHERE post_id = ?
        """)
        self._save_post_votes_if_version = prepare(f"""
            UPDATE {ks}.posts
            SET votes = ?, up_vote = ?, down_vote = ?, version = ?
            WHERE post_id = ?
            IF version = ?
        """)

        # Comments
        self._insert_comment = prepare(f"""
            INSERT INTO {ks}.comments
            (comment_id, post_id, parent_id, text, user_email, user_name, user_photo,
             upvoters, downvoters, upvotes, downvotes, reported, version, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """)
        self._get_comment = prepare(f"SELECT * FROM {ks}.comments WHERE comment_id = ?")
        self._list_comments = prepare(f"SELECT * FROM {ks}.comments WHERE post_id = ?")
        self._count_comments = prepare(f"SELECT COUNT(*) FROM {ks}.comments")
        self._count_comments_by_post = prepare(
            f"SELECT COUNT(*) FROM {ks}.comments WHERE post_id = ?"
        )
        self._update_comment_text = prepare(
            f"UPDATE {ks}.comments SET text = ? WHERE comment_id = ?"
        )
        self._mark_comment_reported = prepare(
            f"UPDATE {ks}.comments SET reported = true WHERE comment_id = ?"
        )
        self._delete_comment = prepare(
            f"DELETE FROM {ks}.comments WHERE comment_id = ?"
        )
        self._save_comment_votes = prepare(f"""
            UPDATE {ks}.comments
            SET upvoters = ?, downvoters = ?, upvotes = ?, downvotes = ?, version = ?
            WHERE comment_id = ?
        """)
        self._save_comment_votes_if_version = prepare(f"""
            UPDATE {ks}.comments
            SET upvoters = ?, downvoters = ?, upvotes = ?, downvotes = ?, version = ?
            WHERE comment_id = ?
            IF version = ?
        """)

        # Reports
        self._insert_report = prepare(f"""
            INSERT INTO {ks}.reports
            (report_id, comment_id, reported_by, reason, status, date, reviewed_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            IF NOT EXISTS
        """)
        self._get_report = prepare(f"SELECT * FROM {ks}.reports WHERE report_id = ?")
        self._list_reports = prepare(f"SELECT * FROM {ks}.reports")
        self._set_report_status = prepare(
            f"UPDATE {ks}.reports SET status = ?, reviewed_at = ? WHERE report_id = ?"
        )

        # Notifications
        self._insert_notification = prepare(f"""
            INSERT INTO {ks}.notifications
            (notification_id, user_email, message, date, read)
            VALUES (?, ?, ?, ?, ?)
            IF NOT EXISTS
        """)
        self._get_notification = prepare(
            f"SELECT * FROM {ks}.notifications WHERE notification_id = ?"
        )
        self._list_notifications = prepare(
            f"SELECT * FROM {ks}.notifications WHERE user_email = ?"
        )
        self._mark_notification_read = prepare(
            f"UPDATE {ks}.notifications SET read = true WHERE notification_id = ?"
        )
        self._delete_notification = prepare(
            f"DELETE FROM {ks}.notifications WHERE notification_id = ?"
        )

        # Tags
        self._insert_tag = prepare(
            f"INSERT INTO {ks}.tags (tag_id, name) VALUES (?, ?)"
        )
        self._get_tag = prepare(f"SELECT * FROM {ks}.tags WHERE tag_id = ?")
        self._get_tag_by_name = prepare(f"SELECT * FROM {ks}.tags WHERE name = ?")
        self._list_tags = prepare(f"SELECT * FROM {ks}.tags")
        self._delete_tag = prepare(f"DELETE FROM {ks}.tags WHERE tag_id = ?")

        # Announcements
        self._insert_announcement = prepare(f"""
            INSERT INTO {ks}.announcements
            (announcement_id, author_email, author_name, author_photo, title,
             description, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """)
        self._get_announcement = prepare(
            f"SELECT * FROM {ks}.announcements WHERE announcement_id = ?"
        )
        self._list_announcements = prepare(f"SELECT * FROM {ks}.announcements")
        self._count_announcements = prepare(f"SELECT COUNT(*) FROM {ks}.announcements")
        self._update_announcement = prepare(f"""
            UPDATE {ks}.announcements
            SET title = ?, description = ?, updated_at = ?
            WHERE announcement_id = ?
        """)
        self._delete_announcement = prepare(
            f"DELETE FROM {ks}.announcements WHERE announcement_id = ?"
        )

        # Payments
        self._insert_payment = prepare(f"""
            INSERT INTO {ks}.payments
            (payment_id, user_id, email, amount, currency, membership_type,
             transaction_id, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """)

    # ==========================================================================
    # Execution helpers
    # ==========================================================================

    async def _execute(self, statement: Any, params: Sequence[Any] | None = None):
        """Run a statement, surfacing driver failures as StoreError."""
        try:
            return await self.session.aexecute(statement, params)
        except (DriverException, NoHostAvailable) as e:
            logger.error(
                "store_operation_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise StoreError(str(e)) from e

    async def _one(self, statement: Any, params: Sequence[Any]) -> Any:
        result = await self._execute(statement, params)
        return result.one()

    async def _count(self, statement: Any, params: Sequence[Any] | None = None) -> int:
        result = await self._execute(statement, params)
        row = result.one()
        return row.count if row else 0

    # ==========================================================================
    # Users
    # ==========================================================================

    async def insert_user(self, user: User) -> bool:
        """Insert a user unless the email is taken. Returns whether it applied."""
        result = await self._execute(
            self._insert_user,
            [
                user.email,
                user.user_id,
                user.uid,
                user.name,
                user.photo_url,
                user.role.value,
                user.membership,
                user.badge.value,
                user.created_at,
                user.last_login,
            ],
        )
        return result.was_applied

    async def get_user_by_email(self, email: str) -> User | None:
        row = await self._one(self._get_user_by_email, [email])
        return User.from_row(row) if row else None

    async def get_user(self, user_id: UUID) -> User | None:
        row = await self._one(self._get_user_by_id, [user_id])
        return User.from_row(row) if row else None

    async def get_user_by_uid(self, uid: str) -> User | None:
        row = await self._one(self._get_user_by_uid, [uid])
        return User.from_row(row) if row else None

    async def touch_last_login(self, email: str, when: datetime | None = None) -> None:
        await self._execute(self._touch_last_login, [when or datetime.now(UTC), email])

    async def update_user_profile(
        self, email: str, name: str | None, photo_url: str | None
    ) -> None:
        await self._execute(self._update_user_profile, [name, photo_url, email])

    async def set_user_role(self, email: str, role: "UserRole") -> None:
        await self._execute(self._set_user_role, [role.value, email])

    async def set_membership(self, email: str, membership: bool, badge: Badge) -> None:
        await self._execute(self._set_membership, [membership, badge.value, email])

    async def list_users(self) -> list[User]:
        rows = await self._execute(self._list_users)
        return [User.from_row(row) for row in rows]

    async def count_users(self, badge: Badge | None = None) -> int:
        if badge is None:
            return await self._count(self._count_users)
        return await self._count(self._count_users_by_badge, [badge.value])

    # ==========================================================================
    # Posts
    # ==========================================================================

    async def insert_post(self, post: Post) -> None:
        await self._execute(
            self._insert_post,
            [
                post.post_id,
                post.author_email,
                post.author_name,
                post.author_photo,
                post.title,
                post.body,
                post.tags,
                {email: vote.value for email, vote in post.votes.items()},
                post.up_vote,
                post.down_vote,
                post.version,
                post.created_at,
            ],
        )

    async def get_post(self, post_id: UUID) -> Post | None:
        row = await self._one(self._get_post, [post_id])
        return Post.from_row(row) if row else None

    async def list_posts(self) -> list[Post]:
        rows = await self._execute(self._list_posts)
        return [Post.from_row(row) for row in rows]

    async def list_posts_by_author(self, author_email: str) -> list[Post]:
        rows = await self._execute(self._list_posts_by_author, [author_email])
        return [Post.from_row(row) for row in rows]

    async def count_posts(self) -> int:
        return await self._count(self._count_posts)

    async def count_posts_by_author(self, author_email: str) -> int:
        return await self._count(self._count_posts_by_author, [author_email])

    async def delete_post(self, post_id: UUID) -> None:
        await self._execute(self._delete_post, [post_id])

    async def save_post_votes(self, post: Post, expected_version: int | None) -> bool:
        """Write a post's vote map and counters.

        With ``expected_version`` the write is a compare-and-set that only
        applies if the stored version still matches; otherwise it is a plain
        overwrite and always applies.
        """
        params = [
            {email: vote.value for email, vote in post.votes.items()},
            post.up_vote,
            post.down_vote,
            post.version,
            post.post_id,
        ]
        if expected_version is None:
            await self._execute(self._save_post_votes, params)
            return True

        result = await self._execute(
            self._save_post_votes_if_version, [*params, expected_version]
        )
        return result.was_applied

    # ==========================================================================
    # Comments
    # ==========================================================================

    async def insert_comment(self, comment: Comment) -> None:
        await self._execute(
            self._insert_comment,
            [
                comment.comment_id,
                comment.post_id,
                comment.parent_id,
                comment.text,
                comment.user_email,
                comment.user_name,
                comment.user_photo,
                comment.upvoters,
                comment.downvoters,
                comment.upvotes,
                comment.downvotes,
                comment.reported,
                comment.version,
                comment.created_at,
            ],
        )

    async def get_comment(self, comment_id: UUID) -> Comment | None:
        row = await self._one(self._get_comment, [comment_id])
        return Comment.from_row(row) if row else None

    async def list_comments(self, post_id: UUID) -> list[Comment]:
        rows = await self._execute(self._list_comments, [post_id])
        return [Comment.from_row(row) for row in rows]

    async def count_comments(self, post_id: UUID | None = None) -> int:
        if post_id is None:
            return await self._count(self._count_comments)
        return await self._count(self._count_comments_by_post, [post_id])

    async def update_comment_text(self, comment_id: UUID, text: str) -> None:
        await self._execute(self._update_comment_text, [text, comment_id])

    async def mark_comment_reported(self, comment_id: UUID) -> None:
        await self._execute(self._mark_comment_reported, [comment_id])

    async def delete_comment(self, comment_id: UUID) -> None:
        """Delete a comment. Deleting a missing comment is a no-op."""
        await self._execute(self._delete_comment, [comment_id])

    async def save_comment_votes(
        self, comment: Comment, expected_version: int | None
    ) -> bool:
        """Write a comment's voter sets and counters (see ``save_post_votes``)."""
        params = [
            comment.upvoters,
            comment.downvoters,
            comment.upvotes,
            comment.downvotes,
            comment.version,
            comment.comment_id,
        ]
        if expected_version is None:
            await self._execute(self._save_comment_votes, params)
            return True

        result = await self._execute(
            self._save_comment_votes_if_version, [*params, expected_version]
        )
        return result.was_applied

    # ==========================================================================
    # Reports
    # ==========================================================================

    async def insert_report(self, report: Report) -> bool:
        """Insert a report unless its id exists. Returns whether it applied."""
        result = await self._execute(
            self._insert_report,
            [
                report.report_id,
                report.comment_id,
                report.reported_by,
                report.reason,
                report.status.value,
                report.date,
                report.reviewed_at,
            ],
        )
        return result.was_applied

    async def get_report(self, report_id: UUID) -> Report | None:
        row = await self._one(self._get_report, [report_id])
        return Report.from_row(row) if row else None

    async def list_reports(self) -> list[Report]:
        rows = await self._execute(self._list_reports)
        return [Report.from_row(row) for row in rows]

    async def set_report_status(
        self, report_id: UUID, status: ReportStatus, reviewed_at: datetime
    ) -> None:
        await self._execute(
            self._set_report_status, [status.value, reviewed_at, report_id]
        )

    # ==========================================================================
    # Notifications
    # ==========================================================================

    async def insert_notification(self, notification: Notification) -> bool:
        """Insert a notification unless its id exists. Returns whether it applied."""
        result = await self._execute(
            self._insert_notification,
            [
                notification.notification_id,
                notification.user_email,
                notification.message,
                notification.date,
                notification.read,
            ],
        )
        return result.was_applied

    async def get_notification(self, notification_id: UUID) -> Notification | None:
        row = await self._one(self._get_notification, [notification_id])
        return Notification.from_row(row) if row else None

    async def list_notifications(self, user_email: str) -> list[Notification]:
        rows = await self._execute(self._list_notifications, [user_email])
        return [Notification.from_row(row) for row in rows]

    async def mark_notification_read(self, notification_id: UUID) -> None:
        await self._execute(self._mark_notification_read, [notification_id])

    async def mark_all_notifications_read(self, user_email: str) -> int:
        """Mark every notification of a user read. Returns how many were unread."""
        unread = [n for n in await self.list_notifications(user_email) if not n.read]
        for notification in unread:
            await self.mark_notification_read(notification.notification_id)
        return len(unread)

    async def clear_notifications(self, user_email: str) -> int:
        """Delete every notification of a user. Returns how many were deleted."""
        notifications = await self.list_notifications(user_email)
        for notification in notifications:
            await self._execute(
                self._delete_notification, [notification.notification_id]
            )
        return len(notifications)

    # ==========================================================================
    # Tags
    # ==========================================================================

    async def insert_tag(self, tag: Tag) -> None:
        await self._execute(self._insert_tag, [tag.tag_id, tag.name])

    async def get_tag(self, tag_id: UUID) -> Tag | None:
        row = await self._one(self._get_tag, [tag_id])
        return Tag.from_row(row) if row else None

    async def get_tag_by_name(self, name: str) -> Tag | None:
        row = await self._one(self._get_tag_by_name, [name])
        return Tag.from_row(row) if row else None

    async def list_tags(self) -> list[Tag]:
        rows = await self._execute(self._list_tags)
        return [Tag.from_row(row) for row in rows]

    async def delete_tag(self, tag_id: UUID) -> None:
        await self._execute(self._delete_tag, [tag_id])

    # ==========================================================================
    # Announcements
    # ==========================================================================

    async def insert_announcement(self, announcement: Announcement) -> None:
        await self._execute(
            self._insert_announcement,
            [
                announcement.announcement_id,
                announcement.author_email,
                announcement.author_name,
                announcement.author_photo,
                announcement.title,
                announcement.description,
                announcement.created_at,
                announcement.updated_at,
            ],
        )

    async def get_announcement(self, announcement_id: UUID) -> Announcement | None:
        row = await self._one(self._get_announcement, [announcement_id])
        return Announcement.from_row(row) if row else None

    async def list_announcements(self) -> list[Announcement]:
        rows = await self._execute(self._list_announcements)
        return [Announcement.from_row(row) for row in rows]

    async def count_announcements(self) -> int:
        return await self._count(self._count_announcements)

    async def update_announcement(
        self,
        announcement_id: UUID,
        title: str,
        description: str,
        updated_at: datetime,
    ) -> None:
        await self._execute(
            self._update_announcement,
            [title, description, updated_at, announcement_id],
        )

    async def delete_announcement(self, announcement_id: UUID) -> None:
        await self._execute(self._delete_announcement, [announcement_id])

    # ==========================================================================
    # Payments
    # ==========================================================================

    async def insert_payment(self, payment: Payment) -> None:
        await self._execute(
            self._insert_payment,
            [
                payment.payment_id,
                payment.user_id,
                payment.email,
                payment.amount,
                payment.currency,
                payment.membership_type,
                payment.transaction_id,
                payment.created_at,
            ],
        )
