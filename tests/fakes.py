"""In-memory stand-in for ``ContentStore`` used by service and API tests.

Every method mirrors the Cassandra-backed store: same name, same arguments,
same return value. Documents are deep-copied in and out so services cannot
mutate stored state by accident. ``fail_next`` makes the next call to a
method raise, to exercise partial failures.
"""

import copy
from datetime import UTC, datetime
from uuid import UUID

from forumx.announcements.models import Announcement
from forumx.auth.permissions import UserRole
from forumx.comments.models import Comment
from forumx.core.errors import StoreError
from forumx.moderation.models import Report, ReportStatus
from forumx.notifications.models import Notification
from forumx.payments.models import Payment
from forumx.posts.models import Post
from forumx.tags.models import Tag
from forumx.users.models import Badge, User


class InMemoryContentStore:
    """Dictionary-backed content store."""

    def __init__(self):
        self.users: dict[str, User] = {}
        self.posts: dict[UUID, Post] = {}
        self.comments: dict[UUID, Comment] = {}
        self.reports: dict[UUID, Report] = {}
        self.notifications: dict[UUID, Notification] = {}
        self.tags: dict[UUID, Tag] = {}
        self.announcements: dict[UUID, Announcement] = {}
        self.payments: dict[UUID, Payment] = {}
        self._failures: dict[str, Exception] = {}
        self.calls: list[str] = []

    def fail_next(self, method: str, error: Exception | None = None) -> None:
        """Make the next call to ``method`` raise ``error`` (a StoreError by default)."""
        self._failures[method] = error or StoreError(f"{method} failed")

    def _enter(self, method: str) -> None:
        self.calls.append(method)
        error = self._failures.pop(method, None)
        if error is not None:
            raise error

    # Users

    async def insert_user(self, user: User) -> bool:
        self._enter("insert_user")
        if user.email in self.users:
            return False
        self.users[user.email] = copy.deepcopy(user)
        return True

    async def get_user_by_email(self, email: str) -> User | None:
        self._enter("get_user_by_email")
        return copy.deepcopy(self.users.get(email))

    async def get_user(self, user_id: UUID) -> User | None:
        self._enter("get_user")
        for user in self.users.values():
            if user.user_id == user_id:
                return copy.deepcopy(user)
        return None

    async def get_user_by_uid(self, uid: str) -> User | None:
        self._enter("get_user_by_uid")
        for user in self.users.values():
            if user.uid == uid:
                return copy.deepcopy(user)
        return None

    async def touch_last_login(self, email: str, when: datetime | None = None) -> None:
        self._enter("touch_last_login")
        if email in self.users:
            self.users[email].last_login = when or datetime.now(UTC)

    async def update_user_profile(
        self, email: str, name: str | None, photo_url: str | None
    ) -> None:
        self._enter("update_user_profile")
        if email in self.users:
            self.users[email].name = name
            self.users[email].photo_url = photo_url

    async def set_user_role(self, email: str, role: UserRole) -> None:
        self._enter("set_user_role")
        if email in self.users:
            self.users[email].role = role

    async def set_membership(self, email: str, membership: bool, badge: Badge) -> None:
        self._enter("set_membership")
        if email in self.users:
            self.users[email].membership = membership
            self.users[email].badge = badge

    async def list_users(self) -> list[User]:
        self._enter("list_users")
        return copy.deepcopy(list(self.users.values()))

    async def count_users(self, badge: Badge | None = None) -> int:
        self._enter("count_users")
        return sum(1 for u in self.users.values() if badge is None or u.badge == badge)

    # Posts

    async def insert_post(self, post: Post) -> None:
        self._enter("insert_post")
        self.posts[post.post_id] = copy.deepcopy(post)

    async def get_post(self, post_id: UUID) -> Post | None:
        self._enter("get_post")
        return copy.deepcopy(self.posts.get(post_id))

    async def list_posts(self) -> list[Post]:
        self._enter("list_posts")
        return copy.deepcopy(list(self.posts.values()))

    async def list_posts_by_author(self, author_email: str) -> list[Post]:
        self._enter("list_posts_by_author")
        return copy.deepcopy(
            [p for p in self.posts.values() if p.author_email == author_email]
        )

    async def count_posts(self) -> int:
        self._enter("count_posts")
        return len(self.posts)

    async def count_posts_by_author(self, author_email: str) -> int:
        self._enter("count_posts_by_author")
        return sum(1 for p in self.posts.values() if p.author_email == author_email)

    async def delete_post(self, post_id: UUID) -> None:
        self._enter("delete_post")
        self.posts.pop(post_id, None)

    async def save_post_votes(self, post: Post, expected_version: int | None) -> bool:
        self._enter("save_post_votes")
        stored = self.posts.get(post.post_id)
        if expected_version is not None and (
            stored is None or stored.version != expected_version
        ):
            return False
        if stored is None:
            self.posts[post.post_id] = copy.deepcopy(post)
            return True
        # Only the vote columns are written, like the UPDATE statement
        stored.votes = dict(post.votes)
        stored.up_vote = post.up_vote
        stored.down_vote = post.down_vote
        stored.version = post.version
        return True

    # Comments

    async def insert_comment(self, comment: Comment) -> None:
        self._enter("insert_comment")
        self.comments[comment.comment_id] = copy.deepcopy(comment)

    async def get_comment(self, comment_id: UUID) -> Comment | None:
        self._enter("get_comment")
        return copy.deepcopy(self.comments.get(comment_id))

    async def list_comments(self, post_id: UUID) -> list[Comment]:
        self._enter("list_comments")
        return copy.deepcopy([c for c in self.comments.values() if c.post_id == post_id])

    async def count_comments(self, post_id: UUID | None = None) -> int:
        self._enter("count_comments")
        return sum(
            1 for c in self.comments.values() if post_id is None or c.post_id == post_id
        )

    async def update_comment_text(self, comment_id: UUID, text: str) -> None:
        self._enter("update_comment_text")
        if comment_id in self.comments:
            self.comments[comment_id].text = text

    async def mark_comment_reported(self, comment_id: UUID) -> None:
        self._enter("mark_comment_reported")
        if comment_id in self.comments:
            self.comments[comment_id].reported = True

    async def delete_comment(self, comment_id: UUID) -> None:
        self._enter("delete_comment")
        self.comments.pop(comment_id, None)

    async def save_comment_votes(
        self, comment: Comment, expected_version: int | None
    ) -> bool:
        self._enter("save_comment_votes")
        stored = self.comments.get(comment.comment_id)
        if expected_version is not None and (
            stored is None or stored.version != expected_version
        ):
            return False
        if stored is None:
            self.comments[comment.comment_id] = copy.deepcopy(comment)
            return True
        stored.upvoters = set(comment.upvoters)
        stored.downvoters = set(comment.downvoters)
        stored.version = comment.version
        return True

    # Reports

    async def insert_report(self, report: Report) -> bool:
        self._enter("insert_report")
        if report.report_id in self.reports:
            return False
        self.reports[report.report_id] = copy.deepcopy(report)
        return True

    async def get_report(self, report_id: UUID) -> Report | None:
        self._enter("get_report")
        return copy.deepcopy(self.reports.get(report_id))

    async def list_reports(self) -> list[Report]:
        self._enter("list_reports")
        return copy.deepcopy(list(self.reports.values()))

    async def set_report_status(
        self, report_id: UUID, status: ReportStatus, reviewed_at: datetime
    ) -> None:
        self._enter("set_report_status")
        if report_id in self.reports:
            self.reports[report_id].status = status
            self.reports[report_id].reviewed_at = reviewed_at

    # Notifications

    async def insert_notification(self, notification: Notification) -> bool:
        self._enter("insert_notification")
        if notification.notification_id in self.notifications:
            return False
        self.notifications[notification.notification_id] = copy.deepcopy(notification)
        return True

    async def get_notification(self, notification_id: UUID) -> Notification | None:
        self._enter("get_notification")
        return copy.deepcopy(self.notifications.get(notification_id))

    async def list_notifications(self, user_email: str) -> list[Notification]:
        self._enter("list_notifications")
        return copy.deepcopy(
            [n for n in self.notifications.values() if n.user_email == user_email]
        )

    async def mark_notification_read(self, notification_id: UUID) -> None:
        self._enter("mark_notification_read")
        if notification_id in self.notifications:
            self.notifications[notification_id].read = True

    async def mark_all_notifications_read(self, user_email: str) -> int:
        self._enter("mark_all_notifications_read")
        unread = [
            n
            for n in self.notifications.values()
            if n.user_email == user_email and not n.read
        ]
        for notification in unread:
            notification.read = True
        return len(unread)

    async def clear_notifications(self, user_email: str) -> int:
        self._enter("clear_notifications")
        ids = [i for i, n in self.notifications.items() if n.user_email == user_email]
        for notification_id in ids:
            del self.notifications[notification_id]
        return len(ids)

    # Tags

    async def insert_tag(self, tag: Tag) -> None:
        self._enter("insert_tag")
        self.tags[tag.tag_id] = copy.deepcopy(tag)

    async def get_tag(self, tag_id: UUID) -> Tag | None:
        self._enter("get_tag")
        return copy.deepcopy(self.tags.get(tag_id))

    async def get_tag_by_name(self, name: str) -> Tag | None:
        self._enter("get_tag_by_name")
        for tag in self.tags.values():
            if tag.name == name:
                return copy.deepcopy(tag)
        return None

    async def list_tags(self) -> list[Tag]:
        self._enter("list_tags")
        return copy.deepcopy(list(self.tags.values()))

    async def delete_tag(self, tag_id: UUID) -> None:
        self._enter("delete_tag")
        self.tags.pop(tag_id, None)

    # Announcements

    async def insert_announcement(self, announcement: Announcement) -> None:
        self._enter("insert_announcement")
        self.announcements[announcement.announcement_id] = copy.deepcopy(announcement)

    async def get_announcement(self, announcement_id: UUID) -> Announcement | None:
        self._enter("get_announcement")
        return copy.deepcopy(self.announcements.get(announcement_id))

    async def list_announcements(self) -> list[Announcement]:
        self._enter("list_announcements")
        return copy.deepcopy(list(self.announcements.values()))

    async def count_announcements(self) -> int:
        self._enter("count_announcements")
        return len(self.announcements)

    async def update_announcement(
        self,
        announcement_id: UUID,
        title: str,
        description: str,
        updated_at: datetime,
    ) -> None:
        self._enter("update_announcement")
        if announcement_id in self.announcements:
            announcement = self.announcements[announcement_id]
            announcement.title = title
            announcement.description = description
            announcement.updated_at = updated_at

    async def delete_announcement(self, announcement_id: UUID) -> None:
        self._enter("delete_announcement")
        self.announcements.pop(announcement_id, None)

    # Payments

    async def insert_payment(self, payment: Payment) -> None:
        self._enter("insert_payment")
        self.payments[payment.payment_id] = copy.deepcopy(payment)


class FakeRedis:
    """The handful of ``redis.asyncio.Redis`` commands the services use.

    Expiry times are recorded but never enforced.
    """

    def __init__(self):
        self.values: dict[str, int | str] = {}
        self.expiry: dict[str, int] = {}
        self.published: list[tuple[str, str]] = []

    async def set(self, key: str, value, nx: bool = False, ex: int | None = None):
        if nx and key in self.values:
            return None
        self.values[key] = value
        if ex is not None:
            self.expiry[key] = ex
        return True

    async def incr(self, key: str) -> int:
        self.values[key] = int(self.values.get(key, 0)) + 1
        return self.values[key]

    async def expire(self, key: str, seconds: int) -> bool:
        self.expiry[key] = seconds
        return key in self.values

    async def delete(self, *keys: str) -> int:
        removed = [k for k in keys if self.values.pop(k, None) is not None]
        return len(removed)

    async def publish(self, channel: str, message: str) -> int:
        self.published.append((channel, message))
        return 0
