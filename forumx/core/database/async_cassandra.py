"""Cassandra session lifecycle and schema bootstrap.

Uses cassandra-asyncio-driver, whose ``Cluster`` hands out sessions with an
awaitable ``aexecute()`` on top of the regular cassandra-driver API.
"""

import structlog
from cassandra.auth import PlainTextAuthProvider
from cassandra.policies import DCAwareRoundRobinPolicy, TokenAwarePolicy
from cassandra_asyncio.cluster import Cluster

from forumx.announcements.models import ANNOUNCEMENTS_TABLES_CQL
from forumx.comments.models import COMMENTS_TABLES_CQL
from forumx.config.settings import Settings
from forumx.moderation.models import MODERATION_TABLES_CQL
from forumx.notifications.models import NOTIFICATIONS_TABLES_CQL
from forumx.payments.models import PAYMENTS_TABLES_CQL
from forumx.posts.models import POSTS_TABLES_CQL
from forumx.tags.models import TAGS_TABLES_CQL
from forumx.users.models import USERS_TABLES_CQL


logger = structlog.get_logger(__name__)


# Table groups created at startup, in dependency-free order
SCHEMA: dict[str, list[str]] = {
    "users": USERS_TABLES_CQL,
    "posts": POSTS_TABLES_CQL,
    "comments": COMMENTS_TABLES_CQL,
    "reports": MODERATION_TABLES_CQL,
    "notifications": NOTIFICATIONS_TABLES_CQL,
    "tags": TAGS_TABLES_CQL,
    "announcements": ANNOUNCEMENTS_TABLES_CQL,
    "payments": PAYMENTS_TABLES_CQL,
}


class AsyncCassandraConnection:
    """Process-wide cluster and session holder.

    Connecting is blocking; queries go through ``session.aexecute()``.
    """

    _cluster: Cluster | None = None
    _session = None

    @classmethod
    def connect(cls, settings: Settings):
        """Return the shared session, opening the cluster on first use.

        Raises:
            ConnectionError: the cluster could not be reached.
        """
        if cls._session is not None:
            return cls._session

        credentials = None
        if settings.cassandra_username and settings.cassandra_password:
            credentials = PlainTextAuthProvider(
                username=settings.cassandra_username,
                password=settings.cassandra_password,
            )
        cls._cluster = Cluster(
            contact_points=settings.cassandra_hosts,
            port=settings.cassandra_port,
            auth_provider=credentials,
            protocol_version=settings.cassandra_protocol_version,
            load_balancing_policy=TokenAwarePolicy(DCAwareRoundRobinPolicy()),
            connect_timeout=settings.cassandra_connect_timeout,
        )

        try:
            session = cls._cluster.connect()
        except Exception as e:
            logger.error(
                "cassandra_connect_failed", hosts=settings.cassandra_hosts, error=str(e)
            )
            cls._cluster.shutdown()
            cls._cluster = None
            raise ConnectionError(f"Failed to connect to Cassandra: {e}") from e

        session.default_timeout = settings.cassandra_request_timeout
        cls._session = session
        logger.info(
            "cassandra_connected",
            hosts=settings.cassandra_hosts,
            port=settings.cassandra_port,
            protocol_version=settings.cassandra_protocol_version,
        )
        return session

    @classmethod
    def disconnect(cls) -> None:
        session, cluster = cls._session, cls._cluster
        cls._session = cls._cluster = None
        if session is not None:
            session.shutdown()
        if cluster is not None:
            cluster.shutdown()
            logger.info("cassandra_disconnected")

    @classmethod
    def is_connected(cls) -> bool:
        return cls._session is not None and not cls._session.is_shutdown


def replication_options(production: bool) -> str:
    """CQL replication map: 3 replicas per DC in production, 1 otherwise."""
    if production:
        return "{'class': 'NetworkTopologyStrategy', 'datacenter1': 3}"
    return "{'class': 'SimpleStrategy', 'replication_factor': 1}"


async def create_schema(session, keyspace: str, production: bool) -> None:
    """Create the keyspace, switch to it, then create every table and index."""
    await session.aexecute(
        f"CREATE KEYSPACE IF NOT EXISTS {keyspace} "
        f"WITH replication = {replication_options(production)} "
        "AND durable_writes = true"
    )
    session.set_keyspace(keyspace)
    for group, statements in SCHEMA.items():
        for statement in statements:
            await session.aexecute(statement.format(keyspace=keyspace))
        logger.debug("cassandra_tables_ready", group=group)


async def init_async_cassandra(settings: Settings):
    """Connect and make sure the schema exists; returns the session."""
    session = AsyncCassandraConnection.connect(settings)
    await create_schema(
        session, settings.cassandra_keyspace, production=settings.is_production
    )
    logger.info("cassandra_schema_ready", keyspace=settings.cassandra_keyspace)
    return session


async def shutdown_async_cassandra() -> None:
    AsyncCassandraConnection.disconnect()
