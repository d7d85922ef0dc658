"""Forum-X API - Main Application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

import stripe
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from forumx.announcements.router import router as announcements_router
from forumx.announcements.service import AnnouncementService
from forumx.auth.verifier import TokenVerifier, build_token_verifier
from forumx.comments.router import router as comments_router
from forumx.comments.service import CommentService
from forumx.config import Settings, get_settings
from forumx.core.context import get_request_id
from forumx.core.database import init_async_cassandra, shutdown_async_cassandra
from forumx.core.errors import ForumError, status_for
from forumx.core.logging import configure_structlog, get_logger
from forumx.core.middleware import RequestContextMiddleware
from forumx.core.redis import init_redis, shutdown_redis
from forumx.health import router as health_router
from forumx.moderation.router import admin_router as reports_admin_router
from forumx.moderation.router import router as moderation_router
from forumx.moderation.service import ModerationPipeline
from forumx.notifications.router import router as notifications_router
from forumx.notifications.service import NotificationService
from forumx.payments.router import router as payments_router
from forumx.payments.service import PaymentService, build_stripe_client
from forumx.posts.router import router as posts_router
from forumx.posts.service import PostService
from forumx.stats.router import router as stats_router
from forumx.stats.service import StatsService
from forumx.store import ContentStore
from forumx.tags.router import router as tags_router
from forumx.tags.service import TagService
from forumx.users.router import admin_router as users_admin_router
from forumx.users.router import router as users_router
from forumx.users.service import UserService
from forumx.votes.router import router as votes_router
from forumx.votes.service import VoteLedger


if TYPE_CHECKING:
    from redis.asyncio import Redis


# Configure logging early (before creating logger)
settings = get_settings()
configure_structlog(settings, log_dir=Path(settings.log_dir))

logger = get_logger(__name__)


def build_services(
    app: FastAPI,
    store: ContentStore,
    settings: Settings,
    verifier: TokenVerifier,
    stripe_client: stripe.StripeClient | None = None,
    redis: "Redis | None" = None,
) -> None:
    """Wire the store and every service onto ``app.state``.

    Routers read them back through ``forumx.core.dependencies.service_from_state``.
    """
    notification_service = NotificationService(store, redis=redis)

    app.state.store = store
    app.state.token_verifier = verifier
    app.state.user_service = UserService(store)
    app.state.post_service = PostService(
        store,
        free_post_limit=settings.free_post_limit,
        page_size=settings.posts_page_size,
    )
    app.state.comment_service = CommentService(store)
    app.state.notification_service = notification_service
    app.state.vote_ledger = VoteLedger(
        store,
        conditional_updates=settings.vote_conditional_updates,
        max_attempts=settings.vote_max_attempts,
    )
    app.state.moderation_pipeline = ModerationPipeline(
        store,
        notification_service,
        redis=redis,
        reports_per_hour=settings.reports_per_hour,
    )
    app.state.tag_service = TagService(store)
    app.state.announcement_service = AnnouncementService(store)
    app.state.payment_service = PaymentService(store, settings, stripe_client)
    app.state.stats_service = StatsService(store)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()
    logger.info(
        "starting_application",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    # Initialize Redis (non-critical - app works without it)
    redis_client = None
    try:
        redis_client = await init_redis(settings)
        logger.info("redis_initialized")
    except Exception as e:
        logger.warning(
            "redis_init_skipped",
            error=str(e),
            message="Running without Redis - report rate limit and pub/sub disabled",
        )

    stripe_http = stripe.HTTPXClient(timeout=settings.stripe_timeout_seconds)

    # Initialize Cassandra (async)
    try:
        session = await init_async_cassandra(settings)
        logger.info("cassandra_initialized")

        build_services(
            app,
            store=ContentStore(session, settings.cassandra_keyspace),
            settings=settings,
            verifier=build_token_verifier(settings),
            stripe_client=build_stripe_client(settings, stripe_http),
            redis=redis_client,
        )
        logger.info(
            "services_initialized",
            auth_provider=settings.auth_provider,
            redis_enabled=redis_client is not None,
            payments_enabled=settings.stripe_configured,
        )
    except Exception as e:
        logger.warning(
            "database_init_skipped",
            error=str(e),
            message="Running without database connection",
        )

    yield

    # Shutdown
    logger.info("shutting_down_application")
    await stripe_http.close_async()
    await shutdown_redis()
    await shutdown_async_cassandra()


def _where(request: Request) -> dict[str, str]:
    return {"path": request.url.path, "method": request.method}


def _error_response(
    request: Request,
    status_code: int,
    message: str,
    code: str | None = None,
    details: list[dict[str, Any]] | None = None,
) -> ORJSONResponse:
    """Build the JSON error envelope shared by every exception handler."""
    content: dict[str, Any] = {"error": True, "message": message}
    if code is not None:
        content["code"] = code
    content["status_code"] = status_code
    content["request_id"] = getattr(request.state, "request_id", None) or get_request_id()
    if details is not None:
        content["details"] = details
    return ORJSONResponse(status_code=status_code, content=content)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    # debug stays False so Starlette never renders stack traces; the handlers
    # below log details and return safe messages.
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Forum-X - discussion forum API",
        debug=False,
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
    )

    # Request context middleware (must be added first - outermost)
    app.add_middleware(
        RequestContextMiddleware,
        log_requests=settings.log_requests,
        exclude_paths=settings.log_exclude_paths,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        max_age=settings.cors_max_age,
    )

    @app.exception_handler(ForumError)
    async def forum_error_handler(request: Request, exc: ForumError) -> ORJSONResponse:
        """Render domain errors with their mapped status code."""
        status_code = status_for(exc)
        log = logger.error if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logger.info
        log("forum_error", code=exc.code, message=exc.message, **_where(request))
        return _error_response(request, status_code, exc.message, code=exc.code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> ORJSONResponse:
        logger.warning(
            "http_exception",
            status_code=exc.status_code,
            detail=str(exc.detail),
            **_where(request),
        )
        message = (
            str(exc.detail)
            if exc.status_code < status.HTTP_500_INTERNAL_SERVER_ERROR
            else "Internal server error"
        )
        return _error_response(request, exc.status_code, message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> ORJSONResponse:
        """Malformed requests are invalid arguments (400)."""
        errors = exc.errors()
        logger.warning("validation_error", errors=errors, **_where(request))
        return _error_response(
            request,
            status.HTTP_400_BAD_REQUEST,
            "Validation error",
            code="invalid_argument",
            details=[
                {
                    "field": ".".join(str(loc) for loc in err.get("loc", [])),
                    "message": err.get("msg", "Invalid value"),
                }
                for err in errors
            ],
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> ORJSONResponse:
        """Catch-all handler; details are logged, never returned."""
        logger.exception(
            "unhandled_exception",
            error_type=type(exc).__name__,
            error_message=str(exc),
            **_where(request),
        )
        return _error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred. Please try again later.",
        )

    # Include routers (static paths before parameterised ones)
    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(users_admin_router)
    app.include_router(votes_router)
    app.include_router(moderation_router)
    app.include_router(reports_admin_router)
    app.include_router(posts_router)
    app.include_router(comments_router)
    app.include_router(notifications_router)
    app.include_router(tags_router)
    app.include_router(announcements_router)
    app.include_router(payments_router)
    app.include_router(stats_router)

    @app.get("/", include_in_schema=False)
    async def root(request: Request) -> dict[str, str]:
        """Root endpoint."""
        return {
            "message": "Forum-X API",
            "version": settings.app_version,
            "docs": f"{request.url}docs",
        }

    return app


app = create_app()
