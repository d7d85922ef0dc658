"""Post API routes.

Static paths (/posts/popular, /posts/page/..., /posts/by-tag/...,
/posts/details/...) are registered before /posts/{post_id}.
"""

from uuid import UUID

from fastapi import APIRouter, Query, status

from forumx.auth.dependencies import CallerAccount, CurrentUser, ensure_caller_email
from forumx.comments.schemas import CommentResponse
from forumx.core.schemas import MessageResponse

from .dependencies import PostServiceDep
from .schemas import (
    CreatePostRequest,
    PostCreatedResponse,
    PostDetailsResponse,
    PostPageResponse,
    PostResponse,
    PostStatsResponse,
)


router = APIRouter(tags=["posts"])


@router.post(
    "/posts",
    response_model=PostCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
)
async def create_post(
    body: CreatePostRequest,
    identity: CurrentUser,
    service: PostServiceDep,
) -> PostCreatedResponse:
    """Create a post authored by the caller (free tier limited)."""
    ensure_caller_email(identity, body.author_email)
    post = await service.create(
        author_email=identity.email,
        title=body.title,
        body=body.body,
        tags=body.tags,
        author_name=body.author_name or identity.name,
        author_photo=body.author_photo or identity.picture,
    )
    return PostCreatedResponse(message="Post created successfully", post_id=post.post_id)


@router.get("/posts", response_model=list[PostResponse], summary="List posts")
async def list_posts(service: PostServiceDep) -> list[PostResponse]:
    return [PostResponse.from_post(post) for post in await service.list_all()]


@router.get(
    "/posts/popular",
    response_model=list[PostStatsResponse],
    summary="Posts ranked by vote difference",
)
async def popular_posts(service: PostServiceDep) -> list[PostStatsResponse]:
    return [PostStatsResponse.from_stats(stats) for stats in await service.popular()]


@router.get("/posts/page/{page}", response_model=PostPageResponse, summary="Page of posts")
async def posts_page(
    page: int,
    service: PostServiceDep,
    limit: int | None = Query(default=None, ge=1, le=100),
) -> PostPageResponse:
    posts, total = await service.page(page, limit)
    return PostPageResponse(
        posts=[PostResponse.from_post(post) for post in posts], total=total
    )


@router.get(
    "/posts/by-tag/{tag}",
    response_model=list[PostResponse],
    summary="Posts whose tags match",
)
async def posts_by_tag(tag: str, service: PostServiceDep) -> list[PostResponse]:
    return [PostResponse.from_post(post) for post in await service.by_tag(tag)]


@router.get(
    "/posts/details/{post_id}",
    response_model=PostDetailsResponse,
    summary="Post with its comments",
)
async def post_details(post_id: UUID, service: PostServiceDep) -> PostDetailsResponse:
    post, comments = await service.details(post_id)
    return PostDetailsResponse(
        **PostResponse.post_fields(post),
        comments=[CommentResponse.from_comment(c) for c in comments],
    )


@router.get("/posts/{post_id}", response_model=PostResponse, summary="Get a post")
async def get_post(post_id: UUID, service: PostServiceDep) -> PostResponse:
    return PostResponse.from_post(await service.get(post_id))


@router.delete("/posts/{post_id}", response_model=MessageResponse, summary="Delete a post")
async def delete_post(
    post_id: UUID,
    identity: CurrentUser,
    account: CallerAccount,
    service: PostServiceDep,
) -> MessageResponse:
    await service.delete(post_id, caller=account, caller_email=identity.email)
    return MessageResponse(message="Post deleted successfully")


@router.get(
    "/user-posts/{email}",
    response_model=list[PostStatsResponse],
    summary="An author's posts with comment counts",
)
async def user_posts(email: str, service: PostServiceDep) -> list[PostStatsResponse]:
    return [PostStatsResponse.from_stats(stats) for stats in await service.by_author(email)]
