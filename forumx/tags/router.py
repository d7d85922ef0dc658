"""Tag API routes."""

from uuid import UUID

from fastapi import APIRouter, Query, status

from forumx.auth.dependencies import AdminUser
from forumx.core.schemas import MessageResponse

from .dependencies import TagServiceDep
from .schemas import AddTagsRequest, TagCountResponse, TagResponse
from .service import validate_tag_names


router = APIRouter(prefix="/tags", tags=["tags"])


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add tags (admin)",
)
async def add_tags(
    body: AddTagsRequest, _admin: AdminUser, service: TagServiceDep
) -> MessageResponse:
    await service.add_many(validate_tag_names(body.tags))
    return MessageResponse(message="Tags added successfully")


@router.get("", response_model=list[TagResponse], summary="List tags")
async def list_tags(service: TagServiceDep) -> list[TagResponse]:
    return [TagResponse.from_tag(tag) for tag in await service.list_all()]


@router.get("/search", response_model=list[TagResponse], summary="Search tags by name")
async def search_tags(
    service: TagServiceDep,
    q: str | None = Query(default=None, max_length=100),
) -> list[TagResponse]:
    return [TagResponse.from_tag(tag) for tag in await service.search(q)]


@router.get(
    "/with-counts",
    response_model=list[TagCountResponse],
    summary="Tags with the number of posts using them",
)
async def tags_with_counts(service: TagServiceDep) -> list[TagCountResponse]:
    counts = await service.usage_counts()
    return [TagCountResponse(name=name, count=count) for name, count in counts]


@router.delete("/{tag_id}", response_model=MessageResponse, summary="Delete a tag (admin)")
async def delete_tag(
    tag_id: UUID, _admin: AdminUser, service: TagServiceDep
) -> MessageResponse:
    await service.delete(tag_id)
    return MessageResponse(message="Tag deleted successfully")
