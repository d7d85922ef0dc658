"""Pydantic schemas for tags."""

from uuid import UUID

from forumx.core.schemas import CamelModel

from .models import Tag


class AddTagsRequest(CamelModel):
    tags: list[str] | None = None


class TagResponse(CamelModel):
    id: UUID
    name: str

    @classmethod
    def from_tag(cls, tag: Tag) -> "TagResponse":
        return cls(id=tag.tag_id, name=tag.name)


class TagCountResponse(CamelModel):
    name: str
    count: int
