"""FastAPI dependencies for moderation."""

from typing import Annotated

from fastapi import Depends, Request

from forumx.core.dependencies import service_from_state

from .service import ModerationPipeline


def get_moderation_pipeline(request: Request) -> ModerationPipeline:
    """Get ModerationPipeline from app state."""
    return service_from_state(request, "moderation_pipeline")


ModerationDep = Annotated[ModerationPipeline, Depends(get_moderation_pipeline)]
