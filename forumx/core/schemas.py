"""Shared Pydantic base schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema with camelCase JSON field names.

    Accepts both ``authorEmail`` and ``author_email`` on input; FastAPI
    serializes responses by alias, so clients always see camelCase.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Plain acknowledgement."""

    message: str
