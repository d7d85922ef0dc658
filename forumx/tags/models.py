"""Database models for post tags."""

from dataclasses import dataclass
from typing import Any
from uuid import UUID, uuid4


TAGS_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.tags (
    tag_id UUID PRIMARY KEY,
    name TEXT
)
"""

TAGS_NAME_INDEX_CQL = """
CREATE INDEX IF NOT EXISTS tags_name_idx
ON {keyspace}.tags (name)
"""

TAGS_TABLES_CQL = [
    TAGS_TABLE_CQL,
    TAGS_NAME_INDEX_CQL,
]


@dataclass
class Tag:
    """A tag name; unique by exact name."""

    tag_id: UUID
    name: str

    @classmethod
    def from_row(cls, row: Any) -> "Tag":
        return cls(tag_id=row.tag_id, name=row.name)


def create_tag(name: str) -> Tag:
    return Tag(tag_id=uuid4(), name=name)
