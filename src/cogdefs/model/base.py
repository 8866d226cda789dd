"""Common base for cog object definition records."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CogObjectDefinition(BaseModel):
    """Fields shared by every persisted cog object definition.

    Persisted records use camelCase keys for some fields, so models accept
    both the alias and the Python field name.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    description: str = ""
