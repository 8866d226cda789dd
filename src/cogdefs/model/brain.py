"""Brain: whole-project metadata record."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel


class BrainProperty(str, Enum):
    VERSION = "version"
    TITLE = "title"  # title of the full context


BRAIN_PROPERTY_DEFAULTS: Mapping[BrainProperty, object] = MappingProxyType({
    BrainProperty.VERSION: 0,
    BrainProperty.TITLE: "",
})


def brain_property_default(prop: BrainProperty | str) -> object | None:
    """Default for a brain property, or None if *prop* is not one."""
    try:
        return BRAIN_PROPERTY_DEFAULTS[BrainProperty(prop)]
    except ValueError:
        return None


class Brain(BaseModel):
    version: int = BRAIN_PROPERTY_DEFAULTS[BrainProperty.VERSION]
    title: str = BRAIN_PROPERTY_DEFAULTS[BrainProperty.TITLE]
