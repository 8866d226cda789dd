"""Dump models and registry tables to the shape they are persisted in.

Persisted records use the camelCase aliases of model fields, and JSON object
keys are always strings, so predefined ids come out as ``"-2"`` rather than
``-2``.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel

from cogdefs.model.brain import BRAIN_PROPERTY_DEFAULTS
from cogdefs.model.variables import (
    PREDEFINED_VARIABLE_DEFAULTS,
    PREDEFINED_VARIABLE_ID_TO_NAME,
    VARIABLE_TYPE_DEFAULTS,
)


def to_record(model: BaseModel) -> dict[str, Any]:
    """JSON-compatible dict of *model* using persisted key names."""
    return json.loads(model.model_dump_json(by_alias=True))


def to_json(model: BaseModel, *, indent: int | None = None) -> str:
    return model.model_dump_json(by_alias=True, indent=indent)


def predefined_tables_record() -> dict[str, dict[str, Any]]:
    """All registry tables keyed the way they look once serialized to JSON."""
    return {
        "variableTypeDefaults": {
            kind.value: default for kind, default in VARIABLE_TYPE_DEFAULTS.items()
        },
        "predefinedVariableDefaults": {
            name.value: defaults.model_dump(mode="json")
            for name, defaults in PREDEFINED_VARIABLE_DEFAULTS.items()
        },
        "predefinedVariableIdToName": {
            str(var_id): name.value
            for var_id, name in PREDEFINED_VARIABLE_ID_TO_NAME.items()
        },
        "brainPropertyDefaults": {
            prop.value: default for prop, default in BRAIN_PROPERTY_DEFAULTS.items()
        },
    }
