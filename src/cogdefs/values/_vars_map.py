"""Vars map normalization.

A vars map holds the current value of each variable, keyed by variable id
(as a string) or by variable name. Values read back from storage are
untyped; these helpers coerce them using the owning definitions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Literal

from cogdefs.model.variables import (
    VariableDefinition,
    VariableType,
    VarsMap,
    predefined_defaults_for,
    predefined_name_for_id,
)

from ._coerce import convert_var_value_to_type

logger = logging.getLogger(__name__)


def _index_definitions(
    definitions: Iterable[VariableDefinition],
) -> dict[str, VariableType]:
    """Map both ``str(id)`` and ``name`` of each definition to its kind."""
    kinds: dict[str, VariableType] = {}
    for definition in definitions:
        kinds[str(definition.id)] = definition.variable_type
        kinds[definition.name] = definition.variable_type
    return kinds


def _predefined_kind(key: str) -> VariableType | None:
    name = predefined_name_for_id(key)
    defaults = predefined_defaults_for(name.value if name is not None else key)
    return defaults.type if defaults is not None else None


def normalize_vars_map(
    raw: Mapping[str, object],
    definitions: Iterable[VariableDefinition] = (),
) -> VarsMap:
    """Coerce every value of *raw* to the kind of the variable it belongs to.

    Keys are matched against definition ids and names, then against the
    predefined variables. Entries that match nothing are kept unchanged.
    """
    kinds = _index_definitions(definitions)
    result: VarsMap = {}
    for key, value in raw.items():
        key = str(key)
        kind = kinds.get(key) or _predefined_kind(key)
        if kind is None:
            logger.debug("No variable definition for key %r, keeping value as-is", key)
            result[key] = value
            continue
        result[key] = convert_var_value_to_type(value, kind)
    return result


def default_vars_map(
    definitions: Iterable[VariableDefinition],
    key: Literal["id", "name"] = "id",
) -> VarsMap:
    """Initial vars map holding each definition's default value."""
    result: VarsMap = {}
    for definition in definitions:
        map_key = str(definition.id) if key == "id" else definition.name
        if map_key in result:
            logger.debug("Duplicate vars map key %r, last definition wins", map_key)
        result[map_key] = convert_var_value_to_type(
            definition.var_default_value, definition.variable_type
        )
    return result
