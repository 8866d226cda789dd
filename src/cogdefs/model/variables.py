"""Variable definitions for cog projects.

A variable is a named, typed slot of project state. Its kind is one of the
closed ``VariableType`` members, and every kind has exactly one default
value.

Predefined (system) variables are identified by a negative ``id``. Their
ids, kinds and descriptions are fixed here; the owning application is
responsible for keeping users from renaming or deleting them.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .base import CogObjectDefinition


# ---------------------------------------------------------------------------
# Variable kinds
# ---------------------------------------------------------------------------

class VariableType(str, Enum):
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"


VarValue = Union[float, int, bool, str]
ArrayOfValues = list[VarValue]

# Keys are variable ids (as strings) or variable names.
VarsMap = dict[str, VarValue]

VARIABLE_TYPE_DEFAULTS: Mapping[VariableType, VarValue] = MappingProxyType({
    VariableType.NUMBER: 0,
    VariableType.BOOLEAN: False,
    VariableType.STRING: "",
})

_VARIABLE_TYPE_TOKENS = frozenset(t.value for t in VariableType)


def is_variable_type(token: object) -> bool:
    """True iff *token* is exactly one of the variable kind tokens.

    Used to narrow the ``variable_type`` field of untyped (e.g. parsed JSON)
    records. Matching is case-sensitive.
    """
    return isinstance(token, str) and token in _VARIABLE_TYPE_TOKENS


def variable_type_default(kind: VariableType | str) -> VarValue:
    """Return the default value for a variable kind."""
    return VARIABLE_TYPE_DEFAULTS[VariableType(kind)]


class VarCategory(str, Enum):
    """Where a variable came from. Descriptive only."""

    USER_DEFINED = "user_defined"
    GLOBAL = "global"
    PREDEFINED = "predefined"
    AUTOGENERATED = "autogenerated"


class DeviceVar(str, Enum):
    """Values stored in the ``device_var`` predefined variable."""

    DESKTOP = "d"
    MOBILE = "m"
    HEADSET = "h"


_DEVICE_VAR_TOKENS = frozenset(d.value for d in DeviceVar)


def is_device_var(value: object) -> bool:
    """True iff *value* is one of the ``DeviceVar`` tokens."""
    return isinstance(value, str) and value in _DEVICE_VAR_TOKENS


# ---------------------------------------------------------------------------
# Variable definition record
# ---------------------------------------------------------------------------

class VariableDefinition(CogObjectDefinition):
    """A variable as stored in a project.

    ``var_default_value`` is normalized to the native representation of
    ``variable_type`` on validation, so string-encoded defaults from
    persisted data come out typed. A null default goes through the same
    coercion. NaN and infinite defaults serialize to JSON as the strings
    ``"NaN"`` and ``"Infinity"``, which parse back to the same numbers.
    """

    model_config = ConfigDict(ser_json_inf_nan="strings")

    variable_type: VariableType
    var_default_name: str = Field("", alias="varDefaultName")
    var_default_value: VarValue | None = Field("", alias="varDefaultValue")
    category: VarCategory = VarCategory.USER_DEFINED

    @model_validator(mode="before")
    @classmethod
    def _fill_default_value(cls, data: Any) -> Any:
        if isinstance(data, dict):
            has_value = "varDefaultValue" in data or "var_default_value" in data
            if not has_value and is_variable_type(data.get("variable_type")):
                data = {
                    **data,
                    "var_default_value": variable_type_default(data["variable_type"]),
                }
        return data

    @model_validator(mode="after")
    def _coerce_default_value(self):
        from cogdefs.values._coerce import convert_var_value_to_type

        self.var_default_value = convert_var_value_to_type(
            self.var_default_value, self.variable_type
        )
        return self

    @property
    def is_predefined(self) -> bool:
        return self.id < 0


# ---------------------------------------------------------------------------
# Predefined variables
# ---------------------------------------------------------------------------

class PredefinedVariableName(str, Enum):
    """Names of the variables the platform adds on its own.

    The enum value is the variable name itself.
    """

    V_IDENTIFIER_VAR = "v_identifier_var"  # added on project creation
    FIRSTNAME_VAR = "firstname_var"  # added on project creation
    DEVICE_VAR = "device_var"  # added on project creation
    BROWSER_VAR = "browser_var"  # added on project creation
    VRMODE_VAR = "vrmode_var"  # updated at runtime
    SCORE = "score"  # added with the score element
    LANG = "lang"  # added with the score element
    SCORM_PROGRESS = "scorm_progress"  # updated at runtime
    SCORM_SUSPEND_DATA = "scorm_suspend_data"  # updated at runtime
    SCORM_SCORE = "scorm_score"  # updated at runtime
    LASTNAME_VAR = "lastname_var"  # added on project creation
    FULLNAME_VAR = "fullname_var"  # added on project creation
    PLAYER_COUNT_VAR = "player_count_var"  # added on project creation


class PredefinedVarDefaults(BaseModel):
    """Fixed metadata of a predefined variable."""

    model_config = ConfigDict(frozen=True)

    id: int
    type: VariableType
    description: str

    @model_validator(mode="after")
    def _negative_id(self):
        if self.id >= 0:
            raise ValueError(f"predefined variable id must be negative, got {self.id}")
        return self


_N = PredefinedVariableName
_T = VariableType

_PREDEFINED_VARIABLES: tuple[tuple[PredefinedVariableName, PredefinedVarDefaults], ...] = (
    (_N.SCORE, PredefinedVarDefaults(
        id=-2, type=_T.NUMBER,
        description="This is a special numeric field that gets used in Leaderboard. "
                    "Can be used to store overall score.",
    )),
    (_N.LANG, PredefinedVarDefaults(
        id=-3, type=_T.STRING,
        description="In case Language Tools are used, the language defined in "
                    "that section gets stored here.",
    )),
    (_N.V_IDENTIFIER_VAR, PredefinedVarDefaults(
        id=-8, type=_T.STRING,
        description="Stores the unique identifier of the viewer viewing this "
                    "experience. Can be email/name etc. - depends on the "
                    "authentication mechanism used in the Deployment section.",
    )),
    (_N.DEVICE_VAR, PredefinedVarDefaults(
        id=-9, type=_T.STRING,
        description="Viewer device type. 'm' for mobile, 'd' for desktop and "
                    "'h' for headset.",
    )),
    (_N.BROWSER_VAR, PredefinedVarDefaults(
        id=-10, type=_T.STRING,
        description="Contains a string identifying the browser the viewer is using.",
    )),
    (_N.VRMODE_VAR, PredefinedVarDefaults(
        id=-11, type=_T.BOOLEAN,
        description="If the user is in VR mode, this is set to true. Can be used "
                    "to display things differently in VR mode.",
    )),
    (_N.FIRSTNAME_VAR, PredefinedVarDefaults(
        id=-12, type=_T.STRING,
        description="Stores the viewer's first name if available from the "
                    "authentication mechanism",
    )),
    (_N.SCORM_PROGRESS, PredefinedVarDefaults(
        id=-13, type=_T.NUMBER,
        description="This is a special variable that can share the progress with "
                    "a LMS and will be retrieved upon experience revisit",
    )),
    (_N.SCORM_SUSPEND_DATA, PredefinedVarDefaults(
        id=-14, type=_T.NUMBER,
        description="This a special variable that can share arbitrary data with "
                    "a LMS and will be retrieved upon experience revisit",
    )),
    (_N.SCORM_SCORE, PredefinedVarDefaults(
        id=-15, type=_T.NUMBER,
        description="This a special variable that can share score with a LMS and "
                    "will be retrieved upon experience revisit",
    )),
    (_N.LASTNAME_VAR, PredefinedVarDefaults(
        id=-16, type=_T.STRING,
        description="Stores the viewer's last name if available from the "
                    "authentication mechanism",
    )),
    (_N.FULLNAME_VAR, PredefinedVarDefaults(
        id=-17, type=_T.STRING,
        description="Stores the viewer's full name if available from the "
                    "authentication mechanism",
    )),
    (_N.PLAYER_COUNT_VAR, PredefinedVarDefaults(
        id=-18, type=_T.NUMBER,
        description="Stores the total number of live viewers in the experience",
    )),
)

del _N, _T


def _build_predefined_tables():
    by_name: dict[PredefinedVariableName, PredefinedVarDefaults] = {}
    by_id: dict[int, PredefinedVariableName] = {}
    for name, defaults in _PREDEFINED_VARIABLES:
        if name in by_name:
            raise ValueError(f"Duplicate predefined variable {name.value!r}")
        if defaults.id in by_id:
            raise ValueError(
                f"Predefined variables {by_id[defaults.id].value!r} and "
                f"{name.value!r} share id {defaults.id}"
            )
        by_name[name] = defaults
        by_id[defaults.id] = name
    missing = set(PredefinedVariableName) - set(by_name)
    if missing:
        raise ValueError(
            f"Predefined variables without defaults: {sorted(m.value for m in missing)}"
        )
    return MappingProxyType(by_name), MappingProxyType(by_id)


PREDEFINED_VARIABLE_DEFAULTS: Mapping[PredefinedVariableName, PredefinedVarDefaults]
PREDEFINED_VARIABLE_ID_TO_NAME: Mapping[int, PredefinedVariableName]
PREDEFINED_VARIABLE_DEFAULTS, PREDEFINED_VARIABLE_ID_TO_NAME = _build_predefined_tables()


def _as_int_id(var_id: object) -> int | None:
    """Accept ints and integer strings (JSON object keys are strings)."""
    if isinstance(var_id, bool):
        return None
    if isinstance(var_id, int):
        return var_id
    if isinstance(var_id, str):
        try:
            return int(var_id.strip())
        except ValueError:
            return None
    return None


def is_predefined_id(var_id: object) -> bool:
    """A variable is predefined iff its id is negative."""
    parsed = _as_int_id(var_id)
    return parsed is not None and parsed < 0


def predefined_name_for_id(var_id: object) -> PredefinedVariableName | None:
    """Look up a predefined variable name by id.

    Returns None for ids that are not predefined; callers treat those as
    user-defined or global variables.
    """
    parsed = _as_int_id(var_id)
    if parsed is None:
        return None
    return PREDEFINED_VARIABLE_ID_TO_NAME.get(parsed)


def predefined_defaults_for(name: object) -> PredefinedVarDefaults | None:
    """Look up predefined metadata by name. None if *name* is not predefined."""
    if not isinstance(name, str):
        return None
    try:
        key = PredefinedVariableName(name)
    except ValueError:
        return None
    return PREDEFINED_VARIABLE_DEFAULTS[key]


def predefined_variable(name: PredefinedVariableName | str) -> VariableDefinition:
    """Build the definition record the platform adds for a predefined variable.

    Raises KeyError if *name* is not a predefined variable name.
    """
    defaults = predefined_defaults_for(name)
    if defaults is None:
        raise KeyError(f"Not a predefined variable: {name!r}")
    var_name = PredefinedVariableName(name).value
    return VariableDefinition(
        id=defaults.id,
        name=var_name,
        description=defaults.description,
        variable_type=defaults.type,
        var_default_name=var_name,
        var_default_value=VARIABLE_TYPE_DEFAULTS[defaults.type],
        category=VarCategory.PREDEFINED,
    )


def variable_category(definition: VariableDefinition) -> VarCategory:
    """Category of a definition; a negative id always means predefined."""
    if definition.is_predefined:
        return VarCategory.PREDEFINED
    return definition.category
