"""cogdefs values — coercion of untyped input into variable values.

Entry point::

    from cogdefs.values import convert_var_value_to_type

    convert_var_value_to_type("true", VariableType.BOOLEAN)  # True
    convert_var_value_to_type("3.5", "number")               # 3.5
"""

from ._coerce import (
    CoercionError,
    convert_var_value_to_type,
    is_empty_value,
    to_number,
    to_text,
)
from ._vars_map import default_vars_map, normalize_vars_map

__all__ = [
    "CoercionError",
    "convert_var_value_to_type",
    "default_vars_map",
    "is_empty_value",
    "normalize_vars_map",
    "to_number",
    "to_text",
]
