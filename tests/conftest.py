"""Shared test helpers for the cogdefs test suite."""

from cogdefs.model.variables import VariableDefinition


def make_var(var_id, name, variable_type, **kwargs):
    """Build a VariableDefinition with the given id, name and kind."""
    return VariableDefinition(id=var_id, name=name, variable_type=variable_type, **kwargs)
