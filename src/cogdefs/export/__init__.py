"""cogdefs export — JSON-compatible records.

Public API::

    from cogdefs.export import to_record
    data = to_record(variable_definition)
"""

from .records import predefined_tables_record, to_json, to_record

__all__ = ["predefined_tables_record", "to_json", "to_record"]
