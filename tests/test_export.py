"""Tests for record export."""

import json

from cogdefs.export import predefined_tables_record, to_json, to_record
from cogdefs.model.brain import Brain
from cogdefs.model.variables import VariableDefinition, predefined_variable

from conftest import make_var


class TestToRecord:
    def test_uses_persisted_keys(self):
        record = to_record(make_var(3, "nickname", "string", var_default_value="bob"))
        assert record == {
            "id": 3,
            "name": "nickname",
            "description": "",
            "variable_type": "string",
            "varDefaultName": "",
            "varDefaultValue": "bob",
            "category": "user_defined",
        }

    def test_record_validates_back(self):
        var = predefined_variable("score")
        assert type(var).model_validate(to_record(var)) == var

    def test_brain(self):
        assert to_record(Brain(title="Tour")) == {"version": 0, "title": "Tour"}

    def test_to_json(self):
        data = json.loads(to_json(make_var(2, "door_open", "boolean")))
        assert data["varDefaultValue"] is False


    def test_nan_default_is_json_compatible(self):
        record = to_record(make_var(1, "n", "number", var_default_value="oops"))
        assert record["varDefaultValue"] == "NaN"
        assert json.loads(json.dumps(record, allow_nan=False)) == record

    def test_non_finite_defaults_round_trip(self):
        for text in ("oops", "Infinity", "-Infinity"):
            var = make_var(1, "n", "number", var_default_value=text)
            restored = VariableDefinition.model_validate_json(to_json(var))
            assert to_record(restored) == to_record(var)

    def test_null_default_round_trip(self):
        var = VariableDefinition.model_validate(
            {"id": 3, "name": "nickname", "variable_type": "string", "varDefaultValue": None}
        )
        assert to_record(var)["varDefaultValue"] == ""
        assert VariableDefinition.model_validate(to_record(var)) == var


class TestTables:
    def test_id_keys_are_strings(self):
        tables = predefined_tables_record()
        assert tables["predefinedVariableIdToName"]["-2"] == "score"
        assert all(isinstance(k, str) for k in tables["predefinedVariableIdToName"])

    def test_round_trip_through_json(self):
        tables = json.loads(json.dumps(predefined_tables_record()))
        defaults = tables["predefinedVariableDefaults"]
        for name, entry in defaults.items():
            assert tables["predefinedVariableIdToName"][str(entry["id"])] == name

    def test_defaults(self):
        tables = predefined_tables_record()
        assert tables["variableTypeDefaults"] == {"number": 0, "boolean": False, "string": ""}
        assert tables["brainPropertyDefaults"] == {"version": 0, "title": ""}
        assert tables["predefinedVariableDefaults"]["vrmode_var"]["type"] == "boolean"
