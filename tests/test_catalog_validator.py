# -*- coding: utf-8 -*-
"""
Tests for progcat.catalog.validator — SchemaValidator.

Created
-------
2026-10-19
"""

import copy

import pytest
from jsonschema.exceptions import SchemaError

from progcat.catalog.errors import SchemaInvalid
from progcat.catalog.validator import SchemaValidator, load_schema

from conftest import DEMO_INDEX


class TestBundledSchema:

    def test_demo_index_valid(self, validator):
        validator.validate(DEMO_INDEX)

    def test_missing_role(self, validator):
        index = copy.deepcopy(DEMO_INDEX)
        del index["entries"][0]["binary"]
        with pytest.raises(SchemaInvalid) as info:
            validator.validate(index, path="cat/index.json")
        assert "binary" in str(info.value)
        assert info.value.path == "cat/index.json"

    def test_empty_role_value(self, validator):
        index = copy.deepcopy(DEMO_INDEX)
        index["entries"][0]["icon"] = ""
        with pytest.raises(SchemaInvalid):
            validator.validate(index)

    def test_missing_source_name(self, validator):
        with pytest.raises(SchemaInvalid) as info:
            validator.validate({"source": {}, "entries": []})
        assert "name" in str(info.value)

    def test_entries_must_be_array(self, validator):
        with pytest.raises(SchemaInvalid) as info:
            validator.validate({"source": {"name": "x"}, "entries": {}})
        assert info.value.location == "$.entries"

    def test_extra_fields_allowed(self, validator):
        index = copy.deepcopy(DEMO_INDEX)
        index["entries"][0]["title"] = "Blink"
        index["entries"][0]["author"] = "someone"
        validator.validate(index)

    def test_load_schema_default(self):
        assert load_schema()["type"] == "object"


class TestCustomSchema:

    def test_draft7_schema(self):
        schema = {
            "$schema": "http://json-schema.org/draft-07/schema#",
            "type": "object",
            "required": ["catalog"],
        }
        validator = SchemaValidator(schema)
        validator.validate({"catalog": []})
        with pytest.raises(SchemaInvalid):
            validator.validate({})

    def test_invalid_schema(self):
        with pytest.raises(SchemaError):
            SchemaValidator({"type": 12})

    def test_from_file(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text('{"type": "object"}')
        SchemaValidator.from_file(path).validate({})
