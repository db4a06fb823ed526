"""Tests for the bundled schema loader."""

import pytest

from bmson_timing.schemas import (
    BMSON_TIMING_SCHEMA,
    TIMING_STRUCTURE_SCHEMA,
    load_schema,
)


class TestLoadSchema:

    @pytest.mark.parametrize("filename", [BMSON_TIMING_SCHEMA, TIMING_STRUCTURE_SCHEMA])
    def test_bundled_schemas_load(self, filename):
        schema = load_schema(filename)
        assert schema["$id"] == filename

    def test_cached_after_first_read(self):
        assert load_schema(BMSON_TIMING_SCHEMA) is load_schema(BMSON_TIMING_SCHEMA)

    def test_schemas_are_distinct(self):
        assert load_schema(BMSON_TIMING_SCHEMA)["type"] == "object"
        assert load_schema(TIMING_STRUCTURE_SCHEMA)["type"] == "array"

    def test_unknown_schema_raises(self):
        with pytest.raises(FileNotFoundError):
            load_schema("missing_schema.json")
