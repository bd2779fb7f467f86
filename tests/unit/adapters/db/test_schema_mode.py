"""Unit tests for parsing the schema-generation mode."""

import pytest

from persistkit.adapters.db.schema import SchemaGenerationMode, UnsupportedSchemaMode


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, SchemaGenerationMode.NONE),
        ("", SchemaGenerationMode.NONE),
        ("none", SchemaGenerationMode.NONE),
        ("validate", SchemaGenerationMode.VALIDATE),
        ("UPDATE", SchemaGenerationMode.UPDATE),
        ("create", SchemaGenerationMode.CREATE),
        ("create-drop", SchemaGenerationMode.CREATE_DROP),
        ("create_drop", SchemaGenerationMode.CREATE_DROP),
    ],
)
def test_from_string(raw, expected):
    """Known values, in any case, map to their mode."""
    assert SchemaGenerationMode.from_string(raw) is expected


@pytest.mark.parametrize("bad", ["drop", "migrate", "true"])
def test_unknown_mode_raises(bad):
    """Unknown values raise UnsupportedSchemaMode."""
    with pytest.raises(UnsupportedSchemaMode):
        SchemaGenerationMode.from_string(bad)


def test_only_create_drop_drops_on_close():
    """Shutdown teardown belongs to create-drop alone."""
    assert [m for m in SchemaGenerationMode if m.drops_on_close] == [
        SchemaGenerationMode.CREATE_DROP
    ]
