import logging

import pytest

from jump import mappings
from jump.options import Options


@pytest.fixture
def layout():
    mappings.register("layout", {"a": "α", "b": "βв"})
    yield "layout"
    mappings.unregister("layout")


def test_no_mappings_enabled(layout):
    assert mappings.checkout("ab", Options()) == ""


def test_mapped_characters_become_classes(layout):
    assert mappings.checkout("ab", Options(match_mappings=(layout,))) == "[aα][bβв]"


def test_unmapped_characters_are_escaped(layout):
    assert mappings.checkout("a.", Options(match_mappings=(layout,))) == "[aα]\\."


def test_nothing_mapped(layout):
    assert mappings.checkout("xyz", Options(match_mappings=(layout,))) == ""


def test_unknown_table_is_skipped(layout, caplog):
    with caplog.at_level(logging.WARNING, logger="jump.mappings"):
        result = mappings.checkout("a", Options(match_mappings=("missing", layout)))
    assert result == "[aα]"
    assert "missing" in caplog.text


def test_tables_are_combined(layout):
    mappings.register("extra", {"a": "@"})
    try:
        assert mappings.checkout("a", Options(match_mappings=(layout, "extra"))) == "[aα@]"
    finally:
        mappings.unregister("extra")
