#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for parser options."""

from dataclasses import FrozenInstanceError

import pytest

from mdview.constants import DEFAULT_MAX_INPUT_SIZE, DEFAULT_PARSE_TIMEOUT_MS
from mdview.exceptions import ValidationError
from mdview.options import UNSET, ParserOptions, is_unset


@pytest.mark.unit
class TestParserOptions:
    """Test ParserOptions defaults and conversions."""

    def test_defaults(self):
        options = ParserOptions()
        assert options.gfm is True
        assert options.math is False
        assert options.wiki is False
        assert options.max_input_size == DEFAULT_MAX_INPUT_SIZE == 10 * 1024 * 1024
        assert options.timeout == DEFAULT_PARSE_TIMEOUT_MS == 5000

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            ParserOptions().gfm = False  # type: ignore[misc]

    def test_create_updated(self):
        options = ParserOptions().create_updated(math=True)
        assert options.math is True
        assert ParserOptions().math is False

    def test_gfm_enables_every_extension(self):
        options = ParserOptions(enable_tables=False, enable_task_lists=False)
        assert options.tables_enabled
        assert options.task_lists_enabled

    def test_individual_flags_without_gfm(self):
        options = ParserOptions(gfm=False, enable_tables=True, enable_strikethrough=False)
        assert options.tables_enabled
        assert not options.strikethrough_enabled

    @pytest.mark.parametrize("field_name", ["max_input_size", "timeout"])
    def test_non_positive_limits_rejected(self, field_name):
        with pytest.raises(ValueError):
            ParserOptions(**{field_name: 0})

    def test_from_mapping_accepts_camel_case(self):
        options = ParserOptions.from_mapping({"enableTables": False, "maxInputSize": 1024, "gfm": None})
        assert options.enable_tables is False
        assert options.max_input_size == 1024
        assert options.gfm is True

    def test_from_mapping_rejects_unknown_keys(self):
        with pytest.raises(ValidationError):
            ParserOptions.from_mapping({"footnotes": True})

    def test_to_dict_camel_case(self):
        data = ParserOptions().to_dict(camel_case=True)
        assert data["enableTaskLists"] is True
        assert data["maxInputSize"] == DEFAULT_MAX_INPUT_SIZE


@pytest.mark.unit
class TestCloneFrozenMixin:
    """Test the shared frozen option helpers."""

    def test_field_names_in_declaration_order(self):
        names = ParserOptions.field_names()
        assert names[:2] == ("gfm", "enable_tables")
        assert "max_input_size" in names

    def test_create_updated_rejects_unknown_field(self):
        with pytest.raises(TypeError):
            ParserOptions().create_updated(no_such_field=True)

    def test_is_unset(self):
        assert is_unset(None)
        assert is_unset(UNSET)
        assert not is_unset(False)
        assert not is_unset(0)
