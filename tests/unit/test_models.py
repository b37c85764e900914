"""Tests for models."""

import pytest

from console_table.exceptions import ConfigurationError
from console_table.models import RULE, Align, Border, DataRow, Rule, TableOptions


class TestAlign:
    """Tests for Align.parse."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (Align.RIGHT, Align.RIGHT),
            ("left", Align.LEFT),
            ("CENTER", Align.CENTER),
            ("centre", Align.CENTER),
            (" right ", Align.RIGHT),
            ("l", Align.LEFT),
            ("c", Align.CENTER),
            ("r", Align.RIGHT),
            (-1, Align.LEFT),
            (0, Align.CENTER),
            (1, Align.RIGHT),
        ],
    )
    def test_parse(self, value: object, expected: Align) -> None:
        assert Align.parse(value) is expected

    @pytest.mark.parametrize("value", ["middle", "", 2, True, None, 1.0])
    def test_parse_invalid(self, value: object) -> None:
        with pytest.raises(ConfigurationError, match="alignment"):
            Align.parse(value)


class TestBorder:
    """Tests for Border."""

    def test_ascii(self) -> None:
        border = Border.ascii()
        assert (border.rule, border.corner, border.vertical) == ("-", "+", "|")
        assert border.enabled

    def test_none(self) -> None:
        border = Border.none()
        assert not border.enabled
        assert border.vertical == ""

    def test_custom(self) -> None:
        assert Border.custom("#") == Border("#", "#", "#")

    @pytest.mark.parametrize("value", ["##", "", 5])
    def test_custom_rejects_non_characters(self, value: object) -> None:
        with pytest.raises(ConfigurationError, match="border"):
            Border.custom(value)  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("ascii", Border.ascii()),
            ("ASCII", Border.ascii()),
            ("none", Border.none()),
            ("", Border.none()),
            (None, Border.none()),
            ("*", Border.custom("*")),
            (Border.custom("="), Border.custom("=")),
        ],
    )
    def test_parse(self, value: object, expected: Border) -> None:
        assert Border.parse(value) == expected

    def test_parse_rejects_long_strings(self) -> None:
        with pytest.raises(ConfigurationError):
            Border.parse("double")


class TestRows:
    """Tests for the row variants."""

    def test_rule_is_singleton(self) -> None:
        assert RULE is Rule.RULE
        assert repr(RULE) == "RULE"

    def test_data_row_copy_is_independent(self) -> None:
        row = DataRow({0: "a"})
        copy = row.copy()
        copy.cells[1] = "b"
        assert row.cells == {0: "a"}

    def test_data_row_defaults_empty(self) -> None:
        assert DataRow().cells == {}


class TestTableOptions:
    """Tests for TableOptions."""

    def test_defaults(self) -> None:
        options = TableOptions()
        assert options.align is Align.LEFT
        assert options.border == Border.ascii()
        assert options.padding == 1
        assert options.encoding == "utf-8"
        assert options.line_terminator == "\r\n"

    @pytest.mark.parametrize("padding", [-1, True, "2"])
    def test_invalid_padding(self, padding: object) -> None:
        with pytest.raises(ConfigurationError, match="padding"):
            TableOptions(padding=padding)  # type: ignore[arg-type]

    def test_invalid_encoding(self) -> None:
        with pytest.raises(ConfigurationError, match="encoding"):
            TableOptions(encoding="klingon-8")

    def test_align_must_be_member(self) -> None:
        with pytest.raises(ConfigurationError):
            TableOptions(align="left")  # type: ignore[arg-type]

    def test_from_dict(self) -> None:
        options = TableOptions.from_dict(
            {
                "align": "right",
                "border": "none",
                "padding": "2",
                "encoding": "latin-1",
                "line_terminator": "\\n",
            }
        )
        assert options.align is Align.RIGHT
        assert options.border == Border.none()
        assert options.padding == 2
        assert options.encoding == "latin-1"
        assert options.line_terminator == "\n"

    def test_from_dict_keeps_base_values(self) -> None:
        base = TableOptions(padding=3, line_terminator="\n")
        options = TableOptions.from_dict({"align": "c"}, base)
        assert options.align is Align.CENTER
        assert options.padding == 3
        assert options.line_terminator == "\n"

    @pytest.mark.parametrize("padding", ["wide", -2, None, False])
    def test_from_dict_invalid_padding(self, padding: object) -> None:
        with pytest.raises(ConfigurationError, match="padding"):
            TableOptions.from_dict({"padding": padding})

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CONSOLE_TABLE_ALIGN", "right")
        monkeypatch.setenv("CONSOLE_TABLE_BORDER", "#")
        monkeypatch.setenv("CONSOLE_TABLE_PADDING", "0")
        monkeypatch.setenv("CONSOLE_TABLE_LINE_TERMINATOR", "\\n")
        monkeypatch.delenv("CONSOLE_TABLE_ENCODING", raising=False)
        options = TableOptions.from_environment()
        assert options.align is Align.RIGHT
        assert options.border == Border.custom("#")
        assert options.padding == 0
        assert options.encoding == "utf-8"
        assert options.line_terminator == "\n"

    def test_from_environment_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key in ("ALIGN", "BORDER", "PADDING", "ENCODING", "LINE_TERMINATOR"):
            monkeypatch.delenv(f"CONSOLE_TABLE_{key}", raising=False)
        assert TableOptions.from_environment() == TableOptions()

    def test_from_environment_invalid(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CONSOLE_TABLE_ALIGN", "sideways")
        with pytest.raises(ConfigurationError):
            TableOptions.from_environment()
