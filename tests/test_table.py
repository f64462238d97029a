"""Tests for pi.table.table -- the Table API and render pipeline."""

from __future__ import annotations

import logging

import pytest

from pi.table import HORIZONTAL_RULE, Table, build, render, strip_ansi
from pi.table.types import DataRow


def _lines(*lines: str) -> str:
    return "".join(line + "\r\n" for line in lines)


def _people() -> Table:
    table = Table()
    table.set_headers(["Name", "Age"])
    table.add_row(["Alice", "30"])
    table.add_row(["Bob", "5"])
    return table


# ---------------------------------------------------------------------------
# Basic rendering
# ---------------------------------------------------------------------------


class TestRender:
    def test_empty_table_renders_empty_string(self) -> None:
        assert Table().render() == ""

    def test_headers_and_rows(self) -> None:
        assert _people().render() == _lines(
            "+-------+-----+",
            "| Name  | Age |",
            "+-------+-----+",
            "| Alice | 30  |",
            "| Bob   | 5   |",
            "+-------+-----+",
        )

    def test_header_only(self) -> None:
        table = Table()
        table.set_headers(["Name"])
        assert table.render() == _lines("+------+", "| Name |", "+------+")

    def test_rows_without_headers(self) -> None:
        table = Table()
        table.add_row(["a", "bb"])
        assert table.render() == _lines("+---+----+", "| a | bb |", "+---+----+")

    def test_render_is_deterministic(self) -> None:
        table = _people()
        assert table.render() == table.render()

    def test_str_and_module_render(self) -> None:
        table = _people()
        assert str(table) == table.render()
        assert render(table) == table.render()

    def test_values_coerced_to_text(self) -> None:
        table = Table()
        table.add_row([1, None, 2.5])
        assert table.render() == _lines(
            "+---+--+-----+",
            "| 1 |  | 2.5 |",
            "+---+--+-----+",
        )

    def test_bytes_decoded_with_charset(self) -> None:
        table = Table(charset="latin-1")
        table.add_row([b"caf\xe9"])
        assert "| caf\u00e9 |" in table.render()


# ---------------------------------------------------------------------------
# Shape
# ---------------------------------------------------------------------------


class TestShape:
    def test_ragged_rows_padded(self) -> None:
        table = Table()
        table.add_row(["a"])
        table.add_row(["b", "c", "d"])
        assert table.max_cols == 3
        rows = table.rows
        assert all(isinstance(row, DataRow) and len(row.cells) == 3 for row in rows)
        assert "| a |   |   |" in table.render()

    def test_max_cols_only_grows(self) -> None:
        table = Table()
        table.add_row(["a", "b", "c"])
        table.add_row(["d"])
        table.set_headers(["h"])
        assert table.max_cols == 3

    def test_prepend_row(self) -> None:
        table = Table()
        table.add_row(["b"])
        table.add_row(["a"], append=False)
        assert [row.cells for row in table.rows] == [["a"], ["b"]]

    def test_insert_row(self) -> None:
        table = Table()
        table.add_row(["a"])
        table.add_row(["c"])
        table.insert_row(["b"], 1)
        assert [row.cells for row in table.rows] == [["a"], ["b"], ["c"]]
        assert table.max_rows == 3

    def test_add_column(self) -> None:
        table = Table()
        table.add_row(["a"])
        table.add_row(["b"])
        table.add_column(["1", "2"], 1)
        assert table.render() == _lines(
            "+---+---+",
            "| a | 1 |",
            "| b | 2 |",
            "+---+---+",
        )

    def test_add_bulk_data_with_rule(self) -> None:
        table = Table()
        table.add_bulk_data([["a", "1"], HORIZONTAL_RULE, ["b", "2"]])
        assert table.render() == _lines(
            "+---+---+",
            "| a | 1 |",
            "+---+---+",
            "| b | 2 |",
            "+---+---+",
        )


# ---------------------------------------------------------------------------
# Alignment
# ---------------------------------------------------------------------------


class TestAlignment:
    def test_left_pads_trailing(self) -> None:
        table = Table(align="left")
        table.add_row(["abcde"])
        table.add_row(["a"])
        assert "| a     |" in table.render()

    def test_right_pads_leading(self) -> None:
        table = Table(align="right")
        table.add_row(["abcde"])
        table.add_row(["a"])
        assert "|     a |" in table.render()

    def test_center_floor_left_ceil_right(self) -> None:
        table = Table(align="center")
        table.add_row(["abcde"])
        table.add_row(["ab"])
        assert "|  ab   |" in table.render()

    def test_center_applies_to_headers(self) -> None:
        table = Table(align="center")
        table.set_headers(["ab"])
        table.add_row(["abcde"])
        assert "|  ab   |" in table.render()

    def test_column_override(self) -> None:
        table = _people()
        table.set_column_alignment(1, "right")
        output = table.render()
        assert "| Alice |  30 |" in output
        assert "| Bob   |   5 |" in output

    def test_unknown_alignment_falls_back_to_default(self) -> None:
        table = Table(align="right")
        table.set_column_alignment(0, "diagonal")
        assert table.column_alignment(0) == "right"

    def test_unknown_default_alignment_is_left(self) -> None:
        assert Table(align="sideways").column_alignment(0) == "left"


# ---------------------------------------------------------------------------
# Multi-line cells and separators
# ---------------------------------------------------------------------------


class TestMultiline:
    def test_cell_splits_into_physical_rows(self) -> None:
        table = Table()
        table.add_row(["a\nb\nc"])
        assert table.render() == _lines("+---+", "| a |", "| b |", "| c |", "+---+")

    def test_shorter_cells_padded_with_blank_lines(self) -> None:
        table = Table()
        table.add_row(["a\nbb", "x"])
        assert table.render() == _lines(
            "+----+---+",
            "| a  | x |",
            "| bb |   |",
            "+----+---+",
        )

    def test_multiline_header(self) -> None:
        table = Table()
        table.set_headers(["First\nName"])
        table.add_row(["Al"])
        assert table.render() == _lines(
            "+-------+",
            "| First |",
            "| Name  |",
            "+-------+",
            "| Al    |",
            "+-------+",
        )

    def test_stored_rows_not_split(self) -> None:
        table = Table()
        table.add_row(["a\nb"])
        table.render()
        assert [row.cells for row in table.rows] == [["a\nb"]]


class TestSeparators:
    def test_separator_between_rows(self) -> None:
        table = Table()
        table.add_row(["a"])
        table.add_separator()
        table.add_row(["b"])
        assert table.render() == _lines("+---+", "| a |", "+---+", "| b |", "+---+")


# ---------------------------------------------------------------------------
# Borders and padding
# ---------------------------------------------------------------------------


class TestBorders:
    def test_no_border(self) -> None:
        table = Table(border=None)
        table.set_headers(["h1", "h2"])
        table.add_row(["a", "bbb"])
        table.add_separator()
        assert table.render() == _lines(" h1  h2  ", " a   bbb ")

    def test_custom_border_character(self) -> None:
        table = Table(border="#")
        table.add_row(["a"])
        assert table.render() == _lines("#####", "# a #", "#####")

    def test_multi_character_border_uses_first_character(self) -> None:
        table = Table(border="ab")
        table.add_row(["x", "y"])
        assert table.render() == _lines("aaaaaaaaa", "a x a y a", "aaaaaaaaa")

    def test_zero_padding(self) -> None:
        table = Table(padding=0)
        table.set_headers(["Name", "Age"])
        table.add_row(["Alice", "30"])
        assert table.render() == _lines(
            "+-----+---+",
            "|Name |Age|",
            "+-----+---+",
            "|Alice|30 |",
            "+-----+---+",
        )

    def test_negative_padding_clamped(self) -> None:
        table = Table(padding=-4)
        table.add_row(["a"])
        assert table.render() == _lines("+-+", "|a|", "+-+")


# ---------------------------------------------------------------------------
# Width measurement
# ---------------------------------------------------------------------------


class TestWidth:
    def test_wide_characters(self) -> None:
        table = Table()
        table.add_row(["世界"])
        table.add_row(["abc"])
        output = table.render()
        assert "| 世界 |" in output
        assert "| abc  |" in output

    def test_color_strip_function(self) -> None:
        red = "\x1b[31mred\x1b[0m"
        table = Table(color_strip_fn=strip_ansi)
        table.add_row([red])
        table.add_row(["green"])
        assert table.render() == _lines(
            "+-------+",
            f"| {red}   |",
            "| green |",
            "+-------+",
        )

    def test_non_callable_color_strip_function_rejected(self) -> None:
        with pytest.raises(TypeError, match="Invalid color strip function"):
            Table(color_strip_fn="strip")

    def test_custom_width_function(self) -> None:
        table = Table(width_fn=lambda s: len(s) * 2)
        table.add_row(["ab"])
        assert table.render() == _lines("+------+", "| ab |", "+------+")

    def test_non_callable_width_function_rejected(self) -> None:
        with pytest.raises(TypeError, match="Invalid width function"):
            Table(width_fn=3)

    def test_unknown_charset_measures_bytes(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="pi.table.table"):
            table = Table(charset="no-such-charset")
        assert "Unknown charset" in caplog.text
        table.add_row(["\u00e9"])
        table.add_row(["ab"])
        output = table.render()
        assert "| \u00e9 |" in output
        assert "| ab |" in output

    def test_set_charset(self) -> None:
        table = Table()
        table.set_charset("LATIN-1")
        assert table.charset == "latin-1"


# ---------------------------------------------------------------------------
# Filters and totals
# ---------------------------------------------------------------------------


class TestFilters:
    def test_filter_applies_to_column(self) -> None:
        table = Table()
        table.add_row(["a", "1"])
        table.add_row(["b", "22"])
        table.add_filter(1, lambda v: f"${v}")
        assert table.render() == _lines(
            "+---+-----+",
            "| a | $1  |",
            "| b | $22 |",
            "+---+-----+",
        )

    def test_filters_run_in_order(self) -> None:
        table = Table()
        table.add_row(["a"])
        table.add_filter(0, str.upper)
        table.add_filter(0, lambda v: v + "!")
        assert "| A! |" in table.render()

    def test_filters_skip_rules_and_headers(self) -> None:
        table = Table()
        table.set_headers(["h"])
        table.add_row(["a"])
        table.add_separator()
        table.add_filter(0, str.upper)
        output = table.render()
        assert "| h |" in output
        assert "| A |" in output

    def test_filters_applied_once_per_render(self) -> None:
        table = Table()
        table.add_row(["a"])
        table.add_filter(0, lambda v: v + "!")
        assert table.render() == table.render()
        assert "| a! |" in table.render()
        assert table.rows[0].cells == ["a"]

    def test_non_callable_filter_rejected(self) -> None:
        with pytest.raises(TypeError, match="Invalid filter callback"):
            Table().add_filter(0, "upper")

    def test_filter_results_coerced(self) -> None:
        table = Table()
        table.add_row(["2"])
        table.add_filter(0, lambda v: int(v) * 10)
        assert "| 20 |" in table.render()


class TestTotals:
    def test_sums_column_after_rule(self) -> None:
        table = Table()
        table.add_row(["a", "10"])
        table.add_row(["b", "20"])
        table.calculate_totals_for([1])
        assert table.render() == _lines(
            "+---+----+",
            "| a | 10 |",
            "| b | 20 |",
            "+---+----+",
            "|   | 30 |",
            "+---+----+",
        )

    def test_totals_not_accumulated_across_renders(self) -> None:
        table = Table()
        table.add_row(["a", "10"])
        table.calculate_totals_for([1])
        first = table.render()
        assert table.render() == first
        assert table.max_rows == 1

    def test_non_numeric_cells_ignored(self) -> None:
        table = Table()
        table.add_row(["x", "abc"])
        table.add_row(["y", "2.5"])
        table.add_row(["z", "1.5"])
        table.calculate_totals_for([1])
        assert "|   | 4.0 |" in table.render()

    def test_decimal_sums_are_exact(self) -> None:
        table = Table()
        table.add_row(["0.1"])
        table.add_row(["0.2"])
        table.calculate_totals_for([0])
        assert "| 0.3 |" in table.render()

    def test_totals_skip_rule_rows(self) -> None:
        table = Table()
        table.add_row(["1"])
        table.add_separator()
        table.add_row(["2"])
        table.calculate_totals_for([0])
        assert table.render().endswith(_lines("+---+", "| 3 |", "+---+"))

    def test_totals_use_filtered_values(self) -> None:
        table = Table()
        table.add_row(["1"])
        table.add_row(["2"])
        table.add_filter(0, lambda v: int(v) * 100)
        table.calculate_totals_for([0])
        assert "| 300 |" in table.render()

    def test_empty_table_with_totals_renders_empty(self) -> None:
        table = Table()
        table.calculate_totals_for([0])
        assert table.render() == ""

    def test_header_only_table_gets_zero_totals(self) -> None:
        table = Table()
        table.set_headers(["Name", "Qty"])
        table.calculate_totals_for([1])
        assert table.render() == _lines(
            "+------+-----+",
            "| Name | Qty |",
            "+------+-----+",
            "+------+-----+",
            "|      | 0   |",
            "+------+-----+",
        )
        assert table.max_rows == 0


# ---------------------------------------------------------------------------
# build / render
# ---------------------------------------------------------------------------


class TestBuild:
    def test_build_and_render(self) -> None:
        table = build(["Name", "Age"], [["Alice", "30"], ["Bob", "5"]])
        assert table is not None
        assert render(table) == _people().render()

    def test_build_passes_options(self) -> None:
        table = build(["h"], [["a"]], border=None)
        assert table is not None
        assert table.render() == _lines(" h ", " a ")

    def test_build_with_rule(self) -> None:
        table = build([], [["a"], HORIZONTAL_RULE, ["b"]])
        assert table is not None
        assert table.render() == _lines("+---+", "| a |", "+---+", "| b |", "+---+")

    def test_non_collection_headers_return_none(self) -> None:
        assert build("Name", [["a"]]) is None

    def test_non_collection_rows_return_none(self) -> None:
        assert build(["Name"], 5) is None
