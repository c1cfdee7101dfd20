"""Unit tests for line numbering, label rewriting, and banner truncation.

HOW: format_document is pure, so every test builds an AssembledDocument
in memory. Properties (line count preserved, numbers step by step, fixed
column width) are checked across a small grid of sizes and steps.
"""

import pytest

from bargo.core.ir import AssembledDocument, LabelEntry
from bargo.core.labels import resolve_labels
from bargo.core.numbering import (
    format_document,
    is_banner_rule,
    jump_pattern,
    number_width,
    rewrite_jumps,
    truncate_banner,
)
from bargo.core.sources import banner_lines


def _doc(texts):
    doc = AssembledDocument()
    doc.extend(list(texts))
    return doc


def _render(texts, step=10, width=80, labels=True):
    doc = _doc(texts)
    table = resolve_labels(doc, step) if labels else {}
    return [line.render() for line in format_document(doc, table, step, width)]


class TestWorkedExample:
    def test_label_skip(self):
        assert _render(["PRINT 1", "LABEL skip", "PRINT 2", "GOTO skip"]) == [
            "10 PRINT 1",
            "20 :",
            "30 PRINT 2",
            "40 GOTO 30",
        ]

    def test_gosub(self):
        assert _render(["GOSUB sub", "END", "LABEL sub", "RETURN"]) == [
            "10 GOSUB 40",
            "20 END",
            "30 :",
            "40 RETURN",
        ]


class TestNumbering:
    @pytest.mark.parametrize("count", [1, 9, 10, 11, 120])
    @pytest.mark.parametrize("step", [1, 7, 10, 100])
    def test_one_output_line_per_input_line(self, count, step):
        doc = _doc(["PRINT {}".format(i) for i in range(count)])
        lines = format_document(doc, {}, step, 80)
        assert len(lines) == count
        assert [line.number for line in lines] == [step * (i + 1) for i in range(count)]

    @pytest.mark.parametrize("count,step,expected", [
        (1, 10, 2),
        (9, 10, 2),
        (10, 10, 3),
        (99, 1, 2),
        (100, 1, 3),
        (1000, 10, 5),
    ])
    def test_width_is_digits_of_largest_number(self, count, step, expected):
        assert number_width(count, step) == expected
        doc = _doc(["X"] * count)
        lines = format_document(doc, {}, step, 80)
        assert {line.width for line in lines} == {expected}

    def test_numbers_right_justified(self):
        rendered = _render(["A"] * 10)
        assert rendered[0] == " 10 A"
        assert rendered[-1] == "100 A"

    def test_empty_document(self):
        assert format_document(_doc([]), {}, 10, 80) == []


class TestLabelRewriting:
    def test_declaration_becomes_no_op_even_when_disabled(self):
        assert _render(["LABEL x", "GOTO x"], labels=False) == ["10 :", "20 GOTO x"]

    def test_lowercase_declaration(self):
        assert _render(["label x", "GOTO x"]) == ["10 :", "20 GOTO 20"]

    def test_unknown_label_left_alone(self):
        assert _render(["GOTO nowhere"]) == ["10 GOTO nowhere"]

    def test_every_occurrence_replaced(self):
        rendered = _render(["LABEL a", "IF X THEN GOTO a ELSE GOSUB a"])
        assert rendered[1] == "20 IF X THEN GOTO 20 ELSE GOSUB 20"

    def test_forward_reference(self):
        rendered = _render(["GOTO end", "PRINT 1", "LABEL end", "END"])
        assert rendered[0] == "10 GOTO 40"

    def test_longer_name_not_clobbered_by_prefix(self):
        rendered = _render(["LABEL loop", "A", "LABEL loop2", "B", "GOTO loop2", "GOTO loop"])
        assert rendered[4] == "50 GOTO 40"
        assert rendered[5] == "60 GOTO 20"

    def test_substitution_is_textual(self):
        rendered = _render(["LABEL x", 'PRINT "GOTO x"'])
        assert rendered[1] == '20 PRINT "GOTO 20"'

    def test_keyword_is_case_sensitive(self):
        assert _render(["LABEL x", "goto x"])[1] == "20 goto x"

    def test_rewrite_jumps_helper(self):
        labels = {
            "a": LabelEntry(name="a", declaration_index=0, target_line_number=10),
            "b": LabelEntry(name="b", declaration_index=1, target_line_number=20),
        }
        pattern = jump_pattern(labels)
        assert rewrite_jumps("GOTO a: GOSUB b: GOTO c", pattern, labels) == "GOTO 10: GOSUB 20: GOTO c"

    def test_no_pattern_without_named_labels(self):
        assert jump_pattern({}) is None
        empty = {"": LabelEntry(name="", declaration_index=0, target_line_number=20)}
        assert jump_pattern(empty) is None

    def test_empty_label_name_does_not_touch_resolved_jumps(self):
        assert _render(["LABEL ", "LABEL a", "PRINT", "GOTO a"]) == [
            "10 :",
            "20 :",
            "30 PRINT",
            "40 GOTO 30",
        ]

    def test_inserted_number_is_not_rescanned(self):
        rendered = _render(["LABEL ab", "PRINT", "LABEL 2", "X", "GOTO ab", "GOTO 2"])
        assert rendered[4] == "50 GOTO 20"
        assert rendered[5] == "60 GOTO 40"


class TestBannerTruncation:
    def test_is_banner_rule(self):
        assert is_banner_rule("REM " + "=" * 76)
        assert is_banner_rule("rem ====")
        assert not is_banner_rule("REM IMPORT X.BAS")
        assert not is_banner_rule("PRINT ==")

    def test_76_equals_fits_80_columns(self):
        rule = "REM " + "=" * 76
        text = truncate_banner(rule, width=2, display_width=80)
        assert 2 + 1 + len(text) <= 80
        assert text.startswith("REM ")
        assert set(text[4:]) == {"="}

    @pytest.mark.parametrize("display_width", [40, 64, 80, 100])
    def test_rendered_banner_never_exceeds_display(self, display_width):
        doc = _doc(["PRINT 1"] + banner_lines("lib") + ["X"] * 200)
        for line in format_document(doc, {}, 10, display_width):
            if line.text.startswith("REM ="):
                assert len(line.render()) <= display_width

    def test_short_rule_untouched(self):
        assert truncate_banner("REM ===", width=2, display_width=80) == "REM ==="

    def test_tiny_display_never_negative(self):
        assert truncate_banner("REM =====", width=4, display_width=3) == ""

    def test_import_line_not_truncated(self):
        doc = _doc(["REM IMPORT " + "X" * 100 + ".BAS"])
        assert format_document(doc, {}, 10, 40)[0].text == "REM IMPORT " + "X" * 100 + ".BAS"
