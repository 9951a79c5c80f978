from datetime import datetime
import errno
import os

import pytest

from simplog.config.constants import CONTINUATION_INDENT, DATE_WIDTH
from simplog.logging.formatting import (
    compose_message,
    current_errno,
    errno_suffix,
    expand_format,
    get_date_string,
    visible_width,
    wrap_text,
)

HEADER = "[2013-12-01 09:05:03]\tINFO  : "


class TestDateString:
    def test_fixed_width_and_zero_padding(self):
        date = get_date_string(lambda: datetime(2013, 6, 2, 7, 8, 9))
        assert date == "[2013-06-02 07:08:09]"
        assert len(date) == DATE_WIDTH

    def test_uses_wall_clock_by_default(self):
        date = get_date_string()
        assert date.startswith("[") and date.endswith("]")
        assert len(date) == DATE_WIDTH


class TestComposeMessage:
    """Test suite for message composition."""

    def test_expands_printf_arguments(self):
        assert compose_message("value=%d name=%s", (42, "x"), 100) == ("value=42 name=x", None)

    def test_format_without_args_is_verbatim(self):
        assert compose_message("100% done", (), 100) == ("100% done", None)

    def test_mapping_argument(self):
        text, _ = compose_message("%(user)s logged in", ({"user": "nate"},), 100)
        assert text == "nate logged in"

    def test_mismatched_arguments_raise(self):
        with pytest.raises(TypeError):
            expand_format("%d %d", (1,))

    @pytest.mark.parametrize("excess", [1, 7, 250])
    def test_truncation_reports_exact_excess(self, excess: int):
        limit = 64
        text, truncated_by = compose_message("%s", ("a" * (limit + excess),), limit)
        assert text == "a" * limit
        assert truncated_by == excess

    def test_exact_fit_is_not_truncated(self):
        assert compose_message("abcd", (), 4) == ("abcd", None)

    def test_truncation_keeps_whole_characters(self):
        # "é" is two bytes in UTF-8; a 5-byte ceiling keeps two of them
        text, truncated_by = compose_message("é" * 10, (), 5)
        assert text == "éé"
        assert truncated_by == 16
        assert len(text.encode("utf-8")) + truncated_by == 20


class TestErrno:
    def test_no_errno_outside_exception_handling(self):
        assert current_errno() is None

    def test_errno_of_handled_oserror(self):
        try:
            raise FileNotFoundError(errno.ENOENT, "missing", "x.txt")
        except OSError:
            assert current_errno() == errno.ENOENT

    def test_non_os_errors_are_ignored(self):
        try:
            raise ValueError("boom")
        except ValueError:
            assert current_errno() is None

    def test_suffix_is_aligned_with_label_column(self):
        suffix = errno_suffix(errno.ENOENT)
        assert suffix == " " * DATE_WIDTH + f"\terrno : {os.strerror(errno.ENOENT)}\n"
        # "errno" starts at the same column as the level label
        label_col = visible_width("[2013-12-01 09:05:03]\t")
        assert visible_width(suffix[: suffix.index("errno")]) == label_col


class TestWrapText:
    """Test suite for 80-column line wrapping."""

    def test_continuation_indent_aligns_with_body(self):
        assert visible_width(CONTINUATION_INDENT) == visible_width(HEADER) == 32

    def test_short_line_is_unchanged(self):
        text = HEADER + "short message"
        assert wrap_text(text) == text + "\n"

    def test_long_line_is_wrapped_at_spaces(self):
        body = " ".join(f"word{i:02d}" for i in range(30))
        wrapped = wrap_text(HEADER + body)
        lines = wrapped.rstrip("\n").split("\n")

        assert len(lines) > 1
        assert all(visible_width(line) <= 80 for line in lines)
        assert all(line.startswith(CONTINUATION_INDENT) for line in lines[1:])
        # No word was split or lost
        assert wrapped.split() == (HEADER + body).split()

    def test_breaks_at_last_space_in_window(self):
        first = "a" * 40
        second = "b" * 8
        wrapped = wrap_text(HEADER + f"{first} {second} cccc")
        lines = wrapped.rstrip("\n").split("\n")
        # 32 + 40 + 1 + 8 = 81 columns: "bbbbbbbb" moves to the next line
        assert lines[0] == HEADER + first
        assert lines[1] == CONTINUATION_INDENT + f"{second} cccc"

    def test_word_without_space_is_not_split(self):
        word = "x" * 120
        wrapped = wrap_text(word)
        assert wrapped == word + "\n"

    def test_overlong_word_breaks_after_the_word(self):
        word = "x" * 100
        wrapped = wrap_text(f"{word} tail")
        assert wrapped == f"{word}\n{CONTINUATION_INDENT}tail\n"

    def test_header_is_never_broken_off_its_body(self):
        word = "x" * 100
        assert wrap_text(HEADER + word, body_start=len(HEADER)) == HEADER + word + "\n"
        assert wrap_text(f"{HEADER}{word} tail", body_start=len(HEADER)) == (
            f"{HEADER}{word}\n{CONTINUATION_INDENT}tail\n"
        )

    def test_body_start_only_applies_to_the_first_line(self):
        long_line = " ".join(["abcdefghij"] * 12)
        wrapped = wrap_text(f"{HEADER}first\n{long_line}", body_start=len(HEADER))
        lines = wrapped.rstrip("\n").split("\n")
        assert lines[0] == HEADER + "first"
        assert len(lines) > 2
        assert all(visible_width(line) <= 80 for line in lines)

    def test_exactly_one_trailing_newline(self):
        assert wrap_text(HEADER + "done\n\n\n") == HEADER + "done\n"
        assert wrap_text("") == "\n"

    def test_embedded_lines_are_wrapped_independently(self):
        long_line = " ".join(["abcdefghij"] * 12)
        wrapped = wrap_text(f"short\n{long_line}")
        lines = wrapped.rstrip("\n").split("\n")
        assert lines[0] == "short"
        assert all(visible_width(line) <= 80 for line in lines)

    def test_custom_width(self):
        wrapped = wrap_text("aaa bbb ccc", width=7, indent="")
        assert wrapped == "aaa bbb\nccc\n"
