"""Tests for terminal-style tool call summaries."""

import json

from timeline.tool_output import (
    DEFAULT_WRAP_COLUMN,
    build_simplified_tool_text,
    wrap_long_lines,
)


class TestWrapLongLines:
    """Tests for hard line wrapping."""

    def test_short_lines_are_untouched(self):
        assert wrap_long_lines("a\nbb\n") == "a\nbb\n"

    def test_wraps_at_default_column(self):
        wrapped = wrap_long_lines("x" * 250)

        assert DEFAULT_WRAP_COLUMN == 120
        assert wrapped.split("\n") == ["x" * 120, "x" * 120, "x" * 10]

    def test_wraps_at_custom_column(self):
        assert wrap_long_lines("abcdef\nab", 4) == "abcd\nef\nab"

    def test_line_at_limit_is_not_split(self):
        assert wrap_long_lines("abcd", 4) == "abcd"


class TestBuildSimplifiedToolText:
    """Tests for the command/output/error priority."""

    def test_command_and_raw_output(self):
        assert build_simplified_tool_text({"command": "ls"}, "a.txt", None) == "$ ls\na.txt"

    def test_error_wins_with_command(self):
        text = build_simplified_tool_text(
            {"command": "rm x"}, json.dumps({"output": "ignored"}), "denied"
        )

        assert text == "$ rm x\ndenied"

    def test_error_without_command(self):
        assert build_simplified_tool_text(None, None, "boom") == "boom"

    def test_command_recovered_from_result(self):
        result = json.dumps({"command": "pwd", "output": "/home"})

        assert build_simplified_tool_text(None, result, None) == "$ pwd\n/home"

    def test_args_command_takes_precedence(self):
        result = json.dumps({"command": "ls", "output": "x"})

        assert build_simplified_tool_text({"command": "ls -a"}, result, None) == "$ ls -a\nx"

    def test_output_only(self):
        assert build_simplified_tool_text(None, json.dumps({"output": "done"}), None) == "done"

    def test_command_only(self):
        assert build_simplified_tool_text({"command": "  true "}, None, None) == "$ true"

    def test_structured_result_without_output_shows_nothing(self):
        assert build_simplified_tool_text(None, json.dumps({"title": "x"}), None) is None

    def test_nothing_to_show(self):
        assert build_simplified_tool_text(None, None, None) is None
        assert build_simplified_tool_text({}, "", None) is None
        assert build_simplified_tool_text({"command": 5}, None, None) is None

    def test_output_is_wrapped(self):
        text = build_simplified_tool_text({"command": "cat big"}, "x" * 130, None)

        assert text == "$ cat big\n" + "x" * 120 + "\n" + "x" * 10

    def test_custom_wrap_column(self):
        text = build_simplified_tool_text(None, None, "abcdefgh", max_line_length=5)

        assert text == "abcde\nfgh"

    def test_truncated_result_recovers_command(self):
        text = build_simplified_tool_text(
            None, '{"command": "npm test", "output": "PASS', None
        )

        assert text == "$ npm test"
