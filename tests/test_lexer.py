"""Tests for the tag lexer."""

import pytest

from tagnote.lexer import (
    TAG_MARKER,
    CommentDialect,
    Cursor,
    parse_line,
    parse_tags,
    skip_comments,
    skip_whitespace,
    take_token,
)


class TestCursor:
    """Test Cursor helpers."""

    def test_empty_cursor_is_falsy(self):
        assert not Cursor("")
        assert Cursor("x")

    def test_advance_clamps_to_end(self):
        cur = Cursor("abc")
        cur.advance(10)
        assert cur.pos == 3
        assert cur.rest == ""
        assert cur.peek() == ""

    def test_at_marker(self):
        assert Cursor("#: a").at_marker()
        assert not Cursor("# : a").at_marker()
        assert TAG_MARKER == "#:"


class TestSkipWhitespace:
    """Test whitespace skipping."""

    def test_skips_whole_set(self):
        cur = Cursor(" \t\v\r\nx")
        assert skip_whitespace(cur) is True
        assert cur.peek() == "x"

    def test_no_whitespace(self):
        cur = Cursor("x ")
        assert skip_whitespace(cur) is False
        assert cur.pos == 0

    def test_empty(self):
        assert skip_whitespace(Cursor("")) is False

    def test_form_feed_is_not_whitespace(self):
        cur = Cursor("\fx")
        assert skip_whitespace(cur) is False


class TestSkipComments:
    """Test comment opener skipping."""

    def test_dialect_order(self):
        assert list(CommentDialect) == [
            CommentDialect.C,
            CommentDialect.LISP,
            CommentDialect.LATEX,
            CommentDialect.SHELL,
        ]

    @pytest.mark.parametrize(
        "text",
        [
            "// #: x",
            "/* #: x",
            "/** #: x",
            "/// #: x",
            ";;; #: x",
            "% #: x",
            "%% #: x",
            "# #: x",
            "## #: x",
        ],
    )
    def test_stops_at_marker(self, text: str):
        cur = Cursor(text)
        assert skip_comments(cur) is True
        assert cur.rest == "#: x"

    def test_marker_is_never_eaten(self):
        cur = Cursor("#: x")
        assert skip_comments(cur) is False
        assert cur.pos == 0

    def test_leading_whitespace_before_marker(self):
        cur = Cursor("   #: x")
        assert skip_comments(cur) is True
        assert cur.rest == "#: x"

    def test_marker_glued_to_opener(self):
        cur = Cursor("//#: x")
        assert skip_comments(cur) is True
        assert cur.at_marker()

    def test_shell_comment_with_space_before_colon(self):
        cur = Cursor("# :alpha")
        skip_comments(cur)
        assert cur.rest == ":alpha"

    def test_no_comment(self):
        cur = Cursor("plain text")
        assert skip_comments(cur) is False
        assert cur.pos == 0


class TestParseTags:
    """Test tag tokenization."""

    def test_dedup_keeps_first_seen_order(self):
        assert parse_tags("foo bar foo baz bar") == ["foo", "bar", "baz"]

    def test_mixed_whitespace(self):
        assert parse_tags("  a\tb\v c\r\n") == ["a", "b", "c"]

    def test_empty(self):
        assert parse_tags("") == []
        assert parse_tags("   ") == []

    def test_case_sensitive(self):
        assert parse_tags("Tag tag TAG") == ["Tag", "tag", "TAG"]

    def test_accepts_cursor(self):
        cur = Cursor("#: one two")
        cur.advance(2)
        assert parse_tags(cur) == ["one", "two"]
        assert not cur

    def test_take_token(self):
        cur = Cursor("path/to/file.md  #: x")
        assert take_token(cur) == "path/to/file.md"
        assert cur.peek() == " "


class TestParseLine:
    """Test line-level tag detection."""

    def test_bare_marker_line(self):
        assert parse_line("#: alpha beta") == ["alpha", "beta"]

    def test_space_between_hash_and_colon(self):
        assert parse_line("# :alpha") == []

    def test_marker_after_comment_text(self):
        assert parse_line("# this is shell comment #: tag1") == []

    def test_c_comment(self):
        assert parse_line("// #: released draft") == ["released", "draft"]

    def test_block_comment(self):
        assert parse_line("/* #: a b */") == ["a", "b", "*/"]

    def test_lisp_and_latex(self):
        assert parse_line(";; #: lisp") == ["lisp"]
        assert parse_line("% #: paper") == ["paper"]

    def test_interleaved_openers(self):
        assert parse_line("  ; // % # #: mixed") == ["mixed"]

    def test_shell_comment_before_marker(self):
        assert parse_line("##: x") == ["x"]

    def test_marker_not_at_start(self):
        assert parse_line("text #: x") == []

    def test_empty_and_blank(self):
        assert parse_line("") == []
        assert parse_line(" \t\r") == []
        assert parse_line("//") == []

    def test_marker_without_tags(self):
        assert parse_line("#:") == []

    def test_duplicates_dropped(self):
        assert parse_line("#: a b a") == ["a", "b"]
