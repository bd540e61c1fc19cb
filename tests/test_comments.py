"""Tests for comments module."""

import pytest

from devports.comments import (
    C_STYLE,
    HASH_STYLE,
    CommentStyle,
    LexState,
    Range,
    comment_style_for,
    find_comment_ranges,
    transition,
)


def _comments(text, filename=None):
    return [text[r.start : r.end] for r in find_comment_ranges(text, filename)]


@pytest.mark.parametrize(
    "filename,style",
    [
        (None, HASH_STYLE),
        (".env", HASH_STYLE),
        (".env.devports", HASH_STYLE),
        ("docker-compose.yml.devports", HASH_STYLE),
        ("config/app.ts", C_STYLE),
        ("Main.JAVA", C_STYLE),
        ("settings.json", CommentStyle(line="//")),
        ("index.html.devports", CommentStyle(block_start="<!--", block_end="-->")),
        ("schema.sql", CommentStyle(line="--", block_start="/*", block_end="*/")),
        ("Dockerfile", HASH_STYLE),
        ("notes.unknown", HASH_STYLE),
    ],
)
def test_comment_style_for(filename, style):
    """Test extension to comment style mapping."""
    assert comment_style_for(filename) == style


def test_transition_quotes():
    """Test that quotes open and close only their own string."""
    assert transition(LexState.CODE, '"') is LexState.DOUBLE
    assert transition(LexState.DOUBLE, "'") is LexState.DOUBLE
    assert transition(LexState.DOUBLE, '"') is LexState.CODE
    assert transition(LexState.CODE, "'") is LexState.SINGLE
    assert transition(LexState.SINGLE, '"') is LexState.SINGLE
    assert transition(LexState.SINGLE, "'") is LexState.CODE


def test_transition_escapes():
    """Test that a backslash inside a string escapes the next character."""
    assert transition(LexState.DOUBLE, "\\") is LexState.DOUBLE_ESCAPE
    assert transition(LexState.DOUBLE_ESCAPE, '"') is LexState.DOUBLE
    assert transition(LexState.SINGLE, "\\") is LexState.SINGLE_ESCAPE
    assert transition(LexState.SINGLE_ESCAPE, "\\") is LexState.SINGLE
    # Backslash outside a string is an ordinary character
    assert transition(LexState.CODE, "\\") is LexState.CODE


def test_hash_line_comment():
    """Test hash comments run to the end of the line."""
    text = "A=1 # first\n# second\nB=2"

    assert _comments(text) == ["# first", "# second"]


def test_line_comment_at_end_of_text():
    """Test a final comment without a newline."""
    assert find_comment_ranges("A=1 # tail") == [Range(4, 10)]


def test_hash_inside_string_is_not_comment():
    """Test that markers inside quotes are ignored."""
    text = "PASS=\"a#b\" # real\nX='c#d'"

    assert _comments(text) == ["# real"]


def test_escaped_quote_keeps_string_open():
    """Test that an escaped quote does not end the string."""
    text = 'MSG="say \\"hi\\" # not a comment" # comment'

    assert _comments(text) == ["# comment"]


def test_double_slash_inside_string():
    """Test URL slashes inside a string are not a comment."""
    text = 'const s = "http://x"; // real {devports:api:y}'

    assert _comments(text, "app.ts") == ["// real {devports:api:y}"]


def test_block_comment():
    """Test block comments include their end marker."""
    text = "a /* one\ntwo */ b /* three */"

    assert _comments(text, "main.c") == ["/* one\ntwo */", "/* three */"]


def test_unterminated_block_comment_runs_to_end():
    """Test an unterminated block comment covers the rest of the text."""
    text = "a /* open // x\n b"

    ranges = find_comment_ranges(text, "main.go")

    assert ranges == [Range(2, len(text))]


def test_html_comment():
    """Test HTML comments and that # is not a marker there."""
    text = "<p>#{devports:api:web}</p><!-- {devports:api:old} -->"

    assert _comments(text, "index.html") == ["<!-- {devports:api:old} -->"]


def test_sql_comments():
    """Test SQL line and block comments."""
    text = "SELECT 1; -- note\n/* block */ SELECT '--';"

    assert _comments(text, "q.sql") == ["-- note", "/* block */"]


def test_ranges_are_ordered_and_disjoint():
    """Test range ordering."""
    ranges = find_comment_ranges("x // a\ny /* b */ z // c", "a.js")

    assert all(a.end <= b.start for a, b in zip(ranges, ranges[1:]))


def test_no_comments():
    """Test text without comments."""
    assert find_comment_ranges("PORT=5432\nHOST=localhost\n") == []
