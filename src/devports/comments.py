"""Comment detection for template files.

Finds the character ranges of a document that are comments, so that
placeholders inside them are left alone. String literals are tracked so
comment markers inside quotes are not mistaken for comments.
"""

import os
from dataclasses import dataclass
from enum import Enum

TEMPLATE_SUFFIX = ".devports"


@dataclass(frozen=True)
class CommentStyle:
    """Comment markers for one family of file types."""

    line: str | None = None
    block_start: str | None = None
    block_end: str | None = None


@dataclass(frozen=True)
class Range:
    """Half-open [start, end) character range."""

    start: int
    end: int

    def contains(self, start: int, end: int) -> bool:
        return self.start <= start and end <= self.end


HASH_STYLE = CommentStyle(line="#")
C_STYLE = CommentStyle(line="//", block_start="/*", block_end="*/")

COMMENT_STYLES: dict[str, CommentStyle] = {
    **dict.fromkeys(
        ["env", "sh", "bash", "zsh", "conf", "config", "yml", "yaml", "py", "rb", "r"],
        HASH_STYLE,
    ),
    **dict.fromkeys(
        [
            "js", "jsx", "ts", "tsx", "java", "c", "cpp", "cc", "cxx", "h", "hpp",
            "cs", "php", "go", "rs", "scala", "swift",
        ],
        C_STYLE,
    ),
    # Not valid JSON, but tolerated by many parsers
    "json": CommentStyle(line="//"),
    **dict.fromkeys(
        ["html", "xml", "svg"], CommentStyle(block_start="<!--", block_end="-->")
    ),
    "sql": CommentStyle(line="--", block_start="/*", block_end="*/"),
    "lua": CommentStyle(line="--"),
    "vim": CommentStyle(line='"'),
}


def comment_style_for(filename: str | None = None) -> CommentStyle:
    """Get the comment style for a file name.

    A trailing ``.devports`` suffix is ignored, so ``.env.devports`` uses
    the ``env`` style. Unknown or missing names use ``#`` line comments.

    Args:
        filename: File name or path

    Returns:
        CommentStyle for the file
    """
    if not filename:
        return HASH_STYLE
    name = os.path.basename(filename)
    if name.endswith(TEMPLATE_SUFFIX):
        name = name[: -len(TEMPLATE_SUFFIX)]
    ext = name.rsplit(".", 1)[-1].lower()
    return COMMENT_STYLES.get(ext, HASH_STYLE)


class LexState(Enum):
    """Quote/escape state of the scanner."""

    CODE = "code"
    SINGLE = "single"
    DOUBLE = "double"
    SINGLE_ESCAPE = "single_escape"
    DOUBLE_ESCAPE = "double_escape"

    @property
    def in_string(self) -> bool:
        return self is not LexState.CODE


_ESCAPED = {LexState.SINGLE_ESCAPE: LexState.SINGLE, LexState.DOUBLE_ESCAPE: LexState.DOUBLE}
_ESCAPE = {LexState.SINGLE: LexState.SINGLE_ESCAPE, LexState.DOUBLE: LexState.DOUBLE_ESCAPE}


def transition(state: LexState, char: str) -> LexState:
    """Advance the quote/escape state by one character.

    Inside a string a backslash escapes the next character. A quote opens
    a string from CODE and closes only a string opened by the same quote.

    Args:
        state: Current state
        char: Character being consumed

    Returns:
        The state after consuming ``char``
    """
    if state in _ESCAPED:
        return _ESCAPED[state]
    if char == "\\" and state in _ESCAPE:
        return _ESCAPE[state]
    if char == '"':
        if state is LexState.CODE:
            return LexState.DOUBLE
        if state is LexState.DOUBLE:
            return LexState.CODE
    elif char == "'":
        if state is LexState.CODE:
            return LexState.SINGLE
        if state is LexState.SINGLE:
            return LexState.CODE
    return state


def find_comment_ranges(text: str, filename: str | None = None) -> list[Range]:
    """Find comment ranges in a document.

    Line comments run up to (not including) the next newline. Block
    comments include their end marker; an unterminated block comment runs
    to the end of the text.

    Args:
        text: Document content
        filename: Name used to pick the comment style

    Returns:
        Non-overlapping ranges in document order
    """
    style = comment_style_for(filename)
    ranges: list[Range] = []
    state = LexState.CODE
    i = 0
    length = len(text)

    while i < length:
        char = text[i]

        if state is LexState.CODE and char not in "\"'":
            if style.line and text.startswith(style.line, i):
                end = text.find("\n", i)
                if end == -1:
                    end = length
                ranges.append(Range(i, end))
                i = end
                continue

            if style.block_start and style.block_end and text.startswith(style.block_start, i):
                close = text.find(style.block_end, i + len(style.block_start))
                if close == -1:
                    ranges.append(Range(i, length))
                    break
                end = close + len(style.block_end)
                ranges.append(Range(i, end))
                i = end
                continue

        state = transition(state, char)
        i += 1

    return ranges


def in_comment(ranges: list[Range], start: int, end: int) -> bool:
    """Check whether [start, end) lies entirely inside one comment range."""
    return any(r.contains(start, end) for r in ranges)
