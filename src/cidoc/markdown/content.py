"""Immutable, UTF-8 safe content value used by every formatting component.

`Content` wraps a `bytes` object and exposes the operations the formatter,
table layout and merge engine need. Byte offsets are used for searching
(`search`, `includes_at`, `slice_bytes`); `slice` is codepoint-indexed and
never splits a multi-byte character.

Example:
    title = Content("My Action")
    heading = Content("# ").append(title, "\\n")
    assert str(heading) == "# My Action\\n"
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from functools import lru_cache
from typing import Union

from cidoc.exceptions import ContentTooLargeError

SPACE = 0x20
TAB = 0x09
NEW_LINE = 0x0A
CARRIAGE_RETURN = 0x0D

WHITESPACE = b" \t\n\r"

# Regular expressions are never run against content larger than this.
REGEX_SAFE_MAX_BYTES = 24 * 1024

ContentLike = Union[str, bytes, "Content"]
Pattern = Union[str, "re.Pattern[str]"]


def _to_bytes(value: ContentLike) -> bytes:
    if isinstance(value, Content):
        return value._data
    if isinstance(value, str):
        return value.encode("utf-8", "surrogateescape")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(
        f"Invalid content type; must be str, bytes or Content, got {type(value).__name__}"
    )


def _escaped(token: str, escape_char: str) -> str:
    return "".join(escape_char + char for char in token)


def _tokens(chars: str | Sequence[str]) -> tuple[str, ...]:
    """Normalize escape targets: a str is a set of characters, a sequence holds tokens."""
    if isinstance(chars, str):
        return tuple(dict.fromkeys(chars))
    return tuple(dict.fromkeys(token for token in chars if token))


@lru_cache(maxsize=128)
def _token_pattern(tokens: tuple[bytes, ...]) -> re.Pattern[bytes]:
    ordered = sorted(tokens, key=len, reverse=True)
    return re.compile(b"|".join(re.escape(token) for token in ordered))


class Content:
    """Immutable byte sequence interpreted as UTF-8 text.

    Every transformation returns a new instance; the wrapped bytes are
    never mutated. Two values are equal when their bytes are equal.
    """

    __slots__ = ("_data",)

    def __init__(self, value: ContentLike = b"") -> None:
        self._data = _to_bytes(value)

    @classmethod
    def empty(cls) -> Content:
        """Create an empty content value."""
        return cls(b"")

    @classmethod
    def of(cls, value: ContentLike) -> Content:
        """Create content from a str, bytes or another Content."""
        if isinstance(value, Content):
            return value
        return cls(value)

    # Inspection

    def is_empty(self) -> bool:
        return not self._data

    def size(self) -> int:
        """Size of the content in bytes."""
        return len(self._data)

    def char_length(self) -> int:
        """Number of codepoints in the content."""
        return len(str(self))

    def is_multi_line(self) -> bool:
        return b"\n" in self._data

    def to_bytes(self) -> bytes:
        return self._data

    def __bytes__(self) -> bytes:
        return self._data

    def __str__(self) -> str:
        return self._data.decode("utf-8", "surrogateescape")

    def __repr__(self) -> str:
        return f"Content({str(self)!r})"

    def __bool__(self) -> bool:
        return bool(self._data)

    def __eq__(self, other: object) -> bool:
        # Equal to another Content or to the str it decodes to; hashed like that str.
        if isinstance(other, Content):
            return self._data == other._data
        if isinstance(other, str):
            return self._data == _to_bytes(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))

    def equals(self, other: ContentLike) -> bool:
        return self._data == _to_bytes(other)

    def starts_with(self, value: ContentLike, position: int = 0) -> bool:
        return self._data.startswith(_to_bytes(value), position)

    def ends_with(self, value: ContentLike) -> bool:
        return self._data.endswith(_to_bytes(value))

    # Searching

    def search(self, needle: ContentLike | int, offset: int = 0) -> int:
        """Byte offset of the first occurrence of `needle` at or after `offset`, or -1."""
        if isinstance(needle, int):
            return self._data.find(bytes([needle]), offset)
        return self._data.find(_to_bytes(needle), offset)

    def search_last(self, needle: ContentLike | int, offset: int | None = None) -> int:
        """Byte offset of the last occurrence starting at or before `offset`, or -1."""
        target = bytes([needle]) if isinstance(needle, int) else _to_bytes(needle)
        if offset is None:
            return self._data.rfind(target)
        if offset < 0:
            return -1
        return self._data.rfind(target, 0, offset + len(target))

    def includes(self, needle: ContentLike) -> bool:
        return self.search(needle) != -1

    def includes_at(self, value: int | str, position: int) -> bool:
        """Check whether the byte at `position` equals `value`.

        `value` is a byte (0-255) or a string whose first UTF-8 byte is compared.
        """
        if position < 0 or position >= len(self._data):
            return False
        if isinstance(value, int):
            if value < 0 or value > 0xFF:
                return False
            return self._data[position] == value
        if not value:
            return False
        return self._data[position] == value.encode("utf-8")[0]

    # Building

    def append(self, *parts: ContentLike) -> Content:
        """Concatenate parts after this content in a single allocation."""
        if not parts:
            return self
        return Content(b"".join([self._data, *(_to_bytes(part) for part in parts)]))

    def join(self, parts: Iterable[ContentLike]) -> Content:
        """Join parts using this content as the separator."""
        return Content(self._data.join(_to_bytes(part) for part in parts))

    def pad_end(self, width: int, char: str = " ") -> Content:
        """Pad with `char` until the content is `width` codepoints long."""
        missing = width - self.char_length()
        if missing <= 0:
            return self
        return self.append(char * missing)

    def slice(self, start: int | None = None, end: int | None = None) -> Content:
        """Codepoint-indexed sub-range.

        Negative indices count from the end, out-of-range indices clamp,
        and `end <= start` yields empty content.
        """
        if self.is_empty():
            return self
        return Content(str(self)[start:end])

    def slice_bytes(self, start: int | None = None, end: int | None = None) -> Content:
        """Byte-indexed sub-range; callers must cut on character boundaries."""
        return Content(self._data[start:end])

    def split_lines(self) -> list[Content]:
        """Split on LF, dropping a trailing CR from each line.

        Content ending with LF yields a trailing empty line; empty content
        yields a single empty line.
        """
        lines = []
        for line in self._data.split(b"\n"):
            if line.endswith(b"\r"):
                line = line[:-1]
            lines.append(Content(line))
        return lines

    # Transformations

    def trim(self) -> Content:
        """Strip space, tab, LF and CR from both ends."""
        return Content(self._data.strip(WHITESPACE))

    def trim_start(self) -> Content:
        return Content(self._data.lstrip(WHITESPACE))

    def trim_end(self) -> Content:
        return Content(self._data.rstrip(WHITESPACE))

    def to_upper(self) -> Content:
        return Content(str(self).upper())

    def escape(self, chars: str | Sequence[str], escape_char: str = "\\") -> Content:
        """Prefix every occurrence of the given characters with `escape_char`.

        A str is treated as a set of single characters. A list or tuple holds
        tokens: each occurrence of a token gets every one of its characters
        escaped (`["**"]` turns `**` into `\\*\\*` but leaves a lone `*`).
        Scanning is left-to-right and non-overlapping, longest token first.
        """
        tokens = _tokens(chars)
        if self.is_empty() or not tokens:
            return self

        replacements = {
            token.encode("utf-8"): _escaped(token, escape_char).encode("utf-8")
            for token in tokens
        }
        pattern = _token_pattern(tuple(replacements))
        return Content(pattern.sub(lambda m: replacements[m.group(0)], self._data))

    def unescape(self, chars: str | Sequence[str], escape_char: str = "\\") -> Content:
        """Reverse `escape` for the same characters and escape character."""
        tokens = _tokens(chars)
        if self.is_empty() or not tokens:
            return self

        replacements = {
            _escaped(token, escape_char).encode("utf-8"): token.encode("utf-8")
            for token in tokens
        }
        pattern = _token_pattern(tuple(replacements))
        return Content(pattern.sub(lambda m: replacements[m.group(0)], self._data))

    def html_escape(self) -> Content:
        """Escape `&`, `<` and `>` as HTML entities."""
        if self.is_empty():
            return self
        data = self._data.replace(b"&", b"&amp;").replace(b"<", b"&lt;").replace(b">", b"&gt;")
        return Content(data)

    def replace(
        self,
        search: ContentLike | re.Pattern[str],
        replacement: ContentLike | Callable[[re.Match[str]], str] | Callable[[str], str],
        count: int = -1,
    ) -> Content:
        """Replace occurrences of `search`.

        `search` is a literal (str, bytes, Content) or a compiled pattern.
        `replacement` is a literal or a callable; for patterns the callable
        receives the match, for literals it receives the matched text.
        `count` limits the number of replacements (-1 replaces all).
        Pattern replacement is subject to the regex size limit.
        """
        if self.is_empty():
            return self

        if isinstance(search, re.Pattern):
            self._guard_regex()
            if callable(replacement):
                repl = replacement
            else:
                literal = str(Content.of(replacement))
                repl = lambda _match: literal  # noqa: E731
            return Content(search.sub(repl, str(self), count=max(count, 0)))

        needle = _to_bytes(search)
        if not needle:
            return self

        if callable(replacement):
            text = needle.decode("utf-8", "surrogateescape")
            produced = _to_bytes(replacement(text))  # type: ignore[arg-type]
            return Content(self._data.replace(needle, produced, count))

        return Content(self._data.replace(needle, _to_bytes(replacement), count))

    # Regular expressions

    def _guard_regex(self) -> None:
        if len(self._data) > REGEX_SAFE_MAX_BYTES:
            raise ContentTooLargeError(len(self._data), REGEX_SAFE_MAX_BYTES)

    def test(self, pattern: Pattern) -> bool:
        """Check whether `pattern` matches anywhere in the content."""
        if self.is_empty():
            return False
        self._guard_regex()
        return re.search(pattern, str(self)) is not None

    def match(self, pattern: Pattern) -> re.Match[str] | None:
        """First match of `pattern` anywhere in the content.

        Match positions are codepoint offsets into `str(content)`.
        """
        if self.is_empty():
            return None
        self._guard_regex()
        return re.search(pattern, str(self))

    def exec_regexp(self, pattern: Pattern, pos: int = 0) -> re.Match[str] | None:
        """First match of `pattern` starting at codepoint offset `pos`."""
        if self.is_empty():
            return None
        self._guard_regex()
        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        return compiled.search(str(self), pos)
