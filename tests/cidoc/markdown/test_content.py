"""Tests for the Content value type."""

import re

import pytest

from cidoc.exceptions import ContentTooLargeError
from cidoc.markdown.content import REGEX_SAFE_MAX_BYTES, Content


class TestConstruction:
    """Tests for creating and comparing content."""

    def test_from_str_and_bytes_are_equal(self) -> None:
        assert Content("héllo") == Content("héllo".encode("utf-8"))

    def test_of_returns_same_instance(self) -> None:
        content = Content("x")
        assert Content.of(content) is content

    def test_empty(self) -> None:
        empty = Content.empty()
        assert empty.is_empty()
        assert empty.size() == 0
        assert not empty

    def test_compares_with_str(self) -> None:
        assert Content("abc") == "abc"
        assert Content("abc") != "abd"

    def test_hashes_like_the_equal_str(self) -> None:
        assert hash(Content("héllo")) == hash("héllo")
        assert Content("a") in {"a"}
        assert "a" in {Content("a")}

    def test_does_not_compare_with_bytes(self) -> None:
        assert Content("a") != b"a"
        assert Content("a").equals(b"a")

    def test_invalid_type(self) -> None:
        with pytest.raises(TypeError):
            Content(42)  # type: ignore[arg-type]

    def test_size_is_bytes_and_char_length_is_codepoints(self) -> None:
        content = Content("a😊")
        assert content.size() == 5
        assert content.char_length() == 2


class TestSearching:
    """Tests for search, search_last and includes."""

    def test_search(self) -> None:
        content = Content("abcabc")
        assert content.search("c") == 2
        assert content.search("c", 3) == 5
        assert content.search("z") == -1

    def test_search_byte(self) -> None:
        assert Content("a\nb").search(0x0A) == 1

    def test_search_last(self) -> None:
        content = Content("abcabc")
        assert content.search_last("a") == 3
        assert content.search_last("a", 2) == 0
        assert content.search_last("a", -1) == -1

    def test_includes_at(self) -> None:
        content = Content("a|b")
        assert content.includes_at("|", 1)
        assert content.includes_at(0x7C, 1)
        assert not content.includes_at("|", 5)
        assert not content.includes_at(300, 1)

    def test_starts_and_ends_with(self) -> None:
        content = Content("<!-- x -->")
        assert content.starts_with("<!--")
        assert content.starts_with("x", 5)
        assert content.ends_with("-->")


class TestBuilding:
    """Tests for append, join, pad_end and slicing."""

    def test_append_many(self) -> None:
        result = Content("a").append("b", b"c", Content("d"))
        assert result == "abcd"

    def test_append_nothing_returns_self(self) -> None:
        content = Content("a")
        assert content.append() is content

    def test_append_does_not_mutate(self) -> None:
        content = Content("a")
        content.append("b")
        assert content == "a"

    def test_join(self) -> None:
        assert Content(", ").join(["a", Content("b"), b"c"]) == "a, b, c"

    def test_pad_end_counts_codepoints(self) -> None:
        assert Content("é").pad_end(3) == "é  "
        assert Content("abc").pad_end(2) == "abc"

    def test_slice_never_splits_multibyte_characters(self) -> None:
        content = Content("a😊b😊c")
        for start in range(-6, 7):
            for end in range(-6, 7):
                part = content.slice(start, end)
                part.to_bytes().decode("utf-8")

    def test_slice_codepoints(self) -> None:
        content = Content("a😊b")
        assert content.slice(1, 2) == "😊"
        assert content.slice(-1) == "b"
        assert content.slice(2, 1).is_empty()

    def test_split_lines(self) -> None:
        lines = Content("a\r\nb\nc\n").split_lines()
        assert lines == [Content("a"), Content("b"), Content("c"), Content("")]

    def test_split_lines_empty(self) -> None:
        assert Content.empty().split_lines() == [Content("")]


class TestTransformations:
    """Tests for trim, escape and related transformations."""

    def test_trim_variants(self) -> None:
        content = Content(" \t a b \r\n")
        assert content.trim() == "a b"
        assert content.trim_start() == "a b \r\n"
        assert content.trim_end() == " \t a b"

    def test_escape_characters(self) -> None:
        assert Content("a*b").escape("*") == "a\\*b"
        assert Content("[x]").escape("[]") == "\\[x\\]"

    def test_escape_tokens(self) -> None:
        assert Content("a ** b * c").escape(["**"]) == "a \\*\\* b * c"

    def test_escape_custom_character(self) -> None:
        assert Content("a|b").escape("|", "#") == "a#|b"

    def test_escape_empty(self) -> None:
        assert Content.empty().escape("*").is_empty()

    @pytest.mark.parametrize("text", ["a*b", "**", "no markers", "x|y*z", "😊*😊"])
    def test_unescape_reverses_escape(self, text: str) -> None:
        content = Content(text)
        assert content.escape("*|").unescape("*|") == content

    def test_html_escape(self) -> None:
        assert Content("<a & b>").html_escape() == "&lt;a &amp; b&gt;"

    def test_to_upper(self) -> None:
        assert Content("abc é").to_upper() == "ABC É"

    def test_replace_literal(self) -> None:
        assert Content("a-b-c").replace("-", "+") == "a+b+c"
        assert Content("a-b-c").replace("-", "+", 1) == "a+b-c"

    def test_replace_pattern_with_callable(self) -> None:
        result = Content("x1 y22").replace(re.compile(r"\d+"), lambda m: f"<{m.group(0)}>")
        assert result == "x<1> y<22>"


class TestRegexGuard:
    """Tests for the regular expression size limit."""

    def test_test_and_match(self) -> None:
        content = Content("version 1.2.3")
        assert content.test(r"\d+\.\d+")
        match = content.match(r"(\d+)\.(\d+)")
        assert match is not None
        assert match.group(1) == "1"

    def test_exec_regexp_from_position(self) -> None:
        match = Content("a1 b2").exec_regexp(r"[a-z]\d", 1)
        assert match is not None
        assert match.group(0) == "b2"

    def test_empty_content_never_matches(self) -> None:
        assert not Content.empty().test(".*")
        assert Content.empty().match(".*") is None

    def test_oversized_content_raises(self) -> None:
        content = Content("a" * (REGEX_SAFE_MAX_BYTES + 1))
        with pytest.raises(ContentTooLargeError) as exc_info:
            content.test("a")
        assert exc_info.value.limit == REGEX_SAFE_MAX_BYTES
        assert exc_info.value.size == REGEX_SAFE_MAX_BYTES + 1

    def test_oversized_pattern_replace_raises(self) -> None:
        content = Content("a" * (REGEX_SAFE_MAX_BYTES + 1))
        with pytest.raises(ContentTooLargeError):
            content.replace(re.compile("a"), "b")

    def test_content_at_limit_is_allowed(self) -> None:
        assert Content("a" * REGEX_SAFE_MAX_BYTES).test("a")
