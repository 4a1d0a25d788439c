from mdinclude import Directive, Literal, directives, scan


def _paths(text: str) -> list[str]:
    return [d.raw_path for d in directives(scan(text))]


def test_plain_text_is_single_literal() -> None:
    """Test that text without directives is one literal span."""
    text = "# Title\n\nNo includes here.\n"
    assert scan(text) == [Literal(text)]


def test_empty_text() -> None:
    """Test that empty text produces no spans."""
    assert scan("") == []


def test_directive_inside_sentence() -> None:
    """Test a directive surrounded by text on one line."""
    spans = scan("See @README.md for details.")

    assert spans == [
        Literal("See "),
        Directive("README.md", False, 1, "@README.md"),
        Literal(" for details."),
    ]


def test_directive_at_line_start() -> None:
    """Test that a directive can start a line."""
    spans = scan("@docs/guide.md\nafter\n")

    assert spans[0] == Directive("docs/guide.md", False, 1, "@docs/guide.md")
    assert spans[1] == Literal("\nafter\n")


def test_at_mid_word_is_literal() -> None:
    """Test that an @ inside a word (e-mail address) is not a directive."""
    assert _paths("Mail user@example.com or team@corp.io") == []


def test_lone_at_is_literal() -> None:
    """Test that an @ followed by whitespace or end of line is literal text."""
    text = "at @ the end @\n@\n"
    assert _paths(text) == []
    assert scan(text) == [Literal(text)]


def test_multiple_directives_on_one_line() -> None:
    """Test that every directive on a line is recognized left to right."""
    spans = scan("@a.md @b.md and @c.md\n")

    assert _paths("@a.md @b.md and @c.md\n") == ["a.md", "b.md", "c.md"]
    assert spans[1] == Literal(" ")
    assert spans[3] == Literal(" and ")


def test_tab_before_directive() -> None:
    """Test that any whitespace may precede a directive."""
    assert _paths("\t@a.md") == ["a.md"]


def test_escaped_space_in_path() -> None:
    """Test that a backslash-escaped space stays in the path without the backslash."""
    spans = scan("Read @my\\ notes.md now")

    directive = spans[1]
    assert directive.raw_path == "my notes.md"
    assert directive.escaped is True
    assert directive.text == "@my\\ notes.md"
    assert directive.written_path == "my\\ notes.md"
    assert spans[2] == Literal(" now")


def test_backslash_before_newline_does_not_join_lines() -> None:
    """Test that a newline always ends the directive path."""
    spans = scan("@a.md\\\nnext")

    assert spans[0].raw_path == "a.md\\"
    assert spans[0].escaped is False


def test_fenced_block_suppresses_directives() -> None:
    """Test that directives inside a fenced code block stay literal."""
    text = "# Test\n\n```bash\n@README.md\n```\n\n@other.md\n"

    found = list(directives(scan(text)))

    assert [d.raw_path for d in found] == ["other.md"]
    assert found[0].line == 7


def test_indented_fence_toggles() -> None:
    """Test that an indented fence line still opens and closes a block."""
    text = "  ```\n@inside.md\n  ```\n@outside.md\n"
    assert _paths(text) == ["outside.md"]


def test_unclosed_fence_suppresses_rest() -> None:
    """Test that an unclosed fence suppresses directives to the end of the document."""
    assert _paths("@a.md\n```\n@b.md\n@c.md\n") == ["a.md"]


def test_inline_code_suppresses_directive() -> None:
    """Test that a directive inside inline code is literal."""
    assert _paths("Use the `@README.md` file, or @guide.md") == ["guide.md"]


def test_double_backtick_inline_code() -> None:
    """Test that inline code delimited by double backticks also suppresses directives."""
    assert _paths("Run ``echo `x` @a.md`` then @b.md") == ["b.md"]


def test_unmatched_backtick_is_literal() -> None:
    """Test that a lone backtick does not open a code span."""
    assert _paths("a ` stray @b.md") == ["b.md"]


def test_directive_path_stops_at_inline_code() -> None:
    """Test that a directive path ends where an inline code span begins."""
    spans = scan("@a.md`code`")

    assert spans[0] == Directive("a.md", False, 1, "@a.md")
    assert spans[1] == Literal("`code`")


def test_line_numbers() -> None:
    """Test that directives carry their 1-based line."""
    found = list(directives(scan("one\ntwo @b.md\n\n@d.md")))
    assert [(d.raw_path, d.line) for d in found] == [("b.md", 2), ("d.md", 4)]


def test_spans_reproduce_input() -> None:
    """Test that joining span text gives back the original document."""
    text = (
        "# Doc\n"
        "@a.md and @my\\ file.md\n"
        "```\n@skip.md\n```\n"
        "`@inline.md` x@y @\n"
        "tail @z.md"
    )
    assert "".join(span.text for span in scan(text)) == text
