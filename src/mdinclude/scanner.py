import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

# A line, including its terminating newline when it has one
_LINE_PATTERN = re.compile(r"[^\n]*\n|[^\n]+")
_FENCE = "```"
_ESCAPABLE = (" ", "\t")  # newline always ends a directive


@dataclass(frozen=True)
class Literal:
    """Plain text copied to the output as written."""

    text: str


@dataclass(frozen=True)
class Directive:
    """
    An ``@path`` inclusion request.

    Attributes:
        raw_path: Path argument with escaping backslashes removed.
        escaped: Whether the path contained escaped whitespace.
        line: 1-based line the directive appears on.
        text: The directive exactly as written, ``@`` included.
    """

    raw_path: str
    escaped: bool
    line: int
    text: str

    @property
    def written_path(self) -> str:
        """Path argument as written (escapes kept)."""
        return self.text[1:]


Span = Literal | Directive


def scan(text: str) -> list[Span]:
    """
    Split document text into literal and directive spans.

    Fenced code blocks and inline code spans never produce directives.
    Joining ``span.text`` over the result gives back ``text`` unchanged.

    Args:
        text: Raw document text.

    Returns:
        Ordered list of spans.
    """
    spans: list[Span] = []
    pending: list[str] = []
    in_fence = False

    for line_no, match in enumerate(_LINE_PATTERN.finditer(text), start=1):
        line = match.group(0)

        if line.lstrip().startswith(_FENCE):
            in_fence = not in_fence
            pending.append(line)
            continue

        if in_fence:
            pending.append(line)
            continue

        code_regions = _inline_code_regions(line)
        last_end = 0
        pos = 0
        while pos < len(line):
            region_end = _region_end(code_regions, pos)
            if region_end is not None:
                pos = region_end
                continue
            if line[pos] == "@" and (pos == 0 or line[pos - 1].isspace()):
                directive, end = _read_directive(line, pos, line_no, code_regions)
                if directive is not None:
                    pending.append(line[last_end:pos])
                    if pending:
                        spans.append(Literal("".join(pending)))
                        pending = []
                    spans.append(directive)
                    last_end = pos = end
                    continue
            pos += 1
        pending.append(line[last_end:])

    joined = "".join(pending)
    if joined:
        spans.append(Literal(joined))
    return [span for span in spans if not (isinstance(span, Literal) and not span.text)]


def directives(spans: Iterable[Span]) -> Iterator[Directive]:
    """Yield only the directive spans, in document order."""
    for span in spans:
        if isinstance(span, Directive):
            yield span


def _inline_code_regions(line: str) -> list[tuple[int, int]]:
    """
    Find inline code spans on a single line.

    A run of backticks opens a span that is closed by the next run of the
    same length. A run with no matching closer is plain text.
    """
    runs = [(m.start(), m.end()) for m in re.finditer(r"`+", line)]
    regions = []
    i = 0
    while i < len(runs):
        start, end = runs[i]
        width = end - start
        closer = next(
            (k for k in range(i + 1, len(runs)) if runs[k][1] - runs[k][0] == width),
            None,
        )
        if closer is None:
            i += 1
            continue
        regions.append((start, runs[closer][1]))
        i = closer + 1
    return regions


def _region_end(regions: list[tuple[int, int]], pos: int) -> int | None:
    for start, end in regions:
        if start <= pos < end:
            return end
    return None


def _read_directive(
    line: str,
    at: int,
    line_no: int,
    code_regions: list[tuple[int, int]],
) -> tuple[Directive | None, int]:
    """
    Read the path following the ``@`` at index ``at``.

    Returns:
        The directive (or None when the ``@`` has no path) and the index
        just past it.
    """
    chars: list[str] = []
    escaped = False
    pos = at + 1
    region_starts = {start for start, _ in code_regions}

    while pos < len(line):
        char = line[pos]
        if pos in region_starts:
            break
        if char == "\\" and pos + 1 < len(line) and line[pos + 1] in _ESCAPABLE:
            chars.append(line[pos + 1])
            escaped = True
            pos += 2
            continue
        if char.isspace():
            break
        chars.append(char)
        pos += 1

    if not chars:
        return None, at + 1
    return Directive("".join(chars), escaped, line_no, line[at:pos]), pos
