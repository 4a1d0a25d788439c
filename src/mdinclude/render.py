from dataclasses import dataclass, field
from enum import Enum

from mdinclude.diagnostics import Diagnostic
from mdinclude.graph import Document, Edge, InclusionGraph
from mdinclude.scanner import Directive

_BLOCK_SEPARATOR = "\n\n"


class RenderMode(str, Enum):
    """Output shape: one block per document, or in-place substitution."""

    FLAT = "flat"
    HIERARCHICAL = "hierarchical"


@dataclass
class RenderContext:
    """State threaded through a single render."""

    mode: RenderMode
    encountered: list[str] = field(default_factory=list)
    buffer: list[str] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def emit(self, text: str) -> None:
        """Append ``text`` to the output buffer."""
        self.buffer.append(text)

    @property
    def text(self) -> str:
        """Everything emitted so far."""
        return "".join(self.buffer)


def render(graph: InclusionGraph, mode: RenderMode | str) -> RenderContext:
    """
    Render a built graph in the requested mode.

    Args:
        graph: Graph produced by GraphBuilder.build.
        mode: "flat" or "hierarchical".

    Returns:
        The render context; ``context.text`` is the output.
    """
    context = RenderContext(RenderMode(mode), diagnostics=list(graph.diagnostics))
    if context.mode is RenderMode.FLAT:
        render_flat(graph, context)
    else:
        render_hierarchical(graph, context)
    return context


def render_flat(graph: InclusionGraph, context: RenderContext) -> None:
    """
    Emit one boundary-marked block per distinct document, in first-encounter order.

    Directives stay as written; those whose edge carries a diagnostic (a
    failed resolution or load, or a cycle) are replaced by their error marker.
    """
    for path in graph.order:
        if path in context.encountered:
            continue
        context.encountered.append(path)

        if context.buffer:
            context.emit(_BLOCK_SEPARATOR)
        context.emit(f"--- File: {path} ---\n")
        context.emit(_flat_body(graph.documents[path], graph.edges[path]))
        context.emit(f"\n--- End of File: {path} ---")


def render_hierarchical(graph: InclusionGraph, context: RenderContext) -> None:
    """
    Emit the root document with every directive replaced in place by its target.

    Documents are rendered in finish order, so every non-cyclic target is
    already rendered when a document that includes it is reached. Each
    rendering is reused for every occurrence; the output still repeats it.

    Cycle markers follow the edges the graph builder flagged while
    traversing, not the chain of includes being rendered. An edge flagged
    once shows the marker at every occurrence, even where its target is not
    an enclosing document: with ``a: @b.md @c.md``, ``b: @c.md`` and
    ``c: @b.md``, the copy of ``c`` spliced directly into ``a`` still shows
    the cycle marker for ``b``.
    """
    rendered: dict[str, str] = {}
    for path in graph.finish_order:
        rendered[path] = _substitute(graph.documents[path], graph.edges[path], rendered)

    context.encountered.extend(graph.order)
    context.emit(_wrap_import(graph.root, rendered[graph.root]))


def _flat_body(document: Document, edges: list[Edge]) -> str:
    parts = []
    pending = iter(edges)
    for span in document.spans:
        if isinstance(span, Directive):
            edge = next(pending)
            parts.append(span.text if edge.diagnostic is None else edge.diagnostic.marker)
        else:
            parts.append(span.text)
    return "".join(parts)


def _substitute(document: Document, edges: list[Edge], rendered: dict[str, str]) -> str:
    parts = []
    pending = iter(edges)
    for span in document.spans:
        if not isinstance(span, Directive):
            parts.append(span.text)
            continue
        edge = next(pending)
        if edge.diagnostic is not None:
            parts.append(edge.diagnostic.marker)
        else:
            parts.append(_wrap_import(span.written_path, rendered[edge.target]))
    return "".join(parts)


def _wrap_import(path: str, content: str) -> str:
    return (
        f"<!-- Imported from: {path} -->\n"
        f"{content}\n"
        f"<!-- End of import from: {path} -->"
    )
