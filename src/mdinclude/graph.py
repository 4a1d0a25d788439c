from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from mdinclude.diagnostics import (
    Diagnostic,
    DiagnosticKind,
    ResolutionError,
    RootDocumentError,
)
from mdinclude.resolver import PathResolver
from mdinclude.scanner import Directive, Span, directives, scan
from mdinclude.source import TextSource, decode


class NodeState(Enum):
    """Visitation state of a document during graph construction."""

    UNVISITED = "unvisited"
    IN_PROGRESS = "in_progress"
    DONE = "done"


@dataclass
class Document:
    """A document scanned once during a run, keyed by its canonical path."""

    path: str
    text: str
    spans: list[Span]

    @property
    def directory(self) -> str:
        """Canonical directory holding this document ('' at the boundary root)."""
        return PathResolver.dirname(self.path)

    @property
    def directives(self) -> list[Directive]:
        """Directive spans of this document, in order."""
        return list(directives(self.spans))


@dataclass(frozen=True)
class Edge:
    """
    A directive of one document and where it leads.

    ``target`` is None when resolution or loading failed; a cyclic edge keeps
    its target and carries a CYCLE_DETECTED diagnostic.
    """

    directive: Directive
    target: str | None
    diagnostic: Diagnostic | None = None

    @property
    def cycle(self) -> bool:
        """Whether this edge closes a cycle back to a document being included."""
        return (
            self.diagnostic is not None
            and self.diagnostic.kind is DiagnosticKind.CYCLE_DETECTED
        )

    @property
    def failed(self) -> bool:
        """Whether the target could not be resolved or loaded."""
        return self.target is None


@dataclass
class InclusionGraph:
    """Every document reachable from ``root`` plus the edges between them."""

    root: str
    documents: dict[str, Document] = field(default_factory=dict)
    edges: dict[str, list[Edge]] = field(default_factory=dict)
    order: list[str] = field(default_factory=list)  # first encounter, preorder
    finish_order: list[str] = field(default_factory=list)  # reached DONE
    diagnostics: list[Diagnostic] = field(default_factory=list)
    states: dict[str, NodeState] = field(default_factory=dict)

    def state(self, path: str) -> NodeState:
        """
        Look up the visitation state of a document.

        Args:
            path: Canonical path of the document.

        Returns:
            Its state, UNVISITED for paths never reached.
        """
        return self.states.get(path, NodeState.UNVISITED)


@dataclass
class _Frame:
    document: Document
    pending: Iterator[Directive]


class GraphBuilder:
    """Builds the inclusion graph with an iterative depth-first traversal."""

    def __init__(self, resolver: PathResolver, source: TextSource) -> None:
        """
        Initialize the builder.

        Args:
            resolver: Resolver bound to the run's root boundary.
            source: Read capability documents are loaded through.
        """
        self.resolver = resolver
        self.source = source

    def build(self, root: str) -> InclusionGraph:
        """
        Discover every document reachable from ``root``.

        Each canonical path is read and scanned at most once. Problems with
        directives are recorded on their edges and traversal continues.

        Args:
            root: Canonical path of the root document.

        Returns:
            The populated graph.

        Raises:
            RootDocumentError: If the root document cannot be read or decoded.
        """
        graph = InclusionGraph(root=root)
        # Load failures are remembered so a broken target is only read once
        failures: dict[str, tuple[DiagnosticKind, str]] = {}

        loaded = self._load(root)
        if isinstance(loaded, tuple):
            kind, detail = loaded
            msg = f"Cannot load root document {root}: {kind.value} ({detail})"
            raise RootDocumentError(msg)

        stack = [self._enter(graph, loaded)]

        while stack:
            frame = stack[-1]
            directive = next(frame.pending, None)
            if directive is None:
                path = frame.document.path
                graph.states[path] = NodeState.DONE
                graph.finish_order.append(path)
                stack.pop()
                continue

            source = frame.document.path
            edge = self._follow(graph, frame.document, directive, failures)
            graph.edges[source].append(edge)
            if edge.diagnostic is not None:
                graph.diagnostics.append(edge.diagnostic)
                continue

            target = edge.target
            if graph.state(target) is NodeState.DONE:
                continue
            stack.append(self._enter(graph, graph.documents[target]))

        return graph

    def _follow(
        self,
        graph: InclusionGraph,
        document: Document,
        directive: Directive,
        failures: dict[str, tuple[DiagnosticKind, str]],
    ) -> Edge:
        """Resolve one directive and load its target if it has not been seen."""
        source = document.path
        try:
            target = self.resolver.resolve(directive.raw_path, document.directory)
        except ResolutionError as exc:
            return Edge(directive, None, exc.to_diagnostic(source, directive.line))

        state = graph.state(target)
        if state is NodeState.IN_PROGRESS:
            diagnostic = Diagnostic(
                DiagnosticKind.CYCLE_DETECTED,
                target,
                f"{target} is already being included",
                source=source,
                line=directive.line,
            )
            return Edge(directive, target, diagnostic)
        if state is NodeState.DONE:
            return Edge(directive, target)

        if target not in failures:
            loaded = self._load(target)
            if isinstance(loaded, tuple):
                failures[target] = loaded
            else:
                # Picked up by build(), which pushes it IN_PROGRESS
                graph.documents[target] = loaded
                return Edge(directive, target)

        kind, detail = failures[target]
        return Edge(
            directive,
            None,
            Diagnostic(kind, target, detail, source=source, line=directive.line),
        )

    def _enter(self, graph: InclusionGraph, document: Document) -> _Frame:
        path = document.path
        graph.documents[path] = document
        graph.states[path] = NodeState.IN_PROGRESS
        graph.order.append(path)
        graph.edges[path] = []
        return _Frame(document, iter(document.directives))

    def _load(self, path: str) -> Document | tuple[DiagnosticKind, str]:
        """Read, decode and scan one document, or describe why it failed."""
        try:
            data = self.source.read(path)
        except FileNotFoundError:
            return DiagnosticKind.FILE_NOT_FOUND, "no such file"
        except OSError as exc:
            return DiagnosticKind.UNREADABLE, exc.strerror or str(exc)
        try:
            text = decode(data)
        except UnicodeDecodeError as exc:
            return DiagnosticKind.BINARY_FILE, f"not valid UTF-8 at byte {exc.start}"
        return Document(path, text, scan(text))
