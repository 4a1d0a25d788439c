import warnings
from collections.abc import Generator
from dataclasses import dataclass
from pathlib import Path

from mdinclude.config import IncludeConfig
from mdinclude.diagnostics import Diagnostic, IncludeWarning, ResolutionError, RootDocumentError
from mdinclude.graph import GraphBuilder, InclusionGraph
from mdinclude.render import RenderMode, render
from mdinclude.resolver import PathResolver
from mdinclude.source import FileSystemSource, TextSource


@dataclass
class RenderResult:
    """Output of one resolution run."""

    text: str
    diagnostics: list[Diagnostic]
    graph: InclusionGraph


class IncludeLoaderContext:
    """Context class for resolving @-includes below a root boundary directory."""

    def __init__(
        self,
        root_dir: str | Path,
        mode: RenderMode | str = RenderMode.FLAT,
        source: TextSource | None = None,
        warn: bool = True,
    ) -> None:
        """
        Initialize the context with the root boundary directory.

        Args:
            root_dir: Root boundary. Absolute include paths are relative to it and
                no include may resolve outside it.
            mode: Default rendering mode, "flat" or "hierarchical" (default: "flat").
            source: Optional read capability (default: files under root_dir).
            warn: Whether to emit an IncludeWarning per diagnostic (default: True).

        Raises:
            NotADirectoryError: If root_dir is not a directory and no source is given.
            ValueError: If mode is not a known rendering mode.
        """
        self.root_dir = Path(root_dir).absolute()
        if source is None:
            if not self.root_dir.is_dir():
                msg = f"root_dir must be a directory, got: {self.root_dir}"
                raise NotADirectoryError(msg)
            source = FileSystemSource(self.root_dir)
        self.mode = RenderMode(mode)
        self.source = source
        self.warn = warn
        self.resolver = PathResolver(self.root_dir)

    @classmethod
    def from_config(
        cls,
        config: IncludeConfig,
        source: TextSource | None = None,
    ) -> "IncludeLoaderContext":
        """Create a context from a loaded IncludeConfig."""
        return cls(config.root_boundary, mode=config.mode, source=source, warn=config.warn)

    def load(self, document: str | Path, mode: RenderMode | str | None = None) -> RenderResult:
        """
        Resolve a document's includes and render the result.

        Args:
            document: Root document, as an absolute path or relative to root_dir.
            mode: Optional override of the context's rendering mode.

        Returns:
            The rendered text together with every diagnostic from the run.

        Raises:
            RootDocumentError: If the root document itself cannot be resolved or read.
        """
        graph = self._build(document)
        context = render(graph, self.mode if mode is None else mode)

        if self.warn:
            for diagnostic in context.diagnostics:
                warnings.warn(diagnostic.message, IncludeWarning, stacklevel=2)

        return RenderResult(context.text, context.diagnostics, graph)

    def load_chunks(
        self,
        document: str | Path,
        chunk_size: int = 200,
        chunk_overlap: int = 0,
        mode: RenderMode | str | None = None,
    ) -> Generator[tuple[str, str, int, int], None, None]:
        """
        Resolve a document and yield chunks suitable for vector databases (RAG).

        In flat mode every distinct document is chunked separately, in
        first-encounter order. In hierarchical mode the rendered root text is
        chunked under the root's canonical path.

        Args:
            document: Root document, as an absolute path or relative to root_dir.
            chunk_size: Maximum size of each text chunk in characters (default: 200).
            chunk_overlap: Number of characters to overlap between chunks (default: 0).
            mode: Optional override of the context's rendering mode.

        Yields:
            Tuples of (canonical_path, chunk_text, start_line, end_line) where
            line numbers are 1-based.

        Example:
            >>> ctx = IncludeLoaderContext("/path/to/project")
            >>> for path, chunk, start, end in ctx.load_chunks("CLAUDE.md", chunk_size=500):
            ...     print(f"{path}:{start}-{end} = {len(chunk)} chars")
        """
        selected = RenderMode(self.mode if mode is None else mode)
        if selected is RenderMode.HIERARCHICAL:
            result = self.load(document, mode=selected)
            yield from _chunk_content(result.graph.root, result.text, chunk_size, chunk_overlap)
            return

        graph = self._build(document)
        if self.warn:
            for diagnostic in graph.diagnostics:
                warnings.warn(diagnostic.message, IncludeWarning, stacklevel=2)
        for path in graph.order:
            yield from _chunk_content(
                path,
                graph.documents[path].text,
                chunk_size,
                chunk_overlap,
            )

    def _build(self, document: str | Path) -> InclusionGraph:
        try:
            root = self.resolver.canonicalize(document)
        except ResolutionError as exc:
            msg = f"Cannot resolve root document: {exc}"
            raise RootDocumentError(msg) from exc
        # A fresh builder per run: documents are never cached across runs
        return GraphBuilder(self.resolver, self.source).build(root)


def resolve_includes(
    document: str | Path,
    root_boundary: str | Path,
    mode: RenderMode | str = RenderMode.FLAT,
    source: TextSource | None = None,
    warn: bool = True,
) -> RenderResult:
    """One-shot helper: build a context for root_boundary and load document."""
    return IncludeLoaderContext(root_boundary, mode=mode, source=source, warn=warn).load(document)


def _chunk_content(
    file_path: str,
    content: str,
    chunk_size: int,
    chunk_overlap: int,
) -> Generator[tuple[str, str, int, int], None, None]:
    """
    Split content into overlapping chunks and yield with source information.

    Args:
        file_path: Canonical path of the source document
        content: The text content to chunk
        chunk_size: Maximum size of each chunk in characters
        chunk_overlap: Number of characters to overlap between chunks

    Yields:
        Tuples of (file_path, chunk_text, start_line, end_line)
    """
    if not content:
        return

    # Prevent infinite loop if overlap >= chunk_size
    step = max(chunk_size - chunk_overlap, 1)
    current_pos = 0

    while current_pos < len(content):
        chunk_end = min(current_pos + chunk_size, len(content))
        chunk_text = content[current_pos:chunk_end]

        # Count newlines before current position to get start line
        start_line = content.count("\n", 0, current_pos) + 1
        end_line = start_line + chunk_text.count("\n")

        yield (file_path, chunk_text, start_line, end_line)

        current_pos += step
