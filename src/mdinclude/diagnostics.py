from dataclasses import dataclass
from enum import Enum


class DiagnosticKind(str, Enum):
    """Kinds of recoverable problems found while resolving includes."""

    FILE_NOT_FOUND = "FileNotFound"
    PATH_TRAVERSAL = "PathTraversal"
    UNSUPPORTED_SCHEME = "UnsupportedScheme"
    BINARY_FILE = "BinaryFile"
    UNREADABLE = "Unreadable"
    CYCLE_DETECTED = "CycleDetected"


_MESSAGES = {
    DiagnosticKind.FILE_NOT_FOUND: "File not found",
    DiagnosticKind.PATH_TRAVERSAL: "Path escapes root boundary",
    DiagnosticKind.UNSUPPORTED_SCHEME: "Unsupported scheme",
    DiagnosticKind.BINARY_FILE: "Binary file",
    DiagnosticKind.UNREADABLE: "Unreadable file",
    DiagnosticKind.CYCLE_DETECTED: "Circular import detected",
}


class IncludeWarning(UserWarning):
    """Warning category emitted once per diagnostic."""


@dataclass(frozen=True)
class Diagnostic:
    """
    A recoverable problem attached to one directive.

    Attributes:
        kind: What went wrong.
        path: Canonical path of the target when resolution succeeded,
            otherwise the path as written in the directive.
        detail: Free-form explanation.
        source: Canonical path of the document holding the directive.
        line: 1-based line of the directive in ``source``.
    """

    kind: DiagnosticKind
    path: str
    detail: str
    source: str | None = None
    line: int | None = None

    @property
    def message(self) -> str:
        """One-line human-readable description."""
        text = f"{_MESSAGES[self.kind]}: {self.path}"
        if self.source is not None:
            text += f" (from {self.source}"
            text += f":{self.line})" if self.line is not None else ")"
        if self.detail:
            text += f" - {self.detail}"
        return text

    @property
    def marker(self) -> str:
        """Inline marker that stands in for the failed directive."""
        return f"<!-- {_MESSAGES[self.kind]}: {self.path} -->"


class ResolutionError(Exception):
    """Raised by the resolver when a raw path cannot become a canonical path."""

    def __init__(self, kind: DiagnosticKind, path: str, detail: str = "") -> None:
        self.kind = kind
        self.path = path
        self.detail = detail
        super().__init__(f"{_MESSAGES[kind]}: {path}" + (f" - {detail}" if detail else ""))

    def to_diagnostic(self, source: str | None = None, line: int | None = None) -> Diagnostic:
        """Attach the failing directive's location and return it as a Diagnostic."""
        return Diagnostic(self.kind, self.path, self.detail, source=source, line=line)


class RootDocumentError(Exception):
    """The root document could not be resolved, read or decoded; nothing is rendered."""
