import posixpath
import re
from pathlib import Path

from mdinclude.diagnostics import DiagnosticKind, ResolutionError

_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")


class PathResolver:
    """Turns directive paths into canonical, root-relative paths."""

    def __init__(self, root: str | Path) -> None:
        """
        Initialize the resolver with its root boundary.

        Args:
            root: Directory that absolute paths are relative to and that
                ``..`` segments may not climb out of.
        """
        self.root = Path(root).absolute()

    def resolve(self, raw_path: str, base_dir: str = "") -> str:
        """
        Resolve a directive path against the referencing document's directory.

        Normalization is purely lexical; nothing is read from disk.

        Args:
            raw_path: Path argument of the directive, already unescaped.
            base_dir: Canonical directory of the referencing document
                ("" for the root boundary itself).

        Returns:
            Canonical POSIX path relative to the root boundary.

        Raises:
            ResolutionError: UNSUPPORTED_SCHEME for URLs, PATH_TRAVERSAL when
                the path normalizes outside the root boundary.
        """
        if _SCHEME_PATTERN.match(raw_path):
            scheme = raw_path.split(":", 1)[0]
            raise ResolutionError(
                DiagnosticKind.UNSUPPORTED_SCHEME,
                raw_path,
                f"{scheme}:// paths are not resolved",
            )

        if raw_path.startswith("/"):
            start: list[str] = []
        else:
            start = [part for part in base_dir.split("/") if part and part != "."]

        segments = _normalize(start, raw_path.split("/"))
        if segments is None:
            raise ResolutionError(
                DiagnosticKind.PATH_TRAVERSAL,
                raw_path,
                f"resolves outside {self.root}",
            )
        return "/".join(segments) or "."

    def canonicalize(self, path: str | Path) -> str:
        """
        Map a root document path to its canonical form.

        Args:
            path: Absolute filesystem path, or a path relative to the root boundary.

        Returns:
            Canonical path of the document.

        Raises:
            ResolutionError: PATH_TRAVERSAL if the document lies outside the boundary.
        """
        candidate = Path(path)
        if candidate.is_absolute():
            normalized = Path(posixpath.normpath(candidate.as_posix()))
            try:
                relative = normalized.relative_to(self.root)
            except ValueError:
                raise ResolutionError(
                    DiagnosticKind.PATH_TRAVERSAL,
                    str(path),
                    f"outside {self.root}",
                ) from None
            return self.resolve(relative.as_posix())
        return self.resolve(candidate.as_posix())

    @staticmethod
    def dirname(canonical: str) -> str:
        """Canonical directory containing ``canonical`` ("" at the boundary root)."""
        return posixpath.dirname(canonical)


def _normalize(start: list[str], parts: list[str]) -> list[str] | None:
    """Apply path segments to ``start``; None if ``..`` climbs past the root."""
    segments = list(start)
    for part in parts:
        if part in ("", "."):
            continue
        if part == "..":
            if not segments:
                return None
            segments.pop()
        else:
            segments.append(part)
    return segments
