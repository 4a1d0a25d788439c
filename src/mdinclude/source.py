from collections.abc import Mapping
from pathlib import Path
from typing import Protocol


class TextSource(Protocol):
    """Read capability the graph builder loads documents through."""

    def read(self, canonical: str) -> bytes:
        """
        Return the raw bytes of a document.

        Raises:
            FileNotFoundError: If the document does not exist.
            OSError: If it exists but cannot be read.
        """
        ...


class FileSystemSource:
    """Reads documents from a directory on disk."""

    def __init__(self, root: str | Path) -> None:
        """
        Initialize the source.

        Args:
            root: Directory canonical paths are relative to.
        """
        self.root = Path(root)

    def read(self, canonical: str) -> bytes:
        """Read ``root / canonical`` from disk."""
        return (self.root / canonical).read_bytes()


class MappingSource:
    """Reads documents from an in-memory ``{canonical path: content}`` table."""

    def __init__(self, files: Mapping[str, str | bytes]) -> None:
        """
        Initialize the source.

        Args:
            files: Content keyed by canonical path, as text or raw bytes.
        """
        self.files = dict(files)

    def read(self, canonical: str) -> bytes:
        """Return the stored content, UTF-8 encoded when it is text."""
        try:
            content = self.files[canonical]
        except KeyError:
            msg = f"No such document: {canonical}"
            raise FileNotFoundError(msg) from None
        if isinstance(content, str):
            return content.encode("utf-8")
        return content


def decode(data: bytes) -> str:
    """
    Decode document bytes as text.

    Raises:
        UnicodeDecodeError: If the bytes are not valid UTF-8.
    """
    return data.decode("utf-8")
