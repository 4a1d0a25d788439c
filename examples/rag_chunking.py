"""
Example demonstrating RAG chunking functionality.

This example shows how to use load_chunks() to generate text chunks
for vector databases or RAG (Retrieval-Augmented Generation) systems.
"""

import shutil
import tempfile
from pathlib import Path

from mdinclude import IncludeLoaderContext

project_dir = Path(tempfile.mkdtemp(prefix="rag_example_"))
(project_dir / "CLAUDE.md").write_text("# Project\n\n@guide.md\n\n@guide.md\n")
(project_dir / "guide.md").write_text("\n".join(f"Guideline number {i}." for i in range(20)))

ctx = IncludeLoaderContext(project_dir)

print("RAG Chunking Example")
print("=" * 50)
print()

print("Example 1: Flat chunks (one series per distinct document)")
print("-" * 50)

for i, (file_path, text, start_line, end_line) in enumerate(
    ctx.load_chunks("CLAUDE.md", chunk_size=200),
):
    preview = text[:50].replace("\n", " ") + "..."
    print(f"Chunk {i + 1}: {file_path} (lines {start_line}-{end_line})")
    print(f"  Length: {len(text)} chars")
    print(f"  Content: {preview}")
    print()

print("Example 2: Overlapping chunks of the hierarchical rendering")
print("-" * 50)

for i, (file_path, text, start_line, end_line) in enumerate(
    ctx.load_chunks("CLAUDE.md", chunk_size=200, chunk_overlap=50, mode="hierarchical"),
):
    if i >= 3:
        print("... (stopping output)")
        break
    print(f"Chunk {i + 1}: {file_path} (lines {start_line}-{end_line})")
    print(f"  Start: {text[:20].replace(chr(10), ' ')}...")
    print(f"  End:   ...{text[-20:].replace(chr(10), ' ')}")
    print()

shutil.rmtree(project_dir)
