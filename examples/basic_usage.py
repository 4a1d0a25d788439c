"""
Example demonstrating the mdinclude library.

This script creates a sample project structure and renders the same root
document in flat and in hierarchical mode.
"""

import shutil
import tempfile
from pathlib import Path

from mdinclude import IncludeLoaderContext


def create_example_project() -> Path:
    """Create a temporary example project."""
    project_dir = Path(tempfile.mkdtemp(prefix="mdinclude_example_"))

    (project_dir / "CLAUDE.md").write_text("""# My Project

## Project Overview
@README.md

## API Documentation
@docs/api.md

Commands such as `@docs/api.md` inside code are left alone.
""")

    (project_dir / "README.md").write_text("""# Example Project

This is an example project demonstrating the mdinclude library.
""")

    docs_dir = project_dir / "docs"
    docs_dir.mkdir()

    (docs_dir / "api.md").write_text("""# API Reference

### GET /api/users
Returns a list of users.

For setup instructions, see @setup.md
""")

    (docs_dir / "setup.md").write_text("""# Setup Instructions

1. Install dependencies
2. Start the server

The overview is in @/README.md
""")

    return project_dir


def main() -> None:
    """Run the example."""
    print("Creating example project...")
    project_dir = create_example_project()

    try:
        print(f"\nProject created at: {project_dir}")
        print("\nProject structure:")
        for path in sorted(project_dir.rglob("*.md")):
            print(f"  {path.relative_to(project_dir)}")

        ctx = IncludeLoaderContext(project_dir)

        for mode in ("flat", "hierarchical"):
            print("\n" + "=" * 60)
            print(f"CLAUDE.md rendered in {mode} mode:")
            print("=" * 60 + "\n")
            result = ctx.load("CLAUDE.md", mode=mode)
            print(result.text)
            print(f"\n({len(result.text)} chars, {len(result.diagnostics)} diagnostics)")

    finally:
        print(f"\nCleaning up temporary directory: {project_dir}")
        shutil.rmtree(project_dir)


if __name__ == "__main__":
    main()
