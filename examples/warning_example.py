"""
Example showing how include problems are reported.
"""

import shutil
import tempfile
import warnings
from pathlib import Path

from mdinclude import IncludeLoaderContext, IncludeWarning


def main() -> None:
    project_dir = Path(tempfile.mkdtemp(prefix="warning_example_"))

    try:
        (project_dir / "CLAUDE.md").write_text("""# Test Project

## Existing Content
@existing.md

## Missing Content (will trigger warning)
@missing1.md

## Outside the project (refused)
@../../etc/passwd

## Remote content (refused)
@https://example.com/rules.md
""")
        (project_dir / "existing.md").write_text("This file exists!\n\n@CLAUDE.md\n")

        print("1. Structured diagnostics (warnings disabled):\n")
        ctx = IncludeLoaderContext(project_dir, mode="hierarchical", warn=False)
        result = ctx.load("CLAUDE.md")
        for diagnostic in result.diagnostics:
            print(f"  - {diagnostic.kind.value}: {diagnostic.message}")

        print("\nResult:")
        print(result.text)

        print("\n" + "=" * 60)
        print("\n2. Capturing warnings programmatically:\n")

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            IncludeLoaderContext(project_dir).load("CLAUDE.md")

        captured = [warning for warning in w if issubclass(warning.category, IncludeWarning)]
        print(f"Captured {len(captured)} warning(s):")
        for warning in captured:
            print(f"  - {warning.category.__name__}: {warning.message}")

        print("\nNote: every problem is reported three ways:")
        print("  1. Diagnostic records on the result")
        print("  2. IncludeWarning warnings (unless warn=False)")
        print("  3. HTML comments in the output (<!-- File not found: ... -->)")

    finally:
        shutil.rmtree(project_dir)


if __name__ == "__main__":
    main()
