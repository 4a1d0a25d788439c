import argparse
import sys
from pathlib import Path

from mdinclude.config import ConfigError, IncludeConfig, load_config
from mdinclude.ctx import IncludeLoaderContext
from mdinclude.diagnostics import RootDocumentError
from mdinclude.render import RenderMode

EXIT_OK = 0
EXIT_DIAGNOSTICS = 1
EXIT_FATAL = 2


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser for the ``mdinclude`` command.

    Returns:
        Parser accepting DOCUMENT plus --root, --mode, --config, --output and --strict.
    """
    parser = argparse.ArgumentParser(
        prog="mdinclude",
        description="Resolve @-includes in a document and print the assembled text.",
    )
    parser.add_argument("document", help="Root document to resolve")
    parser.add_argument("--root", help="Root boundary directory (default: config or cwd)")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in RenderMode],
        help="Rendering mode (default: config or flat)",
    )
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("-o", "--output", help="Write the result here instead of stdout")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any diagnostic is reported",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Run the command line interface.

    The DOCUMENT argument is taken relative to the current directory, like any
    other command-line path, and must lie inside the root boundary.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:]).

    Returns:
        EXIT_OK, EXIT_DIAGNOSTICS when --strict is set and problems were
        reported, or EXIT_FATAL on configuration, root-document or output errors.
    """
    args = build_parser().parse_args(argv)

    try:
        if args.config:
            config = load_config(args.config)
        else:
            config = IncludeConfig(root_boundary=Path.cwd())
        if args.root:
            config = IncludeConfig(Path(args.root).absolute(), config.mode, config.warn)
        if args.mode:
            config = IncludeConfig(config.root_boundary, RenderMode(args.mode), config.warn)

        # Diagnostics are printed below instead of raised as warnings
        ctx = IncludeLoaderContext(config.root_boundary, mode=config.mode, warn=False)
        result = ctx.load(Path(args.document).absolute())
    except (ConfigError, NotADirectoryError, RootDocumentError) as exc:
        print(f"mdinclude: {exc}", file=sys.stderr)
        return EXIT_FATAL

    if args.output:
        try:
            Path(args.output).write_text(result.text, encoding="utf-8")
        except OSError as exc:
            print(f"mdinclude: cannot write {args.output}: {exc}", file=sys.stderr)
            return EXIT_FATAL
    else:
        sys.stdout.write(result.text)
        if not result.text.endswith("\n"):
            sys.stdout.write("\n")

    for diagnostic in result.diagnostics:
        print(f"{diagnostic.kind.value}: {diagnostic.message}", file=sys.stderr)

    if args.strict and result.diagnostics:
        return EXIT_DIAGNOSTICS
    return EXIT_OK
