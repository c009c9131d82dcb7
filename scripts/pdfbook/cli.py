"""
Command-line interface for the PDF book build.

Usage:
    build_pdf.py                          Use README order, or law??.md
    build_pdf.py law31.md law32.md        Build only the given chapters
    build_pdf.py --categories             Insert README category headings
    build_pdf.py --dry-run                Write __book__.md, skip pandoc
    build_pdf.py list                     Show the resolved chapter order
    build_pdf.py build list.md build.md   Explicit "build" when a file name
                                          looks like a command

Requires: pandoc, xelatex, PyYAML
"""

import argparse
import os
import sys
import traceback

from pdfbook.assemble import write_book
from pdfbook.builders import PdfBuilder
from pdfbook.config import BookConfig
from pdfbook.errors import BuildError
from pdfbook.resolve import resolve_inputs


def load_config(args):
    overrides = {
        "output": os.path.abspath(args.output) if getattr(args, "output", None) else None,
        "include_categories": True if args.categories else None,
        "hard_line_breaks": True if getattr(args, "hard_line_breaks", False) else None,
    }
    return BookConfig.load(args.project_dir, overrides=overrides)


# ── Build command ──────────────────────────────────────────────────────


def cmd_build(args):
    """Resolve inputs, assemble the book, render it."""
    config = load_config(args)
    book_md = config.path(config.book_md)
    builder = PdfBuilder(config, book_md, verbose=args.verbose)

    # Tools first: nothing is read or written if they are missing
    if not args.dry_run:
        builder.check_tools()

    items = resolve_inputs(args.files, config)

    config.summary()
    print(f"  Inputs:     {len(items)} items")

    write_book(
        items,
        book_md,
        include_categories=config.include_categories,
        verbose=args.verbose,
    )

    if args.dry_run:
        print(f"OK: wrote {book_md} (dry run, PDF not rendered)")
        return

    builder.build()


# ── List command ───────────────────────────────────────────────────────


def cmd_list(args):
    """Print the resolved input order without building."""
    config = load_config(args)
    for item in resolve_inputs(args.files, config):
        if item.is_category:
            print(f"CAT   {item.value}")
        else:
            print(f"FILE  {os.path.relpath(item.value, config.project_dir)}")


# ── Argument Parser ────────────────────────────────────────────────────


def build_parser():
    parser = argparse.ArgumentParser(
        prog="build_pdf",
        description="Stitch markdown chapters into one PDF with pandoc",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
environment:
  OUT, CJK_MAINFONT, CJK_SANSFONT, CJK_MONOFONT, FONTSIZE, HEADER_TEX,
  MD_HARD_LINE_BREAKS=1, BOOK_INCLUDE_CATEGORIES=1

examples:
  %(prog)s                         Build from README order
  %(prog)s law31.md law32.md       Build two chapters
  %(prog)s --categories -o out.pdf Category headings, custom output
  %(prog)s list                    Show chapter order
        """,
    )

    sub = parser.add_subparsers(dest="command")

    # ── build (default when no subcommand) ─────────────────
    build_p = sub.add_parser("build", help="Assemble and render the PDF (default)")
    _add_common_args(build_p)
    build_p.add_argument("-o", "--output", help="Output PDF path (overrides OUT)")
    build_p.add_argument(
        "--hard-line-breaks",
        action="store_true",
        help="Treat single newlines as hard breaks",
    )
    build_p.add_argument(
        "--dry-run",
        action="store_true",
        help="Write the assembled markdown only, skip pandoc",
    )
    build_p.add_argument("--verbose", "-v", action="store_true")

    # ── list ───────────────────────────────────────────────
    list_p = sub.add_parser("list", help="Show the resolved chapter order")
    _add_common_args(list_p)

    return parser


def _add_common_args(parser):
    parser.add_argument("files", nargs="*", help="Chapter files, in order")
    parser.add_argument(
        "--categories",
        action="store_true",
        help="Insert README category headings (overrides BOOK_INCLUDE_CATEGORIES)",
    )
    parser.add_argument(
        "--project-dir",
        default=".",
        help="Directory holding README.md and the chapters (default: cwd)",
    )


# ── Main ───────────────────────────────────────────────────────────────


def main(argv=None):
    """Run the CLI. Returns the process exit code."""
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()

    # Bare "build_pdf.py law01.md" or "build_pdf.py" means "build ..."
    known_commands = {"build", "list"}
    if not argv or (argv[0] not in known_commands and argv[0] not in ("-h", "--help")):
        argv = ["build"] + list(argv)
    args = parser.parse_args(argv)

    dispatch = {
        "build": cmd_build,
        "list": cmd_list,
    }

    try:
        dispatch[args.command](args)
    except BuildError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def run():
    """Console entry point."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)
    except Exception as e:
        log_path = "build_error.log"
        with open(log_path, "w") as f:
            traceback.print_exc(file=f)
        print(f"\nUnexpected error: {e}", file=sys.stderr)
        print(f"Full traceback written to {log_path}", file=sys.stderr)
        sys.exit(1)
