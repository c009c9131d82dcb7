#!/usr/bin/env python3
"""
Build a single book-like PDF from lawNN.md chapter files using pandoc.

Writes __book__.md (one chapter per input file, each followed by
\\newpage) and renders it with pandoc + XeLaTeX.

Usage:
    python build_pdf.py                      Chapters in README order
    python build_pdf.py law31.md law32.md    Only these chapters
    python build_pdf.py list                 Show the resolved order
    python build_pdf.py build <files>        Same as bare files; use it when a
                                             file is named "list" or "build"

Requires: pandoc, xelatex, PyYAML
"""

import os
import sys

# Ensure pdfbook is importable from the scripts/ directory
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from pdfbook.cli import run


if __name__ == "__main__":
    run()
