"""
pdfbook — stitch markdown chapters into a single PDF via pandoc.

Public API:
    from pdfbook.config import BookConfig
    from pdfbook.resolve import InputItem, resolve_inputs, parse_index
    from pdfbook.assemble import demote_headings, assemble_book, write_book
    from pdfbook.builders import PdfBuilder
    from pdfbook.errors import BuildError
"""

__version__ = "0.1.0"
